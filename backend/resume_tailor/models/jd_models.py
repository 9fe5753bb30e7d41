from pydantic import BaseModel, Field
from typing import Annotated, Literal, Optional, Union


# ── Input Models ────────────────────────────────────────────────────────────


class JDTextInput(BaseModel):
    """Job description pasted directly by the user."""

    kind: Literal["text"] = "text"
    body: str


class JDUrlInput(BaseModel):
    """Job description to be scraped from a job-posting URL."""

    kind: Literal["url"] = "url"
    address: str


JobDescriptionInput = Annotated[Union[JDTextInput, JDUrlInput], Field(discriminator="kind")]


# ── Resolved Output ─────────────────────────────────────────────────────────


class ResolvedJobDescription(BaseModel):
    """Plain-text job description ready for prompt interpolation."""

    text: str
    source: Literal["text", "url", "none"]
    url: Optional[str] = None

    @classmethod
    def empty(cls, url: Optional[str] = None) -> "ResolvedJobDescription":
        """Placeholder used when a flow proceeds without job context."""
        return cls(text="", source="none", url=url)
