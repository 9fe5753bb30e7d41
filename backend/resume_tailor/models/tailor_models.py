from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from typing import Any, Optional


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _scalar_to_str(value: Any) -> Any:
    """Models often emit years and durations as numbers; accept them as text."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


# ── Section Models ──────────────────────────────────────────────────────────


class PersonalInfo(CamelModel):
    """Candidate name and a free-form contact line."""

    name: str
    contact: str = ""

    @field_validator("contact", mode="before")
    @classmethod
    def _flatten_contact(cls, value: Any) -> Any:
        # Some generations split contact details into an object; join the parts.
        if isinstance(value, dict):
            return " | ".join(str(v) for v in value.values() if v)
        if isinstance(value, list):
            return " | ".join(str(v) for v in value if v)
        return value


class ExperienceEntry(CamelModel):
    """A single tailored work experience entry."""

    role: str
    company: str
    duration: str = ""
    points: list[str] = []

    @field_validator("duration", mode="before")
    @classmethod
    def _duration_to_str(cls, value: Any) -> Any:
        return _scalar_to_str(value)


class EducationEntry(CamelModel):
    """A single education entry."""

    institution: str = ""
    degree: str = ""
    year: Optional[str] = None

    @field_validator("year", mode="before")
    @classmethod
    def _year_to_str(cls, value: Any) -> Any:
        return _scalar_to_str(value)


class Analysis(CamelModel):
    """Critique of the original resume against the target job."""

    added_skills: list[str] = []
    summary_keywords: list[str] = []
    critique: list[str]
    improvements: list[str]


# ── Combined Tailored Resume ───────────────────────────────────────────────


class TailoredResume(CamelModel):
    """Complete tailored resume as produced by the model and validated by the parser."""

    personal_info: PersonalInfo
    summary: str
    skills: list[str]
    experience: list[ExperienceEntry]
    education: list[EducationEntry] = []
    projects: list[dict[str, Any]] = []
    analysis: Analysis


class TailorResponse(CamelModel):
    """Response body of POST /api/tailor."""

    tailored_resume: TailoredResume
