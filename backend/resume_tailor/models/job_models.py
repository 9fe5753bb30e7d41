from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional


class JobSearchRequest(BaseModel):
    """Search filters sent by the job board page."""

    query: str = ""
    location: str = ""
    type: str = "All"  # "All" | "Remote" | "Full-time" | "Contract"


class JobListing(BaseModel):
    """A normalized job listing from the aggregator."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: Optional[str] = None
    title: str
    company: str
    location: str
    type: str
    apply_link: str
    salary: Optional[str] = None
    posted: Optional[str] = None
    logo: Optional[str] = None


class JobSearchResponse(BaseModel):
    jobs: list[JobListing]
