from resume_tailor.models.tailor_models import CamelModel


class CoverLetterBundle(CamelModel):
    """Cover letter plus a short LinkedIn connection message."""

    cover_letter: str  # ~350 words intended, not enforced
    linkedin_message: str  # ~300 chars intended, not enforced
