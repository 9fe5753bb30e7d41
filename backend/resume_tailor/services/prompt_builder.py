"""
Prompt Builder — assemble the single-part prompts sent to the generative model.

Pure functions: no I/O, same input gives the same prompt. Each input is capped
at MAX_PROMPT_INPUT_CHARS regardless of what upstream already truncated.
"""

from __future__ import annotations

from resume_tailor.prompts import cover_letter, tailor_resume
from resume_tailor.utils.text_cleanup import truncate

MAX_PROMPT_INPUT_CHARS = 15000


def build_tailor_prompt(
    resume_text: str,
    job_text: str,
    *,
    max_chars: int = MAX_PROMPT_INPUT_CHARS,
) -> str:
    """Prompt for the tailored resume + critique JSON."""
    return tailor_resume.PROMPT_TEMPLATE.format(
        resume_text=truncate(resume_text, max_chars),
        job_text=truncate(job_text, max_chars),
    )


def build_cover_letter_prompt(
    resume_text: str,
    job_text: str,
    *,
    max_chars: int = MAX_PROMPT_INPUT_CHARS,
) -> str:
    """Prompt for the cover letter + LinkedIn message JSON."""
    return cover_letter.PROMPT_TEMPLATE.format(
        resume_text=truncate(resume_text, max_chars),
        job_text=truncate(job_text, max_chars),
    )
