"""
Tailor Service — orchestrate the two request flows.

Tailor flow:
  Received → TextExtracted → JobResolved → Prompted → Generated → Parsed → Done

Cover-letter flow has the same stages with its own prompt and parser. The
only difference in failure handling: when the job source is a URL that
cannot be resolved, the cover-letter flow follows
``settings.cover_letter_scrape_failure`` ("degrade" continues without job
context, "abort" fails like the tailor flow).

Every other failure is terminal and propagates as a typed TailorError.
Steps run sequentially; nothing is retried here.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import httpx

from resume_tailor.config import Settings
from resume_tailor.models.cover_letter_models import CoverLetterBundle
from resume_tailor.models.jd_models import (
    JDTextInput,
    JDUrlInput,
    JobDescriptionInput,
    ResolvedJobDescription,
)
from resume_tailor.models.tailor_models import TailoredResume
from resume_tailor.services import llm_service
from resume_tailor.services.jd_service import resolve_job_description
from resume_tailor.services.pdf_service import extract_pdf_text
from resume_tailor.services.prompt_builder import build_cover_letter_prompt, build_tailor_prompt
from resume_tailor.services.response_parser import parse_cover_letter_bundle, parse_tailored_resume
from resume_tailor.utils.errors import InsufficientContent, InvalidJobUrl, MissingInput, ScrapingBlocked

logger = logging.getLogger(__name__)


class Stage(str, Enum):
    RECEIVED = "Received"
    TEXT_EXTRACTED = "TextExtracted"
    JOB_RESOLVED = "JobResolved"
    PROMPTED = "Prompted"
    GENERATED = "Generated"
    PARSED = "Parsed"
    DONE = "Done"


@dataclass
class CoverLetterResult:
    """Cover letter output plus whether it was written without job context."""

    bundle: CoverLetterBundle
    job_context_available: bool


# ── Input Helpers ────────────────────────────────────────────────────────────


def build_job_input(job_url: Optional[str], job_text: Optional[str]) -> Optional[JobDescriptionInput]:
    """
    Build the tagged job input from the two optional form fields.

    Pasted text wins when both are supplied. Returns None when neither has
    content.
    """
    if job_text and job_text.strip():
        if job_url and job_url.strip():
            logger.info("Both jobText and jobUrl supplied; using jobText")
        return JDTextInput(body=job_text)
    if job_url and job_url.strip():
        return JDUrlInput(address=job_url.strip())
    return None


def require_inputs(
    resume_bytes: Optional[bytes],
    job_input: Optional[JobDescriptionInput],
) -> tuple[bytes, JobDescriptionInput]:
    """Fail fast, before any I/O, when the upload or the job input is missing."""
    if not resume_bytes or job_input is None:
        raise MissingInput()
    return resume_bytes, job_input


# ── Public API ───────────────────────────────────────────────────────────────


async def tailor_resume(
    *,
    resume_bytes: Optional[bytes],
    job_input: Optional[JobDescriptionInput],
    http_client: httpx.AsyncClient,
    settings: Settings,
) -> TailoredResume:
    """Run the tailor flow and return the validated TailoredResume."""
    resume_bytes, job_input = require_inputs(resume_bytes, job_input)
    _log_stage("tailor", Stage.RECEIVED, f"job source={job_input.kind}")

    resume_text = await asyncio.to_thread(extract_pdf_text, resume_bytes)
    _log_stage("tailor", Stage.TEXT_EXTRACTED, f"{len(resume_text)} chars")

    jd = await resolve_job_description(job_input, http_client=http_client, settings=settings)
    _log_stage("tailor", Stage.JOB_RESOLVED, f"{len(jd.text)} chars from {jd.source}")

    prompt = build_tailor_prompt(resume_text, jd.text, max_chars=settings.max_prompt_input_chars)
    _log_stage("tailor", Stage.PROMPTED, f"{len(prompt)} chars")

    raw = await llm_service.generate(
        prompt=prompt,
        http_client=http_client,
        settings=settings,
        prompt_name="tailor_resume",
    )
    _log_stage("tailor", Stage.GENERATED)

    tailored = parse_tailored_resume(raw)
    _log_stage(
        "tailor",
        Stage.PARSED,
        f"skills={len(tailored.skills)} added={len(tailored.analysis.added_skills)}",
    )

    _log_stage("tailor", Stage.DONE)
    return tailored


async def generate_cover_letter(
    *,
    resume_bytes: Optional[bytes],
    job_input: Optional[JobDescriptionInput],
    http_client: httpx.AsyncClient,
    settings: Settings,
) -> CoverLetterResult:
    """Run the cover-letter flow."""
    resume_bytes, job_input = require_inputs(resume_bytes, job_input)
    _log_stage("cover-letter", Stage.RECEIVED, f"job source={job_input.kind}")

    resume_text = await asyncio.to_thread(extract_pdf_text, resume_bytes)
    _log_stage("cover-letter", Stage.TEXT_EXTRACTED, f"{len(resume_text)} chars")

    jd = await _resolve_for_cover_letter(job_input, http_client=http_client, settings=settings)
    _log_stage("cover-letter", Stage.JOB_RESOLVED, f"{len(jd.text)} chars from {jd.source}")

    prompt = build_cover_letter_prompt(resume_text, jd.text, max_chars=settings.max_prompt_input_chars)
    _log_stage("cover-letter", Stage.PROMPTED, f"{len(prompt)} chars")

    raw = await llm_service.generate(
        prompt=prompt,
        http_client=http_client,
        settings=settings,
        prompt_name="cover_letter",
    )
    _log_stage("cover-letter", Stage.GENERATED)

    bundle = parse_cover_letter_bundle(raw)
    _log_stage("cover-letter", Stage.PARSED)

    _log_stage("cover-letter", Stage.DONE)
    return CoverLetterResult(bundle=bundle, job_context_available=jd.source != "none")


# ── Helpers ──────────────────────────────────────────────────────────────────


async def _resolve_for_cover_letter(
    job_input: JobDescriptionInput,
    *,
    http_client: httpx.AsyncClient,
    settings: Settings,
) -> ResolvedJobDescription:
    try:
        return await resolve_job_description(job_input, http_client=http_client, settings=settings)
    except (ScrapingBlocked, InsufficientContent, InvalidJobUrl) as e:
        # Pasted text that is too short is the user's to fix in either mode.
        if not isinstance(job_input, JDUrlInput) or settings.cover_letter_scrape_failure == "abort":
            raise
        logger.warning(
            f"Cover letter proceeding without job description: {e.code} for {job_input.address}"
        )
        return ResolvedJobDescription.empty(url=job_input.address)


def _log_stage(flow: str, stage: Stage, detail: str = "") -> None:
    suffix = f" ({detail})" if detail else ""
    logger.info(f"[{flow}] {stage.value}{suffix}")
