"""
Response Parser — coerce free-form model text into the output contracts.

Steps for every response:
  1. Remove ``` fences and ```json tags wherever they appear
  2. Trim and parse as strict JSON (top level must be an object)
  3. Validate against the pydantic contract

Any failure is MalformedModelOutput. The raw text goes to the server log for
debugging prompt drift and is never attached to the error itself.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from resume_tailor.models.cover_letter_models import CoverLetterBundle
from resume_tailor.models.tailor_models import TailoredResume
from resume_tailor.utils.errors import MalformedModelOutput

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)

_RAW_LOG_CHARS = 2000
_EXPECTED_BULLETS = range(3, 6)


# ── Public API ───────────────────────────────────────────────────────────────


def parse_tailored_resume(raw_text: str) -> TailoredResume:
    """Parse and validate a tailor-prompt response."""
    resume = _parse_model(raw_text, TailoredResume, label="tailored resume")

    analysis = resume.analysis
    analysis.added_skills = filter_added_skills(analysis.added_skills, resume.skills)

    for name, items in (("critique", analysis.critique), ("improvements", analysis.improvements)):
        if len(items) not in _EXPECTED_BULLETS:
            logger.warning(f"Model returned {len(items)} {name} items (expected 3-5)")

    return resume


def parse_cover_letter_bundle(raw_text: str) -> CoverLetterBundle:
    """Parse and validate a cover-letter-prompt response."""
    return _parse_model(raw_text, CoverLetterBundle, label="cover letter")


def strip_code_fences(raw_text: str) -> str:
    """Remove every ``` / ```json marker and surrounding whitespace."""
    return _FENCE.sub("", raw_text).strip()


def parse_json_object(raw_text: str) -> dict[str, Any]:
    """Strip fences and strictly parse a JSON object."""
    cleaned = strip_code_fences(raw_text)
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise MalformedModelOutput() from e
    if not isinstance(payload, dict):
        raise MalformedModelOutput()
    return payload


def filter_added_skills(added_skills: list[str], skills: list[str]) -> list[str]:
    """
    Keep only added skills that are present in the skills list.

    Matching ignores case and surrounding whitespace; the spelling from
    ``skills`` is returned so both lists render identically. Order and
    de-duplication follow ``added_skills``.
    """
    canonical = {s.strip().casefold(): s for s in skills}
    kept: list[str] = []
    seen: set[str] = set()
    dropped: list[str] = []

    for skill in added_skills:
        key = skill.strip().casefold()
        if key in canonical:
            if key not in seen:
                kept.append(canonical[key])
                seen.add(key)
        else:
            dropped.append(skill)

    if dropped:
        logger.warning(f"Dropped addedSkills not present in skills: {dropped}")
    return kept


# ── Helpers ──────────────────────────────────────────────────────────────────


def _parse_model(raw_text: str, model: type[M], *, label: str) -> M:
    try:
        payload = parse_json_object(raw_text)
        return model.model_validate(payload)
    except MalformedModelOutput:
        logger.error(f"Failed to parse AI JSON for {label}: {raw_text[:_RAW_LOG_CHARS]!r}")
        raise
    except ValidationError as e:
        logger.error(
            f"AI JSON for {label} failed schema validation "
            f"({e.error_count()} errors: {_summarize_errors(e)}): {raw_text[:_RAW_LOG_CHARS]!r}"
        )
        raise MalformedModelOutput() from e


def _summarize_errors(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in error.errors()[:5]
    )
