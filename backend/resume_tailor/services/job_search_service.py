"""
Job Search Service — thin proxy to the third-party job aggregator.

Only normalizes results to the JobListing boundary shape and applies the
job-type filter the job board page offers. Vendor quirks beyond that are
not handled here.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from resume_tailor.config import Settings
from resume_tailor.models.job_models import JobListing, JobSearchRequest
from resume_tailor.utils.errors import JobSearchUnavailable

logger = logging.getLogger(__name__)

AGGREGATOR_BASE_URL = "https://unstop.com"

AGGREGATOR_HEADERS = {
    "Accept": "application/json, text/plain, */*",
    "Accept-Language": "en-US,en;q=0.9",
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
}


# ── Public API ───────────────────────────────────────────────────────────────


async def search_jobs(
    req: JobSearchRequest,
    *,
    http_client: httpx.AsyncClient,
    settings: Settings,
) -> list[JobListing]:
    """Query the aggregator and return normalized, type-filtered listings."""
    params = {
        "opportunity": "jobs",
        "page": "1",
        "per_page": "50",
        "oppstatus": "open",
    }
    if req.query.strip():
        params["searchTerm"] = req.query.strip()
    if req.location.strip():
        params["location"] = req.location.strip()

    logger.info(f"Job search: query={req.query!r} location={req.location!r} type={req.type!r}")

    try:
        resp = await http_client.get(
            settings.job_search_url,
            params=params,
            headers=AGGREGATOR_HEADERS,
            timeout=settings.job_search_timeout_seconds,
        )
        resp.raise_for_status()
        payload = resp.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Job aggregator error: {type(e).__name__}: {e}")
        raise JobSearchUnavailable() from e

    raw_jobs = _extract_raw_jobs(payload)
    jobs = [normalize_listing(job) for job in raw_jobs]
    filtered = [job for job in jobs if matches_type(job, req.type)]
    logger.info(f"Job search returned {len(jobs)} listings, {len(filtered)} after type filter")
    return filtered


def normalize_listing(job: dict[str, Any]) -> JobListing:
    """Map one aggregator record onto the JobListing shape with best-effort defaults."""
    detail = job.get("jobDetail") or {}
    organisation = job.get("organisation") or {}

    locations = detail.get("locations") or []
    location = (locations[0] if locations else None) or job.get("job_location") or "Remote"

    type_raw = str(detail.get("timing") or job.get("type") or "Full-time")
    job_type = type_raw.replace("_", " ").title()

    relative_url = job.get("seo_url") or "#"
    apply_link = relative_url if relative_url.startswith("http") else f"{AGGREGATOR_BASE_URL}/{relative_url.lstrip('/')}"

    return JobListing(
        id=str(job["id"]) if job.get("id") is not None else None,
        title=str(job.get("title") or "Untitled role"),
        company=str(organisation.get("name") or "Unknown company"),
        location=str(location),
        type=job_type,
        apply_link=apply_link,
        salary=None,
        posted=None,
        logo=organisation.get("logoUrl") or job.get("logoUrl"),
    )


def matches_type(job: JobListing, job_type: str) -> bool:
    """Apply the job board's coarse type filter."""
    if not job_type or job_type == "All":
        return True

    type_lower = job.type.lower()
    location_lower = job.location.lower()

    if job_type == "Remote":
        return "remote" in location_lower or "remote" in type_lower or "work from home" in location_lower
    if job_type == "Full-time":
        return "full" in type_lower or "permanent" in type_lower
    if job_type == "Contract":
        return any(word in type_lower for word in ("contract", "temp", "intern"))
    return True


# ── Helpers ──────────────────────────────────────────────────────────────────


def _extract_raw_jobs(payload: Any) -> list[dict[str, Any]]:
    """The aggregator nests results as {"data": {"data": [...]}}."""
    if not isinstance(payload, dict):
        return []
    outer = payload.get("data")
    inner = outer.get("data") if isinstance(outer, dict) else None
    if not isinstance(inner, list):
        return []
    return [job for job in inner if isinstance(job, dict)]
