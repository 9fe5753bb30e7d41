"""
Error taxonomy for the tailoring pipeline.

Services raise these; ``api.errors`` renders them into JSON responses.
Messages are user-facing: client errors say what to fix, upstream errors
stay generic. Diagnostics belong in the server log, never in ``message``.
"""

from __future__ import annotations

from typing import Any


class ConfigurationError(RuntimeError):
    """Raised at startup when required configuration is missing."""


class TailorError(Exception):
    """Base class for every typed failure the API can report."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    default_message: str = "Something went wrong. Please try again."

    def __init__(self, message: str | None = None, *, details: Any = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message, "code": self.code}
        if self.details is not None:
            body["details"] = self.details
        return body


# ── Client errors ───────────────────────────────────────────────────────────


class MissingInput(TailorError):
    status_code = 400
    code = "MISSING_INPUT"
    default_message = "Resume file and either Job URL or Job Description text are required."


class InvalidJobUrl(TailorError):
    status_code = 400
    code = "INVALID_JOB_URL"
    default_message = "The job URL must be an http(s) address."


class UnreadablePdf(TailorError):
    status_code = 400
    code = "UNREADABLE_PDF"
    default_message = (
        "Could not read text from the uploaded resume. "
        "Please upload a text-based, unencrypted PDF."
    )


class InsufficientContent(TailorError):
    status_code = 400
    code = "INSUFFICIENT_CONTENT"
    default_message = (
        "Could not retrieve enough text from the job description. "
        "Please paste the text manually."
    )


class UploadTooLarge(TailorError):
    status_code = 413
    code = "UPLOAD_TOO_LARGE"
    default_message = "The uploaded file is too large."


class ScrapingBlocked(TailorError):
    status_code = 403
    code = "SCRAPING_FAILED"
    default_message = (
        "Access to this job site is restricted by security bots. "
        "Please paste the job description text instead."
    )


# ── Upstream errors ─────────────────────────────────────────────────────────


class UpstreamUnavailable(TailorError):
    status_code = 500
    code = "UPSTREAM_UNAVAILABLE"
    default_message = "The AI service is currently unavailable. Please try again later."


class MalformedModelOutput(TailorError):
    status_code = 500
    code = "MALFORMED_MODEL_OUTPUT"
    default_message = "AI failed to generate valid structured data. Please try again."


class JobSearchUnavailable(TailorError):
    status_code = 502
    code = "JOB_SEARCH_FAILED"
    default_message = "Failed to fetch jobs. Please try again later."


class ClientDisconnected(TailorError):
    status_code = 499
    code = "CLIENT_CLOSED_REQUEST"
    default_message = "The client closed the connection before the response was ready."
