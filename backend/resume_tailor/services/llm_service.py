"""
LLM Service — single-call client for the generative text endpoint.

Responsibilities:
  • Send one prompt as the sole content part of a generateContent request
  • Pull the text out of candidates[0].content.parts[0].text
  • Classify every provider failure as UpstreamUnavailable
  • Apply a per-call timeout and at most one bounded retry on transport errors
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from resume_tailor.config import PROMPT_CONFIG, Settings
from resume_tailor.utils.errors import UpstreamUnavailable
from resume_tailor.utils.retry import RetryConfig, retry_transport

logger = logging.getLogger(__name__)

# Provider error bodies can be long; keep log lines readable
_ERROR_BODY_LOG_CHARS = 500


# ── Core Completion ──────────────────────────────────────────────────────────


async def generate(
    *,
    prompt: str,
    http_client: httpx.AsyncClient,
    settings: Settings,
    prompt_name: str | None = None,
) -> str:
    """
    Send a prompt to the generative endpoint and return the raw response text.

    Args:
        prompt:      Fully assembled prompt text
        http_client: Shared async HTTP client
        settings:    Application settings (endpoint, key, timeout, retries)
        prompt_name: Optional key into PROMPT_CONFIG for temperature/max tokens

    Raises:
        UpstreamUnavailable: transport failure, non-2xx status or a response
            envelope without the expected text part.
    """
    payload = build_request_body(prompt, prompt_name=prompt_name)
    url = settings.generation_url
    retry = RetryConfig(
        max_retries=settings.generation_max_retries,
        base_delay=settings.retry_base_delay_seconds,
        jitter_factor=settings.retry_jitter_factor,
    )

    async def _post() -> httpx.Response:
        return await http_client.post(
            url,
            json=payload,
            headers={
                "Content-Type": "application/json",
                "x-goog-api-key": settings.gemini_api_key or "",
            },
            timeout=settings.generation_timeout_seconds,
        )

    logger.info(f"LLM call: model={settings.gemini_model} prompt={prompt_name or 'adhoc'} chars={len(prompt)}")

    try:
        response = await retry_transport(_post, retry, label="LLM call")
    except httpx.HTTPError as e:
        logger.error(f"LLM transport error: {type(e).__name__}: {e}")
        raise UpstreamUnavailable() from e

    if not response.is_success:
        logger.error(
            f"LLM HTTP {response.status_code}: {response.text[:_ERROR_BODY_LOG_CHARS]}"
        )
        raise UpstreamUnavailable()

    text = extract_response_text(response)
    logger.info(f"LLM response: {len(text)} chars")
    return text


def build_request_body(prompt: str, *, prompt_name: str | None = None) -> dict[str, Any]:
    """Build the generateContent request body with per-prompt generation settings."""
    body: dict[str, Any] = {"contents": [{"parts": [{"text": prompt}]}]}

    config = PROMPT_CONFIG.get(prompt_name, {}) if prompt_name else {}
    if config:
        body["generationConfig"] = {
            "temperature": config["temperature"],
            "maxOutputTokens": config["max_tokens"],
        }
    return body


def extract_response_text(response: httpx.Response) -> str:
    """Return candidates[0].content.parts[0].text or raise UpstreamUnavailable."""
    try:
        data = response.json()
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (ValueError, KeyError, IndexError, TypeError) as e:
        logger.error(
            f"Malformed LLM envelope ({type(e).__name__}): {response.text[:_ERROR_BODY_LOG_CHARS]}"
        )
        raise UpstreamUnavailable() from e

    if not isinstance(text, str):
        logger.error(f"LLM envelope text part is {type(text).__name__}, expected str")
        raise UpstreamUnavailable()
    return text
