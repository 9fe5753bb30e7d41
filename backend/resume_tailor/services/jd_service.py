"""
JD Service — resolve a job description from pasted text or a job-posting URL.

Responsibilities:
  • Normalize pasted JD text and reject inputs too short to be useful
  • Scrape a job URL with a browser-like httpx request
  • Strip non-content HTML and cap the text before it reaches a prompt
  • Tell "the site blocked us" apart from "the page had no job text"
"""

from __future__ import annotations

import ipaddress
import logging
from urllib.parse import urlparse

import httpx
from bs4 import BeautifulSoup

from resume_tailor.config import Settings
from resume_tailor.models.jd_models import (
    JDTextInput,
    JDUrlInput,
    JobDescriptionInput,
    ResolvedJobDescription,
)
from resume_tailor.utils.errors import InsufficientContent, InvalidJobUrl, ScrapingBlocked
from resume_tailor.utils.retry import RetryConfig, retry_transport
from resume_tailor.utils.text_cleanup import collapse_whitespace, truncate

logger = logging.getLogger(__name__)

# Many job boards reject requests that don't look like a desktop browser
BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,image/apng,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Connection": "keep-alive",
}

NON_CONTENT_TAGS = ["script", "style", "nav", "footer", "header", "aside", "iframe", "noscript"]

# Interstitials served with a 200 by common anti-bot layers
BOT_CHALLENGE_MARKERS = (
    "just a moment...",
    "attention required! | cloudflare",
    "verify you are human",
    "are you a robot",
    "please enable cookies",
    "access denied",
    "captcha",
)

# Challenge pages are short; a real posting that mentions "captcha" is not.
_BOT_CHALLENGE_MAX_CHARS = 2000


# ── Public API ───────────────────────────────────────────────────────────────


async def resolve_job_description(
    job_input: JobDescriptionInput,
    *,
    http_client: httpx.AsyncClient,
    settings: Settings,
) -> ResolvedJobDescription:
    """Resolve either kind of job input into bounded plain text."""
    if isinstance(job_input, JDTextInput):
        return resolve_job_text(job_input.body, min_chars=settings.min_job_description_chars)
    if isinstance(job_input, JDUrlInput):
        return await scrape_job_url(job_input.address, http_client=http_client, settings=settings)
    raise TypeError(f"Unsupported job input: {type(job_input).__name__}")


def resolve_job_text(body: str, *, min_chars: int) -> ResolvedJobDescription:
    """Pass pasted text through with whitespace collapsed; no truncation here."""
    text = collapse_whitespace(body)
    if len(text) < min_chars:
        logger.info(f"Rejected pasted JD text: {len(text)} chars < {min_chars}")
        raise InsufficientContent(
            f"The job description is too short ({len(text)} characters). "
            f"Please paste the full job description (at least {min_chars} characters)."
        )
    return ResolvedJobDescription(text=text, source="text")


async def scrape_job_url(
    url: str,
    *,
    http_client: httpx.AsyncClient,
    settings: Settings,
) -> ResolvedJobDescription:
    """Fetch a job posting and reduce it to its visible body text."""
    url = normalize_job_url(url)
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError as e:
        logger.info(f"Rejected malformed job URL {url!r}: {e}")
        raise InvalidJobUrl() from e

    if parsed.scheme not in ("http", "https") or not hostname:
        raise InvalidJobUrl()
    if _is_private_host(hostname):
        logger.warning(f"Rejected job URL pointing at a non-public host: {hostname}")
        raise InvalidJobUrl("The job URL must point to a public website.")

    logger.info(f"Scraping JD from URL: {url}")
    html = await _fetch_html(url, http_client=http_client, settings=settings)

    title, text = _extract_page(html)
    if _looks_like_bot_challenge(f"{title} {text}"):
        logger.warning(f"Bot challenge page served for {url}")
        raise ScrapingBlocked(details="Bot challenge page returned instead of the job posting")

    text = truncate(text, settings.max_prompt_input_chars)
    if len(text) < settings.min_job_description_chars:
        logger.warning(f"Scraped {url} but only {len(text)} usable chars remain")
        raise InsufficientContent(
            "The job page loaded but contained no readable job description "
            "(it may require JavaScript). Please paste the text manually."
        )

    logger.info(f"Scraped JD: {len(text)} chars from {parsed.netloc}")
    return ResolvedJobDescription(text=text, source="url", url=url)


def normalize_job_url(url: str) -> str:
    """Trim the address and assume https when the user left the scheme off."""
    url = url.strip()
    if url and "://" not in url:
        url = f"https://{url.lstrip('/')}"
    return url


def html_to_text(html: str) -> str:
    """Drop non-content elements and return the body text on a single line."""
    return _extract_page(html)[1]


# ── Helpers ──────────────────────────────────────────────────────────────────


async def _fetch_html(url: str, *, http_client: httpx.AsyncClient, settings: Settings) -> str:
    max_bytes = settings.max_scrape_bytes

    async def _get() -> tuple[int, str]:
        async with http_client.stream(
            "GET",
            url,
            headers=BROWSER_HEADERS,
            timeout=settings.scrape_timeout_seconds,
            follow_redirects=True,
        ) as response:
            if not response.is_success:
                return response.status_code, ""

            body = bytearray()
            async for chunk in response.aiter_bytes():
                body += chunk
                if len(body) >= max_bytes:
                    logger.warning(f"Job page {url} exceeds {max_bytes} bytes; keeping the first {max_bytes}")
                    break
            return response.status_code, bytes(body[:max_bytes]).decode(
                response.encoding or "utf-8", errors="replace"
            )

    retry = RetryConfig(
        max_retries=settings.scrape_max_retries,
        base_delay=settings.retry_base_delay_seconds,
        jitter_factor=settings.retry_jitter_factor,
    )

    try:
        status_code, html = await retry_transport(_get, retry, label="JD scrape")
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.error(f"Error fetching job URL {url}: {type(e).__name__}: {e}")
        raise ScrapingBlocked(details=f"{type(e).__name__}: {e}") from e

    if not 200 <= status_code < 300:
        logger.error(f"Error fetching job URL {url}: HTTP {status_code}")
        raise ScrapingBlocked(details=f"Request failed with status code {status_code}")

    return html


def _is_private_host(hostname: str) -> bool:
    """Loopback, link-local and private-range literals, plus localhost names."""
    host = hostname.lower().rstrip(".")
    if host == "localhost" or host.endswith(".localhost"):
        return True
    try:
        address = ipaddress.ip_address(host)
    except ValueError:
        return False
    return not address.is_global


def _extract_page(html: str) -> tuple[str, str]:
    """Return (title, body text) with non-content elements removed."""
    soup = BeautifulSoup(html, "html.parser")
    title = collapse_whitespace(soup.title.get_text()) if soup.title else ""
    for tag in soup(NON_CONTENT_TAGS):
        tag.decompose()
    root = soup.body or soup
    return title, collapse_whitespace(root.get_text(separator=" "))


def _looks_like_bot_challenge(text: str) -> bool:
    if len(text) > _BOT_CHALLENGE_MAX_CHARS:
        return False
    lowered = text.lower()
    return any(marker in lowered for marker in BOT_CHALLENGE_MARKERS)
