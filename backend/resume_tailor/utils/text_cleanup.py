"""
Text cleanup utilities for extracted resume and job description text.
"""

from __future__ import annotations

import re
import unicodedata

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Normalize unicode and whitespace in raw PDF text, keeping line structure."""
    text = unicodedata.normalize("NFKC", text)

    replacements = {
        "\u2019": "'",   # right single quote
        "\u2018": "'",   # left single quote
        "\u201c": '"',   # left double quote
        "\u201d": '"',   # right double quote
        "\u2013": "-",   # en-dash
        "\u2014": "-",   # em-dash
        "\u2026": "...", # ellipsis
        "\u00a0": " ",   # non-breaking space
        "\u200b": "",    # zero-width space
        "\ufeff": "",    # BOM
    }
    for old, new in replacements.items():
        text = text.replace(old, new)

    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r"\n{3,}", "\n\n", text)

    lines = [line.strip() for line in text.splitlines()]
    return "\n".join(lines).strip()


def collapse_whitespace(text: str) -> str:
    """Collapse every whitespace run (including newlines) into a single space."""
    return _WHITESPACE_RUN.sub(" ", text).strip()


def truncate(text: str, limit: int) -> str:
    """Cut text to at most ``limit`` characters."""
    if len(text) <= limit:
        return text
    return text[:limit]
