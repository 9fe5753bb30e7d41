"""
PDF Service — turn an uploaded resume PDF into plain text.

Layout is not preserved; downstream consumers only need the words.
"""

from __future__ import annotations

import logging
from io import BytesIO

import pdfplumber

from resume_tailor.utils.errors import UnreadablePdf
from resume_tailor.utils.text_cleanup import normalize_text

logger = logging.getLogger(__name__)


def extract_pdf_text(file_bytes: bytes) -> str:
    """
    Extract text from a PDF buffer using pdfplumber.

    Raises:
        UnreadablePdf: the buffer is not a parseable PDF (corrupt, wrong
            format, encrypted) or contains no extractable text.
    """
    if not file_bytes:
        raise UnreadablePdf("The uploaded resume file is empty.")

    text_parts: list[str] = []
    try:
        with pdfplumber.open(BytesIO(file_bytes)) as pdf:
            for page in pdf.pages:
                page_text = page.extract_text()
                if page_text:
                    text_parts.append(page_text)
    except Exception as e:
        # pdfminer raises a zoo of unrelated types (PSEOF, PDFSyntaxError,
        # PDFPasswordIncorrect, ...); all of them mean the input is unusable.
        logger.warning(f"PDF parse failed ({len(file_bytes)} bytes): {type(e).__name__}: {e}")
        raise UnreadablePdf() from e

    text = normalize_text("\n\n".join(text_parts))
    if not text:
        logger.warning(f"PDF parsed but yielded no text ({len(file_bytes)} bytes)")
        raise UnreadablePdf(
            "No text could be extracted from the uploaded resume. "
            "It may be a scanned image; please upload a text-based PDF."
        )

    logger.info(f"Extracted {len(text)} chars from resume PDF")
    return text
