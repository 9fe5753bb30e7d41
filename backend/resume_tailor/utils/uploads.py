"""
Upload helpers — read a multipart file into memory with a size cap.
"""

from __future__ import annotations

from typing import Optional

from fastapi import UploadFile

from resume_tailor.utils.errors import UploadTooLarge


async def read_upload(file: Optional[UploadFile], *, max_bytes: int) -> Optional[bytes]:
    """Return the file bytes, or None when no file (or an empty one) was sent."""
    if file is None or not file.filename:
        return None

    data = await file.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise UploadTooLarge(f"File too large (max {max_bytes // (1024 * 1024)} MB).")
    return data or None
