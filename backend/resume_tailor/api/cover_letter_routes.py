from typing import Optional

import httpx
from fastapi import APIRouter, Depends, File, Form, Request, Response, UploadFile

from resume_tailor.config import Settings
from resume_tailor.models.cover_letter_models import CoverLetterBundle
from resume_tailor.services.tailor_service import build_job_input, generate_cover_letter
from resume_tailor.utils.dependencies import get_app_settings, get_http_client
from resume_tailor.utils.disconnect import run_until_disconnected
from resume_tailor.utils.uploads import read_upload

router = APIRouter()

# Set to "unavailable" when the letter was written without the job description
JOB_CONTEXT_HEADER = "X-Job-Context"


@router.post("", response_model=CoverLetterBundle)
async def cover_letter_endpoint(
    request: Request,
    response: Response,
    resume: Optional[UploadFile] = File(None),
    job_url: Optional[str] = Form(None, alias="jobUrl"),
    job_text: Optional[str] = Form(None, alias="jobText"),
    settings: Settings = Depends(get_app_settings),
    http_client: httpx.AsyncClient = Depends(get_http_client),
):
    """Generate a cover letter and LinkedIn message for the uploaded resume."""
    resume_bytes = await read_upload(resume, max_bytes=settings.max_upload_bytes)

    result = await run_until_disconnected(
        request,
        generate_cover_letter(
            resume_bytes=resume_bytes,
            job_input=build_job_input(job_url, job_text),
            http_client=http_client,
            settings=settings,
        ),
    )
    response.headers[JOB_CONTEXT_HEADER] = "available" if result.job_context_available else "unavailable"
    return result.bundle
