from typing import Optional

import httpx
from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from resume_tailor.config import Settings
from resume_tailor.models.tailor_models import TailorResponse
from resume_tailor.services.tailor_service import build_job_input, tailor_resume
from resume_tailor.utils.dependencies import get_app_settings, get_http_client
from resume_tailor.utils.disconnect import run_until_disconnected
from resume_tailor.utils.uploads import read_upload

router = APIRouter()


@router.post("", response_model=TailorResponse)
async def tailor_resume_endpoint(
    request: Request,
    resume: Optional[UploadFile] = File(None),
    job_url: Optional[str] = Form(None, alias="jobUrl"),
    job_text: Optional[str] = Form(None, alias="jobText"),
    settings: Settings = Depends(get_app_settings),
    http_client: httpx.AsyncClient = Depends(get_http_client),
):
    """Tailor an uploaded resume PDF to a pasted or linked job description."""
    resume_bytes = await read_upload(resume, max_bytes=settings.max_upload_bytes)

    tailored = await run_until_disconnected(
        request,
        tailor_resume(
            resume_bytes=resume_bytes,
            job_input=build_job_input(job_url, job_text),
            http_client=http_client,
            settings=settings,
        ),
    )
    return TailorResponse(tailored_resume=tailored)
