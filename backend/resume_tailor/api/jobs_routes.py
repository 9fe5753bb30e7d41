import httpx
from fastapi import APIRouter, Depends

from resume_tailor.config import Settings
from resume_tailor.models.job_models import JobSearchRequest, JobSearchResponse
from resume_tailor.services.job_search_service import search_jobs
from resume_tailor.utils.dependencies import get_app_settings, get_http_client

router = APIRouter()


@router.post("", response_model=JobSearchResponse)
async def find_jobs_endpoint(
    req: JobSearchRequest,
    settings: Settings = Depends(get_app_settings),
    http_client: httpx.AsyncClient = Depends(get_http_client),
):
    """Search the job aggregator and return normalized listings."""
    jobs = await search_jobs(req, http_client=http_client, settings=settings)
    return JobSearchResponse(jobs=jobs)
