import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import FakeUpstream
from resume_tailor.config import Settings
from resume_tailor.models.job_models import JobListing, JobSearchRequest
from resume_tailor.services.job_search_service import matches_type, normalize_listing, search_jobs
from resume_tailor.utils.errors import JobSearchUnavailable


def _raw_job(**overrides) -> dict:
    job = {
        "id": 1234,
        "title": "Backend Engineer",
        "seo_url": "jobs/backend-engineer-acme-1234",
        "organisation": {"name": "Acme", "logoUrl": "https://cdn.example.com/acme.png"},
        "jobDetail": {"locations": ["Bengaluru"], "timing": "full_time"},
    }
    job.update(overrides)
    return job


def _listing(location: str = "Bengaluru", type_: str = "Full Time") -> JobListing:
    return JobListing(title="t", company="c", location=location, type=type_, apply_link="#")


# ── normalize_listing ───────────────────────────────────────────────────────


def test_normalize_listing_maps_aggregator_fields() -> None:
    listing = normalize_listing(_raw_job())

    assert listing.id == "1234"
    assert listing.company == "Acme"
    assert listing.location == "Bengaluru"
    assert listing.type == "Full Time"
    assert listing.apply_link == "https://unstop.com/jobs/backend-engineer-acme-1234"
    assert listing.logo == "https://cdn.example.com/acme.png"


def test_normalize_listing_defaults_missing_fields() -> None:
    listing = normalize_listing({"title": "Intern"})

    assert listing.id is None
    assert listing.company == "Unknown company"
    assert listing.location == "Remote"
    assert listing.type == "Full-Time"


def test_normalize_listing_serializes_camel_case() -> None:
    dumped = normalize_listing(_raw_job()).model_dump(by_alias=True)
    assert "applyLink" in dumped


# ── matches_type ────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "job_type,listing,expected",
    [
        ("All", _listing(), True),
        ("", _listing(), True),
        ("Remote", _listing(location="Remote"), True),
        ("Remote", _listing(location="Work From Home"), True),
        ("Remote", _listing(location="Pune"), False),
        ("Full-time", _listing(type_="Full Time"), True),
        ("Full-time", _listing(type_="Part Time"), False),
        ("Contract", _listing(type_="Internship"), True),
        ("Contract", _listing(type_="Full Time"), False),
    ],
)
def test_matches_type(job_type: str, listing: JobListing, expected: bool) -> None:
    assert matches_type(listing, job_type) is expected


# ── search_jobs ─────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_search_jobs_sends_filters_and_applies_type(
    upstream: FakeUpstream, http_client: httpx.AsyncClient, settings: Settings
) -> None:
    upstream.pages[settings.job_search_url] = httpx.Response(
        200,
        json={
            "data": {
                "data": [
                    _raw_job(),
                    _raw_job(id=2, jobDetail={"locations": ["Remote"], "timing": "part_time"}),
                    "not a job",
                ]
            }
        },
    )

    jobs = await search_jobs(
        JobSearchRequest(query=" python ", location="Bengaluru", type="Full-time"),
        http_client=http_client,
        settings=settings,
    )

    assert [job.id for job in jobs] == ["1234"]
    params = upstream.requests[0].url.params
    assert params["searchTerm"] == "python"
    assert params["location"] == "Bengaluru"
    assert params["opportunity"] == "jobs"


@pytest.mark.asyncio
async def test_search_jobs_tolerates_unexpected_payload(
    upstream: FakeUpstream, http_client: httpx.AsyncClient, settings: Settings
) -> None:
    upstream.pages[settings.job_search_url] = httpx.Response(200, json={"data": []})

    jobs = await search_jobs(JobSearchRequest(), http_client=http_client, settings=settings)

    assert jobs == []
    assert "searchTerm" not in upstream.requests[0].url.params


@pytest.mark.asyncio
async def test_search_jobs_wraps_aggregator_failure(
    upstream: FakeUpstream, http_client: httpx.AsyncClient, settings: Settings
) -> None:
    upstream.pages[settings.job_search_url] = httpx.Response(500, text="boom")

    with pytest.raises(JobSearchUnavailable):
        await search_jobs(JobSearchRequest(), http_client=http_client, settings=settings)


@pytest.mark.asyncio
async def test_search_jobs_rejects_non_json(
    upstream: FakeUpstream, http_client: httpx.AsyncClient, settings: Settings
) -> None:
    upstream.pages[settings.job_search_url] = httpx.Response(200, text="<html>maintenance</html>")

    with pytest.raises(JobSearchUnavailable):
        await search_jobs(JobSearchRequest(), http_client=http_client, settings=settings)


# ── /api/find-jobs ──────────────────────────────────────────────────────────


def test_find_jobs_endpoint(client: TestClient, upstream: FakeUpstream, settings: Settings) -> None:
    upstream.pages[settings.job_search_url] = httpx.Response(200, json={"data": {"data": [_raw_job()]}})

    response = client.post("/api/find-jobs", json={"query": "python"})

    assert response.status_code == 200
    jobs = response.json()["jobs"]
    assert jobs[0]["applyLink"].startswith("https://unstop.com/")
    assert jobs[0]["company"] == "Acme"


def test_find_jobs_endpoint_aggregator_down_is_502(client: TestClient, upstream: FakeUpstream) -> None:
    response = client.post("/api/find-jobs", json={})

    assert response.status_code == 502
    assert response.json()["code"] == "JOB_SEARCH_FAILED"
