from contextlib import asynccontextmanager
from typing import Optional

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from resume_tailor import __version__
from resume_tailor.api import cover_letter_routes, jobs_routes, tailor_routes
from resume_tailor.api.errors import register_exception_handlers
from resume_tailor.config import Settings, get_settings
from resume_tailor.utils.logging import setup_logging


def create_app(
    settings: Optional[Settings] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    """
    Build the API application.

    Fails immediately with ConfigurationError when the generative provider is
    not configured. ``http_client`` lets callers inject a client (tests use a
    mock transport); otherwise one is opened for the app's lifetime.
    """
    settings = settings or get_settings()
    settings.ensure_generation_config()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if http_client is not None:
            app.state.http_client = http_client
            yield
            return
        async with httpx.AsyncClient() as client:
            app.state.http_client = client
            yield

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        description="Tailor resumes and write cover letters for a specific job description",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    if http_client is not None:
        app.state.http_client = http_client

    # ── CORS ────────────────────────────────────────────────────────────────

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[cover_letter_routes.JOB_CONTEXT_HEADER],
    )

    # ── Errors ──────────────────────────────────────────────────────────────

    register_exception_handlers(app)

    # ── Routers ─────────────────────────────────────────────────────────────

    app.include_router(tailor_routes.router, prefix="/api/tailor", tags=["Tailoring"])
    app.include_router(cover_letter_routes.router, prefix="/api/cover-letter", tags=["Cover Letter"])
    app.include_router(jobs_routes.router, prefix="/api/find-jobs", tags=["Job Search"])

    # ── Health Check ────────────────────────────────────────────────────────

    @app.get("/api/health")
    async def health_check():
        return {"status": "healthy", "app": settings.app_name, "version": __version__}

    return app


def main() -> None:
    """Console entry point (``resume-tailor-api``): serve the app factory with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "resume_tailor.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
