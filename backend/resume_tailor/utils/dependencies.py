"""
Request-scoped helpers — hand the app-wide settings and HTTP client to routes.
"""

from __future__ import annotations

import httpx
from fastapi import Request

from resume_tailor.config import Settings


def get_app_settings(request: Request) -> Settings:
    """FastAPI dependency returning the settings the app was created with."""
    return request.app.state.settings


def get_http_client(request: Request) -> httpx.AsyncClient:
    """FastAPI dependency returning the shared outbound HTTP client."""
    return request.app.state.http_client
