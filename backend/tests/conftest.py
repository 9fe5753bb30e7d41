"""Shared fixtures: in-memory PDFs, a fake upstream for outbound HTTP, and an app client."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Union

import httpx
import pytest
from fastapi.testclient import TestClient

from resume_tailor.config import Settings
from resume_tailor.main import create_app

GENERATION_URL = "https://llm.test/v1beta/models/test-model:generateContent"


@pytest.fixture(autouse=True)
def _isolate_runtime_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear provider env that can leak into tests on developer machines."""
    for key in (
        "GEMINI_API_KEY",
        "GEMINI_API_URL",
        "GEMINI_MODEL",
        "COVER_LETTER_SCRAPE_FAILURE",
        "GENERATION_MAX_RETRIES",
        "SCRAPE_MAX_RETRIES",
    ):
        monkeypatch.delenv(key, raising=False)


# ── PDFs ─────────────────────────────────────────────────────────────────────


def make_pdf(*lines: str) -> bytes:
    """Build a one-page PDF with each line drawn in Helvetica."""

    def _escape(s: str) -> str:
        return s.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")

    ops = ["BT", "/F1 12 Tf", "14 TL", "72 720 Td"]
    for line in lines:
        ops.append(f"({_escape(line)}) Tj T*")
    ops.append("ET")
    stream = "\n".join(ops).encode("latin-1")

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length " + str(len(stream)).encode() + b" >>\nstream\n" + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"

    xref_at = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode()
    out += f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\nstartxref\n{xref_at}\n%%EOF\n".encode()
    return bytes(out)


@pytest.fixture
def resume_pdf() -> bytes:
    return make_pdf("John Doe, Software Engineer, 5 years Python")


# ── Fake upstream ────────────────────────────────────────────────────────────


def gemini_envelope(text: str) -> dict[str, Any]:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


def tailored_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "personalInfo": {"name": "John Doe", "contact": "john@example.com"},
        "summary": "Software engineer with 5 years of Python building services on AWS.",
        "skills": ["Python", "AWS", "Docker"],
        "experience": [
            {
                "role": "Software Engineer",
                "company": "Acme",
                "duration": "2019 - Present",
                "points": ["Built Python APIs deployed on AWS Lambda."],
            }
        ],
        "education": [{"institution": "State University", "degree": "BSc Computer Science", "year": 2018}],
        "projects": [{"name": "Resume Bot", "description": "Side project"}],
        "analysis": {
            "addedSkills": ["AWS"],
            "summaryKeywords": ["Python", "AWS"],
            "critique": ["No cloud experience listed", "No metrics", "Summary too generic"],
            "improvements": ["Add AWS certification", "Quantify impact", "Link GitHub"],
        },
    }
    payload.update(overrides)
    return payload


Reply = Union[httpx.Response, Exception, Callable[[httpx.Request], httpx.Response]]


@dataclass
class FakeUpstream:
    """
    Routes outbound requests: the generation URL pops queued replies, any
    other URL is looked up in ``pages``. Every request is recorded.
    """

    generations: list[Reply] = field(default_factory=list)
    pages: dict[str, Reply] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)

    def reply_with_text(self, text: str) -> None:
        self.generations.append(httpx.Response(200, json=gemini_envelope(text)))

    def reply_with_json(self, payload: dict[str, Any]) -> None:
        self.reply_with_text(json.dumps(payload))

    def page(self, url: str, html: str, status_code: int = 200) -> None:
        self.pages[url] = httpx.Response(status_code, html=html)

    @property
    def generation_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if str(r.url) == GENERATION_URL]

    @property
    def scrape_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if str(r.url) != GENERATION_URL]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if str(request.url) == GENERATION_URL:
            if not self.generations:
                raise AssertionError("unexpected generation call")
            reply = self.generations.pop(0)
        else:
            key = str(request.url).split("?")[0]
            if key not in self.pages:
                return httpx.Response(404, text="not found")
            reply = self.pages[key]

        if isinstance(reply, Exception):
            raise reply
        if callable(reply) and not isinstance(reply, httpx.Response):
            return reply(request)
        return reply


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        gemini_api_key="test-key",
        gemini_api_url=GENERATION_URL,
        retry_base_delay_seconds=0.0,
    )


@pytest.fixture
def http_client(upstream: FakeUpstream) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler))


@pytest.fixture
def client(settings: Settings, http_client: httpx.AsyncClient):
    with TestClient(create_app(settings, http_client=http_client)) as test_client:
        yield test_client
