from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings

from resume_tailor.utils.errors import ConfigurationError

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "Resume Tailor API"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # CORS
    frontend_url: str = "http://localhost:5173"

    # Generative provider (no default key: must come from the environment)
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemma-3-4b-it"
    gemini_api_url: Optional[str] = None
    generation_timeout_seconds: float = 60.0
    generation_max_retries: int = 1

    # Job description scraping
    scrape_timeout_seconds: float = 20.0
    scrape_max_retries: int = 0
    max_scrape_bytes: int = 2 * 1024 * 1024

    # Transport retry backoff
    retry_base_delay_seconds: float = 0.5
    retry_jitter_factor: float = 0.2

    # Limits
    max_prompt_input_chars: int = 15000
    min_job_description_chars: int = 50
    max_upload_bytes: int = 10 * 1024 * 1024

    # What the cover-letter flow does when a job URL cannot be resolved
    cover_letter_scrape_failure: Literal["degrade", "abort"] = "degrade"

    # Job search aggregator
    job_search_url: str = "https://unstop.com/api/public/opportunity/search-result"
    job_search_timeout_seconds: float = 15.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def generation_url(self) -> str:
        """Full generateContent endpoint, explicit URL taking precedence over the model name."""
        if self.gemini_api_url:
            return self.gemini_api_url
        return f"{GEMINI_BASE_URL}/{self.gemini_model}:generateContent"

    def ensure_generation_config(self) -> None:
        """Fail fast when the provider credentials are missing."""
        if not self.gemini_api_key or not self.gemini_api_key.strip():
            raise ConfigurationError(
                "GEMINI_API_KEY is not set. Configure it in the environment or .env file."
            )


@lru_cache
def get_settings() -> Settings:
    return Settings()


# ── Prompt Configuration ────────────────────────────────────────────────────

PROMPT_CONFIG = {
    "tailor_resume": {"temperature": 0.4, "max_tokens": 4096},
    "cover_letter": {"temperature": 0.7, "max_tokens": 1500},
}
