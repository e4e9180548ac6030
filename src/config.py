from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings

MEGABYTE = 1024 * 1024


class Settings(BaseSettings):
    """Application settings validated via Pydantic.

    Values are loaded from environment variables and/or a .env file.
    """

    # Upload limits
    max_pdf_bytes: int = 50 * MEGABYTE
    max_office_bytes: int = 100 * MEGABYTE  # DOCX and PPTX

    # OCR fallback for scanned PDFs
    ocr_language: str = "eng"
    ocr_max_pages: int = 10
    ocr_zoom: float = 1.5
    tesseract_cmd: str | None = None  # None -> look up "tesseract" on PATH

    # Cosmetic delay between progress stages in the UI
    pacing_min_ms: int = 800
    pacing_max_ms: int = 1200

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Gracefully handles missing .env files (e.g. in CI/testing) by falling
    back to environment variables and defaults.
    """
    try:
        return Settings()
    except Exception:
        # If .env is missing or unreadable, build settings from env vars only.
        return Settings(_env_file=None)  # type: ignore[call-arg]


settings = get_settings()
