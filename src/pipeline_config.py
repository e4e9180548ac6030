"""Pipeline configuration: format/stage enums and the PipelineConfig dataclass."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum

from src.config import Settings


class NoteFormat(str, Enum):
    """Presentation formats the note generator can render."""

    SUMMARY = "summary"
    BULLETS = "bullets"
    CONCEPTS = "concepts"
    QNA = "qna"
    OUTLINE = "outline"


class DocumentFormat(str, Enum):
    """Input file formats accepted by the text extractors."""

    PDF = "pdf"
    DOCX = "docx"
    PPTX = "pptx"
    TXT = "txt"


class ProcessingStage(str, Enum):
    """Ordered stages of one note-generation call."""

    ANALYZING = "analyzing"
    EXTRACTING = "extracting"
    STRUCTURING = "structuring"
    FINALIZING = "finalizing"
    COMPLETE = "complete"


@dataclass(frozen=True)
class PipelineConfig:
    """Immutable knobs for one extraction / generation run.

    Defaults are suitable for non-interactive use: no pacing delay between
    progress stages and the standard OCR limits.  ``from_settings`` builds
    the interactive variant used by the UI.
    """

    pacing_min_ms: int = 0
    pacing_max_ms: int = 0
    ocr_max_pages: int = 10
    ocr_zoom: float = 1.5
    max_pdf_bytes: int = 50 * 1024 * 1024
    max_office_bytes: int = 100 * 1024 * 1024

    @classmethod
    def from_settings(cls, settings: Settings) -> PipelineConfig:
        return cls(
            pacing_min_ms=settings.pacing_min_ms,
            pacing_max_ms=settings.pacing_max_ms,
            ocr_max_pages=settings.ocr_max_pages,
            ocr_zoom=settings.ocr_zoom,
            max_pdf_bytes=settings.max_pdf_bytes,
            max_office_bytes=settings.max_office_bytes,
        )

    def pacing_delay(self, rng: random.Random | None = None) -> float:
        """Return a pacing delay in seconds drawn from the configured window."""
        if self.pacing_max_ms <= 0:
            return 0.0
        low = min(self.pacing_min_ms, self.pacing_max_ms)
        value = (rng or random).uniform(low, self.pacing_max_ms)
        return value / 1000.0
