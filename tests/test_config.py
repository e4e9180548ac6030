"""Tests for Settings, PipelineConfig, and the format/stage enums."""

from __future__ import annotations

import random

import pytest

from src.config import MEGABYTE, Settings
from src.pipeline_config import DocumentFormat, NoteFormat, PipelineConfig, ProcessingStage

# ---------------------------------------------------------------------------
# Enum tests
# ---------------------------------------------------------------------------


class TestNoteFormat:
    def test_values(self) -> None:
        assert [f.value for f in NoteFormat] == ["summary", "bullets", "concepts", "qna", "outline"]

    def test_from_string(self) -> None:
        assert NoteFormat("qna") is NoteFormat.QNA
        assert NoteFormat("outline") is NoteFormat.OUTLINE

    def test_invalid_raises(self) -> None:
        with pytest.raises(ValueError):
            NoteFormat("mindmap")

    def test_is_str_subclass(self) -> None:
        """Enum values behave as plain strings in file names and logs."""
        assert isinstance(NoteFormat.SUMMARY, str)
        assert f"notes-{NoteFormat.BULLETS.value}" == "notes-bullets"


class TestDocumentFormat:
    def test_values(self) -> None:
        assert {f.value for f in DocumentFormat} == {"pdf", "docx", "pptx", "txt"}

    def test_invalid_raises(self) -> None:
        with pytest.raises(ValueError):
            DocumentFormat("doc")


class TestProcessingStage:
    def test_order(self) -> None:
        assert list(ProcessingStage) == [
            ProcessingStage.ANALYZING,
            ProcessingStage.EXTRACTING,
            ProcessingStage.STRUCTURING,
            ProcessingStage.FINALIZING,
            ProcessingStage.COMPLETE,
        ]


# ---------------------------------------------------------------------------
# PipelineConfig tests
# ---------------------------------------------------------------------------


class TestPipelineConfig:
    def test_defaults(self) -> None:
        cfg = PipelineConfig()
        assert cfg.pacing_min_ms == 0
        assert cfg.pacing_max_ms == 0
        assert cfg.ocr_max_pages == 10
        assert cfg.ocr_zoom == 1.5
        assert cfg.max_pdf_bytes == 50 * MEGABYTE
        assert cfg.max_office_bytes == 100 * MEGABYTE

    def test_immutable(self) -> None:
        cfg = PipelineConfig()
        with pytest.raises(AttributeError):
            cfg.ocr_max_pages = 3  # type: ignore[misc]

    def test_from_settings(self) -> None:
        settings = Settings(_env_file=None, ocr_max_pages=4, pacing_max_ms=500)  # type: ignore[call-arg]
        cfg = PipelineConfig.from_settings(settings)
        assert cfg.ocr_max_pages == 4
        assert cfg.pacing_max_ms == 500
        assert cfg.max_pdf_bytes == settings.max_pdf_bytes


class TestPacingDelay:
    def test_no_window_means_no_delay(self) -> None:
        assert PipelineConfig().pacing_delay() == 0.0

    def test_delay_within_window(self) -> None:
        cfg = PipelineConfig(pacing_min_ms=800, pacing_max_ms=1200)
        rng = random.Random(7)
        delays = [cfg.pacing_delay(rng) for _ in range(50)]
        assert all(0.8 <= d <= 1.2 for d in delays)

    def test_inverted_window_is_tolerated(self) -> None:
        cfg = PipelineConfig(pacing_min_ms=300, pacing_max_ms=100)
        assert cfg.pacing_delay(random.Random(1)) == pytest.approx(0.1)


# ---------------------------------------------------------------------------
# Settings tests
# ---------------------------------------------------------------------------


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("MAX_PDF_BYTES", "OCR_LANGUAGE", "PACING_MIN_MS", "PACING_MAX_MS", "TESSERACT_CMD"):
            monkeypatch.delenv(name, raising=False)
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.max_pdf_bytes == 50 * MEGABYTE
        assert s.ocr_language == "eng"
        assert s.pacing_min_ms == 800
        assert s.pacing_max_ms == 1200
        assert s.tesseract_cmd is None

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OCR_MAX_PAGES", "3")
        monkeypatch.setenv("TESSERACT_CMD", "/opt/bin/tesseract")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.ocr_max_pages == 3
        assert s.tesseract_cmd == "/opt/bin/tesseract"
