"""Tests for the staged note-generation pipeline."""

from __future__ import annotations

import asyncio
import random

import pytest

from src.notes.models import ProcessingStatus, Transcript
from src.notes.pipeline import STAGES, process_transcript
from src.pipeline_config import NoteFormat, PipelineConfig, ProcessingStage

CONTENT = (
    "Photosynthesis is the process plants use to turn light into chemical energy. "
    "The key inputs are water, carbon dioxide and sunlight. "
    "Chlorophyll is important because it absorbs the light that drives the reaction."
)


@pytest.fixture
def transcript() -> Transcript:
    return Transcript.create("Photosynthesis", CONTENT)


class StatusLog:
    def __init__(self) -> None:
        self.statuses: list[ProcessingStatus] = []

    def __call__(self, status: ProcessingStatus) -> None:
        self.statuses.append(status)


class TestStages:
    def test_stage_table(self) -> None:
        assert [s.progress for s in STAGES] == [20, 45, 70, 90, 100]
        assert [s.stage for s in STAGES] == list(ProcessingStage)
        assert STAGES[-1].message == "Notes generated successfully!"


class TestProcessTranscript:
    def test_reports_every_stage_in_order(self, transcript: Transcript) -> None:
        log = StatusLog()
        notes = asyncio.run(process_transcript(transcript, NoteFormat.BULLETS, log))
        assert [s.progress for s in log.statuses] == [20, 45, 70, 90, 100]
        assert log.statuses[-1].stage is ProcessingStage.COMPLETE
        assert notes.format is NoteFormat.BULLETS
        assert notes.transcript_id == transcript.id

    def test_accepts_format_string(self, transcript: Transcript) -> None:
        notes = asyncio.run(process_transcript(transcript, "outline"))
        assert notes.format is NoteFormat.OUTLINE
        assert notes.content.startswith("# Photosynthesis")

    def test_invalid_format_reports_nothing(self, transcript: Transcript) -> None:
        log = StatusLog()
        with pytest.raises(ValueError):
            asyncio.run(process_transcript(transcript, "mindmap", log))
        assert log.statuses == []

    def test_default_format_is_summary(self, transcript: Transcript) -> None:
        notes = asyncio.run(process_transcript(transcript))
        assert notes.format is NoteFormat.SUMMARY

    def test_pacing_delay_is_awaited(
        self, transcript: Transcript, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        slept: list[float] = []

        async def fake_sleep(delay: float) -> None:
            slept.append(delay)

        monkeypatch.setattr("src.notes.pipeline.asyncio.sleep", fake_sleep)
        cfg = PipelineConfig(pacing_min_ms=800, pacing_max_ms=1200)
        asyncio.run(process_transcript(transcript, config=cfg, rng=random.Random(3)))
        assert len(slept) == len(STAGES)
        assert all(0.8 <= d <= 1.2 for d in slept)

    def test_no_delay_by_default(
        self, transcript: Transcript, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        slept: list[float] = []

        async def fake_sleep(delay: float) -> None:
            slept.append(delay)

        monkeypatch.setattr("src.notes.pipeline.asyncio.sleep", fake_sleep)
        asyncio.run(process_transcript(transcript))
        assert slept == []

    def test_results_are_independent(self, transcript: Transcript) -> None:
        first = asyncio.run(process_transcript(transcript, NoteFormat.SUMMARY))
        second = asyncio.run(process_transcript(transcript, NoteFormat.QNA))
        assert first.id != second.id
        assert first.format is NoteFormat.SUMMARY
        assert first.keywords == second.keywords
        assert first.summary == second.summary
