"""Data models for transcripts and generated notes."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime

from src.pipeline_config import NoteFormat, ProcessingStage


def _new_id() -> str:
    return uuid.uuid4().hex


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class Transcript:
    """A titled block of lecture text submitted for note generation."""

    title: str
    content: str
    word_count: int
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=_now)

    @classmethod
    def create(cls, title: str, content: str) -> Transcript:
        """Build a transcript from raw form input, trimming both fields."""
        content = content.strip()
        return cls(
            title=title.strip(),
            content=content,
            word_count=len(content.split()) if content else 0,
        )


@dataclass(frozen=True)
class ProcessingStatus:
    """One progress update emitted while notes are being generated."""

    stage: ProcessingStage
    progress: int
    message: str


@dataclass(frozen=True)
class GeneratedNotes:
    """Structured notes produced for one transcript in one format."""

    transcript_id: str
    format: NoteFormat
    content: str
    keywords: list[str]
    summary: str
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=_now)


def notes_filename(notes: GeneratedNotes) -> str:
    """Download name for a notes file, e.g. ``notes-summary-1718000000000.txt``."""
    millis = int(notes.created_at.timestamp() * 1000)
    return f"notes-{notes.format.value}-{millis}.txt"
