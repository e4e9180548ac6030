"""Note generation: pick a renderer for the format and attach keywords/summary."""

from __future__ import annotations

import logging

from src.notes.analysis import extract_keywords, generate_summary
from src.notes.models import GeneratedNotes, Transcript
from src.notes.renderers import (
    render_bullets,
    render_concepts,
    render_outline,
    render_qna,
    render_summary,
)
from src.pipeline_config import NoteFormat

logger = logging.getLogger(__name__)


def render_notes(content: str, title: str, note_format: NoteFormat) -> str:
    """Render *content* in the requested format."""
    match note_format:
        case NoteFormat.SUMMARY:
            return render_summary(content, title)
        case NoteFormat.BULLETS:
            return render_bullets(content, title)
        case NoteFormat.CONCEPTS:
            return render_concepts(content, title)
        case NoteFormat.QNA:
            return render_qna(content, title)
        case NoteFormat.OUTLINE:
            return render_outline(content, title)


def generate_notes(transcript: Transcript, note_format: str | NoteFormat) -> GeneratedNotes:
    """Build a fresh GeneratedNotes value for *transcript*.

    Keywords and summary depend only on the transcript content, so they are
    identical across formats.

    Args:
        transcript: Source transcript.
        note_format: Target format (string or enum).

    Returns:
        A new GeneratedNotes; earlier results are never modified.

    Raises:
        ValueError: If *note_format* is not a known format.
    """
    # Normalise to enum
    if isinstance(note_format, str):
        note_format = NoteFormat(note_format)

    content = render_notes(transcript.content, transcript.title, note_format)
    notes = GeneratedNotes(
        transcript_id=transcript.id,
        format=note_format,
        content=content,
        keywords=extract_keywords(transcript.content),
        summary=generate_summary(transcript.content),
    )
    logger.info(
        "Generated %s notes for transcript %s (%d chars, %d keywords)",
        note_format.value,
        transcript.id,
        len(content),
        len(notes.keywords),
    )
    return notes
