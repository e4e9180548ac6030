"""Staged note-generation pipeline: report progress -> generate."""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Callable

from src.notes.generator import generate_notes
from src.notes.models import GeneratedNotes, ProcessingStatus, Transcript
from src.pipeline_config import NoteFormat, PipelineConfig, ProcessingStage

logger = logging.getLogger(__name__)

StatusCallback = Callable[[ProcessingStatus], None]

STAGES: tuple[ProcessingStatus, ...] = (
    ProcessingStatus(ProcessingStage.ANALYZING, 20, "Analyzing transcript content..."),
    ProcessingStatus(ProcessingStage.EXTRACTING, 45, "Extracting key information..."),
    ProcessingStatus(ProcessingStage.STRUCTURING, 70, "Structuring notes..."),
    ProcessingStatus(ProcessingStage.FINALIZING, 90, "Finalizing output..."),
    ProcessingStatus(ProcessingStage.COMPLETE, 100, "Notes generated successfully!"),
)


def _ignore_status(status: ProcessingStatus) -> None:
    return None


async def process_transcript(
    transcript: Transcript,
    note_format: str | NoteFormat = NoteFormat.SUMMARY,
    on_status: StatusCallback | None = None,
    config: PipelineConfig | None = None,
    rng: random.Random | None = None,
) -> GeneratedNotes:
    """Report the five processing stages, then generate notes.

    The pause after each stage is cosmetic; the default config uses none.
    There is no cancellation: a caller that abandons the run should simply
    ignore the result.

    Args:
        transcript: Source transcript.
        note_format: Target format (string or enum).
        on_status: Optional observer receiving each ProcessingStatus in order.
        config: Pacing window; defaults to no delay.
        rng: Random source for the pacing delay.

    Returns:
        The generated notes.
    """
    # Validate before any progress is reported
    note_format = NoteFormat(note_format)
    cfg = config or PipelineConfig()
    notify = on_status or _ignore_status

    for status in STAGES:
        notify(status)
        delay = cfg.pacing_delay(rng)
        if delay:
            await asyncio.sleep(delay)

    logger.debug("Processing stages complete for transcript %s", transcript.id)
    return generate_notes(transcript, note_format)
