"""PPTX text extraction straight from the slide XML parts of the archive."""

from __future__ import annotations

import html
import io
import logging
import re
import zipfile
import zlib

from src.config import settings
from src.extraction.models import ExtractionError, ProgressCallback, ProgressReporter
from src.pipeline_config import PipelineConfig

logger = logging.getLogger(__name__)

MIN_PPTX_TEXT_CHARS = 10

_SLIDE_PART_RE = re.compile(r"^ppt/slides/slide(\d+)\.xml$")
_TEXT_RUN_RE = re.compile(r"<a:t[^>]*>([^<]*)</a:t>")
_TAG_RE = re.compile(r"<[^>]*>")
_EXTRA_BLANK_LINES_RE = re.compile(r"\n\s*\n\s*\n")


def _slide_parts(archive: zipfile.ZipFile) -> list[str]:
    """Return slide part names ordered by their slide number."""
    numbered: list[tuple[int, str]] = []
    for name in archive.namelist():
        match = _SLIDE_PART_RE.match(name)
        if match:
            numbered.append((int(match.group(1)), name))
    return [name for _, name in sorted(numbered)]


def _slide_runs(slide_xml: str) -> list[str] | None:
    """Return the text of every run on a slide, or None if it has no runs."""
    matches = list(_TEXT_RUN_RE.finditer(slide_xml))
    if not matches:
        return None
    runs: list[str] = []
    for match in matches:
        text = html.unescape(_TAG_RE.sub("", match.group(0))).strip()
        if text:
            runs.append(text)
    return runs


def extract_pptx_text(
    data: bytes,
    on_progress: ProgressCallback | None = None,
    *,
    config: PipelineConfig | None = None,
) -> str:
    """Extract slide text from a PPTX payload.

    Each slide with at least one text run gets a ``--- Slide N ---`` header,
    where ``N`` counts slides with content rather than the part's file index.

    Args:
        data: Raw PPTX bytes.
        on_progress: Optional ``(percent, message)`` callback.
        config: Size limits; defaults to the application settings.

    Returns:
        The slide text with at most one blank line between blocks.

    Raises:
        ExtractionError: If the file is too large, is not a valid archive, or
            contains no readable text.
    """
    cfg = config or PipelineConfig.from_settings(settings)
    report = ProgressReporter(on_progress)

    report(10, "Reading PPTX file...")
    if len(data) > cfg.max_office_bytes:
        limit_mb = cfg.max_office_bytes // (1024 * 1024)
        raise ExtractionError(
            f"PPTX file is too large. Please use a file smaller than {limit_mb}MB."
        )

    report(30, "Processing presentation structure...")
    try:
        archive = zipfile.ZipFile(io.BytesIO(data))
    except zipfile.BadZipFile as exc:
        raise ExtractionError(
            "The PPTX file appears to be corrupted or is not a valid PowerPoint file."
        ) from exc

    report(50, "Extracting slide content...")
    chunks: list[str] = []
    slide_count = 0

    with archive:
        parts = _slide_parts(archive)
        report(70, "Parsing slide text...")
        for part in parts:
            try:
                slide_xml = archive.read(part).decode("utf-8")
            except (
                zipfile.BadZipFile,
                zlib.error,
                UnicodeDecodeError,
                OSError,
                RuntimeError,
                NotImplementedError,
            ):
                logger.warning("Error processing slide %s; skipping", part, exc_info=True)
                continue

            runs = _slide_runs(slide_xml)
            if runs is None:
                continue

            slide_count += 1
            chunks.append(f"\n\n--- Slide {slide_count} ---\n\n")
            chunks.extend(f"{run}\n" for run in runs)

    report(90, "Cleaning up text...")
    text = _EXTRA_BLANK_LINES_RE.sub("\n\n", "".join(chunks)).strip()

    if len(text) < MIN_PPTX_TEXT_CHARS:
        raise ExtractionError(
            "No readable text found in the presentation. The file may be empty, corrupted, "
            "or contain only images."
        )

    logger.info("Extracted text from %d of %d slides", slide_count, len(parts))
    report(100, "PPTX processing completed successfully!")
    return text
