"""Entry point for turning an uploaded file into transcript text."""

from __future__ import annotations

import logging
from pathlib import PurePath

from src.extraction.docx_extractor import extract_docx_text
from src.extraction.models import ExtractionError, ProgressCallback, ProgressReporter
from src.extraction.pdf_extractor import extract_pdf_text
from src.extraction.pptx_extractor import extract_pptx_text
from src.pipeline_config import DocumentFormat, PipelineConfig

logger = logging.getLogger(__name__)

MIME_FORMATS: dict[str, DocumentFormat] = {
    "application/pdf": DocumentFormat.PDF,
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": DocumentFormat.DOCX,
    # Routed to the DOCX extractor so legacy files get the "convert to DOCX" message.
    "application/msword": DocumentFormat.DOCX,
    "application/vnd.openxmlformats-officedocument.presentationml.presentation": DocumentFormat.PPTX,
    "text/plain": DocumentFormat.TXT,
    "text/markdown": DocumentFormat.TXT,
    "text/x-markdown": DocumentFormat.TXT,
}

EXTENSION_FORMATS: dict[str, DocumentFormat] = {
    ".docx": DocumentFormat.DOCX,
    ".pptx": DocumentFormat.PPTX,
    ".txt": DocumentFormat.TXT,
    ".md": DocumentFormat.TXT,
}

# MIME types that say nothing about the content; fall back to the extension.
GENERIC_MIME_TYPES = {"", "application/octet-stream", "binary/octet-stream"}


def detect_format(mime_type: str | None, filename: str | None = None) -> DocumentFormat:
    """Resolve the document format from the declared MIME type or the file name.

    Args:
        mime_type: Declared MIME type of the upload (may be empty or generic).
        filename: Original file name, used when the MIME type is not conclusive.

    Returns:
        The detected format.

    Raises:
        ExtractionError: If neither the MIME type nor the extension is supported.
    """
    mime = (mime_type or "").split(";", 1)[0].strip().lower()
    if mime in MIME_FORMATS:
        return MIME_FORMATS[mime]

    if mime in GENERIC_MIME_TYPES and filename:
        suffix = PurePath(filename).suffix.lower()
        if suffix in EXTENSION_FORMATS:
            return EXTENSION_FORMATS[suffix]

    raise ExtractionError("Unsupported file type")


def _decode_text(data: bytes, on_progress: ProgressCallback | None) -> str:
    report = ProgressReporter(on_progress)
    report(50, "Reading text file...")
    text = data.decode("utf-8-sig", errors="replace")
    report(100, "Text file loaded successfully!")
    return text


def extract_text(
    data: bytes,
    document_format: DocumentFormat,
    on_progress: ProgressCallback | None = None,
    *,
    config: PipelineConfig | None = None,
) -> str:
    """Dispatch *data* to the extractor for *document_format*.

    TXT/MD payloads bypass structured extraction and are decoded as UTF-8.

    Raises:
        ExtractionError: Whatever the selected extractor raises.
    """
    match document_format:
        case DocumentFormat.PDF:
            return extract_pdf_text(data, on_progress, config=config)
        case DocumentFormat.DOCX:
            return extract_docx_text(data, on_progress, config=config)
        case DocumentFormat.PPTX:
            return extract_pptx_text(data, on_progress, config=config)
        case DocumentFormat.TXT:
            return _decode_text(data, on_progress)


def extract_upload(
    data: bytes,
    filename: str | None,
    mime_type: str | None,
    on_progress: ProgressCallback | None = None,
    *,
    config: PipelineConfig | None = None,
) -> str:
    """Detect the format of an uploaded file and extract its text."""
    document_format = detect_format(mime_type, filename)
    logger.info("Extracting %s upload %r (%d bytes)", document_format.value, filename, len(data))
    try:
        return extract_text(data, document_format, on_progress, config=config)
    except ExtractionError as exc:
        logger.warning("Extraction failed for %r: %s", filename, exc.message)
        raise


def title_from_filename(filename: str) -> str:
    """Strip the last extension from an uploaded file name."""
    name = PurePath(filename).name
    stem, dot, _ = name.rpartition(".")
    return stem if dot and stem else name
