"""DOCX text extraction via python-docx."""

from __future__ import annotations

import io
import logging
import re
import zipfile

import docx
from docx.document import Document as DocxDocument
from docx.opc.exceptions import PackageNotFoundError
from lxml import etree

from src.config import settings
from src.extraction.models import ExtractionError, ProgressCallback, ProgressReporter
from src.pipeline_config import PipelineConfig

logger = logging.getLogger(__name__)

# Compound File Binary header used by legacy Word 97-2003 .doc files.
OLE_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"

MIN_DOCX_TEXT_CHARS = 10

UNSUPPORTED_FORMAT_MESSAGE = (
    "This DOC format is not supported. Please try converting to DOCX format or use a "
    "different file."
)

_BLANK_LINES_RE = re.compile(r"\n\s*\n")


def _raw_text(document: DocxDocument) -> str:
    """Collect paragraph text from the body, then from table cells."""
    paragraphs = [p.text for p in document.paragraphs]
    for table in document.tables:
        for row in table.rows:
            for cell in row.cells:
                paragraphs.extend(p.text for p in cell.paragraphs)
    return "\n\n".join(paragraphs)


def extract_docx_text(
    data: bytes,
    on_progress: ProgressCallback | None = None,
    *,
    config: PipelineConfig | None = None,
) -> str:
    """Extract raw paragraph text from a DOCX payload.

    Args:
        data: Raw DOCX bytes.
        on_progress: Optional ``(percent, message)`` callback.
        config: Size limits; defaults to the application settings.

    Returns:
        Text with normalized line endings and single blank lines.

    Raises:
        ExtractionError: If the file is too large, is a legacy ``.doc``, is not a
            Word document, or contains no readable text.
    """
    cfg = config or PipelineConfig.from_settings(settings)
    report = ProgressReporter(on_progress)

    report(10, "Reading DOCX file...")
    if len(data) > cfg.max_office_bytes:
        limit_mb = cfg.max_office_bytes // (1024 * 1024)
        raise ExtractionError(
            f"DOCX file is too large. Please use a file smaller than {limit_mb}MB."
        )
    if data.startswith(OLE_SIGNATURE):
        raise ExtractionError(UNSUPPORTED_FORMAT_MESSAGE)

    report(30, "Processing document structure...")
    try:
        document = docx.Document(io.BytesIO(data))
    except (zipfile.BadZipFile, PackageNotFoundError) as exc:
        raise ExtractionError(UNSUPPORTED_FORMAT_MESSAGE) from exc
    except (KeyError, ValueError, etree.XMLSyntaxError) as exc:
        # A zip archive, but not a well-formed WordprocessingML package.
        raise ExtractionError(
            "The document appears to be corrupted or is not a valid Word file."
        ) from exc

    report(60, "Extracting text content...")
    raw = _raw_text(document)

    report(90, "Cleaning up text...")
    text = raw.replace("\r\n", "\n")
    text = _BLANK_LINES_RE.sub("\n\n", text).strip()

    if len(text) < MIN_DOCX_TEXT_CHARS:
        raise ExtractionError(
            "No readable text found in the document. The file may be empty or corrupted."
        )

    logger.info("Extracted %d characters from DOCX", len(text))
    report(100, "DOCX processing completed successfully!")
    return text
