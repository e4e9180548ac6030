"""PDF text extraction: embedded text layer first, OCR only as a fallback."""

from __future__ import annotations

import logging

import fitz  # PyMuPDF

from src.config import settings
from src.extraction.models import (
    ExtractionError,
    ProgressCallback,
    ProgressReporter,
    normalize_whitespace,
)
from src.extraction.ocr import OcrEngineFactory, ocr_session, recognize_page, render_page
from src.pipeline_config import PipelineConfig

logger = logging.getLogger(__name__)

PDF_SIGNATURE = b"%PDF"

# Page text must be longer than this to count as selectable text.
MIN_PAGE_TEXT_CHARS = 10
# Total selectable text above this skips OCR entirely.
MIN_TEXT_LAYER_CHARS = 100
# Combined text (layer + OCR) below this is a failure.
MIN_COMBINED_CHARS = 50


def _page_text(page: fitz.Page) -> str:
    """Join the positioned words of a page's text layer with single spaces."""
    words = page.get_text("words")
    return " ".join(w[4].strip() for w in words if isinstance(w[4], str) and w[4].strip())


def _validate(data: bytes, max_bytes: int) -> None:
    if len(data) > max_bytes:
        limit_mb = max_bytes // (1024 * 1024)
        raise ExtractionError(
            f"PDF file is too large. Please use a file smaller than {limit_mb}MB."
        )
    if PDF_SIGNATURE not in data[:1024]:
        raise ExtractionError("Invalid PDF file")


def _open_document(data: bytes) -> fitz.Document:
    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except (RuntimeError, ValueError) as exc:
        raise ExtractionError(
            "Failed to load PDF. The file may be corrupted or password-protected."
        ) from exc
    if doc.needs_pass:
        doc.close()
        raise ExtractionError(
            "Failed to load PDF. The file may be corrupted or password-protected."
        )
    return doc


def extract_pdf_text(
    data: bytes,
    on_progress: ProgressCallback | None = None,
    *,
    ocr_engine_factory: OcrEngineFactory | None = None,
    config: PipelineConfig | None = None,
) -> str:
    """Extract plain text from a PDF payload.

    The embedded text layer is read from every page.  When it yields more
    than ``MIN_TEXT_LAYER_CHARS`` characters the text is returned straight
    away; otherwise the first ``config.ocr_max_pages`` pages are rasterized
    and run through OCR.

    Args:
        data: Raw PDF bytes.
        on_progress: Optional ``(percent, message)`` callback.
        ocr_engine_factory: Builds the OCR engine; defaults to Tesseract.
        config: Size and OCR limits; defaults to the application settings.

    Returns:
        The extracted, whitespace-normalized text.

    Raises:
        ExtractionError: On oversize or invalid input, an unreadable document,
            OCR failure, or when no meaningful text could be recovered.
    """
    cfg = config or PipelineConfig.from_settings(settings)
    report = ProgressReporter(on_progress)

    report(5, "Initializing PDF processor...")
    _validate(data, cfg.max_pdf_bytes)

    report(10, "Loading PDF document...")
    with _open_document(data) as doc:
        page_count = doc.page_count
        report(20, f"Processing {page_count} pages...")

        page_texts: list[str] = []
        has_selectable_text = False
        total_text_length = 0

        for index in range(page_count):
            page_num = index + 1
            try:
                text = _page_text(doc.load_page(index))
            except Exception:
                logger.warning("Error processing page %d; skipping", page_num, exc_info=True)
                continue

            if len(text) > MIN_PAGE_TEXT_CHARS:
                has_selectable_text = True
                page_texts.append(text)
                total_text_length += len(text)

            report(20 + (page_num / page_count) * 30, f"Extracting text from page {page_num}...")

        full_text = normalize_whitespace("\n\n".join(page_texts))

        if has_selectable_text and total_text_length > MIN_TEXT_LAYER_CHARS:
            report(100, "Text extraction completed successfully!")
            return full_text

        logger.info(
            "PDF text layer too small (%d chars over %d pages); falling back to OCR",
            total_text_length,
            page_count,
        )
        report(60, "No selectable text found. Initializing OCR...")
        ocr_text = _run_ocr(doc, cfg, report, ocr_engine_factory)

    combined = (full_text + "\n\n" + ocr_text).strip()
    if len(combined) < MIN_COMBINED_CHARS:
        raise ExtractionError(
            "Unable to extract meaningful text from this PDF. The document may contain only "
            "images, be encrypted, or be corrupted."
        )

    report(100, "PDF processing completed successfully!")
    return normalize_whitespace(combined)


def _run_ocr(
    doc: fitz.Document,
    cfg: PipelineConfig,
    report: ProgressReporter,
    factory: OcrEngineFactory | None,
) -> str:
    """OCR the first ``cfg.ocr_max_pages`` pages and join the non-noise results."""
    limit = min(doc.page_count, cfg.ocr_max_pages)
    pieces: list[str] = []

    with ocr_session(factory) as engine:
        for index in range(limit):
            page_num = index + 1
            report(60 + (page_num / limit) * 35, f"Processing page {page_num} with OCR...")
            try:
                image = render_page(doc.load_page(index), cfg.ocr_zoom)
                text = recognize_page(engine, image)
            except ExtractionError:
                raise
            except Exception as exc:
                raise ExtractionError(
                    f"OCR failed on page {page_num}. Please try a different PDF."
                ) from exc
            if text:
                pieces.append(text)

    return "\n\n".join(pieces)
