"""OCR fallback for PDF pages that carry no embedded text layer."""

from __future__ import annotations

import io
import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Protocol

import fitz  # PyMuPDF
import pytesseract
from PIL import Image

from src.config import settings
from src.extraction.models import ExtractionError

logger = logging.getLogger(__name__)

# Recognized page text shorter than this (after trimming) is treated as noise.
MIN_OCR_PAGE_CHARS = 10


class OcrEngine(Protocol):
    """A text-recognition engine held for the duration of one PDF extraction."""

    def recognize(self, image: Image.Image) -> str: ...

    def terminate(self) -> None: ...


OcrEngineFactory = Callable[[], OcrEngine]


class TesseractEngine:
    """OCR engine backed by the Tesseract binary through ``pytesseract``."""

    def __init__(self, language: str | None = None, tesseract_cmd: str | None = None) -> None:
        self.language = language or settings.ocr_language
        cmd = tesseract_cmd or settings.tesseract_cmd
        if cmd:
            pytesseract.pytesseract.tesseract_cmd = cmd
        # Fails fast with TesseractNotFoundError when the binary is missing.
        version = pytesseract.get_tesseract_version()
        logger.info("Tesseract %s ready (lang=%s)", version, self.language)

    def recognize(self, image: Image.Image) -> str:
        return str(pytesseract.image_to_string(image, lang=self.language))

    def terminate(self) -> None:
        # pytesseract spawns one process per call; nothing stays resident.
        logger.debug("Tesseract engine released")


@contextmanager
def ocr_session(factory: OcrEngineFactory | None = None) -> Iterator[OcrEngine]:
    """Acquire an OCR engine and guarantee it is terminated on every exit path.

    Raises:
        ExtractionError: If the engine cannot be initialised.
    """
    try:
        engine = (factory or TesseractEngine)()
    except Exception as exc:
        logger.exception("OCR engine initialisation failed")
        raise ExtractionError(
            "Failed to initialize OCR engine. Please try a different PDF or check that "
            "Tesseract is installed."
        ) from exc

    try:
        yield engine
    finally:
        engine.terminate()


def render_page(page: fitz.Page, zoom: float) -> Image.Image:
    """Rasterize a PDF page at *zoom* and return it as a PIL image."""
    pixmap = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom))
    return Image.open(io.BytesIO(pixmap.tobytes("png")))


def recognize_page(engine: OcrEngine, image: Image.Image) -> str:
    """Run recognition on one page raster, discarding noise-sized results."""
    text = engine.recognize(image).strip()
    if len(text) < MIN_OCR_PAGE_CHARS:
        return ""
    return text
