"""Shared types for the document text extractors."""

from __future__ import annotations

import re
from collections.abc import Callable

ProgressCallback = Callable[[int, str], None]

_INLINE_SPACE_RE = re.compile(r"[ \t\f\v\u00a0]+")
_BLANK_LINES_RE = re.compile(r"\n\s*\n")


class ExtractionError(Exception):
    """Raised when a file cannot be turned into usable plain text.

    The message is user-facing; there are no structured error codes.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def _ignore_progress(percent: int, message: str) -> None:
    return None


class ProgressReporter:
    """Forward ``(percent, message)`` updates to an optional callback.

    Percentages are rounded, clamped to 0..100 and never allowed to go
    backwards within one extraction call.
    """

    def __init__(self, callback: ProgressCallback | None = None) -> None:
        self._callback = callback or _ignore_progress
        self.last = 0

    def __call__(self, percent: float, message: str) -> None:
        value = max(self.last, min(100, int(round(percent))))
        self.last = value
        self._callback(value, message)


def normalize_whitespace(text: str) -> str:
    """Collapse runs of inline whitespace and multiple blank lines."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _INLINE_SPACE_RE.sub(" ", text)
    text = _BLANK_LINES_RE.sub("\n\n", text)
    return text.strip()
