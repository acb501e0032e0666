"""
Line cleaning for raw roster OCR output.

Fixes common OCR noise in mixed Arabic/Latin roster lines:
- Bidirectional control marks left behind by the engine
- Stray symbols (quotes, brackets, copyright marks)
- Field separators in several scripts (pipe, Arabic comma, colon, bullets)
- Anything outside Arabic, ASCII letters and digits
"""

import logging
import re
from typing import Optional

from dispatch_roster.utils import ARABIC_RANGE

logger = logging.getLogger(__name__)


class LineCleaner:
    """
    Cleans a single OCR line down to Arabic, ASCII alphanumerics,
    hyphens and a canonical " | " field separator.

    Pipeline (order matters):
    1. Remove bidi marks and embedding/override controls
    2. Replace symbol noise with a space
    3. Map separator punctuation to " | "
    4. Purge every other disallowed character
    5. Collapse whitespace and trim
    """

    SEPARATOR = " | "

    def __init__(self):
        self._bidi_marks = re.compile(r'[\u200E\u200F\u202A-\u202E]')
        self._symbol_noise = re.compile(
            r'[\u00A9#@*+=~\^`"\u201C\u201D\'\u2019\[\]()<>]'
        )
        self._separators = re.compile(
            r'[|'
            r'\u060C'   # Arabic comma
            r':'
            r'\u061B'   # Arabic semicolon
            r'\u2022'   # bullet
            r'\u00B7'   # middle dot
            r']'
        )
        self._disallowed = re.compile(f'[^{ARABIC_RANGE}' r'0-9A-Za-z\-|\s]')
        self._whitespace = re.compile(r'\s+')

    def clean(self, line: Optional[str]) -> str:
        """
        Clean one raw OCR line.

        Args:
            line: Raw line as returned by the OCR engine, or None.

        Returns:
            The cleaned line, "" when nothing usable remains.
        """
        if not line:
            return ""

        line = self._bidi_marks.sub('', line)
        line = self._symbol_noise.sub(' ', line)
        # Separators must be mapped before the purge or they would be deleted
        line = self._separators.sub(self.SEPARATOR, line)
        line = self._disallowed.sub('', line)
        return self._whitespace.sub(' ', line).strip()

    def clean_transcript(self, text: Optional[str]) -> list[str]:
        """Split raw OCR text into lines, clean each, and drop empty ones."""
        if not text or not text.strip():
            return []

        raw_lines = re.split(r'\r?\n', text)
        lines = [cleaned for cleaned in map(self.clean, raw_lines) if cleaned]
        logger.debug("Cleaned %d raw lines into %d lines", len(raw_lines), len(lines))
        return lines


_default_cleaner = LineCleaner()


def clean_line(line: Optional[str]) -> str:
    """Clean one raw OCR line with the default cleaner."""
    return _default_cleaner.clean(line)


def clean_transcript(text: Optional[str]) -> list[str]:
    """Clean a multi-line OCR transcript with the default cleaner."""
    return _default_cleaner.clean_transcript(text)
