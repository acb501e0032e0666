"""
Roster subsystem: unit records, code normalization, parsing and dedup.
"""

from dispatch_roster.ocr.cleaner import clean_transcript
from dispatch_roster.roster.codes import normalize_code
from dispatch_roster.roster.dedup import dedup
from dispatch_roster.roster.models import UnitRecord, UnitStatus
from dispatch_roster.roster.parser import parse_line, parse_lines


def parse_transcript(text: str) -> list[UnitRecord]:
    """Clean, parse and deduplicate a raw OCR transcript."""
    return dedup(parse_lines(clean_transcript(text)))


__all__ = [
    "UnitRecord",
    "UnitStatus",
    "normalize_code",
    "parse_line",
    "parse_lines",
    "parse_transcript",
    "dedup",
]
