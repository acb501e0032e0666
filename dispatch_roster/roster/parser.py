"""
Roster line parsing.

Turns cleaned OCR lines into unit records. Each line is classified on
its own: either it yields a record or it is skipped as noise.
"""

import logging
from typing import Iterable, Optional

from dispatch_roster.roster.codes import is_canonical_code, normalize_code
from dispatch_roster.roster.models import UnitRecord, UnitStatus
from dispatch_roster.utils import has_arabic, has_latin_or_digit

logger = logging.getLogger(__name__)

# Status keywords, checked in order; first hit wins
STATUS_KEYWORDS: tuple[tuple[str, UnitStatus], ...] = (
    ("مشغول", UnitStatus.BUSY),
    ("خارج", UnitStatus.OUT_OF_SERVICE),
)


def infer_status(line: str) -> UnitStatus:
    """Infer a unit status from keywords in the line, defaulting to in-field."""
    lowered = line.lower()
    for keyword, status in STATUS_KEYWORDS:
        if keyword in lowered:
            return status
    return UnitStatus.IN_FIELD


def parse_line(line: str) -> Optional[UnitRecord]:
    """
    Classify one cleaned line.

    Returns:
        A UnitRecord, or None when the line carries neither Arabic
        nor Latin letters/digits.
    """
    if not has_arabic(line) and not has_latin_or_digit(line):
        return None

    token = line.split(" ")[0]
    code = normalize_code(token)
    # Only the first occurrence of the token is removed
    name = line.replace(token, "", 1).strip()

    if code and not is_canonical_code(code):
        logger.debug("Keeping non-canonical code %r from line %r", code, line)

    return UnitRecord(
        name=name,
        code=code,
        status=infer_status(line),
        location="",
    )


def parse_lines(lines: Iterable[str]) -> list[UnitRecord]:
    """Parse cleaned lines into unit records, preserving line order."""
    records = [record for record in map(parse_line, lines) if record is not None]
    logger.info("Parsed %d unit records", len(records))
    return records
