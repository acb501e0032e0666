"""
Dispatch Roster OCR & Report
============================

Turns a photo of an ambulance dispatch roster into a structured unit list
and renders the operations hand-over report.

Architecture:
    Image → Preprocessing → OCR (Arabic + Latin) → Line Cleaning
        → Roster Parsing → Deduplication → Editable Session → Report

Unit records:
    name, code (LETTERS-DIGITS), status (in field / busy / out of service),
    location (district)
"""

__version__ = "1.0.0"
__author__ = "Dispatch Roster"

from dispatch_roster.config import RosterConfig
from dispatch_roster.report import ValidationError, render_report
from dispatch_roster.roster import UnitRecord, UnitStatus, parse_transcript


def __getattr__(name: str):
    """Lazy import for modules that require numpy/OCR backends."""
    if name == "RosterExtractor":
        from dispatch_roster.pipeline import RosterExtractor
        return RosterExtractor
    if name == "RosterSession":
        from dispatch_roster.session import RosterSession
        return RosterSession
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "RosterConfig",
    "RosterExtractor",
    "RosterSession",
    "UnitRecord",
    "UnitStatus",
    "ValidationError",
    "parse_transcript",
    "render_report",
]
