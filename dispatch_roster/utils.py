"""
Utility functions for the dispatch roster pipeline.
"""

import logging
import re

# Arabic block as matched by the roster cleaner and parser
ARABIC_RANGE = r"\u0600-\u06FF"

_arabic_char = re.compile(f'[{ARABIC_RANGE}]')
_latin_alnum = re.compile(r'[A-Za-z0-9]')


def setup_logging(level: int = logging.INFO) -> None:
    """Configure logging for the pipeline."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(name)-30s | %(levelname)-7s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def has_arabic(text: str) -> bool:
    """Check if text contains at least one character of the Arabic block."""
    return bool(_arabic_char.search(text or ""))


def has_latin_or_digit(text: str) -> bool:
    """Check if text contains at least one ASCII letter or digit."""
    return bool(_latin_alnum.search(text or ""))
