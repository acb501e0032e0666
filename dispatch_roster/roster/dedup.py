"""
Duplicate removal for parsed roster records.
"""

import logging
from typing import Iterable

from dispatch_roster.roster.models import UnitRecord

logger = logging.getLogger(__name__)


def record_key(record: UnitRecord) -> str:
    return f"{record.code}|{record.name}".strip()


def dedup(records: Iterable[UnitRecord]) -> list[UnitRecord]:
    """
    Keep the first record per (code, name) key.

    Order of the kept records is the order they were first seen.
    """
    seen: set[str] = set()
    unique = []
    total = 0
    for record in records:
        total += 1
        key = record_key(record)
        if key in seen:
            continue
        seen.add(key)
        unique.append(record)

    if total != len(unique):
        logger.info("Dropped %d duplicate records", total - len(unique))
    return unique
