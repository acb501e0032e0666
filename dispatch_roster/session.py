"""
In-memory roster session.

Holds the recipient, the deputy and the editable unit list between an
extraction and the report. This is the only mutable state; the parsing
and rendering functions receive it as plain arguments.
"""

import copy
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from dispatch_roster.config import LOCATIONS, RosterConfig
from dispatch_roster.pipeline import ExtractionOutcome, ExtractionResult
from dispatch_roster.report import render_report
from dispatch_roster.roster import UnitRecord, UnitStatus

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "code", "status", "location")


@dataclass
class RosterSession:
    """Editable roster state for one hand-over."""
    recipient: str = ""
    deputy: str = ""
    units: list[UnitRecord] = field(default_factory=list)
    locations: tuple[str, ...] = LOCATIONS

    @classmethod
    def from_config(cls, config: Optional[RosterConfig] = None) -> "RosterSession":
        config = config or RosterConfig()
        return cls(
            recipient=config.recipient or "",
            deputy=config.deputy or "",
            locations=config.locations,
        )

    def apply_extraction(self, result: ExtractionResult) -> bool:
        """
        Replace the unit list with an extraction's units.

        A failed extraction leaves the list untouched. An empty one
        clears it.

        Returns:
            True if the unit list was replaced.
        """
        if result.outcome is ExtractionOutcome.FAILED:
            logger.warning("Extraction failed, keeping %d units", len(self.units))
            return False
        self.units = list(result.units)
        return True

    def add_unit(self) -> UnitRecord:
        """Append a new blank in-field row and return it."""
        unit = UnitRecord()
        self.units.append(unit)
        return unit

    def update_unit(self, index: int, **changes) -> UnitRecord:
        """
        Edit fields of one row. All changes are checked before any is
        applied, so a rejected edit leaves the row as it was.

        Raises:
            IndexError: If no row exists at index.
            ValueError: For unknown fields, status labels or locations.
        """
        unit = self.units[index]
        validated = {}
        for name, value in changes.items():
            if name not in EDITABLE_FIELDS:
                raise ValueError(f"Unknown unit field: {name!r}")
            if name == "status":
                value = UnitStatus.from_label(value)
            elif name == "location" and value not in self.locations:
                raise ValueError(f"Unknown location: {value!r}")
            validated[name] = value

        for name, value in validated.items():
            setattr(unit, name, value)
        return unit

    def remove_unit(self, index: int) -> UnitRecord:
        return self.units.pop(index)

    def generate_report(self) -> str:
        """Render the report from a snapshot of the current state."""
        return render_report(self.recipient, self.deputy, copy.deepcopy(self.units))

    def save_units(self, path: Union[str, Path]) -> None:
        """Write the unit list as a JSON array."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump([u.to_dict() for u in self.units], f, ensure_ascii=False, indent=2)
        logger.info("Saved %d units to: %s", len(self.units), path)

    def load_units(self, path: Union[str, Path]) -> None:
        """Replace the unit list with the contents of a JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"Expected a JSON array of units in {path}")
        units = []
        for i, item in enumerate(data):
            if not isinstance(item, dict):
                raise ValueError(f"Unit {i} in {path} is not a JSON object")
            units.append(UnitRecord.from_dict(item))
        self.units = units
        logger.info("Loaded %d units from: %s", len(self.units), path)
