"""
Roster data structures: unit status and unit records.
"""

from dataclasses import dataclass
from enum import Enum


class UnitStatus(Enum):
    """Unit availability, valued by the Arabic label shown to the editor."""
    IN_FIELD = "في الميدان"
    BUSY = "مشغول"
    OUT_OF_SERVICE = "خارج الخدمة"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def from_label(cls, label: "str | UnitStatus") -> "UnitStatus":
        """Resolve an Arabic label or an enum member name to a status."""
        if isinstance(label, cls):
            return label
        for status in cls:
            if label == status.value or label == status.name:
                return status
        raise ValueError(f"Unknown unit status: {label!r}")


@dataclass
class UnitRecord:
    """One roster entry (ambulance or team)."""
    name: str = ""
    code: str = ""
    status: UnitStatus = UnitStatus.IN_FIELD
    location: str = ""

    @property
    def is_blank(self) -> bool:
        return not self.name.strip() and not self.code.strip()

    def to_dict(self) -> dict:
        """Convert to a serializable dictionary."""
        return {
            "name": self.name,
            "code": self.code,
            "status": self.status.label,
            "location": self.location,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UnitRecord":
        """
        Build a record from a saved unit entry.

        Missing fields take their defaults; scalar values are stored as text.

        Raises:
            ValueError: If data is not a mapping, a field holds a list or
                object, or the status label is unknown.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected a unit object, got {type(data).__name__}")
        return cls(
            name=_as_text(data, "name"),
            code=_as_text(data, "code"),
            status=UnitStatus.from_label(data.get("status") or UnitStatus.IN_FIELD),
            location=_as_text(data, "location"),
        )


def _as_text(data: dict, key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise ValueError(f"Unit field {key!r} must be text, got {type(value).__name__}")
    return str(value)
