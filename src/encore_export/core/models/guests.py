"""
Module: guests

Purpose:
    Guest list entries attached to a show.

Key Classes:
    - GuestListEntry: Named guest with a plus-N count and note
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class GuestListEntry:
    """
    Guest list entry (immutable).

    Attributes:
        id: Document identifier
        name: Guest name
        additional_guests: Number of extra guests (the "+N")
        note: Optional note like "Photo pass"
    """

    id: str
    name: str
    additional_guests: int = 0
    note: Optional[str] = None

    def __post_init__(self) -> None:
        if self.additional_guests < 0:
            raise ValueError(f"additional_guests cannot be negative: {self.additional_guests}")

    @property
    def plus_label(self) -> str:
        """Rendered "+N" cell, empty when there are no extra guests."""
        return f"+{self.additional_guests}" if self.additional_guests else ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "additionalGuests": self.additional_guests,
            "note": self.note,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GuestListEntry":
        return cls(
            id=str(data.get("id", "")),
            name=data["name"],
            additional_guests=_parse_count(data.get("additionalGuests")),
            note=data.get("note") or None,
        )


def _parse_count(raw: Any) -> int:
    """Parse a guest count stored as int or free text ("2", "+1", "")."""
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        return max(0, raw)
    text = str(raw).strip().lstrip("+")
    try:
        return max(0, int(text))
    except ValueError:
        return 0
