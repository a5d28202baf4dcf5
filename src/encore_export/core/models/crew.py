"""
Module: crew

Purpose:
    Touring party member as seen by the export pipeline.

Key Classes:
    - CrewMember: Name, roles and contact email
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class CrewMember:
    """
    Crew member on a tour (immutable).

    Attributes:
        id: Crew document identifier (referenced by passengers and rooms)
        tour_id: Owning tour
        name: Display name
        roles: Role titles like ("Tour Manager", "FOH")
        email: Optional contact email
    """

    id: str
    tour_id: str
    name: str
    roles: tuple[str, ...] = ()
    email: Optional[str] = None

    @property
    def role_label(self) -> str:
        """Roles joined for display."""
        return ", ".join(self.roles)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "tourId": self.tour_id,
            "name": self.name,
            "roles": list(self.roles),
            "email": self.email,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CrewMember":
        return cls(
            id=str(data["id"]),
            tour_id=str(data.get("tourId", "")),
            name=data["name"],
            roles=tuple(data.get("roles") or ()),
            email=data.get("email") or None,
        )
