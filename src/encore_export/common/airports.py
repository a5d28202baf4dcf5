"""
Module: airports

Purpose:
    IATA airport directory used to show flight times in each airport's
    local timezone. Loaded from the airports.json shape (a dict keyed by
    ICAO code, or a plain list of airport records) and passed explicitly
    to whoever needs it.

Key Classes:
    - Airport: One airport record
    - AirportDirectory: IATA lookup

Dependencies:
    - json (std)

Used By:
    - export.layout.composer: Flight cards
    - export.session: Shared directory per session
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Airport:
    """
    Airport record (immutable).

    Attributes:
        iata: Three-letter IATA code, e.g. "LHR"
        name: Airport name
        city: City served
        country: ISO country code
        tz: IANA timezone name, e.g. "Europe/London"
        icao: Optional ICAO code
    """

    iata: str
    name: str
    city: str
    country: str
    tz: str
    icao: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Airport":
        return cls(
            iata=str(data.get("iata", "")).upper(),
            name=data.get("name", ""),
            city=data.get("city", ""),
            country=data.get("country", ""),
            tz=data.get("tz", ""),
            icao=data.get("icao") or None,
        )


class AirportDirectory:
    """
    Lookup of airports by IATA code.

    Records without an IATA code are ignored. Lookups are case-insensitive.

    Example:
        >>> airports = AirportDirectory([Airport("LHR", "Heathrow", "London", "GB", "Europe/London")])
        >>> airports.timezone_for("lhr")
        'Europe/London'
    """

    def __init__(self, airports: Iterable[Airport] = ()):
        self._by_iata: dict[str, Airport] = {}
        for airport in airports:
            if airport.iata:
                self._by_iata[airport.iata.upper()] = airport

    def __len__(self) -> int:
        return len(self._by_iata)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and code.upper() in self._by_iata

    def get(self, iata: Optional[str]) -> Optional[Airport]:
        if not iata:
            return None
        return self._by_iata.get(iata.strip().upper())

    def timezone_for(self, iata: Optional[str]) -> Optional[str]:
        """IANA timezone for an airport, or None when unknown."""
        airport = self.get(iata)
        if airport is None or not airport.tz:
            return None
        return airport.tz

    @classmethod
    def from_data(cls, data: Any) -> "AirportDirectory":
        """
        Build a directory from parsed airports.json content.

        Args:
            data: Dict keyed by ICAO code, or list of airport dicts

        Raises:
            ValueError: If data is neither a dict nor a list
        """
        if isinstance(data, dict):
            records = data.values()
        elif isinstance(data, list):
            records = data
        else:
            raise ValueError(f"Unsupported airport data: {type(data).__name__}")
        return cls(Airport.from_dict(r) for r in records if isinstance(r, dict))

    @classmethod
    def from_json(cls, path: Path) -> "AirportDirectory":
        """
        Load a directory from an airports.json file.

        Raises:
            OSError: If the file cannot be read
            ValueError: If the content is not valid airport JSON
        """
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
        directory = cls.from_data(data)
        logger.info(f"Loaded {len(directory)} airports from {path}")
        return directory
