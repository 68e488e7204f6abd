from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .utils import _norm_code


class HolidayType(str, Enum):
    """
    Canonical holiday classification shared by every source.

    Any value a source produces outside this set is coerced to OBSERVANCE.
    """
    PUBLIC = "public"
    BANK = "bank"
    SCHOOL = "school"
    OPTIONAL = "optional"
    OBSERVANCE = "observance"

    @classmethod
    def coerce(cls, value: Any) -> "HolidayType":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.OBSERVANCE


@dataclass(frozen=True)
class Holiday:
    """
    Source-independent holiday entry.

    Attributes
    ----------
    name: str
        Human-readable name, never empty.
    date: dt.date
        Calendar date, no time-of-day.
    type: HolidayType
        Classification, see HolidayType.
    substitute: bool
        True when the entry is a compensatory day for a holiday falling on a weekend.
    description: Optional[str]
        Free text, when the source provides one.
    """
    name: str
    date: dt.date
    type: HolidayType = HolidayType.PUBLIC
    substitute: bool = False
    description: Optional[str] = None

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Holiday name must not be empty")
        if isinstance(self.date, dt.datetime):
            object.__setattr__(self, "date", self.date.date())
        object.__setattr__(self, "type", HolidayType.coerce(self.type))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "date": self.date.isoformat(),
            "type": self.type.value,
            "substitute": self.substitute,
            "description": self.description,
        }


@dataclass(frozen=True)
class CountryInfo:
    """
    Geographic scope of a query: country, optionally narrowed to a state and a region.

    Codes are stored trimmed and upper-cased; empty strings mean "not set".
    A region requires a state, a state requires a country.
    """
    country: str
    state: Optional[str] = None
    region: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "country", _norm_code(self.country))
        object.__setattr__(self, "state", _norm_code(self.state) or None)
        object.__setattr__(self, "region", _norm_code(self.region) or None)

        if self.region and not self.state:
            raise ValueError(f"Region {self.region!r} given without a state")
        if self.state and not self.country:
            raise ValueError(f"State {self.state!r} given without a country")
        if not self.country:
            raise ValueError("Country code is required")

    @classmethod
    def parse(cls, value: str) -> "CountryInfo":
        """
        Build a scope from a dash-joined code, e.g. "US", "US-CA" or "DE-BY-A".
        """
        parts = value.strip().split("-")
        if not parts or len(parts) > 3 or any(not p.strip() for p in parts):
            raise ValueError(f"Invalid scope string: {value!r}")
        return cls(*parts)

    @property
    def has_subdivision(self) -> bool:
        return self.state is not None

    def __str__(self) -> str:
        return "-".join(p for p in (self.country, self.state, self.region) if p)


@dataclass(frozen=True)
class Subdivision:
    code: str
    name: str

    def to_dict(self) -> Dict[str, str]:
        return {"code": self.code, "name": self.name}


@dataclass(frozen=True)
class Country:
    code: str
    name: str

    def to_dict(self) -> Dict[str, str]:
        return {"code": self.code, "name": self.name}


@dataclass(frozen=True)
class SourceFailure:
    """
    Diagnostic record describing why a source returned less than expected.

    Attributes
    ----------
    source: str
        Name of the source handler, e.g. "rules" or "calendarific:IN".
    country: str
        Country code of the failing query.
    year: Optional[int]
        Requested year, None for subdivision listings.
    error: str
        Exception class name (ConfigError, NetworkError...).
    message: str
        Human-readable detail.
    """
    source: str
    country: str
    year: Optional[int]
    error: str
    message: str

    @classmethod
    def from_exception(cls, source: str, country: str, year: Optional[int], exc: BaseException) -> "SourceFailure":
        return cls(source=source, country=country, year=year, error=type(exc).__name__, message=str(exc))


@dataclass(frozen=True)
class HolidayResult:
    holidays: Tuple[Holiday, ...] = ()
    failures: Tuple[SourceFailure, ...] = ()

    def __post_init__(self):
        if isinstance(self.holidays, list):
            object.__setattr__(self, "holidays", tuple(self.holidays))
        if isinstance(self.failures, list):
            object.__setattr__(self, "failures", tuple(self.failures))

    @property
    def ok(self) -> bool:
        return not self.failures
