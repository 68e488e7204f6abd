"""
holiday_hub

Unified holiday lookups over two kinds of sources:
  - countries (ISO like FR, US, DE...) via the rule tables of the holidays package,
    with state / region scoping
  - specially-sourced countries (currently IN) via the Calendarific REST API

Install:
  pip install holiday-hub

Notes:
  - Every operation is async and total: source failures degrade to an empty (or partial)
    list. Use HolidayHub.fetch() to see why a list came back empty.
  - Remote countries have no subdivision data: state/region scoping is ignored for them.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Dict, List, Optional, Union

from .config import Settings, settings as default_settings
from .errors import (
    CalendarError,
    ConfigError,
    NetworkError,
    ParseError,
    UnknownCountryError,
    UnknownSubdivisionError,
    UpstreamError,
)
from .gateway import CalendarificGateway, RemoteHolidayRecord
from .hierarchy import Breadcrumb, GeoHierarchy
from .holiday import Country, CountryInfo, Holiday, HolidayResult, HolidayType, SourceFailure, Subdivision
from .mapping import INDIA, INDIA_STATES, SOURCE_CODES, SourceKind, select_source
from .providers import HolidaySource, RemoteCalendarSource, RuleBasedSource
from .summary import group_by_month, holiday_type_counts, sort_holidays, upcoming_holidays
from .utils import _norm_code, name_sort_key

logger = logging.getLogger(__name__)

ScopeLike = Union[CountryInfo, str]


def _to_scope(scope: ScopeLike) -> CountryInfo:
    return scope if isinstance(scope, CountryInfo) else CountryInfo.parse(scope)


def _current_year() -> int:
    return dt.datetime.now(dt.timezone.utc).year


# =========================
# HolidayHub (final class)
# =========================
class HolidayHub:
    """
    Final façade class: the aggregation router.

    Usage:
        hub = HolidayHub.default()

        await hub.get_public_holidays(2026, CountryInfo("FR"))
        await hub.get_all_holidays(2026, CountryInfo("DE", "BY"))
        await hub.get_public_holidays(2026, "IN")        # Calendarific
        await hub.list_states("IN")
    """

    def __init__(self, rule_based: HolidaySource, special_sources: Optional[Dict[str, HolidaySource]] = None):
        self._rules = rule_based
        self._special = {_norm_code(k): v for k, v in (special_sources or {}).items()}
        self.geo = GeoHierarchy(self._resolve, self._countries)

    # ---------- factories
    @classmethod
    def default(cls, settings: Optional[Settings] = None) -> "HolidayHub":
        """
        Builds the default wiring:
          - every country registered REMOTE in SOURCE_CODES gets a Calendarific source
          - everything else goes to the rule tables
        """
        settings = settings or default_settings
        special: Dict[str, HolidaySource] = {}
        for code, (kind, country, states) in SOURCE_CODES.items():
            if kind is not SourceKind.REMOTE:
                continue
            gateway = CalendarificGateway(
                api_key=settings.CALENDARIFIC_API_KEY,
                base_url=settings.CALENDARIFIC_BASE_URL,
                country=code,
            )
            special[code] = RemoteCalendarSource(gateway, country, states)
        return cls(RuleBasedSource(language=settings.HOLIDAY_LANGUAGE), special)

    # ---------- holidays
    async def fetch(self, year: Optional[int], scope: ScopeLike, all_types: bool = False) -> HolidayResult:
        """
        Holidays of ``scope`` for ``year`` together with the failures met along the way.

        Never raises for a well-formed scope; an invalid scope string raises ValueError.
        """
        scope = _to_scope(scope)
        year = _current_year() if year is None else year
        source = self._resolve(scope.country)
        try:
            result = await source.holidays(year, scope, all_types)
        except Exception as e:
            logger.exception("Unexpected failure in source %s for %s/%s", source.name, scope, year)
            return HolidayResult(failures=(SourceFailure.from_exception(source.name, scope.country, year, e),))
        return HolidayResult(holidays=sort_holidays(result.holidays), failures=result.failures)

    async def get_public_holidays(self, year: Optional[int], scope: ScopeLike) -> List[Holiday]:
        result = await self.fetch(year, scope, all_types=False)
        return list(result.holidays)

    async def get_all_holidays(self, year: Optional[int], scope: ScopeLike) -> List[Holiday]:
        """All holiday types the source knows about (bank, school, optional, observances...)."""
        result = await self.fetch(year, scope, all_types=True)
        return list(result.holidays)

    # ---------- hierarchy
    async def list_available_countries(self) -> List[Country]:
        return self._countries()

    async def list_states(self, country_code: str) -> List[Subdivision]:
        return self._guarded(lambda: self.geo.states(country_code), country_code)

    async def list_regions(self, country_code: str, state_code: str) -> List[Subdivision]:
        return self._guarded(lambda: self.geo.regions(country_code, state_code), country_code)

    # ---------- internal
    def _resolve(self, country_code: str) -> HolidaySource:
        code = _norm_code(country_code)
        if code in self._special:
            return self._special[code]
        if select_source(code) is SourceKind.REMOTE:
            logger.warning("No source wired for remote country %s, using rule tables", code)
        return self._rules

    def _countries(self) -> List[Country]:
        # Specially-sourced countries replace whatever the rule tables say about them
        countries = [c for c in self._rules.list_countries() if c.code not in self._special]
        for source in self._special.values():
            countries.extend(source.list_countries())
        return sorted(countries, key=lambda c: name_sort_key(c.name))

    def _guarded(self, listing, country_code: str) -> List[Subdivision]:
        try:
            return listing()
        except Exception:
            logger.exception("Unexpected failure listing subdivisions of %r", country_code)
            return []


__all__ = [
    "Breadcrumb",
    "CalendarError",
    "CalendarificGateway",
    "ConfigError",
    "Country",
    "CountryInfo",
    "GeoHierarchy",
    "Holiday",
    "HolidayHub",
    "HolidayResult",
    "HolidaySource",
    "HolidayType",
    "INDIA",
    "INDIA_STATES",
    "NetworkError",
    "ParseError",
    "RemoteCalendarSource",
    "RemoteHolidayRecord",
    "RuleBasedSource",
    "SOURCE_CODES",
    "Settings",
    "SourceFailure",
    "SourceKind",
    "Subdivision",
    "UnknownCountryError",
    "UnknownSubdivisionError",
    "UpstreamError",
    "group_by_month",
    "holiday_type_counts",
    "name_sort_key",
    "select_source",
    "sort_holidays",
    "upcoming_holidays",
]
