"""
Country -> state -> region lookups used for navigation and breadcrumbs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from .holiday import Country, CountryInfo, Subdivision
from .providers import HolidaySource
from .utils import _norm_code, name_sort_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Breadcrumb:
    level: str  # "country", "state" or "region"
    code: str
    name: str


def _unique(entries: Iterable[Subdivision], scope: str) -> List[Subdivision]:
    """Keep the first entry for each code, preserving order."""
    seen = set()
    out: List[Subdivision] = []
    for entry in entries:
        if entry.code in seen:
            logger.warning("Duplicate subdivision code %r under %s, keeping the first one", entry.code, scope)
            continue
        seen.add(entry.code)
        out.append(entry)
    return out


def _find_name(entries: Iterable, code: str) -> Optional[str]:
    code = _norm_code(code)
    for entry in entries:
        if entry.code.upper() == code:
            return entry.name
    return None


def _find_code(entries: Iterable, name: str) -> Optional[str]:
    key = name_sort_key(name)
    for entry in entries:
        if name_sort_key(entry.name) == key:
            return entry.code
    return None


class GeoHierarchy:
    """
    Geographic hierarchy resolver.

    Subdivisions are delegated to whichever source serves the country, so a remotely-sourced
    country gets its static state table and every other country the rule tables. Entries keep the
    source order (no alphabetical re-sorting) and codes are unique among siblings.

    Usage:
        geo = hub.geo
        geo.states("DE")                        # [Subdivision("BB", "Brandenburg"), ...]
        geo.state_code("IN", "delhi")           # "DL"
        geo.breadcrumbs(CountryInfo("US", "CA"))
    """

    def __init__(self, resolve_source: Callable[[str], HolidaySource], list_countries: Callable[[], List[Country]]):
        self._resolve_source = resolve_source
        self._list_countries = list_countries

    # ---------- listings
    def countries(self) -> List[Country]:
        return self._list_countries()

    def states(self, country_code: str) -> List[Subdivision]:
        code = _norm_code(country_code)
        return _unique(self._resolve_source(code).list_states(code), code)

    def regions(self, country_code: str, state_code: str) -> List[Subdivision]:
        code = _norm_code(country_code)
        state = _norm_code(state_code)
        return _unique(self._resolve_source(code).list_regions(code, state), f"{code}-{state}")

    # ---------- code -> name
    def country_name(self, country_code: str) -> Optional[str]:
        return _find_name(self.countries(), country_code)

    def state_name(self, country_code: str, state_code: str) -> Optional[str]:
        return _find_name(self.states(country_code), state_code)

    def region_name(self, country_code: str, state_code: str, region_code: str) -> Optional[str]:
        return _find_name(self.regions(country_code, state_code), region_code)

    # ---------- name -> code
    def country_code(self, name: str) -> Optional[str]:
        return _find_code(self.countries(), name)

    def state_code(self, country_code: str, name: str) -> Optional[str]:
        return _find_code(self.states(country_code), name)

    def region_code(self, country_code: str, state_code: str, name: str) -> Optional[str]:
        return _find_code(self.regions(country_code, state_code), name)

    # ---------- navigation
    def breadcrumbs(self, scope: CountryInfo) -> List[Breadcrumb]:
        """
        Trail from the country down to the most specific level of ``scope``.

        Unknown codes are kept, displayed by their code.
        """
        trail = [Breadcrumb("country", scope.country, self.country_name(scope.country) or scope.country)]
        if scope.state:
            name = self.state_name(scope.country, scope.state) or scope.state
            trail.append(Breadcrumb("state", scope.state, name))
        if scope.region:
            name = self.region_name(scope.country, scope.state, scope.region) or scope.region
            trail.append(Breadcrumb("region", scope.region, name))
        return trail
