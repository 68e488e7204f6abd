from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Dict, List, Optional, Tuple

import holidays
import pycountry
from holidays.constants import PUBLIC

from .errors import CalendarError, ConfigError, UnknownCountryError, UnknownSubdivisionError
from .gateway import CalendarificGateway
from .holiday import Country, CountryInfo, Holiday, HolidayResult, SourceFailure, Subdivision
from .normalizer import RuleHolidayRecord, normalize_remote_records, normalize_rule_based
from .utils import _norm_code

logger = logging.getLogger(__name__)


class HolidaySource(ABC):
    """
    Abstract base class for a holiday source: one backend able to produce holidays and
    subdivisions for the countries routed to it.

    ``holidays`` is total: source failures are reported in ``HolidayResult.failures``,
    never raised.
    """
    name: str = "source"

    @abstractmethod
    async def holidays(self, year: int, scope: CountryInfo, all_types: bool) -> HolidayResult:
        """
        Holidays of ``scope`` for ``year``.

        Parameters
        ----------
        year: int
            The calendar year.
        scope: CountryInfo
            Country, optionally narrowed to a state and a region.
        all_types: bool
            When False, only public holidays are returned.
        """
        pass

    @abstractmethod
    def list_countries(self) -> List[Country]:
        pass

    @abstractmethod
    def list_states(self, country_code: str) -> List[Subdivision]:
        pass

    @abstractmethod
    def list_regions(self, country_code: str, state_code: str) -> List[Subdivision]:
        pass


# =========================
# Rule tables (process-wide, read-only)
# =========================
@lru_cache(maxsize=None)
def _rule_tables() -> Dict[str, Tuple[str, ...]]:
    """Country code -> subdivision codes, as modeled by the holidays package."""
    supported = holidays.list_supported_countries(include_aliases=False)
    return {code.upper(): tuple(subdivs) for code, subdivs in supported.items()}


@lru_cache(maxsize=None)
def _country_class(code: str) -> type:
    return type(holidays.country_holidays(code))


@lru_cache(maxsize=None)
def _iso_country_name(code: str) -> Optional[str]:
    country = pycountry.countries.get(alpha_2=code)
    if country is None:
        return None
    return getattr(country, "common_name", None) or country.name


@lru_cache(maxsize=None)
def _iso_subdivision_name(code: str) -> Optional[str]:
    sub = pycountry.subdivisions.get(code=code)
    return sub.name if sub is not None else None


@lru_cache(maxsize=None)
def _iso_children() -> Dict[str, Tuple[Subdivision, ...]]:
    """ISO 3166-2 parent code (e.g. "ES-AN") -> child subdivisions, codes without the country prefix."""
    children: Dict[str, List[Subdivision]] = {}
    for sub in pycountry.subdivisions:
        parent = getattr(sub, "parent_code", None)
        if not parent:
            continue
        code = sub.code.split("-", 1)[1]
        children.setdefault(parent, []).append(Subdivision(code=code, name=sub.name))
    return {parent: tuple(subs) for parent, subs in children.items()}


# =========================
# Rule-based source (holidays + pycountry)
# =========================
class RuleBasedSource(HolidaySource):
    """
    Holidays computed offline from the rule tables of the ``holidays`` package.

    Specific documentation : https://holidays.readthedocs.io

    Country and subdivision display names come from ISO 3166 data (pycountry), falling back to
    the aliases known to the rule tables, then to the bare code.
    """
    name = "rules"

    def __init__(self, language: Optional[str] = "en_US"):
        self.language = language

    # ---------- hierarchy
    def _subdivisions(self, country_code: str) -> Tuple[str, ...]:
        code = _norm_code(country_code)
        try:
            return _rule_tables()[code]
        except KeyError:
            raise UnknownCountryError(f"No holiday rules for country {country_code!r}") from None

    def list_countries(self) -> List[Country]:
        return [Country(code=code, name=_iso_country_name(code) or code) for code in _rule_tables()]

    def list_states(self, country_code: str) -> List[Subdivision]:
        code = _norm_code(country_code)
        try:
            subdivs = self._subdivisions(code)
        except UnknownCountryError:
            logger.info("No states modeled for unknown country %r", country_code)
            return []
        if not subdivs:
            return []

        aliases: Dict[str, str] = {}
        for alias, sub_code in getattr(_country_class(code), "subdivisions_aliases", {}).items():
            aliases.setdefault(sub_code, alias)

        return [
            Subdivision(code=s, name=_iso_subdivision_name(f"{code}-{s}") or aliases.get(s) or s)
            for s in subdivs
        ]

    def list_regions(self, country_code: str, state_code: str) -> List[Subdivision]:
        code = _norm_code(country_code)
        state = _norm_code(state_code)
        if code not in _rule_tables():
            return []
        return list(_iso_children().get(f"{code}-{state}", ()))

    def _resolve_subdiv(self, scope: CountryInfo) -> Optional[str]:
        """
        Most specific subdivision code the rule tables can compute holidays for.

        A region must be an ISO child of its state. A region that is itself a modeled subdivision
        is used directly; one without its own rules falls back to its state.
        """
        subdivs = self._subdivisions(scope.country)
        if scope.state is None:
            return None
        by_upper = {s.upper(): s for s in subdivs}

        if scope.region is not None:
            known = {r.code for r in self.list_regions(scope.country, scope.state)}
            if scope.region not in known:
                raise UnknownSubdivisionError(f"Unknown region {scope.region!r} in {scope.country}-{scope.state}")
            if scope.region in by_upper:
                return by_upper[scope.region]

        if scope.state not in by_upper:
            raise UnknownSubdivisionError(f"Unknown state {scope.state!r} in {scope.country}")
        return by_upper[scope.state]

    # ---------- holidays
    def _language_for(self, country_code: str) -> Optional[str]:
        supported = getattr(_country_class(country_code), "supported_languages", ())
        return self.language if self.language in supported else None

    def _categories(self, country_code: str, all_types: bool) -> Tuple[str, ...]:
        if not all_types:
            return (PUBLIC,)
        return tuple(getattr(_country_class(country_code), "supported_categories", (PUBLIC,)))

    def _records(self, country_code: str, subdiv: Optional[str], year: int, category: str) -> List[RuleHolidayRecord]:
        kwargs = dict(
            subdiv=subdiv,
            years=year,
            categories=(category,),
            language=self._language_for(country_code),
        )
        observed = holidays.country_holidays(country_code, observed=True, **kwargs)
        actual = holidays.country_holidays(country_code, observed=False, **kwargs)

        records: List[RuleHolidayRecord] = []
        for day in sorted(observed):
            if day.year != year:
                continue
            real_names = set(actual.get_list(day))
            for name in observed.get_list(day):
                records.append(
                    RuleHolidayRecord(name=name, date=day, category=category, substitute=name not in real_names)
                )
        return records

    def list_holidays(self, scope: CountryInfo, year: int, all_types: bool) -> List[Holiday]:
        """
        Holidays of ``scope`` for ``year``, one entry per (date, name, category).

        Raises
        ------
        UnknownCountryError
            The country (or its subdivision) has no rules.
        """
        subdiv = self._resolve_subdiv(scope)
        try:
            categories = self._categories(scope.country, all_types)
            records: List[RuleHolidayRecord] = []
            for category in categories:
                records.extend(self._records(scope.country, subdiv, year, category))
        except NotImplementedError as e:
            raise UnknownCountryError(f"Holidays not supported for {scope}: {e}") from e

        return [normalize_rule_based(r) for r in records]

    async def holidays(self, year: int, scope: CountryInfo, all_types: bool) -> HolidayResult:
        # Rule evaluation is CPU-bound, keep it off the event loop
        try:
            found = await asyncio.to_thread(self.list_holidays, scope, year, all_types)
        except UnknownCountryError as e:
            logger.info("Rule-based source has no data: %s", e)
            return HolidayResult(failures=(SourceFailure.from_exception(self.name, scope.country, year, e),))
        return HolidayResult(holidays=found)


# =========================
# Remote source (Calendarific)
# =========================
class RemoteCalendarSource(HolidaySource):
    """
    National holidays of one country fetched from Calendarific.

    The remote API has no subdivision concept: state/region scoping is ignored and callers get the
    national list. Every entry is public, whatever ``all_types`` says.
    """

    def __init__(self, gateway: CalendarificGateway, country: Country, states: Tuple[Subdivision, ...] = ()):
        self.gateway = gateway
        self.country = country
        self.states = tuple(states)
        self.name = f"calendarific:{country.code}"

    def list_countries(self) -> List[Country]:
        return [self.country]

    def list_states(self, country_code: str) -> List[Subdivision]:
        if _norm_code(country_code) != self.country.code:
            return []
        return list(self.states)

    def list_regions(self, country_code: str, state_code: str) -> List[Subdivision]:
        return []

    async def holidays(self, year: int, scope: CountryInfo, all_types: bool) -> HolidayResult:
        if scope.has_subdivision:
            logger.debug("%s ignores subdivision scope %s, returning national holidays", self.name, scope)

        try:
            records = await self.gateway.fetch_holidays(year)
        except ConfigError as e:
            logger.error("%s unavailable: %s", self.name, e)
            return HolidayResult(failures=(SourceFailure.from_exception(self.name, self.country.code, year, e),))
        except CalendarError as e:
            logger.error("Error fetching %s holidays for %s: %s", self.country.name, year, e)
            return HolidayResult(failures=(SourceFailure.from_exception(self.name, self.country.code, year, e),))

        normalized, dropped = normalize_remote_records(records)
        return HolidayResult(
            holidays=normalized,
            failures=[SourceFailure.from_exception(self.name, self.country.code, year, e) for e in dropped],
        )
