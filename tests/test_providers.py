# Rule-based source tests run against the real rule tables of the holidays package.
# They assert stable invariants (Independence Day, weekends shifted to Monday...) rather
# than full holiday lists, so they survive rule-table updates.

from __future__ import annotations

import threading
from datetime import date

import pytest

from holiday_hub import (
    CountryInfo,
    HolidayType,
    INDIA_STATES,
    RemoteCalendarSource,
    RuleBasedSource,
    UnknownCountryError,
    UnknownSubdivisionError,
)
from holiday_hub import INDIA


@pytest.fixture(scope="module")
def rules() -> RuleBasedSource:
    return RuleBasedSource()


# ============================================================
# Holidays
# ============================================================
def test_us_public_holidays(rules: RuleBasedSource) -> None:
    hols = rules.list_holidays(CountryInfo("US"), 2024, all_types=False)

    assert hols
    assert all(h.type is HolidayType.PUBLIC for h in hols)
    assert all(h.date.year == 2024 for h in hols)
    assert date(2024, 7, 4) in {h.date for h in hols}
    assert date(2024, 12, 25) in {h.date for h in hols}


def test_weekend_holiday_gets_substitute_day(rules: RuleBasedSource) -> None:
    # July 4th 2021 was a Sunday, observed on Monday July 5th
    hols = rules.list_holidays(CountryInfo("US"), 2021, all_types=False)
    by_date = {}
    for h in hols:
        by_date.setdefault(h.date, []).append(h)

    assert any(h.substitute for h in by_date[date(2021, 7, 5)])
    assert not any(h.substitute for h in by_date[date(2021, 7, 4)])


def test_all_types_is_superset_of_public(rules: RuleBasedSource) -> None:
    public = rules.list_holidays(CountryInfo("DE"), 2024, all_types=False)
    everything = rules.list_holidays(CountryInfo("DE"), 2024, all_types=True)

    assert {(h.date, h.name) for h in public} <= {(h.date, h.name) for h in everything}
    assert all(isinstance(h.type, HolidayType) for h in everything)


def test_all_types_includes_other_categories(rules: RuleBasedSource) -> None:
    hols = rules.list_holidays(CountryInfo("DE", "BY"), 2024, all_types=True)
    types = {h.type for h in hols}

    assert HolidayType.PUBLIC in types
    assert types - {HolidayType.PUBLIC}


def test_state_scope_adds_regional_holidays(rules: RuleBasedSource) -> None:
    # Epiphany is a public holiday in Bavaria, not nationwide
    national = rules.list_holidays(CountryInfo("DE"), 2024, all_types=False)
    bavaria = rules.list_holidays(CountryInfo("DE", "BY"), 2024, all_types=False)

    assert date(2024, 1, 6) not in {h.date for h in national}
    assert date(2024, 1, 6) in {h.date for h in bavaria}


def test_unknown_country_raises(rules: RuleBasedSource) -> None:
    with pytest.raises(UnknownCountryError):
        rules.list_holidays(CountryInfo("ZZ"), 2024, all_types=False)


def test_unknown_state_raises(rules: RuleBasedSource) -> None:
    with pytest.raises(UnknownSubdivisionError):
        rules.list_holidays(CountryInfo("DE", "XX"), 2024, all_types=False)


def test_unknown_region_raises(rules: RuleBasedSource) -> None:
    with pytest.raises(UnknownSubdivisionError):
        rules.list_holidays(CountryInfo("ES", "AN", "QQQ"), 2024, all_types=False)


def test_iso_region_falls_back_to_state_rules(rules: RuleBasedSource) -> None:
    region = rules.list_holidays(CountryInfo("ES", "AN", "AL"), 2024, all_types=False)
    state = rules.list_holidays(CountryInfo("ES", "AN"), 2024, all_types=False)
    assert set(region) == set(state)


def test_region_of_another_state_raises(rules: RuleBasedSource) -> None:
    # BE is a modeled German state, not a region of Bavaria
    with pytest.raises(UnknownSubdivisionError):
        rules.list_holidays(CountryInfo("DE", "BY", "BE"), 2024, all_types=False)
    with pytest.raises(UnknownSubdivisionError):
        rules.list_holidays(CountryInfo("ES", "CT", "AL"), 2024, all_types=False)


@pytest.mark.asyncio
async def test_region_of_another_state_reports_failure(rules: RuleBasedSource) -> None:
    result = await rules.holidays(2024, CountryInfo("DE", "BY", "BE"), all_types=False)
    assert result.holidays == ()
    assert [f.error for f in result.failures] == ["UnknownSubdivisionError"]


@pytest.mark.asyncio
async def test_rules_are_evaluated_off_the_event_loop(rules: RuleBasedSource, monkeypatch) -> None:
    seen = []

    def record(scope, year, all_types):
        seen.append(threading.get_ident())
        return []

    monkeypatch.setattr(rules, "list_holidays", record)
    result = await rules.holidays(2024, CountryInfo("FR"), all_types=False)

    assert result.holidays == ()
    assert seen and seen[0] != threading.get_ident()


@pytest.mark.asyncio
async def test_async_entry_point_reports_unknown_country(rules: RuleBasedSource) -> None:
    result = await rules.holidays(2024, CountryInfo("ZZ"), all_types=True)
    assert result.holidays == ()
    assert [f.error for f in result.failures] == ["UnknownCountryError"]
    assert result.failures[0].source == "rules"


# ============================================================
# Hierarchy
# ============================================================
def test_countries_have_names(rules: RuleBasedSource) -> None:
    countries = {c.code: c.name for c in rules.list_countries()}
    assert countries["FR"] == "France"
    assert countries["DE"] == "Germany"
    assert all(name for name in countries.values())


def test_states(rules: RuleBasedSource) -> None:
    states = rules.list_states("de")
    codes = [s.code for s in states]
    assert "BY" in codes
    assert len(codes) == len(set(codes))
    assert {s.code: s.name for s in states}["BE"] == "Berlin"


def test_states_of_unknown_country_are_empty(rules: RuleBasedSource) -> None:
    assert rules.list_states("ZZ") == []


def test_regions(rules: RuleBasedSource) -> None:
    regions = rules.list_regions("ES", "AN")
    assert "AL" in {r.code for r in regions}
    assert rules.list_regions("ZZ", "AA") == []
    assert rules.list_regions("DE", "BY") == []


# ============================================================
# Remote source
# ============================================================
def test_remote_source_static_tables(make_gateway) -> None:
    source = RemoteCalendarSource(make_gateway(), INDIA, INDIA_STATES)

    assert source.name == "calendarific:IN"
    assert source.list_countries() == [INDIA]
    assert len(source.list_states("in")) == 33
    assert source.list_states("US") == []
    assert source.list_regions("IN", "DL") == []


@pytest.mark.asyncio
async def test_remote_source_degrades_on_missing_key(make_gateway) -> None:
    source = RemoteCalendarSource(make_gateway(api_key=""), INDIA, INDIA_STATES)
    result = await source.holidays(2024, CountryInfo("IN"), all_types=False)

    assert result.holidays == ()
    assert [f.error for f in result.failures] == ["ConfigError"]
