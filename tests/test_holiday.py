from __future__ import annotations

from datetime import date, datetime

import pytest

from holiday_hub import CountryInfo, Holiday, HolidayResult, HolidayType, SourceFailure
from holiday_hub.errors import NetworkError


# ============================================================
# HolidayType
# ============================================================
@pytest.mark.parametrize(
    "value, expected",
    [
        ("public", HolidayType.PUBLIC),
        ("Bank", HolidayType.BANK),
        ("  school ", HolidayType.SCHOOL),
        ("optional", HolidayType.OPTIONAL),
        ("observance", HolidayType.OBSERVANCE),
        ("government", HolidayType.OBSERVANCE),   # category outside the canonical set
        ("", HolidayType.OBSERVANCE),
        (None, HolidayType.OBSERVANCE),
        (HolidayType.BANK, HolidayType.BANK),
    ],
)
def test_holiday_type_coerce(value, expected) -> None:
    assert HolidayType.coerce(value) is expected


# ============================================================
# Holiday
# ============================================================
def test_holiday_is_date_only_and_hashable() -> None:
    h = Holiday("New Year's Day", datetime(2024, 1, 1, 23, 30), type="public")
    assert h.date == date(2024, 1, 1)
    assert type(h.date) is date
    assert h.type is HolidayType.PUBLIC
    assert h.substitute is False

    same = Holiday("New Year's Day", date(2024, 1, 1))
    assert h == same
    assert len({h, same}) == 1


def test_holiday_unknown_type_is_observance() -> None:
    assert Holiday("Saint Patrick's Day", date(2024, 3, 17), type="unofficial").type is HolidayType.OBSERVANCE


def test_holiday_requires_name() -> None:
    with pytest.raises(ValueError):
        Holiday("  ", date(2024, 1, 1))


def test_holiday_to_dict() -> None:
    h = Holiday("Republic Day", date(2024, 1, 26), description="National holiday")
    assert h.to_dict() == {
        "name": "Republic Day",
        "date": "2024-01-26",
        "type": "public",
        "substitute": False,
        "description": "National holiday",
    }


# ============================================================
# CountryInfo
# ============================================================
def test_country_info_normalizes_codes() -> None:
    scope = CountryInfo(" us ", "ca", "")
    assert scope.country == "US"
    assert scope.state == "CA"
    assert scope.region is None
    assert str(scope) == "US-CA"
    assert scope.has_subdivision


def test_country_info_region_requires_state() -> None:
    with pytest.raises(ValueError):
        CountryInfo("DE", None, "A")


def test_country_info_requires_country() -> None:
    with pytest.raises(ValueError):
        CountryInfo("", "BY")


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("fr", CountryInfo("FR")),
        ("US-CA", CountryInfo("US", "CA")),
        ("es-an-al", CountryInfo("ES", "AN", "AL")),
    ],
)
def test_country_info_parse(raw: str, expected: CountryInfo) -> None:
    assert CountryInfo.parse(raw) == expected


@pytest.mark.parametrize("raw", ["", "US--CA", "A-B-C-D"])
def test_country_info_parse_rejects_malformed(raw: str) -> None:
    with pytest.raises(ValueError):
        CountryInfo.parse(raw)


# ============================================================
# Results
# ============================================================
def test_holiday_result_tuples_and_ok() -> None:
    failure = SourceFailure.from_exception("calendarific:IN", "IN", 2024, NetworkError("timeout"))
    assert failure.error == "NetworkError"
    assert failure.message == "timeout"

    result = HolidayResult(holidays=[Holiday("X", date(2024, 1, 1))], failures=[failure])
    assert isinstance(result.holidays, tuple)
    assert isinstance(result.failures, tuple)
    assert not result.ok
    assert HolidayResult().ok
