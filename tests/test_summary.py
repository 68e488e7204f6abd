from __future__ import annotations

from datetime import date

from holiday_hub import Holiday, group_by_month, holiday_type_counts, sort_holidays, upcoming_holidays

HOLIDAYS = [
    Holiday("Christmas Day", date(2024, 12, 25)),
    Holiday("New Year's Day", date(2024, 1, 1)),
    Holiday("Epiphany", date(2024, 1, 6), type="observance"),
    Holiday("Bank Holiday", date(2024, 5, 27), type="bank"),
    Holiday("Boxing Day", date(2024, 12, 26), type="bank"),
]


def test_sort_holidays() -> None:
    assert [h.name for h in sort_holidays(HOLIDAYS)] == [
        "New Year's Day", "Epiphany", "Bank Holiday", "Christmas Day", "Boxing Day",
    ]


def test_upcoming_holidays() -> None:
    found = upcoming_holidays(HOLIDAYS, today=date(2024, 5, 27))
    assert [h.name for h in found] == ["Bank Holiday", "Christmas Day", "Boxing Day"]
    assert upcoming_holidays(HOLIDAYS, today=date(2024, 12, 27)) == []
    assert len(upcoming_holidays(HOLIDAYS, today=date(2024, 1, 1), limit=1)) == 1


def test_holiday_type_counts() -> None:
    assert holiday_type_counts(HOLIDAYS) == {"public": 2, "observance": 1, "bank": 2}
    assert holiday_type_counts([]) == {}


def test_group_by_month() -> None:
    months = group_by_month(HOLIDAYS)
    assert list(months) == [1, 5, 12]
    assert [h.name for h in months[12]] == ["Christmas Day", "Boxing Day"]
