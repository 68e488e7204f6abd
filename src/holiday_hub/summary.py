"""Helpers turning a holiday list into what a holiday page shows."""

from __future__ import annotations

import datetime as dt
from collections import Counter
from typing import Dict, Iterable, List, Optional

from .holiday import Holiday


def sort_holidays(holidays: Iterable[Holiday]) -> List[Holiday]:
    return sorted(holidays, key=lambda h: (h.date, h.name, h.type.value))


def upcoming_holidays(holidays: Iterable[Holiday], today: Optional[dt.date] = None, limit: int = 3) -> List[Holiday]:
    """The next ``limit`` holidays on or after ``today`` (default: current date)."""
    today = today or dt.date.today()
    return [h for h in sort_holidays(holidays) if h.date >= today][:limit]


def holiday_type_counts(holidays: Iterable[Holiday]) -> Dict[str, int]:
    return dict(Counter(h.type.value for h in holidays))


def group_by_month(holidays: Iterable[Holiday]) -> Dict[int, List[Holiday]]:
    months: Dict[int, List[Holiday]] = {}
    for h in sort_holidays(holidays):
        months.setdefault(h.date.month, []).append(h)
    return months
