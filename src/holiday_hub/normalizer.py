"""
Mapping of source records to the canonical Holiday entity.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .errors import ParseError
from .gateway import RemoteHolidayRecord
from .holiday import Holiday, HolidayType
from .utils import _parse_iso_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleHolidayRecord:
    """One entry generated by the rule tables, before type re-validation."""
    name: str
    date: dt.date
    category: str
    substitute: bool = False
    description: Optional[str] = None


def normalize_remote(record: RemoteHolidayRecord) -> Holiday:
    """
    Convert a remote record. The remote source is only queried for national holidays, so the
    result is always ``public`` and never a substitute day.

    Raises
    ------
    ParseError
        If the name is empty or the date cannot be parsed.
    """
    name = (record.name or "").strip()
    if not name:
        raise ParseError(f"Remote record without a name (date={record.iso_date!r})")
    if record.iso_date is None:
        raise ParseError(f"Remote record {name!r} has no date")
    try:
        day = _parse_iso_date(record.iso_date)
    except ValueError as e:
        raise ParseError(f"Remote record {name!r} has an invalid date {record.iso_date!r}") from e

    return Holiday(
        name=name,
        date=day,
        type=HolidayType.PUBLIC,
        substitute=False,
        description=record.description,
    )


def normalize_remote_records(records: Iterable[RemoteHolidayRecord]) -> Tuple[List[Holiday], List[ParseError]]:
    """
    Normalize a batch of remote records, dropping the malformed ones.

    Never raises: each dropped record is logged and returned as a ParseError so the caller can
    report it, while well-formed siblings are kept.
    """
    holidays: List[Holiday] = []
    dropped: List[ParseError] = []
    for record in records:
        try:
            holidays.append(normalize_remote(record))
        except ParseError as e:
            logger.warning("Dropping remote holiday record: %s", e)
            dropped.append(e)
    return holidays, dropped


def normalize_rule_based(record: RuleHolidayRecord) -> Holiday:
    # Categories outside HolidayType (government, catholic, unofficial...) become observances
    return Holiday(
        name=record.name,
        date=record.date,
        type=HolidayType.coerce(record.category),
        substitute=record.substitute,
        description=record.description,
    )
