import re
import unicodedata
import datetime as dt
from typing import Optional

_ISO_DATE = re.compile(r"(\d{4})-(\d{2})-(\d{2})")


def _norm_code(s: Optional[str]) -> str:
    """Trimmed, upper-cased code; None becomes an empty string."""
    if s is None:
        return ""
    return s.strip().upper()


def name_sort_key(name: str) -> str:
    """
    Case-insensitive, accent-insensitive key for display names.

    "Åland Islands" sorts next to "Albania" and "côte d'ivoire" next to "Costa Rica",
    the way a locale-aware collation would, without depending on the process locale.

    Parameters
    ----------
    name: str
        The display name.

    Returns
    -------
    str
        The comparison key.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return " ".join(stripped.casefold().split())


def _parse_iso_date(s: str) -> dt.date:
    """
    Parse an ISO-8601 date or datetime string into a date-only value.

    Rules:
        1. The string must start with a YYYY-MM-DD calendar date.
        2. Anything after the date must be a time part ("T..." or " ..."), which is validated then discarded.
        3. The calendar date as written is kept; no timezone conversion happens, so "2024-03-10T23:30:00-05:00"
           stays on March 10th.

    Parameters
    ----------
    s: str
        The date string to parse.

    Returns
    -------
    dt.date
        The parsed date.
    """
    if not isinstance(s, str):
        raise ValueError(f"Expected an ISO date string, got {type(s).__name__}")
    s = s.strip()
    m = _ISO_DATE.match(s)
    if m is None:
        raise ValueError(f"Invalid ISO date string: {s!r}")

    y, mo, d = (int(g) for g in m.groups())
    try:
        day = dt.date(y, mo, d)
    except ValueError as e:
        raise ValueError(f"Invalid calendar date parsed from {s!r}: (y={y}, m={mo}, d={d}).") from e

    rest = s[m.end():]
    if rest:
        if rest[0] not in "T ":
            raise ValueError(f"Unexpected trailing content in date string: {s!r}")
        try:
            dt.datetime.fromisoformat(s.replace("Z", "+00:00"))
        except ValueError as e:
            raise ValueError(f"Invalid ISO datetime string: {s!r}") from e
    return day
