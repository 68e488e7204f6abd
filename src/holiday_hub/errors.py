"""
Error taxonomy for holiday sources.

Every failure at a source boundary is expressed as a ``CalendarError`` subclass.
Source handlers turn them into empty results plus a ``SourceFailure`` record, so
none of them ever reaches a caller of ``HolidayHub``.
"""

from typing import Optional


class CalendarError(Exception):
    pass


class ConfigError(CalendarError):
    """A required setting (e.g. the remote API key) is missing."""


class NetworkError(CalendarError):
    """Transport-level failure: DNS, timeout, connection reset..."""


class UpstreamError(CalendarError):
    """The remote provider answered, but not with a usable payload."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ParseError(CalendarError):
    """A single source record could not be turned into a Holiday."""


class UnknownCountryError(CalendarError):
    pass


class UnknownSubdivisionError(UnknownCountryError):
    pass
