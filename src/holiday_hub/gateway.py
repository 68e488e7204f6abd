"""
Calendarific gateway.

Thin async client for https://calendarific.com. It builds the request, maps HTTP and
transport failures to the CalendarError taxonomy and unpacks the JSON envelope into
raw records. Record validation is the normalizer's job.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import httpx

from .errors import ConfigError, NetworkError, UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://calendarific.com/api/v2"


@dataclass(frozen=True)
class RemoteHolidayRecord:
    """
    Holiday object as returned by Calendarific, unvalidated.

    Attributes
    ----------
    name: str
        Holiday name, possibly empty if the payload lacked one.
    iso_date: Optional[str]
        Value of ``date.iso``; a date or a full ISO datetime.
    description: Optional[str]
        Free text description.
    types: Tuple[str, ...]
        Calendarific classification labels, e.g. ("National holiday",).
    """
    name: str
    iso_date: Optional[str]
    description: Optional[str] = None
    types: Tuple[str, ...] = ()

    @classmethod
    def from_payload(cls, item: Any) -> "RemoteHolidayRecord":
        if not isinstance(item, dict):
            return cls(name="", iso_date=None)
        date_obj = item.get("date")
        iso = date_obj.get("iso") if isinstance(date_obj, dict) else None
        raw_types = item.get("type") or ()
        if isinstance(raw_types, str):
            raw_types = (raw_types,)
        return cls(
            name=str(item.get("name") or ""),
            iso_date=iso if isinstance(iso, str) else None,
            description=item.get("description") or None,
            types=tuple(str(t) for t in raw_types),
        )


class CalendarificGateway:
    """
    Fetches national holidays for a single, fixed country.

    Usage:
        gateway = CalendarificGateway(api_key="...", country="IN")
        records = await gateway.fetch_holidays(2024)

    One GET per call, no retry. Pass ``client`` to reuse a connection pool (or to mock the
    transport in tests); otherwise a client is opened and closed around each request.
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = DEFAULT_BASE_URL,
        country: str = "IN",
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = (api_key or "").strip()
        self.base_url = base_url.rstrip("/")
        self.country = country.strip().upper()
        self._client = client

    @property
    def url(self) -> str:
        return f"{self.base_url}/holidays"

    def _params(self, year: int) -> Dict[str, Any]:
        return {
            "api_key": self.api_key,
            "country": self.country,
            "year": year,
            "type": "national",
        }

    async def _get(self, year: int) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(self.url, params=self._params(year))
        async with httpx.AsyncClient() as client:
            return await client.get(self.url, params=self._params(year))

    async def fetch_holidays(self, year: int) -> List[RemoteHolidayRecord]:
        """Fetch the national holidays of ``self.country`` for ``year``.

        Raises:
            ConfigError: the API key is missing.
            NetworkError: the request could not be completed.
            UpstreamError: non-success status or unusable payload.
        """
        if not self.api_key:
            raise ConfigError(f"Calendarific API key is not configured (country={self.country})")

        logger.debug("GET %s country=%s year=%s", self.url, self.country, year)
        try:
            response = await self._get(year)
        except httpx.RequestError as e:
            raise NetworkError(f"Calendarific request failed for {self.country}/{year}: {e!r}") from e

        if not response.is_success:
            raise UpstreamError(
                f"Calendarific returned HTTP {response.status_code} for {self.country}/{year}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamError("Calendarific returned a non-JSON body", status_code=response.status_code) from e

        return [RemoteHolidayRecord.from_payload(item) for item in _unwrap(payload, response.status_code)]


def _unwrap(payload: Any, status_code: int) -> List[Any]:
    """Extract the holiday list from ``{meta: {...}, response: {holidays: [...]}}``."""
    if not isinstance(payload, dict):
        raise UpstreamError("Unexpected Calendarific envelope (not an object)", status_code=status_code)

    meta = payload.get("meta")
    if isinstance(meta, dict) and meta.get("code", 200) != 200:
        detail = meta.get("error_detail") or meta.get("error_type") or "unknown error"
        raise UpstreamError(f"Calendarific error {meta.get('code')}: {detail}", status_code=meta.get("code"))

    body = payload.get("response")
    # Calendarific answers `"response": []` when it has nothing for the query
    if isinstance(body, list) and not body:
        return []
    if not isinstance(body, dict):
        raise UpstreamError("Unexpected Calendarific envelope (missing 'response')", status_code=status_code)

    holidays = body.get("holidays", [])
    if not isinstance(holidays, list):
        raise UpstreamError("Unexpected Calendarific envelope ('holidays' is not a list)", status_code=status_code)
    return holidays
