from __future__ import annotations

from typing import Callable, Optional

import httpx
import pytest

from holiday_hub import CalendarificGateway, HolidayHub, INDIA_STATES, RemoteCalendarSource, RuleBasedSource
from holiday_hub import INDIA


def remote_holiday(name: str, iso: str, description: str = "") -> dict:
    return {
        "name": name,
        "description": description,
        "date": {"iso": iso},
        "type": ["National holiday"],
    }


def calendarific_payload(*holidays: dict) -> dict:
    return {"meta": {"code": 200}, "response": {"holidays": list(holidays)}}


INDIA_2024 = calendarific_payload(
    remote_holiday("Republic Day", "2024-01-26", "Republic Day is a national holiday in India"),
    remote_holiday("Independence Day", "2024-08-15", "Independence Day is a national holiday in India"),
    remote_holiday("Gandhi Jayanti", "2024-10-02"),
)


@pytest.fixture
def india_payload() -> dict:
    return INDIA_2024


@pytest.fixture
def make_gateway() -> Callable[..., CalendarificGateway]:
    """Factory for a Calendarific gateway served by an httpx.MockTransport handler."""
    def _make(handler: Optional[Callable] = None, api_key: str = "test-key") -> CalendarificGateway:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler)) if handler else None
        return CalendarificGateway(api_key=api_key, country="IN", client=client)
    return _make


@pytest.fixture
def make_hub(make_gateway) -> Callable[..., HolidayHub]:
    """Factory for a HolidayHub whose India source answers through ``handler``."""
    def _make(handler: Optional[Callable] = None, api_key: str = "test-key") -> HolidayHub:
        gateway = make_gateway(handler, api_key=api_key)
        remote = RemoteCalendarSource(gateway, INDIA, INDIA_STATES)
        return HolidayHub(RuleBasedSource(), {"IN": remote})
    return _make


@pytest.fixture
def ok_handler(india_payload) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=india_payload)
    return handler


@pytest.fixture
def remote_payload() -> Callable[..., dict]:
    """Build a Calendarific envelope from (name, iso_date) pairs."""
    def _make(*entries) -> dict:
        return calendarific_payload(*(remote_holiday(name, iso) for name, iso in entries))
    return _make
