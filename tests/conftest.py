"""Pytest configuration and fixtures for the spread monitor tests."""

import asyncio
import logging

import pytest

from solarb.models import ArbitrageReport
from solarb.sinks import ReportSink
from solarb.sources.base import BaseSource


class StubSource(BaseSource):
    """In-memory source returning scripted results.

    ``prices`` maps asset -> result, where a result is a price, None (no
    data) or an exception instance to raise. ``default`` is used for assets
    not in the map. ``delays`` maps asset -> seconds to wait before
    answering.
    """

    def __init__(self, name, prices=None, default=None, delays=None, delay=0.0):
        self.name = name
        self.key = name.lower()
        super().__init__(timeout=1.0)
        self.prices = prices or {}
        self.default = default
        self.delays = delays or {}
        self.delay = delay
        self.calls: list[str] = []
        self.connected = False
        self.closed = False

    @property
    def is_connected(self) -> bool:
        return self.connected

    async def connect(self) -> None:
        self.connected = True

    async def close(self) -> None:
        self.connected = False
        self.closed = True

    async def fetch_price(self, asset: str):
        self.calls.append(asset)
        delay = self.delays.get(asset, self.delay)
        if delay:
            await asyncio.sleep(delay)
        result = self.prices.get(asset, self.default)
        if isinstance(result, BaseException):
            raise result
        return result


class RecordingSink(ReportSink):
    """Sink that remembers everything it was given."""

    def __init__(self):
        self.events: list[tuple[str, ArbitrageReport | None]] = []
        self.closed = False

    async def publish(self, asset, report):
        self.events.append((asset, report))

    async def close(self):
        self.closed = True

    def reports_for(self, asset):
        return [report for a, report in self.events if a == asset]


@pytest.fixture
def log_records(caplog):
    """Capture records from the non-propagating ``solarb`` logger."""
    logger = logging.getLogger("solarb")
    logger.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG, logger="solarb")
    yield caplog
    logger.removeHandler(caplog.handler)


@pytest.fixture
def recording_sink():
    return RecordingSink()
