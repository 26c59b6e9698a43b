"""Per-asset monitor loops and the orchestrator that runs them."""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Sequence

from ..logging import get_logger
from ..models import ArbitrageReport
from ..sinks import ReportSink
from ..sources.base import BaseSource
from .collector import PriceCollector
from .detector import ArbitrageDetector

logger = get_logger("solarb.monitor")


class MonitorState(str, Enum):
    """Lifecycle of a monitor loop."""
    IDLE = "IDLE"
    RUNNING = "RUNNING"
    CANCELLED = "CANCELLED"


class MonitorLoop:
    """Runs collect -> detect -> report -> sleep for one asset until stopped.

    The stop event is only honoured between ticks: a tick that has started
    always runs to completion. The inter-tick sleep wakes up early when the
    event is set.
    """

    def __init__(
        self,
        asset: str,
        collector: PriceCollector,
        sinks: Sequence[ReportSink],
        interval: float,
        stop_event: asyncio.Event,
    ):
        self.asset = asset
        self.collector = collector
        self.detector = ArbitrageDetector(asset, len(collector.sources))
        self.sinks = list(sinks)
        self.interval = interval
        self.stop_event = stop_event
        self.state = MonitorState.IDLE

        # Counters for the shutdown summary
        self.ticks = 0
        self.reports = 0
        self.opportunities = 0

    async def tick(self) -> ArbitrageReport | None:
        """Run a single collect/detect/report cycle."""
        result = await self.collector.collect(self.asset)
        report = self.detector.detect(result.entries)

        self.ticks += 1
        if report is not None:
            self.reports += 1
            if report.is_opportunity:
                self.opportunities += 1

        await self._publish(report)
        return report

    async def _publish(self, report: ArbitrageReport | None) -> None:
        for sink in self.sinks:
            try:
                await sink.publish(self.asset, report)
            except Exception as e:
                logger.error(
                    f"Sink {type(sink).__name__} failed for {self.asset}: {e}",
                    exc_info=True,
                )

    async def run(self) -> None:
        """Loop until the stop event is set."""
        self.state = MonitorState.RUNNING
        logger.info(f"Monitor started for {self.asset}")

        try:
            while not self.stop_event.is_set():
                try:
                    await self.tick()
                except Exception as e:
                    logger.error(f"Tick failed for {self.asset}: {e}", exc_info=True)

                if self.stop_event.is_set():
                    break
                await self._sleep()
        finally:
            self.state = MonitorState.CANCELLED
            logger.info(
                f"Monitor stopped for {self.asset}: {self.ticks} ticks, "
                f"{self.reports} reports, {self.opportunities} opportunities"
            )

    async def _sleep(self) -> None:
        try:
            await asyncio.wait_for(self.stop_event.wait(), timeout=self.interval)
        except asyncio.TimeoutError:
            pass


class Orchestrator:
    """Starts one monitor loop per asset and waits for all of them.

    Sources are shared by every loop; loops share nothing else.

    Usage:
        orchestrator = Orchestrator(assets, sources, sinks, interval=1.0, timeout=5.0)
        await orchestrator.run()  # until orchestrator.stop()
    """

    def __init__(
        self,
        assets: Sequence[str],
        sources: Sequence[BaseSource],
        sinks: Sequence[ReportSink],
        interval: float = 1.0,
        timeout: float = 5.0,
    ):
        self.assets = list(assets)
        self.sources = list(sources)
        self.sinks = list(sinks)
        self.interval = interval
        self.timeout = timeout
        self.stop_event = asyncio.Event()
        self.loops: list[MonitorLoop] = []

    def stop(self) -> None:
        """Ask every loop to stop at its next tick boundary."""
        if not self.stop_event.is_set():
            logger.info("Stop requested")
            self.stop_event.set()

    def _create_loops(self) -> list[MonitorLoop]:
        collector = PriceCollector(self.sources, timeout=self.timeout)
        return [
            MonitorLoop(
                asset=asset,
                collector=collector,
                sinks=self.sinks,
                interval=self.interval,
                stop_event=self.stop_event,
            )
            for asset in self.assets
        ]

    async def run(self) -> None:
        """Connect sources, run every loop until stopped, then clean up."""
        logger.info(
            f"Monitoring {len(self.assets)} assets across "
            f"{', '.join(s.name for s in self.sources)} "
            f"(interval={self.interval}s, timeout={self.timeout}s)"
        )

        for source in self.sources:
            await source.connect()

        self.loops = self._create_loops()
        try:
            tasks = [
                asyncio.create_task(loop.run(), name=f"monitor-{loop.asset[:8]}")
                for loop in self.loops
            ]
            results = await asyncio.gather(*tasks, return_exceptions=True)
            for loop, result in zip(self.loops, results):
                if isinstance(result, BaseException):
                    logger.error(f"Monitor for {loop.asset} crashed: {result!r}")
        finally:
            for source in self.sources:
                await source.close()
            for sink in self.sinks:
                await sink.close()
            logger.info("Shutdown complete")
