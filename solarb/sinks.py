"""Report sinks: where each tick's spread decision ends up."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .logging import get_logger
from .models import ArbitrageReport
from .utils.telegram import TelegramNotifier

logger = get_logger("solarb.report")


class ReportSink(ABC):
    """Consumer of per-tick spread decisions."""

    @abstractmethod
    async def publish(self, asset: str, report: ArbitrageReport | None) -> None:
        """Receive the outcome of one tick.

        Args:
            asset: Token mint the tick was for.
            report: Spread report, or None when fewer than two sources
                produced a price this tick.
        """
        pass

    async def close(self) -> None:
        """Release resources held by the sink."""
        pass


class LogReportSink(ReportSink):
    """Writes every tick's outcome to the ``solarb.report`` logger."""

    async def publish(self, asset: str, report: ArbitrageReport | None) -> None:
        if report is None:
            logger.info(f"No arbitrage opportunity for {asset}: insufficient prices")
        elif report.is_opportunity:
            logger.info(report.describe())
        else:
            logger.info(
                f"No arbitrage opportunity detected for {asset} "
                f"({report.sources_present} sources agree at {report.cheapest_price})"
            )


class TelegramReportSink(ReportSink):
    """Sends opportunities above a relative spread threshold to Telegram."""

    def __init__(self, notifier: TelegramNotifier, min_spread_pct: float = 0.01):
        self.notifier = notifier
        self.min_spread_pct = min_spread_pct

    async def publish(self, asset: str, report: ArbitrageReport | None) -> None:
        if report is None or not report.is_opportunity:
            return
        if report.spread_pct < self.min_spread_pct:
            return

        await self.notifier.send(
            f"<b>Spread Found</b>\n"
            f"Asset: {asset}\n"
            f"Buy: {report.cheapest_source} @ {report.cheapest_price}\n"
            f"Sell: {report.priciest_source} @ {report.priciest_price}\n"
            f"Spread: {report.spread} ({report.spread_pct:.2%})"
        )

    async def close(self) -> None:
        await self.notifier.close()
