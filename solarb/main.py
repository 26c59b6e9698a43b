"""Main entry point for the spread monitor."""

import argparse
import asyncio
import signal
import sys

from .config import MonitorConfig
from .engine.monitor import Orchestrator
from .logging import setup_logging
from .sinks import LogReportSink, ReportSink, TelegramReportSink
from .sources import create_sources
from .utils.telegram import TelegramNotifier


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="solarb",
        description="Monitor token prices across Solana DEXes and report spreads",
    )
    parser.add_argument("--assets", nargs="+", help="Token mint addresses to monitor")
    parser.add_argument(
        "--sources", nargs="+", help="Price sources in tie-break order (orca raydium jupiter)"
    )
    parser.add_argument("--interval", type=float, help="Seconds between ticks")
    parser.add_argument("--timeout", type=float, help="Per-source timeout in seconds")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, ...)")
    parser.add_argument("--log-file", help="Also write logs to this file")
    return parser


def load_config(argv: list[str] | None = None) -> MonitorConfig:
    """Environment configuration with command line overrides applied."""
    args = build_parser().parse_args(argv)
    config = MonitorConfig.from_env()

    if args.assets:
        config.assets = args.assets
    if args.sources:
        config.sources = [s.lower() for s in args.sources]
    if args.interval is not None:
        config.interval_seconds = args.interval
    if args.timeout is not None:
        config.source_timeout = args.timeout
    if args.log_level:
        config.log_level = args.log_level
    if args.log_file:
        config.log_file = args.log_file
    return config


class MonitorRunner:
    """Wires configuration, sources and sinks into an orchestrator."""

    def __init__(self, config: MonitorConfig):
        self.config = config
        self.logger = setup_logging(config.log_level, config.log_file)
        self.orchestrator: Orchestrator | None = None

    def setup(self) -> bool:
        """Validate configuration and build components."""
        try:
            self.config.validate()
        except ValueError as e:
            self.logger.error(f"Config error: {e}")
            return False

        sinks: list[ReportSink] = [LogReportSink()]
        notifier = TelegramNotifier()
        if notifier.is_configured:
            self.logger.info("Telegram notifications enabled")
            sinks.append(TelegramReportSink(notifier, self.config.notify_min_spread_pct))
        else:
            self.logger.info("Telegram not configured, notifications disabled")

        self.orchestrator = Orchestrator(
            assets=self.config.assets,
            sources=create_sources(self.config.sources, self.config),
            sinks=sinks,
            interval=self.config.interval_seconds,
            timeout=self.config.source_timeout,
        )
        return True

    async def run(self) -> None:
        if self.orchestrator is None and not self.setup():
            return

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, self._on_signal, sig)

        await self.orchestrator.run()

    def _on_signal(self, sig: signal.Signals) -> None:
        self.logger.info(f"Received {sig.name}, finishing current ticks")
        self.orchestrator.stop()


def main(argv: list[str] | None = None) -> int:
    """Entry point."""
    config = load_config(argv)
    runner = MonitorRunner(config)
    if not runner.setup():
        return 1

    try:
        asyncio.run(runner.run())
    except KeyboardInterrupt:
        runner.logger.info("Interrupted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
