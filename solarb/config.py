"""Configuration for the spread monitor."""

import os
from dataclasses import dataclass, field

# USDC mint, the quote side of every pool we look up
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"

DEFAULT_ASSETS = [
    "JUPyiwrYJFskUPiHa7hkeR8VUtAeFoSYbKedZNsDvCN",  # JUP
    "So11111111111111111111111111111111111111112",  # wSOL
    "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263",  # BONK
    "rndrizKT3MK1iimdxRdWabcF7Zg7AR5T4nud4EkHBof",  # RNDR
]

# Configuration order is the entry sequence order and the tie-break order
DEFAULT_SOURCES = ["orca", "raydium", "jupiter"]
KNOWN_SOURCES = frozenset(DEFAULT_SOURCES)


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class MonitorConfig:
    """Configuration for the monitor process.

    Attributes:
        assets: Token mint addresses to monitor
        sources: Price source keys, in tie-break order
        quote_mint: Mint the prices are quoted in (Orca pool lookup)
        interval_seconds: Sleep between ticks of one asset
        source_timeout: Per-source call timeout in seconds
        pool_cache_ttl: Seconds the Orca pool list is reused
        notify_min_spread_pct: Minimum relative spread for notifications
        log_level: Logging level name
        log_file: Optional log file path (console only if empty)
    """

    assets: list[str] = field(default_factory=lambda: list(DEFAULT_ASSETS))
    sources: list[str] = field(default_factory=lambda: list(DEFAULT_SOURCES))
    quote_mint: str = USDC_MINT
    interval_seconds: float = 1.0
    source_timeout: float = 5.0
    pool_cache_ttl: float = 30.0
    notify_min_spread_pct: float = 0.01
    log_level: str = "INFO"
    log_file: str = ""

    @classmethod
    def from_env(cls) -> "MonitorConfig":
        """Load configuration from environment variables.

        Environment variables:
            SOLARB_ASSETS: Comma separated mint addresses
            SOLARB_SOURCES: Comma separated source keys
            SOLARB_QUOTE_MINT: Quote mint address
            SOLARB_INTERVAL: Tick interval in seconds
            SOLARB_SOURCE_TIMEOUT: Per-source timeout in seconds
            SOLARB_POOL_CACHE_TTL: Orca pool list cache ttl in seconds
            SOLARB_NOTIFY_MIN_SPREAD: Minimum spread ratio for notifications
            SOLARB_LOG_LEVEL: Logging level
            SOLARB_LOG_FILE: Log file path
        """
        defaults = cls()
        assets = _split_list(os.getenv("SOLARB_ASSETS", ""))
        sources = _split_list(os.getenv("SOLARB_SOURCES", ""))
        return cls(
            assets=assets or defaults.assets,
            sources=[s.lower() for s in sources] or defaults.sources,
            quote_mint=os.getenv("SOLARB_QUOTE_MINT", defaults.quote_mint),
            interval_seconds=float(
                os.getenv("SOLARB_INTERVAL", defaults.interval_seconds)
            ),
            source_timeout=float(
                os.getenv("SOLARB_SOURCE_TIMEOUT", defaults.source_timeout)
            ),
            pool_cache_ttl=float(
                os.getenv("SOLARB_POOL_CACHE_TTL", defaults.pool_cache_ttl)
            ),
            notify_min_spread_pct=float(
                os.getenv("SOLARB_NOTIFY_MIN_SPREAD", defaults.notify_min_spread_pct)
            ),
            log_level=os.getenv("SOLARB_LOG_LEVEL", defaults.log_level),
            log_file=os.getenv("SOLARB_LOG_FILE", defaults.log_file),
        )

    def validate(self) -> None:
        """Validate configuration.

        Raises:
            ValueError: If any field is missing or out of range.
        """
        errors = []
        if not self.assets:
            errors.append("at least one asset is required")
        if not self.sources:
            errors.append("at least one source is required")

        unknown = [s for s in self.sources if s not in KNOWN_SOURCES]
        if unknown:
            errors.append(f"unknown sources: {', '.join(unknown)}")
        if len(set(self.sources)) != len(self.sources):
            errors.append("sources must not repeat")

        if self.interval_seconds <= 0:
            errors.append("interval_seconds must be positive")
        if self.source_timeout <= 0:
            errors.append("source_timeout must be positive")
        if self.pool_cache_ttl < 0:
            errors.append("pool_cache_ttl must not be negative")

        if errors:
            raise ValueError(f"Invalid configuration: {'; '.join(errors)}")
