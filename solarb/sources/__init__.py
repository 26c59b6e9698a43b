"""Price sources for Solana DEX venues."""

from dotenv import load_dotenv

load_dotenv()

from ..config import MonitorConfig
from .base import BaseSource
from .jupiter import JupiterSource
from .orca import OrcaSource
from .raydium import RaydiumSource

SOURCE_REGISTRY: dict[str, type[BaseSource]] = {
    OrcaSource.key: OrcaSource,
    RaydiumSource.key: RaydiumSource,
    JupiterSource.key: JupiterSource,
}


def create_sources(names: list[str], config: MonitorConfig) -> list[BaseSource]:
    """Instantiate sources by key, preserving the given order.

    Raises:
        ValueError: If a name is not registered.
    """
    sources: list[BaseSource] = []
    for name in names:
        cls = SOURCE_REGISTRY.get(name.lower())
        if cls is None:
            raise ValueError(f"Unknown source: {name}")
        if cls is OrcaSource:
            sources.append(
                OrcaSource(
                    timeout=config.source_timeout,
                    quote_mint=config.quote_mint,
                    cache_ttl=config.pool_cache_ttl,
                )
            )
        else:
            sources.append(cls(timeout=config.source_timeout))
    return sources


__all__ = [
    "BaseSource",
    "JupiterSource",
    "OrcaSource",
    "RaydiumSource",
    "SOURCE_REGISTRY",
    "create_sources",
]
