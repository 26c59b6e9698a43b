"""Cross-venue spread monitor for Solana token prices."""

__version__ = "0.1.0"
