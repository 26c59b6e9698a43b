"""Utility helpers."""

from .formatting import format_struct
from .telegram import TelegramNotifier

__all__ = ["TelegramNotifier", "format_struct"]
