"""Spread detection engine components."""

from .collector import PriceCollector
from .detector import ArbitrageDetector
from .monitor import MonitorLoop, MonitorState, Orchestrator
from .segment_tree import SegmentTree

__all__ = [
    "ArbitrageDetector",
    "MonitorLoop",
    "MonitorState",
    "Orchestrator",
    "PriceCollector",
    "SegmentTree",
]
