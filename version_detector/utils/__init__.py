"""Utility functions and helpers for version detector."""

from .logging import setup_logging, get_logger
from .performance import PerformanceMonitor

__all__ = [
    "setup_logging",
    "get_logger",
    "PerformanceMonitor",
]
