"""Output formatters for version detector results."""

from .formatters import ConsoleFormatter, JSONFormatter

__all__ = ["ConsoleFormatter", "JSONFormatter"]
