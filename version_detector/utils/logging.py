"""Logging utilities for version detector."""

import logging
import sys
from typing import Any, Optional, Set
from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

# Names of loggers created through get_logger; setup_logging adjusts them all
_logger_names: Set[str] = set()
_default_level = logging.INFO


class VersionDetectorLogger:
    """Logger wrapper with rich console formatting."""

    def __init__(self, name: str, level: Optional[int] = None) -> None:
        self.logger = logging.getLogger(name)

        _logger_names.add(name)

        # Keep a level set earlier unless one is given
        if level is not None:
            self.logger.setLevel(level)
        elif self.logger.level == logging.NOTSET:
            self.logger.setLevel(_default_level)

        if not self.logger.handlers:
            self._setup_handlers()

    def _setup_handlers(self) -> None:
        """Setup rich console handler with custom theme."""
        console = Console(stderr=True, theme=Theme({
            "info": "cyan",
            "warning": "yellow",
            "error": "red",
            "critical": "red bold",
            "debug": "dim",
        }))

        handler = RichHandler(
            console=console,
            show_time=True,
            show_path=False,
            markup=False,
        )

        formatter = logging.Formatter(
            fmt="%(name)s: %(message)s",
            datefmt="[%X]"
        )
        handler.setFormatter(formatter)

        self.logger.addHandler(handler)
        self.logger.propagate = False

    def is_enabled_for(self, level: int) -> bool:
        return self.logger.isEnabledFor(level)

    def info(self, msg: str, **kwargs: Any) -> None:
        """Log info message."""
        self.logger.info(msg, extra=kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        """Log warning message."""
        self.logger.warning(msg, extra=kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        """Log error message."""
        self.logger.error(msg, extra=kwargs)

    def debug(self, msg: str, **kwargs: Any) -> None:
        """Log debug message."""
        self.logger.debug(msg, extra=kwargs)


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration for version detector.

    Args:
        verbose: Enable debug output on every version detector logger
    """
    global _default_level
    _default_level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=_default_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)]
    )

    # Our loggers do not propagate to the root logger
    for name in _logger_names:
        logging.getLogger(name).setLevel(_default_level)


def get_logger(name: str, level: Optional[int] = None) -> VersionDetectorLogger:
    """Get a version detector logger instance.

    Args:
        name: Logger name
        level: Optional explicit level; keeps the current level when None

    Returns:
        Configured logger instance
    """
    return VersionDetectorLogger(name, level)
