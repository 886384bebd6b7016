"""Core locating, extraction and normalization logic for version detector."""

from .factory import VersionFactory
from .grammar import DEFAULT_GRAMMAR, STRICT_GRAMMAR, Grammar
from .registry import GrammarRegistry, registry
from .version import NullVersion, Version

__all__ = [
    "VersionFactory",
    "Version",
    "NullVersion",
    "Grammar",
    "GrammarRegistry",
    "registry",
    "DEFAULT_GRAMMAR",
    "STRICT_GRAMMAR",
]
