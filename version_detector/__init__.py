"""Version detector - locate and normalize version tokens embedded in free-form text."""

__version__ = "0.1.0"

from .core.factory import VersionFactory, detect_version, from_array, from_json, set_version
from .core.version import NullVersion, Version, VersionResult
from .core.exceptions import (
    GrammarConfigurationError,
    VersionDecodeError,
    VersionDetectorError,
    VersionValidationError,
)

__all__ = [
    "VersionFactory",
    "Version",
    "NullVersion",
    "VersionResult",
    "set_version",
    "detect_version",
    "from_array",
    "from_json",
    "VersionDetectorError",
    "VersionValidationError",
    "VersionDecodeError",
    "GrammarConfigurationError",
]
