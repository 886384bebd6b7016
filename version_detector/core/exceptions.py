"""Exceptions raised by version detector caller-facing operations.

"No version found" is never an error; these cover caller mistakes only:
malformed structured input and unusable grammar configuration.
"""

from typing import Any, Dict, Optional


class VersionDetectorError(Exception):
    """Base exception for all version detector errors.

    Carries a human-readable message and optional context that the CLI and
    JSON formatter can render.
    """

    error_code: str = "VERSION_DETECTOR_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Return structured error dict."""
        response = {
            "error": True,
            "error_code": self.error_code,
            "message": self.message,
        }
        if self.details:
            response["details"] = self.details
        return response


class VersionValidationError(VersionDetectorError, ValueError):
    """Structured version data has the wrong shape or types."""

    error_code = "VERSION_VALIDATION_ERROR"


class VersionDecodeError(VersionValidationError):
    """Serialized version data could not be decoded."""

    error_code = "VERSION_DECODE_ERROR"


class GrammarConfigurationError(VersionDetectorError, ValueError):
    """A version grammar does not compile or lacks required groups."""

    error_code = "GRAMMAR_CONFIGURATION_ERROR"
