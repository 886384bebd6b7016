"""Version factory: locate, extract and normalize versions from text."""

import json
from typing import Any, Iterable, Mapping, Optional

from ..utils.logging import get_logger
from .exceptions import GrammarConfigurationError, VersionDecodeError, VersionValidationError
from .extractor import PatternExtractor
from .grammar import DEFAULT_GRAMMAR, Grammar
from .locator import Marker, locate_tail
from .normalizer import normalize
from .registry import registry
from .version import DIGITS, STABILITIES, STABILITY_STABLE, NullVersion, Version, VersionResult

_STABILITY_LOOKUP = {stability.lower(): stability for stability in STABILITIES}


class VersionFactory:
    """Build ``Version`` values from free-form text or structured data.

    The configured grammar is the only state a factory holds. It is replaced
    wholesale by ``set_regex``; ``with_regex`` returns a new factory instead,
    which keeps a shared factory safe for concurrent use.
    """

    def __init__(self, pattern: Optional[str] = None, grammar: Optional[Grammar] = None) -> None:
        """Initialize the version factory.

        Args:
            pattern: Custom grammar pattern with named groups
            grammar: Pre-compiled grammar; ignored when ``pattern`` is given

        Raises:
            GrammarConfigurationError: If ``pattern`` is unusable
        """
        self.logger = get_logger("VersionFactory")

        if pattern is not None:
            grammar = self._compile(pattern)

        self._extractor = PatternExtractor(grammar or DEFAULT_GRAMMAR)

    @classmethod
    def from_grammar(cls, name: str) -> "VersionFactory":
        """Create a factory using a registered grammar.

        Raises:
            GrammarConfigurationError: If no grammar is registered under ``name``
        """
        return cls(grammar=registry.require_grammar(name))

    @property
    def grammar(self) -> Grammar:
        return self._extractor.grammar

    @property
    def pattern(self) -> str:
        return self.grammar.pattern

    @property
    def is_default(self) -> bool:
        return self.grammar is DEFAULT_GRAMMAR

    def set_regex(self, pattern: str) -> None:
        """Replace the grammar used by subsequent calls.

        The previous grammar stays in place when the new one is rejected.

        Args:
            pattern: Regular expression with at least a ``major`` named group

        Raises:
            GrammarConfigurationError: If the pattern does not compile or lacks
                required named groups
        """
        grammar = self._compile(pattern)
        self._extractor = PatternExtractor(grammar)
        self.logger.debug(f"Grammar replaced: {pattern}")

    def with_regex(self, pattern: str) -> "VersionFactory":
        """Return a new factory using ``pattern``, leaving this one untouched."""
        return type(self)(pattern=pattern)

    def set(self, text: str) -> VersionResult:
        """Extract a version from text that starts with it.

        Args:
            text: Version text such as ``"2.0b8"``

        Returns:
            Version, or NullVersion when the grammar does not match
        """
        captures = self._extractor.extract(text)
        fields = normalize(captures)

        if fields is None:
            self.logger.debug(f"No version matched in {text!r}")
            return NullVersion()

        return Version(**fields)

    def detect_version(self, text: str, markers: Iterable[Marker]) -> VersionResult:
        """Locate a version after the first matching marker and extract it.

        Args:
            text: Free-form text, e.g. a user agent
            markers: Ordered marker tokens; percent-escaped, empty, None and
                False entries are accepted

        Returns:
            Version, or NullVersion when no marker occurs or nothing matches
        """
        tail = locate_tail(text, markers)

        if tail is None:
            self.logger.debug(f"No marker found in {text!r}")
            return NullVersion()

        return self.set(tail)

    def from_array(self, data: Mapping[str, Any]) -> Version:
        """Build a version from structured fields, bypassing extraction.

        Args:
            data: Mapping with ``major`` and optionally ``minor``, ``micro``,
                ``patch``, ``micropatch``, ``stability`` and ``build``

        Returns:
            Version built from the mapping

        Raises:
            VersionValidationError: If the mapping is malformed
        """
        if not isinstance(data, Mapping):
            raise VersionValidationError(
                f"Version data must be a mapping, got {type(data).__name__}"
            )

        major = data.get("major")
        if major is None:
            raise VersionValidationError("Version data requires 'major'")

        return Version(
            major=self._digits(data, "major"),
            minor=self._digits(data, "minor") or "0",
            micro=self._digits(data, "micro") or "0",
            patch=self._digits(data, "patch"),
            micropatch=self._digits(data, "micropatch"),
            stability=self._stability(data.get("stability")),
            build=self._digits(data, "build"),
        )

    def from_json(self, text: str) -> Version:
        """Build a version from the JSON form of ``from_array`` data.

        Raises:
            VersionDecodeError: If ``text`` is not a JSON object
            VersionValidationError: If the decoded object is malformed
        """
        if not isinstance(text, (str, bytes, bytearray)):
            raise VersionDecodeError(
                f"Version JSON must be text, got {type(text).__name__}"
            )

        try:
            data = json.loads(text)
        except (ValueError, RecursionError) as e:
            raise VersionDecodeError(f"Invalid version JSON: {e}") from e

        if not isinstance(data, dict):
            raise VersionDecodeError(
                f"Version JSON must be an object, got {type(data).__name__}"
            )

        return self.from_array(data)

    def _compile(self, pattern: str) -> Grammar:
        """Compile a custom grammar, logging rejected patterns."""
        try:
            return Grammar.compile(pattern)
        except GrammarConfigurationError as e:
            self.logger.error(f"Rejected grammar: {e.message}")
            raise

    def _digits(self, data: Mapping[str, Any], key: str) -> Optional[str]:
        """Read an optional decimal-digit string field."""
        value = data.get(key)
        if value is None:
            return None

        if not isinstance(value, str):
            raise VersionValidationError(
                f"Version field '{key}' must be a string, got {type(value).__name__}",
                details={key: value},
            )

        if not DIGITS.fullmatch(value):
            raise VersionValidationError(
                f"Version field '{key}' must be decimal digits: {value!r}",
                details={key: value},
            )

        return value

    def _stability(self, value: Any) -> str:
        """Read the stability field, accepting canonical labels in any case."""
        if value is None:
            return STABILITY_STABLE

        if not isinstance(value, str) or value.lower() not in _STABILITY_LOOKUP:
            raise VersionValidationError(
                f"Version field 'stability' must be one of {', '.join(STABILITIES)}: {value!r}",
                details={"stability": value},
            )

        return _STABILITY_LOOKUP[value.lower()]


_default_factory = VersionFactory()


def set_version(text: str) -> VersionResult:
    """Extract a version from ``text`` using the default grammar."""
    return _default_factory.set(text)


def detect_version(text: str, markers: Iterable[Marker]) -> VersionResult:
    """Locate and extract a version using the default grammar."""
    return _default_factory.detect_version(text, markers)


def from_array(data: Mapping[str, Any]) -> Version:
    return _default_factory.from_array(data)


def from_json(text: str) -> Version:
    return _default_factory.from_json(text)
