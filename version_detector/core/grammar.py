"""Version grammars: compiled, validated patterns with named capture groups."""

import re
from dataclasses import dataclass, field
from typing import Pattern

from .exceptions import GrammarConfigurationError

CAPTURE_GROUPS = ("major", "minor", "micro", "patch", "micropatch", "stability", "build")
REQUIRED_GROUPS = ("major",)

# Digits are ASCII only; Version rejects other decimal digits.
# Leading separators let the tail after a marker ("/34.0", " 4.0b8") match.
DEFAULT_PATTERN = r"""
    ^[\s/:;=(_-]*v?
    (?P<major>[0-9]+)
    (?:[-._](?P<minor>[0-9]+))?
    (?:[-._](?P<micro>[0-9]+))?
    (?:[-._](?P<patch>[0-9]+))?
    (?:[-._](?P<micropatch>[0-9]+))?
    (?:
        [-._+ ]?
        (?P<stability>alpha|beta|patch|dev|rc|pl|a|b|d|p)
        (?:[-._+ ]?(?P<build>[0-9]+)|(?![a-z]))
    )?
"""

STRICT_PATTERN = r"""
    ^v?
    (?P<major>[0-9]+)
    (?:[-._](?P<minor>[0-9]+))?
    (?:[-._](?P<micro>[0-9]+))?
    (?:[-._](?P<patch>[0-9]+))?
    (?:[-._](?P<micropatch>[0-9]+))?
    (?:
        [-._+ ]?
        (?P<stability>alpha|beta|patch|stable|dev|rc|pl|a|b|d|p)
        (?:[-._+ ]?(?P<build>[0-9]+))?
    )?
    $
"""


@dataclass(frozen=True)
class Grammar:
    """An immutable, pre-validated version grammar.

    Build instances with ``Grammar.compile`` so that a broken pattern fails
    when it is configured rather than on first use.
    """

    name: str
    pattern: str
    regex: Pattern[str] = field(repr=False, compare=False)

    @classmethod
    def compile(cls, pattern: str, name: str = "custom", flags: int = 0) -> "Grammar":
        """Compile and validate a grammar pattern.

        Args:
            pattern: Regular expression with at least a ``major`` named group
            name: Grammar name for logging and listing
            flags: Extra ``re`` flags; matching is always case-insensitive

        Returns:
            Validated grammar

        Raises:
            GrammarConfigurationError: If the pattern does not compile or lacks
                a required named group
        """
        if not isinstance(pattern, str) or not pattern:
            raise GrammarConfigurationError(
                "Grammar pattern must be a non-empty string",
                details={"grammar": name},
            )

        try:
            regex = re.compile(pattern, flags | re.IGNORECASE)
        except re.error as e:
            raise GrammarConfigurationError(
                f"Grammar pattern does not compile: {e}",
                details={"grammar": name, "pattern": pattern},
            ) from e

        missing = [group for group in REQUIRED_GROUPS if group not in regex.groupindex]
        if missing:
            raise GrammarConfigurationError(
                f"Grammar pattern lacks required named groups: {', '.join(missing)}",
                details={"grammar": name, "pattern": pattern},
            )

        return cls(name=name, pattern=pattern, regex=regex)

    @property
    def groups(self) -> tuple:
        """Named capture groups this grammar declares, in canonical order."""
        return tuple(group for group in CAPTURE_GROUPS if group in self.regex.groupindex)


DEFAULT_GRAMMAR = Grammar.compile(DEFAULT_PATTERN, name="default", flags=re.VERBOSE)
STRICT_GRAMMAR = Grammar.compile(STRICT_PATTERN, name="strict", flags=re.VERBOSE)
