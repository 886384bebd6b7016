"""Apply a version grammar to text and collect its named captures."""

from typing import Dict, Optional

from .grammar import CAPTURE_GROUPS, DEFAULT_GRAMMAR, Grammar

Captures = Dict[str, Optional[str]]


class PatternExtractor:
    """Anchored, grammar-agnostic extraction of version captures.

    Any product specific remapping lives in the grammar itself; the extractor
    only reports what the pattern captured.
    """

    def __init__(self, grammar: Optional[Grammar] = None) -> None:
        """Initialize the extractor.

        Args:
            grammar: Grammar to apply (defaults to the built-in grammar)
        """
        self.grammar = grammar or DEFAULT_GRAMMAR

    def extract(self, text: str) -> Optional[Captures]:
        """Match the grammar at the start of ``text``.

        Args:
            text: Version text, or the tail following a located marker

        Returns:
            Mapping of every capture group name to its captured text, with
            unmatched, empty and undeclared groups as None; None on no match
        """
        if not isinstance(text, str):
            return None

        match = self.grammar.regex.match(text)
        if not match:
            return None

        groups = match.groupdict()
        return {name: groups.get(name) or None for name in CAPTURE_GROUPS}
