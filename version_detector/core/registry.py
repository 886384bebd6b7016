"""Registry of named version grammars."""

from typing import Dict, List, Optional

from .exceptions import GrammarConfigurationError
from .grammar import DEFAULT_GRAMMAR, STRICT_GRAMMAR, Grammar


class GrammarRegistry:
    """Registry for version grammars keyed by name."""

    def __init__(self) -> None:
        """Initialize the grammar registry."""
        self._grammars: Dict[str, Grammar] = {}

    def register(self, grammar: Grammar, name: Optional[str] = None) -> None:
        """Register a grammar.

        Args:
            grammar: Compiled grammar to register
            name: Registry key (defaults to the grammar's own name)
        """
        self._grammars[name or grammar.name] = grammar

    def register_pattern(self, name: str, pattern: str, flags: int = 0) -> Grammar:
        """Compile a pattern and register it under ``name``.

        Args:
            name: Grammar name
            pattern: Regular expression with named groups
            flags: Extra ``re`` flags

        Returns:
            The registered grammar

        Raises:
            GrammarConfigurationError: If the pattern is unusable
        """
        grammar = Grammar.compile(pattern, name=name, flags=flags)
        self.register(grammar)
        return grammar

    def get_grammar(self, name: str) -> Optional[Grammar]:
        """Get a grammar by name.

        Args:
            name: Grammar name

        Returns:
            Grammar or None if not registered
        """
        return self._grammars.get(name)

    def require_grammar(self, name: str) -> Grammar:
        """Get a grammar by name, failing on unknown names.

        Raises:
            GrammarConfigurationError: If no grammar is registered under ``name``
        """
        grammar = self.get_grammar(name)
        if grammar is None:
            raise GrammarConfigurationError(
                f"Unknown grammar: {name}",
                details={"grammar": name, "available": self.get_supported_grammars()},
            )
        return grammar

    def get_supported_grammars(self) -> List[str]:
        """Get list of registered grammar names.

        Returns:
            List of grammar names
        """
        return list(self._grammars.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._grammars


registry = GrammarRegistry()

registry.register(DEFAULT_GRAMMAR)
registry.register(STRICT_GRAMMAR)
