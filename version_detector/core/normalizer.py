"""Normalize raw grammar captures into canonical version fields.

The grammar is a best-effort classifier over inconsistent real-world version
strings. Normalization never fails: unknown stability tokens degrade to
``stable``, and anything the grammar did not capture is dropped. Numeric
captures that are not ASCII digit runs (possible with custom grammars) count
as not captured.
"""

from typing import Dict, Optional

from .version import (
    DIGITS,
    NUMERIC_FIELDS,
    STABILITY_ALPHA,
    STABILITY_BETA,
    STABILITY_DEV,
    STABILITY_PATCH,
    STABILITY_RC,
    STABILITY_STABLE,
)

STABILITY_TOKENS: Dict[str, str] = {
    "rc": STABILITY_RC,
    "alpha": STABILITY_ALPHA,
    "a": STABILITY_ALPHA,
    "beta": STABILITY_BETA,
    "b": STABILITY_BETA,
    "dev": STABILITY_DEV,
    "d": STABILITY_DEV,
    "patch": STABILITY_PATCH,
    "pl": STABILITY_PATCH,
    "p": STABILITY_PATCH,
}

DEFAULTED_FIELDS = ("major", "minor", "micro")


def classify_stability(token: Optional[str]) -> str:
    """Map a raw stability token to its canonical label.

    Args:
        token: Captured token such as ``"b"``, ``"RC"`` or ``"pl"``

    Returns:
        One of the canonical stability labels; ``stable`` when unknown
    """
    if not token:
        return STABILITY_STABLE
    return STABILITY_TOKENS.get(token.strip().lower(), STABILITY_STABLE)


def _is_digits(value: Optional[str]) -> bool:
    return isinstance(value, str) and DIGITS.fullmatch(value) is not None


def normalize(captures: Optional[Dict[str, Optional[str]]]) -> Optional[Dict[str, Optional[str]]]:
    """Turn grammar captures into canonical version fields.

    Args:
        captures: Output of ``PatternExtractor.extract``

    Returns:
        Field mapping ready for ``Version(**fields)``, or None when nothing
        was captured at all
    """
    if captures:
        captures = {
            name: None if name in NUMERIC_FIELDS and not _is_digits(value) else value
            for name, value in captures.items()
        }

    if not captures or not any(captures.values()):
        return None

    fields = {
        "major": captures.get("major"),
        "minor": captures.get("minor"),
        "micro": captures.get("micro"),
        "patch": captures.get("patch") or None,
        "micropatch": captures.get("micropatch") or None,
        "stability": classify_stability(captures.get("stability")),
        "build": captures.get("build") or None,
    }

    for name in DEFAULTED_FIELDS:
        if not fields[name]:
            fields[name] = "0"

    return fields
