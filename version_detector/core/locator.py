"""Locate where a version begins inside free-form text."""

from typing import Iterable, List, Optional, Union
from urllib.parse import unquote

Marker = Union[str, None, bool]


def usable_markers(markers: Iterable[Marker]) -> List[str]:
    """Percent-decode markers, dropping empty and placeholder entries.

    Args:
        markers: Ordered marker tokens, possibly percent-escaped

    Returns:
        Decoded markers in their original order
    """
    decoded = []
    for marker in markers or ():
        if not marker or not isinstance(marker, str):
            continue
        marker = unquote(marker)
        if marker:
            decoded.append(marker)
    return decoded


def locate(text: str, markers: Iterable[Marker]) -> Optional[int]:
    """Find the offset just past the first marker present in ``text``.

    Markers are tried in order; the first one occurring anywhere in the
    (percent-decoded) text wins, at its earliest occurrence.

    Args:
        text: Text to search, e.g. a user agent
        markers: Ordered marker tokens

    Returns:
        Offset into the decoded text, or None when no marker occurs
    """
    if not isinstance(text, str) or not text:
        return None

    text = unquote(text)

    for marker in usable_markers(markers):
        position = text.find(marker)
        if position != -1:
            return position + len(marker)

    return None


def locate_tail(text: str, markers: Iterable[Marker]) -> Optional[str]:
    """Return the decoded text following the first located marker."""
    offset = locate(text, markers)
    if offset is None:
        return None
    return unquote(text)[offset:]
