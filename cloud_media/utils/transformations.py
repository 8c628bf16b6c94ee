"""Default transformation recognizer for legacy delivery paths.

A transformation segment is a comma-separated list of ``<param>_<value>``
directives, e.g. ``w_200,h_200,c_fill``.  A segment is recognised only
when *every* directive uses a known delivery parameter (or a
``$variable``), so ordinary public-id segments such as ``my_photo`` are
left alone.

The recognizer is injected into ``parse_legacy_path``; any callable with
the signature ``(segment: str) -> list[dict[str, object]]`` can replace it.
"""

from __future__ import annotations

import re
from collections.abc import Callable

TransformationSet = list[dict[str, object]]
Recognizer = Callable[[str], TransformationSet]

# Delivery URL parameter abbreviations.
KNOWN_PARAMETERS: frozenset[str] = frozenset(
    {
        "a",
        "ac",
        "af",
        "ar",
        "b",
        "bo",
        "br",
        "c",
        "co",
        "cs",
        "d",
        "dl",
        "dn",
        "dpr",
        "du",
        "e",
        "eo",
        "f",
        "fl",
        "fn",
        "fps",
        "g",
        "h",
        "if",
        "ki",
        "l",
        "o",
        "p",
        "pg",
        "q",
        "r",
        "so",
        "sp",
        "t",
        "u",
        "vc",
        "vs",
        "w",
        "x",
        "y",
        "z",
    }
)

_DIRECTIVE_RE = re.compile(r"(?P<key>\$[A-Za-z][A-Za-z0-9_]*|[a-z]{1,3})_(?P<value>.+)")
_INT_RE = re.compile(r"-?[0-9]{1,19}")
_FLOAT_RE = re.compile(r"-?([0-9]{1,19}\.[0-9]{0,19}|\.[0-9]{1,19})")


def _coerce_value(value: str) -> object:
    """Coerce bounded numeric values; anything else stays a string."""
    if _INT_RE.fullmatch(value):
        return int(value)
    if _FLOAT_RE.fullmatch(value):
        return float(value)
    return value


def get_transformations_from_string(segment: str) -> TransformationSet:
    """Decode a path segment into a transformation set.

    Args:
        segment: A single path segment (no ``/``).

    Returns:
        ``[{param: value, ...}]`` if the segment is transformation syntax,
        otherwise an empty list.  Numeric values are coerced to ``int`` or
        ``float``.
    """
    if not segment or "/" in segment:
        return []

    directives: dict[str, object] = {}
    for part in segment.split(","):
        match = _DIRECTIVE_RE.fullmatch(part)
        if match is None:
            return []
        key = match.group("key")
        if not key.startswith("$") and key not in KNOWN_PARAMETERS:
            return []
        directives[key] = _coerce_value(match.group("value"))

    return [directives] if directives else []
