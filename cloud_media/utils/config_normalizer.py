"""Gallery settings normalizer.

Turns flat plugin settings into the nested, type-coerced document the
gallery widget expects::

    {"show_arrows": "on", "thumbnail_props.width": "100", "useless": "none"}
    → {"showArrows": True, "thumbnailProps": {"width": 100}}

Steps, in order:

1. Coerce values (``"on"``/``"off"`` → bool, numeric strings → int);
   ``"none"`` drops the key.
2. Rename keys to lowerCamelCase.
3. Expand dot-notation keys into nested documents, deep-merging siblings.
4. Recursively prune empty values (``False`` and ``0`` are kept).

Every function here returns new containers and never mutates its input,
so one settings mapping can feed any number of assemblies.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any

from cloud_media.core.exceptions import InvalidConfigValue

ConfigDocument = dict[str, Any]

REMOVE_MARKER = "none"

_INT_RE = re.compile(r"\s*[+-]?[0-9]{1,19}\s*")
_DECIMAL_RE = re.compile(r"\s*[+-]?([0-9]{1,19}\.[0-9]*|\.[0-9]+)\s*")


class _Removed:
    """Sentinel for values that drop their key."""

    def __repr__(self) -> str:
        return "REMOVED"


REMOVED = _Removed()


def coerce_value(value: object) -> object:
    """Coerce one raw settings value.

    Returns ``REMOVED`` for the ``"none"`` marker.  Decimal strings and
    floats are truncated to ``int``.  Numeric strings with more than 19
    integer digits stay strings.

    Raises:
        InvalidConfigValue: If ``value`` is a NaN or infinite float.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            msg = f"Settings value {value!r} is not a finite number"
            raise InvalidConfigValue(msg)
        return int(value)
    if not isinstance(value, str):
        return value
    if value == REMOVE_MARKER:
        return REMOVED
    if value in ("on", "off"):
        return value == "on"
    if _INT_RE.fullmatch(value):
        return int(value)
    if _DECIMAL_RE.fullmatch(value):
        return int(float(value))
    return value


def to_lower_camel(key: str) -> str:
    """``enable_gallery`` → ``enableGallery``; camelCase keys are unchanged."""
    camel = "".join(part[:1].upper() + part[1:] for part in key.split("_"))
    return camel[:1].lower() + camel[1:]


def prepare_config(flat: Mapping[str, object]) -> ConfigDocument:
    """Coerce values and rename keys.  Later duplicates win."""
    prepared: ConfigDocument = {}
    for key, raw in flat.items():
        value = coerce_value(raw)
        if value is REMOVED:
            continue
        prepared[to_lower_camel(key)] = value
    return prepared


def deep_merge(base: Mapping[str, Any], other: Mapping[str, Any]) -> ConfigDocument:
    """Merge ``other`` into a copy of ``base``.

    Nested documents on both sides merge recursively; any other collision
    resolves to the value from ``other``.
    """
    merged: ConfigDocument = dict(base)
    for key, value in other.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def nest_key(key: str, value: object) -> ConfigDocument:
    """Build a right-nested single-key document from a dotted key."""
    nested: Any = value
    for component in reversed(key.split(".")):
        nested = {component: nested}
    return nested


def expand_dot_notation(document: Mapping[str, Any]) -> ConfigDocument:
    """Expand dotted keys into nested documents, in iteration order."""
    result: ConfigDocument = {}
    for key, value in document.items():
        if isinstance(value, Mapping):
            value = expand_dot_notation(value)
        result = deep_merge(result, nest_key(key, value))
    return result


def is_empty(value: object) -> bool:
    """Emptiness, not falsity: ``False`` and ``0`` are not empty."""
    if value is None:
        return True
    if isinstance(value, str | Mapping | list | tuple):
        return len(value) == 0
    return False


def prune_empty(document: Mapping[str, Any]) -> ConfigDocument:
    """Recursively drop empty values, children first."""
    pruned: ConfigDocument = {}
    for key, value in document.items():
        if isinstance(value, Mapping):
            value = prune_empty(value)
        if not is_empty(value):
            pruned[key] = value
    return pruned


def flatten_document(document: Mapping[str, Any], prefix: str = "") -> dict[str, object]:
    """Re-flatten a nested document into dot-notation keys."""
    flat: dict[str, object] = {}
    for key, value in document.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, Mapping):
            flat.update(flatten_document(value, path))
        else:
            flat[path] = value
    return flat


def normalize(settings: Mapping[str, Any]) -> ConfigDocument:
    """Normalize gallery settings into a nested camelCase document.

    Nested mappings in the input are flattened first, so the function is
    idempotent: ``normalize(normalize(x)) == normalize(x)``.

    Args:
        settings: Flat (or nested) settings mapping.

    Returns:
        A new nested document with no empty values and no dotted keys.
    """
    prepared = prepare_config(flatten_document(settings))
    return prune_empty(expand_dot_notation(prepared))
