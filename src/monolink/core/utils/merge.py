"""Layer merging for monolink configuration files.

Mappings merge key by key. A list in a later layer replaces the earlier list
unless its first item is ``"+"``, in which case the remaining items are
appended (so a project can add to ``link.externals`` instead of restating
the user's list). A leading ``"="`` spells the replacement out explicitly.
"""
from __future__ import annotations

from typing import Any, Dict, List

APPEND_MARKER = "+"
REPLACE_MARKER = "="


def _merge_list(base: List[Any], layer: List[Any]) -> List[Any]:
    if not layer:
        return base
    if layer[0] == APPEND_MARKER:
        return [*base, *layer[1:]]
    if layer[0] == REPLACE_MARKER:
        return list(layer[1:])
    return list(layer)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``base`` with ``override`` layered on top; neither input is mutated.

    >>> deep_merge({"link": {"roots": ["."]}}, {"link": {"dryRun": True}})
    {'link': {'roots': ['.'], 'dryRun': True}}
    """
    merged: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            merged[key] = _merge_list(current, value)
        else:
            merged[key] = value
    return merged


__all__ = ["APPEND_MARKER", "REPLACE_MARKER", "deep_merge"]
