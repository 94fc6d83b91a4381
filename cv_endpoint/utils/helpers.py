"""
Common utility functions and helpers.

Most of these normalise loosely-typed request input (comma lists, newline
lists, index-keyed maps, JSON strings) into plain Python values.
"""
from __future__ import annotations

import dataclasses
import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union


def utc_timestamp() -> str:
    """
    Current UTC time as an ISO-8601 string with millisecond precision.

    Returns:
        Timestamp such as ``2026-10-19T15:04:05.123Z``
    """
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_comma_list(value: Any) -> List[str]:
    """
    Parse a comma-separated string into a list of trimmed, non-empty items.

    Args:
        value: Comma-separated string, an existing list, or None

    Returns:
        List of strings
    """
    if not value:
        return []
    if isinstance(value, list):
        return [str(v).strip() for v in value if str(v).strip()]
    return [s.strip() for s in str(value).split(",") if s.strip()]


def parse_lines(value: Any) -> List[str]:
    """
    Parse a newline-separated string into a list of trimmed, non-empty lines.

    Args:
        value: Multi-line string, an existing list, or None

    Returns:
        List of strings
    """
    if not value:
        return []
    if isinstance(value, list):
        return [str(v).strip() for v in value if str(v).strip()]
    return [s.strip() for s in str(value).split("\n") if s.strip()]


# ---------------------------------------------------------------------------
# Tagged list parsing
# ---------------------------------------------------------------------------

@dataclasses.dataclass(frozen=True)
class ParsedList:
    """A successfully parsed list value."""

    items: List[Any]
    source: str  # "sequence", "index-map", "json" or "empty"


@dataclasses.dataclass(frozen=True)
class ParseFailure:
    """A value that could not be interpreted as a list."""

    reason: str


ListParseResult = Union[ParsedList, ParseFailure]


def _index_sort_key(key: Any) -> tuple:
    text = str(key)
    return (0, int(text), "") if text.isdigit() else (1, 0, text)


def parse_list_field(value: Any) -> ListParseResult:
    """
    Interpret a list field that may arrive in several shapes.

    Shapes are tried in a fixed order:

    1. a native list/tuple,
    2. an index-keyed map such as ``{"0": {...}, "1": {...}}`` (numeric keys
       are ordered numerically, other keys keep insertion order after them),
    3. a JSON-encoded string whose decoded value is a list.

    A missing or empty value parses to an empty list.

    Returns:
        ParsedList on success, ParseFailure otherwise
    """
    if value is None or value == "":
        return ParsedList(items=[], source="empty")

    if isinstance(value, (list, tuple)):
        return ParsedList(items=list(value), source="sequence")

    if isinstance(value, dict):
        ordered_keys = sorted(value.keys(), key=_index_sort_key)
        return ParsedList(items=[value[k] for k in ordered_keys], source="index-map")

    if isinstance(value, str):
        try:
            decoded = json.loads(value)
        except ValueError as exc:
            return ParseFailure(reason=f"invalid JSON: {exc}")
        if isinstance(decoded, list):
            return ParsedList(items=decoded, source="json")
        return ParseFailure(reason=f"JSON value is {type(decoded).__name__}, not a list")

    return ParseFailure(reason=f"unsupported type {type(value).__name__}")


def parse_category_field(value: Any) -> Dict[str, List[str]]:
    """
    Parse a category map where each value is a list or a comma-separated string.

    Entries whose value is neither are dropped.
    """
    if not isinstance(value, dict):
        return {}

    result: Dict[str, List[str]] = {}
    for category, items in value.items():
        if isinstance(items, str):
            result[str(category)] = parse_comma_list(items)
        elif isinstance(items, list):
            result[str(category)] = items
    return result


def parse_type_map(value: Any) -> Dict[str, str]:
    """Return *value* if it is a map, else an empty map."""
    if not isinstance(value, dict):
        return {}
    return dict(value)


def parse_json_object(value: Any) -> Optional[Dict[str, Any]]:
    """
    Return *value* as a dict, decoding it first if it is a JSON string.

    Returns None when the value is not (and does not decode to) an object.
    """
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return None
    if isinstance(value, dict):
        return value
    return None
