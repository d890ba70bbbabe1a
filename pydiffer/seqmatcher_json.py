"""
Interchange form of Match, Span and Tag.

Mapping:
    Tag    → "equal" | "insert" | "delete" | "replace"
    Match  → {"a_start", "b_start", "length"}
    Span   → {"tag", "a_start", "a_end", "b_start", "b_end"}
    list   → list, element-wise

JSON text goes through the standard json module.
"""

import json
from typing import Any

from pydiffer.seqmatcher import Match, Span, Tag


_MATCH_KEYS = Match._fields
_SPAN_INDEX_KEYS = Span._fields[1:]


def to_python(obj: Any) -> Any:
    """Convert a Tag, Match, Span, or a list/tuple of them, to plain Python."""
    if isinstance(obj, Tag):
        return obj.value
    if isinstance(obj, Span):  # Span and Match must be checked before tuple
        return {"tag": Tag(obj.tag).value, **{k: getattr(obj, k) for k in _SPAN_INDEX_KEYS}}
    if isinstance(obj, Match):
        return obj._asdict()
    if isinstance(obj, (list, tuple)):
        return [to_python(item) for item in obj]
    raise ValueError(f"Cannot convert {type(obj).__name__} to an interchange value")


def _read_index(data: dict, key: str) -> int:
    try:
        value = data[key]
    except KeyError as e:
        raise ValueError(f"Missing key '{key}'") from e
    # bool is a subclass of int
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{key}' must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"'{key}' must not be negative, got {value}")
    return value


def tag_from_python(value: Any) -> Tag:
    try:
        return Tag(value)
    except ValueError as e:
        raise ValueError(f"Unknown tag {value!r}") from e


def match_from_python(data: Any) -> Match:
    if not isinstance(data, dict):
        raise ValueError(f"Match must be an object, got {type(data).__name__}")
    return Match(*(_read_index(data, k) for k in _MATCH_KEYS))


def span_from_python(data: Any) -> Span:
    if not isinstance(data, dict):
        raise ValueError(f"Span must be an object, got {type(data).__name__}")
    if "tag" not in data:
        raise ValueError("Missing key 'tag'")
    tag = tag_from_python(data["tag"])
    a_start, a_end, b_start, b_end = (_read_index(data, k) for k in _SPAN_INDEX_KEYS)
    if a_end < a_start or b_end < b_start:
        raise ValueError(f"Span ranges are reversed: {data!r}")
    return Span(tag, a_start, a_end, b_start, b_end)


def dumps(obj: Any, indent: int | None = None) -> str:
    return json.dumps(to_python(obj), indent=indent)


def _loads_list(text: str) -> list:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array, got {type(data).__name__}")
    return data


def loads_matches(text: str) -> list[Match]:
    return [match_from_python(item) for item in _loads_list(text)]


def loads_spans(text: str) -> list[Span]:
    return [span_from_python(item) for item in _loads_list(text)]
