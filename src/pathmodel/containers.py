"""Container kinds and child access over the two supported shapes.

The model tree holds two kinds of container: SEQUENCE (a list, addressed
by non-negative decimal segments) and MAPPING (a dict keyed by segment
strings). Everything else is a leaf.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from enum import Enum
from typing import Any

from pathmodel.exceptions import PathTypeError

# Absent-value sentinel, distinct from a stored None.
MISSING: Any = object()


class Kind(Enum):
    SEQUENCE = "sequence"
    MAPPING = "mapping"


def is_index(segment: str) -> bool:
    """'0', '12' are indices; '-1', '1.5', '' and non-ASCII digits are not."""
    return segment.isascii() and segment.isdecimal()


def decide_kind(next_segment: str, create_arrays: bool) -> Kind:
    """Kind of container to create in front of next_segment."""
    if create_arrays and is_index(next_segment):
        return Kind.SEQUENCE
    return Kind.MAPPING


def new_container(kind: Kind) -> list | dict:
    return [] if kind is Kind.SEQUENCE else {}


def kind_of(value: Any) -> Kind | None:
    """Container kind of value, or None for leaves."""
    if isinstance(value, list):
        return Kind.SEQUENCE
    if isinstance(value, MutableMapping):
        return Kind.MAPPING
    return None


def read_child(container: Any, segment: str) -> Any:
    """container[segment], or MISSING if absent or container is a leaf."""
    kind = kind_of(container)
    if kind is Kind.MAPPING:
        return container.get(segment, MISSING)
    if kind is Kind.SEQUENCE and is_index(segment):
        index = int(segment)
        if index < len(container):
            return container[index]
    return MISSING


def assign_child(container: Any, segment: str, value: Any) -> None:
    """Set container[segment]. Lists grow, padding any gap with None."""
    kind = kind_of(container)
    if kind is Kind.MAPPING:
        container[segment] = value
        return
    if kind is Kind.SEQUENCE:
        if not is_index(segment):
            raise PathTypeError(f"List position needs an index, got {segment!r}")
        index = int(segment)
        if index >= len(container):
            container.extend([None] * (index - len(container)))
            container.append(value)
        else:
            container[index] = value
        return
    raise PathTypeError(
        f"Cannot assign {segment!r} inside a {type(container).__name__} leaf"
    )


def remove_child(container: Any, segment: str) -> Any:
    """Remove container[segment] and return it, or MISSING if it was absent.

    Removing from a list shifts the following items down by one.
    """
    kind = kind_of(container)
    if kind is Kind.MAPPING:
        return container.pop(segment, MISSING)
    if kind is Kind.SEQUENCE and is_index(segment):
        index = int(segment)
        if index < len(container):
            return container.pop(index)
    return MISSING
