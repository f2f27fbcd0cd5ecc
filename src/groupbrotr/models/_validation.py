"""Shared validation helpers for frozen dataclass models.

Private module -- not part of the public API. Used by ``__post_init__``
methods in sibling model modules to enforce runtime type constraints and
to freeze nested tag and filter values into tuples.
"""

from __future__ import annotations

import string
from collections.abc import Iterable, Mapping
from typing import Any

from .constants import EVENT_KIND_MAX


_HEX_DIGITS = frozenset(string.hexdigits.lower())


def validate_instance(value: Any, expected: type, name: str) -> None:
    """Raise ``TypeError`` if *value* is not an instance of *expected*."""
    if not isinstance(value, expected):
        article = "an" if expected.__name__[0] in "AEIOUaeiou" else "a"
        raise TypeError(f"{name} must be {article} {expected.__name__}, got {type(value).__name__}")


def validate_utf8(value: str, name: str) -> None:
    """Raise ``ValueError`` if *value* has no UTF-8 encoding (lone surrogates)."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ValueError(f"{name} is not valid UTF-8 text: {e.reason} at index {e.start}") from e


def validate_int(value: Any, name: str) -> None:
    """Raise ``TypeError`` if *value* is not an ``int`` (``bool`` excluded)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")


def validate_timestamp(value: Any, name: str) -> None:
    """Raise if *value* is not a non-negative ``int`` (``bool`` excluded)."""
    validate_int(value, name)
    if value < 0:
        raise ValueError(f"{name} must be non-negative")


def validate_kind(value: Any, name: str = "kind") -> None:
    """Raise if *value* is not an ``int`` in ``[0, EVENT_KIND_MAX]``."""
    validate_int(value, name)
    if not 0 <= value <= EVENT_KIND_MAX:
        raise ValueError(f"{name} must be between 0 and {EVENT_KIND_MAX}, got {value}")


def validate_hex(value: Any, name: str, length: int) -> None:
    """Raise if *value* is not a lowercase hex string of exactly *length* chars."""
    validate_instance(value, str, name)
    if len(value) != length:
        raise ValueError(f"{name} must be {length} hex chars, got {len(value)}")
    if not _HEX_DIGITS.issuperset(value):
        raise ValueError(f"{name} must be lowercase hex")


def freeze_tags(value: Any, name: str = "tags") -> tuple[tuple[str, ...], ...]:
    """Convert a sequence of string sequences into a tuple of tuples.

    Order is preserved at both levels. Plain strings are rejected at either
    level because iterating them would silently split characters.
    """
    if isinstance(value, str | bytes) or not isinstance(value, Iterable):
        raise TypeError(f"{name} must be a sequence of string sequences")
    frozen: list[tuple[str, ...]] = []
    for i, tag in enumerate(value):
        if isinstance(tag, str | bytes) or not isinstance(tag, Iterable):
            raise TypeError(f"{name}[{i}] must be a sequence of strings")
        items = tuple(tag)
        for j, item in enumerate(items):
            if not isinstance(item, str):
                raise TypeError(f"{name}[{i}][{j}] must be a str, got {type(item).__name__}")
            validate_utf8(item, f"{name}[{i}][{j}]")
        frozen.append(tuple(str(item) for item in items))
    return tuple(frozen)


def freeze_str_values(value: Any, name: str) -> tuple[str, ...]:
    """Convert an iterable of strings into a tuple, rejecting bare strings."""
    if isinstance(value, str | bytes) or not isinstance(value, Iterable):
        raise TypeError(f"{name} must be a sequence of str")
    items = tuple(value)
    for item in items:
        if not isinstance(item, str):
            raise TypeError(f"{name} values must be str, got {type(item).__name__}")
        validate_utf8(item, name)
    return items


def validate_mapping(value: Any, name: str) -> None:
    """Raise ``TypeError`` if *value* is not a ``Mapping``."""
    if not isinstance(value, Mapping):
        raise TypeError(f"{name} must be a Mapping, got {type(value).__name__}")
