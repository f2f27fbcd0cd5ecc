"""
Subscription filters (NIP-01).

A [Filter][groupbrotr.models.filter.Filter] describes which events a relay
should stream back for a ``REQ``. Every field is optional; a filter with all
fields absent is legal and leaves narrowing to the relay's defaults.

Tag constraints are keyed by a single-letter tag name and rendered on the
wire as ``"#<letter>"``. Values within one key are alternatives (OR); separate
keys must all match (AND).

See Also:
    [request_envelope()][groupbrotr.nips.nip01.request_envelope]: Wraps one or
        more filters in a ``["REQ", ...]`` frame.
    [Nip29.query()][groupbrotr.nips.nip29.builders.Nip29.query]: Builds group
        scoped filters from the query catalog.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from ._validation import (
    freeze_str_values,
    validate_kind,
    validate_mapping,
    validate_timestamp,
)


def _freeze_optional_values(value: Any, name: str) -> tuple[str, ...] | None:
    return None if value is None else freeze_str_values(value, name)


@dataclass(frozen=True, slots=True)
class Filter:
    """Immutable NIP-01 subscription filter.

    Args:
        ids: Event ids to match.
        kinds: Event kinds to match.
        authors: Author public keys (hex) to match.
        tags: Mapping of single-letter tag name to accepted values, e.g.
            ``{"h": ["my-group"]}``. Keys may also be given with the ``#``
            prefix; it is stripped.
        since: Inclusive lower bound on ``created_at`` (seconds).
        until: Inclusive upper bound on ``created_at`` (seconds).
        limit: Maximum number of stored events the relay should return.

    Raises:
        TypeError: If a field has the wrong type.
        ValueError: If a tag name is not a single letter, a kind is out of
            range, a bound or the limit is negative, or ``since > until``.

    Examples:
        ```python
        Filter(kinds=[9], tags={"h": ["g1"]}, limit=10).to_dict()
        # {"kinds": [9], "#h": ["g1"], "limit": 10}

        Filter().to_dict()
        # {}
        ```
    """

    ids: tuple[str, ...] | None = None
    kinds: tuple[int, ...] | None = None
    authors: tuple[str, ...] | None = None
    tags: Mapping[str, tuple[str, ...]] | None = None
    since: int | None = None
    until: int | None = None
    limit: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "ids", _freeze_optional_values(self.ids, "ids"))
        object.__setattr__(self, "authors", _freeze_optional_values(self.authors, "authors"))

        if self.kinds is not None:
            if isinstance(self.kinds, int):
                raise TypeError("kinds must be a sequence of int")
            kinds = tuple(self.kinds)
            for kind in kinds:
                validate_kind(kind, "kinds")
            object.__setattr__(self, "kinds", tuple(int(k) for k in kinds))

        if self.tags is not None:
            validate_mapping(self.tags, "tags")
            frozen: dict[str, tuple[str, ...]] = {}
            for key, values in self.tags.items():
                letter = key[1:] if isinstance(key, str) and key.startswith("#") else key
                if not isinstance(letter, str) or len(letter) != 1 or not letter.isalpha():
                    raise ValueError(f"tag filter key must be a single letter, got {key!r}")
                frozen[letter] = freeze_str_values(values, f"tags[{letter!r}]")
            object.__setattr__(self, "tags", MappingProxyType(frozen))

        for name in ("since", "until", "limit"):
            value = getattr(self, name)
            if value is not None:
                validate_timestamp(value, name)

        if self.since is not None and self.until is not None and self.since > self.until:
            raise ValueError(f"since ({self.since}) must not be after until ({self.until})")

    def to_dict(self) -> dict[str, Any]:
        """Return the wire filter object, omitting absent fields entirely."""
        result: dict[str, Any] = {}
        if self.ids is not None:
            result["ids"] = list(self.ids)
        if self.kinds is not None:
            result["kinds"] = list(self.kinds)
        if self.tags is not None:
            for letter, values in self.tags.items():
                result[f"#{letter}"] = list(values)
        if self.authors is not None:
            result["authors"] = list(self.authors)
        if self.since is not None:
            result["since"] = self.since
        if self.until is not None:
            result["until"] = self.until
        if self.limit is not None:
            result["limit"] = self.limit
        return result

    def __hash__(self) -> int:
        tags = None if self.tags is None else tuple(self.tags.items())
        return hash((self.ids, self.kinds, self.authors, tags, self.since, self.until, self.limit))
