"""
Immutable Nostr event records.

[UnsignedEvent][groupbrotr.models.event.UnsignedEvent] holds the five fields
a caller chooses (author, timestamp, kind, tags, content).
[Event][groupbrotr.models.event.Event] adds the derived ``id`` and ``sig``
produced by [sign_event()][groupbrotr.nips.nip01.sign_event]. Both are frozen:
changing any field means building a new record and signing it again.

This module performs no hashing or signing; it only validates shapes and
converts to and from the NIP-01 wire object.

See Also:
    [groupbrotr.nips.nip01][]: Canonical serialization, identity hashing,
        signing, and verification of these records.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ._validation import (
    freeze_tags,
    validate_hex,
    validate_instance,
    validate_kind,
    validate_mapping,
    validate_timestamp,
    validate_utf8,
)


_PUBKEY_HEX_LENGTH = 64
_ID_HEX_LENGTH = 64
_SIG_HEX_LENGTH = 128

_WIRE_FIELDS = ("id", "pubkey", "created_at", "kind", "tags", "content", "sig")


@dataclass(frozen=True, slots=True)
class UnsignedEvent:
    """Event fields prior to signing.

    Args:
        pubkey: Author x-only public key, 64 lowercase hex chars.
        created_at: Unix timestamp in seconds.
        kind: Event kind in ``[0, 65535]``.
        tags: Sequence of string sequences; frozen into a tuple of tuples.
            Order is significant at both levels.
        content: Event content, possibly empty.

    Raises:
        TypeError: If a field has the wrong type.
        ValueError: If ``pubkey`` is not 64 hex chars, ``created_at`` is
            negative, ``kind`` is out of range, or content or a tag item
            contains a lone surrogate.
    """

    pubkey: str
    created_at: int
    kind: int
    tags: tuple[tuple[str, ...], ...] = ()
    content: str = ""

    def __post_init__(self) -> None:
        validate_hex(self.pubkey, "pubkey", _PUBKEY_HEX_LENGTH)
        validate_timestamp(self.created_at, "created_at")
        validate_kind(self.kind)
        validate_instance(self.content, str, "content")
        validate_utf8(self.content, "content")
        object.__setattr__(self, "tags", freeze_tags(self.tags))
        # IntEnum members serialize as ints but keep the plain int canonical
        object.__setattr__(self, "kind", int(self.kind))

    def tags_as_lists(self) -> list[list[str]]:
        """Return tags as a list of lists, the shape used in JSON."""
        return [list(tag) for tag in self.tags]


@dataclass(frozen=True, slots=True)
class Event:
    """A signed Nostr event as carried on the wire.

    Instances are produced by [sign_event()][groupbrotr.nips.nip01.sign_event]
    or parsed from relay data with
    [from_dict()][groupbrotr.models.event.Event.from_dict]. A parsed event is
    only structurally valid; call
    [verify_event()][groupbrotr.nips.nip01.verify_event] before trusting it.

    Args:
        pubkey: Author x-only public key, 64 lowercase hex chars.
        created_at: Unix timestamp in seconds.
        kind: Event kind in ``[0, 65535]``.
        tags: Tag sequences, frozen into a tuple of tuples.
        content: Event content.
        id: SHA-256 of the canonical serialization, 64 lowercase hex chars.
        sig: BIP-340 Schnorr signature over ``id``, 128 lowercase hex chars.

    Examples:
        ```python
        event = Event.from_dict(json.loads(raw))
        event.to_dict()["kind"]   # 9
        event.tag_values("h")     # ["my-group"]
        ```
    """

    pubkey: str
    created_at: int
    kind: int
    tags: tuple[tuple[str, ...], ...]
    content: str
    id: str
    sig: str
    _unsigned: UnsignedEvent = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        validate_hex(self.id, "id", _ID_HEX_LENGTH)
        validate_hex(self.sig, "sig", _SIG_HEX_LENGTH)
        unsigned = UnsignedEvent(
            pubkey=self.pubkey,
            created_at=self.created_at,
            kind=self.kind,
            tags=self.tags,
            content=self.content,
        )
        object.__setattr__(self, "tags", unsigned.tags)
        object.__setattr__(self, "kind", unsigned.kind)
        object.__setattr__(self, "_unsigned", unsigned)

    @property
    def unsigned(self) -> UnsignedEvent:
        """The stated fields that the identity hash is computed over."""
        return self._unsigned

    def tag_values(self, name: str) -> list[str]:
        """Return the first value of every tag named *name*, in order."""
        return [tag[1] for tag in self.tags if len(tag) > 1 and tag[0] == name]

    def to_dict(self) -> dict[str, Any]:
        """Return the NIP-01 wire object."""
        return {
            "id": self.id,
            "pubkey": self.pubkey,
            "created_at": self.created_at,
            "kind": self.kind,
            "tags": self._unsigned.tags_as_lists(),
            "content": self.content,
            "sig": self.sig,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Event:
        """Build an event from a decoded NIP-01 wire object.

        Args:
            data: Mapping with ``id``, ``pubkey``, ``created_at``, ``kind``,
                ``tags``, ``content`` and ``sig``. Extra keys are ignored.

        Raises:
            TypeError: If *data* is not a mapping or a field has the wrong type.
            ValueError: If a required field is missing or malformed.
        """
        validate_mapping(data, "event")
        missing = [name for name in _WIRE_FIELDS if name not in data]
        if missing:
            raise ValueError(f"event is missing fields: {', '.join(missing)}")
        return cls(
            pubkey=data["pubkey"],
            created_at=data["created_at"],
            kind=data["kind"],
            tags=data["tags"],
            content=data["content"],
            id=data["id"],
            sig=data["sig"],
        )
