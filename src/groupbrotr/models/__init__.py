"""Pure frozen dataclasses with zero I/O for Nostr events and filters.

The models layer has **no dependencies** on other GroupBrotr packages and no
third-party imports -- only the Python standard library. Every model uses
``@dataclass(frozen=True, slots=True)`` and validates in ``__post_init__`` so
invalid instances never escape the constructor.

Attributes:
    UnsignedEvent: Author, timestamp, kind, tags, and content of an event
        before signing.
    Event: Signed event with ``id`` and ``sig``, convertible to and from the
        NIP-01 wire object.
    Filter: NIP-01 subscription filter that omits absent fields on the wire.
    EventKind: NIP-29 group kinds plus the reaction and deletion kinds.
    ClientMessageType: ``EVENT`` and ``REQ`` envelope discriminators.
    TagName: Single-letter tag names used for scoping and references.

See Also:
    [groupbrotr.nips.nip01][]: Identity hashing and Schnorr signing of events.
    [groupbrotr.nips.nip29][]: NIP-29 catalog built on these models.
"""

from .constants import (
    EVENT_KIND_MAX,
    MODERATION_KINDS,
    SECP256K1_ORDER,
    ClientMessageType,
    EventKind,
    TagName,
)
from .event import Event, UnsignedEvent
from .filter import Filter


__all__ = [
    "EVENT_KIND_MAX",
    "MODERATION_KINDS",
    "SECP256K1_ORDER",
    "ClientMessageType",
    "Event",
    "EventKind",
    "Filter",
    "TagName",
    "UnsignedEvent",
]
