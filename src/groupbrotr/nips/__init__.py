"""Nostr Implementation Possibilities -- event identity and group messaging.

The NIPs layer sits above [groupbrotr.models][groupbrotr.models] and
[groupbrotr.utils][groupbrotr.utils]. It performs no I/O: every function
returns values (events, envelopes, JSON text) for a transport owned by the
caller.

Attributes:
    nip01: Canonical serialization, event id hashing, Schnorr signing and
        verification, and the ``EVENT``/``REQ`` envelopes.
    Nip29: Builder for NIP-29 group actions and group subscriptions, driven
        by a static catalog of kinds and tag rules.

See Also:
    [groupbrotr.utils.crypto.SignatureEngine][groupbrotr.utils.crypto.SignatureEngine]:
        BIP-340 primitives used by [sign_event()][groupbrotr.nips.nip01.sign_event].
"""

from groupbrotr.nips.nip01 import (
    compute_event_id,
    encode_message,
    event_envelope,
    parse_event_envelope,
    request_envelope,
    serialize_event,
    sign_event,
    verify_event,
)
from groupbrotr.nips.nip29 import GroupAction, GroupQuery, Nip29, Nip29Config


__all__ = [
    "GroupAction",
    "GroupQuery",
    "Nip29",
    "Nip29Config",
    "compute_event_id",
    "encode_message",
    "event_envelope",
    "parse_event_envelope",
    "request_envelope",
    "serialize_event",
    "sign_event",
    "verify_event",
]
