"""NIP-01 event identity, signing, verification, and wire envelopes.

The event id is the SHA-256 of the canonical JSON array
``[0, pubkey, created_at, kind, tags, content]`` serialized without
whitespace, with non-ASCII characters emitted verbatim as UTF-8 and the
standard JSON string escapes. Every implementation of the protocol must
produce the same bytes, so the serialization rules here are fixed.

Signing computes the id and signs it with
[SignatureEngine][groupbrotr.utils.crypto.SignatureEngine]; verification
recomputes the id from the stated fields and fails closed on a mismatch
before checking the signature.

Examples:
    ```python
    unsigned = UnsignedEvent(pubkey=keys.public_key_hex, created_at=now, kind=9,
                             tags=[["h", "g1"]], content="hi")
    event = sign_event(unsigned, keys)
    verify_event(event)                       # True
    encode_message(event_envelope(event))     # '["EVENT",{"id":"...",...}]'
    ```

See Also:
    [groupbrotr.nips.nip29][]: Group action builders that call
        [sign_event()][groupbrotr.nips.nip01.sign_event].
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from groupbrotr.core.exceptions import ProtocolError
from groupbrotr.models.constants import ClientMessageType
from groupbrotr.models.event import Event, UnsignedEvent
from groupbrotr.utils.crypto import SignatureEngine, bytes_to_hex, hex_to_bytes, sha256


if TYPE_CHECKING:
    from groupbrotr.models.filter import Filter
    from groupbrotr.utils.keys import KeyPair


logger = logging.getLogger("groupbrotr.nips.nip01")

_SERIALIZATION_PREFIX = 0

_default_engine = SignatureEngine()


# =============================================================================
# Identity
# =============================================================================


def serialize_event(
    pubkey: str,
    created_at: int,
    kind: int,
    tags: Sequence[Sequence[str]],
    content: str,
) -> bytes:
    """Return the canonical UTF-8 serialization the event id is computed over.

    Raises:
        UnicodeEncodeError: If a string holds a lone surrogate. Event models
            reject such strings at construction.
    """
    data = [
        _SERIALIZATION_PREFIX,
        pubkey,
        int(created_at),
        int(kind),
        [list(tag) for tag in tags],
        content,
    ]
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def compute_event_id(
    pubkey: str,
    created_at: int,
    kind: int,
    tags: Sequence[Sequence[str]],
    content: str,
) -> bytes:
    """Return the 32-byte event id: SHA-256 of the canonical serialization."""
    return sha256(serialize_event(pubkey, created_at, kind, tags, content))


def _unsigned_id(unsigned: UnsignedEvent) -> bytes:
    return compute_event_id(
        unsigned.pubkey, unsigned.created_at, unsigned.kind, unsigned.tags, unsigned.content
    )


# =============================================================================
# Sign / Verify
# =============================================================================


def sign_event(
    unsigned: UnsignedEvent,
    keys: KeyPair,
    engine: SignatureEngine | None = None,
) -> Event:
    """Compute the id of *unsigned* and sign it with *keys*.

    Args:
        unsigned: Finalized event fields. ``pubkey`` must belong to *keys*.
        keys: Key pair whose secret signs the id.
        engine: Signature engine; the module default when omitted.

    Returns:
        The immutable signed [Event][groupbrotr.models.event.Event].

    Raises:
        ProtocolError: If ``unsigned.pubkey`` does not match *keys*.
    """
    if unsigned.pubkey != keys.public_key_hex:
        raise ProtocolError("event pubkey does not match the signing key")

    engine = engine or _default_engine
    event_id = _unsigned_id(unsigned)
    signature = engine.sign(keys.secret, event_id)
    event = Event(
        pubkey=unsigned.pubkey,
        created_at=unsigned.created_at,
        kind=unsigned.kind,
        tags=unsigned.tags,
        content=unsigned.content,
        id=bytes_to_hex(event_id),
        sig=bytes_to_hex(signature),
    )
    logger.debug("event_signed kind=%s id=%s", event.kind, event.id)
    return event


def verify_event(event: Event, engine: SignatureEngine | None = None) -> bool:
    """Check that *event* has a correct id and a valid signature.

    The id is recomputed from the stated fields first. A mismatch returns
    ``False`` without consulting the signature.
    """
    engine = engine or _default_engine
    expected_id = _unsigned_id(event.unsigned)
    if bytes_to_hex(expected_id) != event.id:
        logger.debug("event_rejected reason=id_mismatch id=%s", event.id)
        return False

    valid = engine.verify(hex_to_bytes(event.sig), expected_id, hex_to_bytes(event.pubkey))
    if not valid:
        logger.debug("event_rejected reason=bad_signature id=%s", event.id)
    return valid


# =============================================================================
# Envelopes
# =============================================================================


def event_envelope(event: Event) -> list[Any]:
    """Wrap *event* as ``["EVENT", <event-object>]``."""
    return [ClientMessageType.EVENT.value, event.to_dict()]


def request_envelope(subscription_id: str, *filters: Filter) -> list[Any]:
    """Wrap filters as ``["REQ", <subscription_id>, <filter>...]``.

    Raises:
        ProtocolError: If the subscription id is empty or no filter is given.
    """
    if not isinstance(subscription_id, str) or not subscription_id:
        raise ProtocolError("subscription id must be a non-empty string")
    if not filters:
        raise ProtocolError("a REQ needs at least one filter")
    return [ClientMessageType.REQ.value, subscription_id, *(f.to_dict() for f in filters)]


def encode_message(envelope: Sequence[Any]) -> str:
    """Serialize an envelope as compact JSON text for the transport."""
    return json.dumps(list(envelope), separators=(",", ":"), ensure_ascii=False)


def parse_event_envelope(data: Any) -> Event:
    """Extract the event from a decoded ``EVENT`` envelope or bare event object.

    Accepts the client form ``["EVENT", {...}]``, the relay form
    ``["EVENT", <subscription_id>, {...}]``, or the event object alone. The
    result is only structurally valid; pass it to
    [verify_event()][groupbrotr.nips.nip01.verify_event].

    Raises:
        ProtocolError: If *data* is not one of those shapes or the event
            object is malformed.
    """
    if isinstance(data, list):
        if not data or data[0] != ClientMessageType.EVENT:
            raise ProtocolError("not an EVENT envelope")
        if len(data) == 2:  # noqa: PLR2004
            payload = data[1]
        elif len(data) == 3 and isinstance(data[1], str):  # noqa: PLR2004
            payload = data[2]
        else:
            raise ProtocolError(f"EVENT envelope has unexpected length {len(data)}")
    else:
        payload = data

    try:
        return Event.from_dict(payload)
    except (TypeError, ValueError) as e:
        raise ProtocolError(f"malformed event: {e}") from e
