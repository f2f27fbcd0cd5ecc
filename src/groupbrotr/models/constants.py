"""Shared constants for the models layer.

Defines the event kinds, wire message types, and curve parameters used across
multiple modules. Placing them here avoids circular dependencies between the
models, utils, and nips layers.

See Also:
    [groupbrotr.nips.nip29.catalog][]: Maps each
        [GroupAction][groupbrotr.nips.nip29.catalog.GroupAction] to an
        [EventKind][groupbrotr.models.constants.EventKind].
    [groupbrotr.utils.crypto][]: Uses
        [SECP256K1_ORDER][groupbrotr.models.constants.SECP256K1_ORDER] for
        scalar range checks and even-Y normalization.
"""

from __future__ import annotations

from enum import IntEnum, StrEnum


class EventKind(IntEnum):
    """Nostr event kinds used by NIP-29 relay-based groups.

    Attributes:
        DELETION: Kind 5 -- NIP-09 deletion of the author's own message.
        REACTION: Kind 7 -- NIP-25 reaction to a group message.
        GROUP_CHAT_MESSAGE: Kind 9 -- group chat message or threaded reply.
        PUT_USER: Kind 9000 -- moderation: add a user (optionally with roles).
        REMOVE_USER: Kind 9001 -- moderation: remove a user.
        EDIT_METADATA: Kind 9002 -- moderation: edit group name, picture, flags.
        DELETE_EVENT: Kind 9005 -- moderation: delete any event in the group.
        CREATE_GROUP: Kind 9007 -- moderation: create the group.
        DELETE_GROUP: Kind 9008 -- moderation: delete the group.
        CREATE_INVITE: Kind 9009 -- moderation: create an invite code.
        JOIN_REQUEST: Kind 9021 -- user request to join (optionally with a code).
        LEAVE_REQUEST: Kind 9022 -- user request to leave.
        GROUP_METADATA: Kind 39000 -- relay-signed group metadata (``d``-tagged).
        GROUP_ADMINS: Kind 39001 -- relay-signed admin list.
        GROUP_MEMBERS: Kind 39002 -- relay-signed member list.
        GROUP_ROLES: Kind 39003 -- relay-signed role definitions.
    """

    DELETION = 5
    REACTION = 7
    GROUP_CHAT_MESSAGE = 9
    PUT_USER = 9_000
    REMOVE_USER = 9_001
    EDIT_METADATA = 9_002
    DELETE_EVENT = 9_005
    CREATE_GROUP = 9_007
    DELETE_GROUP = 9_008
    CREATE_INVITE = 9_009
    JOIN_REQUEST = 9_021
    LEAVE_REQUEST = 9_022
    GROUP_METADATA = 39_000
    GROUP_ADMINS = 39_001
    GROUP_MEMBERS = 39_002
    GROUP_ROLES = 39_003


MODERATION_KINDS: tuple[EventKind, ...] = (
    EventKind.PUT_USER,
    EventKind.REMOVE_USER,
    EventKind.EDIT_METADATA,
    EventKind.DELETE_EVENT,
    EventKind.CREATE_GROUP,
    EventKind.DELETE_GROUP,
    EventKind.CREATE_INVITE,
)
"""Kinds returned by a default moderation-history query."""


class ClientMessageType(StrEnum):
    """Discriminators of client-to-relay wire envelopes (NIP-01).

    Attributes:
        EVENT: ``["EVENT", <event>]`` -- publish a signed event.
        REQ: ``["REQ", <subscription_id>, <filter>...]`` -- subscribe.
    """

    EVENT = "EVENT"
    REQ = "REQ"


class TagName(StrEnum):
    """Single-letter tag names used for indexing and filtering.

    Attributes:
        GROUP: ``h`` -- scopes an event to a NIP-29 group.
        IDENTIFIER: ``d`` -- identifies the group on relay-signed state events.
        PUBKEY: ``p`` -- references a user.
        EVENT: ``e`` -- references an event.
        KIND: ``k`` -- kind of the referenced event (NIP-25).
    """

    GROUP = "h"
    IDENTIFIER = "d"
    PUBKEY = "p"
    EVENT = "e"
    KIND = "k"


EVENT_KIND_MAX = 65_535

SECP256K1_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
"""Order ``n`` of the secp256k1 base point; valid secret scalars lie in (0, n)."""

SECRET_KEY_SIZE = 32
MESSAGE_HASH_SIZE = 32
XONLY_PUBKEY_SIZE = 32
COMPRESSED_PUBKEY_SIZE = 33
SIGNATURE_SIZE = 64
