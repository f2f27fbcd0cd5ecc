"""Static catalog of NIP-29 group actions and group queries.

Each publishable action is one [GroupActionSpec][groupbrotr.nips.nip29.catalog.GroupActionSpec]
row in [GROUP_ACTIONS][groupbrotr.nips.nip29.catalog.GROUP_ACTIONS]: its kind,
the tag that carries the group id, a rule that turns the action's parameters
into extra tags, and the parameter that becomes the event content. A single
generic builder, [Nip29.publish()][groupbrotr.nips.nip29.builders.Nip29.publish],
consumes the table.

Read-only queries are rows in
[GROUP_QUERIES][groupbrotr.nips.nip29.catalog.GROUP_QUERIES], consumed by
[Nip29.query()][groupbrotr.nips.nip29.builders.Nip29.query].

Tag rules build sparse tag lists: a parameter that is ``None`` never produces
a tag, so every tag in a built event corresponds to something the caller
supplied (or, for invite codes and expiries, something the builder resolved).

See Also:
    [EventKind][groupbrotr.models.constants.EventKind]: Kinds referenced by
        the table.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import Any, NamedTuple

from groupbrotr.models.constants import MODERATION_KINDS, EventKind, TagName


Tags = list[list[str]]
TagRule = Callable[[Mapping[str, Any]], Tags]


# =============================================================================
# Types
# =============================================================================


class GroupAction(StrEnum):
    """Publishable NIP-29 actions."""

    JOIN_REQUEST = "join_request"
    LEAVE_REQUEST = "leave_request"
    PUT_USER = "put_user"
    REMOVE_USER = "remove_user"
    EDIT_METADATA = "edit_metadata"
    DELETE_EVENT = "delete_event"
    CREATE_GROUP = "create_group"
    DELETE_GROUP = "delete_group"
    CREATE_INVITE = "create_invite"
    MESSAGE = "message"
    REPLY = "reply"
    REACTION = "reaction"
    DELETE_MESSAGE = "delete_message"


class ContentField(StrEnum):
    """Which builder parameter becomes the event content.

    Attributes:
        REASON: Optional free-text reason; absent means empty content.
        TEXT: Required message text.
        REACTION: Reaction emoji or ``+``/``-``.
    """

    REASON = "reason"
    TEXT = "content"
    REACTION = "reaction"


class GroupActionSpec(NamedTuple):
    """One catalog row describing how an action becomes an event."""

    kind: EventKind
    group_tag: TagName
    tag_rule: TagRule
    content_field: ContentField


class GroupQuery(StrEnum):
    """Read-only NIP-29 queries."""

    MESSAGES = "messages"
    REACTIONS = "reactions"
    MEMBERSHIP = "membership"
    METADATA = "metadata"
    ADMINS = "admins"
    MEMBERS = "members"
    ROLES = "roles"
    MODERATION = "moderation"
    JOIN_LEAVE = "join_leave"


class GroupQuerySpec(NamedTuple):
    """One catalog row describing a group-scoped subscription filter.

    Attributes:
        kinds: Kinds the filter selects.
        scope_tag: Tag the query's main identifier constrains (``h`` for
            group-scoped events, ``d`` for relay-signed group state, ``e`` for
            events referencing a message).
        limit_field: Name of the
            [Nip29LimitsConfig][groupbrotr.nips.nip29.configs.Nip29LimitsConfig]
            field holding the default limit.
    """

    kinds: tuple[EventKind, ...]
    scope_tag: TagName
    limit_field: str


# =============================================================================
# Tag rules
# =============================================================================


def _no_tags(params: Mapping[str, Any]) -> Tags:
    return []


def _single(name: str, param: str) -> TagRule:
    """Rule emitting ``[name, params[param]]`` when the parameter is present."""

    def rule(params: Mapping[str, Any]) -> Tags:
        value = params.get(param)
        return [] if value is None else [[name, str(value)]]

    return rule


def _put_user_tags(params: Mapping[str, Any]) -> Tags:
    return [[TagName.PUBKEY, params["target_pubkey"], *(params.get("roles") or ())]]


def _flag(value: bool | None, when_true: str, when_false: str) -> Tags:
    if value is None:
        return []
    return [[when_true if value else when_false]]


def _edit_metadata_tags(params: Mapping[str, Any]) -> Tags:
    tags: Tags = []
    for field in ("name", "about", "picture"):
        value = params.get(field)
        if value is not None:
            tags.append([field, value])
    tags.extend(_flag(params.get("is_public"), "public", "private"))
    tags.extend(_flag(params.get("is_open"), "open", "closed"))
    return tags


def _invite_tags(params: Mapping[str, Any]) -> Tags:
    tags: Tags = [["code", params["code"]]]
    if params.get("max_uses") is not None:
        tags.append(["max_uses", str(params["max_uses"])])
    if params.get("expiry") is not None:
        tags.append(["expiry", str(params["expiry"])])
    return tags


def _reply_tags(params: Mapping[str, Any]) -> Tags:
    reply_to = params["reply_to"]
    root_id = params.get("root_id")
    if root_id is not None and root_id != reply_to:
        return [
            [TagName.EVENT, root_id, "", "root"],
            [TagName.EVENT, reply_to, "", "reply"],
        ]
    return [[TagName.EVENT, reply_to, "", "reply"]]


def _reaction_tags(params: Mapping[str, Any]) -> Tags:
    return [
        [TagName.EVENT, params["target_id"]],
        [TagName.KIND, str(int(EventKind.GROUP_CHAT_MESSAGE))],
    ]


# =============================================================================
# Tables
# =============================================================================


GROUP_ACTIONS: Mapping[GroupAction, GroupActionSpec] = MappingProxyType(
    {
        GroupAction.JOIN_REQUEST: GroupActionSpec(
            EventKind.JOIN_REQUEST, TagName.GROUP, _single("code", "invite_code"), ContentField.REASON
        ),
        GroupAction.LEAVE_REQUEST: GroupActionSpec(
            EventKind.LEAVE_REQUEST, TagName.GROUP, _no_tags, ContentField.REASON
        ),
        GroupAction.PUT_USER: GroupActionSpec(
            EventKind.PUT_USER, TagName.GROUP, _put_user_tags, ContentField.REASON
        ),
        GroupAction.REMOVE_USER: GroupActionSpec(
            EventKind.REMOVE_USER,
            TagName.GROUP,
            _single(TagName.PUBKEY, "target_pubkey"),
            ContentField.REASON,
        ),
        GroupAction.EDIT_METADATA: GroupActionSpec(
            EventKind.EDIT_METADATA, TagName.GROUP, _edit_metadata_tags, ContentField.REASON
        ),
        GroupAction.DELETE_EVENT: GroupActionSpec(
            EventKind.DELETE_EVENT,
            TagName.GROUP,
            _single(TagName.EVENT, "event_id"),
            ContentField.REASON,
        ),
        GroupAction.CREATE_GROUP: GroupActionSpec(
            EventKind.CREATE_GROUP, TagName.GROUP, _no_tags, ContentField.REASON
        ),
        GroupAction.DELETE_GROUP: GroupActionSpec(
            EventKind.DELETE_GROUP, TagName.GROUP, _no_tags, ContentField.REASON
        ),
        GroupAction.CREATE_INVITE: GroupActionSpec(
            EventKind.CREATE_INVITE, TagName.GROUP, _invite_tags, ContentField.REASON
        ),
        GroupAction.MESSAGE: GroupActionSpec(
            EventKind.GROUP_CHAT_MESSAGE, TagName.GROUP, _no_tags, ContentField.TEXT
        ),
        GroupAction.REPLY: GroupActionSpec(
            EventKind.GROUP_CHAT_MESSAGE, TagName.GROUP, _reply_tags, ContentField.TEXT
        ),
        GroupAction.REACTION: GroupActionSpec(
            EventKind.REACTION, TagName.GROUP, _reaction_tags, ContentField.REACTION
        ),
        GroupAction.DELETE_MESSAGE: GroupActionSpec(
            EventKind.DELETION,
            TagName.GROUP,
            _single(TagName.EVENT, "message_id"),
            ContentField.REASON,
        ),
    }
)


GROUP_QUERIES: Mapping[GroupQuery, GroupQuerySpec] = MappingProxyType(
    {
        GroupQuery.MESSAGES: GroupQuerySpec(
            (EventKind.GROUP_CHAT_MESSAGE,), TagName.GROUP, "messages"
        ),
        GroupQuery.REACTIONS: GroupQuerySpec((EventKind.REACTION,), TagName.EVENT, "reactions"),
        GroupQuery.MEMBERSHIP: GroupQuerySpec(
            (EventKind.PUT_USER, EventKind.REMOVE_USER), TagName.GROUP, "membership"
        ),
        GroupQuery.METADATA: GroupQuerySpec(
            (EventKind.GROUP_METADATA,), TagName.IDENTIFIER, "group_state"
        ),
        GroupQuery.ADMINS: GroupQuerySpec(
            (EventKind.GROUP_ADMINS,), TagName.IDENTIFIER, "group_state"
        ),
        GroupQuery.MEMBERS: GroupQuerySpec(
            (EventKind.GROUP_MEMBERS,), TagName.IDENTIFIER, "group_state"
        ),
        GroupQuery.ROLES: GroupQuerySpec((EventKind.GROUP_ROLES,), TagName.IDENTIFIER, "group_state"),
        GroupQuery.MODERATION: GroupQuerySpec(MODERATION_KINDS, TagName.GROUP, "moderation"),
        GroupQuery.JOIN_LEAVE: GroupQuerySpec(
            (EventKind.JOIN_REQUEST, EventKind.LEAVE_REQUEST), TagName.GROUP, "join_leave"
        ),
    }
)


__all__ = [
    "GROUP_ACTIONS",
    "GROUP_QUERIES",
    "ContentField",
    "GroupAction",
    "GroupActionSpec",
    "GroupQuery",
    "GroupQuerySpec",
]
