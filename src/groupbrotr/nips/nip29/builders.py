"""NIP-29 group message builders.

[Nip29][groupbrotr.nips.nip29.builders.Nip29] turns group actions into signed
``["EVENT", ...]`` envelopes and group queries into ``["REQ", ...]``
envelopes. All publishing goes through one generic
[publish()][groupbrotr.nips.nip29.builders.Nip29.publish] driven by
[GROUP_ACTIONS][groupbrotr.nips.nip29.catalog.GROUP_ACTIONS]; all querying goes
through [query()][groupbrotr.nips.nip29.builders.Nip29.query] driven by
[GROUP_QUERIES][groupbrotr.nips.nip29.catalog.GROUP_QUERIES]. The named
methods (``add_user``, ``reply_message``, ``get_group_messages``, ...) only
validate and name their parameters.

The random source (via the engine) and the clock are injected at
construction; a builder holds no other state, so every call is a pure
transformation of its inputs.

Examples:
    ```python
    nip29 = Nip29()
    keys = KeyPair.generate()

    nip29.send_message(keys, "g1", "hello")
    # ["EVENT", {"kind": 9, "tags": [["h", "g1"]], "content": "hello", ...}]

    nip29.get_group_messages("g1", limit=10, subscription_id="s1")
    # ["REQ", "s1", {"kinds": [9], "#h": ["g1"], "limit": 10}]
    ```
"""

from __future__ import annotations

import logging
import string
from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from groupbrotr.core.exceptions import ProtocolError
from groupbrotr.models.event import Event, UnsignedEvent
from groupbrotr.models.filter import Filter
from groupbrotr.nips.nip01 import event_envelope, request_envelope, sign_event
from groupbrotr.utils.clock import Clock, SystemClock
from groupbrotr.utils.crypto import SignatureEngine

from .catalog import (
    GROUP_ACTIONS,
    GROUP_QUERIES,
    ContentField,
    GroupAction,
    GroupQuery,
)
from .configs import Nip29Config


if TYPE_CHECKING:
    from groupbrotr.utils.keys import KeyPair


logger = logging.getLogger("groupbrotr.nips.nip29")

INVITE_CODE_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits

# Largest multiple of the alphabet size that fits in a byte; bytes at or
# above it are redrawn so every character is equally likely.
_INVITE_BYTE_CEILING = 256 - 256 % len(INVITE_CODE_ALPHABET)

_SECONDS_PER_HOUR = 3600


def _require_str(value: Any, name: str) -> str:
    if not isinstance(value, str) or not value:
        raise ProtocolError(f"{name} must be a non-empty string")
    return value


def _optional_str(value: Any, name: str) -> str | None:
    if value is not None and not isinstance(value, str):
        raise ProtocolError(f"{name} must be a string, got {type(value).__name__}")
    return value


def _optional_code(value: Any) -> str | None:
    code = _optional_str(value, "invite_code")
    if code == "":
        raise ProtocolError("invite_code must not be empty")
    return code


def _optional_count(value: Any, name: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ProtocolError(f"{name} must be a non-negative int")
    return value


class Nip29:
    """Builder for NIP-29 group events and subscriptions.

    Args:
        config: Builder settings; defaults to ``Nip29Config()``.
        engine: Signature engine, also the random source for invite codes.
        clock: Time source for ``created_at``, invite expiries, and default
            subscription ids.

    See Also:
        [GroupAction][groupbrotr.nips.nip29.catalog.GroupAction]: Actions
            accepted by [publish()][groupbrotr.nips.nip29.builders.Nip29.publish].
        [GroupQuery][groupbrotr.nips.nip29.catalog.GroupQuery]: Queries
            accepted by [query()][groupbrotr.nips.nip29.builders.Nip29.query].
    """

    def __init__(
        self,
        config: Nip29Config | None = None,
        engine: SignatureEngine | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._config = config or Nip29Config()
        self._engine = engine or SignatureEngine()
        self._clock: Clock = clock or SystemClock()

    @property
    def config(self) -> Nip29Config:
        """The builder configuration (read-only)."""
        return self._config

    # -------------------------------------------------------------------------
    # Generic builders
    # -------------------------------------------------------------------------

    def build_event(
        self,
        action: GroupAction,
        keys: KeyPair,
        group_id: str,
        **params: Any,
    ) -> Event:
        """Build and sign the event for *action* without wrapping it.

        Args:
            action: Catalog entry to apply.
            keys: Signing key pair; its public key becomes the author.
            group_id: Group identifier placed in the entry's group tag.
            **params: Action parameters read by the entry's tag rule and
                content field.

        Raises:
            ProtocolError: If *group_id* is empty or a required parameter
                is missing, or a tag or content value cannot be
                encoded as UTF-8.
        """
        spec = GROUP_ACTIONS[GroupAction(action)]
        group_id = _require_str(group_id, "group_id")

        try:
            extra_tags = spec.tag_rule(params)
        except KeyError as e:
            raise ProtocolError(f"{action} requires parameter {e.args[0]!r}") from e

        try:
            unsigned = UnsignedEvent(
                pubkey=keys.public_key_hex,
                created_at=self._clock.now(),
                kind=spec.kind,
                tags=[[spec.group_tag, group_id], *extra_tags],
                content=self._resolve_content(spec.content_field, params),
            )
        except (TypeError, ValueError) as e:
            raise ProtocolError(f"invalid {action} event: {e}") from e
        event = sign_event(unsigned, keys, self._engine)
        logger.debug("group_event_built action=%s kind=%s id=%s", action, event.kind, event.id)
        return event

    def publish(
        self,
        action: GroupAction,
        keys: KeyPair,
        group_id: str,
        **params: Any,
    ) -> list[Any]:
        """Build, sign, and wrap the event for *action* as ``["EVENT", {...}]``."""
        return event_envelope(self.build_event(action, keys, group_id, **params))

    def _resolve_content(self, content_field: ContentField, params: Mapping[str, Any]) -> str:
        value = params.get(content_field.value)
        if content_field is ContentField.TEXT:
            if not isinstance(value, str):
                raise ProtocolError("message content must be a string")
            return value
        if content_field is ContentField.REACTION:
            return _optional_str(value, "reaction") or self._config.default_reaction
        return _optional_str(value, "reason") or ""

    def query(
        self,
        query: GroupQuery,
        identifier: str,
        *,
        kinds: Iterable[int] | None = None,
        extra_tags: Mapping[str, Sequence[str]] | None = None,
        limit: int | None = None,
        subscription_id: str | None = None,
    ) -> list[Any]:
        """Build the ``["REQ", id, filter]`` envelope for a catalog query.

        Args:
            query: Catalog entry to apply.
            identifier: Value for the entry's scope tag (a group id, or an
                event id for reactions).
            kinds: Override of the entry's kinds.
            extra_tags: Additional tag constraints ANDed with the scope tag.
            limit: Override of the configured default limit.
            subscription_id: Explicit id; ``<prefix>-<ms>`` when omitted.

        Raises:
            ProtocolError: If the identifier is empty or a filter field is
                malformed (negative limit, kind out of range).
        """
        spec = GROUP_QUERIES[GroupQuery(query)]
        if limit is None:
            limit = getattr(self._config.limits, spec.limit_field)
        identifier = _require_str(identifier, "identifier")
        tags: dict[str, Sequence[str]] = {spec.scope_tag.value: [identifier]}
        if extra_tags:
            tags.update(extra_tags)

        try:
            filter_ = Filter(
                kinds=tuple(kinds) if kinds is not None else spec.kinds,
                tags=tags,
                limit=limit,
            )
        except (TypeError, ValueError) as e:
            raise ProtocolError(f"invalid filter: {e}") from e
        return self._subscribe(filter_, subscription_id, self._config.subscription_prefix)

    def _subscribe(
        self, filter_: Filter, subscription_id: str | None, prefix: str
    ) -> list[Any]:
        if subscription_id is None:
            subscription_id = self.new_subscription_id(prefix)
        envelope = request_envelope(subscription_id, filter_)
        logger.debug("subscription_built subscription_id=%s", subscription_id)
        return envelope

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def new_subscription_id(self, prefix: str | None = None) -> str:
        """Return ``<prefix>-<millisecond timestamp>``.

        Two calls within the same millisecond collide; callers that open
        subscriptions in rapid succession should pass explicit ids.
        """
        return f"{prefix or self._config.subscription_prefix}-{self._clock.now_ms()}"

    def generate_invite_code(self, length: int | None = None) -> str:
        """Return a random alphanumeric invite code.

        Characters are drawn uniformly from the 62-character alphabet using
        the engine's random source, redrawing bytes that would bias the
        distribution.
        """
        length = length or self._config.invite_code_length
        chars: list[str] = []
        while len(chars) < length:
            for byte in self._engine.random_bytes(length - len(chars)):
                if byte < _INVITE_BYTE_CEILING:
                    chars.append(INVITE_CODE_ALPHABET[byte % len(INVITE_CODE_ALPHABET)])
        return "".join(chars)

    # -------------------------------------------------------------------------
    # User management (kinds 9021, 9022)
    # -------------------------------------------------------------------------

    def request_join_group(
        self,
        keys: KeyPair,
        group_id: str,
        reason: str | None = None,
        invite_code: str | None = None,
    ) -> list[Any]:
        """Request to join a group (kind 9021), optionally with an invite code."""
        return self.publish(
            GroupAction.JOIN_REQUEST,
            keys,
            group_id,
            reason=reason,
            invite_code=_optional_code(invite_code),
        )

    def request_leave_group(
        self, keys: KeyPair, group_id: str, reason: str | None = None
    ) -> list[Any]:
        """Request to leave a group (kind 9022)."""
        return self.publish(GroupAction.LEAVE_REQUEST, keys, group_id, reason=reason)

    # -------------------------------------------------------------------------
    # Moderation (kinds 9000-9009)
    # -------------------------------------------------------------------------

    def add_user(
        self,
        keys: KeyPair,
        group_id: str,
        target_pubkey: str,
        roles: Sequence[str] = (),
        reason: str | None = None,
    ) -> list[Any]:
        """Add a user to the group (kind 9000); roles follow the pubkey in the ``p`` tag."""
        if isinstance(roles, str) or not all(isinstance(r, str) and r for r in roles):
            raise ProtocolError("roles must be a sequence of non-empty strings")
        return self.publish(
            GroupAction.PUT_USER,
            keys,
            group_id,
            target_pubkey=_require_str(target_pubkey, "target_pubkey"),
            roles=tuple(roles),
            reason=reason,
        )

    def remove_user(
        self,
        keys: KeyPair,
        group_id: str,
        target_pubkey: str,
        reason: str | None = None,
    ) -> list[Any]:
        """Remove a user from the group (kind 9001)."""
        return self.publish(
            GroupAction.REMOVE_USER,
            keys,
            group_id,
            target_pubkey=_require_str(target_pubkey, "target_pubkey"),
            reason=reason,
        )

    def edit_group_metadata(  # noqa: PLR0913
        self,
        keys: KeyPair,
        group_id: str,
        *,
        name: str | None = None,
        about: str | None = None,
        picture: str | None = None,
        is_public: bool | None = None,
        is_open: bool | None = None,
        reason: str | None = None,
    ) -> list[Any]:
        """Edit group metadata (kind 9002).

        Each supplied field contributes exactly one tag. ``is_public`` maps to
        ``["public"]``/``["private"]`` and ``is_open`` to
        ``["open"]``/``["closed"]``; ``None`` emits neither.
        """
        for flag_name, flag in (("is_public", is_public), ("is_open", is_open)):
            if flag is not None and not isinstance(flag, bool):
                raise ProtocolError(f"{flag_name} must be a bool or None")
        return self.publish(
            GroupAction.EDIT_METADATA,
            keys,
            group_id,
            name=_optional_str(name, "name"),
            about=_optional_str(about, "about"),
            picture=_optional_str(picture, "picture"),
            is_public=is_public,
            is_open=is_open,
            reason=reason,
        )

    def delete_event(
        self,
        keys: KeyPair,
        group_id: str,
        event_id: str,
        reason: str | None = None,
    ) -> list[Any]:
        """Delete any event from the group as a moderator (kind 9005)."""
        return self.publish(
            GroupAction.DELETE_EVENT,
            keys,
            group_id,
            event_id=_require_str(event_id, "event_id"),
            reason=reason,
        )

    def create_group(self, keys: KeyPair, group_id: str, reason: str | None = None) -> list[Any]:
        """Create a group (kind 9007)."""
        return self.publish(GroupAction.CREATE_GROUP, keys, group_id, reason=reason)

    def delete_group(self, keys: KeyPair, group_id: str, reason: str | None = None) -> list[Any]:
        """Delete a group (kind 9008)."""
        return self.publish(GroupAction.DELETE_GROUP, keys, group_id, reason=reason)

    def create_invite(  # noqa: PLR0913
        self,
        keys: KeyPair,
        group_id: str,
        invite_code: str | None = None,
        reason: str | None = None,
        max_uses: int | None = None,
        expiry_hours: int | None = None,
    ) -> list[Any]:
        """Create an invite code (kind 9009).

        A code is generated when none is given. ``expiry_hours`` becomes an
        absolute ``expiry`` tag of ``now + hours * 3600`` seconds.
        """
        code = _optional_code(invite_code)
        if code is None:
            code = self.generate_invite_code()
        hours = _optional_count(expiry_hours, "expiry_hours")
        expiry = None if hours is None else self._clock.now() + hours * _SECONDS_PER_HOUR
        return self.publish(
            GroupAction.CREATE_INVITE,
            keys,
            group_id,
            code=code,
            max_uses=_optional_count(max_uses, "max_uses"),
            expiry=expiry,
            reason=reason,
        )

    # -------------------------------------------------------------------------
    # User events (kinds 9, 7, 5)
    # -------------------------------------------------------------------------

    def send_message(self, keys: KeyPair, group_id: str, content: str) -> list[Any]:
        """Send a chat message to the group (kind 9)."""
        return self.publish(GroupAction.MESSAGE, keys, group_id, content=content)

    def reply_message(  # noqa: PLR0913
        self,
        keys: KeyPair,
        group_id: str,
        content: str,
        reply_to: str,
        root_id: str | None = None,
    ) -> list[Any]:
        """Reply to a group message (kind 9).

        With a *root_id* distinct from *reply_to*, emits the root-marked ``e``
        tag followed by the reply-marked one; otherwise only the reply tag.
        """
        return self.publish(
            GroupAction.REPLY,
            keys,
            group_id,
            content=content,
            reply_to=_require_str(reply_to, "reply_to"),
            root_id=_optional_str(root_id, "root_id"),
        )

    def react_to_message(
        self,
        keys: KeyPair,
        group_id: str,
        target_id: str,
        reaction: str | None = None,
    ) -> list[Any]:
        """React to a group message (kind 7); defaults to the configured ``+``."""
        return self.publish(
            GroupAction.REACTION,
            keys,
            group_id,
            target_id=_require_str(target_id, "target_id"),
            reaction=reaction,
        )

    def delete_message(
        self,
        keys: KeyPair,
        group_id: str,
        message_id: str,
        reason: str | None = None,
    ) -> list[Any]:
        """Delete one of the author's own messages (kind 5)."""
        return self.publish(
            GroupAction.DELETE_MESSAGE,
            keys,
            group_id,
            message_id=_require_str(message_id, "message_id"),
            reason=reason,
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_group_messages(
        self, group_id: str, limit: int | None = None, subscription_id: str | None = None
    ) -> list[Any]:
        """Subscribe to chat messages of a group (kind 9, ``#h``)."""
        return self.query(
            GroupQuery.MESSAGES, group_id, limit=limit, subscription_id=subscription_id
        )

    def get_message_reactions(
        self, message_id: str, limit: int | None = None, subscription_id: str | None = None
    ) -> list[Any]:
        """Subscribe to reactions to a message (kind 7, ``#e``)."""
        return self.query(
            GroupQuery.REACTIONS, message_id, limit=limit, subscription_id=subscription_id
        )

    def is_member(
        self,
        group_id: str,
        pubkey: str,
        limit: int | None = None,
        subscription_id: str | None = None,
    ) -> list[Any]:
        """Subscribe to add/remove events for one user in a group (``#h`` and ``#p``)."""
        return self.query(
            GroupQuery.MEMBERSHIP,
            group_id,
            extra_tags={"p": [_require_str(pubkey, "pubkey")]},
            limit=limit,
            subscription_id=subscription_id,
        )

    def get_group_metadata(self, group_id: str, subscription_id: str | None = None) -> list[Any]:
        """Subscribe to the relay-signed group metadata (kind 39000, ``#d``)."""
        return self.query(GroupQuery.METADATA, group_id, subscription_id=subscription_id)

    def get_group_admins(self, group_id: str, subscription_id: str | None = None) -> list[Any]:
        """Subscribe to the relay-signed admin list (kind 39001, ``#d``)."""
        return self.query(GroupQuery.ADMINS, group_id, subscription_id=subscription_id)

    def get_group_members(self, group_id: str, subscription_id: str | None = None) -> list[Any]:
        """Subscribe to the relay-signed member list (kind 39002, ``#d``)."""
        return self.query(GroupQuery.MEMBERS, group_id, subscription_id=subscription_id)

    def get_group_roles(self, group_id: str, subscription_id: str | None = None) -> list[Any]:
        """Subscribe to the relay-signed role definitions (kind 39003, ``#d``)."""
        return self.query(GroupQuery.ROLES, group_id, subscription_id=subscription_id)

    def get_group_moderation_events(
        self,
        group_id: str,
        event_types: Iterable[int] | None = None,
        limit: int | None = None,
        subscription_id: str | None = None,
    ) -> list[Any]:
        """Subscribe to moderation events of a group (default kinds 9000-9009)."""
        return self.query(
            GroupQuery.MODERATION,
            group_id,
            kinds=event_types,
            limit=limit,
            subscription_id=subscription_id,
        )

    def get_join_leave_requests(
        self, group_id: str, limit: int | None = None, subscription_id: str | None = None
    ) -> list[Any]:
        """Subscribe to join and leave requests of a group (kinds 9021, 9022)."""
        return self.query(
            GroupQuery.JOIN_LEAVE, group_id, limit=limit, subscription_id=subscription_id
        )

    def query_custom(  # noqa: PLR0913
        self,
        kinds: Iterable[int] | None = None,
        authors: Iterable[str] | None = None,
        since: int | None = None,
        until: int | None = None,
        limit: int | None = None,
        tags: Mapping[str, Sequence[str]] | None = None,
        subscription_id: str | None = None,
    ) -> list[Any]:
        """Subscribe with an arbitrary filter; only supplied fields are emitted.

        Raises:
            ProtocolError: If a filter field is malformed.
        """
        try:
            filter_ = Filter(
                kinds=kinds,
                authors=authors,
                since=since,
                until=until,
                limit=limit,
                tags=tags,
            )
        except (TypeError, ValueError) as e:
            raise ProtocolError(f"invalid filter: {e}") from e
        return self._subscribe(filter_, subscription_id, self._config.custom_subscription_prefix)
