"""
Unit tests for models.constants module.

Tests:
- EventKind values match NIP-29, NIP-25, and NIP-09
- MODERATION_KINDS contents
- Wire enums and curve constants
"""

import pytest

from groupbrotr.models.constants import (
    EVENT_KIND_MAX,
    MODERATION_KINDS,
    SECP256K1_ORDER,
    ClientMessageType,
    EventKind,
    TagName,
)


class TestEventKind:
    """Kind values."""

    @pytest.mark.parametrize(
        ("kind", "value"),
        [
            (EventKind.DELETION, 5),
            (EventKind.REACTION, 7),
            (EventKind.GROUP_CHAT_MESSAGE, 9),
            (EventKind.PUT_USER, 9000),
            (EventKind.REMOVE_USER, 9001),
            (EventKind.EDIT_METADATA, 9002),
            (EventKind.DELETE_EVENT, 9005),
            (EventKind.CREATE_GROUP, 9007),
            (EventKind.DELETE_GROUP, 9008),
            (EventKind.CREATE_INVITE, 9009),
            (EventKind.JOIN_REQUEST, 9021),
            (EventKind.LEAVE_REQUEST, 9022),
            (EventKind.GROUP_METADATA, 39000),
            (EventKind.GROUP_ADMINS, 39001),
            (EventKind.GROUP_MEMBERS, 39002),
            (EventKind.GROUP_ROLES, 39003),
        ],
    )
    def test_values(self, kind: EventKind, value: int) -> None:
        assert kind == value

    def test_all_within_range(self) -> None:
        assert all(0 <= k <= EVENT_KIND_MAX for k in EventKind)


class TestModerationKinds:
    """Default moderation history kinds."""

    def test_contents(self) -> None:
        assert MODERATION_KINDS == (9000, 9001, 9002, 9005, 9007, 9008, 9009)

    def test_excludes_user_requests(self) -> None:
        assert EventKind.JOIN_REQUEST not in MODERATION_KINDS


class TestWireEnums:
    """String enums used on the wire."""

    def test_client_message_types(self) -> None:
        assert ClientMessageType.EVENT == "EVENT"
        assert ClientMessageType.REQ == "REQ"

    def test_tag_names(self) -> None:
        assert [t.value for t in TagName] == ["h", "d", "p", "e", "k"]

    def test_secp256k1_order(self) -> None:
        assert SECP256K1_ORDER == int(
            "FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141", 16
        )
