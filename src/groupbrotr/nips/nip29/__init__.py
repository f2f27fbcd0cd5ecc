"""NIP-29 relay-based groups: signed group actions and group subscriptions.

Attributes:
    Nip29: Builder turning group actions into signed ``EVENT`` envelopes and
        group queries into ``REQ`` envelopes.
    Nip29Config: Pydantic settings for invite codes, subscription ids,
        default reaction, and per-query default limits.
    GroupAction, GroupQuery: Names of every publishable action and every
        query, keys of [GROUP_ACTIONS][groupbrotr.nips.nip29.catalog.GROUP_ACTIONS]
        and [GROUP_QUERIES][groupbrotr.nips.nip29.catalog.GROUP_QUERIES].

Note:
    Group-scoped events carry the group id in an ``h`` tag. Only the
    relay-signed group state (kinds 39000-39003) is addressed by ``d``.
"""

from .builders import INVITE_CODE_ALPHABET, Nip29
from .catalog import (
    GROUP_ACTIONS,
    GROUP_QUERIES,
    ContentField,
    GroupAction,
    GroupActionSpec,
    GroupQuery,
    GroupQuerySpec,
)
from .configs import Nip29Config, Nip29LimitsConfig


__all__ = [
    "GROUP_ACTIONS",
    "GROUP_QUERIES",
    "INVITE_CODE_ALPHABET",
    "ContentField",
    "GroupAction",
    "GroupActionSpec",
    "GroupQuery",
    "GroupQuerySpec",
    "Nip29",
    "Nip29Config",
    "Nip29LimitsConfig",
]
