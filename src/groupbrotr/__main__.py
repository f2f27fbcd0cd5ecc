"""CLI entry point for GroupBrotr.

Builds NIP-29 group events and subscriptions and prints them as compact
JSON envelopes, ready to be sent to a relay by any transport. Signing keys
come from the ``PRIVATE_KEY`` environment variable (hex or ``nsec1``).

Examples:
    ```bash
    python -m groupbrotr keygen
    python -m groupbrotr publish message --group g1 --content "hello"
    python -m groupbrotr publish put_user --group g1 --pubkey <hex> --role admin
    python -m groupbrotr query messages --group g1 --limit 10
    python -m groupbrotr verify < event.json
    ```
"""

import argparse
import json
import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

from groupbrotr.core.exceptions import GroupBrotrError, ProtocolError
from groupbrotr.core.logger import Logger, StructuredFormatter
from groupbrotr.core.yaml import load_yaml
from groupbrotr.nips.nip01 import encode_message, parse_event_envelope, verify_event
from groupbrotr.nips.nip29 import GroupAction, GroupQuery, Nip29, Nip29Config
from groupbrotr.utils.keys import ENV_PRIVATE_KEY, KeyPair, KeysConfig


DEFAULT_CONFIG = Path("config") / "nip29.yaml"

logger = Logger("cli")

Publisher = Callable[[Nip29, KeyPair, argparse.Namespace], list[Any]]
Querier = Callable[[Nip29, argparse.Namespace], list[Any]]


# =============================================================================
# Dispatch tables
# =============================================================================


PUBLISHERS: dict[GroupAction, Publisher] = {
    GroupAction.JOIN_REQUEST: lambda n, k, a: n.request_join_group(
        k, a.group, reason=a.reason, invite_code=a.invite_code
    ),
    GroupAction.LEAVE_REQUEST: lambda n, k, a: n.request_leave_group(k, a.group, a.reason),
    GroupAction.PUT_USER: lambda n, k, a: n.add_user(
        k, a.group, a.pubkey, roles=a.role, reason=a.reason
    ),
    GroupAction.REMOVE_USER: lambda n, k, a: n.remove_user(k, a.group, a.pubkey, a.reason),
    GroupAction.EDIT_METADATA: lambda n, k, a: n.edit_group_metadata(
        k,
        a.group,
        name=a.name,
        about=a.about,
        picture=a.picture,
        is_public=a.is_public,
        is_open=a.is_open,
        reason=a.reason,
    ),
    GroupAction.DELETE_EVENT: lambda n, k, a: n.delete_event(k, a.group, a.event_id, a.reason),
    GroupAction.CREATE_GROUP: lambda n, k, a: n.create_group(k, a.group, a.reason),
    GroupAction.DELETE_GROUP: lambda n, k, a: n.delete_group(k, a.group, a.reason),
    GroupAction.CREATE_INVITE: lambda n, k, a: n.create_invite(
        k,
        a.group,
        invite_code=a.invite_code,
        reason=a.reason,
        max_uses=a.max_uses,
        expiry_hours=a.expiry_hours,
    ),
    GroupAction.MESSAGE: lambda n, k, a: n.send_message(k, a.group, a.content),
    GroupAction.REPLY: lambda n, k, a: n.reply_message(
        k, a.group, a.content, a.event_id, root_id=a.root_id
    ),
    GroupAction.REACTION: lambda n, k, a: n.react_to_message(
        k, a.group, a.event_id, reaction=a.reaction
    ),
    GroupAction.DELETE_MESSAGE: lambda n, k, a: n.delete_message(
        k, a.group, a.event_id, a.reason
    ),
}

QUERIERS: dict[GroupQuery, Querier] = {
    GroupQuery.MESSAGES: lambda n, a: n.get_group_messages(a.group, a.limit, a.subscription_id),
    GroupQuery.REACTIONS: lambda n, a: n.get_message_reactions(
        a.event_id, a.limit, a.subscription_id
    ),
    GroupQuery.MEMBERSHIP: lambda n, a: n.is_member(
        a.group, a.pubkey, a.limit, a.subscription_id
    ),
    GroupQuery.METADATA: lambda n, a: n.get_group_metadata(a.group, a.subscription_id),
    GroupQuery.ADMINS: lambda n, a: n.get_group_admins(a.group, a.subscription_id),
    GroupQuery.MEMBERS: lambda n, a: n.get_group_members(a.group, a.subscription_id),
    GroupQuery.ROLES: lambda n, a: n.get_group_roles(a.group, a.subscription_id),
    GroupQuery.MODERATION: lambda n, a: n.get_group_moderation_events(
        a.group, a.kind, a.limit, a.subscription_id
    ),
    GroupQuery.JOIN_LEAVE: lambda n, a: n.get_join_leave_requests(
        a.group, a.limit, a.subscription_id
    ),
}


# =============================================================================
# Argument parsing
# =============================================================================


def _add_publish_parser(subparsers: Any) -> None:
    parser = subparsers.add_parser("publish", help="Print a signed group EVENT envelope")
    parser.add_argument("action", choices=[a.value for a in GroupAction], help="Group action")
    parser.add_argument("--group", required=True, help="Group id")
    parser.add_argument("--keys-env", default=ENV_PRIVATE_KEY, help="Private key env var")
    parser.add_argument("--reason", help="Optional reason (content of moderation events)")
    parser.add_argument("--content", help="Message text (message, reply)")
    parser.add_argument("--pubkey", help="Target public key, hex (put_user, remove_user)")
    parser.add_argument(
        "--role", action="append", default=[], help="Role for put_user (repeatable)"
    )
    parser.add_argument(
        "--event-id", help="Referenced event id (delete_event, reply, reaction, delete_message)"
    )
    parser.add_argument("--root-id", help="Thread root id (reply)")
    parser.add_argument("--reaction", help="Reaction content (default: +)")
    parser.add_argument("--invite-code", help="Invite code (join_request, create_invite)")
    parser.add_argument("--max-uses", type=int, help="Invite use limit (create_invite)")
    parser.add_argument("--expiry-hours", type=int, help="Invite lifetime (create_invite)")
    parser.add_argument("--name", help="Group name (edit_metadata)")
    parser.add_argument("--about", help="Group description (edit_metadata)")
    parser.add_argument("--picture", help="Group picture URL (edit_metadata)")

    visibility = parser.add_mutually_exclusive_group()
    visibility.add_argument("--public", dest="is_public", action="store_true", default=None)
    visibility.add_argument("--private", dest="is_public", action="store_false")
    access = parser.add_mutually_exclusive_group()
    access.add_argument("--open", dest="is_open", action="store_true", default=None)
    access.add_argument("--closed", dest="is_open", action="store_false")


def _add_query_parser(subparsers: Any) -> None:
    parser = subparsers.add_parser("query", help="Print a group REQ envelope")
    parser.add_argument("query", choices=[q.value for q in GroupQuery], help="Group query")
    parser.add_argument("--group", help="Group id")
    parser.add_argument("--event-id", help="Message id (reactions)")
    parser.add_argument("--pubkey", help="Member public key, hex (membership)")
    parser.add_argument(
        "--kind", type=int, action="append", help="Override kinds (moderation, repeatable)"
    )
    parser.add_argument("--limit", type=int, help="Maximum number of events")
    parser.add_argument("--subscription-id", help="Subscription id (default: <prefix>-<ms>)")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="groupbrotr",
        description="GroupBrotr NIP-29 event builder",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG,
        help=f"NIP-29 builder config path (default: {DEFAULT_CONFIG})",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Log level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("keygen", help="Print a fresh key pair")
    pubkey = subparsers.add_parser("pubkey", help="Print the public key of the configured key")
    pubkey.add_argument("--keys-env", default=ENV_PRIVATE_KEY, help="Private key env var")
    _add_publish_parser(subparsers)
    _add_query_parser(subparsers)
    subparsers.add_parser("verify", help="Verify an event or EVENT envelope read from stdin")

    return parser.parse_args(argv)


def setup_logging(level: str) -> None:
    """Configure the root logger with structured formatting.

    Log records go to stderr so that stdout carries only the printed
    envelopes.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level))


def _load_yaml_dict(path: Path) -> dict[str, Any]:
    """Load a YAML file as a dict, returning ``{}`` if the file does not exist."""
    if not path.exists():
        logger.debug("config_not_found", path=str(path))
        return {}
    return load_yaml(path)


# =============================================================================
# Commands
# =============================================================================


def _keygen() -> int:
    keys = KeyPair.generate()
    print(f"private_key: {keys.secret.hex()}")
    print(f"nsec: {keys.to_nsec()}")
    print(f"public_key: {keys.public_key_hex}")
    print(f"npub: {keys.to_npub()}")
    logger.info("keys_generated", public_key=keys.public_key_hex)
    return 0


def _pubkey(args: argparse.Namespace) -> int:
    keys = KeysConfig(keys_env=args.keys_env).keys
    print(keys.public_key_hex)
    print(keys.to_npub())
    return 0


def _publish(nip29: Nip29, args: argparse.Namespace) -> int:
    keys = KeysConfig(keys_env=args.keys_env).keys
    action = GroupAction(args.action)
    envelope = PUBLISHERS[action](nip29, keys, args)
    print(encode_message(envelope))
    logger.info("event_published", action=action, group=args.group, id=envelope[1]["id"])
    return 0


def _query(nip29: Nip29, args: argparse.Namespace) -> int:
    query = GroupQuery(args.query)
    if query is GroupQuery.REACTIONS:
        if not args.event_id:
            raise ProtocolError("query reactions requires --event-id")
    elif not args.group:
        raise ProtocolError(f"query {query} requires --group")
    if query is GroupQuery.MEMBERSHIP and not args.pubkey:
        raise ProtocolError("query membership requires --pubkey")

    envelope = QUERIERS[query](nip29, args)
    print(encode_message(envelope))
    logger.info("subscription_created", query=query, subscription_id=envelope[1])
    return 0


def _verify(raw: str) -> int:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ProtocolError(f"input is not valid JSON: {e}") from e

    event = parse_event_envelope(data)
    valid = verify_event(event)
    print("valid" if valid else "invalid")
    logger.info("event_verified", id=event.id, valid=valid)
    return 0 if valid else 1


def main(argv: list[str] | None = None) -> int:
    """Main entry point: parse args, load config, and run the command."""
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        if args.command == "keygen":
            return _keygen()
        if args.command == "pubkey":
            return _pubkey(args)
        if args.command == "verify":
            return _verify(sys.stdin.read())

        nip29 = Nip29(config=Nip29Config.from_dict(_load_yaml_dict(args.config)))
        if args.command == "publish":
            return _publish(nip29, args)
        return _query(nip29, args)
    except GroupBrotrError as e:
        logger.error(f"{args.command}_failed", error=str(e))
        return 1


def cli() -> None:
    """Synchronous entry point for console_scripts."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
