#!/usr/bin/env python3
"""Dump the derived views of an account payload.

This script loads a JSON load payload into an :class:`AccountStore`
and prints mailboxes, the active selection, sleep state, license
restrictions and unread totals, so you can check what the store makes of
a payload captured from a running app.

Usage
-----
Install the package (``pip install -e .``) and run::

    python scripts/dump_store.py payload.json

Options::

    --account-limit N     License account limit (default: unlimited)
    --account-type TYPE   Allowed service type, repeatable (default: all)
    --no-sleep            Plan without sleep support
    --lenient             Accept payloads that break relational invariants
    --json                Output as machine-readable JSON
    -v, --verbose         Debug logging (redacted payload trace included)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pyaccounts import AccountStore, AccountStoreConfig, AccountStoreError, ServiceType, StaticUserProvider, User


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _collect(store: AccountStore) -> dict[str, Any]:
    mailboxes: list[dict[str, Any]] = []
    for mailbox in store.all_mailboxes():
        avatar = store.get_mailbox_avatar_config(mailbox.id)
        mailboxes.append(
            {
                "id": mailbox.id,
                "partition": mailbox.partition,
                "sleeping": store.is_mailbox_sleeping(mailbox.id),
                "unread": store.user_unread_count_for_mailbox(mailbox.id),
                "avatar": {"source": avatar.source.value, "hash": avatar.hash_id},
                "services": [
                    {
                        "id": service_id,
                        "type": store.get_service(service_id).type if store.has_service(service_id) else None,
                        "restricted": store.is_service_restricted(service_id),
                        "sleeping": store.is_service_sleeping(service_id),
                    }
                    for service_id in mailbox.services
                ],
            }
        )
    return {
        "active_service": store.active_service_id(),
        "active_mailbox": store.active_mailbox_id(),
        "unrestricted_services": store.unrestricted_service_ids(),
        "unread": store.user_unread_count(),
        "unread_for_app": store.user_unread_count_for_app(),
        "unread_activity_for_app": store.user_unread_activity_for_app(),
        "tray_messages": [message.model_dump(mode="json") for message in store.user_tray_messages()],
        "mailboxes": mailboxes,
    }


def _print_text(summary: dict[str, Any]) -> None:
    print(_section("Active"))
    print(f"  service: {summary['active_service']}")
    print(f"  mailbox: {summary['active_mailbox']}")

    print(_section("Mailboxes"))
    for mailbox in summary["mailboxes"]:
        flag = " (sleeping)" if mailbox["sleeping"] else ""
        print(f"  {mailbox['id']}{flag} unread={mailbox['unread']} avatar={mailbox['avatar']['source']}")
        for service in mailbox["services"]:
            flags = [name for name in ("restricted", "sleeping") if service[name]]
            suffix = f" [{', '.join(flags)}]" if flags else ""
            print(f"    - {service['id']} {service['type']}{suffix}")

    print(_section("Unread"))
    print(f"  total: {summary['unread']}")
    print(f"  app badge: {summary['unread_for_app']}")
    print(f"  app activity: {summary['unread_activity_for_app']}")
    print(f"  tray messages: {len(summary['tray_messages'])}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("payload", type=Path, help="JSON load payload")
    parser.add_argument("--account-limit", type=int, default=None)
    parser.add_argument("--account-type", action="append", choices=[t.value for t in ServiceType], default=None)
    parser.add_argument("--no-sleep", action="store_true")
    parser.add_argument("--lenient", action="store_true")
    parser.add_argument("--json", action="store_true", dest="as_json")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    user = User(
        account_limit=args.account_limit,
        account_types=frozenset(ServiceType(t) for t in args.account_type) if args.account_type else None,
        has_sleepable=not args.no_sleep,
    )
    config = AccountStoreConfig.from_env(strict_load=not args.lenient, trace_load=args.verbose)
    store = AccountStore(user_provider=StaticUserProvider(user), config=config)

    try:
        store.load(json.loads(args.payload.read_text(encoding="utf-8")))
    except AccountStoreError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    summary = _collect(store)
    if args.as_json:
        print(json.dumps(summary, indent=2))
    else:
        _print_text(summary)
    return 0


if __name__ == "__main__":
    sys.exit(main())
