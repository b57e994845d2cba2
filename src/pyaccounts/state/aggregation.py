"""Unread and tray aggregation for :class:`pyaccounts.store.AccountStore`.

The store delegates to these functions; each takes the store itself.
Every aggregate runs over the license-eligible services only, in
mailbox-then-service order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pyaccounts.models.service import BaseService, ContainerService
from pyaccounts.models.tray import TrayMessage
from pyaccounts.state import behaviours
from pyaccounts.state.behaviours import ServiceContext

if TYPE_CHECKING:
    from pyaccounts.store import AccountStore


def service_context(store: AccountStore, service: BaseService) -> ServiceContext:
    data = store.get_service_data(service.id)
    if data is None:
        raise KeyError(service.id)
    container = store.get_container(service.container_id) if isinstance(service, ContainerService) else None
    return ServiceContext(service=service, data=data, container=container)


def _mailbox_unrestricted_services(store: AccountStore, mailbox_id: str) -> list[BaseService]:
    unrestricted = set(store.unrestricted_service_ids())
    return [service for service in store.snapshot.mailbox_services(mailbox_id) if service.id in unrestricted]


def user_unread_count(store: AccountStore) -> int:
    return sum(behaviours.unread_count(service_context(store, service)) for service in store.unrestricted_services())


def user_unread_count_for_app(store: AccountStore) -> int:
    return sum(
        behaviours.unread_count(service_context(store, service))
        for service in store.unrestricted_services()
        if service.show_badge_count_in_app
    )


def user_unread_activity_for_app(store: AccountStore) -> bool:
    for service in store.unrestricted_services():
        if not service.show_unread_activity_in_app:
            continue
        if behaviours.has_unread_activity(service_context(store, service)):
            return True
    return False


def user_unread_count_for_mailbox(store: AccountStore, mailbox_id: str) -> int:
    if store.get_mailbox(mailbox_id) is None:
        return 0
    return sum(
        behaviours.unread_count(service_context(store, service))
        for service in _mailbox_unrestricted_services(store, mailbox_id)
    )


def user_tray_messages(store: AccountStore) -> list[TrayMessage]:
    messages: list[TrayMessage] = []
    for service in store.unrestricted_services():
        messages.extend(behaviours.tray_messages(service_context(store, service)))
    return messages


def user_tray_messages_for_mailbox(store: AccountStore, mailbox_id: str) -> list[TrayMessage]:
    if store.get_mailbox(mailbox_id) is None:
        return []
    messages: list[TrayMessage] = []
    for service in _mailbox_unrestricted_services(store, mailbox_id):
        messages.extend(behaviours.tray_messages(service_context(store, service)))
    return messages
