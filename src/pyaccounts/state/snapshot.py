"""Immutable account snapshot.

A snapshot is the registry of every entity from one load.  It is built
in full before the store swaps it in, so a reader never sees half of a
load, and it is never mutated afterwards.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from pyaccounts.exceptions import AccountPayloadError
from pyaccounts.models.auth import MailboxAuth, auth_composite_id
from pyaccounts.models.mailbox import Mailbox
from pyaccounts.models.service import BaseService, ContainerService
from pyaccounts.state.payload import LoadPayload

_logger = logging.getLogger(__name__)


def _empty() -> Mapping[str, Any]:
    return MappingProxyType({})


def _check_relations(payload: LoadPayload) -> None:
    """Raise :class:`AccountPayloadError` for the first broken relation."""
    seen: set[str] = set()
    for mailbox_id in payload.mailbox_index:
        if mailbox_id in seen:
            raise AccountPayloadError(f"mailbox {mailbox_id} appears twice in the mailbox index", entity_id=mailbox_id)
        seen.add(mailbox_id)
        if mailbox_id not in payload.mailboxes:
            raise AccountPayloadError(f"mailbox index references unknown mailbox {mailbox_id}", entity_id=mailbox_id)

    listed: dict[str, str] = {}
    for mailbox in payload.mailboxes.values():
        for service_id in mailbox.services:
            if service_id in listed:
                raise AccountPayloadError(
                    f"service {service_id} is listed by mailboxes {listed[service_id]} and {mailbox.id}",
                    entity_id=service_id,
                )
            listed[service_id] = mailbox.id

    for service in payload.services.values():
        if service.parent_id not in payload.mailboxes:
            raise AccountPayloadError(
                f"service {service.id} references unknown mailbox {service.parent_id}",
                entity_id=service.id,
            )
        if listed.get(service.id) != service.parent_id:
            raise AccountPayloadError(
                f"service {service.id} is not listed by its parent mailbox {service.parent_id}",
                entity_id=service.id,
            )


@dataclass(frozen=True, slots=True)
class AccountSnapshot:
    """Read-only registry of mailboxes, services, auths and avatars."""

    mailbox_index: tuple[str, ...] = ()
    mailboxes: Mapping[str, Mailbox] = field(default_factory=_empty)
    services: Mapping[str, BaseService] = field(default_factory=_empty)
    service_data_raw: Mapping[str, dict[str, Any]] = field(default_factory=_empty)
    mailbox_auth: Mapping[str, MailboxAuth] = field(default_factory=_empty)
    avatars: Mapping[str, str] = field(default_factory=_empty)
    active_service_id: str | None = None
    sleeping_services: Mapping[str, bool] = field(default_factory=_empty)
    ordered_service_ids: tuple[str, ...] = ()
    """Service ids in mailbox-then-service order, resolved once at build time."""

    @classmethod
    def from_payload(cls, payload: LoadPayload, *, strict: bool = True) -> AccountSnapshot:
        """Build a snapshot, checking relations first when *strict*."""
        if strict:
            _check_relations(payload)

        mailbox_index = tuple(mailbox_id for mailbox_id in payload.mailbox_index if mailbox_id in payload.mailboxes)
        if len(mailbox_index) != len(payload.mailbox_index):
            _logger.warning(
                "Dropped %d mailbox index entries without a mailbox",
                len(payload.mailbox_index) - len(mailbox_index),
            )

        ordered: list[str] = []
        seen: set[str] = set()
        for mailbox_id in mailbox_index:
            for service_id in payload.mailboxes[mailbox_id].services:
                if service_id in payload.services and service_id not in seen:
                    seen.add(service_id)
                    ordered.append(service_id)

        return cls(
            mailbox_index=mailbox_index,
            mailboxes=MappingProxyType(dict(payload.mailboxes)),
            services=MappingProxyType(dict(payload.services)),
            service_data_raw=MappingProxyType(dict(payload.service_data)),
            mailbox_auth=MappingProxyType({auth.id: auth for auth in payload.mailbox_auth.values()}),
            avatars=MappingProxyType(dict(payload.avatars)),
            active_service_id=payload.active_service,
            sleeping_services=MappingProxyType(dict(payload.sleeping_services)),
            ordered_service_ids=tuple(ordered),
        )

    # ------------------------------------------------------------------
    # Mailboxes
    # ------------------------------------------------------------------

    def all_mailboxes(self) -> list[Mailbox]:
        return [self.mailboxes[mailbox_id] for mailbox_id in self.mailbox_index]

    def mailbox_ids(self) -> list[str]:
        return list(self.mailbox_index)

    def get_mailbox(self, mailbox_id: str | None) -> Mailbox | None:
        if mailbox_id is None:
            return None
        return self.mailboxes.get(mailbox_id)

    def mailbox_count(self) -> int:
        return len(self.mailbox_index)

    def get_mailbox_for_service(self, service_id: str) -> Mailbox | None:
        service = self.get_service(service_id)
        if service is None:
            return None
        return self.get_mailbox(service.parent_id)

    def all_partitions(self) -> list[str]:
        return [mailbox.partition for mailbox in self.all_mailboxes()]

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    def get_mailbox_auth(self, auth_id: str) -> MailboxAuth | None:
        return self.mailbox_auth.get(auth_id)

    def get_mailbox_auth_for_mailbox(self, mailbox_id: str, namespace: str | None) -> MailboxAuth | None:
        if not namespace:
            return None
        return self.mailbox_auth.get(auth_composite_id(mailbox_id, namespace))

    def get_mailbox_auths_for_mailbox(self, mailbox_id: str) -> list[MailboxAuth]:
        return [auth for auth in self.mailbox_auth.values() if auth.parent_id == mailbox_id]

    # ------------------------------------------------------------------
    # Services
    # ------------------------------------------------------------------

    def get_service(self, service_id: str | None) -> BaseService | None:
        if service_id is None:
            return None
        return self.services.get(service_id)

    def has_service(self, service_id: str) -> bool:
        return service_id in self.services

    def service_count(self) -> int:
        return len(self.services)

    def first_service_id(self) -> str | None:
        """Id of the first service of the first mailbox that has one."""
        return self.ordered_service_ids[0] if self.ordered_service_ids else None

    def all_services_of_type(self, service_type: str) -> list[BaseService]:
        return [service for service in self.all_services_ordered() if service.type == service_type]

    def all_services_unordered(self) -> list[BaseService]:
        return list(self.services.values())

    def all_services_ordered(self) -> list[BaseService]:
        return [self.services[service_id] for service_id in self.ordered_service_ids]

    def mailbox_services(self, mailbox_id: str) -> list[BaseService]:
        """Services of one mailbox in canonical order, skipping unknown ids."""
        mailbox = self.get_mailbox(mailbox_id)
        if mailbox is None:
            return []
        return [self.services[service_id] for service_id in mailbox.services if service_id in self.services]

    def all_container_ids(self) -> list[str]:
        """Unique container ids in first-seen canonical order."""
        ids: dict[str, None] = {}
        for service in self.all_services_ordered():
            if isinstance(service, ContainerService):
                ids.setdefault(service.container_id, None)
        return list(ids)

    # ------------------------------------------------------------------
    # Avatars
    # ------------------------------------------------------------------

    def get_avatar(self, avatar_id: str | None) -> str | None:
        if not avatar_id:
            return None
        return self.avatars.get(avatar_id)
