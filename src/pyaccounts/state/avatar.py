"""Mailbox avatar resolution and the identity-stable descriptor cache."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, TypeVar

from pyaccounts._constants import DEFAULT_AVATAR_COLOR
from pyaccounts._hashing import content_hash
from pyaccounts.models.avatar import AvatarSource, MailboxAvatarConfig
from pyaccounts.models.mailbox import Mailbox
from pyaccounts.state.snapshot import AccountSnapshot

_logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class AvatarSelection:
    """The avatar source chosen for a mailbox."""

    source: AvatarSource
    service_id: str | None = None
    avatar_id: str | None = None
    raw: str | None = None
    """Raw reference: the avatar map entry for id sources, the URL for URL sources."""


def select_avatar_source(snapshot: AccountSnapshot, mailbox: Mailbox) -> AvatarSelection | None:
    """Pick where a mailbox avatar comes from.

    Precedence: the mailbox's own avatar, then the first service (in
    mailbox order) with an avatar id, a local avatar id or a remote URL,
    checked in that order within each service.  ``None`` when nothing
    provides an image.
    """
    if mailbox.has_avatar_id:
        return AvatarSelection(
            source=AvatarSource.MAILBOX,
            avatar_id=mailbox.avatar_id,
            raw=snapshot.get_avatar(mailbox.avatar_id),
        )

    for service in snapshot.mailbox_services(mailbox.id):
        if service.has_avatar_id:
            return AvatarSelection(
                source=AvatarSource.SERVICE,
                service_id=service.id,
                avatar_id=service.avatar_id,
                raw=snapshot.get_avatar(service.avatar_id),
            )
        if service.has_service_local_avatar_id:
            return AvatarSelection(
                source=AvatarSource.SERVICE_LOCAL,
                service_id=service.id,
                avatar_id=service.service_local_avatar_id,
                raw=snapshot.get_avatar(service.service_local_avatar_id),
            )
        if service.has_service_avatar_url:
            return AvatarSelection(
                source=AvatarSource.SERVICE_URL,
                service_id=service.id,
                raw=service.service_avatar_url,
            )
    return None


def _placeholder_fields(snapshot: AccountSnapshot, mailbox: Mailbox) -> dict[str, Any]:
    services = snapshot.mailbox_services(mailbox.id)
    first = services[0] if services else None
    name = mailbox.display_name or (first.display_name if first is not None else None) or ""
    color = mailbox.color or (first.color if first is not None else None) or DEFAULT_AVATAR_COLOR
    return {
        "display_character": name.strip()[:1].upper(),
        "color": color,
    }


def build_avatar_config(snapshot: AccountSnapshot, mailbox_id: str) -> MailboxAvatarConfig:
    """Compute a fresh descriptor for *mailbox_id*, hash included."""
    mailbox = snapshot.get_mailbox(mailbox_id)
    if mailbox is None:
        inputs: dict[str, Any] = {"mailbox_id": mailbox_id, "source": AvatarSource.NONE.value}
        return MailboxAvatarConfig(mailbox_id=mailbox_id, hash_id=content_hash(inputs))

    inputs = {"mailbox_id": mailbox_id, **_placeholder_fields(snapshot, mailbox)}
    selection = select_avatar_source(snapshot, mailbox)
    if selection is None:
        inputs["source"] = AvatarSource.PLACEHOLDER.value
    else:
        inputs["source"] = selection.source.value
        inputs["service_id"] = selection.service_id
        inputs["avatar_id"] = selection.avatar_id
        if selection.source == AvatarSource.SERVICE_URL:
            inputs["avatar_url"] = selection.raw
        else:
            inputs["raw"] = selection.raw

    return MailboxAvatarConfig(**inputs, hash_id=content_hash(inputs))


def resolve_avatar(snapshot: AccountSnapshot, mailbox_id: str, resolver: Callable[[str], T]) -> T | None:
    """Pass the mailbox's raw avatar reference through *resolver*.

    Returns ``None`` for an unknown mailbox or when no avatar source
    exists (including an avatar id missing from the avatar map).
    """
    mailbox = snapshot.get_mailbox(mailbox_id)
    if mailbox is None:
        return None
    selection = select_avatar_source(snapshot, mailbox)
    if selection is None or not selection.raw:
        return None
    return resolver(selection.raw)


class AvatarConfigCache:
    """Mailbox id to descriptor, replaced only when the content hash changes.

    Keeping the previous object on an unchanged hash lets consumers use
    identity comparison to skip re-rendering.
    """

    def __init__(self) -> None:
        self._entries: dict[str, MailboxAvatarConfig] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, mailbox_id: object) -> bool:
        return mailbox_id in self._entries

    def get(self, mailbox_id: str) -> MailboxAvatarConfig | None:
        return self._entries.get(mailbox_id)

    def store(self, config: MailboxAvatarConfig) -> MailboxAvatarConfig:
        """Insert or replace *config* and return whichever object is now cached."""
        cached = self._entries.get(config.mailbox_id)
        if cached is not None and cached.hash_id == config.hash_id:
            return cached
        if cached is not None:
            _logger.debug("Avatar config changed for mailbox=%s source=%s", config.mailbox_id, config.source)
        self._entries[config.mailbox_id] = config
        return config

    def retain(self, mailbox_ids: Iterable[str]) -> None:
        """Drop entries for mailboxes not in *mailbox_ids*; the rest keep identity."""
        keep = set(mailbox_ids)
        dropped = [mailbox_id for mailbox_id in self._entries if mailbox_id not in keep]
        for mailbox_id in dropped:
            del self._entries[mailbox_id]
        if dropped:
            _logger.debug("Dropped avatar configs for removed mailboxes=%s", dropped)
