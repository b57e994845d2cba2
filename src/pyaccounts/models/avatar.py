"""Mailbox avatar descriptor."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class AvatarSource(StrEnum):
    """Where a mailbox avatar descriptor took its image from."""

    MAILBOX = "mailbox"
    SERVICE = "service"
    SERVICE_LOCAL = "service_local"
    SERVICE_URL = "service_url"
    PLACEHOLDER = "placeholder"
    NONE = "none"


class MailboxAvatarConfig(BaseModel):
    """Display config for a mailbox avatar.

    Instances are cached by the store and only replaced when ``hash_id``
    changes, so consumers may compare them by identity.
    """

    model_config = ConfigDict(frozen=True)

    mailbox_id: str
    source: AvatarSource = AvatarSource.NONE
    service_id: str | None = None
    """Service the avatar was taken from, for service sources."""
    avatar_id: str | None = None
    """Id into the avatar map, for id-based sources."""
    raw: str | None = None
    """Raw avatar reference (data URI or partial URL) for id-based sources."""
    avatar_url: str | None = None
    """Remote URL, for :attr:`AvatarSource.SERVICE_URL`."""
    display_character: str = ""
    """Placeholder initial."""
    color: str | None = None
    hash_id: str = ""

    @property
    def has_avatar(self) -> bool:
        return self.source not in (AvatarSource.PLACEHOLDER, AvatarSource.NONE)
