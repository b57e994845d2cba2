"""Mailbox model."""

from __future__ import annotations

from pydantic import Field, ValidationInfo, field_validator

from pyaccounts._constants import PARTITION_PREFIX
from pyaccounts.models._base import AccountBaseModel


class Mailbox(AccountBaseModel):
    """Top-level entity owning an ordered list of services."""

    id: str
    """Mailbox id."""
    services: tuple[str, ...] = ()
    """Service ids in canonical display order."""
    partition: str = Field(default="", validate_default=True)
    """Session partition shared by the mailbox's services."""
    avatar_id: str | None = None
    """Id of an avatar set directly on the mailbox."""
    display_name: str | None = None
    """User-provided mailbox name."""
    color: str | None = None
    """Mailbox accent color."""

    @property
    def all_services(self) -> list[str]:
        """Copy of the service ids in canonical order."""
        return list(self.services)

    @property
    def has_services(self) -> bool:
        return bool(self.services)

    @property
    def has_avatar_id(self) -> bool:
        return bool(self.avatar_id)

    @field_validator("partition")
    @classmethod
    def _default_partition(cls, value: str, info: ValidationInfo) -> str:
        if value or "id" not in info.data:
            return value
        return f"{PARTITION_PREFIX}{info.data['id']}"
