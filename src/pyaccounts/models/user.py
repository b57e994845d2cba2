"""User and container models supplied by the user/license provider."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pyaccounts._constants import ServiceType


class User(BaseModel):
    """License capabilities of the signed-in user."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    account_limit: int | None = Field(default=None, ge=0)
    """Maximum number of fully functional services (``None`` = unlimited)."""
    account_types: frozenset[ServiceType] | None = None
    """Service types the plan allows (``None`` = every type)."""
    has_sleepable: bool = True
    """The plan allows services to be put to sleep."""

    @property
    def has_account_limit(self) -> bool:
        return self.account_limit is not None

    @property
    def has_account_type_restriction(self) -> bool:
        return self.account_types is not None

    def has_accounts_of_type(self, service_type: str) -> bool:
        """Whether the plan allows services of *service_type*."""
        if self.account_types is None:
            return True
        return service_type in self.account_types


class Container(BaseModel):
    """A user-defined web app template container services are created from."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    id: str
    name: str = ""
    supports_unread_count: bool = False
    supports_unread_activity: bool = False
    supports_tray_messages: bool = False
