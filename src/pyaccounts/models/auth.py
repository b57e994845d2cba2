"""Mailbox auth model."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from pyaccounts._constants import AUTH_ID_SEPARATOR
from pyaccounts.models._base import AccountBaseModel


def auth_composite_id(mailbox_id: str, namespace: str) -> str:
    """Build the id an auth record is stored under."""
    return f"{mailbox_id}{AUTH_ID_SEPARATOR}{namespace}"


class MailboxAuth(AccountBaseModel):
    """Credentials a mailbox holds for one auth namespace.

    Services of the same mailbox that share a namespace share the record.
    """

    parent_id: str
    """Owning mailbox id."""
    namespace: str
    """Auth namespace (e.g. ``"com.google"``)."""
    auth_data: dict[str, Any] = Field(default_factory=dict)
    """Opaque provider data.  Never log without redaction."""

    @property
    def id(self) -> str:
        return auth_composite_id(self.parent_id, self.namespace)

    @property
    def has_auth(self) -> bool:
        return bool(self.auth_data)
