"""Load payload boundary.

A load payload is the full account state pushed by whoever owns
persistence.  This module turns the raw mapping into typed models; the
snapshot layer then checks the relations between them.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from pyaccounts._constants import AUTH_ID_SEPARATOR
from pyaccounts.models.auth import MailboxAuth
from pyaccounts.models.mailbox import Mailbox
from pyaccounts.models.service import AnyService


def _with_ids(entries: Any) -> Any:
    """Fill in ``id`` from the map key where an entry omits it."""
    if not isinstance(entries, dict):
        return entries
    filled: dict[Any, Any] = {}
    for key, value in entries.items():
        if isinstance(value, dict) and "id" not in value:
            value = {**value, "id": key}
        filled[key] = value
    return filled


class LoadPayload(BaseModel):
    """A complete account snapshot as received from the persistence owner."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    mailbox_index: list[str] = Field(default_factory=list)
    """Mailbox ids in display order."""
    mailboxes: dict[str, Mailbox] = Field(default_factory=dict)
    services: dict[str, AnyService] = Field(default_factory=dict)
    service_data: dict[str, dict[str, Any]] = Field(default_factory=dict)
    """Raw service data; modelized lazily by the store."""
    mailbox_auth: dict[str, MailboxAuth] = Field(default_factory=dict)
    avatars: dict[str, str] = Field(default_factory=dict)
    """Avatar id to raw reference (data URI or partial URL)."""
    active_service: str | None = None
    sleeping_services: dict[str, bool] = Field(default_factory=dict)

    @field_validator("mailboxes", "services", mode="before")
    @classmethod
    def _fill_entity_ids(cls, value: Any) -> Any:
        return _with_ids(value)

    @field_validator("mailbox_auth", mode="before")
    @classmethod
    def _fill_auth_keys(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        filled: dict[Any, Any] = {}
        for key, entry in value.items():
            if isinstance(entry, dict) and isinstance(key, str) and AUTH_ID_SEPARATOR in key:
                parent_id, _, namespace = key.partition(AUTH_ID_SEPARATOR)
                entry = dict(entry)
                if "parentId" not in entry and "parent_id" not in entry:
                    entry["parentId"] = parent_id
                entry.setdefault("namespace", namespace)
            filled[key] = entry
        return filled

    @field_validator(
        "mailbox_index",
        "mailboxes",
        "services",
        "service_data",
        "mailbox_auth",
        "avatars",
        "sleeping_services",
        mode="before",
    )
    @classmethod
    def _null_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return [] if info.field_name == "mailbox_index" else {}
        return value
