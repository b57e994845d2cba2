"""Per-type runtime data for services.

Service data holds whatever the running service last reported (unread
threads, channels, notifications).  One variant exists per service type;
:data:`SERVICE_DATA_MODELS` maps a type to its variant and
:func:`modelize_service_data` is the lazy factory the store uses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from pyaccounts._constants import ServiceType
from pyaccounts.models._base import AccountBaseModel


class RecentItem(AccountBaseModel):
    """A recently visited page inside a service."""

    url: str = ""
    title: str = ""
    visited_at: datetime | None = None


class BaseServiceData(AccountBaseModel):
    id: str
    """Id of the service this data belongs to."""
    recent: list[RecentItem] = Field(default_factory=list)
    """Recently visited items, newest first."""


class DocumentServiceData(BaseServiceData):
    """Data scraped from the page title/badge of a web service."""

    document_unread_count: int = 0
    document_has_unread_activity: bool = False
    document_title: str | None = None


class GenericServiceData(DocumentServiceData):
    pass


class ContainerServiceData(DocumentServiceData):
    pass


class MailThread(AccountBaseModel):
    id: str
    subject: str = ""
    snippet: str = ""
    sender: str = ""
    message_count: int = 1
    timestamp: datetime | None = None


class GoogleMailServiceData(BaseServiceData):
    unread_threads: list[MailThread] = Field(default_factory=list)


class MailMessage(AccountBaseModel):
    id: str
    subject: str = ""
    snippet: str = ""
    sender: str = ""
    timestamp: datetime | None = None


class MicrosoftMailServiceData(BaseServiceData):
    unread_messages: list[MailMessage] = Field(default_factory=list)


class SlackChannel(AccountBaseModel):
    id: str
    name: str = ""
    mention_count: int = 0
    has_unread: bool = False


class SlackServiceData(BaseServiceData):
    channels: list[SlackChannel] = Field(default_factory=list)


class TrelloNotification(AccountBaseModel):
    id: str
    text: str = ""
    is_unread: bool = True
    timestamp: datetime | None = None


class TrelloServiceData(BaseServiceData):
    notifications: list[TrelloNotification] = Field(default_factory=list)


SERVICE_DATA_MODELS: dict[ServiceType, type[BaseServiceData]] = {
    ServiceType.GENERIC: GenericServiceData,
    ServiceType.CONTAINER: ContainerServiceData,
    ServiceType.GOOGLE_MAIL: GoogleMailServiceData,
    ServiceType.MICROSOFT_MAIL: MicrosoftMailServiceData,
    ServiceType.SLACK: SlackServiceData,
    ServiceType.TRELLO: TrelloServiceData,
}


def modelize_service_data(
    service_id: str,
    service_type: ServiceType,
    raw: dict[str, Any] | None = None,
) -> BaseServiceData:
    """Build the data variant for *service_type*.

    ``raw`` is the payload entry for the service, if any.  The id always
    comes from *service_id* so a mislabelled payload entry cannot attach
    itself to another service.
    """
    model = SERVICE_DATA_MODELS[service_type]
    values = dict(raw or {})
    values["id"] = service_id
    return model.model_validate(values)
