"""Per-type unread and tray behaviour.

Each :class:`ServiceType` maps to one :class:`ServiceBehaviour`: three
functions over a :class:`ServiceContext`.  The table is closed, so adding
a service type without a behaviour fails at import time rather than at
query time.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from pyaccounts._constants import ServiceType
from pyaccounts.models.service import BaseService
from pyaccounts.models.service_data import (
    BaseServiceData,
    DocumentServiceData,
    GoogleMailServiceData,
    MicrosoftMailServiceData,
    SlackServiceData,
    TrelloServiceData,
)
from pyaccounts.models.tray import TrayMessage
from pyaccounts.models.user import Container

TData = TypeVar("TData", bound=BaseServiceData)


@dataclass(frozen=True, slots=True)
class ServiceContext:
    """A service, its runtime data and (for container services) its container."""

    service: BaseService
    data: BaseServiceData
    container: Container | None = None

    def data_as(self, model: type[TData]) -> TData | None:
        return self.data if isinstance(self.data, model) else None


@dataclass(frozen=True, slots=True)
class ServiceBehaviour:
    unread_count: Callable[[ServiceContext], int]
    has_unread_activity: Callable[[ServiceContext], bool]
    tray_messages: Callable[[ServiceContext], list[TrayMessage]]


def _no_activity(ctx: ServiceContext) -> bool:
    return False


def _plural(count: int, noun: str) -> str:
    return f"{count} unread {noun}" if count == 1 else f"{count} unread {noun}s"


# ------------------------------------------------------------------
# Document (generic / container) services
# ------------------------------------------------------------------


def _document_unread_count(ctx: ServiceContext) -> int:
    data = ctx.data_as(DocumentServiceData)
    if data is None:
        return 0
    return max(data.document_unread_count, 0)


def _document_has_unread_activity(ctx: ServiceContext) -> bool:
    data = ctx.data_as(DocumentServiceData)
    return data is not None and data.document_has_unread_activity


def _document_tray_messages(ctx: ServiceContext) -> list[TrayMessage]:
    count = _document_unread_count(ctx)
    if not ctx.service.show_tray_messages or count == 0:
        return []
    data = ctx.data_as(DocumentServiceData)
    title = data.document_title if data is not None else None
    return [
        TrayMessage(
            id=f"{ctx.service.id}:document",
            service_id=ctx.service.id,
            text=_plural(count, "item"),
            extended_text=title,
        )
    ]


def _container_unread_count(ctx: ServiceContext) -> int:
    if ctx.container is None or not ctx.container.supports_unread_count:
        return 0
    return _document_unread_count(ctx)


def _container_has_unread_activity(ctx: ServiceContext) -> bool:
    if ctx.container is None or not ctx.container.supports_unread_activity:
        return False
    return _document_has_unread_activity(ctx)


def _container_tray_messages(ctx: ServiceContext) -> list[TrayMessage]:
    if ctx.container is None or not ctx.container.supports_tray_messages:
        return []
    return _document_tray_messages(ctx)


# ------------------------------------------------------------------
# Mail services
# ------------------------------------------------------------------


def _google_unread_count(ctx: ServiceContext) -> int:
    data = ctx.data_as(GoogleMailServiceData)
    return len(data.unread_threads) if data is not None else 0


def _google_tray_messages(ctx: ServiceContext) -> list[TrayMessage]:
    data = ctx.data_as(GoogleMailServiceData)
    if data is None or not ctx.service.show_tray_messages:
        return []
    return [
        TrayMessage(
            id=thread.id,
            service_id=ctx.service.id,
            text=f"{thread.sender}: {thread.subject}" if thread.sender else thread.subject,
            extended_text=thread.snippet or None,
            timestamp=thread.timestamp,
        )
        for thread in data.unread_threads
    ]


def _microsoft_unread_count(ctx: ServiceContext) -> int:
    data = ctx.data_as(MicrosoftMailServiceData)
    return len(data.unread_messages) if data is not None else 0


def _microsoft_tray_messages(ctx: ServiceContext) -> list[TrayMessage]:
    data = ctx.data_as(MicrosoftMailServiceData)
    if data is None or not ctx.service.show_tray_messages:
        return []
    return [
        TrayMessage(
            id=message.id,
            service_id=ctx.service.id,
            text=f"{message.sender}: {message.subject}" if message.sender else message.subject,
            extended_text=message.snippet or None,
            timestamp=message.timestamp,
        )
        for message in data.unread_messages
    ]


# ------------------------------------------------------------------
# Slack
# ------------------------------------------------------------------


def _slack_unread_count(ctx: ServiceContext) -> int:
    data = ctx.data_as(SlackServiceData)
    if data is None:
        return 0
    return sum(max(channel.mention_count, 0) for channel in data.channels)


def _slack_has_unread_activity(ctx: ServiceContext) -> bool:
    data = ctx.data_as(SlackServiceData)
    return data is not None and any(channel.has_unread for channel in data.channels)


def _slack_tray_messages(ctx: ServiceContext) -> list[TrayMessage]:
    data = ctx.data_as(SlackServiceData)
    if data is None or not ctx.service.show_tray_messages:
        return []
    return [
        TrayMessage(
            id=channel.id,
            service_id=ctx.service.id,
            text=f"#{channel.name or channel.id}",
            extended_text=_plural(channel.mention_count, "mention"),
        )
        for channel in data.channels
        if channel.mention_count > 0
    ]


# ------------------------------------------------------------------
# Trello
# ------------------------------------------------------------------


def _trello_unread_count(ctx: ServiceContext) -> int:
    data = ctx.data_as(TrelloServiceData)
    if data is None:
        return 0
    return sum(1 for notification in data.notifications if notification.is_unread)


def _trello_tray_messages(ctx: ServiceContext) -> list[TrayMessage]:
    data = ctx.data_as(TrelloServiceData)
    if data is None or not ctx.service.show_tray_messages:
        return []
    return [
        TrayMessage(
            id=notification.id,
            service_id=ctx.service.id,
            text=notification.text,
            timestamp=notification.timestamp,
        )
        for notification in data.notifications
        if notification.is_unread
    ]


BEHAVIOURS: dict[ServiceType, ServiceBehaviour] = {
    ServiceType.GENERIC: ServiceBehaviour(
        unread_count=_document_unread_count,
        has_unread_activity=_document_has_unread_activity,
        tray_messages=_document_tray_messages,
    ),
    ServiceType.CONTAINER: ServiceBehaviour(
        unread_count=_container_unread_count,
        has_unread_activity=_container_has_unread_activity,
        tray_messages=_container_tray_messages,
    ),
    ServiceType.GOOGLE_MAIL: ServiceBehaviour(
        unread_count=_google_unread_count,
        has_unread_activity=_no_activity,
        tray_messages=_google_tray_messages,
    ),
    ServiceType.MICROSOFT_MAIL: ServiceBehaviour(
        unread_count=_microsoft_unread_count,
        has_unread_activity=_no_activity,
        tray_messages=_microsoft_tray_messages,
    ),
    ServiceType.SLACK: ServiceBehaviour(
        unread_count=_slack_unread_count,
        has_unread_activity=_slack_has_unread_activity,
        tray_messages=_slack_tray_messages,
    ),
    ServiceType.TRELLO: ServiceBehaviour(
        unread_count=_trello_unread_count,
        has_unread_activity=_no_activity,
        tray_messages=_trello_tray_messages,
    ),
}

_missing = set(ServiceType) - set(BEHAVIOURS)
if _missing:
    raise RuntimeError(f"no behaviour registered for service types: {sorted(_missing)}")


def behaviour_for(service: BaseService) -> ServiceBehaviour:
    return BEHAVIOURS[service.service_type]


def unread_count(ctx: ServiceContext) -> int:
    return behaviour_for(ctx.service).unread_count(ctx)


def has_unread_activity(ctx: ServiceContext) -> bool:
    return behaviour_for(ctx.service).has_unread_activity(ctx)


def tray_messages(ctx: ServiceContext) -> list[TrayMessage]:
    return behaviour_for(ctx.service).tray_messages(ctx)


__all__: list[str] = [
    "BEHAVIOURS",
    "ServiceBehaviour",
    "ServiceContext",
    "behaviour_for",
    "has_unread_activity",
    "tray_messages",
    "unread_count",
]
