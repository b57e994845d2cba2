"""Data models for account store entities."""

from pyaccounts.models._base import AccountBaseModel
from pyaccounts.models.auth import MailboxAuth, auth_composite_id
from pyaccounts.models.avatar import AvatarSource, MailboxAvatarConfig
from pyaccounts.models.mailbox import Mailbox
from pyaccounts.models.service import (
    AnyService,
    BaseService,
    ContainerService,
    GenericService,
    GoogleMailService,
    MicrosoftMailService,
    SlackService,
    TrelloService,
    modelize_service,
)
from pyaccounts.models.service_data import (
    SERVICE_DATA_MODELS,
    BaseServiceData,
    ContainerServiceData,
    GenericServiceData,
    GoogleMailServiceData,
    MailMessage,
    MailThread,
    MicrosoftMailServiceData,
    RecentItem,
    SlackChannel,
    SlackServiceData,
    TrelloNotification,
    TrelloServiceData,
    modelize_service_data,
)
from pyaccounts.models.sleep import SleepingNotificationInfo, SleepTransitionMetrics
from pyaccounts.models.tray import TrayMessage
from pyaccounts.models.user import Container, User

__all__ = [
    "AccountBaseModel",
    "AnyService",
    "AvatarSource",
    "BaseService",
    "BaseServiceData",
    "Container",
    "ContainerService",
    "ContainerServiceData",
    "GenericService",
    "GenericServiceData",
    "GoogleMailService",
    "GoogleMailServiceData",
    "MailMessage",
    "MailThread",
    "Mailbox",
    "MailboxAuth",
    "MailboxAvatarConfig",
    "MicrosoftMailService",
    "MicrosoftMailServiceData",
    "RecentItem",
    "SERVICE_DATA_MODELS",
    "SlackChannel",
    "SlackService",
    "SlackServiceData",
    "SleepTransitionMetrics",
    "SleepingNotificationInfo",
    "TrayMessage",
    "TrelloNotification",
    "TrelloService",
    "TrelloServiceData",
    "User",
    "auth_composite_id",
    "modelize_service",
    "modelize_service_data",
]
