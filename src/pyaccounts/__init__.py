"""pyaccounts - In-memory account and service state store."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyaccounts")
except PackageNotFoundError:
    __version__ = "0+local"
from pyaccounts._constants import ServiceType
from pyaccounts.config import AccountStoreConfig
from pyaccounts.exceptions import (
    AccountPayloadError,
    AccountStoreConfigError,
    AccountStoreDependencyError,
    AccountStoreError,
)
from pyaccounts.models import (
    AvatarSource,
    BaseService,
    BaseServiceData,
    Container,
    Mailbox,
    MailboxAuth,
    MailboxAvatarConfig,
    SleepingNotificationInfo,
    SleepTransitionMetrics,
    TrayMessage,
    User,
)
from pyaccounts.providers import SleepMetricsProvider, StaticSleepMetrics, StaticUserProvider, UserProvider
from pyaccounts.state.payload import LoadPayload
from pyaccounts.store import AccountStore

__all__ = [
    "__version__",
    "AccountPayloadError",
    "AccountStore",
    "AccountStoreConfig",
    "AccountStoreConfigError",
    "AccountStoreDependencyError",
    "AccountStoreError",
    "AvatarSource",
    "BaseService",
    "BaseServiceData",
    "Container",
    "LoadPayload",
    "Mailbox",
    "MailboxAuth",
    "MailboxAvatarConfig",
    "ServiceType",
    "SleepMetricsProvider",
    "SleepTransitionMetrics",
    "SleepingNotificationInfo",
    "StaticSleepMetrics",
    "StaticUserProvider",
    "TrayMessage",
    "User",
    "UserProvider",
]
