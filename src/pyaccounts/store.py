"""In-memory account store.

The store owns one :class:`AccountSnapshot` at a time plus two derived
caches (service data and mailbox avatar configs).  State only changes
through :meth:`AccountStore.load`, which replaces the snapshot wholesale.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from pydantic import ValidationError

from pyaccounts._redact import redact_for_log
from pyaccounts.config import AccountStoreConfig
from pyaccounts.exceptions import AccountPayloadError, AccountStoreDependencyError
from pyaccounts.models.auth import MailboxAuth
from pyaccounts.models.avatar import MailboxAvatarConfig
from pyaccounts.models.mailbox import Mailbox
from pyaccounts.models.service import BaseService
from pyaccounts.models.service_data import BaseServiceData, modelize_service_data
from pyaccounts.models.sleep import SleepingNotificationInfo
from pyaccounts.models.tray import TrayMessage
from pyaccounts.models.user import Container, User
from pyaccounts.providers import SleepMetricsProvider, UserProvider
from pyaccounts.state import aggregation
from pyaccounts.state import policy as _policy
from pyaccounts.state.avatar import AvatarConfigCache, build_avatar_config, resolve_avatar
from pyaccounts.state.payload import LoadPayload
from pyaccounts.state.snapshot import AccountSnapshot

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class AccountStore:
    """Read model over mailboxes, services and their derived state.

    Usage::

        store = AccountStore(user_provider=StaticUserProvider(User()))
        store.load(payload)
        store.user_unread_count()

    Lookups of unknown ids return ``None`` (or an empty result).  Only a
    missing user provider raises, and only from the queries that need it.
    """

    def __init__(
        self,
        *,
        user_provider: UserProvider | None = None,
        sleep_metrics: SleepMetricsProvider | None = None,
        config: AccountStoreConfig | None = None,
    ) -> None:
        self._config = config or AccountStoreConfig()
        self._user_provider = user_provider
        self._sleep_metrics = sleep_metrics
        self._snapshot = AccountSnapshot()
        self._service_data: dict[str, BaseServiceData] = {}
        self._avatar_cache = AvatarConfigCache()

    @property
    def snapshot(self) -> AccountSnapshot:
        """The currently loaded snapshot."""
        return self._snapshot

    # ------------------------------------------------------------------
    # Providers
    # ------------------------------------------------------------------

    def _require_user_provider(self) -> UserProvider:
        if self._user_provider is None:
            raise AccountStoreDependencyError(
                "AccountStore has no user provider. Ensure one is linked before querying restrictions or sleep state",
                dependency="user_provider",
            )
        return self._user_provider

    def get_user(self) -> User:
        """Return the linked user, raising if none is available."""
        user = self._require_user_provider().get_user()
        if user is None:
            raise AccountStoreDependencyError(
                "User provider returned no user. Ensure the user store is loaded before the account store is queried",
                dependency="user",
            )
        return user

    def get_container(self, container_id: str) -> Container | None:
        return self._require_user_provider().get_container(container_id)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, payload: LoadPayload | Mapping[str, Any]) -> None:
        """Replace all state with *payload*.

        The new snapshot is fully built before it is swapped in.  If the
        payload is malformed :class:`AccountPayloadError` is raised and the
        previous state is kept.
        """
        if self._config.trace_load:
            raw_payload = payload.model_dump(by_alias=True) if isinstance(payload, LoadPayload) else payload
            _logger.debug(
                "Account load payload: %s",
                redact_for_log(raw_payload, max_string=self._config.trace_max_string),
            )

        if isinstance(payload, LoadPayload):
            parsed = payload
        else:
            try:
                parsed = LoadPayload.model_validate(dict(payload))
            except ValidationError as exc:
                raise AccountPayloadError(f"invalid account payload: {exc}") from exc

        snapshot = AccountSnapshot.from_payload(parsed, strict=self._config.strict_load)

        self._snapshot = snapshot
        self._service_data = {}
        self._avatar_cache.retain(snapshot.mailboxes)
        _logger.debug(
            "Loaded %d mailboxes, %d services, %d auths, %d avatars",
            snapshot.mailbox_count(),
            snapshot.service_count(),
            len(snapshot.mailbox_auth),
            len(snapshot.avatars),
        )

    # ------------------------------------------------------------------
    # Mailboxes
    # ------------------------------------------------------------------

    def all_mailboxes(self) -> list[Mailbox]:
        return self._snapshot.all_mailboxes()

    def all_mailboxes_indexed(self) -> dict[str, Mailbox]:
        return {mailbox.id: mailbox for mailbox in self._snapshot.all_mailboxes()}

    def mailbox_ids(self) -> list[str]:
        return self._snapshot.mailbox_ids()

    def get_mailbox(self, mailbox_id: str | None) -> Mailbox | None:
        return self._snapshot.get_mailbox(mailbox_id)

    def mailbox_count(self) -> int:
        return self._snapshot.mailbox_count()

    def get_mailbox_for_service(self, service_id: str) -> Mailbox | None:
        return self._snapshot.get_mailbox_for_service(service_id)

    def all_partitions(self) -> list[str]:
        return self._snapshot.all_partitions()

    # ------------------------------------------------------------------
    # Mailbox auth
    # ------------------------------------------------------------------

    def get_mailbox_auth(self, auth_id: str) -> MailboxAuth | None:
        return self._snapshot.get_mailbox_auth(auth_id)

    def get_mailbox_auth_for_mailbox(self, mailbox_id: str, namespace: str | None) -> MailboxAuth | None:
        return self._snapshot.get_mailbox_auth_for_mailbox(mailbox_id, namespace)

    def get_mailbox_auth_for_service_id(self, service_id: str) -> MailboxAuth | None:
        service = self._snapshot.get_service(service_id)
        if service is None:
            return None
        return self._snapshot.get_mailbox_auth_for_mailbox(service.parent_id, service.supported_auth_namespace)

    def get_mailbox_auths_for_mailbox(self, mailbox_id: str) -> list[MailboxAuth]:
        return self._snapshot.get_mailbox_auths_for_mailbox(mailbox_id)

    def get_mailbox_auth_ids_for_mailbox(self, mailbox_id: str) -> list[str]:
        return [auth.id for auth in self._snapshot.get_mailbox_auths_for_mailbox(mailbox_id)]

    # ------------------------------------------------------------------
    # Services
    # ------------------------------------------------------------------

    def get_service(self, service_id: str | None) -> BaseService | None:
        return self._snapshot.get_service(service_id)

    def has_service(self, service_id: str) -> bool:
        return self._snapshot.has_service(service_id)

    def service_count(self) -> int:
        return self._snapshot.service_count()

    def first_service_id(self) -> str | None:
        return self._snapshot.first_service_id()

    def all_services_of_type(self, service_type: str) -> list[BaseService]:
        return self._snapshot.all_services_of_type(service_type)

    def all_services_unordered(self) -> list[BaseService]:
        return self._snapshot.all_services_unordered()

    def all_services_ordered(self) -> list[BaseService]:
        return self._snapshot.all_services_ordered()

    def all_container_ids(self) -> list[str]:
        return self._snapshot.all_container_ids()

    def get_avatar(self, avatar_id: str | None) -> str | None:
        return self._snapshot.get_avatar(avatar_id)

    # ------------------------------------------------------------------
    # Service data
    # ------------------------------------------------------------------

    def get_service_data(self, service_id: str | None) -> BaseServiceData | None:
        """Return the runtime data for a service, creating it on first access.

        ``None`` only when the service is unknown.
        """
        if service_id is None:
            return None
        data = self._service_data.get(service_id)
        if data is not None:
            return data

        service = self._snapshot.get_service(service_id)
        if service is None:
            return None

        raw = self._snapshot.service_data_raw.get(service_id)
        try:
            data = modelize_service_data(service_id, service.service_type, raw)
        except ValidationError:
            _logger.warning("Discarding malformed service data for service=%s", service_id, exc_info=True)
            data = modelize_service_data(service_id, service.service_type)
        self._service_data[service_id] = data
        return data

    def active_service_data(self) -> BaseServiceData | None:
        return self.get_service_data(self.active_service_id())

    # ------------------------------------------------------------------
    # Restrictions
    # ------------------------------------------------------------------

    def is_service_restricted(self, service_id: str) -> bool:
        if self._snapshot.service_count() == 0:
            return False
        user = self.get_user()
        if not _policy.is_license_limited(user):
            return False
        return service_id not in set(self.unrestricted_service_ids())

    def unrestricted_services(self) -> list[BaseService]:
        return _policy.eligible_services(self._snapshot.all_services_ordered(), self.get_user())

    def unrestricted_service_ids(self) -> list[str]:
        return [service.id for service in self.unrestricted_services()]

    def unrestricted_mailbox_service_ids(self, mailbox_id: str) -> list[str]:
        mailbox = self._snapshot.get_mailbox(mailbox_id)
        if mailbox is None:
            return []
        unrestricted = set(self.unrestricted_service_ids())
        return [service_id for service_id in mailbox.services if service_id in unrestricted]

    # ------------------------------------------------------------------
    # Active
    # ------------------------------------------------------------------

    def active_service_id(self) -> str | None:
        """The loaded active service, or the first service when unset or stale."""
        active_id = self._snapshot.active_service_id
        if active_id is not None and self._snapshot.has_service(active_id):
            return active_id
        if active_id is not None:
            _logger.debug("Active service=%s is unknown; falling back to the first service", active_id)
        return self._snapshot.first_service_id()

    def is_service_active(self, service_id: str) -> bool:
        return self.active_service_id() == service_id

    def active_service(self) -> BaseService | None:
        return self._snapshot.get_service(self.active_service_id())

    def active_mailbox_id(self) -> str | None:
        service = self.active_service()
        return service.parent_id if service is not None else None

    def active_mailbox(self) -> Mailbox | None:
        return self._snapshot.get_mailbox(self.active_mailbox_id())

    # ------------------------------------------------------------------
    # Sleeping
    # ------------------------------------------------------------------

    def is_service_sleeping(self, service_id: str) -> bool:
        return _policy.is_service_sleeping(
            user=self.get_user(),
            recorded=self._snapshot.sleeping_services.get(service_id),
            is_active=self.is_service_active(service_id),
        )

    def is_mailbox_sleeping(self, mailbox_id: str) -> bool:
        """True when every service in the mailbox is asleep.

        A mailbox without services counts as sleeping.
        """
        if not self.get_user().has_sleepable:
            return False
        mailbox = self._snapshot.get_mailbox(mailbox_id)
        if mailbox is None:
            return False
        return _policy.is_all_sleeping(self.is_service_sleeping(service_id) for service_id in mailbox.services)

    def get_sleeping_notification_info(self, service_id: str) -> SleepingNotificationInfo | None:
        """Info for the sleep explainer, or ``None`` when it should not show.

        Requires a recorded sleep transition so services that were simply
        never woken since launch do not trigger it.
        """
        service = self._snapshot.get_service(service_id)
        if service is None or service.has_seen_sleepable_wizard:
            return None
        if not self.is_service_sleeping(service_id):
            return None
        if self._sleep_metrics is None:
            return None
        metrics = self._sleep_metrics.get_sleep_metrics(service_id)
        if metrics is None:
            return None
        return SleepingNotificationInfo(service=service, close_metrics=metrics)

    # ------------------------------------------------------------------
    # Avatar
    # ------------------------------------------------------------------

    def get_mailbox_avatar_config(self, mailbox_id: str) -> MailboxAvatarConfig:
        """Return the cached avatar descriptor, refreshing it if its hash changed."""
        return self._avatar_cache.store(build_avatar_config(self._snapshot, mailbox_id))

    def get_mailbox_resolved_avatar(self, mailbox_id: str, resolver: Callable[[str], T]) -> T | None:
        return resolve_avatar(self._snapshot, mailbox_id, resolver)

    # ------------------------------------------------------------------
    # Unread & tray
    # ------------------------------------------------------------------

    def user_unread_count(self) -> int:
        return aggregation.user_unread_count(self)

    def user_unread_count_for_app(self) -> int:
        return aggregation.user_unread_count_for_app(self)

    def user_unread_activity_for_app(self) -> bool:
        return aggregation.user_unread_activity_for_app(self)

    def user_unread_count_for_mailbox(self, mailbox_id: str) -> int:
        return aggregation.user_unread_count_for_mailbox(self, mailbox_id)

    def user_tray_messages(self) -> list[TrayMessage]:
        return aggregation.user_tray_messages(self)

    def user_tray_messages_for_mailbox(self, mailbox_id: str) -> list[TrayMessage]:
        return aggregation.user_tray_messages_for_mailbox(self, mailbox_id)
