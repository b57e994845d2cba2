"""Service models.

Services are a closed set of variants discriminated by the ``type`` field.
:data:`AnyService` is the pydantic discriminated union used by the load
payload; :func:`modelize_service` is the same factory for callers holding
a single raw dict.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import AliasChoices, Field, TypeAdapter

from pyaccounts._constants import AUTH_NAMESPACES, ServiceType
from pyaccounts.models._base import AccountBaseModel


class BaseService(AccountBaseModel):
    """Fields shared by every service variant."""

    id: str
    """Service id."""
    type: str
    """Type discriminator, narrowed to a literal by each variant."""
    parent_id: str
    """Owning mailbox id."""
    display_name: str | None = None
    """User-provided service name."""
    color: str | None = None
    """Service accent color."""
    avatar_id: str | None = None
    """Id of a user-chosen avatar."""
    service_local_avatar_id: str | None = None
    """Id of an avatar captured from the service itself (e.g. profile picture)."""
    service_avatar_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("serviceAvatarURL", "serviceAvatarUrl", "service_avatar_url"),
    )
    """Remote avatar URL reported by the service."""
    show_badge_count_in_app: bool = True
    """Include this service's unread count in the app badge."""
    show_unread_activity_in_app: bool = True
    """Include this service's unread activity in the app indicator."""
    show_tray_messages: bool = True
    """Surface this service's unread items in the tray."""
    has_seen_sleepable_wizard: bool = False
    """The user has dismissed the sleep explainer for this service."""

    @property
    def service_type(self) -> ServiceType:
        return ServiceType(self.type)

    @property
    def supported_auth_namespace(self) -> str | None:
        return AUTH_NAMESPACES.get(self.service_type)

    @property
    def has_avatar_id(self) -> bool:
        return bool(self.avatar_id)

    @property
    def has_service_local_avatar_id(self) -> bool:
        return bool(self.service_local_avatar_id)

    @property
    def has_service_avatar_url(self) -> bool:
        return bool(self.service_avatar_url)

    @property
    def has_any_avatar(self) -> bool:
        return self.has_avatar_id or self.has_service_local_avatar_id or self.has_service_avatar_url


class GenericService(BaseService):
    """A plain website wrapped as a service."""

    type: Literal["GENERIC"] = "GENERIC"
    url: str = ""
    """Start URL."""


class ContainerService(BaseService):
    """A service instantiated from a user container template."""

    type: Literal["CONTAINER"] = "CONTAINER"
    container_id: str
    """Id of the container this service was created from."""


class GoogleMailService(BaseService):
    type: Literal["GOOGLE_MAIL"] = "GOOGLE_MAIL"


class MicrosoftMailService(BaseService):
    type: Literal["MICROSOFT_MAIL"] = "MICROSOFT_MAIL"


class SlackService(BaseService):
    type: Literal["SLACK"] = "SLACK"


class TrelloService(BaseService):
    type: Literal["TRELLO"] = "TRELLO"


AnyService = Annotated[
    GenericService | ContainerService | GoogleMailService | MicrosoftMailService | SlackService | TrelloService,
    Field(discriminator="type"),
]
"""Discriminated union of every service variant."""

_SERVICE_ADAPTER: TypeAdapter[AnyService] = TypeAdapter(AnyService)


def modelize_service(raw: dict[str, Any]) -> BaseService:
    """Build the service variant matching ``raw["type"]``.

    Raises ``pydantic.ValidationError`` for unknown types or bad fields.
    """
    return _SERVICE_ADAPTER.validate_python(raw)
