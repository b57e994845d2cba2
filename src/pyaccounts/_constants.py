"""Internal constants shared across the library."""

from __future__ import annotations

from enum import StrEnum


class ServiceType(StrEnum):
    """Closed set of service types the store knows how to model."""

    GENERIC = "GENERIC"
    CONTAINER = "CONTAINER"
    GOOGLE_MAIL = "GOOGLE_MAIL"
    MICROSOFT_MAIL = "MICROSOFT_MAIL"
    SLACK = "SLACK"
    TRELLO = "TRELLO"


# Auth namespaces a service type authenticates against.  Types without an
# entry carry no auth record.
AUTH_NAMESPACES: dict[ServiceType, str] = {
    ServiceType.GOOGLE_MAIL: "com.google",
    ServiceType.MICROSOFT_MAIL: "com.microsoft",
    ServiceType.SLACK: "com.slack",
    ServiceType.TRELLO: "com.trello",
}

AUTH_ID_SEPARATOR = ":"
PARTITION_PREFIX = "persist:"

DEFAULT_AVATAR_COLOR = "rgb(255, 255, 255)"
