"""External providers the store consumes.

The store never looks its collaborators up by name; they are handed to
:class:`pyaccounts.store.AccountStore` at construction.  The protocols
below describe what it needs, and the ``Static*`` classes are small
dict-backed implementations for wiring and tests.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from pyaccounts.models.sleep import SleepTransitionMetrics
from pyaccounts.models.user import Container, User


class UserProvider(Protocol):
    """Source of the signed-in user's license and container definitions."""

    def get_user(self) -> User | None: ...

    def get_container(self, container_id: str) -> Container | None: ...


class SleepMetricsProvider(Protocol):
    """Source of metrics recorded when a service was put to sleep."""

    def get_sleep_metrics(self, service_id: str) -> SleepTransitionMetrics | None: ...


class StaticUserProvider:
    """A :class:`UserProvider` over a fixed user and container map."""

    def __init__(self, user: User | None, containers: Mapping[str, Container] | None = None) -> None:
        self._user = user
        self._containers: dict[str, Container] = dict(containers or {})

    def get_user(self) -> User | None:
        return self._user

    def get_container(self, container_id: str) -> Container | None:
        return self._containers.get(container_id)


class StaticSleepMetrics:
    """A :class:`SleepMetricsProvider` backed by a dict.

    The owner of the sleep queue records a metric whenever it actually
    puts a service to sleep and forgets it when the service wakes.
    """

    def __init__(self, metrics: Mapping[str, SleepTransitionMetrics] | None = None) -> None:
        self._metrics: dict[str, SleepTransitionMetrics] = dict(metrics or {})

    def record(self, service_id: str, metrics: SleepTransitionMetrics) -> None:
        self._metrics[service_id] = metrics

    def forget(self, service_id: str) -> None:
        self._metrics.pop(service_id, None)

    def get_sleep_metrics(self, service_id: str) -> SleepTransitionMetrics | None:
        return self._metrics.get(service_id)
