"""License restriction and sleep policy.

This module contains *no* registry lookups.  The store hands it ordered
services, the user and recorded state; it returns decisions.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from pyaccounts.models.service import BaseService
from pyaccounts.models.user import User


def is_license_limited(user: User) -> bool:
    """Whether the user's plan restricts services at all."""
    return user.has_account_limit or user.has_account_type_restriction


def eligible_services(ordered_services: Sequence[BaseService], user: User) -> list[BaseService]:
    """Return the services the user's license allows, in the given order.

    Policy:
    - No limit and no type restriction: every service.
    - Otherwise: drop services whose type the plan excludes, then keep the
      first ``account_limit`` of what remains (all of them when there is no
      count limit).

    *ordered_services* must be in mailbox-then-service order; truncation is
    only deterministic under that order.
    """
    if not is_license_limited(user):
        return list(ordered_services)

    allowed = [service for service in ordered_services if user.has_accounts_of_type(service.type)]
    if user.account_limit is not None:
        allowed = allowed[: user.account_limit]
    return allowed


def is_service_sleeping(*, user: User, recorded: bool | None, is_active: bool) -> bool:
    """Decide whether a service is asleep.

    Policy:
    - Plans without sleep support never sleep.
    - A recorded state always wins.
    - Otherwise assume the active service is awake and everything else
      sleeps, which matches what happens at launch.
    """
    if not user.has_sleepable:
        return False
    if recorded is not None:
        return recorded is True
    return not is_active


def is_all_sleeping(service_states: Iterable[bool]) -> bool:
    """True when no state in *service_states* is awake.

    An empty iterable counts as all-sleeping.
    """
    return all(service_states)
