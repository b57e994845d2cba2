"""Tests for license-driven service restriction."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from pyaccounts._constants import ServiceType
from pyaccounts.exceptions import AccountStoreDependencyError
from pyaccounts.models.user import User
from pyaccounts.providers import StaticUserProvider
from pyaccounts.state.policy import eligible_services
from pyaccounts.store import AccountStore

LIMITED_USERS = [
    User(),
    User(account_limit=0),
    User(account_limit=1),
    User(account_limit=2),
    User(account_types=frozenset({ServiceType.SLACK, ServiceType.GENERIC})),
    User(account_limit=1, account_types=frozenset({ServiceType.GENERIC})),
]


def test_no_limits_restricts_nothing(make_store: Callable[..., AccountStore]) -> None:
    store = make_store(user=User())

    assert store.unrestricted_service_ids() == ["s1", "s2", "s3"]
    assert not any(store.is_service_restricted(service_id) for service_id in ("s1", "s2", "s3"))


def test_account_limit_truncates_in_canonical_order(make_store: Callable[..., AccountStore]) -> None:
    store = make_store(user=User(account_limit=1))

    assert store.unrestricted_service_ids() == ["s1"]
    assert not store.is_service_restricted("s1")
    assert store.is_service_restricted("s2")
    assert store.is_service_restricted("s3")


def test_type_restriction_filters_before_truncation(make_store: Callable[..., AccountStore]) -> None:
    store = make_store(user=User(account_limit=1, account_types=frozenset({ServiceType.SLACK, ServiceType.GENERIC})))

    assert store.unrestricted_service_ids() == ["s2"]
    assert store.is_service_restricted("s1")
    assert store.is_service_restricted("s3")


def test_type_restriction_without_limit_keeps_all_allowed(make_store: Callable[..., AccountStore]) -> None:
    store = make_store(user=User(account_types=frozenset({ServiceType.SLACK, ServiceType.GENERIC})))

    assert store.unrestricted_service_ids() == ["s2", "s3"]
    assert store.unrestricted_mailbox_service_ids("m1") == ["s2"]


def test_truncation_ignores_map_order(make_store: Callable[..., AccountStore], payload: dict) -> None:
    payload["services"] = dict(reversed(list(payload["services"].items())))
    payload["mailboxIndex"] = ["m2", "m1"]
    store = make_store(payload, user=User(account_limit=2))

    assert store.unrestricted_service_ids() == ["s3", "s1"]


@pytest.mark.parametrize("user", LIMITED_USERS)
def test_three_views_agree(make_store: Callable[..., AccountStore], user: User) -> None:
    store = make_store(user=user)

    ids = set(store.unrestricted_service_ids())
    from_services = {service.id for service in store.unrestricted_services()}
    from_mailboxes = {
        service_id
        for mailbox_id in store.mailbox_ids()
        for service_id in store.unrestricted_mailbox_service_ids(mailbox_id)
    }

    assert ids == from_services == from_mailboxes
    assert ids == {service_id for service_id in ("s1", "s2", "s3") if not store.is_service_restricted(service_id)}


def test_mailbox_service_ids_unknown_mailbox(make_store: Callable[..., AccountStore]) -> None:
    store = make_store(user=User(account_limit=1))
    assert store.unrestricted_mailbox_service_ids("nope") == []


def test_zero_services_never_restricted() -> None:
    # No user provider at all: an empty store answers without consulting it.
    store = AccountStore()
    store.load({"mailboxIndex": ["m1"], "mailboxes": {"m1": {"id": "m1", "services": []}}})

    assert store.is_service_restricted("anything") is False


def test_missing_user_provider_is_fatal(payload: dict) -> None:
    store = AccountStore()
    store.load(payload)

    with pytest.raises(AccountStoreDependencyError) as excinfo:
        store.is_service_restricted("s1")
    assert excinfo.value.dependency == "user_provider"

    with pytest.raises(AccountStoreDependencyError):
        store.unrestricted_services()


def test_provider_without_user_is_fatal(payload: dict) -> None:
    store = AccountStore(user_provider=StaticUserProvider(None))
    store.load(payload)

    with pytest.raises(AccountStoreDependencyError) as excinfo:
        store.user_unread_count()
    assert excinfo.value.dependency == "user"


def test_eligible_services_policy_is_pure(make_store: Callable[..., AccountStore]) -> None:
    services = make_store().all_services_ordered()

    assert eligible_services(services, User(account_limit=0)) == []
    assert eligible_services(services, User(account_limit=10)) == services
    assert eligible_services(services, User()) == services
