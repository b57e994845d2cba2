from __future__ import annotations

import copy
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import pytest

from pyaccounts.config import AccountStoreConfig
from pyaccounts.models.sleep import SleepTransitionMetrics
from pyaccounts.models.user import Container, User
from pyaccounts.providers import StaticSleepMetrics, StaticUserProvider
from pyaccounts.store import AccountStore

# Two mailboxes, m1=[s1, s2] and m2=[s3].  Unread counts: s1=2, s2=3, s3=4.
BASE_PAYLOAD: dict[str, Any] = {
    "mailboxIndex": ["m1", "m2"],
    "mailboxes": {
        "m1": {"id": "m1", "services": ["s1", "s2"], "displayName": "work", "color": "#ff0000"},
        "m2": {"id": "m2", "services": ["s3"]},
    },
    "services": {
        "s1": {"id": "s1", "parentId": "m1", "type": "GOOGLE_MAIL", "displayName": "Gmail"},
        "s2": {"id": "s2", "parentId": "m1", "type": "SLACK"},
        "s3": {"id": "s3", "parentId": "m2", "type": "GENERIC", "displayName": "Tracker"},
    },
    "serviceData": {
        "s1": {
            "unreadThreads": [
                {"id": "t1", "subject": "Hello", "sender": "Ann", "snippet": "Are you around?"},
                {"id": "t2", "subject": "Lunch"},
            ]
        },
        "s2": {
            "channels": [
                {"id": "c1", "name": "general", "mentionCount": 3, "hasUnread": True},
                {"id": "c2", "name": "random", "mentionCount": 0, "hasUnread": True},
            ]
        },
        "s3": {"documentUnreadCount": 4, "documentTitle": "Inbox (4)"},
    },
    "mailboxAuth": {
        "m1:com.google": {
            "parentId": "m1",
            "namespace": "com.google",
            "authData": {"refreshToken": "super-secret-refresh", "email": "ann@example.com"},
        },
        "m1:com.slack": {"parentId": "m1", "namespace": "com.slack", "authData": {}},
    },
    "avatars": {},
    "activeService": "s1",
    "sleepingServices": {},
}


@pytest.fixture
def payload() -> dict[str, Any]:
    return copy.deepcopy(BASE_PAYLOAD)


@pytest.fixture
def sleep_metrics() -> StaticSleepMetrics:
    return StaticSleepMetrics()


@pytest.fixture
def make_store(sleep_metrics: StaticSleepMetrics) -> Callable[..., AccountStore]:
    def _make(
        payload: dict[str, Any] | None = None,
        *,
        user: User | None = None,
        containers: dict[str, Container] | None = None,
        config: AccountStoreConfig | None = None,
    ) -> AccountStore:
        store = AccountStore(
            user_provider=StaticUserProvider(user or User(), containers),
            sleep_metrics=sleep_metrics,
            config=config,
        )
        store.load(copy.deepcopy(BASE_PAYLOAD) if payload is None else payload)
        return store

    return _make


@pytest.fixture
def slept_metric() -> SleepTransitionMetrics:
    return SleepTransitionMetrics(slept_at=datetime(2026, 1, 1, tzinfo=UTC), memory_bytes=123_456)
