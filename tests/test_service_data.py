"""Tests for lazy service data creation."""

from __future__ import annotations

import logging
from collections.abc import Callable

import pytest

from pyaccounts.models.service_data import GenericServiceData, GoogleMailServiceData, SlackServiceData
from pyaccounts.store import AccountStore


def test_service_data_created_lazily_once(make_store: Callable[..., AccountStore]) -> None:
    store = make_store()
    assert "s1" not in store._service_data  # noqa: SLF001

    first = store.get_service_data("s1")

    assert list(store._service_data) == ["s1"]  # noqa: SLF001
    assert store.get_service_data("s1") is first
    assert len(store._service_data) == 1  # noqa: SLF001


def test_service_data_variant_follows_service_type(make_store: Callable[..., AccountStore]) -> None:
    store = make_store()

    google = store.get_service_data("s1")
    slack = store.get_service_data("s2")
    generic = store.get_service_data("s3")

    assert isinstance(google, GoogleMailServiceData)
    assert [thread.id for thread in google.unread_threads] == ["t1", "t2"]
    assert isinstance(slack, SlackServiceData)
    assert isinstance(generic, GenericServiceData)
    assert generic.document_unread_count == 4


def test_service_data_defaults_without_payload_entry(
    make_store: Callable[..., AccountStore], payload: dict
) -> None:
    del payload["serviceData"]["s3"]
    store = make_store(payload)

    data = store.get_service_data("s3")

    assert isinstance(data, GenericServiceData)
    assert data.id == "s3"
    assert data.document_unread_count == 0


def test_service_data_unknown_service_is_none(make_store: Callable[..., AccountStore], payload: dict) -> None:
    payload["serviceData"]["ghost"] = {"documentUnreadCount": 1}
    store = make_store(payload)

    assert store.get_service_data("ghost") is None
    assert store.get_service_data(None) is None
    assert "ghost" not in store._service_data  # noqa: SLF001


def test_malformed_service_data_degrades_to_defaults(
    make_store: Callable[..., AccountStore], payload: dict, caplog: pytest.LogCaptureFixture
) -> None:
    payload["serviceData"]["s3"] = {"documentUnreadCount": "lots"}
    store = make_store(payload)

    with caplog.at_level(logging.WARNING, logger="pyaccounts.store"):
        data = store.get_service_data("s3")

    assert isinstance(data, GenericServiceData)
    assert data.document_unread_count == 0
    assert "malformed service data" in caplog.text


def test_load_discards_service_data_cache(make_store: Callable[..., AccountStore], payload: dict) -> None:
    store = make_store()
    before = store.get_service_data("s3")

    payload["serviceData"]["s3"]["documentUnreadCount"] = 9
    store.load(payload)
    after = store.get_service_data("s3")

    assert after is not before
    assert after.document_unread_count == 9


def test_active_service_data(make_store: Callable[..., AccountStore]) -> None:
    store = make_store()
    assert store.active_service_data() is store.get_service_data("s1")
