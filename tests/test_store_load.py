"""Tests for AccountStore.load payload handling."""

from __future__ import annotations

import logging
from collections.abc import Callable

import pytest

from pyaccounts.config import AccountStoreConfig
from pyaccounts.exceptions import AccountPayloadError
from pyaccounts.state.payload import LoadPayload
from pyaccounts.store import AccountStore


class TestRejectedPayloads:
    def test_unknown_service_type(self, make_store: Callable[..., AccountStore], payload: dict) -> None:
        payload["services"]["s3"]["type"] = "FAX"

        with pytest.raises(AccountPayloadError, match="invalid account payload"):
            make_store(payload)

    def test_dangling_parent(self, make_store: Callable[..., AccountStore], payload: dict) -> None:
        payload["services"]["s3"]["parentId"] = "m9"

        with pytest.raises(AccountPayloadError) as excinfo:
            make_store(payload)
        assert excinfo.value.entity_id == "s3"

    def test_index_without_mailbox(self, make_store: Callable[..., AccountStore], payload: dict) -> None:
        payload["mailboxIndex"].append("m9")

        with pytest.raises(AccountPayloadError) as excinfo:
            make_store(payload)
        assert excinfo.value.entity_id == "m9"

    def test_duplicate_index_entry(self, make_store: Callable[..., AccountStore], payload: dict) -> None:
        payload["mailboxIndex"].append("m1")

        with pytest.raises(AccountPayloadError, match="twice"):
            make_store(payload)

    def test_service_not_listed_by_parent(self, make_store: Callable[..., AccountStore], payload: dict) -> None:
        payload["services"]["s4"] = {"id": "s4", "parentId": "m2", "type": "GENERIC"}

        with pytest.raises(AccountPayloadError) as excinfo:
            make_store(payload)
        assert excinfo.value.entity_id == "s4"

    def test_service_listed_twice(self, make_store: Callable[..., AccountStore], payload: dict) -> None:
        payload["mailboxes"]["m2"]["services"].append("s1")

        with pytest.raises(AccountPayloadError, match="listed by mailboxes"):
            make_store(payload)

    def test_failed_load_keeps_previous_state(self, make_store: Callable[..., AccountStore], payload: dict) -> None:
        store = make_store()
        snapshot = store.snapshot
        data = store.get_service_data("s1")

        payload["services"]["s3"]["parentId"] = "m9"
        with pytest.raises(AccountPayloadError):
            store.load(payload)

        assert store.snapshot is snapshot
        assert store.get_service_data("s1") is data
        assert store.service_count() == 3


class TestLenientLoad:
    def test_broken_relations_are_skipped(self, make_store: Callable[..., AccountStore], payload: dict) -> None:
        payload["mailboxIndex"].append("m9")
        payload["services"]["s4"] = {"id": "s4", "parentId": "m2", "type": "GENERIC"}

        store = make_store(payload, config=AccountStoreConfig(strict_load=False))

        assert store.mailbox_ids() == ["m1", "m2"]
        assert [service.id for service in store.all_services_ordered()] == ["s1", "s2", "s3"]
        assert store.has_service("s4")

    def test_dropped_index_entries_are_logged(
        self, make_store: Callable[..., AccountStore], payload: dict, caplog: pytest.LogCaptureFixture
    ) -> None:
        payload["mailboxIndex"].append("m9")

        with caplog.at_level(logging.WARNING, logger="pyaccounts.state.snapshot"):
            make_store(payload, config=AccountStoreConfig(strict_load=False))

        assert "Dropped 1 mailbox index entries" in caplog.text


class TestPayloadShapes:
    def test_snake_case_keys(self, make_store: Callable[..., AccountStore]) -> None:
        store = make_store(
            {
                "mailbox_index": ["m1"],
                "mailboxes": {"m1": {"id": "m1", "services": ["s1"], "display_name": "home"}},
                "services": {"s1": {"id": "s1", "parent_id": "m1", "type": "GENERIC"}},
                "service_data": {"s1": {"document_unread_count": 2}},
                "active_service": "s1",
            }
        )

        assert store.get_mailbox("m1").display_name == "home"
        assert store.active_service_id() == "s1"
        assert store.user_unread_count() == 2

    def test_ids_filled_from_map_keys(self, make_store: Callable[..., AccountStore]) -> None:
        store = make_store(
            {
                "mailboxIndex": ["m1"],
                "mailboxes": {"m1": {"services": ["s1"]}},
                "services": {"s1": {"parentId": "m1", "type": "SLACK"}},
            }
        )

        assert store.get_service("s1").parent_id == "m1"
        assert store.get_mailbox("m1").partition == "persist:m1"

    def test_null_collections_are_empty(self, make_store: Callable[..., AccountStore]) -> None:
        store = make_store({"mailboxIndex": None, "mailboxes": None, "services": None, "avatars": None})

        assert store.mailbox_count() == 0
        assert store.service_count() == 0

    def test_parsed_payload_is_accepted(self, make_store: Callable[..., AccountStore], payload: dict) -> None:
        parsed = LoadPayload.model_validate(payload)
        store = make_store()

        store.load(parsed)

        assert store.mailbox_ids() == ["m1", "m2"]
        assert store.get_service("s2").parent_id == "m1"

    def test_unknown_keys_are_ignored(self, make_store: Callable[..., AccountStore], payload: dict) -> None:
        payload["futureField"] = {"anything": True}
        payload["services"]["s1"]["someNewSetting"] = 3

        store = make_store(payload)

        assert store.get_service("s1").raw["someNewSetting"] == 3


class TestLoadTrace:
    def test_trace_redacts_auth_secrets(
        self, make_store: Callable[..., AccountStore], caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="pyaccounts.store"):
            make_store(config=AccountStoreConfig(trace_load=True))

        assert "Account load payload" in caplog.text
        assert "super-secret-refresh" not in caplog.text
        assert "ann@example.com" not in caplog.text
        assert "'refreshToken': '<redacted>'" in caplog.text

    def test_trace_summarizes_avatars_and_truncates_long_strings(
        self, make_store: Callable[..., AccountStore], payload: dict, caplog: pytest.LogCaptureFixture
    ) -> None:
        avatar = "data:image/png;base64," + "A" * 500
        payload["avatars"] = {"a1": avatar}
        payload["mailboxes"]["m2"]["displayName"] = "x" * 500

        with caplog.at_level(logging.DEBUG, logger="pyaccounts.store"):
            make_store(payload, config=AccountStoreConfig(trace_load=True, trace_max_string=32))

        assert f"<data-uri:image/png:{len(avatar)}b>" in caplog.text
        assert "A" * 100 not in caplog.text
        assert "<truncated>" in caplog.text
        assert "x" * 100 not in caplog.text

    def test_no_trace_by_default(
        self, make_store: Callable[..., AccountStore], caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="pyaccounts.store"):
            make_store()

        assert "Account load payload" not in caplog.text
        assert "Loaded 2 mailboxes, 3 services, 2 auths, 0 avatars" in caplog.text
