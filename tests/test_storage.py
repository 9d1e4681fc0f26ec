"""
Tests for contribution and audit storage.
"""

import json
from decimal import Decimal

import pytest

from fundtracker.models.audit import AuditEventBuilder
from fundtracker.services.storage import (
    InMemoryAuditStorage,
    InMemoryContributionStore,
    JsonFileContributionStore,
    StorageError,
)


KEY = "fundtracker:contributions"


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "data.json"


@pytest.fixture
def json_store(data_file):
    return JsonFileContributionStore(path=str(data_file), key=KEY)


class TestJsonFileLoad:
    """Loading from the JSON key-value file."""

    def test_missing_file_is_empty(self, json_store):
        assert json_store.load() == []
        assert json_store.last_recovery is None

    def test_empty_file_is_empty(self, json_store, data_file):
        data_file.write_text("")
        assert json_store.load() == []
        assert json_store.last_recovery is None

    def test_missing_key_is_empty(self, json_store, data_file):
        data_file.write_text(json.dumps({"other": [1, 2]}))
        assert json_store.load() == []
        assert json_store.last_recovery is None

    def test_loads_amounts_as_cents(self, json_store, data_file):
        data_file.write_text(json.dumps({KEY: [5, 50.0, 0.1]}))
        assert json_store.load() == [Decimal("5.00"), Decimal("50.00"), Decimal("0.10")]

    def test_invalid_json_recovers_empty(self, json_store, data_file):
        data_file.write_text("{not json")
        assert json_store.load() == []
        assert "invalid JSON" in json_store.last_recovery

    def test_top_level_not_object(self, json_store, data_file):
        data_file.write_text("[1, 2, 3]")
        assert json_store.load() == []
        assert json_store.last_recovery == "top level is not an object"

    def test_value_not_a_list(self, json_store, data_file):
        data_file.write_text(json.dumps({KEY: "5,50"}))
        assert json_store.load() == []
        assert "expected a list" in json_store.last_recovery

    def test_invalid_entries_dropped(self, json_store, data_file):
        data_file.write_text(json.dumps({KEY: [5, "x", None, -2, 7.5, True]}))
        assert json_store.load() == [Decimal("5.00"), Decimal("7.50")]
        assert json_store.last_recovery == "dropped 4 invalid entries"

    def test_zero_entries_kept(self, json_store, data_file):
        """A sub-cent addition is persisted as 0.0 and must come back."""
        data_file.write_text(json.dumps({KEY: [5, 0.0, 0]}))
        assert json_store.load() == [Decimal("5.00"), Decimal("0.00"), Decimal("0.00")]
        assert json_store.last_recovery is None

    def test_undecodable_bytes_recover_empty(self, json_store, data_file):
        data_file.write_bytes(b"\xff\xfe{garbage")
        assert json_store.load() == []
        assert "unreadable file" in json_store.last_recovery

    def test_non_finite_entries_dropped(self, json_store, data_file):
        # json.dumps writes these as the NaN and Infinity literals
        data_file.write_text(json.dumps({KEY: [float("nan"), float("inf"), 3]}))
        assert json_store.load() == [Decimal("3.00")]

    def test_recovery_reason_cleared_on_next_load(self, json_store, data_file):
        data_file.write_text("garbage")
        json_store.load()
        data_file.write_text(json.dumps({KEY: [1]}))
        json_store.load()
        assert json_store.last_recovery is None


class TestJsonFileSave:
    """Saving to the JSON key-value file."""

    def test_round_trip(self, json_store, data_file):
        json_store.save([Decimal("5.00"), Decimal("12.34")])
        assert json.loads(data_file.read_text()) == {KEY: [5.0, 12.34]}
        assert json_store.load() == [Decimal("5.00"), Decimal("12.34")]

    def test_save_empty_list(self, json_store, data_file):
        json_store.save([Decimal("1")])
        json_store.save([])
        assert json.loads(data_file.read_text()) == {KEY: []}

    def test_other_keys_preserved(self, json_store, data_file):
        data_file.write_text(json.dumps({"theme": "dark", KEY: [1]}))
        json_store.save([Decimal("2.00")])
        assert json.loads(data_file.read_text()) == {"theme": "dark", KEY: [2.0]}

    def test_corrupt_file_overwritten(self, json_store, data_file):
        data_file.write_text("{broken")
        json_store.save([Decimal("3.00")])
        assert json.loads(data_file.read_text()) == {KEY: [3.0]}

    def test_undecodable_file_overwritten(self, json_store, data_file):
        data_file.write_bytes(b"\xff\xfe{garbage")
        json_store.save([Decimal("5.00")])
        assert json.loads(data_file.read_text()) == {KEY: [5.0]}

    def test_creates_parent_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "data.json"
        store = JsonFileContributionStore(path=str(path), key=KEY)
        store.save([Decimal("1.00")])
        assert path.exists()

    def test_no_temp_file_left_behind(self, json_store, data_file):
        json_store.save([Decimal("1.00")])
        assert not data_file.with_name(data_file.name + ".tmp").exists()

    def test_write_failure_raises_storage_error(self, tmp_path):
        # A directory where the file should be cannot be replaced
        path = tmp_path / "data.json"
        path.mkdir()
        store = JsonFileContributionStore(path=str(path), key=KEY)
        with pytest.raises(StorageError):
            store.save([Decimal("1.00")])

    def test_defaults_come_from_settings(self, tmp_path, monkeypatch):
        monkeypatch.setenv("STORAGE_PATH", str(tmp_path / "env.json"))
        monkeypatch.setenv("STORAGE_KEY", "custom:key")
        store = JsonFileContributionStore()
        assert store.path == tmp_path / "env.json"
        assert store.key == "custom:key"


class TestInMemoryContributionStore:

    def test_starts_empty(self):
        assert InMemoryContributionStore().load() == []

    def test_save_then_load(self):
        store = InMemoryContributionStore()
        store.save([Decimal("5.00"), Decimal("1.25")])
        assert store.load() == [Decimal("5.00"), Decimal("1.25")]

    def test_initial_values_are_filtered(self):
        store = InMemoryContributionStore([5, "bad", -1, "2.5"])
        assert store.load() == [Decimal("5.00"), Decimal("2.50")]
        assert store.last_recovery == "dropped 2 invalid entries"


class TestInMemoryAuditStorage:

    def _event(self, n):
        return AuditEventBuilder.ledger_reset(cleared_count=n, correlation_id=None)

    def test_newest_first(self):
        storage = InMemoryAuditStorage()
        for n in range(3):
            assert storage.append_event(self._event(n)) is True
        counts = [e.details["cleared_count"] for e in storage.get_recent_events()]
        assert counts == [2, 1, 0]

    def test_limit(self):
        storage = InMemoryAuditStorage()
        for n in range(10):
            storage.append_event(self._event(n))
        assert len(storage.get_recent_events(limit=4)) == 4

    def test_bounded_history(self):
        storage = InMemoryAuditStorage(max_events=5)
        for n in range(8):
            storage.append_event(self._event(n))
        counts = [e.details["cleared_count"] for e in storage.get_recent_events()]
        assert counts == [7, 6, 5, 4, 3]
