"""
Tests for state store and storage backends
Tests para el almacen de estado y los almacenamientos
"""

import json
import pytest
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from formtext.errors import PersistenceFailure
from formtext.state_store import StateStore
from formtext.storage import DEFAULT_STORAGE_KEY, JsonFileStore, MemoryStore


class BrokenStore:
    """Store whose every operation fails"""

    def read(self, key):
        raise PersistenceFailure("disk unavailable")

    def write(self, key, value):
        raise PersistenceFailure("disk full")

    def remove(self, key):
        raise PersistenceFailure("read-only")


class DeniedStore:
    """Store raising errors outside the persistence taxonomy"""

    def read(self, key):
        raise RuntimeError("storage access denied")

    def write(self, key, value):
        raise RuntimeError("storage access denied")

    def remove(self, key):
        raise RuntimeError("storage access denied")


@pytest.fixture
def state():
    store = StateStore()
    store.set("name", "Ana")
    store.set("smoker", False)
    store.set("meds", ["a", "b"])
    return store


class TestStateStore:
    """Tests for in-memory operations"""

    def test_get_set(self):
        store = StateStore()
        store.set("a", "1")
        assert store.get("a") == "1"
        assert store.get("missing") is None
        assert store.get("missing", "x") == "x"

    def test_snapshot_detached(self, state):
        snapshot = state.snapshot_all()
        snapshot["meds"].append("c")
        snapshot["name"] = "Other"
        assert state.get("meds") == ["a", "b"]
        assert state.get("name") == "Ana"

    def test_round_trip(self, state):
        before = state.snapshot_all()
        state.restore_all(state.snapshot_all())
        assert state.snapshot_all() == before

    def test_restore_replaces_everything(self, state):
        state.restore_all({"only": "this"})
        assert state.snapshot_all() == {"only": "this"}

    def test_restore_calls_sync(self, state):
        seen = []
        state.restore_all({"a": "1", "b": True}, sync=lambda name, value: seen.append((name, value)))
        assert seen == [("a", "1"), ("b", True)]

    def test_clear(self, state):
        state.clear()
        assert len(state) == 0

    def test_remove(self, state):
        state.remove("name")
        state.remove("never-there")
        assert "name" not in state
        assert state.names() == ["smoker", "meds"]


class TestPersistence:
    """Tests for save and load through a key-value store"""

    def test_save_and_load(self, state):
        backend = MemoryStore()
        assert state.save(backend) is True
        assert json.loads(backend.read(DEFAULT_STORAGE_KEY)) == state.snapshot_all()

        restored = StateStore()
        assert restored.load(backend) is True
        assert restored.snapshot_all() == state.snapshot_all()

    def test_custom_key(self, state):
        backend = MemoryStore()
        state.save(backend, "consulta")
        assert "consulta" in backend
        assert DEFAULT_STORAGE_KEY not in backend

    def test_absent_key_keeps_state(self, state):
        before = state.snapshot_all()
        assert state.load(MemoryStore()) is False
        assert state.snapshot_all() == before

    def test_malformed_payload_resets(self, state, caplog):
        backend = MemoryStore({DEFAULT_STORAGE_KEY: "{not json"})
        assert state.load(backend) is False
        assert len(state) == 0
        assert "not valid JSON" in caplog.text

    def test_non_object_payload_resets(self, state):
        backend = MemoryStore({DEFAULT_STORAGE_KEY: "[1, 2, 3]"})
        assert state.load(backend) is False
        assert len(state) == 0

    def test_read_failure_resets(self, state, caplog):
        assert state.load(BrokenStore()) is False
        assert len(state) == 0
        assert "disk unavailable" in caplog.text

    def test_write_failure_reported(self, state):
        assert state.save(BrokenStore()) is False
        assert state.get("name") == "Ana"

    def test_unexpected_store_errors_contained(self, state, caplog):
        assert state.save(DeniedStore()) is False
        assert state.load(DeniedStore()) is False
        assert len(state) == 0
        assert "storage access denied" in caplog.text

    def test_non_string_payload_resets(self, state):
        class DictStore(MemoryStore):
            def read(self, key):
                return {"name": "Ana"}

        assert state.load(DictStore()) is False
        assert len(state) == 0


class TestJsonFileStore:
    """Tests for the file-backed store"""

    def test_round_trip(self, tmp_path, state):
        backend = JsonFileStore(tmp_path / "storage")
        state.save(backend)

        restored = StateStore()
        restored.load(backend)
        assert restored.snapshot_all() == state.snapshot_all()

    def test_missing_key(self, tmp_path):
        assert JsonFileStore(tmp_path).read("nothing") is None

    def test_remove(self, tmp_path):
        backend = JsonFileStore(tmp_path)
        backend.write("formData:consulta", "{}")
        backend.remove("formData:consulta")
        backend.remove("formData:consulta")
        assert backend.read("formData:consulta") is None

    def test_invalid_utf8_file(self, tmp_path):
        backend = JsonFileStore(tmp_path)
        (tmp_path / f"{DEFAULT_STORAGE_KEY}.json").write_bytes(b'{"a": "\xff\xfe"}')

        with pytest.raises(PersistenceFailure):
            backend.read(DEFAULT_STORAGE_KEY)

        state = StateStore()
        state.set("a", "kept?")
        assert state.load(backend) is False
        assert len(state) == 0

    def test_unicode_kept(self, tmp_path):
        backend = JsonFileStore(tmp_path)
        state = StateStore()
        state.set("motivo", "Cefalea tensional, niño")
        state.save(backend)
        assert "niño" in backend.read(DEFAULT_STORAGE_KEY)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
