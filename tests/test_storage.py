"""
Tests for the client stores (memory, JSON files, SQLite) and their shared contract.
"""
import json
import os
import time

import pytest

from models import ClientRecord
from storage import FileStore, MemoryStore, SqlStore, get_store
from storage.base import CLIENT_ID_RE, merge_update, new_client_id, validate_client_id
from storage.errors import StorageError, ValidationError


@pytest.fixture(params=["memory", "file", "sqlite"])
def store(request, tmp_path):
    """Each backend, isolated in a temporary directory."""
    if request.param == "memory":
        return MemoryStore()
    if request.param == "file":
        return FileStore(str(tmp_path / "data"))
    return SqlStore(db_path=str(tmp_path / "data" / "clients.db"))


@pytest.mark.unit
class TestIds:

    def test_new_ids_are_valid(self):
        cid = new_client_id()
        assert cid.startswith("c_")
        assert CLIENT_ID_RE.match(cid)

    def test_new_id_avoids_taken(self):
        taken = {new_client_id() for _ in range(5)}
        assert new_client_id(taken) not in taken

    @pytest.mark.parametrize("bad", ["", "../etc/passwd", "a b", "x.json", None, 42])
    def test_rejects_unsafe_ids(self, bad):
        with pytest.raises(ValidationError):
            validate_client_id(bad)

    def test_accepts_safe_ids(self):
        assert validate_client_id("c_1700000000000_ab-CD") == "c_1700000000000_ab-CD"


@pytest.mark.unit
class TestMergeUpdate:

    def test_partial_body_keeps_other_fields(self):
        existing = ClientRecord.from_dict({"clientName": "Jane", "advisor": "Sam", "createdAt": 5}, "c_1")
        merged = merge_update(existing, "c_1", {"date": "2024-01-01", "id": "c_other"})
        assert merged.id == "c_1"
        assert merged.client_name == "Jane"
        assert merged.advisor == "Sam"
        assert merged.date == "2024-01-01"
        assert merged.created_at == 5
        assert merged.updated_at > 5

    def test_missing_record_gets_created_at(self):
        merged = merge_update(None, "c_new", {"clientName": "X"})
        assert merged.created_at > 0
        assert merged.updated_at >= merged.created_at


@pytest.mark.unit
class TestStoreContract:
    """Behaviour every backend shares."""

    def test_create_and_read(self, store):
        record = store.create_client("  Jane Doe ")
        assert CLIENT_ID_RE.match(record.id)
        assert record.client_name == "Jane Doe"
        assert record.answers == {}
        assert record.created_at == record.updated_at

        loaded = store.read_client(record.id)
        assert loaded is not None
        assert loaded.id == record.id
        assert loaded.client_name == "Jane Doe"
        assert loaded.date == record.date

        entries = store.list_clients()
        assert [e.id for e in entries] == [record.id]
        assert entries[0].name == "Jane Doe"
        assert entries[0].created_at == record.created_at

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_create_requires_name(self, store, name):
        with pytest.raises(ValidationError):
            store.create_client(name)
        assert store.list_clients() == []

    def test_update_syncs_index(self, store):
        record = store.create_client("Jane Doe")
        time.sleep(0.002)
        saved = store.update_client(record.id, {
            "clientName": "Jane Q. Doe",
            "answers": {"q2": {"selections": ["Married"]}},
        })
        assert saved.updated_at > record.updated_at
        assert saved.created_at == record.created_at

        loaded = store.read_client(record.id)
        assert loaded.client_name == "Jane Q. Doe"
        assert loaded.answers == {"q2": {"selections": ["Married"]}}

        entry = store.list_clients()[0]
        assert entry.name == "Jane Q. Doe"
        assert entry.updated_at == saved.updated_at

    def test_partial_update_merges(self, store):
        record = store.create_client("Jane Doe")
        store.update_client(record.id, {"advisor": "Sam"})
        store.update_client(record.id, {"date": "2024-01-01"})
        loaded = store.read_client(record.id)
        assert loaded.advisor == "Sam"
        assert loaded.date == "2024-01-01"
        assert loaded.client_name == "Jane Doe"

    def test_update_unknown_id_upserts(self, store):
        saved = store.update_client("c_manual_1", {"clientName": "Walk In"})
        assert saved.id == "c_manual_1"
        assert store.read_client("c_manual_1").client_name == "Walk In"

    def test_delete(self, store):
        keep = store.create_client("Keep")
        gone = store.create_client("Gone")
        store.delete_client(gone.id)
        assert store.read_client(gone.id) is None
        assert [e.id for e in store.list_clients()] == [keep.id]
        store.delete_client(gone.id)

    def test_read_missing(self, store):
        assert store.read_client("c_0_nope") is None

    def test_invalid_id_rejected(self, store):
        with pytest.raises(ValidationError):
            store.read_client("../clients")
        with pytest.raises(ValidationError):
            store.update_client("a/b", {})
        with pytest.raises(ValidationError):
            store.delete_client("a b")


@pytest.mark.unit
class TestOrdering:

    def test_memory_keeps_insertion_order(self):
        store = MemoryStore()
        first = store.create_client("First")
        second = store.create_client("Second")
        assert [e.id for e in store.list_clients()] == [first.id, second.id]

    def test_file_lists_newest_first(self, tmp_path):
        store = FileStore(str(tmp_path))
        first = store.create_client("First")
        second = store.create_client("Second")
        assert [e.id for e in store.list_clients()] == [second.id, first.id]


@pytest.mark.unit
class TestFileStore:

    def test_layout(self, tmp_path):
        store = FileStore(str(tmp_path))
        record = store.create_client("Jane Doe")
        assert os.path.exists(tmp_path / "clients.json")
        with open(tmp_path / "clients" / f"{record.id}.json", encoding="utf-8") as f:
            data = json.load(f)
        assert data["clientName"] == "Jane Doe"
        assert data["answers"] == {}

    def test_no_directories_until_first_write(self, tmp_path):
        store = FileStore(str(tmp_path / "data"))
        assert store.list_clients() == []
        assert not os.path.exists(tmp_path / "data")

    def test_corrupt_files_degrade(self, tmp_path):
        store = FileStore(str(tmp_path))
        record = store.create_client("Jane Doe")
        (tmp_path / "clients" / f"{record.id}.json").write_text("{not json", encoding="utf-8")
        assert store.read_client(record.id) is None
        (tmp_path / "clients.json").write_text("{not json", encoding="utf-8")
        assert store.list_clients() == []

    def test_malformed_index_timestamps_read_as_zero(self, tmp_path):
        """A hand-edited index entry must not take the whole list down."""
        store = FileStore(str(tmp_path))
        jane = store.create_client("Jane Doe")
        john = store.create_client("John Smith")
        entries = json.loads((tmp_path / "clients.json").read_text(encoding="utf-8"))
        entries[0]["createdAt"] = "yesterday"
        entries[1]["updatedAt"] = [1]
        (tmp_path / "clients.json").write_text(json.dumps(entries), encoding="utf-8")

        listed = {e.id: e for e in store.list_clients()}
        assert set(listed) == {jane.id, john.id}
        assert listed[john.id].created_at == 0
        assert listed[jane.id].updated_at == 0
        assert listed[jane.id].created_at == jane.created_at

    def test_write_failure_raises(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        store = FileStore(str(blocker))
        with pytest.raises(StorageError):
            store.create_client("Jane Doe")


@pytest.mark.unit
class TestSqlStore:

    def test_import_keeps_timestamps(self, tmp_path):
        store = SqlStore(db_path=str(tmp_path / "clients.db"))
        record = ClientRecord.from_dict({"clientName": "Old", "createdAt": 1000, "updatedAt": 2000}, "c_1000_old")
        store.import_record(record)
        loaded = store.read_client("c_1000_old")
        assert (loaded.created_at, loaded.updated_at) == (1000, 2000)
        assert store.list_clients()[0].name == "Old"

    def test_lists_newest_first(self, tmp_path):
        store = SqlStore(db_path=str(tmp_path / "clients.db"))
        for cid, created in (("c_1_a", 1), ("c_3_c", 3), ("c_2_b", 2)):
            store.import_record(ClientRecord.from_dict({"clientName": cid, "createdAt": created}, cid))
        assert [e.id for e in store.list_clients()] == ["c_3_c", "c_2_b", "c_1_a"]


@pytest.mark.unit
class TestGetStore:

    def test_backends(self, tmp_path):
        assert isinstance(get_store("memory"), MemoryStore)
        file_store = get_store("file", data_dir=str(tmp_path))
        assert isinstance(file_store, FileStore)
        assert file_store.data_dir == str(tmp_path)
        assert isinstance(get_store("SQLITE", db_path=str(tmp_path / "x.db")), SqlStore)

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            get_store("cassandra")
