"""
Tests for the command line tools in scripts/.
"""
import os

import pytest

from scripts import export_prompt, migrate_to_db
from storage import FileStore, MemoryStore, SqlStore


@pytest.mark.integration
class TestMigrateToDb:

    def test_copies_file_store(self, tmp_path, capsys):
        data_dir = str(tmp_path / "data")
        db_path = str(tmp_path / "data" / "clients.db")
        files = FileStore(data_dir)
        jane = files.create_client("Jane Doe")
        files.update_client(jane.id, {"answers": {"q1": {"value": "Jane"}}})
        files.create_client("John Smith")

        assert migrate_to_db.main(["--data-dir", data_dir, "--db", db_path]) == 0
        assert "Clients migrated: 2, skipped: 0" in capsys.readouterr().out

        db = SqlStore(db_path=db_path)
        assert sorted(e.name for e in db.list_clients()) == ["Jane Doe", "John Smith"]
        copied = db.read_client(jane.id)
        original = files.read_client(jane.id)
        assert copied.answers == {"q1": {"value": "Jane"}}
        assert (copied.created_at, copied.updated_at) == (original.created_at, original.updated_at)

    def test_skips_existing_unless_overwrite(self, tmp_path, capsys):
        data_dir = str(tmp_path / "data")
        db_path = str(tmp_path / "clients.db")
        FileStore(data_dir).create_client("Jane Doe")

        migrate_to_db.main(["--data-dir", data_dir, "--db", db_path])
        migrate_to_db.main(["--data-dir", data_dir, "--db", db_path])
        assert "Clients migrated: 0, skipped: 1" in capsys.readouterr().out

        migrate_to_db.main(["--data-dir", data_dir, "--db", db_path, "--overwrite"])
        assert "Clients migrated: 1, skipped: 0" in capsys.readouterr().out

    def test_missing_record_file(self, tmp_path, capsys):
        data_dir = tmp_path / "data"
        files = FileStore(str(data_dir))
        jane = files.create_client("Jane Doe")
        os.remove(files.client_file(jane.id))

        migrate_to_db.main(["--data-dir", str(data_dir), "--db", str(tmp_path / "clients.db")])
        assert "missing files: 1" in capsys.readouterr().out


@pytest.mark.integration
class TestExportPrompt:

    @pytest.fixture
    def store(self):
        store = MemoryStore()
        store.create_client("Jane Doe")
        return store

    @pytest.fixture
    def jane(self, store):
        return store.list_clients()[0]

    def test_prints_to_stdout(self, store, jane, capsys):
        assert export_prompt.main([jane.id, "--kind", "cps"], store=store) == 0
        out = capsys.readouterr().out
        assert "CUSTODY POLICY STATEMENT — CLIENT INTAKE DATA" in out

    def test_writes_default_name_into_directory(self, store, jane, tmp_path):
        assert export_prompt.main([jane.id, "--out", str(tmp_path)], store=store) == 0
        text = (tmp_path / "IPS_LLM_Jane_Doe.txt").read_text(encoding="utf-8")
        assert "Client Name: Jane Doe" in text

    def test_json_to_file(self, store, jane, tmp_path):
        out = tmp_path / "jane.json"
        assert export_prompt.main([jane.id, "--format", "json", "--out", str(out)], store=store) == 0
        assert '"clientName": "Jane Doe"' in out.read_text(encoding="utf-8")

    def test_unknown_client(self, store, capsys):
        assert export_prompt.main(["c_0_missing"], store=store) == 1
        assert "not found" in capsys.readouterr().err

    def test_unwritable_target_is_reported(self, store, jane, tmp_path, capsys):
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        assert export_prompt.main([jane.id, "--out", str(blocker / "x.txt")], store=store) == 1
        assert "Export not saved" in capsys.readouterr().err
