import json
import os

from .base import IndexedClientStore, validate_client_id
from .errors import StorageError


class FileStore(IndexedClientStore):
    """
    JSON files under one data directory:

        <data_dir>/clients.json        client index
        <data_dir>/clients/<id>.json   one client record each

    Directories are created on the first write. Whole-file overwrites, no
    locking: concurrent writers from several processes race, last one wins.
    """

    name = "file"

    def __init__(self, data_dir="data"):
        self.data_dir = data_dir
        self.clients_dir = os.path.join(data_dir, "clients")
        self.index_file = os.path.join(data_dir, "clients.json")

    def client_file(self, client_id):
        return os.path.join(self.clients_dir, f"{validate_client_id(client_id)}.json")

    def _read_json(self, path):
        if not os.path.exists(path):
            return None
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _write_json(self, path, data):
        try:
            os.makedirs(self.clients_dir, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Could not write {path}: {e}") from e

    def _load_index(self):
        data = self._read_json(self.index_file)
        return data if isinstance(data, list) else []

    def _save_index(self, entries):
        self._write_json(self.index_file, entries)

    def _load_record(self, client_id):
        return self._read_json(self.client_file(client_id))

    def _save_record(self, client_id, data):
        self._write_json(self.client_file(client_id), data)

    def _remove_record(self, client_id):
        path = self.client_file(client_id)
        try:
            if os.path.exists(path):
                os.remove(path)
        except OSError as e:
            raise StorageError(f"Could not remove {path}: {e}") from e
