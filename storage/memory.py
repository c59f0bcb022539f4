import copy

from .base import IndexedClientStore


class MemoryStore(IndexedClientStore):
    """In-process store; keeps the index in insertion order."""

    name = "memory"
    prepend_new = False

    def __init__(self):
        self._index = []
        self._records = {}

    def _load_index(self):
        return copy.deepcopy(self._index)

    def _save_index(self, entries):
        self._index = copy.deepcopy(entries)

    def _load_record(self, client_id):
        data = self._records.get(client_id)
        return copy.deepcopy(data) if data is not None else None

    def _save_record(self, client_id, data):
        self._records[client_id] = copy.deepcopy(data)

    def _remove_record(self, client_id):
        self._records.pop(client_id, None)
