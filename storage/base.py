import logging
import re
import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from models import ClientRecord, IndexEntry
from models.models import now_ms

from .errors import ValidationError

logger = logging.getLogger(__name__)

CLIENT_ID_RE = re.compile(r"^[A-Za-z0-9_-]+$")


def validate_client_id(client_id) -> str:
    """Only letters, digits, `_` and `-` may address a storage location."""
    if not isinstance(client_id, str) or not CLIENT_ID_RE.match(client_id):
        raise ValidationError(f"Invalid client id: {client_id!r}")
    return client_id


def validate_name(name) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Name required")
    return name.strip()


def new_client_id(existing=()) -> str:
    taken = set(existing)
    while True:
        cid = f"c_{now_ms()}_{uuid.uuid4().hex[:5]}"
        if cid not in taken:
            return cid


def merge_update(existing: Optional[ClientRecord], client_id: str, data: Dict[str, Any]) -> ClientRecord:
    """Lay a (partial or full) body over the stored record and refresh updatedAt."""
    base = existing.to_dict() if existing is not None else {}
    base.update({k: v for k, v in (data or {}).items() if k != "id"})
    record = ClientRecord.from_dict(base, client_id=client_id)
    if not record.created_at:
        record.created_at = now_ms()
    record.updated_at = now_ms()
    return record


class ClientStore(ABC):
    """Persistence contract shared by every backend."""

    name = "abstract"

    @abstractmethod
    def list_clients(self) -> List[IndexEntry]:
        """Index entries; never raises, read failures give an empty list."""

    @abstractmethod
    def create_client(self, name: str) -> ClientRecord:
        ...

    @abstractmethod
    def read_client(self, client_id: str) -> Optional[ClientRecord]:
        """The stored record, or None when absent or unreadable."""

    @abstractmethod
    def update_client(self, client_id: str, data: Dict[str, Any]) -> ClientRecord:
        ...

    @abstractmethod
    def delete_client(self, client_id: str) -> None:
        ...


class IndexedClientStore(ClientStore):
    """
    Key/value style store: one index list plus one blob per client.

    Subclasses supply the five primitives below; the index is rewritten after
    every record write so list views never need to open the records.
    """

    prepend_new = True

    @abstractmethod
    def _load_index(self) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    def _save_index(self, entries: List[Dict[str, Any]]) -> None:
        ...

    @abstractmethod
    def _load_record(self, client_id: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    def _save_record(self, client_id: str, data: Dict[str, Any]) -> None:
        ...

    @abstractmethod
    def _remove_record(self, client_id: str) -> None:
        ...

    def list_clients(self) -> List[IndexEntry]:
        try:
            entries = self._load_index()
        except Exception as e:
            logger.warning(f"{self.name}: could not read client index: {e}")
            return []
        return [IndexEntry.from_dict(e) for e in entries if isinstance(e, dict)]

    def _index_or_empty(self) -> List[Dict[str, Any]]:
        try:
            entries = self._load_index()
        except Exception as e:
            logger.warning(f"{self.name}: client index unreadable, starting empty: {e}")
            return []
        return [e for e in entries if isinstance(e, dict)]

    def create_client(self, name: str) -> ClientRecord:
        name = validate_name(name)
        entries = self._index_or_empty()
        record = ClientRecord.new(new_client_id(e.get("id") for e in entries), name)

        self._save_record(record.id, record.to_dict())
        entry = record.index_entry().to_dict()
        if self.prepend_new:
            entries.insert(0, entry)
        else:
            entries.append(entry)
        self._save_index(entries)
        logger.info(f"{self.name}: created client {record.id}")
        return record

    def read_client(self, client_id: str) -> Optional[ClientRecord]:
        validate_client_id(client_id)
        try:
            data = self._load_record(client_id)
        except Exception as e:
            logger.warning(f"{self.name}: could not read client {client_id}: {e}")
            return None
        if not isinstance(data, dict):
            return None
        return ClientRecord.from_dict(data, client_id=client_id)

    def update_client(self, client_id: str, data: Dict[str, Any]) -> ClientRecord:
        validate_client_id(client_id)
        record = merge_update(self.read_client(client_id), client_id, data)
        self._save_record(client_id, record.to_dict())

        entries = self._index_or_empty()
        for e in entries:
            if e.get("id") == client_id:
                e["name"] = record.client_name
                e["updatedAt"] = record.updated_at
                self._save_index(entries)
                break
        else:
            logger.warning(f"{self.name}: updated client {client_id} has no index entry")
        return record

    def delete_client(self, client_id: str) -> None:
        validate_client_id(client_id)
        self._remove_record(client_id)
        entries = [e for e in self._index_or_empty() if e.get("id") != client_id]
        self._save_index(entries)
        logger.info(f"{self.name}: deleted client {client_id}")
