"""
Editing session for one advisor: the client list, the client being edited,
debounced saving and the exports. A form renderer drives this object; it
holds no rendering code itself.
"""

import logging
from typing import Any, Dict, List, Optional

from models import ClientRecord, IndexEntry
from storage.base import ClientStore
from storage.errors import IntakeError, NotFoundError, ValidationError

from . import find_question, get_schema
from .answers import apply_action, first_unanswered, progress_summary
from .autosave import AutoSaver
from .export import build_export, build_json_export

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("clientName", "date", "advisor")


class IntakeSession:
    def __init__(self, store: ClientStore, autosave_delay: float = 0.8):
        self.store = store
        self.clients: List[IndexEntry] = []
        self.active_id: Optional[str] = None
        self.record: Optional[ClientRecord] = None
        self.notices: List[str] = []
        self.autosaver = AutoSaver(self._persist, delay=autosave_delay,
                                   on_saved=self._on_saved, on_error=self._on_save_error)

    # ---- client list ----
    def refresh_clients(self) -> List[IndexEntry]:
        self.clients = self.store.list_clients()
        return self.clients

    def search(self, term: str) -> List[IndexEntry]:
        term = (term or "").lower()
        return [c for c in self.clients if term in (c.name or "").lower()]

    def create_client(self, name: str) -> ClientRecord:
        try:
            record = self.store.create_client(name)
        except IntakeError as e:
            self.notice(f"Failed to create client: {e}")
            raise
        self.clients.insert(0, record.index_entry())
        self.open_client(record.id)
        return record

    def open_client(self, client_id: Optional[str]) -> Optional[ClientRecord]:
        # flush the previous client's pending edits before switching
        self.autosaver.flush()
        self.active_id = client_id
        self.record = self.store.read_client(client_id) if client_id else None
        return self.record

    def delete_client(self, client_id: str) -> None:
        if client_id == self.active_id:
            self.autosaver.cancel()
        self.store.delete_client(client_id)
        self.clients = [c for c in self.clients if c.id != client_id]
        if client_id == self.active_id:
            self.active_id = None
            self.record = None

    # ---- edits ----
    def _require_record(self) -> ClientRecord:
        if self.record is None:
            raise NotFoundError("No client open")
        return self.record

    def update_field(self, field: str, value: str) -> ClientRecord:
        record = self._require_record()
        if field not in EDITABLE_FIELDS:
            raise ValidationError(f"Field {field} is not editable")
        data = record.to_dict()
        data[field] = value
        self.record = ClientRecord.from_dict(data, client_id=record.id)
        self.autosaver.schedule(self.record)
        return self.record

    def update_answer(self, question_id: str, answer) -> ClientRecord:
        record = self._require_record()
        if hasattr(answer, "to_dict"):
            answer = answer.to_dict()
        answers = dict(record.answers)
        answers[question_id] = answer
        data = record.to_dict()
        data["answers"] = answers
        self.record = ClientRecord.from_dict(data, client_id=record.id)
        self.autosaver.schedule(self.record)
        return self.record

    def apply(self, question_id: str, action: str, **params) -> ClientRecord:
        record = self._require_record()
        _, question = find_question(question_id)
        if question is None:
            raise NotFoundError(f"Unknown question: {question_id}")
        answer = apply_action(question, record.answers.get(question_id), action, params)
        return self.update_answer(question_id, answer)

    # ---- saving ----
    def _persist(self, record: ClientRecord) -> ClientRecord:
        return self.store.update_client(record.id, record.to_dict())

    def _on_saved(self, saved: ClientRecord) -> None:
        for c in self.clients:
            if c.id == saved.id:
                c.name = saved.client_name
                c.updated_at = saved.updated_at
        if self.record is not None and self.record.id == saved.id:
            self.record.updated_at = saved.updated_at

    def _on_save_error(self, error: Exception) -> None:
        self.notice(f"Save failed: {error}")

    def flush(self) -> Optional[ClientRecord]:
        return self.autosaver.flush()

    def close(self) -> None:
        self.autosaver.close(flush=True)

    def notice(self, message: str) -> None:
        logger.warning(message)
        self.notices.append(message)

    # ---- progress / export ----
    def progress(self, kind: str = "ips") -> Dict[str, Any]:
        answers = self.record.answers if self.record else {}
        return progress_summary(get_schema(kind), answers)

    def first_unanswered(self, kind: str = "ips") -> Optional[str]:
        answers = self.record.answers if self.record else {}
        return first_unanswered(get_schema(kind), answers)

    def export_text(self, kind: str = "ips") -> str:
        return build_export(get_schema(kind), self._require_record())

    def export_json(self) -> str:
        return build_json_export(self._require_record())
