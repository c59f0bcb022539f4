import logging
import os
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from models import ClientRecord
from models.models_db import Base, ClientRow

from .base import ClientStore, merge_update, new_client_id, validate_client_id, validate_name
from .errors import StorageError

logger = logging.getLogger(__name__)


class SqlStore(ClientStore):
    """
    SQLAlchemy backend. The `clients` table is both index and record store, so
    the index columns are always written in the same transaction as the record.
    """

    name = "sqlite"

    def __init__(self, db_path=None, url=None):
        self.db_path = db_path
        self.url = url or f"sqlite:///{db_path}"
        self.engine = create_engine(self.url)
        self.Session = sessionmaker(bind=self.engine)
        self._ready = False

    def _ensure(self):
        if self._ready:
            return
        if self.db_path:
            folder = os.path.dirname(self.db_path)
            if folder:
                os.makedirs(folder, exist_ok=True)
        Base.metadata.create_all(self.engine)
        self._ready = True

    def list_clients(self):
        try:
            self._ensure()
            with self.Session() as s:
                rows = s.query(ClientRow).order_by(ClientRow.created_at.desc(), ClientRow.id.desc()).all()
                return [r.index_entry() for r in rows]
        except (SQLAlchemyError, OSError) as e:
            logger.warning(f"sqlite: could not list clients: {e}")
            return []

    def create_client(self, name: str) -> ClientRecord:
        name = validate_name(name)
        try:
            self._ensure()
            with self.Session() as s:
                taken = [cid for (cid,) in s.query(ClientRow.id).all()]
                record = ClientRecord.new(new_client_id(taken), name)
                row = ClientRow(id=record.id)
                row.set_record(record)
                s.add(row)
                s.commit()
        except (SQLAlchemyError, OSError) as e:
            raise StorageError(f"Could not create client: {e}") from e
        logger.info(f"sqlite: created client {record.id}")
        return record

    def read_client(self, client_id: str) -> Optional[ClientRecord]:
        validate_client_id(client_id)
        try:
            self._ensure()
            with self.Session() as s:
                row = s.get(ClientRow, client_id)
                return row.get_record() if row else None
        except (SQLAlchemyError, OSError) as e:
            logger.warning(f"sqlite: could not read client {client_id}: {e}")
            return None

    def update_client(self, client_id: str, data) -> ClientRecord:
        validate_client_id(client_id)
        try:
            self._ensure()
            with self.Session() as s:
                row = s.get(ClientRow, client_id)
                if row is None:
                    logger.warning(f"sqlite: updated client {client_id} did not exist, inserting")
                    record = merge_update(None, client_id, data)
                    row = ClientRow(id=client_id)
                    s.add(row)
                else:
                    record = merge_update(row.get_record(), client_id, data)
                row.set_record(record)
                s.commit()
        except (SQLAlchemyError, OSError) as e:
            raise StorageError(f"Could not update client {client_id}: {e}") from e
        return record

    def import_record(self, record: ClientRecord) -> None:
        """Write a record as-is, keeping its timestamps (used by the file->DB migration)."""
        validate_client_id(record.id)
        try:
            self._ensure()
            with self.Session() as s:
                row = s.get(ClientRow, record.id)
                if row is None:
                    row = ClientRow(id=record.id)
                    s.add(row)
                row.set_record(record)
                s.commit()
        except (SQLAlchemyError, OSError) as e:
            raise StorageError(f"Could not import client {record.id}: {e}") from e

    def delete_client(self, client_id: str) -> None:
        validate_client_id(client_id)
        try:
            self._ensure()
            with self.Session() as s:
                row = s.get(ClientRow, client_id)
                if row is not None:
                    s.delete(row)
                    s.commit()
        except (SQLAlchemyError, OSError) as e:
            raise StorageError(f"Could not delete client {client_id}: {e}") from e
        logger.info(f"sqlite: deleted client {client_id}")
