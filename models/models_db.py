from sqlalchemy.orm import declarative_base
from sqlalchemy import Column, String, Text, BigInteger
import json

from .models import ClientRecord, IndexEntry

Base = declarative_base()


class ClientRow(Base):
    """One client. id/name/timestamps double as the index, the record lives in `data`."""

    __tablename__ = 'clients'
    id = Column(String, primary_key=True)
    name = Column(String, nullable=False, default='')
    data = Column(Text, nullable=False, default='{}')  # JSON encoded ClientRecord
    created_at = Column(BigInteger, nullable=False)
    updated_at = Column(BigInteger, nullable=False)

    def get_record(self):
        try:
            payload = json.loads(self.data or '{}')
        except Exception:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}
        return ClientRecord.from_dict(payload, client_id=self.id)

    def set_record(self, record: ClientRecord):
        self.name = record.client_name
        self.created_at = record.created_at
        self.updated_at = record.updated_at
        self.data = json.dumps(record.to_dict(), ensure_ascii=False)

    def index_entry(self):
        return IndexEntry(id=self.id, name=self.name or '', created_at=self.created_at or 0,
                          updated_at=self.updated_at or 0)
