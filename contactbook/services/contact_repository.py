"""
In-process contacts table.

Stands in for the relational table behind the contacts resource: integer ids
assigned in increasing order from 1, rows kept in insertion order.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional
import itertools
import logging

log = logging.getLogger(__name__)


@dataclass
class ContactRecord:
    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    twitter: Optional[str] = None
    phone: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)


class ContactRepository:
    def __init__(self):
        self._rows: Dict[int, ContactRecord] = {}
        self._ids = itertools.count(1)

    def all(self) -> List[ContactRecord]:
        return list(self._rows.values())

    def get(self, contact_id: int) -> Optional[ContactRecord]:
        return self._rows.get(contact_id)

    def add(self, **fields) -> ContactRecord:
        record = ContactRecord(id=next(self._ids), **fields)
        self._rows[record.id] = record
        log.info("Inserted contact %s", record.id)
        return record

    def update(self, record: ContactRecord, **fields) -> ContactRecord:
        for name, value in fields.items():
            setattr(record, name, value)
        record.updated_at = datetime.utcnow()
        return record

    def delete(self, record: ContactRecord) -> None:
        del self._rows[record.id]
        log.info("Deleted contact %s", record.id)


repository = ContactRepository()
