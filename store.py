"""
store.py
Record store: ordered in-memory list of subscriptions, mirrored to a key-value store.
"""

from __future__ import annotations

import json
from typing import Iterator

from db import KeyValueStore
from log_utils import get_logger
from models import SubscriptionRecord

logger = get_logger(__name__)


class RecordOutOfRange(IndexError):
    """Index does not point at a current record."""


class RecordStore:
    def __init__(self, backend: KeyValueStore, key: str = "sub_customers"):
        self.backend = backend
        self.key = key
        self._records: list[SubscriptionRecord] = []

    # ---------- Read side ----------

    @property
    def records(self) -> tuple[SubscriptionRecord, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[SubscriptionRecord]:
        return iter(list(self._records))

    def __getitem__(self, index: int) -> SubscriptionRecord:
        self._check_index(index)
        return self._records[index]

    def index_of(self, record_id: str) -> int | None:
        for i, rec in enumerate(self._records):
            if rec.id == record_id:
                return i
        return None

    # ---------- Persistence ----------

    def load(self) -> None:
        """
        Replace the in-memory list with what the backend holds.
        Missing or malformed data leaves an empty list; nothing is raised.
        """
        self._records = []
        raw = self.backend.get(self.key)
        if not raw:
            logger.info("No stored records under %r", self.key)
            return
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Stored records under %r are not valid JSON (%s); starting empty", self.key, exc)
            return
        if not isinstance(data, list):
            logger.warning("Stored records under %r are not a list; starting empty", self.key)
            return

        records: list[SubscriptionRecord] = []
        for pos, item in enumerate(data):
            if not isinstance(item, dict):
                logger.warning("Skipping stored entry %d: not an object", pos)
                continue
            try:
                records.append(SubscriptionRecord.from_dict(item))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping stored entry %d: %s", pos, exc)
        self._records = records
        logger.info("Loaded %d records from %r", len(records), self.key)

    def persist(self) -> None:
        payload = json.dumps([r.to_dict() for r in self._records], ensure_ascii=False)
        self.backend.set(self.key, payload)

    # ---------- Mutations (each one persists) ----------

    def add(self, record: SubscriptionRecord) -> None:
        self._records.append(record)
        logger.info("Added record %s (%s)", record.id, record.name)
        self.persist()

    def update(self, index: int, record: SubscriptionRecord) -> None:
        self._check_index(index)
        self._records[index] = record
        logger.info("Updated record at %d (%s)", index, record.id)
        self.persist()

    def delete(self, index: int) -> SubscriptionRecord:
        self._check_index(index)
        removed = self._records.pop(index)
        logger.info("Deleted record at %d (%s)", index, removed.id)
        self.persist()
        return removed

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._records):
            raise RecordOutOfRange(f"No record at position {index} (store has {len(self._records)})")
