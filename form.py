"""
form.py
Form controller (draft + edit target) and the plan filter.
"""

from __future__ import annotations

from typing import Iterable

import utils
from log_utils import get_logger
from models import DRAFT_FIELDS, PLANS, SubscriptionRecord, new_record_id, parse_price
from store import RecordStore

logger = get_logger(__name__)


class ValidationFailed(Exception):
    def __init__(self, messages: list[str]):
        super().__init__("; ".join(messages))
        self.messages = messages


class StaleEditIndex(LookupError):
    """The record being edited is no longer in the store."""


def empty_draft() -> dict[str, str]:
    return {f: "" for f in DRAFT_FIELDS}


class FormController:
    """
    Holds one draft and, in edit mode, the id of the record being edited.
    The id is resolved to a position only at submit time.
    """

    def __init__(self, store: RecordStore, strict_plans: bool = True):
        self.store = store
        self.strict_plans = strict_plans
        self.draft: dict[str, str] = empty_draft()
        self.edit_id: str | None = None

    @property
    def mode(self) -> str:
        return "edit" if self.edit_id is not None else "create"

    @property
    def submit_label(self) -> str:
        return "Update" if self.edit_id is not None else "Add"

    @property
    def edit_index(self) -> int | None:
        if self.edit_id is None:
            return None
        return self.store.index_of(self.edit_id)

    def set_field(self, name: str, value: str) -> None:
        if name not in self.draft:
            raise KeyError(f"Unknown field: {name}")
        self.draft[name] = value

    def _draft_to_record(self, record_id: str) -> SubscriptionRecord:
        d = {k: v.strip() for k, v in self.draft.items()}
        return SubscriptionRecord(
            name=d["name"],
            phone=d["phone"],
            plan=d["plan"],
            price=parse_price(d["price"]),
            start=utils.parse_iso(d["start"]),
            end=utils.parse_iso(d["end"]),
            id=record_id,
        )

    def submit(self) -> SubscriptionRecord:
        errors = utils.validate_draft(self.draft, strict_plans=self.strict_plans)
        if errors:
            raise ValidationFailed(errors)

        if self.edit_id is not None:
            index = self.store.index_of(self.edit_id)
            if index is None:
                stale = self.edit_id
                self.edit_id = None
                raise StaleEditIndex(f"Record {stale} no longer exists")
            record = self._draft_to_record(self.edit_id)
            self.store.update(index, record)
            self.edit_id = None
        else:
            record = self._draft_to_record(new_record_id())
            self.store.add(record)

        self.draft = empty_draft()
        return record

    def begin_edit(self, index: int) -> None:
        record = self.store[index]
        self.draft = record.to_draft()
        self.edit_id = record.id
        logger.debug("Editing record %s at %d", record.id, index)

    def cancel_edit_on_delete(self) -> None:
        self.edit_id = None

    def delete(self, index: int) -> SubscriptionRecord:
        try:
            return self.store.delete(index)
        finally:
            # positions shift on delete; never carry an edit across one
            self.cancel_edit_on_delete()


class PlanFilter:
    def __init__(self, plans: list[str] | None = None):
        self.plans = list(plans if plans is not None else PLANS)
        self.selected: str | None = None

    def set_filter(self, plan: str) -> None:
        # selecting the active plan again keeps it applied
        self.selected = plan

    def clear(self) -> None:
        self.selected = None

    def visible_records(self, records: Iterable[SubscriptionRecord]) -> list[SubscriptionRecord]:
        if self.selected is None:
            return list(records)
        return [r for r in records if r.plan == self.selected]

    def plan_counts(self, records: Iterable[SubscriptionRecord]) -> dict[str, int]:
        counts = {p: 0 for p in self.plans}
        for r in records:
            if r.plan in counts:
                counts[r.plan] += 1
        return counts
