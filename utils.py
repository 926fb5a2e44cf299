"""
utils.py
Progress calculation, draft validation, dates, exports, sample data.
"""

from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta
from typing import Iterable

import pandas as pd

from models import DRAFT_FIELDS, PLANS, Progress, SubscriptionRecord

ONE_DAY = timedelta(days=1)

TABLE_COLUMNS = ["Name", "Phone", "Plan", "Price", "Start", "End", "Progress (%)", "Days left"]


def parse_iso(d: str) -> date:
    return date.fromisoformat(d)


def _as_datetime(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def progress(start: date, end: date, now: date | datetime) -> Progress:
    """
    Share of the start..end span already elapsed at `now`, plus whole days left.

    Dates count from midnight. A zero or negative span reads as complete once
    `now` reaches `start` (0 before that). Remaining days are counted against
    `end` alone, so they can hit 0 on the last day while percent is below 100.
    """
    s = _as_datetime(start)
    e = _as_datetime(end)
    n = _as_datetime(now)

    total = e - s
    if total <= timedelta(0):
        percent = 100 if n >= s else 0
    else:
        ratio = (n - s) / total * 100
        percent = _round_half_up(min(100.0, max(0.0, ratio)))

    remaining = max(0, math.ceil((e - n) / ONE_DAY))
    return Progress(percent=percent, remaining_days=remaining)


def progress_label(p: Progress) -> str:
    return f"{p.percent}% - {p.remaining_days} days left"


def validate_draft(draft: dict[str, str], strict_plans: bool = True) -> list[str]:
    errors: list[str] = []
    missing = [f for f in DRAFT_FIELDS if not str(draft.get(f, "")).strip()]
    if missing:
        errors.append("Please fill all fields (missing: " + ", ".join(missing) + ").")
        return errors

    try:
        parse_iso(draft["start"].strip())
        parse_iso(draft["end"].strip())
    except ValueError:
        errors.append("Start/end dates must be valid ISO dates (YYYY-MM-DD).")

    if strict_plans and draft["plan"].strip() not in PLANS:
        errors.append(f"Unknown plan: {draft['plan'].strip()}.")
    return errors


def expiring_soon(records: Iterable[SubscriptionRecord], now: date | datetime, days: int = 7) -> list[SubscriptionRecord]:
    """Records still running whose end falls within the next `days` days, soonest first."""
    n = _as_datetime(now)
    soon = [
        r for r in records
        if _as_datetime(r.end) > n and progress(r.start, r.end, n).remaining_days <= days
    ]
    return sorted(soon, key=lambda r: r.end)


def records_to_dataframe(records: Iterable[SubscriptionRecord], now: date | datetime) -> pd.DataFrame:
    rows = []
    for r in records:
        p = progress(r.start, r.end, now)
        rows.append({
            "Name": r.name,
            "Phone": r.phone,
            "Plan": r.plan,
            "Price": r.price,
            "Start": r.start.isoformat(),
            "End": r.end.isoformat(),
            "Progress (%)": p.percent,
            "Days left": p.remaining_days,
        })
    if not rows:
        return pd.DataFrame(columns=TABLE_COLUMNS)
    return pd.DataFrame(rows, columns=TABLE_COLUMNS)


def records_to_csv_bytes(records: Iterable[SubscriptionRecord]) -> bytes:
    df = pd.DataFrame([r.to_dict() for r in records])
    if df.empty:
        df = pd.DataFrame(columns=["id", "name", "phone", "plan", "price", "start", "end"])
    return df.to_csv(index=False).encode("utf-8")


def insert_sample_data(store, today: date | None = None) -> None:
    """
    Add 3 sample subscriptions (adds new rows each run).
    """
    today = today or date.today()
    samples = [
        # nearly done, ends in 3 days
        ("Alice Rahman", "01700000001", "VPN", 10.0, today - timedelta(days=27), today + timedelta(days=3)),
        # halfway through
        ("Karim Uddin", "01700000002", "Zoom Pro", 25.0, today - timedelta(days=15), today + timedelta(days=15)),
        # already expired
        ("Nadia Islam", "01700000003", "Spotify", 5.0, today - timedelta(days=40), today - timedelta(days=10)),
    ]
    for name, phone, plan, price, start, end in samples:
        store.add(SubscriptionRecord(name=name, phone=phone, plan=plan, price=price, start=start, end=end))
