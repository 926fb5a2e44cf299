"""
models.py
Domain types: subscription record, plan list, progress result.
"""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from datetime import date

# Fixed plan list offered in the selector (strict mode)
PLANS = [
    "Chatgpt Plus Shared",
    "Eleven Lab",
    "Educational website",
    "My zoom Renew",
    "Zoom",
    "Zoom Pro",
    "Ai tool",
    "Google meet",
    "Quilbot Shared",
    "VPN",
    "Microsof",
    "Spotify",
    "Blinkist",
    "Duolingo Plus",
    "canva",
]

# Draft / form field order
DRAFT_FIELDS = ("name", "phone", "plan", "price", "start", "end")


def new_record_id() -> str:
    return uuid.uuid4().hex


def parse_price(value) -> float:
    """Numeric price from text; anything unparsable counts as 0."""
    try:
        price = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(price):
        return 0.0
    return price


def format_price(price: float) -> str:
    # 10.0 -> "10", 9.5 -> "9.5"
    if price == int(price):
        return str(int(price))
    return repr(price)


@dataclass(frozen=True)
class SubscriptionRecord:
    name: str
    phone: str
    plan: str
    price: float
    start: date
    end: date
    id: str = field(default_factory=new_record_id)

    def __post_init__(self):
        # text fields are stored trimmed, whatever their source
        for name in ("name", "phone", "plan"):
            object.__setattr__(self, name, getattr(self, name).strip())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "plan": self.plan,
            "price": self.price,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SubscriptionRecord":
        """
        Build a record from stored JSON. Accepts the browser-era shape too:
        string prices and no id.
        """
        return cls(
            name=str(data["name"]),
            phone=str(data["phone"]),
            plan=str(data["plan"]),
            price=parse_price(data.get("price")),
            start=date.fromisoformat(str(data["start"])),
            end=date.fromisoformat(str(data["end"])),
            id=str(data.get("id") or new_record_id()),
        )

    def to_draft(self) -> dict[str, str]:
        return {
            "name": self.name,
            "phone": self.phone,
            "plan": self.plan,
            "price": format_price(self.price),
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
        }


@dataclass(frozen=True)
class Progress:
    percent: int  # 0..100
    remaining_days: int  # >= 0
