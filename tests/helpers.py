from datetime import date

from models import SubscriptionRecord


def make_record(name="Alice", plan="VPN", price=10.0, start=date(2024, 1, 1), end=date(2024, 2, 1), **kw):
    return SubscriptionRecord(name=name, phone=kw.pop("phone", "555-0100"), plan=plan, price=price,
                              start=start, end=end, **kw)


def fill(form, **overrides):
    values = {
        "name": "Alice",
        "phone": "555-0100",
        "plan": "VPN",
        "price": "10",
        "start": "2024-01-01",
        "end": "2024-02-01",
    }
    values.update(overrides)
    for k, v in values.items():
        form.set_field(k, v)
