"""
app.py
Streamlit Customer Subscription Manager (single operator).
Run: streamlit run app.py
"""

from __future__ import annotations

import sqlite3
from datetime import date, datetime

import streamlit as st

import charts
import utils
from config import load_settings
from db import SQLiteKeyValueStore
from form import FormController, PlanFilter, StaleEditIndex, ValidationFailed
from log_utils import get_logger
from models import PLANS, format_price
from store import RecordOutOfRange, RecordStore

st.set_page_config(page_title="Customer Subscription Manager", layout="wide")

SETTINGS = load_settings()
logger = get_logger("app", SETTINGS.log_level)


def init_once():
    # Store, controller and filter live for the whole browser session
    if "store" in st.session_state:
        return
    store = RecordStore(SQLiteKeyValueStore(SETTINGS.db_path), key=SETTINGS.storage_key)
    store.load()
    st.session_state.store = store
    st.session_state.form = FormController(store, strict_plans=SETTINGS.strict_plans)
    st.session_state.plan_filter = PlanFilter(PLANS)
    st.session_state.form_version = 0


def reset_form_widgets():
    # New widget keys make the inputs pick up the controller's draft again
    st.session_state.form_version += 1


def run_mutation(action, success: str | None = None) -> bool:
    try:
        action()
    except ValidationFailed as e:
        for msg in e.messages:
            st.error(msg)
        return False
    except StaleEditIndex:
        st.error("The record being edited was removed. The form is back in add mode.")
        reset_form_widgets()
        return False
    except RecordOutOfRange:
        st.error("That record no longer exists.")
        return False
    except sqlite3.Error as e:
        logger.exception("Saving records failed")
        st.error(f"Could not save records: {e}")
        return False
    if success:
        st.toast(success)
    return True


# ---------- Sidebar ----------

def plan_sidebar(store: RecordStore, plan_filter: PlanFilter):
    st.sidebar.title("Admin Panel")

    if st.sidebar.button(f"All plans ({len(store)})", use_container_width=True,
                         type=("primary" if plan_filter.selected is None else "secondary")):
        plan_filter.clear()
        st.rerun()

    counts = plan_filter.plan_counts(store)
    for plan, count in counts.items():
        active = plan_filter.selected == plan
        if st.sidebar.button(f"{plan} ({count})", key=f"plan_{plan}", use_container_width=True,
                             type=("primary" if active else "secondary")):
            plan_filter.set_filter(plan)
            st.rerun()

    st.sidebar.divider()
    st.sidebar.download_button(
        "Download subscriptions.csv",
        data=utils.records_to_csv_bytes(store),
        file_name="subscriptions.csv",
        mime="text/csv",
        use_container_width=True,
    )
    if st.sidebar.button("Insert sample data", use_container_width=True):
        if run_mutation(lambda: utils.insert_sample_data(store), "Sample data inserted."):
            st.rerun()


# ---------- Form ----------

def _date_or_none(value: str):
    try:
        return utils.parse_iso(value) if value else None
    except ValueError:
        return None


def subscription_form(form: FormController):
    v = st.session_state.form_version
    draft = form.draft

    cols = st.columns(6)
    with cols[0]:
        form.set_field("name", st.text_input("Name", value=draft["name"], placeholder="name", key=f"name_{v}"))
    with cols[1]:
        form.set_field("phone", st.text_input("Phone", value=draft["phone"], placeholder="phone", key=f"phone_{v}"))
    with cols[2]:
        form.set_field("price", st.text_input("Price", value=draft["price"], placeholder="price", key=f"price_{v}"))
    with cols[3]:
        start = st.date_input("Start", value=_date_or_none(draft["start"]), key=f"start_{v}")
        form.set_field("start", start.isoformat() if start else "")
    with cols[4]:
        end = st.date_input("End", value=_date_or_none(draft["end"]), key=f"end_{v}")
        form.set_field("end", end.isoformat() if end else "")
    with cols[5]:
        if form.strict_plans:
            options = [""] + PLANS
            current = draft["plan"] if draft["plan"] in PLANS else ""
            plan = st.selectbox("Plan", options, index=options.index(current),
                                format_func=lambda p: p or "Select Plan", key=f"plan_{v}")
        else:
            plan = st.text_input("Plan", value=draft["plan"], placeholder="plan", key=f"plan_{v}")
        form.set_field("plan", plan)

    start_d, end_d = _date_or_none(form.draft["start"]), _date_or_none(form.draft["end"])
    if start_d and end_d and end_d <= start_d:
        st.warning("End date is not after start date; progress will show as complete.")

    if st.button(form.submit_label, type="primary", use_container_width=True):
        label = form.submit_label
        if run_mutation(form.submit, "Subscription updated." if label == "Update" else "Subscription added."):
            reset_form_widgets()
            st.rerun()


# ---------- Chart + table ----------

def price_cell(price: float) -> str:
    return f"{SETTINGS.currency}{format_price(price)}"


def income_chart(records):
    st.subheader("Monthly Revenue Chart")
    series = charts.chart_projection(records)
    st.plotly_chart(charts.income_bar_chart(series), use_container_width=True)


def subscriptions_table(store: RecordStore, form: FormController, records):
    now = datetime.now()
    widths = [2, 2, 2, 1, 1.3, 1.3, 3, 1, 1]
    header = st.columns(widths)
    for col, title in zip(header, ["Name", "Phone", "Plan", "Price", "Start", "End", "Progress", "", ""]):
        col.markdown(f"**{title}**")

    with st.container(height=350):
        if not records:
            st.caption("No data found.")
            return
        for rec in records:
            index = store.index_of(rec.id)
            p = utils.progress(rec.start, rec.end, now)
            c = st.columns(widths)
            c[0].text(rec.name)
            c[1].text(rec.phone)
            c[2].text(rec.plan)
            c[3].text(price_cell(rec.price))
            c[4].text(rec.start.isoformat())
            c[5].text(rec.end.isoformat())
            c[6].progress(p.percent, text=utils.progress_label(p))
            if c[7].button("Edit", key=f"edit_{rec.id}"):
                if run_mutation(lambda: form.begin_edit(index)):
                    reset_form_widgets()
                    st.rerun()
            if c[8].button("Delete", key=f"delete_{rec.id}", type="secondary"):
                if run_mutation(lambda: form.delete(index), "Subscription deleted."):
                    reset_form_widgets()
                    st.rerun()


def expiring_panel(records):
    soon = utils.expiring_soon(records, date.today(), SETTINGS.expiry_window_days)
    with st.expander(f"⏰ Expiring soon (next {SETTINGS.expiry_window_days} days): {len(soon)}"):
        if soon:
            st.dataframe(utils.records_to_dataframe(soon, datetime.now()), use_container_width=True, hide_index=True)
        else:
            st.caption("No subscriptions expiring soon.")


# --------- App entry ---------

def run():
    init_once()
    store: RecordStore = st.session_state.store
    form: FormController = st.session_state.form
    plan_filter: PlanFilter = st.session_state.plan_filter

    plan_sidebar(store, plan_filter)

    st.title("Customer Subscription Manager")
    if plan_filter.selected:
        st.caption(f"Showing plan: **{plan_filter.selected}**")

    subscription_form(form)
    st.divider()

    visible = plan_filter.visible_records(store)
    income_chart(visible)
    expiring_panel(visible)
    subscriptions_table(store, form, visible)


if __name__ == "__main__":
    run()
