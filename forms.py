from __future__ import annotations

from typing import Optional

import streamlit as st

import auth
from models import Record
from sensors import SensorForm, submit_sensor
from utils.values import AutoValueConfirmationRequired, InvalidSensorInput

FORM_FIELDS = {
    "sensor_name": "",
    "sensor_desc": "",
    "sensor_city": "",
    "sensor_value": "",
    "sensor_auto": False,
}


# Widget keys can only be written before the widgets are drawn, so edits and
# resets are queued here and applied at the top of the next run.
def request_edit(record: Record) -> None:
    st.session_state["edit_sensor"] = record


def request_reset() -> None:
    st.session_state["reset_sensor_form"] = True


def _apply_queued_form_state() -> None:
    if st.session_state.pop("reset_sensor_form", False):
        for key, default in FORM_FIELDS.items():
            st.session_state[key] = default
    record: Optional[Record] = st.session_state.pop("edit_sensor", None)
    if record is not None:
        st.session_state["sensor_name"] = record.name
        st.session_state["sensor_desc"] = record.description
        st.session_state["sensor_city"] = record.city
        st.session_state["sensor_value"] = str(record.value)
        st.session_state["sensor_auto"] = False
    for key, default in FORM_FIELDS.items():
        st.session_state.setdefault(key, default)


def _save(form: SensorForm, confirm_auto: Optional[bool] = None) -> Optional[Record]:
    try:
        record = submit_sensor(form, confirm_auto=confirm_auto)
    except AutoValueConfirmationRequired:
        st.session_state["pending_sensor"] = form
        return None
    except InvalidSensorInput as e:
        st.error(str(e))
        return None
    st.session_state.pop("pending_sensor", None)
    return record


def render_sensor_form() -> Optional[Record]:
    """Add/update form. Returns the stored record when something was saved."""
    st.subheader("Manage sensors")
    _apply_queued_form_state()

    saved: Optional[Record] = None
    with st.form("sensor_form"):
        name = st.text_input("Sensor name", key="sensor_name", placeholder="e.g., Humidity 1")
        desc = st.text_input("Description (optional)", key="sensor_desc")
        city = st.text_input("City", key="sensor_city", placeholder="e.g., Manila")
        raw_value = st.text_input("Value", key="sensor_value", placeholder="leave empty to generate")
        auto = st.checkbox("Auto-generate a demo value", key="sensor_auto")
        submitted = st.form_submit_button("Save sensor")
        if submitted:
            form = SensorForm(name=name, city=city, raw_value=raw_value, description=desc, auto=auto)
            saved = _save(form)

    pending: Optional[SensorForm] = st.session_state.get("pending_sensor")
    if pending is not None:
        st.warning("No value entered. Do you want to auto-generate a demo value?")
        col_yes, col_no = st.columns(2)
        with col_yes:
            if st.button("Generate value", key="confirm_auto_yes"):
                saved = _save(pending, confirm_auto=True)
        with col_no:
            if st.button("Cancel", key="confirm_auto_no"):
                st.session_state.pop("pending_sensor", None)
                st.info("Sensor not saved.")
    return saved


def render_city_search() -> Optional[str]:
    with st.form("city_search_form"):
        city = st.text_input("City", key="city_query", placeholder="Search a city")
        submitted = st.form_submit_button("Get weather")
    if not submitted:
        return None
    if not city.strip():
        st.error("Enter a city to search.")
        return None
    return city.strip()


def render_login_form() -> None:
    st.subheader("Sign in")
    with st.form("login_form"):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Log in")
        if submitted:
            if auth.login(username, password):
                st.rerun()
            else:
                st.error("Invalid credentials")
