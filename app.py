from __future__ import annotations

import logging
from typing import Optional

import streamlit as st

import auth
import config
import db
from charts import build_sensor_chart, build_sensor_map, project_view
from constants import BAR_COLOR, BAR_COLOR_DARK, DEFAULT_MAP_CENTER, DEFAULT_MAP_ZOOM, THEME_KEY
from forms import render_city_search, render_login_form, render_sensor_form, request_edit, request_reset
from sensors import delete_sensor
from store import export_records_csv, load_all, records_frame
from sync import CitySession, SyncResult, refresh_city_view, sync_city


def _session() -> CitySession:
    if "city_session" not in st.session_state:
        st.session_state["city_session"] = CitySession()
    return st.session_state["city_session"]


def _flash(message: str) -> None:
    st.session_state["flash"] = message


def _render_weather(result: SyncResult) -> None:
    w = result.weather
    if w is None:
        st.warning("City not found / weather unavailable.")
        return
    country = f", {w.country}" if w.country else ""
    st.markdown(f"**{w.name}{country}**")
    cols = st.columns(3)
    cols[0].metric("Temp", f"{w.temperature} °C")
    cols[1].metric("Humidity", f"{w.humidity:.0f}%" if w.humidity is not None else "-")
    cols[2].metric("Weather", w.conditions or "-")


def _render_city_tab(dark: bool) -> None:
    st.subheader("City view")
    city = render_city_search()
    if city:
        with st.spinner("Loading weather..."):
            synced = sync_city(city, _session())
        if synced is not None:
            st.session_state["city_view"] = synced

    last: Optional[SyncResult] = st.session_state.get("city_view")
    # Re-filter the stored records on every run so the chart and map follow
    # edits made anywhere else in the app.
    result = refresh_city_view(_session(), last) if last is not None else None
    if result is None:
        st.info("Search a city to see its sensors on the chart and map.")
        return
    st.session_state["city_view"] = result

    _render_weather(result)
    view = project_view(result.records, result.focus, color=BAR_COLOR_DARK if dark else BAR_COLOR)
    # The map stays where it was when there is nothing to centre on.
    if view.center is not None:
        st.session_state["map_center"] = (view.center, view.zoom)
    center, zoom = st.session_state.get("map_center", (DEFAULT_MAP_CENTER, DEFAULT_MAP_ZOOM))

    if not result.records:
        st.info(f"No sensors recorded for {result.city}.")
    col_chart, col_map = st.columns(2)
    with col_chart:
        st.plotly_chart(build_sensor_chart(view, dark=dark), use_container_width=True)
    with col_map:
        st.plotly_chart(
            build_sensor_map(view, previous_center=center, previous_zoom=zoom),
            use_container_width=True,
        )


def _render_manage_tab() -> None:
    saved = render_sensor_form()
    if saved is not None:
        _flash(f"Saved {saved.display()}.")
        request_reset()
        st.rerun()

    st.divider()
    st.subheader("All sensors")
    records = load_all()
    if not records:
        st.info("No sensors recorded.")
        return

    for idx, record in enumerate(records):
        col_info, col_value, col_edit, col_delete = st.columns([5, 2, 1, 1])
        with col_info:
            st.markdown(f"**{record.name}**")
            st.caption(f"{record.description or ''}  \nCity: {record.city or '-'}")
        with col_value:
            unit = f" {record.unit}" if record.unit else ""
            st.write(f"{record.value}{unit}")
        with col_edit:
            if st.button("Edit", key=f"edit_{idx}"):
                request_edit(record)
                st.rerun()
        with col_delete:
            if st.button("Delete", key=f"delete_{idx}"):
                removed = delete_sensor(idx)
                _flash(f"Deleted {removed.name}.")
                st.rerun()

    with st.expander("Table view"):
        st.dataframe(records_frame(records), use_container_width=True, hide_index=True)
        st.download_button(
            "Download sensors CSV",
            data=export_records_csv(),
            file_name="sensors.csv",
            mime="text/csv",
        )


def main() -> None:
    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(name)s | %(message)s")
    st.set_page_config(page_title="EcoLive Sensor Dashboard", page_icon="🌿", layout="wide")
    st.title("🌿 EcoLive Sensor Dashboard")
    st.caption("Record sensor readings and view them per city on a chart and a map.")

    db.initialize_database()

    if not auth.is_logged_in():
        render_login_form()
        return

    with st.sidebar:
        stored_dark = db.get_value(THEME_KEY) == "dark"
        dark = st.toggle("Dark mode", value=stored_dark)
        if dark != stored_dark:
            db.set_value(THEME_KEY, "dark" if dark else "light")
        if st.button("Log out"):
            auth.logout()
            st.rerun()

    flash = st.session_state.pop("flash", None)
    if flash:
        st.success(flash)

    tabs = st.tabs(["City view", "Manage sensors"])
    with tabs[0]:
        _render_city_tab(dark)
    with tabs[1]:
        _render_manage_tab()


if __name__ == "__main__":
    main()
