"""Tab 1: Parking Slot Setup — name every slot of a parking floor, then bulk save."""

import streamlit as st
import pandas as pd

from data.api_client import ApiRequestError, get_api_message
from data.loader import parse_floors, slots_dataframe
from data.session_store import (
    get_client, get_slot_setup_controller, get_setup_view, set_setup_view,
    get_setup_selected_floor_id, is_setup_saving, set_setup_saving,
)
from data.validator import validate_setup_view
from engine.errors import ValidationError
from engine.provisioning import auto_fill, row_counts, update_row
from engine.slot_setup import FloorSetupView, filter_slots
from components.metrics_cards import render_metric_row, render_result
from components.tables import render_status_table


def _bump_editor():
    # New key => data_editor drops its own edit state and shows the fresh rows.
    st.session_state["setup_editor_gen"] = st.session_state.get("setup_editor_gen", 0) + 1


def _load_reference_data():
    controller = get_slot_setup_controller()
    try:
        st.session_state["setup_floors"] = parse_floors(get_client().get_floors().result_list())
        st.session_state["setup_all_slots"] = controller.load_all_slots()
        st.session_state["setup_floors_loaded"] = True
    except ApiRequestError as e:
        st.error(get_api_message(e))


def _refresh_all_slots():
    try:
        st.session_state["setup_all_slots"] = get_slot_setup_controller().load_all_slots()
    except ApiRequestError as e:
        st.error(get_api_message(e))


def _select_floor(floor_id: int):
    floors = st.session_state.get("setup_floors", [])
    floor = next((f for f in floors if f.id == floor_id), None)
    if floor is None:
        set_setup_view(None)
        return
    try:
        set_setup_view(get_slot_setup_controller().select_floor(floor))
    except ApiRequestError as e:
        # Keep the attempted id so the selectbox does not refetch on every rerun.
        set_setup_view(None, floor_id=floor_id)
        st.error(get_api_message(e))
    _bump_editor()


def _rows_frame(view: FloorSetupView) -> pd.DataFrame:
    return pd.DataFrame([{
        "#": r.index,
        "Slot Number": r.slot_number,
        "State": ("Used" if r.is_assigned else "Saved") if r.existing_id > 0 else "New",
    } for r in view.rows], columns=["#", "Slot Number", "State"])


def _apply_edits(view: FloorSetupView, edited: pd.DataFrame) -> FloorSetupView:
    rows = list(view.rows)
    for _, rec in edited.iterrows():
        value = rec["Slot Number"]
        value = "" if value is None or (isinstance(value, float) and pd.isna(value)) else str(value)
        index = int(rec["#"])
        current = next((r for r in rows if r.index == index), None)
        if current is not None and current.slot_number != value:
            rows = update_row(rows, index, value)
    return view.with_rows(rows)


def _render_configure():
    floors = st.session_state.get("setup_floors", [])
    if not floors:
        st.info("No floors found. Create floors in Floor Master first.")
        return

    floor_ids = [0] + [f.id for f in floors]
    labels = {f.id: f.floor_name + (f" · {f.total_parking_slot} slots" if f.is_parking_floor else " · not parking")
              for f in floors}
    current_id = get_setup_selected_floor_id()
    selected_id = st.selectbox(
        "Parking floor",
        options=floor_ids,
        index=floor_ids.index(current_id) if current_id in floor_ids else 0,
        format_func=lambda x: labels.get(x, "Choose a floor"),
        key="setup_floor_select",
    )
    if selected_id != current_id:
        _select_floor(selected_id)

    view = get_setup_view()
    if view is None:
        return
    floor = view.floor
    if not floor.is_parking_floor:
        st.warning(f"{floor.floor_name} is not a parking floor. Enable it in Floor Master to configure slots.")
        return
    if floor.capacity == 0:
        st.warning(f"{floor.floor_name} has no parking capacity. Set Total Parking Slots in Floor Master.")
        return

    # --- Auto-fill ---
    col_prefix, col_fill = st.columns([3, 1])
    with col_prefix:
        prefix = st.text_input("Auto-fill prefix", placeholder="e.g. P", key="setup_prefix")
    with col_fill:
        st.write("")
        if st.button("Auto-fill", key="btn_autofill", use_container_width=True):
            try:
                view = view.with_rows(auto_fill(list(view.rows), prefix))
                set_setup_view(view)
                _bump_editor()
            except ValidationError as e:
                st.error(e.message)

    # --- Row grid ---
    gen = st.session_state.get("setup_editor_gen", 0)
    edited = st.data_editor(
        _rows_frame(view),
        key=f"setup_editor_{floor.id}_{gen}",
        hide_index=True,
        use_container_width=True,
        disabled=["#", "State"],
        num_rows="fixed",
        column_config={
            "#": st.column_config.NumberColumn(width="small"),
            "Slot Number": st.column_config.TextColumn(required=False),
        },
    )
    view = _apply_edits(view, edited)
    set_setup_view(view)

    counts = row_counts(list(view.rows))
    render_metric_row([
        {"label": "Filled", "value": f"{counts.filled}/{floor.capacity}"},
        {"label": "Already saved", "value": counts.saved},
        {"label": "New", "value": counts.new},
    ])

    check = validate_setup_view(view)
    for w in check.warnings:
        st.warning(w)

    saving = is_setup_saving()
    label = "Saving…" if saving else f"Save {counts.filled} Slot{'s' if counts.filled != 1 else ''}"
    if st.button(label, type="primary", key="btn_save_slots", disabled=saving or counts.filled == 0):
        set_setup_saving(True)
        try:
            outcome = get_slot_setup_controller().save(view)
        except ValidationError as e:
            st.error(e.message)
            return
        finally:
            set_setup_saving(False)

        for msg in outcome.messages:
            render_result(outcome.ok, msg)
        if outcome.view is not None:
            set_setup_view(outcome.view)
            _bump_editor()
            _refresh_all_slots()
        elif outcome.reload_error:
            # Drop rows that no longer match the backend; the next run refetches the floor.
            st.warning(f"Saved, but the floor could not be reloaded: {outcome.reload_error}")
            set_setup_view(None)
            _bump_editor()


def _render_all_slots():
    floors = st.session_state.get("setup_floors", [])
    slots = st.session_state.get("setup_all_slots", [])

    query = st.text_input("Search slots", placeholder="Slot number or floor", key="setup_slot_search")
    shown = filter_slots(slots, floors, query)
    render_status_table(slots_dataframe(shown, floors), height=400)
    if not shown:
        st.caption("No slots match." if query else "No slots saved yet.")
        return

    st.divider()
    st.subheader("Edit Slot")
    floor_names = {f.id: f.floor_name for f in floors}
    slot_map = {s.id: s for s in shown}
    slot_id = st.selectbox(
        "Slot",
        options=list(slot_map.keys()),
        format_func=lambda sid: f"{slot_map[sid].slot_number} · {floor_names.get(slot_map[sid].floor_id, '—')}",
        key="setup_edit_slot",
    )
    slot = slot_map[slot_id]
    controller = get_slot_setup_controller()

    col_name, col_rename, col_delete = st.columns([3, 1, 1])
    with col_name:
        new_number = st.text_input("New slot number", value=slot.slot_number, key=f"setup_rename_{slot.id}")
    with col_rename:
        st.write("")
        rename = st.button("Rename", key="btn_rename_slot", use_container_width=True)
    with col_delete:
        st.write("")
        delete = st.button(
            "Delete", key="btn_delete_slot", use_container_width=True,
            disabled=slot.is_assigned,
            help="Cannot delete an assigned slot" if slot.is_assigned else None,
        )
    confirm = st.checkbox("Yes, delete this slot", key=f"setup_confirm_delete_{slot.id}")

    result = None
    try:
        if rename:
            result = controller.rename_slot(slot, new_number)
        elif delete:
            if not confirm:
                st.warning("Tick the confirmation box to delete.")
            else:
                result = controller.delete_slot(slot)
    except ValidationError as e:
        st.error(e.message)
    except ApiRequestError as e:
        st.error(get_api_message(e))

    if result is not None:
        render_result(result.success, result.message)
        if result.success:
            _refresh_all_slots()
            if get_setup_selected_floor_id():
                _select_floor(get_setup_selected_floor_id())


def render(sidebar_state):
    """Render the Parking Slot Setup tab."""
    st.header("Parking Slot Setup")
    st.caption("Select a parking floor to configure bulk slot names")

    if not sidebar_state.api_configured:
        st.info("Backend not configured. Set SOCIETY_API_BASE_URL in .env.")
        return

    if not st.session_state.get("setup_floors_loaded"):
        _load_reference_data()

    configure_tab, all_tab = st.tabs(["Configure Slots", "All Slots"])
    with configure_tab:
        _render_configure()
    with all_tab:
        _render_all_slots()
