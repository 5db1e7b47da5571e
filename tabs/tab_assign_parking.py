"""Tab 2: Assign Parking — click a slot to assign, reassign or free it."""

import streamlit as st

from data.api_client import ApiRequestError, get_api_message
from data.session_store import (
    get_assignment_controller, is_board_loaded, set_board_loaded,
    get_assign_selected_floor_id, set_assign_selected_floor_id,
)
from engine.occupancy import (
    default_floor_id, filter_residents, flag_mismatches, floor_occupancy,
    parking_floors, slots_for_floor,
)
from components.charts import floor_occupancy_bar, occupancy_donut
from components.metrics_cards import render_metric_row, render_result

SLOTS_PER_ROW = 6


def _load_board():
    try:
        get_assignment_controller().load_all()
        set_board_loaded(True)
    except ApiRequestError as e:
        st.error(get_api_message(e))


def _select_slot(slot_id: int):
    st.session_state["assign_active_slot_id"] = slot_id


def _resident_picker(residents, key: str, default_id: int = 0) -> int:
    query = st.text_input("Search resident", placeholder="Name, flat, mobile…", key=f"{key}_search")
    shown = filter_residents(residents, query)
    if not shown:
        st.caption("No residents found.")
        return 0
    options = [0] + [r.id for r in shown]
    names = {r.id: f"{r.name} — {r.location}" for r in shown}
    return st.selectbox(
        "Resident",
        options=options,
        index=options.index(default_id) if default_id in options else 0,
        format_func=lambda rid: names.get(rid, "Select a resident"),
        key=f"{key}_resident",
    )


def _render_slot_panel(slot, assignment, residents):
    controller = get_assignment_controller()
    st.divider()
    result = None

    if assignment is None:
        st.subheader(f"Assign Slot — {slot.slot_number}")
        st.caption("Choose a resident to assign this free parking space")
        resident_id = _resident_picker(residents, key=f"assign_{slot.id}")
        col_ok, col_cancel = st.columns(2)
        with col_ok:
            label = "Assigning…" if controller.saving else "Assign Slot"
            if st.button(label, type="primary", key="btn_assign",
                         disabled=controller.saving or not resident_id, use_container_width=True):
                result = controller.assign(slot, resident_id)
        with col_cancel:
            if st.button("Cancel", key="btn_assign_cancel", use_container_width=True):
                _select_slot(0)
                st.rerun()
    else:
        st.subheader(f"Slot {slot.slot_number} — Occupied")
        st.caption("Free this slot or reassign to another resident")
        occupant = assignment.user_name or "Currently assigned"
        where = " · ".join(p for p in (assignment.floor_name, assignment.flat_name) if p) or "—"
        st.info(f"**{occupant}** — {where}")

        resident_id = _resident_picker(residents, key=f"reassign_{slot.id}", default_id=assignment.user_id)
        col_re, col_free, col_cancel = st.columns(3)
        with col_re:
            if st.button("Reassign", type="primary", key="btn_reassign",
                         disabled=controller.saving or not resident_id or resident_id == assignment.user_id,
                         use_container_width=True):
                result = controller.reassign(slot, resident_id)
        with col_free:
            label = "Processing…" if controller.saving else "Free Slot"
            if st.button(label, key="btn_free",
                         disabled=controller.saving or not assignment.id, use_container_width=True):
                result = controller.free(assignment, slot)
        with col_cancel:
            if st.button("Cancel", key="btn_occupied_cancel", use_container_width=True):
                _select_slot(0)
                st.rerun()

    if result is not None:
        if result.success:
            # Grid above is stale; show the message after the rerun.
            st.session_state["assign_last_result"] = (True, result.message)
            if result.reload_error:
                # Refetch the whole board on the next run.
                set_board_loaded(False)
            _select_slot(0)
            st.rerun()
        render_result(False, result.message)


def render(sidebar_state):
    """Render the Assign Parking tab."""
    st.header("Parking Assignment")
    st.caption("Click any slot to assign or free a parking space")

    if not sidebar_state.api_configured:
        st.info("Backend not configured. Set SOCIETY_API_BASE_URL in .env.")
        return

    if not is_board_loaded():
        _load_board()

    last = st.session_state.pop("assign_last_result", None)
    if last:
        render_result(*last)

    controller = get_assignment_controller()
    board = controller.board
    floors = parking_floors(board.floors)
    if not floors:
        st.info("No parking floors. Mark a floor as a parking floor in Floor Master.")
        return

    by_slot = board.by_slot
    occupancy = {f.id: floor_occupancy(f, board.slots, by_slot) for f in floors}

    # --- Floor selector ---
    current_id = default_floor_id(board.floors, get_assign_selected_floor_id())
    floor_ids = [f.id for f in floors]
    names = {f.id: f.floor_name for f in floors}
    selected_id = st.selectbox(
        "Select Parking Floor",
        options=floor_ids,
        index=floor_ids.index(current_id),
        format_func=lambda fid: f"{names[fid]}  ({occupancy[fid].label or 'no slots'})",
        key="assign_floor_select",
    )
    if selected_id != get_assign_selected_floor_id():
        set_assign_selected_floor_id(selected_id)
        _select_slot(0)

    floor = next(f for f in floors if f.id == selected_id)
    floor_slots = slots_for_floor(board.slots, floor.id)
    occ = occupancy[floor.id]

    render_metric_row([
        {"label": "Free", "value": occ.free},
        {"label": "Assigned", "value": occ.used},
        {"label": "Occupancy", "value": f"{occ.occupancy_pct:.0%}" if occ.total else "N/A"},
    ])

    mismatched = flag_mismatches(floor_slots, by_slot)
    if mismatched:
        st.warning(
            "Slot flags disagree with the assignment list for: "
            + ", ".join(s.slot_number for s in mismatched)
            + ". Status shown follows the assignment list."
        )

    if not floor_slots:
        st.info(f"No slots for {floor.floor_name}. Create slots from Parking Slot Setup first.")
        return

    # --- Slot grid ---
    flashing = controller.flash.active()
    for start in range(0, len(floor_slots), SLOTS_PER_ROW):
        cols = st.columns(SLOTS_PER_ROW)
        for col, slot in zip(cols, floor_slots[start:start + SLOTS_PER_ROW]):
            a = by_slot.get(slot.id)
            marker = "🔴" if a else "🟢"
            who = (a.user_name.split(" ")[0] if a and a.user_name else "Assigned") if a else "Available"
            spark = "✨ " if slot.id in flashing else ""
            with col:
                if st.button(f"{spark}{marker} {slot.slot_number}\n\n{who}",
                             key=f"slot_btn_{slot.id}", use_container_width=True):
                    _select_slot(slot.id)

    active_id = st.session_state.get("assign_active_slot_id", 0)
    active = next((s for s in floor_slots if s.id == active_id), None)
    if active is not None:
        _render_slot_panel(active, by_slot.get(active.id), board.residents)

    # --- Overview ---
    st.divider()
    col1, col2 = st.columns([2, 3])
    with col1:
        st.plotly_chart(occupancy_donut(occ.used, occ.total, title=floor.floor_name), use_container_width=True)
    with col2:
        st.plotly_chart(floor_occupancy_bar(floors, list(occupancy.values())), use_container_width=True)
