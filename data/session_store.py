"""Typed wrapper around st.session_state for application data."""

import streamlit as st
from typing import Optional

from config.settings import ApiSettings
from data.api_client import SocietyApiClient
from engine.assignment_controller import AssignmentController
from engine.slot_setup import FloorSetupView, SlotSetupController


def initialize_session_state():
    """Initialize all session state keys with defaults."""
    defaults = {
        "api_client": None,
        "assignment_controller": None,
        "slot_setup_controller": None,
        "board_loaded": False,
        "setup_floors": [],
        "setup_all_slots": [],
        "setup_floors_loaded": False,
        "setup_selected_floor_id": 0,
        "setup_view": None,
        "setup_saving": False,
        "assign_selected_floor_id": 0,
        "assign_active_slot_id": 0,
    }
    for key, default in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default

    if st.session_state["api_client"] is None:
        client = SocietyApiClient(ApiSettings())
        st.session_state["api_client"] = client
        st.session_state["assignment_controller"] = AssignmentController(client)
        st.session_state["slot_setup_controller"] = SlotSetupController(client)


# --- Getters ---

def get_client() -> SocietyApiClient:
    return st.session_state["api_client"]


def get_assignment_controller() -> AssignmentController:
    return st.session_state["assignment_controller"]


def get_slot_setup_controller() -> SlotSetupController:
    return st.session_state["slot_setup_controller"]


def is_board_loaded() -> bool:
    return st.session_state.get("board_loaded", False)


def get_setup_view() -> Optional[FloorSetupView]:
    return st.session_state.get("setup_view")


def get_setup_selected_floor_id() -> int:
    return st.session_state.get("setup_selected_floor_id", 0)


def get_assign_selected_floor_id() -> int:
    return st.session_state.get("assign_selected_floor_id", 0)


def is_setup_saving() -> bool:
    return st.session_state.get("setup_saving", False)


# --- Setters ---

def set_board_loaded(loaded: bool):
    st.session_state["board_loaded"] = loaded


def set_setup_view(view: Optional[FloorSetupView], floor_id: int = 0):
    st.session_state["setup_view"] = view
    st.session_state["setup_selected_floor_id"] = view.floor_id if view else floor_id


def set_assign_selected_floor_id(floor_id: int):
    st.session_state["assign_selected_floor_id"] = floor_id


def set_setup_saving(saving: bool):
    st.session_state["setup_saving"] = saving


def reset_views():
    """Forget every derived working set; next render refetches."""
    st.session_state["board_loaded"] = False
    st.session_state["setup_floors_loaded"] = False
    st.session_state["setup_view"] = None
    st.session_state["setup_selected_floor_id"] = 0
