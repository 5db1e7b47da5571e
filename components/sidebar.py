"""Global sidebar: backend status and refresh."""

import streamlit as st
from dataclasses import dataclass

from data.session_store import get_client, reset_views


@dataclass
class SidebarState:
    app_name: str
    api_configured: bool


def render_sidebar() -> SidebarState:
    """Render the global sidebar controls and return current state."""
    settings = get_client().settings
    with st.sidebar:
        st.title(settings.app_name)
        st.caption("Parking administration")
        st.divider()

        if settings.is_configured():
            st.success("Backend configured")
            st.caption(settings.base_url)
        else:
            st.error("Backend not configured — set SOCIETY_API_BASE_URL in .env")

        if st.button("Refresh data", key="sidebar_refresh", use_container_width=True):
            reset_views()
            st.rerun()

    return SidebarState(
        app_name=settings.app_name,
        api_configured=settings.is_configured(),
    )
