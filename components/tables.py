"""Styled dataframe display helpers."""

import streamlit as st
import pandas as pd
from typing import Optional

from config.defaults import STATUS_ASSIGNED, STATUS_FREE


def render_status_table(
    df: pd.DataFrame,
    status_column: str = "Status",
    height: Optional[int] = None,
):
    """Render a table with color-coded slot status."""
    def color_status(val):
        if val == STATUS_ASSIGNED:
            return "background-color: #ffe4e6; color: #be123c; font-weight: bold"
        elif val == STATUS_FREE:
            return "background-color: #d1fae5; color: #047857; font-weight: bold"
        return ""

    if status_column in df.columns and not df.empty:
        styled = df.style.map(color_status, subset=[status_column])
        st.dataframe(styled, use_container_width=True, height=height, hide_index=True)
    else:
        st.dataframe(df, use_container_width=True, height=height, hide_index=True)
