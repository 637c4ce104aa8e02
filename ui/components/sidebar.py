"""Sidebar component."""
from __future__ import annotations
import streamlit as st

from core.config import config


def render_sidebar() -> None:
    """Render the sidebar with help information."""
    with st.sidebar:
        st.caption("**Statement Insights** — credit card analytics")
        st.caption("Upload statements, then explore spending by month, merchant and category.")
        st.divider()
        st.caption(f"Analyzer: `{config.backend_url}`")
