"""Dashboard page - filters, charts and tables for the current analysis."""
from __future__ import annotations
import streamlit as st

from analytics.dashboard import compute_dashboard
from analytics.engine import category_options
from core.config import config
from core.logger import get_logger
from ui.components import render_analytics_view, render_export_panel, render_filter_bar
from ui.services import SessionManager

log = get_logger("ui/pages/dashboard_page")


def render() -> None:
    """Render the dashboard page."""
    SessionManager.init_session()

    st.header("📊 Dashboard")

    analysis = SessionManager.get_analysis()
    if analysis is None:
        st.info("No analysis yet. Upload a PDF to get started.")
        return

    store = analysis.store
    memo = SessionManager.get_view_memo()

    options = memo.get("category_options", (store,), lambda: category_options(store))
    values = render_filter_bar(options, SessionManager.get_filters())
    filters = SessionManager.update_filters(**values)

    views = compute_dashboard(
        store,
        filters,
        memo,
        top_merchants=config.top_merchants,
        deep_dive_merchants=config.deep_dive_top_merchants,
    )

    render_analytics_view(views, analysis.summary, config.currency)

    st.divider()
    render_export_panel(SessionManager.get_statement_files())
