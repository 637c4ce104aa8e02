"""Session state management service."""
from __future__ import annotations
from typing import Optional, Tuple

import streamlit as st

from analytics.memo import ViewMemo
from analytics.store import TransactionStore
from core.logger import get_logger
from models.schema import StatementFile
from models.views import FilterState
from .analysis_service import AnalysisResult, AnalysisRunner

log = get_logger("ui/services/session_manager")


class SessionManager:
    """
    Centralized session state management.

    The session owns the filter state and the current analysis; views are
    never stored here, only the memo that caches them.
    """

    @staticmethod
    def init_session() -> None:
        """Initialize session-specific state."""
        if "statement_files" not in st.session_state:
            st.session_state["statement_files"] = ()

        if "analysis" not in st.session_state:
            st.session_state["analysis"] = None

        if "filters" not in st.session_state:
            st.session_state["filters"] = FilterState()

        if "view_memo" not in st.session_state:
            st.session_state["view_memo"] = ViewMemo()

        if "analysis_runner" not in st.session_state:
            st.session_state["analysis_runner"] = AnalysisRunner()
            log.info("Session initialized")

        if "analysis_error" not in st.session_state:
            st.session_state["analysis_error"] = None

    @staticmethod
    def get_statement_files() -> Tuple[StatementFile, ...]:
        """Files used by the current (or pending) analysis."""
        SessionManager.init_session()
        return st.session_state["statement_files"]

    @staticmethod
    def set_statement_files(files: Tuple[StatementFile, ...]) -> None:
        st.session_state["statement_files"] = tuple(files)

    @staticmethod
    def get_analysis() -> Optional[AnalysisResult]:
        SessionManager.init_session()
        return st.session_state["analysis"]

    @staticmethod
    def get_store() -> TransactionStore:
        analysis = SessionManager.get_analysis()
        return analysis.store if analysis is not None else TransactionStore()

    @staticmethod
    def set_analysis(result: Optional[AnalysisResult]) -> None:
        """Replace the session's analysis; filters are reset for the new store."""
        SessionManager.init_session()
        st.session_state["analysis"] = result
        st.session_state["filters"] = FilterState()
        st.session_state["view_memo"].clear()
        st.session_state["analysis_error"] = None
        for key in ("export_csv", "export_xlsx"):
            st.session_state.pop(key, None)
        if result is not None:
            log.info(f"Session analysis replaced: transactions={len(result.store)}")

    @staticmethod
    def get_runner() -> AnalysisRunner:
        SessionManager.init_session()
        return st.session_state["analysis_runner"]

    @staticmethod
    def get_view_memo() -> ViewMemo:
        SessionManager.init_session()
        return st.session_state["view_memo"]

    @staticmethod
    def get_filters() -> FilterState:
        SessionManager.init_session()
        return st.session_state["filters"]

    @staticmethod
    def update_filters(
        category_filter: Optional[str] = None,
        search_query: Optional[str] = None,
        deep_dive_category: Optional[str] = None,
    ) -> FilterState:
        """
        Apply widget values to the filter state.

        Arguments left as None keep their current value. The stored state is
        only replaced when something actually changed.
        """
        current = SessionManager.get_filters()
        updated = current
        if category_filter is not None:
            updated = updated.with_category(category_filter)
        if search_query is not None:
            updated = updated.with_search(search_query)
        if deep_dive_category is not None:
            updated = updated.with_deep_dive(deep_dive_category)

        if updated != current:
            st.session_state["filters"] = updated
            log.debug(f"Filters changed: {updated.model_dump()}")
        return updated

    @staticmethod
    def get_analysis_error() -> Optional[str]:
        SessionManager.init_session()
        return st.session_state["analysis_error"]

    @staticmethod
    def set_analysis_error(message: Optional[str]) -> None:
        st.session_state["analysis_error"] = message
