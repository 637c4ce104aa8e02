"""Export component - CSV and spreadsheet downloads from the analyzer."""
from __future__ import annotations
from typing import Callable, Sequence

import streamlit as st

from api.client import analyzer
from core.errors import FinanceDashboardError
from core.logger import get_logger
from models.schema import StatementFile

log = get_logger("ui/components/export_panel")

EXCEL_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def render_export_panel(files: Sequence[StatementFile]) -> None:
    """
    Offer exports built by the analyzer from the same uploaded files.

    The exact bytes used for the analysis are re-sent so exported totals
    match the dashboard.
    """
    if not files:
        return

    st.markdown("#### ⬇️ Export")
    col1, col2 = st.columns(2)
    client = analyzer()

    with col1:
        _export_button("csv", "Prepare CSV", client.export_csv, files, "transactions.csv", "text/csv")

    with col2:
        _export_button("xlsx", "Prepare Excel", client.export_excel, files, "transactions.xlsx", EXCEL_MIME)


def _export_button(
    key: str,
    label: str,
    fetch: Callable[[Sequence[StatementFile]], bytes],
    files: Sequence[StatementFile],
    file_name: str,
    mime: str,
) -> None:
    state_key = f"export_{key}"

    if st.button(label, key=f"prepare_{key}"):
        try:
            with st.spinner("Requesting export..."):
                st.session_state[state_key] = fetch(files)
        except FinanceDashboardError as e:
            log.error(f"Export {key} failed: {e}")
            st.error(str(e))
            st.session_state.pop(state_key, None)

    data = st.session_state.get(state_key)
    if data:
        st.download_button(f"Download {file_name}", data=data, file_name=file_name, mime=mime, key=f"download_{key}")
