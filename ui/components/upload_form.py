"""Upload form component."""
from __future__ import annotations
from typing import Dict, List, Optional, Tuple

import streamlit as st
from streamlit.runtime.uploaded_file_manager import UploadedFile

from core.config import config


def render_upload_form() -> Tuple[Optional[List[UploadedFile]], Dict[str, Optional[float]], bool]:
    """
    Render the statement uploader, optional per-file statement years and the
    analyze button.

    Returns:
        (files, statement_years, submitted)
    """
    files = st.file_uploader(
        "Upload credit card statement PDFs",
        type=list(config.allowed_ext),
        accept_multiple_files=True,
        key="statement_uploader",
        help=(
            f"Up to {config.max_files} files, {config.max_total_mb} MB in total. "
            "Statements are analyzed in the order they are listed."
        ),
    )

    years: Dict[str, Optional[float]] = {}
    if files:
        with st.expander("📅 Statement years (optional)"):
            st.caption(
                "Dates on a statement carry no year. Leave blank to use the year the analyzer "
                "reports, or the current year; set one for statements that cross a year boundary."
            )
            for f in files:
                years[f.name] = st.number_input(
                    f.name,
                    min_value=1900,
                    max_value=2100,
                    value=None,
                    step=1,
                    key=f"statement_year_{f.name}",
                )

    submitted = st.button("Analyze ➜", type="primary")

    return (list(files) if files else None), years, submitted
