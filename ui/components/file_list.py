"""File list display component."""
from __future__ import annotations
from typing import Dict, List

import streamlit as st


def render_file_list(files_meta: List[Dict], transaction_count: int) -> None:
    """
    Display the statements behind the current analysis.

    Args:
        files_meta: Metadata from ``UploadService.describe``
        transaction_count: Number of transactions in the store
    """
    if not files_meta:
        return

    st.success(f"✅ {len(files_meta)} statement(s) analyzed — {transaction_count:,} transaction(s).")

    with st.expander("Review analyzed files"):
        for meta in files_meta:
            st.write(
                f"• **{meta['name']}** — "
                f"{meta['size_human']} ({meta['ext']}) "
                f"`{meta['sha256'][:12]}`"
            )
