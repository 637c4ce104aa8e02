"""Filter bar component for the dashboard."""
from __future__ import annotations
from typing import Dict, Optional, Sequence

import streamlit as st

from models.views import ALL_CATEGORIES, FilterState


def render_filter_bar(options: Sequence[str], current: FilterState) -> Dict[str, Optional[str]]:
    """
    Render the category filter, search box and deep-dive selector.

    Args:
        options: Category choices, ``"All"`` first
        current: Filter state the widgets start from

    Returns:
        Dictionary with filter values (category_filter, search_query, deep_dive_category)
    """
    options = list(options) or [ALL_CATEGORIES]
    categories = [c for c in options if c != ALL_CATEGORIES]

    col1, col2, col3 = st.columns(3)

    with col1:
        category_index = options.index(current.category_filter) if current.category_filter in options else 0
        category_filter = st.selectbox("Category", options=options, index=category_index)

    with col2:
        search_query = st.text_input(
            "Search merchant or category",
            value=current.search_query,
            placeholder="e.g. coffee",
        )

    with col3:
        deep_index = categories.index(current.deep_dive_category) if current.deep_dive_category in categories else None
        deep_dive_category = st.selectbox(
            "Deep dive",
            options=categories,
            index=deep_index,
            placeholder="Choose a category",
        )

    return {
        "category_filter": category_filter,
        "search_query": search_query,
        "deep_dive_category": deep_dive_category or "",
    }
