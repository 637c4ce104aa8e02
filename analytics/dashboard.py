"""Compute every dashboard view for one (store, filters) pair."""
from __future__ import annotations
from typing import Optional

from core.logger import get_logger
from models.views import DashboardViews, FilterState
from . import engine
from .memo import ViewMemo
from .store import TransactionStore

log = get_logger("analytics/dashboard")


def compute_dashboard(
    store: TransactionStore,
    filters: FilterState,
    memo: Optional[ViewMemo] = None,
    *,
    top_merchants: int = engine.DEFAULT_TOP_MERCHANTS,
    deep_dive_merchants: int = engine.DEFAULT_DEEP_DIVE_MERCHANTS,
) -> DashboardViews:
    """
    Build the views for one render.

    Each view is keyed on its own dependencies, so with a shared ``memo`` a
    change to the search box only re-runs the search.
    """
    memo = memo if memo is not None else ViewMemo()

    monthly = memo.get(
        "monthly_by_category",
        (store, filters.category_filter),
        lambda: engine.monthly_by_category(store, filters.category_filter),
    )
    merchants = memo.get(
        "merchant_ranking",
        (store, top_merchants),
        lambda: engine.merchant_ranking(store, top_n=top_merchants),
    )
    deep_dive = memo.get(
        "category_deep_dive",
        (store, filters.deep_dive_category, deep_dive_merchants),
        lambda: engine.category_deep_dive(store, filters.deep_dive_category, top_n=deep_dive_merchants),
    )
    results = memo.get(
        "search",
        (store, filters.search_query),
        lambda: engine.search(store, filters.search_query),
    )
    options = memo.get(
        "category_options",
        (store,),
        lambda: engine.category_options(store),
    )

    log.debug(
        f"Dashboard views ready: months={len(monthly)} merchants={len(merchants)} "
        f"search_results={len(results)} memo_hits={memo.hits} memo_misses={memo.misses}"
    )
    return DashboardViews(
        filters=filters,
        monthly=monthly,
        merchants=merchants,
        deep_dive=deep_dive,
        search_results=results,
        category_options=options,
    )
