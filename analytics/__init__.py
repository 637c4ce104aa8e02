"""Client-side transaction analytics."""
from .dates import normalize, resolve_year, system_clock
from .store import TransactionStore, batches_from_records
from .engine import (
    category_deep_dive,
    category_monthly_trend,
    category_options,
    merchant_ranking,
    monthly_by_category,
    search,
)
from .memo import ViewMemo
from .dashboard import compute_dashboard

__all__ = [
    "normalize",
    "resolve_year",
    "system_clock",
    "TransactionStore",
    "batches_from_records",
    "category_deep_dive",
    "category_monthly_trend",
    "category_options",
    "merchant_ranking",
    "monthly_by_category",
    "search",
    "ViewMemo",
    "compute_dashboard",
]
