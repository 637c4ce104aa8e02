"""Filter state and the read-only views derived from the transaction store."""
from __future__ import annotations
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .schema import Transaction

ALL_CATEGORIES = "All"


class FilterState(BaseModel):
    """
    Interactively changing parameters of the dashboard.

    Every field is set independently; each ``with_*`` helper returns a new
    instance so the previous state can still be compared against.
    """
    category_filter: str = ALL_CATEGORIES
    search_query: str = ""
    deep_dive_category: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("category_filter", mode="before")
    @classmethod
    def _default_category(cls, value: Any) -> str:
        if value is None or not str(value).strip():
            return ALL_CATEGORIES
        return str(value)

    @field_validator("search_query", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> str:
        return "" if value is None else str(value)

    def with_category(self, category: Optional[str]) -> "FilterState":
        return self.model_copy(update={"category_filter": category or ALL_CATEGORIES})

    def with_search(self, query: Optional[str]) -> "FilterState":
        return self.model_copy(update={"search_query": query or ""})

    def with_deep_dive(self, category: Optional[str]) -> "FilterState":
        return self.model_copy(update={"deep_dive_category": category or None})


class MonthlyCategoryRow(BaseModel):
    """Per-category totals of one calendar month."""
    month: str
    totals: Dict[str, Decimal] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @property
    def total(self) -> Decimal:
        return sum(self.totals.values(), Decimal("0"))


class MerchantTotal(BaseModel):
    merchant: str
    total: Decimal
    count: int

    model_config = ConfigDict(frozen=True)


class CategoryStats(BaseModel):
    total: Decimal
    avg_monthly: Decimal
    transaction_count: int

    model_config = ConfigDict(frozen=True)


class TrendPoint(BaseModel):
    month: str
    amount: Decimal

    model_config = ConfigDict(frozen=True)


class CategoryDeepDive(BaseModel):
    """Statistics, monthly trend and top merchants of a single category."""
    category: Optional[str] = None
    stats: Optional[CategoryStats] = None
    trend: Tuple[TrendPoint, ...] = ()
    merchants: Tuple[MerchantTotal, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def is_empty(self) -> bool:
        return self.stats is None


class DashboardViews(BaseModel):
    """Every derived view needed for one render of the dashboard."""
    filters: FilterState
    monthly: Tuple[MonthlyCategoryRow, ...] = ()
    merchants: Tuple[MerchantTotal, ...] = ()
    deep_dive: CategoryDeepDive = Field(default_factory=CategoryDeepDive)
    search_results: Tuple[Transaction, ...] = ()
    category_options: Tuple[str, ...] = (ALL_CATEGORIES,)

    model_config = ConfigDict(frozen=True)
