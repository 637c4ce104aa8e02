"""
Aggregation engine.

Pure functions from a ``TransactionStore`` (plus one or two filter values) to
the dashboard's derived views. None of them mutate their inputs and every
result is rebuilt from scratch, so calling a function twice with the same
arguments yields equal output in the same order.

Ranking and category statistics only count spend (amount > 0); credits and
refunds still show up in search results and in the monthly view.
"""
from __future__ import annotations
from decimal import Decimal
from typing import Dict, Iterable, List, Tuple

from models.schema import Transaction, UNKNOWN_MERCHANT
from models.views import (
    ALL_CATEGORIES,
    CategoryDeepDive,
    CategoryStats,
    MerchantTotal,
    MonthlyCategoryRow,
    TrendPoint,
)
from .store import TransactionStore, month_sort_key

DEFAULT_TOP_MERCHANTS = 15
DEFAULT_DEEP_DIVE_MERCHANTS = 10

ZERO = Decimal("0")


def monthly_by_category(
    store: TransactionStore,
    category_filter: str = ALL_CATEGORIES,
) -> Tuple[MonthlyCategoryRow, ...]:
    """
    Sum amounts per category for each calendar month.

    With ``category_filter="All"`` the row keys are the categories present in
    the data (first-encounter order); otherwise only the selected category.
    Rows are ordered chronologically.
    """
    buckets: Dict[str, Dict[str, Decimal]] = {}
    for t in _filter_category(store, category_filter):
        month_totals = buckets.setdefault(t.month, {})
        month_totals[t.category] = month_totals.get(t.category, ZERO) + t.amount

    return tuple(
        MonthlyCategoryRow(month=month, totals=buckets[month])
        for month in sorted(buckets, key=month_sort_key)
    )


def merchant_ranking(
    store: Iterable[Transaction],
    top_n: int = DEFAULT_TOP_MERCHANTS,
) -> Tuple[MerchantTotal, ...]:
    """
    Rank merchants by total spend, highest first.

    Equal totals keep the order in which merchants were first seen.
    """
    totals: Dict[str, Decimal] = {}
    counts: Dict[str, int] = {}
    for t in store:
        if not t.is_spend:
            continue
        merchant = t.merchant or UNKNOWN_MERCHANT
        totals[merchant] = totals.get(merchant, ZERO) + t.amount
        counts[merchant] = counts.get(merchant, 0) + 1

    # sorted() is stable, dict order is first encounter
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return tuple(
        MerchantTotal(merchant=merchant, total=total, count=counts[merchant])
        for merchant, total in ranked[: max(top_n, 0)]
    )


def category_monthly_trend(store: Iterable[Transaction], category: str) -> Tuple[TrendPoint, ...]:
    """Monthly spend of one category, oldest month first."""
    buckets: Dict[str, Decimal] = {}
    for t in _category_spend(store, category):
        buckets[t.month] = buckets.get(t.month, ZERO) + t.amount
    return tuple(
        TrendPoint(month=month, amount=buckets[month])
        for month in sorted(buckets, key=month_sort_key)
    )


def category_deep_dive(
    store: TransactionStore,
    category: str | None,
    top_n: int = DEFAULT_DEEP_DIVE_MERCHANTS,
) -> CategoryDeepDive:
    """
    Total, monthly average, count, trend and top merchants of one category.

    A category without spend (or no category at all) gives an empty deep
    dive rather than a zero division.
    """
    if not category:
        return CategoryDeepDive(category=category)

    spend = _category_spend(store, category)
    if not spend:
        return CategoryDeepDive(category=category)

    total = sum((t.amount for t in spend), ZERO)
    months = {t.month for t in spend}
    stats = CategoryStats(
        total=total,
        avg_monthly=total / len(months),
        transaction_count=len(spend),
    )
    return CategoryDeepDive(
        category=category,
        stats=stats,
        trend=category_monthly_trend(spend, category),
        merchants=merchant_ranking(spend, top_n=top_n),
    )


def search(store: TransactionStore, query: str | None) -> Tuple[Transaction, ...]:
    """
    Transactions whose merchant or category contains ``query``, ignoring case.

    A blank query returns every transaction, in store order.
    """
    if not query or not query.strip():
        return tuple(store)
    needle = query.casefold()
    return tuple(
        t for t in store
        if needle in t.merchant.casefold() or needle in t.category.casefold()
    )


def category_options(store: TransactionStore) -> Tuple[str, ...]:
    """Choices for the category filter: ``"All"`` followed by every category."""
    return (ALL_CATEGORIES, *store.categories())


def _filter_category(store: Iterable[Transaction], category_filter: str | None) -> List[Transaction]:
    if not category_filter or category_filter == ALL_CATEGORIES:
        return list(store)
    return [t for t in store if t.category == category_filter]


def _category_spend(store: Iterable[Transaction], category: str) -> List[Transaction]:
    return [t for t in store if t.category == category and t.is_spend]
