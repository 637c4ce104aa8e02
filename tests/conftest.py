"""Shared fixtures for the analytics and service tests."""
from __future__ import annotations
from datetime import date
from decimal import Decimal

import pytest

from analytics.store import TransactionStore
from models.schema import Transaction


def make_txn(
    day: str,
    merchant: str,
    amount,
    category: str,
    source_file: str = "statement.pdf",
    post_date: str | None = None,
) -> Transaction:
    return Transaction(
        date=date.fromisoformat(day),
        post_date=date.fromisoformat(post_date) if post_date else None,
        merchant=merchant,
        amount=Decimal(str(amount)),
        category=category,
        source_file=source_file,
    )


@pytest.fixture
def scenario_store() -> TransactionStore:
    return TransactionStore([
        make_txn("2024-01-05", "Acme", 50, "Food"),
        make_txn("2024-01-20", "Acme", 30, "Food"),
        make_txn("2024-02-01", "Zed", 100, "Travel"),
    ])


@pytest.fixture
def mixed_store() -> TransactionStore:
    """Several months and categories, including refunds and a year boundary."""
    return TransactionStore([
        make_txn("2023-12-28", "Airline", 420.10, "Travel", "dec.pdf"),
        make_txn("2023-12-30", "Corner Cafe", 4.75, "Food", "dec.pdf"),
        make_txn("2024-01-02", "Corner Cafe", 5.25, "Food", "jan.pdf"),
        make_txn("2024-01-03", "Grocer", 88.40, "Groceries", "jan.pdf"),
        make_txn("2024-01-09", "Airline", -120.00, "Travel", "jan.pdf"),
        make_txn("2024-01-15", "Bookshop", 23.99, "Shopping", "jan.pdf"),
        make_txn("2024-02-01", "Grocer", 61.10, "Groceries", "feb.pdf"),
        make_txn("2024-02-14", "Corner Cafe", 4.75, "Food", "feb.pdf"),
        make_txn("2024-02-20", "Hotel", 310.00, "Travel", "feb.pdf"),
    ])


@pytest.fixture
def fixed_clock():
    return lambda: date(2025, 6, 30)
