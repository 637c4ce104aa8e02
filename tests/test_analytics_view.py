"""Tests for the frames behind the analytics charts."""
from analytics import engine
from analytics.store import TransactionStore
from ui.components.analytics_view import monthly_frame

from conftest import make_txn


class TestMonthlyFrame:
    """Tests for monthly_frame."""

    def test_months_index_categories_columns(self, scenario_store):
        df = monthly_frame(engine.monthly_by_category(scenario_store))

        assert list(df.index) == ["2024-01", "2024-02"]
        assert list(df.columns) == ["Food", "Travel"]
        assert df.loc["2024-01", "Food"] == 80.0
        assert df.loc["2024-01", "Travel"] == 0.0

    def test_category_named_month_keeps_its_totals(self):
        store = TransactionStore([
            make_txn("2024-01-05", "A", 5, "month"),
            make_txn("2024-01-06", "B", 7, "Food"),
        ])
        df = monthly_frame(engine.monthly_by_category(store))

        assert list(df.index) == ["2024-01"]
        assert df.index.name == "month"
        assert df.loc["2024-01", "month"] == 5.0
        assert df.loc["2024-01", "Food"] == 7.0

    def test_empty(self):
        assert monthly_frame(()).empty
