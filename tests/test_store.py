"""Tests for building the transaction store."""
from datetime import date
from decimal import Decimal

import pytest

from analytics.store import TransactionStore, batches_from_records, month_sort_key
from core.errors import MalformedDate
from models.schema import RawTransaction, StatementBatch, UNCATEGORIZED, UNKNOWN_MERCHANT


def raw(day, merchant="Shop", amount=10, category="Misc", source_file=None, **extra):
    return RawTransaction(date=day, merchant=merchant, amount=amount, category=category,
                          source_file=source_file, **extra)


class TestBuild:
    """Tests for TransactionStore.build."""

    def test_preserves_arrival_order_across_batches(self, fixed_clock):
        batches = [
            StatementBatch(source_file="b.pdf", transactions=[raw("03/02", "B1"), raw("03/01", "B2")]),
            StatementBatch(source_file="a.pdf", transactions=[raw("01/15", "A1")]),
        ]
        store = TransactionStore.build(batches, clock=fixed_clock)

        assert [t.merchant for t in store] == ["B1", "B2", "A1"]
        assert [t.source_file for t in store] == ["b.pdf", "b.pdf", "a.pdf"]

    def test_does_not_deduplicate(self, fixed_clock):
        batch = StatementBatch(source_file="s.pdf", transactions=[raw("01/01")])
        store = TransactionStore.build([batch, batch], clock=fixed_clock)
        assert len(store) == 2

    def test_year_precedence(self, fixed_clock):
        batch = StatementBatch(
            source_file="s.pdf",
            statement_year=2023,
            transactions=[raw("12/30", statement_year=2022), raw("12/31")],
        )
        no_override = StatementBatch(source_file="t.pdf", transactions=[raw("01/01")])
        store = TransactionStore.build([batch, no_override], clock=fixed_clock)

        assert [t.date for t in store] == [date(2022, 12, 30), date(2023, 12, 31), date(2025, 1, 1)]

    def test_post_date_uses_same_year(self, fixed_clock):
        batch = StatementBatch(source_file="s.pdf", transactions=[raw("01/05", post_date="01/07")])
        store = TransactionStore.build([batch], clock=fixed_clock)
        assert store[0].post_date == date(2025, 1, 7)

    def test_missing_merchant_and_category_get_labels(self, fixed_clock):
        batch = StatementBatch(source_file="s.pdf", transactions=[raw("01/05", merchant="  ", category=None)])
        store = TransactionStore.build([batch], clock=fixed_clock)
        assert store[0].merchant == UNKNOWN_MERCHANT
        assert store[0].category == UNCATEGORIZED

    def test_record_source_file_kept(self, fixed_clock):
        batch = StatementBatch(source_file="batch.pdf", transactions=[raw("01/05", source_file="own.pdf")])
        store = TransactionStore.build([batch], clock=fixed_clock)
        assert store[0].source_file == "own.pdf"

    def test_amount_sign_is_untouched(self, fixed_clock):
        batch = StatementBatch(source_file="s.pdf", transactions=[raw("01/05", amount="-20.50")])
        store = TransactionStore.build([batch], clock=fixed_clock)
        assert store[0].amount == Decimal("-20.50")

    def test_fails_fast_with_location(self, fixed_clock):
        batches = [
            StatementBatch(source_file="good.pdf", transactions=[raw("01/01")]),
            StatementBatch(source_file="bad.pdf", transactions=[raw("01/02"), raw("2024-01-03")]),
        ]
        with pytest.raises(MalformedDate) as exc:
            TransactionStore.build(batches, clock=fixed_clock)

        assert exc.value.source_file == "bad.pdf"
        assert exc.value.index == 1
        assert "bad.pdf" in str(exc.value)
        assert "record 1" in str(exc.value)

    def test_malformed_post_date_fails_build(self, fixed_clock):
        batch = StatementBatch(source_file="s.pdf", transactions=[raw("01/05", post_date="soon")])
        with pytest.raises(MalformedDate):
            TransactionStore.build([batch], clock=fixed_clock)

    def test_empty_build(self, fixed_clock):
        store = TransactionStore.build([], clock=fixed_clock)
        assert len(store) == 0
        assert not store


class TestStoreQueries:
    """Tests for read-only store helpers."""

    def test_categories_in_encounter_order(self, mixed_store):
        assert mixed_store.categories() == ("Travel", "Food", "Groceries", "Shopping")

    def test_months_ascending(self, mixed_store):
        assert mixed_store.months() == ("2023-12", "2024-01", "2024-02")

    def test_source_files(self, mixed_store):
        assert mixed_store.source_files() == ("dec.pdf", "jan.pdf", "feb.pdf")

    def test_store_is_immutable(self, scenario_store):
        with pytest.raises(AttributeError):
            scenario_store.transactions.append(None)

    def test_transactions_are_frozen(self, scenario_store):
        with pytest.raises(Exception):
            scenario_store[0].amount = Decimal("1")

    def test_equality_by_content(self, scenario_store):
        assert TransactionStore(list(scenario_store)) == scenario_store

    def test_month_sort_key_is_chronological(self):
        assert sorted(["2024-10", "2024-9", "2023-12"], key=month_sort_key) == ["2023-12", "2024-9", "2024-10"]


class TestBatchesFromRecords:
    """Tests for splitting wire records into per-file batches."""

    def test_groups_consecutive_records(self):
        records = [raw("01/01", source_file="a.pdf"), raw("01/02", source_file="a.pdf"), raw("01/03", source_file="b.pdf")]
        batches = batches_from_records(records)

        assert [b.source_file for b in batches] == ["a.pdf", "b.pdf"]
        assert [len(b.transactions) for b in batches] == [2, 1]

    def test_interleaved_files_keep_order(self):
        records = [raw("01/01", source_file="a.pdf"), raw("01/02", source_file="b.pdf"), raw("01/03", source_file="a.pdf")]
        batches = batches_from_records(records)
        assert [b.source_file for b in batches] == ["a.pdf", "b.pdf", "a.pdf"]

    def test_year_overrides_per_file(self, fixed_clock):
        records = [raw("12/31", source_file="old.pdf"), raw("01/01", source_file="new.pdf")]
        batches = batches_from_records(records, {"old.pdf": 2023})
        store = TransactionStore.build(batches, clock=fixed_clock)
        assert [t.date.year for t in store] == [2023, 2025]

    def test_missing_source_file(self):
        batches = batches_from_records([raw("01/01")])
        assert batches[0].source_file == "unknown"
