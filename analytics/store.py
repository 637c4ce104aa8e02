"""Immutable, order-preserving collection of normalized transactions."""
from __future__ import annotations
from datetime import datetime
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from core.errors import MalformedDate
from core.logger import get_logger
from models.schema import RawTransaction, StatementBatch, Transaction
from .dates import Clock, normalize, resolve_year, system_clock

log = get_logger("analytics/store")

UNNAMED_SOURCE = "unknown"


def month_sort_key(month: str) -> datetime:
    """
    Chronological key for a ``YYYY-MM`` bucket.

    Months are compared as calendar dates anchored on the first day, not as
    strings.
    """
    return datetime.strptime(f"{month}-01", "%Y-%m-%d")


class TransactionStore:
    """
    The single source of truth for one analysis session.

    Holds transactions in arrival order (statements in upload order, rows in
    source order). Never mutated after construction; a changed session builds
    a new store.
    """

    __slots__ = ("_transactions",)

    def __init__(self, transactions: Iterable[Transaction] = ()) -> None:
        self._transactions: Tuple[Transaction, ...] = tuple(transactions)

    @classmethod
    def build(
        cls,
        batches: Iterable[StatementBatch],
        clock: Clock = system_clock,
    ) -> "TransactionStore":
        """
        Normalize every record of every batch into a new store.

        Repeated or overlapping statements produce repeated transactions.

        Raises:
            MalformedDate: for the first record whose date (or post date)
                cannot be normalized, with its index and source file attached.
                No partial store is returned.
        """
        transactions: List[Transaction] = []
        batch_count = 0
        for batch in batches:
            batch_count += 1
            for index, raw in enumerate(batch.transactions):
                try:
                    transactions.append(_normalize_record(raw, batch, clock))
                except MalformedDate as e:
                    located = e.locate(source_file=batch.source_file, index=index)
                    log.error(f"Store build aborted: {located}")
                    raise located from e

        log.info(f"Built transaction store: batches={batch_count} transactions={len(transactions)}")
        return cls(transactions)

    @property
    def transactions(self) -> Tuple[Transaction, ...]:
        return self._transactions

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self._transactions)

    def __len__(self) -> int:
        return len(self._transactions)

    def __bool__(self) -> bool:
        return bool(self._transactions)

    def __getitem__(self, index: int) -> Transaction:
        return self._transactions[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransactionStore):
            return NotImplemented
        return self._transactions == other._transactions

    def __hash__(self) -> int:
        return hash(self._transactions)

    def __repr__(self) -> str:
        return f"TransactionStore(transactions={len(self._transactions)})"

    def categories(self) -> Tuple[str, ...]:
        """Distinct categories in first-encounter order."""
        return tuple(dict.fromkeys(t.category for t in self._transactions))

    def months(self) -> Tuple[str, ...]:
        """Distinct ``YYYY-MM`` buckets, oldest first."""
        return tuple(sorted({t.month for t in self._transactions}, key=month_sort_key))

    def source_files(self) -> Tuple[str, ...]:
        return tuple(dict.fromkeys(t.source_file for t in self._transactions))


def _normalize_record(raw: RawTransaction, batch: StatementBatch, clock: Clock) -> Transaction:
    year = resolve_year(raw.statement_year, batch.statement_year, clock)
    post_date = normalize(raw.post_date, year) if raw.post_date else None
    return Transaction(
        date=normalize(raw.date, year),
        post_date=post_date,
        merchant=raw.merchant,
        amount=raw.amount,
        category=raw.category,
        source_file=raw.source_file or batch.source_file,
    )


def batches_from_records(
    records: Sequence[RawTransaction],
    statement_years: Optional[Mapping[str, int]] = None,
) -> List[StatementBatch]:
    """
    Split a flat list of wire records into consecutive per-file batches.

    Order is preserved exactly; a file whose rows are interleaved with another
    file's yields several batches. ``statement_years`` overrides the default
    year per source file.
    """
    years: Dict[str, int] = dict(statement_years or {})
    batches: List[StatementBatch] = []
    current: Optional[StatementBatch] = None

    for record in records:
        source = record.source_file or UNNAMED_SOURCE
        if current is None or current.source_file != source:
            current = StatementBatch(source_file=source, statement_year=years.get(source))
            batches.append(current)
        current.transactions.append(record)

    return batches
