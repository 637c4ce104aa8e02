from __future__ import annotations
import datetime as dt
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

UNKNOWN_MERCHANT = "Unknown"
UNCATEGORIZED = "Uncategorized"


class RawTransaction(BaseModel):
    """One transaction exactly as the analyzer service returns it."""
    date: str
    post_date: str | None = None
    merchant: str | None = None
    amount: Decimal
    category: str | None = None
    source_file: str | None = None
    statement_year: int | None = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    @field_validator("post_date", "merchant", "category", "source_file", mode="before")
    @classmethod
    def _strip_strings(cls, value: Any) -> str | None:
        if value is None:
            return None
        s = str(value).strip()
        return s or None

    @field_validator("statement_year", mode="before")
    @classmethod
    def _blank_year(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class StatementBatch(BaseModel):
    """Transactions of one statement file, in source order."""
    source_file: str
    transactions: list[RawTransaction] = Field(default_factory=list)
    statement_year: int | None = None

    @field_validator("transactions", mode="before")
    @classmethod
    def _ensure_list(cls, value):
        if value is None:
            return []
        return value


class Transaction(BaseModel):
    """A normalized, fully dated transaction held by the transaction store."""
    date: dt.date
    post_date: dt.date | None = None
    merchant: str = Field(min_length=1)
    amount: Decimal
    category: str = Field(min_length=1)
    source_file: str = ""

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("merchant", mode="before")
    @classmethod
    def _default_merchant(cls, value: Any) -> str:
        s = str(value).strip() if value is not None else ""
        return s or UNKNOWN_MERCHANT

    @field_validator("category", mode="before")
    @classmethod
    def _default_category(cls, value: Any) -> str:
        s = str(value).strip() if value is not None else ""
        return s or UNCATEGORIZED

    @property
    def month(self) -> str:
        """Calendar month bucket, ``YYYY-MM``."""
        return self.date.isoformat()[:7]

    @property
    def is_spend(self) -> bool:
        return self.amount > 0


class StatementFile(BaseModel):
    """An uploaded statement, kept byte-for-byte for analysis and export."""
    name: str
    content: bytes

    model_config = ConfigDict(frozen=True)

    @property
    def size(self) -> int:
        return len(self.content)


class SuspiciousFlag(BaseModel):
    """A transaction the analyzer service considers unusual."""
    date: str | None = None
    merchant: str | None = None
    amount: float | None = None
    category: str | None = None
    reason: str | None = None

    model_config = ConfigDict(extra="allow")


class AnalysisFlags(BaseModel):
    suspicious: list[SuspiciousFlag] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    @field_validator("suspicious", mode="before")
    @classmethod
    def _ensure_list(cls, value):
        if value is None:
            return []
        return value


class AnalysisSummary(BaseModel):
    """
    Payload of the analyzer service's ``/analyze`` endpoint.

    Server-side aggregates are displayed as-is; the dashboard's own views are
    recomputed from ``transactions``.
    """
    transactions: list[RawTransaction] = Field(default_factory=list)
    total_spent: float = 0.0
    category_spend: dict[str, float] = Field(default_factory=dict)
    avg_monthly_spend: float = 0.0
    discretionary_spent: float = 0.0
    card_spend: dict[str, float] = Field(default_factory=dict)
    category_summary_percent: dict[str, float] = Field(default_factory=dict)
    monthly_spending: dict[str, float] = Field(default_factory=dict)
    global_recommendations: list[str] = Field(default_factory=list)
    flags: AnalysisFlags = Field(default_factory=AnalysisFlags)

    model_config = ConfigDict(extra="ignore")

    @field_validator(
        "transactions",
        "global_recommendations",
        mode="before",
    )
    @classmethod
    def _none_to_list(cls, value):
        if value is None:
            return []
        return value

    @field_validator(
        "category_spend",
        "card_spend",
        "category_summary_percent",
        "monthly_spending",
        mode="before",
    )
    @classmethod
    def _none_to_dict(cls, value):
        if value is None:
            return {}
        return value

    @field_validator("total_spent", "avg_monthly_spend", "discretionary_spent", mode="before")
    @classmethod
    def _none_to_zero(cls, value):
        if value is None:
            return 0.0
        return value

    @field_validator("flags", mode="before")
    @classmethod
    def _none_to_flags(cls, value):
        if value is None:
            return {}
        return value
