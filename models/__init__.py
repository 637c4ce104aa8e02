"""Domain models: wire records, transactions and derived views."""
from .schema import (
    AnalysisSummary,
    RawTransaction,
    StatementBatch,
    StatementFile,
    SuspiciousFlag,
    Transaction,
    UNCATEGORIZED,
    UNKNOWN_MERCHANT,
)
from .views import (
    ALL_CATEGORIES,
    CategoryDeepDive,
    CategoryStats,
    DashboardViews,
    FilterState,
    MerchantTotal,
    MonthlyCategoryRow,
    TrendPoint,
)

__all__ = [
    "AnalysisSummary",
    "RawTransaction",
    "StatementBatch",
    "StatementFile",
    "SuspiciousFlag",
    "Transaction",
    "UNCATEGORIZED",
    "UNKNOWN_MERCHANT",
    "ALL_CATEGORIES",
    "CategoryDeepDive",
    "CategoryStats",
    "DashboardViews",
    "FilterState",
    "MerchantTotal",
    "MonthlyCategoryRow",
    "TrendPoint",
]
