"""Error taxonomy shared by the store builder, the analyzer client and the UI."""
from __future__ import annotations
from typing import Optional


NETWORK_FAILURE_MESSAGE = "Server error. Please try again later."


class FinanceDashboardError(Exception):
    """Base class for errors surfaced to the dashboard user."""


class MalformedDate(FinanceDashboardError, ValueError):
    """
    A transaction date could not be resolved to a calendar date.

    Raised by the date normalizer and re-raised by the store builder with the
    offending record's position and source file attached.
    """

    def __init__(
        self,
        raw: object,
        reason: str = "expected MM/DD",
        *,
        source_file: Optional[str] = None,
        index: Optional[int] = None,
    ) -> None:
        self.raw = raw
        self.reason = reason
        self.source_file = source_file
        self.index = index
        super().__init__(self._message())

    def _message(self) -> str:
        msg = f"Malformed transaction date {self.raw!r} ({self.reason})"
        if self.source_file is not None or self.index is not None:
            where = []
            if self.index is not None:
                where.append(f"record {self.index}")
            if self.source_file is not None:
                where.append(f"file '{self.source_file}'")
            msg = f"{msg} at {' in '.join(where)}"
        return msg

    def locate(self, *, source_file: Optional[str], index: int) -> "MalformedDate":
        """Return a copy of this error pointing at a specific record."""
        return MalformedDate(self.raw, self.reason, source_file=source_file, index=index)


class UpstreamError(FinanceDashboardError):
    """The analyzer service answered with an error message."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        self.message = message
        self.status = status
        super().__init__(message)


class NetworkFailure(FinanceDashboardError):
    """The analyzer service could not be reached."""

    def __init__(self, message: str = NETWORK_FAILURE_MESSAGE) -> None:
        self.message = message
        super().__init__(message)
