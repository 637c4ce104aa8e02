"""Analysis business logic: fetch from the analyzer, build the store."""
from __future__ import annotations
import threading
from concurrent.futures import CancelledError, Executor, Future, ThreadPoolExecutor
from typing import Callable, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from analytics.dates import Clock, system_clock
from analytics.store import TransactionStore, batches_from_records
from api.client import AnalyzerClient, analyzer
from core.logger import get_logger
from models.schema import AnalysisSummary, StatementFile

log = get_logger("ui/services/analysis_service")

# Shared by every session's runner for the life of the process.
_EXECUTOR = ThreadPoolExecutor(max_workers=4, thread_name_prefix="analysis")


class AnalysisResult(BaseModel):
    """Everything one successful analysis produced."""
    store: TransactionStore
    summary: AnalysisSummary
    files: Tuple[StatementFile, ...]

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)


class AnalysisService:
    """Handles the analyze-then-build flow."""

    @staticmethod
    def run(
        files: Sequence[StatementFile],
        client: Optional[AnalyzerClient] = None,
        clock: Clock = system_clock,
        statement_years: Optional[Mapping[str, int]] = None,
    ) -> AnalysisResult:
        """
        Analyze ``files`` and build a fresh transaction store.

        Raises:
            UpstreamError, NetworkFailure: from the analyzer client
            MalformedDate: a returned transaction date could not be
                normalized; the whole analysis is abandoned
        """
        client = client or analyzer()
        summary = client.analyze(files)
        batches = batches_from_records(summary.transactions, statement_years)
        store = TransactionStore.build(batches, clock=clock)
        return AnalysisResult(store=store, summary=summary, files=tuple(files))


class AnalysisRunner:
    """
    Runs at most one analysis per session.

    Starting a new analysis supersedes the pending one: it is cancelled if it
    has not started yet, and its result is discarded if it has. ``wait`` only
    ever returns the outcome of the most recently started analysis.
    """

    def __init__(
        self,
        analyze: Callable[..., AnalysisResult] = AnalysisService.run,
        executor: Optional[Executor] = None,
    ) -> None:
        self._analyze = analyze
        self._executor = executor or _EXECUTOR
        self._lock = threading.Lock()
        self._generation = 0
        self._future: Optional[Future] = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._future is not None and not self._future.done()

    def start(
        self,
        files: Sequence[StatementFile],
        statement_years: Optional[Mapping[str, int]] = None,
    ) -> int:
        """
        Submit a new analysis and return its generation number.

        ``statement_years`` maps a file name to the year its dates belong to
        and is only forwarded when non-empty.
        """
        files = tuple(files)
        kwargs = {"statement_years": dict(statement_years)} if statement_years else {}
        with self._lock:
            self._supersede()
            self._generation += 1
            self._future = self._executor.submit(self._analyze, files, **kwargs)
            generation = self._generation
        log.info(f"Started analysis #{generation} for {len(files)} file(s)")
        return generation

    def cancel(self) -> None:
        """Abandon the pending analysis, if any."""
        with self._lock:
            self._supersede()
            self._generation += 1
            self._future = None

    def wait(self, timeout: Optional[float] = None) -> Optional[AnalysisResult]:
        """
        Block until the latest analysis finishes.

        Returns None when nothing is pending or the analysis was cancelled.
        Errors of the latest analysis are re-raised; errors of superseded ones
        are dropped.
        """
        while True:
            with self._lock:
                future, generation = self._future, self._generation
            if future is None:
                return None

            try:
                result = future.result(timeout=timeout)
            except CancelledError:
                if self._is_current(generation):
                    return None
                continue
            except Exception:
                if self._is_current(generation):
                    raise
                log.info(f"Dropped error of superseded analysis #{generation}")
                continue

            if self._is_current(generation):
                return result
            log.info(f"Discarded result of superseded analysis #{generation}")

    def _is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation

    def _supersede(self) -> None:
        if self._future is not None and not self._future.done():
            cancelled = self._future.cancel()
            log.info(
                f"Superseding analysis #{self._generation} "
                f"({'cancelled' if cancelled else 'result will be discarded'})"
            )
