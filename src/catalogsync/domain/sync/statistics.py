"""Run-scoped sync counters."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field

SUMMARY_TEMPLATE = (
    "Summary: {processed} {resources} were processed in total "
    "({created} created, {updated} updated and {failed} failed to sync)."
)


class StatisticsClosedError(RuntimeError):
    """Raised when counters are touched after the run finished."""


@dataclass(slots=True)
class SyncStatistics:
    """Counters for one run; only the orchestrator mutates them.

    Every mutation goes through one lock, so concurrent record tasks (and any helper
    threads an adapter uses) can share an instance. Once :meth:`finish` has been called
    the counters are frozen.
    """

    resource_name: str = "resources"
    _processed: int = 0
    _created: int = 0
    _updated: int = 0
    _failed: int = 0
    _started_at: float | None = None
    _finished_at: float | None = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def start(self) -> None:
        with self._lock:
            self._ensure_open()
            self._started_at = time.perf_counter()

    def finish(self) -> None:
        with self._lock:
            self._ensure_open()
            self._finished_at = time.perf_counter()

    def increment_processed(self, count: int = 1) -> None:
        with self._lock:
            self._ensure_open()
            self._processed += count

    def increment_created(self, count: int = 1) -> None:
        with self._lock:
            self._ensure_open()
            self._created += count

    def increment_updated(self, count: int = 1) -> None:
        with self._lock:
            self._ensure_open()
            self._updated += count

    def increment_failed(self, count: int = 1) -> None:
        with self._lock:
            self._ensure_open()
            self._failed += count

    @property
    def processed(self) -> int:
        return self._processed

    @property
    def created(self) -> int:
        return self._created

    @property
    def updated(self) -> int:
        return self._updated

    @property
    def failed(self) -> int:
        return self._failed

    @property
    def unchanged(self) -> int:
        """Processed records that were neither created, updated nor failed."""
        return self._processed - self._created - self._updated - self._failed

    @property
    def is_finished(self) -> bool:
        return self._finished_at is not None

    @property
    def elapsed_seconds(self) -> float:
        if self._started_at is None:
            return 0.0
        end = self._finished_at if self._finished_at is not None else time.perf_counter()
        return end - self._started_at

    @property
    def report_message(self) -> str:
        return SUMMARY_TEMPLATE.format(
            processed=self._processed,
            resources=self.resource_name,
            created=self._created,
            updated=self._updated,
            failed=self._failed,
        )

    def _ensure_open(self) -> None:
        if self._finished_at is not None:
            raise StatisticsClosedError("sync statistics are read-only once the run finished")


__all__ = ["SUMMARY_TEMPLATE", "StatisticsClosedError", "SyncStatistics"]
