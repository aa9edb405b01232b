"""Batch matching runner.

Recomputes mentor matches for many users. Each user is processed in
isolation: an exception for one user is logged and counted and never stops
the others.
"""

import time
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass
class BatchMatchingResult:
    """Result of running a batch matching pass."""
    total: int
    processed: int = 0
    failed: int = 0
    failed_user_ids: List[str] = field(default_factory=list)
    execution_time: float = 0.0

    @property
    def success(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> dict:
        return {
            'total': self.total,
            'processed': self.processed,
            'failed': self.failed,
            'failed_user_ids': list(self.failed_user_ids),
            'execution_time': self.execution_time,
        }


class _Tally:
    """Shared counters for the worker pool."""

    def __init__(self, total: int):
        self._lock = threading.Lock()
        self.result = BatchMatchingResult(total=total)

    def record_success(self):
        with self._lock:
            self.result.processed += 1

    def record_failure(self, user_id: str):
        with self._lock:
            self.result.failed += 1
            self.result.failed_user_ids.append(user_id)


def run_batch_matching(
    user_ids: Sequence[str],
    process_user: Callable[[str], Any],
    max_workers: int = 1,
    status_callback: Optional[Callable[[BatchMatchingResult], None]] = None
) -> BatchMatchingResult:
    """Run process_user for every user id.

    Args:
        user_ids: Users to recompute
        process_user: Recomputes one user; raising marks the user as failed
        max_workers: Size of the worker pool (1 = sequential, in order)
        status_callback: Optional hook called after each user with the
            running tally

    Returns:
        BatchMatchingResult with processed/failed counts
    """
    if max_workers < 1:
        raise ValueError(f"max_workers must be >= 1, got {max_workers}")

    start = time.time()
    tally = _Tally(len(user_ids))

    logger.info("=" * 60)
    logger.info(f"STARTING BATCH MATCHING: {len(user_ids)} users, {max_workers} worker(s)")
    logger.info("=" * 60)

    def _process(user_id: str):
        try:
            process_user(user_id)
        except Exception:
            logger.exception(f"Error processing matching for user {user_id}")
            tally.record_failure(user_id)
        else:
            tally.record_success()

        if status_callback:
            try:
                status_callback(tally.result)
            except Exception:
                logger.exception("Batch status callback failed")

    if max_workers == 1:
        for user_id in user_ids:
            _process(user_id)
    else:
        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="batch-matching") as executor:
            list(executor.map(_process, user_ids))

    result = tally.result
    result.execution_time = time.time() - start

    logger.info(
        f"Batch matching completed: total={result.total} processed={result.processed} "
        f"failed={result.failed} in {result.execution_time:.2f}s"
    )
    return result
