"""
Batch job tracking - runs batch matching in the background and keeps its
status and result available for polling.
"""

import uuid
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from threading import Event, Lock
from typing import Any, Callable, Dict, List, Optional, Sequence

from pipeline.batch import run_batch_matching, BatchMatchingResult

logger = logging.getLogger(__name__)

PENDING = "pending"
RUNNING = "running"
COMPLETED = "completed"
FAILED = "failed"

FINISHED_STATUSES = (COMPLETED, FAILED)


@dataclass
class BatchJob:
    """Represents one batch matching run."""
    job_id: str
    user_ids: List[str]
    status: str = PENDING  # "pending", "running", "completed", "failed"
    result: Optional[BatchMatchingResult] = None
    progress: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.now)
    finished_at: Optional[datetime] = None
    done_event: Event = field(default_factory=Event, repr=False)

    @property
    def total_users(self) -> int:
        return len(self.user_ids)

    @property
    def is_finished(self) -> bool:
        return self.status in FINISHED_STATUSES


class BatchJobManager:
    """Starts batch matching jobs on background threads and tracks them."""

    def __init__(self, max_workers: int = 1, keep_completed_jobs: int = 20):
        self.max_workers = max_workers
        self.keep_completed_jobs = keep_completed_jobs
        self._jobs: Dict[str, BatchJob] = {}
        self._lock = Lock()

    def start(
        self,
        user_ids: Sequence[str],
        process_user: Callable[[str], Any],
        on_complete: Optional[Callable[[BatchJob], None]] = None
    ) -> BatchJob:
        """
        Create a job and start processing it in the background.

        Returns immediately; poll get_job() or pass on_complete to observe
        the outcome.
        """
        job = BatchJob(job_id=str(uuid.uuid4()), user_ids=list(user_ids))

        with self._lock:
            self._jobs[job.job_id] = job

        thread = threading.Thread(
            target=self._run_background,
            args=(job, process_user, on_complete),
            name=f"batch-job-{job.job_id[:8]}",
            daemon=True
        )
        thread.start()

        logger.info(f"Batch job {job.job_id} started for {job.total_users} users")
        return job

    def get_job(self, job_id: str) -> Optional[BatchJob]:
        with self._lock:
            return self._jobs.get(job_id)

    def list_jobs(self) -> List[BatchJob]:
        with self._lock:
            return sorted(self._jobs.values(), key=lambda j: j.created_at, reverse=True)

    def wait(self, job_id: str, timeout: Optional[float] = None) -> Optional[BatchJob]:
        """Block until the job finishes (or timeout). Returns the job."""
        job = self.get_job(job_id)
        if job is None:
            return None
        job.done_event.wait(timeout)
        return job

    def update_job_status(self, job: BatchJob, status: str, **kwargs):
        with self._lock:
            job.status = status
            for key, value in kwargs.items():
                setattr(job, key, value)

            if status in FINISHED_STATUSES:
                job.finished_at = datetime.now()
                self._cleanup_completed_jobs()

    def _cleanup_completed_jobs(self):
        """Drop the oldest finished jobs beyond keep_completed_jobs. Caller holds the lock."""
        finished = [j for j in self._jobs.values() if j.is_finished]
        if len(finished) <= self.keep_completed_jobs:
            return

        finished.sort(key=lambda j: j.created_at, reverse=True)
        for job in finished[self.keep_completed_jobs:]:
            del self._jobs[job.job_id]
            logger.debug(f"Cleaned up finished batch job {job.job_id}")

    def _run_background(
        self,
        job: BatchJob,
        process_user: Callable[[str], Any],
        on_complete: Optional[Callable[[BatchJob], None]]
    ):
        try:
            self.update_job_status(job, RUNNING)

            def status_callback(tally: BatchMatchingResult):
                job.progress = {'processed': tally.processed, 'failed': tally.failed}

            result = run_batch_matching(
                job.user_ids,
                process_user,
                max_workers=self.max_workers,
                status_callback=status_callback
            )
            self.update_job_status(job, COMPLETED, result=result)

        except Exception as e:
            logger.exception(f"Error in background batch job {job.job_id}")
            self.update_job_status(job, FAILED, error=str(e))

        try:
            if on_complete:
                on_complete(job)
        except Exception:
            logger.exception(f"Completion callback failed for batch job {job.job_id}")
        finally:
            job.done_event.set()
