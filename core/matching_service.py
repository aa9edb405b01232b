#!/usr/bin/env python3
"""
Matching Service - the operations the engine exposes to its callers.

- calculate_matching: score one user against all active mentors (sync)
- get_top_matches: read persisted matches, best first (read-only)
- get_mentor_match: read one persisted match
- run_batch_matching: recompute many users in the background
- get_batch_job: poll a batch job
- list_batch_jobs: batch jobs still retained

Each call runs in its own unit of work; batch runs use one unit of work
per user so a failing user never rolls back another user's matches.
"""

import logging
from typing import Callable, List, Optional, Sequence

from sqlalchemy.orm import Session

from core.config_loader import MatchingConfig
from core.exceptions import MatchNotFoundError
from core.matcher import MatchCalculator, MentorMatchResult, StoredMatch
from database.uow import matching_uow
from pipeline.jobs import BatchJob, BatchJobManager

logger = logging.getLogger(__name__)


class MatchingService:
    """Entry point for mentor matching."""

    def __init__(
        self,
        config: Optional[MatchingConfig] = None,
        session_factory: Optional[Callable[[], Session]] = None,
        job_manager: Optional[BatchJobManager] = None
    ):
        self.config = config or MatchingConfig()
        self.session_factory = session_factory
        self.job_manager = job_manager or BatchJobManager(
            max_workers=self.config.batch.max_workers,
            keep_completed_jobs=self.config.batch.keep_completed_jobs
        )

    def _uow(self):
        return matching_uow(self.session_factory)

    def calculate_matching(self, user_id: str) -> List[MentorMatchResult]:
        """
        Recalculate and persist matches for a user.

        Raises:
            UserNotFoundError: If the user does not exist.
            ProfileNotFoundError: If the user has no profile.
        """
        with self._uow() as repo:
            calculator = MatchCalculator(repo, self.config.weights)
            return calculator.calculate_for_user(user_id)

    def get_top_matches(self, user_id: str, limit: Optional[int] = None) -> List[StoredMatch]:
        """Active persisted matches for a user, highest score first."""
        if limit is None:
            limit = self.config.default_top_limit
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")

        with self._uow() as repo:
            matches = repo.matches.get_top_matches(user_id, limit)
            return [StoredMatch.from_orm(m) for m in matches]

    def get_mentor_match(self, user_id: str, mentor_id: str) -> StoredMatch:
        """
        Active persisted match between a user and one mentor.

        Raises:
            MatchNotFoundError: If no active match exists.
        """
        with self._uow() as repo:
            match = repo.matches.get_match(user_id, mentor_id)
            if not match:
                raise MatchNotFoundError(f"Match not found for user {user_id} and mentor {mentor_id}")
            return StoredMatch.from_orm(match)

    def run_batch_matching(
        self,
        user_ids: Optional[Sequence[str]] = None,
        on_complete: Optional[Callable[[BatchJob], None]] = None
    ) -> BatchJob:
        """
        Start recomputing matches for the given users, or all users when
        user_ids is empty or None.

        Users are enumerated before returning, so a failure to list them
        raises here; per-user failures only show up in the job result.
        """
        with self._uow() as repo:
            ids = repo.users.list_user_ids(user_ids)

        return self.job_manager.start(ids, self._process_user, on_complete=on_complete)

    def get_batch_job(self, job_id: str) -> Optional[BatchJob]:
        return self.job_manager.get_job(job_id)

    def list_batch_jobs(self) -> List[BatchJob]:
        """Retained batch jobs, newest first."""
        return self.job_manager.list_jobs()

    def _process_user(self, user_id: str) -> None:
        with self._uow() as repo:
            MatchCalculator(repo, self.config.weights).calculate_for_user(user_id)
