#!/usr/bin/env python3
"""
Match Calculator - scores one user against every active mentor.

For each active mentor:
1. Compute the five factor scores
2. Aggregate them into the compatibility score
3. Upsert the MentorMatch record

Missing user or profile aborts the run; a missing learning assessment or
missing goals only push the affected factors to the neutral score.
"""
from typing import List, Optional
import logging

from database.repository import MatchingRepository
from core.config_loader import MatchWeights
from core.exceptions import UserNotFoundError, ProfileNotFoundError
from core.matcher.models import UserContext, MentorMatchResult
from core.scorer import score_factors, aggregate, DEFAULT_WEIGHTS

logger = logging.getLogger(__name__)


class MatchCalculator:
    """
    Single-user match calculation.

    Reads through the repository it is given and writes MentorMatch rows
    into the same session; committing is left to the caller's unit of work.
    """

    def __init__(
        self,
        repo: MatchingRepository,
        weights: Optional[MatchWeights] = None
    ):
        self.repo = repo
        self.weights = weights or DEFAULT_WEIGHTS

    def load_user_context(self, user_id: str) -> UserContext:
        """
        Assemble the UserContext for a user.

        Raises:
            UserNotFoundError: If the user does not exist.
            ProfileNotFoundError: If the user has no profile.
        """
        user = self.repo.users.get_user(user_id)
        if not user:
            raise UserNotFoundError(user_id)

        profile = self.repo.users.get_profile(user_id)
        if not profile:
            raise ProfileNotFoundError(user_id)

        assessment = self.repo.users.get_active_assessment(user_id)
        goals = self.repo.users.get_career_goals(user_id)

        return UserContext.from_records(user, profile, assessment, goals)

    def calculate_for_user(self, user_id: str) -> List[MentorMatchResult]:
        """
        Score the user against all active mentors and persist the results.

        Returns:
            Results sorted by compatibility score, highest first.
        """
        context = self.load_user_context(user_id)
        mentors = self.repo.mentors.get_active_mentors()

        results: List[MentorMatchResult] = []
        for mentor in mentors:
            factors = score_factors(context, mentor)
            score = aggregate(factors, self.weights)

            self.repo.matches.upsert_match(
                user_id=context.user_id,
                mentor_id=mentor.id,
                match_factors=factors.to_dict(),
                compatibility_score=score
            )

            logger.debug(f"User {user_id} vs mentor {mentor.id}: {score} {factors.to_dict()}")

            results.append(MentorMatchResult(
                mentor_id=mentor.id,
                mentor_name=mentor.name,
                compatibility_score=score,
                match_factors=factors
            ))

        results.sort(key=lambda r: r.compatibility_score, reverse=True)

        logger.info(f"Calculated {len(results)} mentor matches for user {user_id}")
        return results
