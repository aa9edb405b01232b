import logging
from typing import List, Optional, Sequence

from sqlalchemy import select

from database.models import User, UserProfile, LearningAssessment, CareerGoal
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository):
    def get_user(self, user_id: str) -> Optional[User]:
        stmt = select(User).where(User.id == user_id)
        return self._one_or_none(stmt)

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        stmt = select(UserProfile).where(UserProfile.user_id == user_id)
        return self._one_or_none(stmt)

    def get_active_assessment(self, user_id: str) -> Optional[LearningAssessment]:
        """Most recent active learning assessment, by creation time."""
        stmt = select(LearningAssessment).where(
            LearningAssessment.user_id == user_id,
            LearningAssessment.is_active.is_(True)
        ).order_by(LearningAssessment.created_at.desc()).limit(1)
        return self.db.execute(stmt).scalars().first()

    def get_career_goals(self, user_id: str) -> List[CareerGoal]:
        """Every goal the user has set, inactive ones included, oldest first."""
        stmt = select(CareerGoal).where(
            CareerGoal.user_id == user_id
        ).order_by(CareerGoal.created_at)
        return self._all(stmt)

    def list_user_ids(self, user_ids: Optional[Sequence[str]] = None) -> List[str]:
        """Ids of the users to process.

        With no ids (None or empty) every user is returned; otherwise the
        given ids are filtered down to users that exist.
        """
        stmt = select(User.id)
        if user_ids:
            stmt = stmt.where(User.id.in_(list(user_ids)))
        stmt = stmt.order_by(User.created_at, User.id)
        ids = self._all(stmt)

        if user_ids and len(ids) != len(set(user_ids)):
            logger.warning(f"Requested {len(set(user_ids))} users, found {len(ids)}")

        return ids
