import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import joinedload

from database.models import MentorMatch
from database.models.base import generate_id, utcnow
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    'postgresql': postgresql.insert,
    'sqlite': sqlite.insert,
}


class MatchRepository(BaseRepository):
    def _insert(self):
        dialect = self.dialect_name
        try:
            return _UPSERT_DIALECTS[dialect]
        except KeyError:
            raise NotImplementedError(f"Match upsert is not supported on '{dialect}'") from None

    def upsert_match(
        self,
        user_id: str,
        mentor_id: str,
        match_factors: Dict[str, Any],
        compatibility_score: int,
        calculated_at: Optional[datetime] = None
    ) -> MentorMatch:
        """Insert or overwrite the match for (user_id, mentor_id).

        A single INSERT ... ON CONFLICT statement, so concurrent writers on
        the same pair never create a duplicate row; the last write wins.
        New rows start active; updates leave is_active untouched.
        """
        now = calculated_at or utcnow()
        insert = self._insert()

        stmt = insert(MentorMatch).values(
            id=generate_id(),
            user_id=user_id,
            mentor_id=mentor_id,
            compatibility_score=compatibility_score,
            match_factors=match_factors,
            is_active=True,
            last_calculated=now,
            created_at=now,
            updated_at=now
        ).on_conflict_do_update(
            index_elements=['user_id', 'mentor_id'],
            set_={
                'compatibility_score': compatibility_score,
                'match_factors': match_factors,
                'last_calculated': now,
                'updated_at': now
            }
        )
        self.db.execute(stmt)

        return self.db.execute(
            select(MentorMatch).where(
                MentorMatch.user_id == user_id,
                MentorMatch.mentor_id == mentor_id
            ).execution_options(populate_existing=True)
        ).scalar_one()

    def get_match(
        self,
        user_id: str,
        mentor_id: str,
        active_only: bool = True
    ) -> Optional[MentorMatch]:
        stmt = select(MentorMatch).options(joinedload(MentorMatch.mentor)).where(
            MentorMatch.user_id == user_id,
            MentorMatch.mentor_id == mentor_id
        )
        if active_only:
            stmt = stmt.where(MentorMatch.is_active.is_(True))
        return self._one_or_none(stmt)

    def get_top_matches(self, user_id: str, limit: int = 5) -> List[MentorMatch]:
        stmt = select(MentorMatch).options(joinedload(MentorMatch.mentor)).where(
            MentorMatch.user_id == user_id,
            MentorMatch.is_active.is_(True)
        ).order_by(
            MentorMatch.compatibility_score.desc(),
            MentorMatch.last_calculated.desc()
        ).limit(limit)
        return self._all(stmt)

    def deactivate_matches_for_mentor(self, mentor_id: str) -> int:
        """Hide every stored match for a mentor from ranking."""
        stmt = update(MentorMatch).where(
            MentorMatch.mentor_id == mentor_id,
            MentorMatch.is_active.is_(True)
        ).values(is_active=False, updated_at=utcnow())
        count = self.db.execute(stmt).rowcount or 0

        if count > 0:
            logger.info(f"Deactivated {count} matches for mentor {mentor_id}")

        return count
