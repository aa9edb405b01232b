from typing import List

from sqlalchemy import select

from database.models import Mentor
from database.repositories.base import BaseRepository


class MentorRepository(BaseRepository):
    def get_active_mentors(self) -> List[Mentor]:
        stmt = select(Mentor).where(Mentor.is_active.is_(True)).order_by(Mentor.created_at, Mentor.id)
        return self._all(stmt)
