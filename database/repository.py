from sqlalchemy.orm import Session

from database.repositories import UserRepository, MentorRepository, MatchRepository


class MatchingRepository:
    """Groups the repositories the matching engine needs around one Session."""

    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)
        self.mentors = MentorRepository(db)
        self.matches = MatchRepository(db)

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
