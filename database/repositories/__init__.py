from database.repositories.base import BaseRepository
from database.repositories.user import UserRepository
from database.repositories.mentor import MentorRepository
from database.repositories.match import MatchRepository

__all__ = [
    'BaseRepository',
    'UserRepository',
    'MentorRepository',
    'MatchRepository',
]
