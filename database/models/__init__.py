from .base import Base
from .career import CareerField, CareerGoal
from .user import User, UserProfile
from .assessment import LearningAssessment
from .mentor import Mentor
from .match import MentorMatch

__all__ = [
    'Base',
    'CareerField',
    'CareerGoal',
    'User',
    'UserProfile',
    'LearningAssessment',
    'Mentor',
    'MentorMatch',
]
