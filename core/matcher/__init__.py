"""Matcher Module - single-user mentor match calculation."""
from core.matcher.models import (
    GoalContext, UserContext, MentorMatchResult, MentorSummary, StoredMatch
)
from core.matcher.service import MatchCalculator

__all__ = [
    'MatchCalculator',
    'GoalContext', 'UserContext', 'MentorMatchResult', 'MentorSummary', 'StoredMatch',
]
