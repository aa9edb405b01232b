#!/usr/bin/env python3
"""
Matcher Models - Data structures for matching.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Dict, Any, Optional

from core.scorer.models import MatchFactors


@dataclass
class GoalContext:
    """The part of a career goal the matcher looks at."""
    title: str
    related_skills: List[str] = field(default_factory=list)


@dataclass
class UserContext:
    """Everything about a user needed to score mentors, read once per run."""
    user_id: str
    career_field_id: Optional[str] = None
    career_stage: str = 'student'
    skills: List[Dict[str, Any]] = field(default_factory=list)
    career_goals: List[GoalContext] = field(default_factory=list)
    learning_style_results: Optional[Dict[str, float]] = None

    @classmethod
    def from_records(cls, user, profile, assessment=None, goals=None) -> "UserContext":
        return cls(
            user_id=user.id,
            career_field_id=user.career_field_id,
            career_stage=user.career_stage,
            skills=list(profile.skills or []),
            career_goals=[
                GoalContext(title=goal.title, related_skills=list(goal.related_skills or []))
                for goal in goals or []
            ],
            learning_style_results=assessment.learning_style_results if assessment is not None else None,
        )


@dataclass
class MentorMatchResult:
    """Ranked, caller-visible result for one mentor."""
    mentor_id: str
    mentor_name: str
    compatibility_score: int
    match_factors: MatchFactors

    def to_dict(self) -> Dict[str, Any]:
        return {
            'mentor_id': self.mentor_id,
            'mentor_name': self.mentor_name,
            'compatibility_score': self.compatibility_score,
            'match_factors': self.match_factors.to_dict(),
        }


@dataclass
class MentorSummary:
    """Mentor display fields attached to persisted matches."""
    mentor_id: str
    name: str
    specialization: str
    bio: str
    profile_image: Optional[str]
    experience_level: str
    skills: List[str]
    rating: Optional[float]

    @classmethod
    def from_orm(cls, mentor) -> "MentorSummary":
        return cls(
            mentor_id=mentor.id,
            name=mentor.name,
            specialization=mentor.specialization,
            bio=mentor.bio,
            profile_image=mentor.profile_image,
            experience_level=mentor.experience_level,
            skills=list(mentor.skills or []),
            rating=float(mentor.rating) if mentor.rating is not None else None,
        )


@dataclass
class StoredMatch:
    """A persisted MentorMatch detached from its session."""
    match_id: str
    user_id: str
    mentor_id: str
    compatibility_score: int
    match_factors: MatchFactors
    is_active: bool
    last_calculated: Optional[datetime]
    mentor: Optional[MentorSummary] = None

    @classmethod
    def from_orm(cls, match) -> "StoredMatch":
        return cls(
            match_id=match.id,
            user_id=match.user_id,
            mentor_id=match.mentor_id,
            compatibility_score=match.compatibility_score,
            match_factors=MatchFactors.from_dict(match.match_factors or {}),
            is_active=match.is_active,
            last_calculated=match.last_calculated,
            mentor=MentorSummary.from_orm(match.mentor) if match.mentor is not None else None,
        )
