#!/usr/bin/env python3
"""
Factor Scorers - the five independent compatibility signals.

Every scorer is a pure function returning a score in [0, 100]. When the
input a scorer needs is missing it returns NEUTRAL_SCORE (50), so an
incomplete profile neither sinks nor boosts a mentor.

Inputs are duck-typed: ORM rows and plain dataclasses both work, as long
as they expose the attributes read below.
"""

from typing import Any, Iterable, Mapping, Optional, Set
import logging

from core.scorer.models import LEARNING_STYLES, NEUTRAL_SCORE, round_score

logger = logging.getLogger(__name__)

CAREER_STAGE_LEVELS = {
    'student': 1,
    'early_career': 2,
    'mid_career': 3,
    'senior': 4,
}

MENTOR_EXPERIENCE_LEVELS = {
    'beginner': 1,
    'intermediate': 2,
    'advanced': 3,
    'expert': 4,
}

DEFAULT_USER_LEVEL = 1
DEFAULT_MENTOR_LEVEL = 4

DEFAULT_STYLE_AFFINITY = 5

CAREER_FIELD_EXACT = 100
CAREER_FIELD_MISMATCH = 30

EXPERIENCE_IDEAL = 100
EXPERIENCE_SAME_LEVEL = 70
EXPERIENCE_TOO_ADVANCED = 50
EXPERIENCE_LESS_EXPERIENCED = 30


def _normalize(skills: Optional[Iterable[Any]]) -> Set[str]:
    """Lowercase skill names; accepts strings or {"name": ...} dicts."""
    names = set()
    for skill in skills or []:
        name = skill.get('name') if isinstance(skill, Mapping) else skill
        if name:
            names.add(str(name).strip().lower())
    return names


def _coverage_score(wanted: Set[str], offered: Set[str]) -> int:
    if not wanted:
        return 0
    covered = len(wanted & offered)
    return round_score(covered / len(wanted) * 100)


def career_field_match(user: Any, mentor: Any) -> int:
    user_field = getattr(user, 'career_field_id', None)
    mentor_fields = getattr(mentor, 'career_field_ids', None)

    if not user_field or not mentor_fields:
        return NEUTRAL_SCORE

    mentor_field_set = {str(field) for field in mentor_fields}
    if str(user_field) in mentor_field_set:
        return CAREER_FIELD_EXACT
    return CAREER_FIELD_MISMATCH


def experience_level_match(user: Any, mentor: Any) -> int:
    """
    Reward mentors one or two levels above the user.

    Equal level scores 70, far senior mentors 50 and mentors below the
    user 30; the curve is intentionally not monotonic.
    """
    user_level = CAREER_STAGE_LEVELS.get(getattr(user, 'career_stage', None), DEFAULT_USER_LEVEL)
    mentor_level = MENTOR_EXPERIENCE_LEVELS.get(getattr(mentor, 'experience_level', None), DEFAULT_MENTOR_LEVEL)

    diff = mentor_level - user_level

    if diff in (1, 2):
        return EXPERIENCE_IDEAL
    if diff == 0:
        return EXPERIENCE_SAME_LEVEL
    if diff > 2:
        return EXPERIENCE_TOO_ADVANCED
    return EXPERIENCE_LESS_EXPERIENCED


def learning_style_match(
    learning_style_results: Optional[Mapping[str, float]],
    mentor: Any
) -> float:
    """
    Mentor style affinity weighted by how strongly the user shows each style.

    Args:
        learning_style_results: style -> score in [0, 100] from the user's
            active assessment, or None when the user has none
        mentor: object exposing learning_style_compatibility (style -> 1..10)

    Returns:
        Score in [0, 100]; 50 without assessment or compatibility map,
        0 when every user style score is 0.
    """
    compatibility = getattr(mentor, 'learning_style_compatibility', None)
    if learning_style_results is None or not compatibility:
        return NEUTRAL_SCORE

    total_score = 0.0
    total_weight = 0.0

    for style in LEARNING_STYLES:
        user_score = learning_style_results.get(style) or 0
        affinity = compatibility.get(style) or DEFAULT_STYLE_AFFINITY

        weight = user_score / 100
        total_score += (affinity / 10) * 100 * weight
        total_weight += weight

    if total_weight <= 0:
        return 0
    return total_score / total_weight


def skills_match(profile_skills: Optional[Iterable[Any]], mentor: Any) -> int:
    """Share of the user's skills the mentor also has (case-insensitive)."""
    user_skills = _normalize(profile_skills)
    mentor_skills = _normalize(getattr(mentor, 'skills', None))

    if not user_skills or not mentor_skills:
        return NEUTRAL_SCORE

    return _coverage_score(user_skills, mentor_skills)


def career_goals_match(goals: Optional[Iterable[Any]], mentor: Any) -> int:
    """Share of the skills named across all goals that the mentor has."""
    goals = list(goals or [])
    if not goals:
        return NEUTRAL_SCORE

    goal_skills = set()
    for goal in goals:
        goal_skills |= _normalize(getattr(goal, 'related_skills', None))

    mentor_skills = _normalize(getattr(mentor, 'skills', None))
    return _coverage_score(goal_skills, mentor_skills)
