#!/usr/bin/env python3
"""
Scoring Module - factor scoring and aggregation.

Public API:
- MatchFactors: the five factor scores for a (user, mentor) pair
- score_factors: compute all five factors for a user context and mentor
- aggregate: weighted compatibility score from MatchFactors

Modules:
- models.py: Data structures (MatchFactors, NEUTRAL_SCORE)
- factors.py: The five pure factor scorers
- aggregate.py: Weighted aggregation
"""

from core.scorer.models import MatchFactors, NEUTRAL_SCORE, round_score
from core.scorer.factors import (
    career_field_match,
    experience_level_match,
    learning_style_match,
    skills_match,
    career_goals_match,
)
from core.scorer.aggregate import aggregate, aggregate_with_components, DEFAULT_WEIGHTS


def score_factors(context, mentor) -> MatchFactors:
    """Compute all five factors for a user context against one mentor."""
    return MatchFactors(
        career_field_match=career_field_match(context, mentor),
        experience_level_match=experience_level_match(context, mentor),
        learning_style_match=learning_style_match(context.learning_style_results, mentor),
        skills_match=skills_match(context.skills, mentor),
        career_goals_match=career_goals_match(context.career_goals, mentor),
    )


__all__ = [
    'MatchFactors',
    'NEUTRAL_SCORE',
    'round_score',
    'DEFAULT_WEIGHTS',
    'score_factors',
    'career_field_match',
    'experience_level_match',
    'learning_style_match',
    'skills_match',
    'career_goals_match',
    'aggregate',
    'aggregate_with_components',
]
