#!/usr/bin/env python3
"""
Scoring Models - Data structures for factor scores.
"""

import math
from dataclasses import dataclass, asdict
from typing import Dict, Union

Score = Union[int, float]

NEUTRAL_SCORE = 50

LEARNING_STYLES = ('visual', 'auditory', 'reading', 'kinesthetic')


def round_score(value: float) -> int:
    """Round half up, so 12.5 -> 13 rather than banker's 12."""
    return int(math.floor(float(value) + 0.5))


@dataclass(frozen=True)
class MatchFactors:
    """The five factor scores for one (user, mentor) pair, each in [0, 100]."""
    career_field_match: Score = NEUTRAL_SCORE
    experience_level_match: Score = NEUTRAL_SCORE
    learning_style_match: Score = NEUTRAL_SCORE
    skills_match: Score = NEUTRAL_SCORE
    career_goals_match: Score = NEUTRAL_SCORE

    def to_dict(self) -> Dict[str, Score]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Score]) -> "MatchFactors":
        return cls(**{name: data[name] for name in cls.__dataclass_fields__ if name in data})
