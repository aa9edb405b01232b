#!/usr/bin/env python3
"""
Score Aggregator - combines factor scores into the compatibility score.

overall = round(sum(weight_i * factor_i))

Weights come from an immutable MatchWeights instance; every factor is in
[0, 100] and the weights sum to 1, so the result is in [0, 100] too.
"""

from typing import Dict, Any, Tuple
import logging

from core.config_loader import MatchWeights
from core.scorer.models import MatchFactors, round_score

logger = logging.getLogger(__name__)

DEFAULT_WEIGHTS = MatchWeights()


def aggregate(factors: MatchFactors, weights: MatchWeights = DEFAULT_WEIGHTS) -> int:
    score, _ = aggregate_with_components(factors, weights)
    return score


def aggregate_with_components(
    factors: MatchFactors,
    weights: MatchWeights = DEFAULT_WEIGHTS
) -> Tuple[int, Dict[str, Any]]:
    factor_values = factors.to_dict()
    weight_values = weights.model_dump()

    contributions = {
        name: weight_values[name] * float(value)
        for name, value in factor_values.items()
    }
    raw_score = sum(contributions.values())
    score = round_score(raw_score)

    components: Dict[str, Any] = {
        "factors": factor_values,
        "weights": weight_values,
        "contributions": contributions,
        "raw_score": raw_score,
        "compatibility_score": score,
    }

    logger.debug("Compatibility score %d (raw=%.3f)", score, raw_score)

    return score, components
