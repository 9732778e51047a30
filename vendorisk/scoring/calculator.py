# vendorisk/scoring/calculator.py

import logging
import math
from typing import Any, Mapping, Optional

from vendorisk.config import SCORE_SCALE_MULTIPLIERS, ScoreScale, get_settings
from vendorisk.models.question import WeightTable
from vendorisk.scoring.rule_table import ScoringRuleTable, get_default_rule_table

logger = logging.getLogger("vendorisk.scoring")


def round_half_up(value: float) -> int:
    """Round to the nearest whole number, halves toward +infinity."""
    return int(math.floor(value + 0.5))


def calculate_risk_score(
    responses: Mapping[str, Any],
    weights: WeightTable,
    rule_table: Optional[ScoringRuleTable] = None,
    score_scale: Optional[ScoreScale] = None,
) -> int:
    """
    Reduce a response set to a single weighted risk score.

    Formula:
        round((sum(score_i * weight_i) / sum(weight_i)) * multiplier)

    Questions with a zero or missing weight are skipped and do not count
    toward the denominator. With nothing weighted the score is 0.

    The multiplier is 100 under ScoreScale.LEGACY, which can push results
    past 100 because score_i is already on a 0-100 scale; it is 1 under
    ScoreScale.NORMALIZED.
    """
    rule_table = rule_table or get_default_rule_table()
    scale = ScoreScale(score_scale) if score_scale else get_settings().score_scale

    total_score = 0.0
    total_weight = 0.0
    weighted_count = 0

    for question_id, response in responses.items():
        weight = weights.question_weights.get(question_id) or 0
        # "not >" also skips NaN weights
        if not weight > 0:
            continue

        question_score = rule_table.score_single(question_id, response)
        total_score += question_score * weight
        total_weight += weight
        weighted_count += 1

    if total_weight <= 0:
        return 0

    score = round_half_up((total_score / total_weight) * SCORE_SCALE_MULTIPLIERS[scale])

    logger.debug(
        "Scored %d weighted answers (scale=%s, rules=%s) -> %d",
        weighted_count, scale.value, rule_table.version, score,
    )
    return score
