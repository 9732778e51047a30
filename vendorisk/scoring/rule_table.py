# vendorisk/scoring/rule_table.py

import logging
from functools import lru_cache
from typing import Any, Callable, Dict, List, Mapping, Optional

from vendorisk.config import get_settings
from vendorisk.models.response import (
    BoolResponse,
    DateResponse,
    NumberResponse,
    TextListResponse,
    TextResponse,
    as_response,
)
from vendorisk.rules.loader import load_rule_snapshot

logger = logging.getLogger("vendorisk.scoring")

NEUTRAL_SCORE = 50

NumberRule = Callable[[float], float]

DEFAULT_BOOLEAN_SCORES = {True: 20, False: 80}


def band_rule(bands: List[Dict[str, float]]) -> NumberRule:
    """
    Build a numeric scoring function from ordered bands:
        [{"max": 10, "score": 80}, {"max": 50, "score": 40}, {"score": 10}]
    The first band whose "max" is >= value wins; a band without "max"
    catches everything above. Values past the last bounded band with no
    catch-all score neutral.
    """
    ordered = list(bands)

    def rule(value: float) -> float:
        for band in ordered:
            upper = band.get("max")
            if upper is None or value <= upper:
                return band["score"]
        return NEUTRAL_SCORE

    return rule


class ScoringRuleTable:
    """
    Maps (question id, literal answer) to a 0-100 risk sub-score,
    lower meaning lower risk.

    Unknown question ids, unknown literals and empty answers score
    NEUTRAL_SCORE so a single unscored question never aborts a calculation.
    """

    def __init__(
        self,
        version: str = "inline",
        select_scores: Optional[Mapping[str, Mapping[str, float]]] = None,
        multiselect_scores: Optional[Mapping[str, Mapping[str, float]]] = None,
        number_rules: Optional[Mapping[str, NumberRule]] = None,
        boolean_scores: Optional[Mapping[bool, float]] = None,
    ):
        self.version = version
        self.select_scores = {k: dict(v) for k, v in (select_scores or {}).items()}
        self.multiselect_scores = {k: dict(v) for k, v in (multiselect_scores or {}).items()}
        self.number_rules = dict(number_rules or {})
        self.boolean_scores = dict(boolean_scores or DEFAULT_BOOLEAN_SCORES)

    @classmethod
    def from_snapshot(cls, snapshot: Dict[str, Any]) -> "ScoringRuleTable":
        boolean = snapshot.get("boolean") or {}
        return cls(
            version=snapshot["snapshot_version"],
            select_scores=snapshot.get("select") or {},
            multiselect_scores=snapshot.get("multiselect") or {},
            number_rules={
                qid: band_rule(bands)
                for qid, bands in (snapshot.get("number") or {}).items()
            },
            boolean_scores={
                True: boolean.get("true", DEFAULT_BOOLEAN_SCORES[True]),
                False: boolean.get("false", DEFAULT_BOOLEAN_SCORES[False]),
            },
        )

    def score_single(self, question_id: str, response: Any) -> float:
        """
        Score one answer. Dispatch follows the answer's runtime shape,
        not the question's declared type.
        """
        typed = as_response(response)

        if typed is None:
            return NEUTRAL_SCORE

        if isinstance(typed, BoolResponse):
            return self.boolean_scores[typed.value]

        if isinstance(typed, (TextResponse, DateResponse)):
            return self._literal_score(self.select_scores, question_id, typed.value)

        if isinstance(typed, TextListResponse):
            return self._multiselect_score(question_id, typed.items)

        if isinstance(typed, NumberResponse):
            rule = self.number_rules.get(question_id)
            if rule is None:
                return NEUTRAL_SCORE
            return rule(typed.value)

        return NEUTRAL_SCORE

    def _literal_score(self, table, question_id: str, literal: str) -> float:
        rules = table.get(question_id)
        if rules is None or literal not in rules:
            logger.debug("No literal score for question %s; using neutral", question_id)
            return NEUTRAL_SCORE
        return rules[literal]

    def _multiselect_score(self, question_id: str, items) -> float:
        rules = self.multiselect_scores.get(question_id)
        if rules is None or not items:
            return NEUTRAL_SCORE

        # Mean of per-selection scores; unknown selections count as neutral
        scores = [
            rules.get(item, NEUTRAL_SCORE) if isinstance(item, str) else NEUTRAL_SCORE
            for item in items
        ]
        return sum(scores) / len(scores)


@lru_cache(maxsize=None)
def load_rule_table(version: str) -> ScoringRuleTable:
    return ScoringRuleTable.from_snapshot(load_rule_snapshot(version))


def get_default_rule_table() -> ScoringRuleTable:
    """Rule table for the configured snapshot version."""
    return load_rule_table(get_settings().rule_table_version)


def score_single(question_id: str, response: Any, rule_table: Optional[ScoringRuleTable] = None) -> float:
    """Module-level convenience over ScoringRuleTable.score_single."""
    table = rule_table or get_default_rule_table()
    return table.score_single(question_id, response)
