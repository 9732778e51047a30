import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

from vendorisk.audit.hash_utils import compute_score_fingerprint
from vendorisk.config import ScoreScale, get_settings
from vendorisk.models.assessment import Assessment, AssessmentStatus
from vendorisk.models.question import Template
from vendorisk.scoring.calculator import calculate_risk_score
from vendorisk.scoring.rule_table import ScoringRuleTable, get_default_rule_table
from vendorisk.validation.validator import validate_responses
from vendorisk.workflow.status import InvalidStatusTransition

logger = logging.getLogger("vendorisk.workflow")

SUBMITTABLE_STATUSES = frozenset({AssessmentStatus.DRAFT, AssessmentStatus.IN_PROGRESS})


class ResponseValidationError(ValueError):
    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__(f"{len(self.errors)} invalid response(s): " + "; ".join(self.errors))


def submit_responses(
    assessment: Assessment,
    template: Template,
    responses: Mapping[str, Any],
    rule_table: Optional[ScoringRuleTable] = None,
    score_scale: Optional[ScoreScale] = None,
    now: Optional[datetime] = None,
) -> Assessment:
    """
    Validate -> score -> complete.

    Returns a new COMPLETED assessment carrying the responses, the score
    and its fingerprint. A scored response set is never replaced in place:
    re-scoring means moving back to IN_PROGRESS and submitting again.
    """
    if assessment.status not in SUBMITTABLE_STATUSES:
        raise InvalidStatusTransition(assessment.status, AssessmentStatus.COMPLETED)

    result = validate_responses(responses, template)
    if not result.is_valid:
        raise ResponseValidationError(result.errors)

    rule_table = rule_table or get_default_rule_table()
    scale = ScoreScale(score_scale) if score_scale else get_settings().score_scale

    risk_score = calculate_risk_score(
        result.responses, template.weights, rule_table=rule_table, score_scale=scale
    )
    fingerprint = compute_score_fingerprint(
        result.responses, template.weights, rule_table.version, scale
    )

    logger.info("Assessment %s completed with risk score %d", assessment.id, risk_score)

    return replace(
        assessment,
        status=AssessmentStatus.COMPLETED,
        # lists are frozen so later caller mutation cannot reach the scored record
        responses={
            qid: tuple(value) if isinstance(value, list) else value
            for qid, value in responses.items()
        },
        risk_score=risk_score,
        score_fingerprint=fingerprint,
        completed_at=now or datetime.now(timezone.utc),
        history=assessment.history + ((assessment.status, AssessmentStatus.COMPLETED),),
    )
