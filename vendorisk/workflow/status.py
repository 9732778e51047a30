import logging
from dataclasses import replace
from typing import Dict, FrozenSet

from vendorisk.models.assessment import Assessment, AssessmentStatus

logger = logging.getLogger("vendorisk.workflow")

S = AssessmentStatus

ALLOWED_TRANSITIONS: Dict[AssessmentStatus, FrozenSet[AssessmentStatus]] = {
    S.DRAFT: frozenset({S.IN_PROGRESS, S.REJECTED}),
    S.IN_PROGRESS: frozenset({S.COMPLETED, S.DRAFT}),
    S.COMPLETED: frozenset({S.REVIEWED, S.IN_PROGRESS}),
    S.REVIEWED: frozenset({S.APPROVED, S.REJECTED, S.IN_PROGRESS}),
    S.APPROVED: frozenset(),  # final
    S.REJECTED: frozenset({S.DRAFT, S.IN_PROGRESS}),
}


class InvalidStatusTransition(ValueError):
    def __init__(self, current: AssessmentStatus, target: AssessmentStatus):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move assessment from {current.value} to {target.value}")


def can_transition(current: AssessmentStatus, target: AssessmentStatus) -> bool:
    return AssessmentStatus(target) in ALLOWED_TRANSITIONS[AssessmentStatus(current)]


def transition(assessment: Assessment, target: AssessmentStatus) -> Assessment:
    """
    Return a copy of the assessment in the target status.
    Raises InvalidStatusTransition for moves the workflow does not allow.
    """
    target = AssessmentStatus(target)
    if not can_transition(assessment.status, target):
        raise InvalidStatusTransition(assessment.status, target)

    logger.info(
        "Assessment %s: %s -> %s", assessment.id, assessment.status.value, target.value
    )
    return replace(
        assessment,
        status=target,
        history=assessment.history + ((assessment.status, target),),
    )
