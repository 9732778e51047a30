from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from vendorisk.scoring.classifier import RiskLevel, classify


class AssessmentStatus(str, Enum):
    DRAFT = "DRAFT"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    REVIEWED = "REVIEWED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class Assessment:
    """
    One assessment instance of a vendor against a template.
    Storage is the host's concern; this is the in-process record.
    """
    id: str
    vendor_id: str
    template_name: str
    status: AssessmentStatus = AssessmentStatus.DRAFT
    responses: Optional[Dict[str, Any]] = None
    risk_score: Optional[int] = None
    completed_at: Optional[datetime] = None
    due_date: Optional[datetime] = None
    assigned_to_id: Optional[str] = None
    score_fingerprint: Optional[str] = None
    # (from_status, to_status) pairs, oldest first
    history: Tuple[Tuple[AssessmentStatus, AssessmentStatus], ...] = field(default_factory=tuple)

    @property
    def risk_level(self) -> Optional[RiskLevel]:
        if self.risk_score is None:
            return None
        return classify(self.risk_score)
