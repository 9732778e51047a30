import logging
import time
from typing import Any, Dict, List, Literal, Optional

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field

from vendorisk.audit.hash_utils import compute_score_fingerprint
from vendorisk.config import ScoreScale, get_settings
from vendorisk.integration.risk_alerts import should_alert, trigger_high_risk_alert
from vendorisk.models.assessment import Assessment, AssessmentStatus
from vendorisk.models.question import Template, TemplateCategory
from vendorisk.scoring.calculator import calculate_risk_score
from vendorisk.scoring.classifier import classify
from vendorisk.scoring.rule_table import ScoringRuleTable, get_default_rule_table
from vendorisk.telemetry import (
    emit_exception_telemetry,
    emit_scoring_telemetry,
    emit_validation_failure,
    init_telemetry,
)
from vendorisk.templates.authoring import check_template
from vendorisk.templates.catalog import get_all_templates, get_template_by_id, get_templates_by_category
from vendorisk.validation.validator import validate_responses
from vendorisk.workflow.status import InvalidStatusTransition
from vendorisk.workflow.submission import ResponseValidationError, submit_responses

# --- AUDIT LOGGING ---
logging.basicConfig(
    filename=get_settings().audit_log_path,
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
audit_logger = logging.getLogger("audit")

tags_metadata = [
    {
        "name": "Scoring",
        "description": "Validate questionnaire responses and compute the weighted risk score.",
    },
    {
        "name": "Templates",
        "description": "Built-in assessment templates and authoring checks.",
    },
    {
        "name": "System",
        "description": "Health checks and operational metadata.",
    },
]

app = FastAPI(
    title="Vendor Risk Scoring Engine",
    description="""
    **Third-party vendor risk scoring** for questionnaire-based assessments.

    * **Validation:** required answers and per-type checks against the template.
    * **Scoring:** data-driven rule table, weighted per question.
    * **Classification:** LOW / MEDIUM / HIGH / CRITICAL bands.
    """,
    version="1.0.0",
    openapi_tags=tags_metadata,
    docs_url="/docs",
    redoc_url="/redoc"
)

init_telemetry()


@app.middleware("http")
async def audit_middleware(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time

    client_host = request.client.host if request.client else "unknown"
    audit_logger.info(
        f"METHOD={request.method} PATH={request.url.path} "
        f"STATUS={response.status_code} CLIENT={client_host} "
        f"DURATION={process_time:.4f}s"
    )
    return response


# --- DATA MODELS ---
class QuestionModel(BaseModel):
    id: str
    text: str
    type: Literal["yesno", "select", "multiselect", "text", "number", "date"]
    options: List[str] = []
    required: bool = False


class SectionModel(BaseModel):
    title: str
    questions: List[QuestionModel]


class QuestionSchemaModel(BaseModel):
    sections: List[SectionModel]


class RiskWeightsModel(BaseModel):
    sections: Dict[str, float] = {}
    questions: Dict[str, float] = {}


class TemplateModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str = ""
    category: TemplateCategory = TemplateCategory.GENERAL
    questions: QuestionSchemaModel
    risk_weights: RiskWeightsModel = Field(alias="riskWeights")
    is_active: bool = Field(default=True, alias="isActive")

    def to_template(self) -> Template:
        return Template.from_dict(self.model_dump(mode="json", by_alias=True))


class AssessmentRequest(BaseModel):
    responses: Dict[str, Any]
    template_name: Optional[str] = None
    template: Optional[TemplateModel] = None
    assessment_id: Optional[str] = None
    score_scale: Optional[ScoreScale] = None


class SubmissionRequest(AssessmentRequest):
    vendor_id: str
    status: AssessmentStatus = AssessmentStatus.IN_PROGRESS


class ValidationResponse(BaseModel):
    isValid: bool
    errors: List[str]


class ScoreResponse(BaseModel):
    template: str
    risk_score: int
    risk_level: str
    score_scale: str
    rule_table_version: str
    fingerprint: str


def _resolve_template(request: AssessmentRequest) -> Template:
    if request.template is not None:
        return request.template.to_template()

    if request.template_name:
        template = get_template_by_id(request.template_name)
        if template is None:
            raise HTTPException(status_code=404, detail=f"Template not found: {request.template_name}")
        return template

    raise HTTPException(status_code=422, detail="Either template or template_name is required")


def _alert_if_high_risk(
    responses: Dict[str, Any],
    template: Template,
    rule_table: ScoringRuleTable,
    risk_score: int,
    scale: ScoreScale,
    assessment_id: Optional[str],
) -> None:
    # Bands only apply on the 0-100 scale, so legacy scores are re-derived
    if scale != ScoreScale.NORMALIZED:
        risk_score = calculate_risk_score(
            responses, template.weights, rule_table=rule_table, score_scale=ScoreScale.NORMALIZED
        )
    risk_level = classify(risk_score)
    if should_alert(risk_level):
        trigger_high_risk_alert(
            risk_score=risk_score,
            risk_level=risk_level,
            template_name=template.name,
            assessment_id=assessment_id,
        )


def _template_summary(template: Template) -> Dict[str, Any]:
    return {
        "name": template.name,
        "description": template.description,
        "category": template.category.value,
        "isActive": template.is_active,
        "questionCount": sum(1 for _ in template.questions()),
    }


# --- ENDPOINTS ---

@app.get("/templates", tags=["Templates"])
def list_templates(category: Optional[TemplateCategory] = None):
    templates = get_templates_by_category(category) if category else get_all_templates()
    return {"templates": [_template_summary(t) for t in templates]}


@app.get("/templates/{name}", tags=["Templates"])
def get_template(name: str):
    template = get_template_by_id(name)
    if template is None:
        raise HTTPException(status_code=404, detail=f"Template not found: {name}")
    return template.to_dict()


@app.post("/templates/check", tags=["Templates"])
def check_template_endpoint(template: TemplateModel):
    """Authoring-time checks: weight sums, unknown references, missing options."""
    warnings = check_template(template.to_template())
    return {"ok": not warnings, "warnings": warnings}


@app.post("/assessments/validate", response_model=ValidationResponse, tags=["Scoring"])
def validate_assessment(request: AssessmentRequest):
    template = _resolve_template(request)
    result = validate_responses(request.responses, template)
    return result.to_dict()


@app.post("/assessments/score", response_model=ScoreResponse, tags=["Scoring"])
def score_assessment(request: AssessmentRequest):
    """
    Validate the responses, then score and classify them.
    Invalid response sets are rejected with the full error list.
    """
    template = _resolve_template(request)

    try:
        start_time = time.perf_counter()

        result = validate_responses(request.responses, template)
        if not result.is_valid:
            emit_validation_failure(len(result.errors))
            raise HTTPException(
                status_code=422,
                detail={"message": "Invalid assessment responses", "errors": result.errors},
            )

        settings = get_settings()
        scale = request.score_scale or settings.score_scale
        rule_table = get_default_rule_table()

        risk_score = calculate_risk_score(
            result.responses, template.weights, rule_table=rule_table, score_scale=scale
        )
        risk_level = classify(risk_score)
        fingerprint = compute_score_fingerprint(
            result.responses, template.weights, rule_table.version, scale
        )

        latency_ms = int((time.perf_counter() - start_time) * 1000)
        emit_scoring_telemetry(
            scoring_latency_ms=latency_ms,
            risk_score=risk_score,
            risk_level=risk_level.value,
            score_scale=scale.value,
        )

        _alert_if_high_risk(
            result.responses, template, rule_table, risk_score, scale, request.assessment_id
        )

        return {
            "template": template.name,
            "risk_score": risk_score,
            "risk_level": risk_level.value,
            "score_scale": scale.value,
            "rule_table_version": rule_table.version,
            "fingerprint": fingerprint,
        }

    except HTTPException:
        raise
    except Exception as e:
        audit_logger.error(f"ENGINE_ERROR: {type(e).__name__}")
        emit_exception_telemetry(e)
        raise HTTPException(status_code=500, detail="Scoring engine error")


@app.post("/assessments/{assessment_id}/submit", tags=["Scoring"])
def submit_assessment(assessment_id: str, request: SubmissionRequest):
    """
    Submit responses for an assessment and complete it.

    Only DRAFT and IN_PROGRESS assessments can be submitted (409 otherwise).
    Invalid response sets are rejected with the full error list (422).
    """
    template = _resolve_template(request)
    scale = request.score_scale or get_settings().score_scale
    rule_table = get_default_rule_table()

    assessment = Assessment(
        id=assessment_id,
        vendor_id=request.vendor_id,
        template_name=template.name,
        status=request.status,
    )

    try:
        completed = submit_responses(
            assessment, template, request.responses, rule_table=rule_table, score_scale=scale
        )
    except InvalidStatusTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ResponseValidationError as e:
        emit_validation_failure(len(e.errors))
        raise HTTPException(
            status_code=422,
            detail={"message": "Invalid assessment responses", "errors": e.errors},
        )
    except Exception as e:
        audit_logger.error(f"ENGINE_ERROR: {type(e).__name__}")
        emit_exception_telemetry(e)
        raise HTTPException(status_code=500, detail="Scoring engine error")

    _alert_if_high_risk(
        completed.responses, template, rule_table, completed.risk_score, scale, assessment_id
    )

    return {
        "id": completed.id,
        "vendor_id": completed.vendor_id,
        "template": completed.template_name,
        "status": completed.status.value,
        "risk_score": completed.risk_score,
        "risk_level": completed.risk_level.value,
        "score_scale": scale.value,
        "completed_at": completed.completed_at.isoformat(),
        "fingerprint": completed.score_fingerprint,
    }


@app.get("/health", tags=["System"])
def health():
    return {
        "status": "online",
        "modules": ["Validator", "RuleTable", "Calculator", "Classifier"],
        "rule_table_version": get_settings().rule_table_version,
    }
