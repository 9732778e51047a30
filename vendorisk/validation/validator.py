import logging
import math
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from vendorisk.models.question import Question, QuestionType, Template
from vendorisk.models.response import (
    BoolResponse,
    DateResponse,
    NumberResponse,
    Response,
    TextListResponse,
    TextResponse,
    as_response,
    is_empty,
)
from vendorisk.models.validation_result import ValidationResult

logger = logging.getLogger("vendorisk.validation")


def _is_iso_date(value: str) -> bool:
    # Python 3.11+ fromisoformat: extended and basic ISO-8601, "Z" suffix
    try:
        datetime.fromisoformat(value)
    except ValueError:
        return False
    return True


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)


def response_matches_type(response: Any, question: Question) -> bool:
    """
    Check a non-empty raw answer against the question's declared type.
    Option membership is only enforced when the question lists options.
    """
    qtype = question.type

    if qtype == QuestionType.YESNO:
        return isinstance(response, bool)

    if qtype == QuestionType.SELECT:
        return isinstance(response, str) and (
            not question.options or response in question.options
        )

    if qtype == QuestionType.MULTISELECT:
        if not isinstance(response, (list, tuple)):
            return False
        if not all(isinstance(r, str) for r in response):
            return False
        return not question.options or all(r in question.options for r in response)

    if qtype == QuestionType.TEXT:
        return isinstance(response, str)

    if qtype == QuestionType.NUMBER:
        return _is_number(response)

    if qtype == QuestionType.DATE:
        return isinstance(response, str) and _is_iso_date(response)

    return True


def _typed_for_question(response: Any, question: Question) -> Response:
    if question.type == QuestionType.DATE:
        return DateResponse(response)
    if question.type == QuestionType.YESNO:
        return BoolResponse(response)
    if question.type in (QuestionType.SELECT, QuestionType.TEXT):
        return TextResponse(response)
    if question.type == QuestionType.MULTISELECT:
        return TextListResponse(tuple(response))
    return NumberResponse(response)


def validate_responses(responses: Mapping[str, Any], template: Template) -> ValidationResult:
    """
    Check a response set against a template's question schema.

    Every violation is collected in one pass: missing required answers
    first, then type mismatches, each in template order. Answers for
    question ids the template does not know are ignored.
    """
    errors: List[str] = []

    for question in template.questions():
        if question.required and is_empty(responses.get(question.id)):
            errors.append(f'Required question "{question.text}" is not answered')

    matched = set()

    for question in template.questions():
        response = responses.get(question.id)
        if is_empty(response):
            continue
        if response_matches_type(response, question):
            matched.add(question.id)
        else:
            errors.append(f'Invalid response type for question "{question.text}"')

    # Typed view in submission order. Extra keys and empty answers are kept
    # (discriminated by shape, or None) so weighted scoring sees exactly
    # what was submitted.
    typed: Dict[str, Optional[Response]] = {}
    for question_id, response in responses.items():
        if question_id in matched:
            typed[question_id] = _typed_for_question(response, template.question_by_id(question_id))
        else:
            typed[question_id] = as_response(response)

    if errors:
        logger.debug("Response set failed validation with %d error(s)", len(errors))

    return ValidationResult(
        is_valid=not errors,
        errors=errors,
        responses=typed,
    )
