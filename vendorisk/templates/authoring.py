"""
Template authoring checks.

Scoring tolerates imperfect templates; these checks surface problems to
template authors before a template is published. They never raise.
"""
import math
from typing import Dict, List

from vendorisk.models.question import QuestionType, Template

WEIGHT_SUM_TOLERANCE = 0.01

OPTION_TYPES = (QuestionType.SELECT, QuestionType.MULTISELECT)


def _check_weight_map(label: str, weights: Dict[str, float]) -> List[str]:
    warnings = []

    for key, weight in weights.items():
        if not 0 <= weight <= 1:
            warnings.append(f"{label} weight for \"{key}\" is outside 0..1: {weight}")

    if weights:
        total = sum(weights.values())
        if not math.isclose(total, 1.0, abs_tol=WEIGHT_SUM_TOLERANCE):
            warnings.append(f"{label} weights sum to {round(total, 4)}, expected 1.0")

    return warnings


def check_template(template: Template) -> List[str]:
    warnings: List[str] = []

    seen_ids = set()
    for question in template.questions():
        if question.id in seen_ids:
            warnings.append(f"Duplicate question id \"{question.id}\"")
        seen_ids.add(question.id)

        if question.type in OPTION_TYPES and not question.options:
            warnings.append(
                f"Question \"{question.id}\" is {question.type.value} but lists no options"
            )

    section_titles = {s.title for s in template.sections}
    weights = template.weights

    warnings.extend(_check_weight_map("Section", weights.section_weights))
    warnings.extend(_check_weight_map("Question", weights.question_weights))

    for title in weights.section_weights:
        if title not in section_titles:
            warnings.append(f"Section weight references unknown section \"{title}\"")

    for question_id in weights.question_weights:
        if question_id not in seen_ids:
            warnings.append(f"Question weight references unknown question \"{question_id}\"")

    return warnings
