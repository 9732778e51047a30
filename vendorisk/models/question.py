from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, Optional, Tuple


class QuestionType(str, Enum):
    YESNO = "yesno"
    SELECT = "select"
    MULTISELECT = "multiselect"
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"


class TemplateCategory(str, Enum):
    GENERAL = "GENERAL"
    CYBERSECURITY = "CYBERSECURITY"
    FINANCIAL = "FINANCIAL"
    OPERATIONAL = "OPERATIONAL"
    COMPLIANCE = "COMPLIANCE"
    REPUTATIONAL = "REPUTATIONAL"


@dataclass(frozen=True)
class Question:
    id: str
    text: str
    type: QuestionType
    options: Tuple[str, ...] = ()
    required: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Question":
        # QuestionType() raises ValueError for an unknown type
        return cls(
            id=data["id"],
            text=data["text"],
            type=QuestionType(data["type"]),
            options=tuple(data.get("options") or ()),
            required=bool(data.get("required", False)),
        )


@dataclass(frozen=True)
class Section:
    title: str
    questions: Tuple[Question, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Section":
        return cls(
            title=data["title"],
            questions=tuple(Question.from_dict(q) for q in data.get("questions", [])),
        )


@dataclass(frozen=True)
class WeightTable:
    """
    Per-question and per-section contribution factors.

    Only question_weights is consulted during scoring. Section weights
    are informational and kept for reporting.
    """
    section_weights: Dict[str, float] = field(default_factory=dict)
    question_weights: Dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WeightTable":
        return cls(
            section_weights=dict(data.get("sections") or {}),
            question_weights=dict(data.get("questions") or {}),
        )

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return {
            "sections": dict(self.section_weights),
            "questions": dict(self.question_weights),
        }


@dataclass(frozen=True)
class Template:
    """
    The scoring contract: ordered sections of questions plus a weight table.
    Read-only input to validation and scoring.
    """
    name: str
    sections: Tuple[Section, ...]
    weights: WeightTable
    description: str = ""
    category: TemplateCategory = TemplateCategory.GENERAL
    is_active: bool = True

    def questions(self) -> Iterator[Question]:
        for section in self.sections:
            yield from section.questions

    def question_by_id(self, question_id: str) -> Optional[Question]:
        return next((q for q in self.questions() if q.id == question_id), None)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Template":
        """
        Parse the template wire shape:
        {"name", "description", "category",
         "questions": {"sections": [...]}, "riskWeights": {...}, "isActive"}
        """
        schema = data.get("questions") or {}
        return cls(
            name=data["name"],
            sections=tuple(Section.from_dict(s) for s in schema.get("sections", [])),
            weights=WeightTable.from_dict(data.get("riskWeights") or {}),
            description=data.get("description") or "",
            category=TemplateCategory(data.get("category", TemplateCategory.GENERAL.value)),
            is_active=bool(data.get("isActive", True)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "category": self.category.value,
            "questions": {
                "sections": [
                    {
                        "title": s.title,
                        "questions": [
                            {
                                "id": q.id,
                                "text": q.text,
                                "type": q.type.value,
                                "options": list(q.options),
                                "required": q.required,
                            }
                            for q in s.questions
                        ],
                    }
                    for s in self.sections
                ]
            },
            "riskWeights": self.weights.to_dict(),
            "isActive": self.is_active,
        }
