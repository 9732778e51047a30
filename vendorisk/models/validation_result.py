from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .response import Response


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    # typed view of the submitted answers, ready for scoring; None for empty ones
    responses: Dict[str, Optional[Response]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"isValid": self.is_valid, "errors": list(self.errors)}
