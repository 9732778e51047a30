"""
Typed response values.

Raw answers arrive as untyped JSON. They are discriminated once into a
closed set of response kinds so scoring never re-inspects runtime types.
"""
from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union


@dataclass(frozen=True)
class BoolResponse:
    value: bool


@dataclass(frozen=True)
class TextResponse:
    value: str


@dataclass(frozen=True)
class TextListResponse:
    # items are kept as received; the validator rejects non-string items
    items: Tuple[Any, ...]


@dataclass(frozen=True)
class NumberResponse:
    value: float


@dataclass(frozen=True)
class DateResponse:
    # ISO-8601 string as submitted
    value: str


Response = Union[BoolResponse, TextResponse, TextListResponse, NumberResponse, DateResponse]

RESPONSE_TYPES = (BoolResponse, TextResponse, TextListResponse, NumberResponse, DateResponse)


def is_empty(value: Any) -> bool:
    """Absent, null and empty-string answers count as unanswered."""
    return value is None or (isinstance(value, str) and value == "")


def as_response(value: Any) -> Optional[Response]:
    """
    Discriminate a raw JSON value by its runtime shape.
    Returns None for empty or unrecognised values.
    """
    if isinstance(value, RESPONSE_TYPES):
        return value
    if is_empty(value):
        return None
    # bool is an int subclass, so it must be checked first
    if isinstance(value, bool):
        return BoolResponse(value)
    if isinstance(value, str):
        return TextResponse(value)
    if isinstance(value, (list, tuple)):
        return TextListResponse(tuple(value))
    if isinstance(value, (int, float)):
        return NumberResponse(value)
    return None


def to_raw(response: Optional[Response]) -> Any:
    """Inverse of as_response, for serialising a typed response set."""
    if response is None:
        return None
    if isinstance(response, TextListResponse):
        return list(response.items)
    return response.value
