from __future__ import annotations
from typing import Any, Iterable, List, Mapping, Optional

from .types import AnswerValue, Question


def lookup_keys(question: Question, *, by_number: bool = True) -> List[Any]:
    """Ordered keys a response for `question` may be stored under."""
    keys: List[Any] = [question.id]
    if by_number:
        keys.append(question.number)
        keys.append(str(question.number))
    return keys


def resolve_answer(question: Question, responses: Mapping[Any, AnswerValue], *,
                   by_number: bool = True) -> Optional[AnswerValue]:
    """First non-empty response found along the lookup chain, else None.

    A missing or empty response is "unanswered", never an error.
    """
    for key in lookup_keys(question, by_number=by_number):
        value = responses.get(key)
        if value:
            return value
    return None


def as_text(value: Optional[AnswerValue]) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def as_choices(value: Optional[AnswerValue]) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Iterable):
        return [str(v) for v in value]
    return [str(value)]


def is_like(value: Optional[AnswerValue], spellings: Iterable[str]) -> bool:
    return isinstance(value, str) and value in tuple(spellings)
