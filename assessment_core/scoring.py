from __future__ import annotations
from typing import Any, Dict, Mapping, Optional, Sequence
import logging

from . import config
from .answer_keys import BEHAVIOUR_TRAITS, INTEREST_CATEGORIES, WORK_VALUE_ATTRIBUTES, load_answer_key
from .answers import is_like, resolve_answer
from .types import (
    AnswerValue,
    BehaviourResponseScore,
    InterestInventoryScore,
    Question,
    WorkValuesScore,
)

log = logging.getLogger(__name__)


def _zeroed(keys: Sequence[str]) -> Dict[str, int]:
    return {k: 0 for k in keys}


def score_work_values(responses: Mapping[Any, AnswerValue],
                      questions: Optional[Sequence[Question]] = None) -> WorkValuesScore:
    """
    Forced-choice a/b questions; the chosen option adds 1 to each attribute
    it lists. All 15 attributes are reported, untouched ones at 0.
    """
    if questions is None:
        questions = load_answer_key("work-values")
    attributes = _zeroed(WORK_VALUE_ATTRIBUTES)
    answered = 0
    for q in questions:
        value = resolve_answer(q, responses, by_number=False)
        if not value:
            continue
        answered += 1
        chosen = next((o for o in q.options if o.label == value), None)
        if chosen is None:
            continue
        for attr in chosen.attributes:
            if attr in attributes:
                attributes[attr] += 1
            else:
                log.debug("work-values %s: ignoring unknown attribute %r", q.id, attr)
    return WorkValuesScore(attributes=attributes, total_questions=len(questions), answered_questions=answered)


def score_interest_inventory(responses: Mapping[Any, AnswerValue],
                             questions: Optional[Sequence[Question]] = None) -> InterestInventoryScore:
    """Count "Like" answers per category; any answer counts towards answeredQuestions."""
    if questions is None:
        questions = load_answer_key("interest-inventory")
    categories = _zeroed(INTEREST_CATEGORIES)
    answered = 0
    for q in questions:
        value = resolve_answer(q, responses)
        if not value:
            continue
        answered += 1
        if is_like(value, config.LIKE_RESPONSES) and q.category in categories:
            categories[q.category] += 1
    return InterestInventoryScore(categories=categories, total_questions=len(questions),
                                  answered_questions=answered)


def score_behaviour_response(responses: Mapping[Any, AnswerValue],
                             questions: Optional[Sequence[Question]] = None) -> BehaviourResponseScore:
    """
    Each answered question adds 1 to the trait status of the option whose
    text was chosen. Options with status 'None' (or an unknown code) count as
    answered but score nothing.
    """
    if questions is None:
        questions = load_answer_key("behavior-response")
    scores = _zeroed(BEHAVIOUR_TRAITS)
    answered = 0
    for q in questions:
        value = resolve_answer(q, responses)
        if not value:
            log.debug("behavior-response %s: no answer", q.number)
            continue
        answered += 1
        chosen = next((o for o in q.options if o.text == value), None)
        if chosen is None:
            log.warning("behavior-response %s: no option matches %r", q.number, value)
            continue
        status = chosen.status or "None"
        if status in scores:
            scores[status] += 1
        elif status != "None":
            log.warning("behavior-response %s: unknown status %r", q.number, status)
    log.debug("behavior-response scores: %s (answered %d/%d)", scores, answered, len(questions))
    return BehaviourResponseScore(total_questions=len(questions), answered_questions=answered, scores=scores)
