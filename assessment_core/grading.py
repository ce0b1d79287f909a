"""GATB grading.

Parts 1, 2, 3, 5 and 6 share one single-answer grader; they differ only in
what string identifies the correct option (its short label, or for part 2
its full text). Part 4 asks for exactly two options and has its own grader.
Part 7 (shape matching) is recorded, not graded.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from .answer_keys import GATB_DUAL_ANSWER, GATB_SINGLE_ANSWER, load_answer_key
from .answers import as_choices, as_text, resolve_answer
from .errors import UnknownTestTypeError
from .types import AnswerValue, GatbScore, GradeDetail, Option, Question, ShapeMatchRecord

log = logging.getLogger(__name__)

AnswerOf = Callable[[Option], str]


def option_label(opt: Option) -> str:
    return opt.label


def option_text(opt: Option) -> str:
    return opt.text


ANSWER_STRATEGIES: Dict[str, AnswerOf] = {
    "gatb-part-1": option_label,
    "gatb-part-2": option_text,
    "gatb-part-3": option_label,
    "gatb-part-5": option_label,
    "gatb-part-6": option_label,
}


def percentage(correct: int, total: int) -> int:
    """round(100 * correct / total) with halves rounded up; 0 for an empty key."""
    if total <= 0:
        return 0
    return (200 * correct + total) // (2 * total)


def _summarize(details: List[GradeDetail]) -> GatbScore:
    total = len(details)
    correct = sum(1 for d in details if d.is_correct)
    return GatbScore(
        total_questions=total,
        correct_answers=correct,
        incorrect_answers=total - correct,
        score=correct,
        percentage=percentage(correct, total),
        details=details,
    )


def correct_answer(question: Question, answer_of: AnswerOf) -> str:
    for opt in question.options:
        if opt.is_correct:
            return answer_of(opt)
    return ""


def grade_single_answer(questions: Sequence[Question], responses: Mapping[Any, AnswerValue],
                        answer_of: AnswerOf = option_label) -> GatbScore:
    details: List[GradeDetail] = []
    for q in questions:
        user = as_text(resolve_answer(q, responses, by_number=False))
        expected = correct_answer(q, answer_of)
        details.append(GradeDetail(
            question_id=q.id,
            question_number=str(q.number),
            user_answer=user,
            correct_answer=expected,
            is_correct=bool(user) and user == expected,
        ))
    return _summarize(details)


def grade_dual_answer(questions: Sequence[Question], responses: Mapping[Any, AnswerValue]) -> GatbScore:
    details: List[GradeDetail] = []
    for q in questions:
        user = as_choices(resolve_answer(q, responses, by_number=False))
        expected = [opt.label for opt in q.options if opt.is_correct]
        # no partial credit; a key with other than two correct options never matches
        ok = len(user) == 2 and sorted(user) == sorted(expected)
        details.append(GradeDetail(
            question_id=q.id,
            question_number=str(q.number),
            user_answer=user,
            correct_answer=expected,
            is_correct=ok,
        ))
    return _summarize(details)


def grade_gatb(test_type: str, responses: Mapping[Any, AnswerValue],
               questions: Optional[Sequence[Question]] = None) -> GatbScore:
    """Grade a GATB part 1-6 submission against its answer key."""
    if test_type not in GATB_SINGLE_ANSWER and test_type not in GATB_DUAL_ANSWER:
        raise UnknownTestTypeError(test_type)
    if questions is None:
        questions = load_answer_key(test_type)
    if test_type in GATB_DUAL_ANSWER:
        result = grade_dual_answer(questions, responses)
    else:
        result = grade_single_answer(questions, responses, ANSWER_STRATEGIES[test_type])
    log.info("graded %s: %d/%d (%d%%)", test_type, result.correct_answers,
             result.total_questions, result.percentage)
    return result


def record_shape_matches(matches: Optional[Sequence[Any]], part: Optional[int] = None) -> ShapeMatchRecord:
    """Part 7 stores the number of matches made; they are not checked against a key."""
    count = len(matches or [])
    return ShapeMatchRecord(total_questions=count, matched=count, part=part)
