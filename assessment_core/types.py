from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional, Union

TestType = Literal[
    "gatb-part-1", "gatb-part-2", "gatb-part-3", "gatb-part-4", "gatb-part-5",
    "gatb-part-6", "gatb-part-7", "work-values", "interest-inventory",
    "behavior-response", "firo-b", "personality-aspect",
]
AnswerValue = Union[str, List[str]]
Responses = Dict[Any, AnswerValue]


@dataclass
class Option:
    label: str
    text: str = ""
    is_correct: bool = False
    attributes: List[str] = field(default_factory=list)
    status: Optional[str] = None
    image: Optional[str] = None


@dataclass
class Question:
    id: str
    number: Union[int, str]
    text: Optional[str] = None
    options: List[Option] = field(default_factory=list)
    category: Optional[str] = None
    image: Optional[str] = None
    part: Optional[int] = None


@dataclass
class GradeDetail:
    question_id: str
    question_number: str
    user_answer: AnswerValue
    correct_answer: AnswerValue
    is_correct: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "questionId": self.question_id,
            "questionNumber": self.question_number,
            "userAnswer": self.user_answer,
            "correctAnswer": self.correct_answer,
            "isCorrect": self.is_correct,
        }


@dataclass
class GatbScore:
    total_questions: int
    correct_answers: int
    incorrect_answers: int
    score: int
    percentage: int
    details: List[GradeDetail] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalQuestions": self.total_questions,
            "correctAnswers": self.correct_answers,
            "incorrectAnswers": self.incorrect_answers,
            "score": self.score,
            "percentage": self.percentage,
            "details": [d.to_dict() for d in self.details],
        }


@dataclass
class WorkValuesScore:
    attributes: Dict[str, int]
    total_questions: int
    answered_questions: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "attributes": dict(self.attributes),
            "totalQuestions": self.total_questions,
            "answeredQuestions": self.answered_questions,
        }


@dataclass
class InterestInventoryScore:
    categories: Dict[str, int]
    total_questions: int
    answered_questions: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "categories": dict(self.categories),
            "totalQuestions": self.total_questions,
            "answeredQuestions": self.answered_questions,
        }


@dataclass
class BehaviourResponseScore:
    total_questions: int
    answered_questions: int
    scores: Dict[str, int]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalQuestions": self.total_questions,
            "answeredQuestions": self.answered_questions,
            "scores": dict(self.scores),
        }


@dataclass
class ShapeMatchRecord:
    total_questions: int
    matched: int
    part: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"totalQuestions": self.total_questions, "matched": self.matched, "part": self.part}


@dataclass
class Submission:
    user_id: Optional[str]
    test_type: str
    responses: Dict[str, Any]
    score: Optional[Dict[str, Any]]
    completed_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "userId": self.user_id,
            "testType": self.test_type,
            "responses": self.responses,
            "score": self.score,
            "completedAt": self.completed_at,
        }
