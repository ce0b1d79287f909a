"""Answer-key loading.

Each test type is backed by a static JSON dataset exported from the
counselling spreadsheets. The GATB files keep the spreadsheet column names
("Item ID", "Question No.", "Option A Status", ...); the other datasets are
already shaped as question objects. Rows are normalized into `Question`
objects here so the graders never look at raw column names.
"""
from __future__ import annotations

import importlib.resources as ir
import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from . import config
from .errors import DataNotFoundError, MalformedDataError, UnknownTestTypeError
from .types import Option, Question

log = logging.getLogger(__name__)

GATB_SINGLE_ANSWER = ("gatb-part-1", "gatb-part-2", "gatb-part-3", "gatb-part-5", "gatb-part-6")
GATB_DUAL_ANSWER = ("gatb-part-4",)
SCORED_TEST_TYPES = GATB_SINGLE_ANSWER + GATB_DUAL_ANSWER + (
    "work-values", "interest-inventory", "behavior-response",
)
UNSCORED_TEST_TYPES = ("gatb-part-7", "firo-b", "personality-aspect")
TEST_TYPES = SCORED_TEST_TYPES + UNSCORED_TEST_TYPES

WORK_VALUE_ATTRIBUTES = [
    "Intellectual Stimulation", "Altruism", "Economic Returns", "Variety",
    "Independence", "Prestige", "Aesthetic", "Associates", "Security",
    "Way of Life", "Supervisory Relations", "Surrounding", "Achievement",
    "Management", "Creativity",
]
INTEREST_CATEGORIES = ["medical", "technology", "commerce", "arts", "fine-arts"]
BEHAVIOUR_TRAITS = ["Aa", "Ao", "Sc", "Inq", "DI"]

NONE_OF_THESE = "none of these"

ANSWER_KEY_FILES: Dict[str, str] = {
    "gatb-part-1": "gatb-part-1-questions.json",
    "gatb-part-2": "gatb-part-2-questions.json",
    "gatb-part-3": "gatb-part-3-questions.json",
    "gatb-part-4": "gatb-part-4-questions.json",
    "gatb-part-5": "gatb-part-5-questions.json",
    "gatb-part-6": "gatb-part-6-questions.json",
    "gatb-part-7": "gatb-part-7-questions.json",
    "work-values": "work-values-questions.json",
    "interest-inventory": "interest-inventory-questions.json",
    "behavior-response": "behaviour-response-questions.json",
    "firo-b": "firo-b-questions.json",
}

# Part 6 was exported with a capitalized status marker.
_CORRECT_MARKER = {"gatb-part-6": "Correct"}


def _read_text(test_type: str, filename: str) -> str:
    try:
        if config.ANSWER_KEY_DIR:
            return (Path(config.ANSWER_KEY_DIR) / filename).read_text(encoding="utf-8")
        res = ir.files(__package__).joinpath(f"data/{filename}")
        if not res.is_file():
            raise FileNotFoundError(filename)
        return res.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise DataNotFoundError(test_type, f"answer key {filename} not found") from e
    except (OSError, UnicodeDecodeError) as e:
        raise MalformedDataError(test_type, f"answer key {filename} unreadable: {e}") from e


def load_rows(test_type: str) -> List[Dict[str, Any]]:
    """Return the raw dataset rows for `test_type`, in file order."""
    filename = ANSWER_KEY_FILES.get(test_type)
    if filename is None:
        if test_type in TEST_TYPES:
            raise DataNotFoundError(test_type, "no answer key dataset for this test type")
        raise UnknownTestTypeError(test_type)
    text = _read_text(test_type, filename)
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedDataError(test_type, f"invalid JSON in {filename}: {e}") from e
    if not isinstance(raw, list) or not all(isinstance(r, dict) for r in raw):
        raise MalformedDataError(test_type, f"{filename} must hold a list of objects")
    return raw


def _cell(row: Dict[str, Any], *names: str) -> str:
    for name in names:
        v = row.get(name)
        if v is not None and str(v).strip():
            return str(v).strip()
    return ""


def _gatb_options(row: Dict[str, Any], marker: str, *, labels: str, text_suffix: str = "",
                  none_of_these: bool = False) -> List[Option]:
    out: List[Option] = []
    for letter in "ABCD":
        text = row.get(f"Option {letter}{text_suffix}") or ""
        correct = row.get(f"Option {letter} Status") == marker
        if not text and not correct:
            continue
        label = letter.lower() if labels == "lower" else letter
        opt = Option(label=label, is_correct=correct)
        if text_suffix:
            opt.image = text
        else:
            opt.text = text
        out.append(opt)
    if none_of_these:
        out.append(Option(label="E", text=NONE_OF_THESE, is_correct=row.get("Option E Status") == marker))
    return out


def _gatb_question(test_type: str, row: Dict[str, Any]) -> Question:
    marker = _CORRECT_MARKER.get(test_type, "correct")
    if test_type == "gatb-part-1":
        number = _cell(row, "Question No", "Question No.")
        options = [Option(label=name, text=name, is_correct=row.get(name) == marker)
                   for name in ("Same", "Different")]
        text = _cell(row, "Question Text", "Question") or None
    else:
        number = _cell(row, "Question No.")
        text = _cell(row, "Question Text", "Action") or None
        if test_type == "gatb-part-3":
            options = _gatb_options(row, marker, labels="upper", text_suffix=" Image")
        elif test_type == "gatb-part-4":
            options = _gatb_options(row, marker, labels="lower")
        else:
            options = _gatb_options(row, marker, labels="upper",
                                    none_of_these=test_type in ("gatb-part-2", "gatb-part-6"))
    # Response keys use the Item ID exactly as exported, surrounding spaces included.
    raw_id = row.get("Item ID")
    q = Question(id=str(raw_id) if raw_id else f"q{number}", number=number, text=text, options=options)
    if test_type == "gatb-part-3":
        q.image = _cell(row, "Question Image") or None
    return q


def _status_options(test_type: str, question_id: str, raw_options: Any) -> List[Option]:
    if not isinstance(raw_options, list):
        raise MalformedDataError(test_type, f"question {question_id} has no options list")
    out: List[Option] = []
    for idx, o in enumerate(raw_options):
        if isinstance(o, str):
            out.append(Option(label=str(idx), text=o))
        elif isinstance(o, dict):
            status = o.get("status")
            if status is not None and not isinstance(status, str):
                raise MalformedDataError(test_type, f"question {question_id} has a non-string status {status!r}")
            out.append(Option(label=str(o.get("label", idx)), text=str(o.get("text", "")), status=status))
        else:
            raise MalformedDataError(test_type, f"question {question_id} has an invalid option")
    return out


def _work_values_question(row: Dict[str, Any]) -> Question:
    number = row.get("questionNumber", "")
    qid = row.get("itemId") or f"wv-q{number}"
    raw_options = row.get("options")
    if not isinstance(raw_options, list) or not all(isinstance(o, dict) for o in raw_options):
        raise MalformedDataError("work-values", f"question {qid} has no options list")
    options = []
    for o in raw_options:
        attributes = o.get("attributes") or []
        if not isinstance(attributes, list) or not all(isinstance(a, str) for a in attributes):
            raise MalformedDataError("work-values", f"question {qid} has attributes that are not a list of names")
        options.append(Option(label=str(o.get("label", "")), text=str(o.get("text", "")),
                              status=o.get("status") or None, attributes=list(attributes)))
    return Question(id=qid, number=number, text=row.get("questionText"), options=options)


def _interest_question(row: Dict[str, Any]) -> Question:
    number = row.get("questionNumber", "")
    qid = row.get("id") or f"q{number}"
    category = row.get("category")
    if category is not None and not isinstance(category, str):
        raise MalformedDataError("interest-inventory", f"question {qid} has a non-string category {category!r}")
    return Question(id=qid, number=number, text=row.get("questionText"), category=category)


def _prefixed_status_question(test_type: str, prefix: str) -> Callable[[Dict[str, Any]], Question]:
    def build(row: Dict[str, Any]) -> Question:
        number = row.get("questionNumber", "")
        qid = row.get("id") or f"{prefix}q{number}"
        return Question(id=qid, number=number, text=row.get("questionText"),
                        options=_status_options(test_type, qid, row.get("options")))
    return build


def _shape_question(row: Dict[str, Any]) -> Question:
    number = _cell(row, "number", "Number", "Question No.")
    try:
        part = int(row.get("part", 1))
    except (TypeError, ValueError) as e:
        raise MalformedDataError("gatb-part-7", f"invalid part {row.get('part')!r}") from e
    return Question(id=_cell(row, "Item ID") or f"p{part}-q{number}", number=number,
                    image=_cell(row, "imageUrl", "Image", "Question Image") or None, part=part)


_BUILDERS: Dict[str, Callable[[Dict[str, Any]], Question]] = {
    "work-values": _work_values_question,
    "interest-inventory": _interest_question,
    "behavior-response": _prefixed_status_question("behavior-response", "br-"),
    "firo-b": _prefixed_status_question("firo-b", "firob-"),
    "gatb-part-7": _shape_question,
}


def load_answer_key(test_type: str) -> List[Question]:
    """Load the answer key for `test_type` as `Question`s in dataset order.

    Raises DataNotFoundError when the dataset is missing and MalformedDataError
    when it cannot be parsed. Neither is recovered here.
    """
    try:
        rows = load_rows(test_type)
        if test_type.startswith("gatb-part-") and test_type != "gatb-part-7":
            return [_gatb_question(test_type, r) for r in rows]
        return [_BUILDERS[test_type](r) for r in rows]
    except (DataNotFoundError, MalformedDataError) as e:
        log.warning("answer key load failed: %s", e)
        raise


def _number_key(q: Question) -> int:
    try:
        return int(q.number)
    except (TypeError, ValueError):
        return 0


def load_questions(test_type: str, part: Optional[int] = None) -> List[Question]:
    """Questions sorted by question number, for presentation; part 7 filtered by `part`."""
    questions = load_answer_key(test_type)
    if test_type == "gatb-part-7":
        questions = [q for q in questions if q.part == (part or 1)]
    return sorted(questions, key=_number_key)


def public_question(q: Question) -> Dict[str, Any]:
    """Serialize a question for test-takers, without any correctness flags."""
    out: Dict[str, Any] = {"id": q.id, "questionNumber": q.number}
    if q.text:
        out["questionText"] = q.text
    if q.category:
        out["category"] = q.category
    if q.image:
        out["imageUrl"] = q.image
    if q.part is not None:
        out["part"] = q.part
    if q.options:
        opts = []
        for o in q.options:
            d: Dict[str, Any] = {"label": o.label}
            if o.text:
                d["text"] = o.text
            if o.image:
                d["image"] = o.image
            opts.append(d)
        out["options"] = opts
    return out
