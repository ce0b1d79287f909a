from __future__ import annotations

import json
from pathlib import Path

import pytest

from assessment_core import config
from assessment_core.types import Option, Question


def gatb_row(number: int, correct: str | None, *, marker: str = "correct", item_id: str | None = None,
             letters: str = "ABCD", extra_correct: str = "") -> dict[str, str]:
    """One spreadsheet-style GATB row; `correct` is the letter marked correct."""

    row = {"Item ID": item_id if item_id is not None else f"g-q{number}", "Question No.": str(number)}
    for letter in letters:
        row[f"Option {letter}"] = f"option {letter.lower()}{number}"
        row[f"Option {letter} Status"] = marker if letter == correct or letter in extra_correct else ""
    row["Option E Status"] = marker if correct == "E" else ""
    return row


def single_answer_question(qid: str, correct: str, labels: str = "ABCD") -> Question:
    return Question(
        id=qid,
        number=qid.lstrip("q"),
        options=[Option(label=lbl, text=f"text {lbl}", is_correct=lbl == correct) for lbl in labels],
    )


def dual_answer_question(qid: str, correct: tuple[str, ...]) -> Question:
    return Question(
        id=qid,
        number=qid.lstrip("q"),
        options=[Option(label=lbl, text=lbl, is_correct=lbl in correct) for lbl in "abcd"],
    )


def write_key(directory: Path, filename: str, rows: object) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    path.write_text(json.dumps(rows), encoding="utf-8")
    return path


@pytest.fixture
def key_dir(tmp_path, monkeypatch) -> Path:
    """Point the answer-key loader at an empty temporary directory."""

    directory = tmp_path / "keys"
    directory.mkdir()
    monkeypatch.setattr(config, "ANSWER_KEY_DIR", str(directory), raising=False)
    return directory


@pytest.fixture(autouse=True)
def packaged_keys(monkeypatch):
    monkeypatch.setattr(config, "ANSWER_KEY_DIR", None, raising=False)
    monkeypatch.setattr(config, "STRICT_TEST_TYPES", False, raising=False)
