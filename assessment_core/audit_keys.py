from __future__ import annotations

import argparse
import json
from collections import Counter
from pathlib import Path
from typing import Iterable, Sequence

from .answer_keys import (
    ANSWER_KEY_FILES,
    BEHAVIOUR_TRAITS,
    GATB_DUAL_ANSWER,
    GATB_SINGLE_ANSWER,
    INTEREST_CATEGORIES,
    WORK_VALUE_ATTRIBUTES,
    load_answer_key,
)
from .errors import DataLoadError, UnknownTestTypeError
from .types import Question

WORK_VALUE_LABELS = ("a", "b")


def audit_questions(test_type: str, questions: Iterable[Question]) -> list[str]:
    questions = list(questions)
    warnings: list[str] = []

    for qid, n in sorted(Counter(q.id for q in questions).items()):
        if n > 1:
            warnings.append(f"{test_type} id {qid} appears {n} times")

    for q in questions:
        where = f"{test_type} q{q.number} ({q.id})"
        n_correct = sum(1 for o in q.options if o.is_correct)
        if test_type in GATB_SINGLE_ANSWER and n_correct != 1:
            warnings.append(f"{where} has {n_correct} correct options (expected 1)")
        elif test_type in GATB_DUAL_ANSWER and n_correct != 2:
            warnings.append(f"{where} has {n_correct} correct options (expected 2)")
        elif test_type == "work-values":
            labels = sorted(o.label for o in q.options)
            if tuple(labels) != WORK_VALUE_LABELS:
                warnings.append(f"{where} has options {labels} (expected a/b)")
            for o in q.options:
                unknown = [a for a in o.attributes if a not in WORK_VALUE_ATTRIBUTES]
                if unknown:
                    warnings.append(f"{where} option {o.label} has unknown attributes {unknown}")
        elif test_type == "interest-inventory":
            if q.category not in INTEREST_CATEGORIES:
                warnings.append(f"{where} has unknown category {q.category!r}")
        elif test_type == "behavior-response":
            for o in q.options:
                if o.status not in (None, "None") and o.status not in BEHAVIOUR_TRAITS:
                    warnings.append(f"{where} option {o.text!r} has unknown status {o.status!r}")
    return warnings


def audit_all(test_types: Sequence[str] | None = None) -> dict[str, object]:
    targets = list(test_types or ANSWER_KEY_FILES)
    totals: dict[str, int] = {}
    warnings: list[str] = []
    errors: list[str] = []
    for test_type in targets:
        try:
            questions = load_answer_key(test_type)
        except (DataLoadError, UnknownTestTypeError) as e:
            errors.append(str(e))
            continue
        totals[test_type] = len(questions)
        warnings.extend(audit_questions(test_type, questions))
    return {"totals": totals, "warnings": warnings, "errors": errors}


def print_report(summary: dict[str, object]) -> None:
    print("=== Answer Keys ===")
    totals: dict[str, int] = summary["totals"]  # type: ignore[assignment]
    for test_type in sorted(totals):
        print(f"  {test_type:<20} {totals[test_type]:4d} questions")

    for title, key in (("Errors", "errors"), ("Warnings", "warnings")):
        msgs: list[str] = summary[key]  # type: ignore[assignment]
        if msgs:
            print(f"\n{title}:")
            for msg in msgs:
                print(f" - {msg}")
    if not summary["warnings"] and not summary["errors"]:
        print("\nNo warnings.")


def write_summary(summary: dict[str, object], path: Path) -> str:
    text = json.dumps(summary, indent=2, sort_keys=True)
    path.write_text(text + "\n", encoding="utf-8")
    return text


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Check answer-key datasets for malformed questions.")
    ap.add_argument("test_types", nargs="*", help="test types to audit (default: all)")
    ap.add_argument("--out", type=Path, default=None, help="write the JSON summary here")
    a = ap.parse_args(argv)

    summary = audit_all(a.test_types or None)
    print_report(summary)
    if a.out is not None:
        write_summary(summary, a.out)
    if summary["errors"]:
        return 1
    return 2 if summary["warnings"] else 0


if __name__ == "__main__":
    raise SystemExit(main())
