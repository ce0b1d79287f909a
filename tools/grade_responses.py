# tools/grade_responses.py
from __future__ import annotations
import argparse, json, logging, sys
from pathlib import Path
from typing import Any, Dict, Optional

from assessment_core.answer_keys import TEST_TYPES
from assessment_core.details_export import to_csv, to_json
from assessment_core.errors import AssessmentError
from assessment_core.submission import score_submission


def _load_payload(path: Path) -> Dict[str, Any]:
    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise SystemExit(f"{path}: expected a JSON object")
    return raw


def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Grade a saved responses file offline.")
    ap.add_argument("test_type", choices=list(TEST_TYPES))
    ap.add_argument("responses", type=Path,
                    help="JSON file: {questionId: answer} or {responses, matches, part}")
    ap.add_argument("--details", choices=["none", "json", "csv"], default="none",
                    help="also print per-question details (GATB parts 1-6)")
    ap.add_argument("-v", "--verbose", action="store_true")
    a = ap.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if a.verbose else logging.WARNING,
                        format="[%(levelname)s] %(message)s")

    try:
        payload = _load_payload(a.responses)
    except (OSError, json.JSONDecodeError) as e:
        print(f"error: cannot read {a.responses}: {e}", file=sys.stderr)
        return 1
    if "responses" in payload or "matches" in payload:
        responses = payload.get("responses") or {}
        matches, part = payload.get("matches"), payload.get("part")
    else:
        responses, matches, part = payload, None, None

    try:
        score = score_submission(a.test_type, responses, matches=matches, part=part)
    except AssessmentError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    details = (score or {}).pop("details", None) if a.details != "none" else None
    print(json.dumps(score, indent=2, ensure_ascii=False))
    if details is not None and a.details == "json":
        print(json.dumps(to_json(details), indent=2, ensure_ascii=False))
    elif details is not None and a.details == "csv":
        print(to_csv(details), end="")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
