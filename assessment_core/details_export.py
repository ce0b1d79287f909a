"""Export per-question GATB grading details in JSON/CSV formats."""
from __future__ import annotations

from typing import Iterable, List, Dict, Any
import csv
import io

_FIELDS: tuple[str, ...] = (
    "questionId",
    "questionNumber",
    "userAnswer",
    "correctAnswer",
    "isCorrect",
)


def _flatten(val: Any) -> str:
    if val is None:
        return ""
    if isinstance(val, (list, tuple)):
        return ",".join(str(v) for v in val)
    return str(val)


def _normalize_detail(detail: Dict[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key in _FIELDS:
        val = detail.get(key)
        if key == "isCorrect":
            out[key] = bool(val)
        else:
            out[key] = _flatten(val)
    return out


def to_json(details: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    """Return a JSON-safe payload of grading details."""

    normalized: List[Dict[str, Any]] = [_normalize_detail(d or {}) for d in details]
    return {"details": normalized}


def to_csv(details: Iterable[Dict[str, Any]]) -> str:
    """Render grading details as CSV with a fixed header."""

    normalized = [_normalize_detail(d or {}) for d in details]
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=_FIELDS)
    writer.writeheader()
    for row in normalized:
        writer.writerow(row)
    return buf.getvalue()


__all__ = ["to_json", "to_csv"]
