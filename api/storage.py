"""Utility helpers for recording test submissions.

The production deployment records submissions in its relational database.
Here we use simple JSON files stored on disk so the API keeps graded
submissions across restarts and admins can review them.
"""

from __future__ import annotations

import json
import os
import threading
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional

from assessment_core.types import Submission


DATA_ROOT = Path(os.getenv("DATA_DIR", "data")).resolve()
SUBMISSIONS_DIR = DATA_ROOT / "submissions"
SUBMISSION_INDEX_PATH = DATA_ROOT / "submissions_index.json"

_LOCK = threading.Lock()


def _ensure_dirs() -> None:
    SUBMISSIONS_DIR.mkdir(parents=True, exist_ok=True)


def _read_json(path: Path, default: Any) -> Any:
    if not path.exists():
        return default
    return json.loads(path.read_text(encoding="utf-8"))


def _write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False), encoding="utf-8")
    tmp.replace(path)


class FileRecorder:
    """Recorder for `assessment_core.submission.submit` writing one JSON file per submission."""

    def __init__(self) -> None:
        self.last_id: Optional[str] = None

    def __call__(self, sub: Submission) -> None:
        self.last_id = save_submission(sub)


def save_submission(sub: Submission, submission_id: Optional[str] = None) -> str:
    """Persist the submission JSON and its index metadata; return its id."""

    _ensure_dirs()
    sid = submission_id or str(uuid.uuid4())
    record = {"id": sid, **sub.to_dict()}
    metadata = {
        "userId": sub.user_id,
        "testType": sub.test_type,
        "completedAt": sub.completed_at,
    }

    with _LOCK:
        index: Dict[str, Dict[str, Any]] = _read_json(SUBMISSION_INDEX_PATH, {})
        index[sid] = metadata
        _write_json(SUBMISSION_INDEX_PATH, index)

    _write_json(SUBMISSIONS_DIR / f"{sid}.json", record)
    return sid


def load_submission(submission_id: str) -> Optional[Dict[str, Any]]:
    path = SUBMISSIONS_DIR / f"{submission_id}.json"
    if not path.exists():
        return None
    return json.loads(path.read_text(encoding="utf-8"))


def delete_submission(submission_id: str) -> bool:
    removed = False
    with _LOCK:
        index: Dict[str, Dict[str, Any]] = _read_json(SUBMISSION_INDEX_PATH, {})
        if submission_id in index:
            index.pop(submission_id, None)
            _write_json(SUBMISSION_INDEX_PATH, index)
            removed = True
    path = SUBMISSIONS_DIR / f"{submission_id}.json"
    if path.exists():
        path.unlink()
    return removed


def list_submissions_for_user(user_id: str) -> List[Dict[str, Any]]:
    index: Dict[str, Dict[str, Any]] = _read_json(SUBMISSION_INDEX_PATH, {})
    out: List[Dict[str, Any]] = []
    for sid, meta in index.items():
        if meta.get("userId") == user_id:
            item = {"id": sid}
            item.update({k: v for k, v in meta.items() if k != "id"})
            out.append(item)
    out.sort(key=lambda r: r.get("completedAt", ""), reverse=True)
    return out
