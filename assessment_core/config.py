from __future__ import annotations
import os


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_str(name: str, default: str | None) -> str | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


# None means the datasets shipped in assessment_core/data.
ANSWER_KEY_DIR: str | None = None

# Reject firo-b / gatb-part-7 submissions instead of storing them unscored.
STRICT_TEST_TYPES: bool = False

DETAILS_EXPORT_ENABLED: bool = True

LIKE_RESPONSES: tuple[str, ...] = ("Like", "like", "\U0001F44DLike", "\U0001F44D Like")

GATB_PART_7_TOTAL_PARTS: int = 3

# // env overrides for staging/ops
ANSWER_KEY_DIR = _env_str("ANSWER_KEY_DIR", ANSWER_KEY_DIR)
STRICT_TEST_TYPES = _env_bool("STRICT_TEST_TYPES", STRICT_TEST_TYPES)
DETAILS_EXPORT_ENABLED = _env_bool("DETAILS_EXPORT_ENABLED", DETAILS_EXPORT_ENABLED)
GATB_PART_7_TOTAL_PARTS = _env_int("GATB_PART_7_TOTAL_PARTS", GATB_PART_7_TOTAL_PARTS)
