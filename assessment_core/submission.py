"""Submission boundary: dispatch a test type to its scorer and hand the
result to a caller-supplied recorder."""
from __future__ import annotations

import logging
from functools import partial
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from . import config
from .answer_keys import TEST_TYPES
from .errors import InvalidSubmissionError, UnknownTestTypeError, UnsupportedTestTypeError
from .grading import grade_gatb, record_shape_matches
from .scoring import score_behaviour_response, score_interest_inventory, score_work_values
from .types import Submission

log = logging.getLogger(__name__)

Recorder = Callable[[Submission], None]

SCORERS: Dict[str, Callable[[Mapping[Any, Any]], Any]] = {
    **{f"gatb-part-{n}": partial(grade_gatb, f"gatb-part-{n}") for n in range(1, 7)},
    "work-values": score_work_values,
    "interest-inventory": score_interest_inventory,
    "behavior-response": score_behaviour_response,
}


def score_submission(test_type: str, responses: Optional[Mapping[Any, Any]] = None, *,
                     matches: Optional[Sequence[Any]] = None,
                     part: Optional[int] = None) -> Optional[Dict[str, Any]]:
    """Return the score object for a submission, or None for ungraded test types.

    GATB part 7 yields a match-count record when matches were sent. With STRICT_TEST_TYPES set, part 7
    and the ungraded inventories raise UnsupportedTestTypeError instead.
    """
    if test_type not in TEST_TYPES:
        raise UnknownTestTypeError(test_type)
    scorer = SCORERS.get(test_type)
    if scorer is None:
        if config.STRICT_TEST_TYPES:
            raise UnsupportedTestTypeError(test_type)
        if test_type == "gatb-part-7" and matches is not None:
            return record_shape_matches(matches, part).to_dict()
        log.info("%s has no scorer; storing responses unscored", test_type)
        return None
    return scorer(responses or {}).to_dict()


def submit(user_id: Optional[str], test_type: str, responses: Optional[Mapping[str, Any]] = None, *,
           matches: Optional[Sequence[Any]] = None, part: Optional[int] = None,
           recorder: Recorder) -> Submission:
    """Score a submission and pass it to `recorder`.

    Grading errors propagate to the caller; nothing is recorded when scoring fails.
    """
    if not test_type:
        raise InvalidSubmissionError("Test type is required")
    if test_type == "gatb-part-7" and matches is not None:
        stored: Dict[str, Any] = {"matches": list(matches), "part": part}
    elif responses is not None:
        stored = dict(responses)
    else:
        raise InvalidSubmissionError("Responses or matches are required")

    score = score_submission(test_type, responses, matches=matches, part=part)
    sub = Submission(user_id=user_id, test_type=test_type, responses=stored, score=score)
    recorder(sub)
    log.info("recorded %s submission for user %s", test_type, user_id or "-")
    return sub
