from __future__ import annotations
from fastapi import FastAPI, HTTPException, Query, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field
import logging, typing as t

# ---- Engine imports ----
from assessment_core import config
from assessment_core.answer_keys import TEST_TYPES, load_questions, public_question
from assessment_core.details_export import to_csv as details_to_csv
from assessment_core.errors import (
    DataLoadError,
    DataNotFoundError,
    InvalidSubmissionError,
    UnknownTestTypeError,
    UnsupportedTestTypeError,
)
from assessment_core.submission import submit
from .storage import (
    FileRecorder,
    delete_submission,
    list_submissions_for_user,
    load_submission,
)

log = logging.getLogger(__name__)

app = FastAPI(title="Career Assessment API")


@app.get("/")
def root():
    return {"status": "ok", "service": "career-assessment-api"}


ALLOWED_ORIGINS = [
    "http://localhost:4321",
    "http://localhost:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=True,  # session cookie is sent by the site
)

# ---- Schemas ----
class SubmitReq(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    test_type: str = Field(alias="testType")
    user_id: str | None = Field(default=None, alias="userId")
    responses: dict[str, str | list[str]] | None = None
    matches: list[dict[str, t.Any]] | None = None  # gatb-part-7 only
    part: int | None = None


# ---- Health ----
@app.get("/health")
def health():
    return {
        "strict_test_types": config.STRICT_TEST_TYPES,
        "answer_key_dir": config.ANSWER_KEY_DIR or "packaged",
        "test_types": list(TEST_TYPES),
    }


# ---- Test-taking ----
@app.get("/api/tests/{test_type}/questions")
def get_questions(test_type: str, part: int | None = Query(None, ge=1)):
    try:
        questions = load_questions(test_type, part=part)
    except UnknownTestTypeError as e:
        raise HTTPException(400, str(e))
    except DataNotFoundError:
        raise HTTPException(404, "Questions file not found")
    except DataLoadError as e:
        raise HTTPException(500, str(e))
    body: dict[str, t.Any] = {"questions": [public_question(q) for q in questions]}
    if test_type == "gatb-part-7":
        body["part"] = part or 1
        body["totalParts"] = config.GATB_PART_7_TOTAL_PARTS
    return body


@app.post("/api/tests/submit")
def submit_test(req: SubmitReq):
    recorder = FileRecorder()
    try:
        sub = submit(
            req.user_id,
            req.test_type,
            req.responses,
            matches=req.matches,
            part=req.part,
            recorder=recorder,
        )
    except (UnknownTestTypeError, InvalidSubmissionError) as e:
        raise HTTPException(400, str(e))
    except UnsupportedTestTypeError as e:
        raise HTTPException(422, str(e))
    except DataLoadError as e:
        log.error("grading failed for %s: %s", req.test_type, e)
        raise HTTPException(500, f"Failed to grade test: {e}")
    return {
        "success": True,
        "message": "Test submitted successfully",
        "submissionId": recorder.last_id,
        "score": sub.score,
    }


@app.get("/users/{user_id}/responses")
def list_responses(user_id: str):
    return {"responses": list_submissions_for_user(user_id)}


# ---- Admin review ----
def _submission_or_404(submission_id: str) -> dict[str, t.Any]:
    record = load_submission(submission_id)
    if not record:
        raise HTTPException(404, "submission not found")
    return record


@app.get("/admin/responses/{submission_id}")
def get_response(submission_id: str):
    return _submission_or_404(submission_id)


@app.get("/admin/responses/{submission_id}/details.csv")
def get_details_csv(submission_id: str):
    if not config.DETAILS_EXPORT_ENABLED:
        raise HTTPException(404, "details export disabled")
    record = _submission_or_404(submission_id)
    score = record.get("score") or {}
    details = score.get("details") if isinstance(score, dict) else None
    if details is None:
        raise HTTPException(404, "submission has no graded details")
    filename = f"{submission_id}_details.csv"
    return Response(
        content=details_to_csv(details),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename=\"{filename}\""},
    )


@app.delete("/admin/responses/{submission_id}")
def delete_response(submission_id: str):
    if not delete_submission(submission_id):
        raise HTTPException(404, "submission not found")
    return {"ok": True}
