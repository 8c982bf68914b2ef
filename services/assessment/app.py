# services/assessment/app.py
"""FastAPI app for the Assessment Service:
- /assessment/score: grade an inline question set
- /assessment/explain: same, with a per-question breakdown
- /assessment/tests/{test_id}: register a test definition
- /assessment/tests/{test_id}/attempts: submit and score an attempt
- /assessment/attempts/{attempt_id}: read a stored attempt
- /assessment/attempts/{attempt_id}/rescore: recompute a stored result
"""

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from packages.common.config import get_settings
from packages.common.tracing import trace_middleware, xapi_event
from packages.schemas.assessment import (
    AnswerMode,
    Attempt,
    AttemptRecord,
    Rescore,
    ScoreBreakdown,
    ScoreRequest,
    ScoreResult,
    SubmitRequest,
    TestDefinition,
)
from .errors import InvalidInput, UnsupportedQuestionType
from .migration import rescore as rescore_attempt
from .scorer import explain as explain_answers, score_attempt
from .store import StoredAttempt, store

log = logging.getLogger(__name__)

app = FastAPI(title="Assessment Service", version="1.0.0")
app.middleware("http")(trace_middleware)


def _mode(requested: Optional[AnswerMode]) -> AnswerMode:
    return requested or AnswerMode(get_settings().ANSWER_MODE)


def _unprocessable(e: Exception) -> HTTPException:
    if isinstance(e, UnsupportedQuestionType):
        detail = {"error": "unsupported_question_type", "question_id": e.question_id, "type": e.question_type}
    else:
        detail = {"error": "invalid_input", "message": str(e)}
    log.warning("scoring rejected", extra={"context": detail})
    return HTTPException(422, detail)


def _record(stored: StoredAttempt) -> AttemptRecord:
    return AttemptRecord(attempt_id=stored.id, attempt=stored.attempt, result=stored.result)


@app.get("/health", tags=["system"])
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/assessment/explain", response_model=ScoreBreakdown)
def explain(req: ScoreRequest) -> ScoreBreakdown:
    """Return the per-question breakdown for an inline submission."""
    try:
        return explain_answers(req.questions, req.answers, req.passing_score, _mode(req.mode))
    except (InvalidInput, UnsupportedQuestionType) as e:
        raise _unprocessable(e)


@app.post("/assessment/score", response_model=ScoreResult)
def score(req: ScoreRequest) -> ScoreResult:
    """Compute and return the `ScoreResult` for an inline submission."""
    return explain(req).result()


@app.put("/assessment/tests/{test_id}", response_model=TestDefinition)
def put_test(test_id: str, test: TestDefinition) -> TestDefinition:
    """Register (or replace) a test definition."""
    if test.id != test_id:
        raise HTTPException(422, "test id in path and body differ")
    store.put_test(test)
    return test


@app.post("/assessment/tests/{test_id}/attempts", response_model=AttemptRecord, status_code=201)
def submit(test_id: str, req: SubmitRequest) -> AttemptRecord:
    """Score a learner's answers against a stored test and record the attempt."""
    test = store.get_test(test_id)
    if test is None:
        raise HTTPException(404, "test not found")
    attempt = Attempt(user_id=req.user_id, test_id=test_id, answers=req.answers)
    try:
        result = score_attempt(test, attempt, _mode(None))
    except (InvalidInput, UnsupportedQuestionType) as e:
        raise _unprocessable(e)
    stored = store.add_attempt(attempt, result)
    xapi_event(req.user_id, "completed", test_id, score=result.score, passed=result.passed)
    return _record(stored)


@app.get("/assessment/attempts/{attempt_id}", response_model=AttemptRecord)
def get_attempt(attempt_id: str) -> AttemptRecord:
    stored = store.get_attempt(attempt_id)
    if stored is None:
        raise HTTPException(404, "attempt not found")
    return _record(stored)


@app.post("/assessment/attempts/{attempt_id}/rescore", response_model=Rescore)
def rescore(attempt_id: str, legacy_text: bool = False) -> Rescore:
    """Recompute a stored attempt's result and overwrite it.

    With `legacy_text=true`, option-text answers are first rewritten to option
    ids and the rewritten answers are stored with the new result.
    """
    stored = store.get_attempt(attempt_id)
    if stored is None:
        raise HTTPException(404, "attempt not found")
    test = store.get_test(stored.attempt.test_id)
    if test is None:
        raise HTTPException(404, "test not found")
    try:
        out = rescore_attempt(test, stored.attempt, stored.result, legacy_text=legacy_text)
    except (InvalidInput, UnsupportedQuestionType) as e:
        raise _unprocessable(e)
    attempt = stored.attempt.model_copy(update={"answers": out.answers})
    store.save_result(attempt_id, attempt, out.result)
    if out.changed:
        xapi_event(attempt.user_id, "rescored", attempt.test_id, score=out.result.score, converted=out.converted)
    return out


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("services.assessment.app:app", host="0.0.0.0", port=8000)
