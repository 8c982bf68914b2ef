# services/assessment/scorer.py
"""Scoring utilities for the Assessment service.

Functions:
- grade_question: judge one question against the learner's raw answer.
- score / explain: grade every question of a test and aggregate the result.
- score_attempt: convenience wrapper over a stored test and attempt.

Multiple-choice and true/false answers are resolved according to an explicit
`AnswerMode`. In `AnswerMode.ID` (the canonical contract) the submitted value
is an option id and is compared to the id of the option whose text equals the
question's correct answer. In `AnswerMode.TEXT` the submitted value is compared
to the correct answer text directly.
"""

import logging
import re
from collections import Counter
from typing import Any, List, Mapping, Optional, Sequence

from packages.schemas.assessment import (
    AnswerMode,
    Attempt,
    Question,
    QuestionType,
    QuestionVerdict,
    ScoreBreakdown,
    ScoreResult,
    TestDefinition,
)
from .errors import InvalidInput, UnsupportedQuestionType

log = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?)([0-9]+)")


def _as_text(value: Any) -> Optional[str]:
    """Raw submitted/stored value -> string form; None and "" mean no answer."""
    if value is None:
        return None
    text = value if isinstance(value, str) else str(value)
    return text or None


def normalize_int(value: Any) -> Optional[str]:
    """Canonical form of the leading base-10 integer of `value`.

    Leading whitespace is skipped, leading zeros are dropped and "-0" becomes
    "0". Only ASCII digits count. Returns None (not-a-number) when no digits
    lead the value. Works on the digit string, so any length is accepted.

    >>> normalize_int(" -007x")
    '-7'
    """
    text = _as_text(value)
    if text is None:
        return None
    m = _LEADING_INT.match(text)
    if m is None:
        return None
    sign, digits = m.groups()
    digits = digits.lstrip("0") or "0"
    return f"-{digits}" if sign == "-" and digits != "0" else digits


def parse_int(value: Any) -> Optional[int]:
    """Parse the leading base-10 integer of `value`, ignoring leading whitespace.

    Returns None (not-a-number) when no digits lead the value, or when the
    digit run is too long for `int()`.

    >>> parse_int(" 007 ")
    7
    >>> parse_int("abc") is None
    True
    """
    canonical = normalize_int(value)
    if canonical is None:
        return None
    try:
        return int(canonical)
    except ValueError:
        return None


def percent(correct: int, total: int) -> int:
    """round(100 * correct / total), halves rounded up, in integer arithmetic."""
    return (200 * correct + total) // (2 * total)


def _question_type(q: Question) -> QuestionType:
    try:
        return QuestionType(q.type)
    except ValueError:
        raise UnsupportedQuestionType(q.id, q.type) from None


def _answer_mode(mode: Any) -> AnswerMode:
    try:
        return AnswerMode(mode)
    except ValueError:
        raise InvalidInput(f"unknown answer mode {mode!r}") from None


def _canonical_choice(q: Question, mode: AnswerMode) -> Optional[str]:
    """Expected value for an mcq / trueFalse question in the given mode."""
    correct = _as_text(q.correct_answer)
    if mode is AnswerMode.TEXT or not q.options:
        return correct
    option = next((o for o in q.options if o.text == correct), None)
    if option is None:
        log.warning(
            "no option matches the correct answer",
            extra={"context": {"question_id": q.id, "correct_answer": correct}},
        )
        return None
    return option.id


def grade_question(q: Question, submitted: Any, mode: AnswerMode = AnswerMode.ID) -> QuestionVerdict:
    """Judge a single question.

    Raises:
        UnsupportedQuestionType: `q.type` is not a recognized kind.
        InvalidInput: `mode` is not an `AnswerMode`.
    """
    qtype = _question_type(q)
    mode = _answer_mode(mode)
    answer = _as_text(submitted)

    if qtype in (QuestionType.MCQ, QuestionType.TRUE_FALSE):
        expected = _canonical_choice(q, mode)
        correct = answer is not None and expected is not None and answer == expected
    elif qtype is QuestionType.SHORT_ANSWER:
        expected = (_as_text(q.correct_answer) or "").strip().lower()
        correct = answer is not None and answer.strip().lower() == expected
    else:
        expected = normalize_int(q.correct_answer)
        correct = answer is not None and expected is not None and normalize_int(answer) == expected

    return QuestionVerdict(
        question_id=q.id,
        type=qtype.value,
        submitted=answer,
        expected=expected,
        answered=answer is not None,
        correct=correct,
        marks=q.marks,
    )


def _check_inputs(questions: Sequence[Question], passing_threshold: Any) -> int:
    if not questions:
        raise InvalidInput("cannot score a test with no questions")
    if passing_threshold is None:
        return 0
    if isinstance(passing_threshold, bool) or not isinstance(passing_threshold, int):
        raise InvalidInput(f"passing threshold must be an integer, got {passing_threshold!r}")
    if not 0 <= passing_threshold <= 100:
        raise InvalidInput(f"passing threshold {passing_threshold} outside [0, 100]")
    return passing_threshold


def explain(
    questions: Sequence[Question],
    submission: Mapping[str, Any],
    passing_threshold: Optional[int] = 0,
    mode: AnswerMode = AnswerMode.ID,
) -> ScoreBreakdown:
    """Grade every question and return the aggregate with per-question verdicts.

    Args:
        questions: Ordered, non-empty question list.
        submission: Question id (string form) -> raw submitted value. Missing
            keys, None and "" count as unanswered.
        passing_threshold: Integer percentage in [0, 100]; None means 0.
        mode: Representation of submitted multiple-choice answers.

    Raises:
        InvalidInput: empty `questions`, malformed threshold or unknown mode.
        UnsupportedQuestionType: a question has an unknown type.
    """
    threshold = _check_inputs(questions, passing_threshold)
    mode = _answer_mode(mode)

    verdicts: List[QuestionVerdict] = []
    for q in questions:
        v = grade_question(q, submission.get(str(q.id)), mode)
        log.debug(
            "graded question",
            extra={"context": {"question_id": v.question_id, "type": v.type, "correct": v.correct}},
        )
        verdicts.append(v)

    total = len(verdicts)
    correct = sum(1 for v in verdicts if v.correct)
    pct = percent(correct, total)
    return ScoreBreakdown(
        total_questions=total,
        correct_answers=correct,
        score=pct,
        passed=pct >= threshold,
        verdicts=verdicts,
        total_marks=sum(v.marks for v in verdicts),
        marks_obtained=sum(v.marks for v in verdicts if v.correct),
        question_types=dict(Counter(v.type for v in verdicts)),
    )


def score(
    questions: Sequence[Question],
    submission: Mapping[str, Any],
    passing_threshold: Optional[int] = 0,
    mode: AnswerMode = AnswerMode.ID,
) -> ScoreResult:
    """Return the `ScoreResult` of `submission` against `questions`.

    Every question weighs the same; `marks` does not affect the score.
    """
    return explain(questions, submission, passing_threshold, mode).result()


def score_attempt(test: TestDefinition, attempt: Attempt, mode: AnswerMode = AnswerMode.ID) -> ScoreResult:
    """Score a stored attempt against its test's passing score."""
    return score(test.questions, attempt.answers, test.passing_score, mode)
