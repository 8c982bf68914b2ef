# services/assessment/migration.py
"""Back-compat helpers for answers stored under the legacy text convention.

Stored attempts are canonically keyed by option id. Older attempts submitted
the option text instead; `to_option_ids` rewrites those answers and `rescore`
recomputes a result from scratch so a stored score can be repaired.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from packages.schemas.assessment import (
    AnswerMode,
    Attempt,
    Question,
    QuestionType,
    Rescore,
    ScoreResult,
    TestDefinition,
)
from .scorer import score

_CHOICE_TYPES = {QuestionType.MCQ.value, QuestionType.TRUE_FALSE.value}


def to_option_ids(questions: Sequence[Question], answers: Mapping[str, Any]) -> Tuple[Dict[str, Any], List[str]]:
    """Replace option-text answers with the matching option id.

    Only mcq / trueFalse questions that carry options are touched. A value that
    already equals one of the question's option ids is left alone, as is any
    answer whose question is not in `questions`.

    Returns:
        (new answer map, ids of the questions whose answer was converted)
    """
    out = dict(answers)
    converted: List[str] = []
    for q in questions:
        key = str(q.id)
        value = out.get(key)
        if q.type not in _CHOICE_TYPES or not q.options or not isinstance(value, str):
            continue
        if any(o.id == value for o in q.options):
            continue
        match = next((o for o in q.options if o.text == value), None)
        if match is not None:
            out[key] = match.id
            converted.append(key)
    return out, converted


def rescore(
    test: TestDefinition,
    attempt: Attempt,
    previous: Optional[ScoreResult] = None,
    legacy_text: bool = False,
) -> Rescore:
    """Recompute an attempt's result under the canonical id contract.

    Args:
        test: The test definition the attempt was taken against.
        attempt: The stored attempt.
        previous: The result currently stored for the attempt, if any.
        legacy_text: Convert option-text answers to option ids before scoring.
    """
    answers: Mapping[str, Any] = attempt.answers
    converted: List[str] = []
    if legacy_text:
        answers, converted = to_option_ids(test.questions, attempt.answers)
    result = score(test.questions, answers, test.passing_score, AnswerMode.ID)
    return Rescore(
        previous=previous,
        result=result,
        changed=previous is None or previous != result,
        converted=converted,
        answers=dict(answers),
    )
