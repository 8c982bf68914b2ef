# services/assessment/errors.py
"""Error taxonomy for the scorer.

Both errors are fatal for the call that raised them and are propagated to the
caller; the HTTP layer maps them to 422 responses.
"""


class ScoringError(Exception):
    """Base class for scoring failures."""


class InvalidInput(ScoringError, ValueError):
    """Empty question list or malformed passing threshold."""


class UnsupportedQuestionType(ScoringError):
    """A question carries a `type` the scorer does not know how to grade."""

    def __init__(self, question_id: str, question_type: object) -> None:
        self.question_id = question_id
        self.question_type = question_type
        super().__init__(f"question {question_id!r} has unsupported type {question_type!r}")
