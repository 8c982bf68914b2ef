"""Assessment schemas for tests, questions, attempts, and scoring."""

from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class QuestionType(str, Enum):
    """Question kinds understood by the scorer, by their stored wire value."""

    MCQ = "mcq"
    TRUE_FALSE = "trueFalse"
    SHORT_ANSWER = "shortAnswer"
    INTEGER = "integer"


class AnswerMode(str, Enum):
    """How a submitted multiple-choice / true-false answer is represented.

    `id` is the canonical contract: learners submit option ids. `text` is the
    legacy convention where the option text itself was submitted.
    """

    ID = "id"
    TEXT = "text"


RawAnswer = Optional[Union[str, int, float]]


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Option(BaseModel):
    """A selectable option of a multiple-choice question."""
    id: str
    text: str

    @field_validator("id", "text", mode="before")
    @classmethod
    def _stringify(cls, v):
        return v if isinstance(v, str) else str(v)


class Question(_CamelModel):
    """A gradable test question.

    `type` is kept as a plain string so that unknown kinds reach the scorer,
    which reports them with the question id.
    """
    id: str
    type: str
    text: str = ""
    correct_answer: Union[str, int, float] = Field(alias="correctAnswer")
    options: List[Option] = Field(default_factory=list)
    marks: int = Field(default=1, ge=1)

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, v):
        return v if isinstance(v, str) else str(v)

    @field_validator("options", mode="before")
    @classmethod
    def _legacy_options(cls, v):
        # Bare string options carry no id of their own; the text doubles as id.
        if v is None:
            return []
        return [{"id": o, "text": o} if isinstance(o, str) else o for o in v]


class TestDefinition(_CamelModel):
    """An ordered collection of questions with a passing threshold."""
    __test__ = False  # not a pytest test class

    id: str
    title: str = ""
    questions: List[Question]
    passing_score: Optional[int] = Field(default=None, alias="passingScore")


class Attempt(_CamelModel):
    """A learner's attempt mapping question ids to submitted answers."""
    user_id: str = Field(alias="userId")
    test_id: str = Field(alias="testId")
    answers: Dict[str, RawAnswer] = Field(default_factory=dict)


class ScoreResult(_CamelModel):
    """Computed outcome of grading one submission."""
    total_questions: int = Field(alias="totalQuestions")
    correct_answers: int = Field(alias="correctAnswers")
    score: int
    passed: bool


class QuestionVerdict(_CamelModel):
    """Per-question grading detail."""
    question_id: str = Field(alias="questionId")
    type: str
    submitted: Optional[str] = None
    expected: Optional[str] = None
    answered: bool
    correct: bool
    marks: int = 1


class ScoreBreakdown(ScoreResult):
    """A `ScoreResult` together with the verdict for every question."""
    verdicts: List[QuestionVerdict]
    total_marks: int = Field(alias="totalMarks")
    marks_obtained: int = Field(alias="marksObtained")
    question_types: Dict[str, int] = Field(default_factory=dict, alias="questionTypes")

    def result(self) -> ScoreResult:
        return ScoreResult(
            total_questions=self.total_questions,
            correct_answers=self.correct_answers,
            score=self.score,
            passed=self.passed,
        )


class ScoreRequest(_CamelModel):
    """Inline scoring request: questions, answers and an optional threshold."""
    questions: List[Question]
    answers: Dict[str, RawAnswer] = Field(default_factory=dict)
    passing_score: Optional[int] = Field(default=None, alias="passingScore")
    mode: Optional[AnswerMode] = None


class Rescore(_CamelModel):
    """Outcome of recomputing a stored attempt's result."""
    previous: Optional[ScoreResult] = None
    result: ScoreResult
    changed: bool
    converted: List[str] = Field(default_factory=list)
    answers: Dict[str, RawAnswer] = Field(default_factory=dict)


class SubmitRequest(_CamelModel):
    """A learner's answers submitted against a stored test."""
    user_id: str = Field(alias="userId")
    answers: Dict[str, RawAnswer] = Field(default_factory=dict)


class AttemptRecord(_CamelModel):
    """A stored attempt together with its current result."""
    attempt_id: str = Field(alias="attemptId")
    attempt: Attempt
    result: Optional[ScoreResult] = None
