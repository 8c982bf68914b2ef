"""Shared fixtures for Assessment service tests."""

import pytest
from packages.schemas.assessment import Question, TestDefinition


@pytest.fixture
def questions() -> list[Question]:
    """Two mcq, one short answer and one integer question."""
    return [
        Question(
            id="q1", type="mcq", text="Capital of France?", correct_answer="Paris",
            options=[{"id": "o1", "text": "Berlin"}, {"id": "o2", "text": "Paris"}],
        ),
        Question(
            id="q2", type="mcq", text="2 + 2?", correct_answer="4",
            options=[{"id": "o3", "text": "4"}, {"id": "o4", "text": "5"}],
        ),
        Question(id="q3", type="shortAnswer", text="Largest planet", correct_answer="Jupiter"),
        Question(id="q4", type="integer", text="Days in a week", correct_answer="7", marks=2),
    ]


@pytest.fixture
def correct_ids() -> dict[str, str]:
    return {"q1": "o2", "q2": "o3", "q3": "jupiter", "q4": "7"}


@pytest.fixture
def correct_texts() -> dict[str, str]:
    return {"q1": "Paris", "q2": "4", "q3": "Jupiter", "q4": "7"}


@pytest.fixture
def test_definition(questions) -> TestDefinition:
    return TestDefinition(id="t1", title="General knowledge", questions=questions, passing_score=50)
