"""Tests for legacy text-answer migration and re-scoring."""

from packages.schemas.assessment import Attempt, Question, ScoreResult
from services.assessment.migration import rescore, to_option_ids


def test_to_option_ids_converts_text_answers(questions, correct_texts, correct_ids) -> None:
    answers, converted = to_option_ids(questions, correct_texts)
    assert converted == ["q1", "q2"]
    assert answers["q1"] == "o2" and answers["q2"] == "o3"
    # non-choice answers are untouched
    assert answers["q3"] == "Jupiter" and answers["q4"] == "7"


def test_to_option_ids_keeps_existing_ids_and_unknowns(questions) -> None:
    src = {"q1": "o1", "q2": "seven", "zz": "Paris"}
    answers, converted = to_option_ids(questions, src)
    assert answers == src
    assert converted == []
    assert src == {"q1": "o1", "q2": "seven", "zz": "Paris"}


def test_option_id_wins_over_matching_text() -> None:
    # An option whose text equals another option's id: the id reading is kept.
    q = Question(id="m", type="mcq", correct_answer="b",
                 options=[{"id": "a", "text": "b"}, {"id": "b", "text": "c"}])
    answers, converted = to_option_ids([q], {"m": "b"})
    assert answers == {"m": "b"} and converted == []


def test_rescore_repairs_text_mode_attempt(test_definition, correct_texts) -> None:
    attempt = Attempt(user_id="u1", test_id="t1", answers=correct_texts)
    stale = ScoreResult(total_questions=4, correct_answers=2, score=50, passed=True)
    out = rescore(test_definition, attempt, stale, legacy_text=True)
    assert out.result.score == 100
    assert out.changed is True
    assert out.previous == stale
    assert out.converted == ["q1", "q2"]
    assert out.answers["q1"] == "o2"


def test_rescore_without_migration_reports_unchanged(test_definition, correct_ids) -> None:
    attempt = Attempt(user_id="u1", test_id="t1", answers=correct_ids)
    current = ScoreResult(total_questions=4, correct_answers=4, score=100, passed=True)
    out = rescore(test_definition, attempt, current)
    assert out.changed is False
    assert out.converted == []
    assert out.answers == correct_ids


def test_rescore_without_previous_is_changed(test_definition) -> None:
    out = rescore(test_definition, Attempt(user_id="u", test_id="t1"))
    assert out.previous is None and out.changed is True
    assert out.result.score == 0 and out.result.passed is False
