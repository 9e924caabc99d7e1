"""Quiz catalogue and answer validation."""

import pytest
from conftest import VALID_ANSWERS

from fitplan.services.quiz import (
    QUESTIONS,
    QuizValidationError,
    build_plan,
    evaluate_quiz,
    normalize_answers,
    plan_from_snapshot,
    validate_answer,
    validate_answers,
)


def test_catalogue_has_twelve_questions_in_order():
    assert [q.id for q in QUESTIONS] == list(range(1, 13))


@pytest.mark.parametrize(
    "qid,value,message",
    [
        (1, None, "This field is required"),
        (1, "  ", "This field is required"),
        (1, "abc", "Please enter a valid number"),
        (1, 11, "Value must be at least 12"),
        (1, 101, "Value cannot exceed 100"),
        (3, 29.9, "Value must be at least 30"),
        (2, "Robot", "Please select one of the available options"),
        (99, 1, "Unknown question"),
    ],
)
def test_field_errors(qid, value, message):
    assert validate_answer(qid, value) == message


def test_valid_fields_have_no_error():
    assert validate_answer(1, "30") is None
    assert validate_answer(4, 180.5) is None
    assert validate_answer(8, "Build muscle") is None


def test_normalize_coerces_keys_and_numbers():
    answers = normalize_answers({"1": "30", "3": "80.5", "2": "Male", "junk": 1})
    assert answers == {1: 30, 3: 80.5, 2: "Male"}


def test_whole_set_collects_every_error():
    raw = dict(VALID_ANSWERS)
    del raw["2"]
    raw["4"] = 99
    with pytest.raises(QuizValidationError) as exc:
        validate_answers(raw)
    assert exc.value.errors == {2: "This field is required", 4: "Value must be at least 100"}


def test_evaluate_quiz_derives_plan_and_target_gap():
    outcome = evaluate_quiz(VALID_ANSWERS)
    assert outcome.calculations.bmi == pytest.approx(24.69, abs=0.01)
    assert outcome.plan.goal == "Lose weight"
    assert outcome.extras == {"target_weight_kg": 72, "weight_to_target_kg": 8.0}


def test_snapshot_rebuilds_same_plan():
    outcome = evaluate_quiz(VALID_ANSWERS)
    rebuilt = plan_from_snapshot(VALID_ANSWERS, outcome.calculations.to_dict())
    assert rebuilt == outcome.plan
    assert build_plan(VALID_ANSWERS) == outcome.plan
