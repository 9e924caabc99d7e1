"""Quiz catalogue, answer validation, and plan derivation from a finished quiz."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Optional

from fitplan.services.nutrition import (
    HealthCalculation,
    NutritionPlan,
    build_nutrition_plan,
    calculate_health,
)

QuestionType = Literal["select", "number", "radio"]

# Question ids the nutrition calculator reads
Q_AGE = 1
Q_GENDER = 2
Q_WEIGHT = 3
Q_HEIGHT = 4
Q_TARGET_WEIGHT = 5
Q_ACTIVITY = 6
Q_GOAL = 8


@dataclass(frozen=True)
class Question:
    id: int
    question: str
    type: QuestionType
    options: Optional[tuple[str, ...]] = None
    unit: Optional[str] = None
    min: Optional[float] = None
    max: Optional[float] = None
    required: bool = True
    info: Optional[str] = None


QUESTIONS: tuple[Question, ...] = (
    Question(1, "What is your age?", "number", min=12, max=100),
    Question(2, "What is your gender?", "select", options=("Male", "Female")),
    Question(3, "What is your current weight?", "number", unit="kg", min=30, max=300),
    Question(4, "What is your height?", "number", unit="cm", min=100, max=250),
    Question(5, "What is your target weight?", "number", unit="kg", min=30, max=300),
    Question(
        6,
        "How would you describe your activity level?",
        "radio",
        options=(
            "Sedentary (little or no exercise)",
            "Lightly active (light exercise/sports 1-3 days/week)",
            "Moderately active (moderate exercise/sports 3-5 days/week)",
            "Very active (hard exercise/sports 6-7 days/week)",
            "Extra active (very hard exercise/sports & physical job)",
        ),
        info="Your activity level helps us determine your daily caloric needs",
    ),
    Question(
        7,
        "Do you have any dietary restrictions?",
        "select",
        options=("None", "Vegetarian", "Vegan", "Gluten-free", "Lactose intolerant", "Keto", "Other"),
    ),
    Question(
        8,
        "What is your primary goal?",
        "radio",
        options=(
            "Lose weight",
            "Build muscle",
            "Maintain weight",
            "Improve overall health",
            "Increase energy levels",
        ),
    ),
    Question(9, "How many meals do you prefer per day?", "select", options=("3 meals", "4 meals", "5 meals", "6 meals")),
    Question(
        10,
        "Do you have any health conditions?",
        "select",
        options=("None", "Diabetes", "High blood pressure", "Heart disease", "Thyroid issues", "Other"),
        info="This helps us customize your plan safely",
    ),
    Question(
        11,
        "How much time can you dedicate to exercise per day?",
        "select",
        options=("Less than 30 minutes", "30-45 minutes", "45-60 minutes", "More than 60 minutes"),
    ),
    Question(
        12,
        "What type of exercises do you prefer?",
        "radio",
        options=(
            "Cardio (running, cycling, swimming)",
            "Strength training",
            "High-Intensity Interval Training (HIIT)",
            "Low-impact exercises (yoga, pilates)",
            "Mix of different exercises",
        ),
    ),
)

QUESTIONS_BY_ID: dict[int, Question] = {q.id: q for q in QUESTIONS}


class QuizValidationError(ValueError):
    """One or more answers failed validation; errors maps question id -> message."""

    def __init__(self, errors: dict[int, str]):
        self.errors = errors
        super().__init__(f"Invalid quiz answers: {sorted(errors)}")


@dataclass
class QuizOutcome:
    answers: dict[int, Any]
    calculations: HealthCalculation
    plan: NutritionPlan
    extras: dict[str, Any] = field(default_factory=dict)


def validate_answer(question_id: int, value: Any) -> Optional[str]:
    """Return an inline error message for one answer, or None if it is valid."""
    question = QUESTIONS_BY_ID.get(question_id)
    if question is None:
        return "Unknown question"

    if value is None or (isinstance(value, str) and value.strip() == ""):
        return "This field is required" if question.required else None

    if question.type == "number":
        if isinstance(value, bool):
            return "Please enter a valid number"
        try:
            number = float(value)
        except (TypeError, ValueError):
            return "Please enter a valid number"
        if number != number:  # NaN
            return "Please enter a valid number"
        if question.min is not None and number < question.min:
            return f"Value must be at least {question.min:g}"
        if question.max is not None and number > question.max:
            return f"Value cannot exceed {question.max:g}"
        return None

    if question.options and str(value) not in question.options:
        return "Please select one of the available options"
    return None


def normalize_answers(raw: dict[Any, Any]) -> dict[int, Any]:
    """Coerce keys to ints (JSON keys arrive as strings) and numeric answers to numbers."""
    answers: dict[int, Any] = {}
    for key, value in raw.items():
        try:
            qid = int(key)
        except (TypeError, ValueError):
            continue
        question = QUESTIONS_BY_ID.get(qid)
        if question is not None and question.type == "number" and value not in (None, ""):
            try:
                number = float(value)
                value = int(number) if number.is_integer() else number
            except (TypeError, ValueError):
                pass
        answers[qid] = value
    return answers


def validate_answers(raw: dict[Any, Any]) -> dict[int, Any]:
    """Validate a complete answer set. Returns normalized answers or raises QuizValidationError."""
    answers = normalize_answers(raw)
    errors: dict[int, str] = {}
    for question in QUESTIONS:
        error = validate_answer(question.id, answers.get(question.id))
        if error:
            errors[question.id] = error
    unknown = set(answers) - set(QUESTIONS_BY_ID)
    for qid in unknown:
        errors[qid] = "Unknown question"
    if errors:
        raise QuizValidationError(errors)
    return answers


def calculate_from_answers(answers: dict[int, Any]) -> HealthCalculation:
    return calculate_health(
        age=answers.get(Q_AGE),
        sex=answers.get(Q_GENDER),
        weight_kg=answers.get(Q_WEIGHT),
        height_cm=answers.get(Q_HEIGHT),
        activity_level=answers.get(Q_ACTIVITY),
    )


def plan_from_snapshot(answers: dict[Any, Any], calculations: dict[str, float]) -> NutritionPlan:
    """Rebuild the derived plan from a stored {answers, calculations} snapshot."""
    normalized = normalize_answers(answers)
    calc = HealthCalculation(
        bmi=float(calculations["bmi"]),
        bmr=float(calculations["bmr"]),
        tdee=float(calculations["tdee"]),
    )
    return build_nutrition_plan(calc, normalized.get(Q_GOAL))


def evaluate_quiz(raw: dict[Any, Any]) -> QuizOutcome:
    """Validate answers, compute the health snapshot and derive the plan."""
    answers = validate_answers(raw)
    calculations = calculate_from_answers(answers)
    plan = build_nutrition_plan(calculations, answers.get(Q_GOAL))
    extras = {
        "target_weight_kg": answers.get(Q_TARGET_WEIGHT),
        "weight_to_target_kg": round(float(answers[Q_WEIGHT]) - float(answers[Q_TARGET_WEIGHT]), 1),
    }
    return QuizOutcome(answers=answers, calculations=calculations, plan=plan, extras=extras)


def build_plan(raw: dict[Any, Any]) -> NutritionPlan:
    """Plan for a complete answer set: calculations, BMI status, calorie target and macros."""
    return evaluate_quiz(raw).plan
