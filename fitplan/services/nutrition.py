"""Nutrition calculator: quiz answers -> BMI / BMR / TDEE -> calorie and macro targets.

Pure functions, no DB access. BMR uses the revised Harris-Benedict equation,
branched on the two sex categories the quiz offers.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Optional

from fitplan.core.enums import ActivityLevel, BMIStatus, Goal, Sex

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE: 1.375,
    ActivityLevel.MODERATELY_ACTIVE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.725,
    ActivityLevel.EXTRA_ACTIVE: 1.9,
}
DEFAULT_ACTIVITY_MULTIPLIER = 1.2

GOAL_CALORIE_DELTA: dict[Goal, int] = {
    Goal.LOSE_WEIGHT: -500,
    Goal.BUILD_MUSCLE: 300,
}

# (protein, carbs, fat) percentages of the calorie target
MACRO_SPLITS: dict[Goal, tuple[int, int, int]] = {
    Goal.LOSE_WEIGHT: (40, 30, 30),
    Goal.BUILD_MUSCLE: (35, 45, 20),
}
DEFAULT_MACRO_SPLIT = (30, 40, 30)

KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9


class NutritionInputError(ValueError):
    """A required calculator input is missing or unusable."""


@dataclass(frozen=True)
class HealthCalculation:
    bmi: float
    bmr: float
    tdee: float

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class MacroTargets:
    protein_pct: int
    carbs_pct: int
    fat_pct: int
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class NutritionPlan:
    calculations: HealthCalculation
    bmi_status: BMIStatus
    goal: Optional[str]
    calorie_target: float
    daily_calories: int
    macros: MacroTargets


def parse_activity_level(value: Any) -> Optional[ActivityLevel]:
    """Match a quiz option like "Very active (hard exercise ...)" on its label."""
    if value is None:
        return None
    label = str(value).split("(", 1)[0].strip().lower()
    for level in ActivityLevel:
        if level.value.lower() == label:
            return level
    return None


def parse_goal(value: Any) -> Optional[Goal]:
    if value is None:
        return None
    text = str(value).strip().lower()
    for goal in Goal:
        if goal.value.lower() == text:
            return goal
    return None


def activity_multiplier(activity_level: Any) -> float:
    """Multiplier from the five-entry table; unmatched or missing -> 1.2."""
    level = activity_level if isinstance(activity_level, ActivityLevel) else parse_activity_level(activity_level)
    if level is None:
        return DEFAULT_ACTIVITY_MULTIPLIER
    return ACTIVITY_MULTIPLIERS[level]


def calc_bmi(weight_kg: float, height_cm: float) -> float:
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def calc_bmr(weight_kg: float, height_cm: float, age: float, sex: Sex) -> float:
    """Harris-Benedict BMR (kcal/day). Only the two quiz categories are defined."""
    if sex is Sex.MALE:
        return 88.362 + 13.397 * weight_kg + 4.799 * height_cm - 5.677 * age
    if sex is Sex.FEMALE:
        return 447.593 + 9.247 * weight_kg + 3.098 * height_cm - 4.330 * age
    raise NutritionInputError(f"Unsupported sex category: {sex!r}")


def bmi_status(bmi: float) -> BMIStatus:
    if bmi < 18.5:
        return BMIStatus.UNDERWEIGHT
    if bmi < 25:
        return BMIStatus.NORMAL
    if bmi < 30:
        return BMIStatus.OVERWEIGHT
    return BMIStatus.OBESE


def _require_number(name: str, value: Any) -> float:
    if value is None or value == "":
        raise NutritionInputError(f"Missing required input: {name}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise NutritionInputError(f"Input {name} must be a number") from None
    if number <= 0:
        raise NutritionInputError(f"Input {name} must be positive")
    return number


def _require_sex(value: Any) -> Sex:
    if isinstance(value, Sex):
        return value
    if value is None or value == "":
        raise NutritionInputError("Missing required input: sex")
    try:
        return Sex(str(value).strip().capitalize())
    except ValueError:
        raise NutritionInputError(f"Unsupported sex category: {value!r}") from None


def calculate_health(
    age: Any,
    sex: Any,
    weight_kg: Any,
    height_cm: Any,
    activity_level: Any,
) -> HealthCalculation:
    """Compute {bmi, bmr, tdee}. Fails fast if any of the five inputs is absent."""
    if activity_level is None or activity_level == "":
        raise NutritionInputError("Missing required input: activity_level")
    age_years = _require_number("age", age)
    weight = _require_number("weight", weight_kg)
    height = _require_number("height", height_cm)
    sex_category = _require_sex(sex)

    bmi = calc_bmi(weight, height)
    bmr = calc_bmr(weight, height, age_years, sex_category)
    tdee = bmr * activity_multiplier(activity_level)
    return HealthCalculation(bmi=bmi, bmr=bmr, tdee=tdee)


def goal_calorie_delta(goal: Any) -> int:
    parsed = goal if isinstance(goal, Goal) else parse_goal(goal)
    return GOAL_CALORIE_DELTA.get(parsed, 0) if parsed else 0


def calorie_target(tdee: float, goal: Any) -> float:
    return tdee + goal_calorie_delta(goal)


def macro_targets(calories: float, goal: Any) -> MacroTargets:
    """Split calories by the goal's percentage table and convert to grams (0.1 g)."""
    parsed = goal if isinstance(goal, Goal) else parse_goal(goal)
    protein_pct, carbs_pct, fat_pct = MACRO_SPLITS.get(parsed, DEFAULT_MACRO_SPLIT) if parsed else DEFAULT_MACRO_SPLIT
    return MacroTargets(
        protein_pct=protein_pct,
        carbs_pct=carbs_pct,
        fat_pct=fat_pct,
        protein_g=round(calories * protein_pct / 100 / KCAL_PER_G_PROTEIN, 1),
        carbs_g=round(calories * carbs_pct / 100 / KCAL_PER_G_CARBS, 1),
        fat_g=round(calories * fat_pct / 100 / KCAL_PER_G_FAT, 1),
    )


def build_nutrition_plan(calculations: HealthCalculation, goal: Any) -> NutritionPlan:
    """Derive calorie target and macro grams from a stored calculation and the goal."""
    target = calorie_target(calculations.tdee, goal)
    return NutritionPlan(
        calculations=calculations,
        bmi_status=bmi_status(calculations.bmi),
        goal=str(goal) if goal is not None else None,
        calorie_target=target,
        daily_calories=round(target),
        macros=macro_targets(target, goal),
    )
