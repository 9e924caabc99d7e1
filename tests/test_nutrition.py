"""Nutrition calculator: formulas, lookup tables, rounding, input checks."""

import pytest

from fitplan.core.enums import BMIStatus, Goal, Sex
from fitplan.services.nutrition import (
    ACTIVITY_MULTIPLIERS,
    KCAL_PER_G_CARBS,
    KCAL_PER_G_FAT,
    KCAL_PER_G_PROTEIN,
    NutritionInputError,
    activity_multiplier,
    bmi_status,
    build_nutrition_plan,
    calc_bmr,
    calculate_health,
    goal_calorie_delta,
    macro_targets,
)

MODERATE = "Moderately active (moderate exercise/sports 3-5 days/week)"


def test_reference_scenario_male_lose_weight():
    calc = calculate_health(age=30, sex="Male", weight_kg=80, height_cm=180, activity_level=MODERATE)
    assert calc.bmi == pytest.approx(24.69, abs=0.01)
    assert bmi_status(calc.bmi) is BMIStatus.NORMAL
    expected_bmr = 88.362 + 13.397 * 80 + 4.799 * 180 - 5.677 * 30
    assert calc.bmr == pytest.approx(expected_bmr)
    assert calc.tdee == pytest.approx(expected_bmr * 1.55)

    plan = build_nutrition_plan(calc, "Lose weight")
    assert plan.calorie_target == pytest.approx(calc.tdee - 500)
    assert plan.daily_calories == round(calc.tdee - 500)
    assert (plan.macros.protein_pct, plan.macros.carbs_pct, plan.macros.fat_pct) == (40, 30, 30)


def test_bmi_is_weight_over_height_squared():
    calc = calculate_health(age=40, sex="Female", weight_kg=63.5, height_cm=165, activity_level="Sedentary")
    assert calc.bmi == 63.5 / (1.65 * 1.65)


def test_female_branch():
    assert calc_bmr(60, 165, 25, Sex.FEMALE) == pytest.approx(447.593 + 9.247 * 60 + 3.098 * 165 - 4.330 * 25)


@pytest.mark.parametrize(
    "label,multiplier",
    [
        ("Sedentary (little or no exercise)", 1.2),
        ("Lightly active (light exercise/sports 1-3 days/week)", 1.375),
        (MODERATE, 1.55),
        ("Very active (hard exercise/sports 6-7 days/week)", 1.725),
        ("Extra active (very hard exercise/sports & physical job)", 1.9),
        ("very ACTIVE", 1.725),
    ],
)
def test_activity_labels_match_on_prefix(label, multiplier):
    assert activity_multiplier(label) == multiplier


def test_unknown_activity_defaults_to_sedentary_multiplier():
    assert activity_multiplier("Couch expert") == 1.2
    assert activity_multiplier(None) == 1.2


def test_tdee_uses_table_multiplier():
    for level, multiplier in ACTIVITY_MULTIPLIERS.items():
        calc = calculate_health(age=35, sex="Male", weight_kg=90, height_cm=175, activity_level=level)
        assert calc.tdee == pytest.approx(calc.bmr * multiplier)


@pytest.mark.parametrize(
    "goal", [Goal.MAINTAIN_WEIGHT.value, Goal.IMPROVE_HEALTH.value, Goal.INCREASE_ENERGY.value, None, "Something else"]
)
def test_other_goals_have_no_calorie_adjustment(goal):
    assert goal_calorie_delta(goal) == 0


def test_goal_deltas():
    assert goal_calorie_delta("Lose weight") == -500
    assert goal_calorie_delta("Build muscle") == 300


@pytest.mark.parametrize("calories", [1234.5, 1800, 2260.2, 2873.13, 3999.99])
@pytest.mark.parametrize("goal", ["Lose weight", "Build muscle", "Maintain weight"])
def test_macros_convert_back_within_one_kcal_each(calories, goal):
    m = macro_targets(calories, goal)
    assert m.protein_pct + m.carbs_pct + m.fat_pct == 100
    assert abs(m.protein_g * KCAL_PER_G_PROTEIN - calories * m.protein_pct / 100) <= 1
    assert abs(m.carbs_g * KCAL_PER_G_CARBS - calories * m.carbs_pct / 100) <= 1
    assert abs(m.fat_g * KCAL_PER_G_FAT - calories * m.fat_pct / 100) <= 1


def test_build_muscle_split():
    m = macro_targets(2000, "Build muscle")
    assert (m.protein_pct, m.carbs_pct, m.fat_pct) == (35, 45, 20)
    assert m.protein_g == 175.0
    assert m.carbs_g == 225.0
    assert m.fat_g == pytest.approx(44.4)


@pytest.mark.parametrize(
    "bmi,status",
    [(18.4, BMIStatus.UNDERWEIGHT), (18.5, BMIStatus.NORMAL), (24.99, BMIStatus.NORMAL), (25, BMIStatus.OVERWEIGHT), (30, BMIStatus.OBESE)],
)
def test_bmi_bands(bmi, status):
    assert bmi_status(bmi) is status


@pytest.mark.parametrize("missing", ["age", "sex", "weight_kg", "height_cm", "activity_level"])
def test_missing_input_fails_fast(missing):
    kwargs = {"age": 30, "sex": "Male", "weight_kg": 80, "height_cm": 180, "activity_level": MODERATE}
    kwargs[missing] = None
    with pytest.raises(NutritionInputError):
        calculate_health(**kwargs)


def test_unsupported_sex_category_is_rejected():
    with pytest.raises(NutritionInputError):
        calculate_health(age=30, sex="Other", weight_kg=80, height_cm=180, activity_level=MODERATE)
