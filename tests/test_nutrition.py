"""Nutrition calculator: worked examples, rounding, clamping and gender policy."""

from datetime import date

import pytest

from services.nutrition import (
    calculate_age,
    calculate_bmr,
    calculate_tdee,
    calculate_calorie_target,
    calculate_macros,
    compute_nutrition_targets,
    bmr_formula_for,
)
from services.parsing import round_half_up


def test_bmr_male_example():
    assert calculate_bmr(70, 175, 30, 'male') == 1648.75


def test_bmr_female_uses_minus_161():
    assert calculate_bmr(70, 175, 30, 'female') == 1648.75 - 5 - 161


def test_tdee_moderately_active():
    assert calculate_tdee(1648.75, 'moderately_active') == 2556


def test_tdee_unknown_activity_defaults_to_sedentary():
    assert calculate_tdee(1000, 'couch_surfing') == 1200
    assert calculate_tdee(1000, None) == 1200


def test_calorie_target_lose_weight():
    assert calculate_calorie_target(2556, 'lose_weight', -0.5) == 2006


def test_calorie_target_ignores_weekly_goal_for_maintenance():
    assert calculate_calorie_target(2556, 'maintain_weight', -0.5) == 2556
    assert calculate_calorie_target(2556, 'body_recomposition', 0.5) == 2556


def test_calorie_target_gain():
    assert calculate_calorie_target(2500, 'gain_weight', 0.25) == 2775


def test_macros_lose_weight_example():
    macros = calculate_macros(2006, 'lose_weight', 70)
    assert macros['protein'] == 126
    assert macros['fat'] == 56
    assert macros['carbs'] == 250
    assert macros['carbs_clamped'] is False


@pytest.mark.parametrize('goal,protein,fat', [
    ('build_muscle', 160, 69),      # 2.0 g/kg, 25%
    ('gain_weight', 128, 83),       # 1.6 g/kg, 30%
    ('maintain_weight', 112, 83),   # default 1.4 g/kg, 30%
])
def test_macro_splits_by_goal(goal, protein, fat):
    macros = calculate_macros(2500, goal, 80)
    assert macros['protein'] == protein
    assert macros['fat'] == fat


def test_macros_clamp_negative_carbs():
    macros = calculate_macros(800, 'build_muscle', 150)
    assert macros['carbs'] == 0
    assert macros['carbs_clamped'] is True


def test_age_before_and_on_birthday():
    dob = date(2000, 6, 15)
    assert calculate_age(dob, as_of=date(2024, 6, 14)) == 23
    assert calculate_age(dob, as_of=date(2024, 6, 15)) == 24
    assert calculate_age('2000-06-15', as_of=date(2024, 12, 1)) == 24


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(-2.5) == -2
    assert round_half_up(55.72) == 56


@pytest.mark.parametrize('gender,formula', [
    ('male', 'male'),
    ('female', 'female'),
    ('other', 'female'),
    ('prefer_not_to_say', 'female'),
])
def test_gender_policy(gender, formula):
    assert bmr_formula_for(gender) == formula


def test_unknown_gender_rejected():
    with pytest.raises(ValueError):
        calculate_bmr(70, 175, 30, 'unicorn')


PROFILE = {
    'date_of_birth': date(1994, 3, 1),
    'gender': 'male',
    'height_cm': 175,
    'current_weight_kg': 70,
    'activity_level': 'moderately_active',
    'primary_goal': 'lose_weight',
    'weekly_goal_kg': -0.5,
}


def test_compute_targets_full_pipeline():
    targets = compute_nutrition_targets(PROFILE, as_of=date(2024, 6, 1))
    assert targets == {
        'daily_calories_target': 2006,
        'daily_protein_g': 126,
        'daily_carbs_g': 250,
        'daily_fat_g': 56,
        'targets_need_review': False,
    }


def test_compute_targets_is_deterministic():
    first = compute_nutrition_targets(PROFILE, as_of=date(2024, 6, 1))
    second = compute_nutrition_targets(dict(PROFILE), as_of=date(2024, 6, 1))
    assert first == second


def test_compute_targets_flags_clamped_carbs():
    attrs = dict(PROFILE, current_weight_kg=150, height_cm=150, primary_goal='build_muscle',
                 weekly_goal_kg=-1.5, activity_level='sedentary',
                 date_of_birth=date(1940, 1, 1), gender='female')
    targets = compute_nutrition_targets(attrs, as_of=date(2024, 6, 1))
    assert targets['daily_carbs_g'] == 0
    assert targets['targets_need_review'] is True
