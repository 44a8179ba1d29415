"""
Nutrition Calculator

Pure functions turning body stats and goals into daily calorie and macro
targets. No database or network access; identical inputs always give
identical outputs.
"""

import logging
from datetime import date

from constants import (
    ACTIVITY_MULTIPLIERS,
    DEFAULT_ACTIVITY_MULTIPLIER,
    KCAL_PER_KG,
    KCAL_PER_G_PROTEIN,
    KCAL_PER_G_CARBS,
    KCAL_PER_G_FAT,
    ADJUSTED_GOALS,
    MACRO_SPLITS,
    DEFAULT_MACRO_SPLIT,
    BMR_FORMULA_BY_GENDER,
)
from .parsing import round_half_up, parse_date

logger = logging.getLogger(__name__)


def calculate_age(date_of_birth, as_of=None):
    """Whole years between date_of_birth and as_of (default today)."""
    date_of_birth = parse_date(date_of_birth)
    as_of = as_of or date.today()
    age = as_of.year - date_of_birth.year
    # Birthday not reached yet this year
    if (as_of.month, as_of.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def bmr_formula_for(gender):
    """
    Map a profile gender onto the 'male' or 'female' Mifflin-St Jeor branch.

    Raises ValueError for values outside the gender enumeration.
    """
    formula = BMR_FORMULA_BY_GENDER.get((gender or '').lower())
    if formula is None:
        raise ValueError(f"Unsupported gender for BMR: {gender!r}")
    return formula


def calculate_bmr(weight_kg, height_cm, age_years, gender):
    """
    Basal metabolic rate (kcal/day) by the Mifflin-St Jeor equation.

        10 * weight + 6.25 * height - 5 * age + (5 if male else -161)
    """
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age_years
    if bmr_formula_for(gender) == 'male':
        return base + 5
    return base - 161


def calculate_tdee(bmr, activity_level):
    """Total daily energy expenditure; unknown activity levels count as sedentary."""
    multiplier = ACTIVITY_MULTIPLIERS.get(activity_level, DEFAULT_ACTIVITY_MULTIPLIER)
    return round_half_up(bmr * multiplier)


def calculate_calorie_target(tdee, primary_goal, weekly_goal_kg):
    """
    Daily calorie target for a goal.

    weekly_goal_kg carries its own sign (negative to lose). The adjustment
    only applies to lose_weight, gain_weight and build_muscle.
    """
    if primary_goal in ADJUSTED_GOALS:
        daily_adjustment = (weekly_goal_kg or 0) * KCAL_PER_KG / 7
        return round_half_up(tdee + daily_adjustment)
    return round_half_up(tdee)


def calculate_macros(calorie_target, primary_goal, weight_kg):
    """
    Protein, carb and fat grams for a calorie target.

    Returns a dict with protein, carbs, fat and carbs_clamped. Carbs that
    would come out negative are clamped to 0 and carbs_clamped is True.
    """
    protein_per_kg, fat_fraction = MACRO_SPLITS.get(primary_goal, DEFAULT_MACRO_SPLIT)

    protein = round_half_up(weight_kg * protein_per_kg)
    fat = round_half_up(calorie_target * fat_fraction / KCAL_PER_G_FAT)
    carb_calories = calorie_target - protein * KCAL_PER_G_PROTEIN - fat * KCAL_PER_G_FAT
    carbs = round_half_up(carb_calories / KCAL_PER_G_CARBS)

    carbs_clamped = carbs < 0
    if carbs_clamped:
        carbs = 0

    return {
        'protein': protein,
        'carbs': carbs,
        'fat': fat,
        'carbs_clamped': carbs_clamped,
    }


def compute_nutrition_targets(attrs, as_of=None):
    """
    Full pipeline from profile attributes to stored targets.

    attrs needs date_of_birth, gender, height_cm, current_weight_kg,
    activity_level, primary_goal and weekly_goal_kg.
    """
    age = calculate_age(attrs['date_of_birth'], as_of=as_of)
    gender = attrs['gender']
    if gender not in ('male', 'female'):
        logger.info("Gender %r uses the %s BMR formula", gender, bmr_formula_for(gender))

    bmr = calculate_bmr(attrs['current_weight_kg'], attrs['height_cm'], age, gender)
    tdee = calculate_tdee(bmr, attrs['activity_level'])
    calories = calculate_calorie_target(tdee, attrs['primary_goal'], attrs.get('weekly_goal_kg') or 0)
    macros = calculate_macros(calories, attrs['primary_goal'], attrs['current_weight_kg'])

    needs_review = macros['carbs_clamped'] or calories <= 0
    if needs_review:
        logger.warning(
            "Calorie target %s is too low for protein/fat floors; carbs clamped to 0",
            calories,
        )

    return {
        'daily_calories_target': calories,
        'daily_protein_g': macros['protein'],
        'daily_carbs_g': macros['carbs'],
        'daily_fat_g': macros['fat'],
        'targets_need_review': needs_review,
    }
