"""
Constants Package

Enumerations, ranges and lookup tables shared across the application.
"""

from .units import UNIT_ALIASES, COMMON_FRACTIONS, UNICODE_FRACTIONS
from .validation import (
    VALID_GENDERS,
    VALID_ACTIVITY_LEVELS,
    VALID_PRIMARY_GOALS,
    VALID_DIET_TYPES,
    VALID_BUDGET_LEVELS,
    VALID_COOKING_SKILLS,
    VALID_DIFFICULTIES,
    VALID_MOODS,
    VALID_CONFIDENCE_LEVELS,
    MEAL_TYPES,
    VALID_MEAL_TYPES,
    MEAL_TYPE_ALIASES,
    GROCERY_CATEGORIES,
    COMMON_ALLERGIES,
    CUISINES,
    ONBOARDING_STEPS,
    PROFILE_RANGES,
    GENERATED_RANGES,
    MAX_LENGTHS,
)
from .nutrition import (
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
    FALLBACK_TARGETS,
    DEFAULT_DIET_TYPE,
    DEFAULT_COOKING_SKILL,
    DEFAULT_MAX_PREP_TIME,
    DEFAULT_BUDGET_LEVEL,
    DEFAULT_SERVINGS_PER_MEAL,
)
