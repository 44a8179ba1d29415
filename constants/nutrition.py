"""
Nutrition Constants

Activity multipliers, energy conversions and macro split tables used by
the nutrition calculator, plus the fallbacks used when a profile has no
computed targets yet.
"""

# TDEE multipliers by activity level
ACTIVITY_MULTIPLIERS = {
    'sedentary': 1.2,
    'lightly_active': 1.375,
    'moderately_active': 1.55,
    'very_active': 1.725,
    'extremely_active': 1.9,
}
DEFAULT_ACTIVITY_MULTIPLIER = 1.2

# 1 kg of body fat is roughly 7700 kcal
KCAL_PER_KG = 7700

KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9

# Goals whose calorie target includes the weekly rate adjustment
ADJUSTED_GOALS = {'lose_weight', 'gain_weight', 'build_muscle'}

# Primary goal -> (protein grams per kg body weight, fraction of calories from fat)
MACRO_SPLITS = {
    'build_muscle': (2.0, 0.25),
    'lose_weight': (1.8, 0.25),
    'body_recomposition': (1.8, 0.25),
    'gain_weight': (1.6, 0.30),
}
DEFAULT_MACRO_SPLIT = (1.4, 0.30)

# Gender -> BMR formula branch
BMR_FORMULA_BY_GENDER = {
    'male': 'male',
    'female': 'female',
    'other': 'female',
    'prefer_not_to_say': 'female',
}

# Used when a profile has no computed targets
FALLBACK_TARGETS = {
    'calories': 2000,
    'protein_g': 150,
    'carbs_g': 200,
    'fat_g': 70,
}

# Generation request defaults
DEFAULT_DIET_TYPE = 'standard'
DEFAULT_COOKING_SKILL = 'intermediate'
DEFAULT_MAX_PREP_TIME = 45
DEFAULT_BUDGET_LEVEL = 'moderate'
DEFAULT_SERVINGS_PER_MEAL = 1
