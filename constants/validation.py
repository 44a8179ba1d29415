"""
Validation Constants

Contains whitelist values for validating user input and generator output
to ensure data integrity.
"""

VALID_GENDERS = {'male', 'female', 'other', 'prefer_not_to_say'}

VALID_ACTIVITY_LEVELS = {
    'sedentary', 'lightly_active', 'moderately_active',
    'very_active', 'extremely_active'
}

VALID_PRIMARY_GOALS = {
    'lose_weight', 'gain_weight', 'build_muscle',
    'maintain_weight', 'body_recomposition'
}

VALID_DIET_TYPES = {
    'standard', 'vegetarian', 'vegan', 'pescatarian', 'keto',
    'paleo', 'mediterranean', 'halal', 'kosher'
}

VALID_BUDGET_LEVELS = {'budget', 'moderate', 'premium'}

VALID_COOKING_SKILLS = {'beginner', 'intermediate', 'advanced'}

VALID_DIFFICULTIES = {'easy', 'medium', 'hard'}

VALID_MOODS = {'great', 'good', 'okay', 'bad'}

VALID_CONFIDENCE_LEVELS = {'low', 'medium', 'high'}

# Meal slots in display order
MEAL_TYPES = ('breakfast', 'lunch', 'dinner', 'snack')
VALID_MEAL_TYPES = set(MEAL_TYPES)

# Generator spellings that map onto a meal slot
MEAL_TYPE_ALIASES = {
    'snacks': 'snack',
    'brunch': 'lunch',
    'supper': 'dinner',
}

GROCERY_CATEGORIES = (
    'Produce', 'Meat & Seafood', 'Dairy & Eggs', 'Bakery', 'Frozen',
    'Pantry', 'Canned Goods', 'Condiments & Sauces', 'Snacks',
    'Beverages', 'Other',
)

COMMON_ALLERGIES = {
    'dairy', 'eggs', 'peanuts', 'tree_nuts', 'soy',
    'wheat', 'fish', 'shellfish', 'sesame'
}

CUISINES = {
    'american', 'italian', 'mexican', 'chinese', 'japanese', 'korean',
    'thai', 'indian', 'mediterranean', 'middle_eastern', 'french', 'greek'
}

# Onboarding wizard steps (step number -> step name)
ONBOARDING_STEPS = {
    1: 'goals',
    2: 'body_stats',
    3: 'dietary',
    4: 'preferences',
    5: 'complete',
}

# Numeric ranges accepted from users (inclusive)
PROFILE_RANGES = {
    'height_cm': (50, 272),
    'current_weight_kg': (20, 500),
    'target_weight_kg': (20, 500),
    'weekly_goal_kg': (-1.5, 1.5),
    'meal_prep_time_minutes': (5, 240),
    'servings_per_meal': (1, 12),
}

# Numeric ranges accepted from the generator (values are clamped)
GENERATED_RANGES = {
    'calories': (0, 5000),
    'macro_g': (0, 1000),
    'minutes': (0, 1440),
    'servings': (1, 50),
    'cost': (0, 10000),
}

# Maximum field lengths
MAX_LENGTHS = {
    'recipe_name': 200,
    'description': 2000,
    'ingredient_name': 200,
    'unit': 30,
    'instruction': 2000,
    'tag': 50,
    'cuisine': 50,
    'category': 50,
    'plan_name': 200,
    'food_name': 200,
    'notes': 1000,
    'photo_url': 500,
}
