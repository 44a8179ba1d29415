"""
Profile Service

Validation of user-entered profile fields, profile reads and updates, and
recomputation of the derived nutrition targets.
"""

import logging
from datetime import date

from constants import (
    VALID_GENDERS,
    VALID_ACTIVITY_LEVELS,
    VALID_PRIMARY_GOALS,
    VALID_DIET_TYPES,
    VALID_BUDGET_LEVELS,
    VALID_COOKING_SKILLS,
    COMMON_ALLERGIES,
    CUISINES,
    ONBOARDING_STEPS,
    PROFILE_RANGES,
)
from models import db, Profile
from utils.sanitizer import sanitize_name, sanitize_string_list
from .auth import require_user
from .errors import InvalidInput, ProfileNotFound
from .nutrition import compute_nutrition_targets
from .parsing import parse_date, optional_float
from .results import action

logger = logging.getLogger(__name__)

# Fields that feed the nutrition calculator
TARGET_INPUT_FIELDS = (
    'date_of_birth', 'gender', 'height_cm', 'current_weight_kg',
    'activity_level', 'primary_goal', 'weekly_goal_kg',
)

# Required before targets can be computed
REQUIRED_FOR_TARGETS = (
    'date_of_birth', 'gender', 'height_cm', 'current_weight_kg',
    'activity_level', 'primary_goal',
)

EDITABLE_FIELDS = (
    'full_name', 'date_of_birth', 'gender', 'height_cm', 'current_weight_kg',
    'target_weight_kg', 'activity_level', 'primary_goal', 'weekly_goal_kg',
    'target_date', 'diet_type', 'allergies', 'disliked_foods', 'favorite_cuisines',
    'budget_level', 'cooking_skill', 'meal_prep_time_minutes', 'servings_per_meal',
)

# Derived or workflow fields that users may not write
PROTECTED_FIELDS = (
    'daily_calories_target', 'daily_protein_g', 'daily_carbs_g', 'daily_fat_g',
    'targets_need_review', 'onboarding_completed', 'onboarding_step', 'user_id', 'id', 'email',
)


def _choice(valid):
    def check(field, value):
        if value is None or value == '':
            return None
        value = str(value).strip().lower()
        if value not in valid:
            raise InvalidInput(f"Invalid {field}: {value!r}")
        return value
    return check


def _number(integer=False):
    def check(field, value):
        if value is None or value == '':
            return None
        if isinstance(value, bool):
            raise InvalidInput(f"{field} must be a number")
        number = optional_float(value)
        if number is None:
            raise InvalidInput(f"{field} must be a number")
        low, high = PROFILE_RANGES[field]
        if number < low or number > high:
            raise InvalidInput(f"{field} must be between {low} and {high}")
        if integer:
            if number != int(number):
                raise InvalidInput(f"{field} must be a whole number")
            return int(number)
        return number
    return check


def _date(past=False):
    def check(field, value):
        try:
            parsed = parse_date(value)
        except ValueError:
            raise InvalidInput(f"{field} must be a date (YYYY-MM-DD)") from None
        if parsed is not None and past and parsed >= date.today():
            raise InvalidInput(f"{field} must be in the past")
        return parsed
    return check


def _name(field, value):
    return sanitize_name(value, max_length=200) or None


def _string_list(field, value):
    return sanitize_string_list(value, max_items=50, max_length=100)


FIELD_VALIDATORS = {
    'full_name': _name,
    'date_of_birth': _date(past=True),
    'gender': _choice(VALID_GENDERS),
    'height_cm': _number(),
    'current_weight_kg': _number(),
    'target_weight_kg': _number(),
    'activity_level': _choice(VALID_ACTIVITY_LEVELS),
    'primary_goal': _choice(VALID_PRIMARY_GOALS),
    'weekly_goal_kg': _number(),
    'target_date': _date(),
    'diet_type': _choice(VALID_DIET_TYPES),
    'allergies': _string_list,
    'disliked_foods': _string_list,
    'favorite_cuisines': _string_list,
    'budget_level': _choice(VALID_BUDGET_LEVELS),
    'cooking_skill': _choice(VALID_COOKING_SKILLS),
    'meal_prep_time_minutes': _number(integer=True),
    'servings_per_meal': _number(integer=True),
}


def clean_profile_fields(data, allowed=EDITABLE_FIELDS):
    """
    Validate user-entered profile fields.

    Unknown keys are ignored; protected keys raise InvalidInput. Returns a
    dict of cleaned values for the keys present in data.
    """
    if not isinstance(data, dict):
        raise InvalidInput('Expected an object')

    protected = sorted(k for k in data if k in PROTECTED_FIELDS)
    if protected:
        raise InvalidInput(f"Fields cannot be set directly: {', '.join(protected)}")

    cleaned = {}
    for field in allowed:
        if field in data:
            cleaned[field] = FIELD_VALIDATORS[field](field, data[field])
    return cleaned


def missing_target_inputs(values):
    return [f for f in REQUIRED_FOR_TARGETS if values.get(f) in (None, '')]


def apply_nutrition_targets(profile, as_of=None):
    """Recompute and store the daily targets from the profile's own fields."""
    attrs = {field: getattr(profile, field) for field in TARGET_INPUT_FIELDS}
    try:
        targets = compute_nutrition_targets(attrs, as_of=as_of)
    except ValueError as e:
        raise InvalidInput(str(e)) from None
    for key, value in targets.items():
        setattr(profile, key, value)
    return targets


def get_user_profile(user_id):
    profile = Profile.query.filter_by(user_id=user_id).first()
    if profile is None:
        raise ProfileNotFound()
    return profile


def get_profile_options():
    """Choices and ranges offered by the onboarding wizard and profile settings."""
    return {
        'genders': sorted(VALID_GENDERS),
        'activity_levels': sorted(VALID_ACTIVITY_LEVELS),
        'primary_goals': sorted(VALID_PRIMARY_GOALS),
        'diet_types': sorted(VALID_DIET_TYPES),
        'budget_levels': sorted(VALID_BUDGET_LEVELS),
        'cooking_skills': sorted(VALID_COOKING_SKILLS),
        'common_allergies': sorted(COMMON_ALLERGIES),
        'cuisines': sorted(CUISINES),
        'onboarding_steps': [{'step': n, 'name': name} for n, name in sorted(ONBOARDING_STEPS.items())],
        'ranges': {field: list(bounds) for field, bounds in PROFILE_RANGES.items()},
    }


@action('Failed to fetch profile')
def get_profile(user_id):
    require_user(user_id)
    return get_user_profile(user_id).to_dict()


@action('Failed to update profile')
def update_profile(user_id, data):
    """
    Update editable profile fields.

    On a completed profile, a change to any calculator input recomputes
    the daily targets.
    """
    require_user(user_id)
    profile = get_user_profile(user_id)
    cleaned = clean_profile_fields(data)

    changed = [k for k, v in cleaned.items() if getattr(profile, k) != v]
    for key, value in cleaned.items():
        setattr(profile, key, value)

    if profile.onboarding_completed and any(k in TARGET_INPUT_FIELDS for k in changed):
        missing = missing_target_inputs({f: getattr(profile, f) for f in REQUIRED_FOR_TARGETS})
        if missing:
            raise InvalidInput(f"Missing required fields: {', '.join(missing)}")
        apply_nutrition_targets(profile)
        logger.info("Recomputed nutrition targets for user %s", user_id)

    db.session.commit()
    return profile.to_dict()
