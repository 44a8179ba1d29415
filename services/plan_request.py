"""
Plan Request Builder

Maps a user profile and generation options onto the immutable request
sent to the meal plan generator. Pure mapping and defaulting; no side
effects.
"""

import json
from dataclasses import dataclass, asdict

from constants import (
    FALLBACK_TARGETS,
    DEFAULT_DIET_TYPE,
    DEFAULT_COOKING_SKILL,
    DEFAULT_MAX_PREP_TIME,
    DEFAULT_BUDGET_LEVEL,
    DEFAULT_SERVINGS_PER_MEAL,
)
from .errors import InvalidInput


@dataclass(frozen=True)
class GenerationOptions:
    """Plan shape chosen by the user."""
    number_of_days: int
    include_snacks: bool = False

    @property
    def meals_per_day(self):
        return 4 if self.include_snacks else 3


@dataclass(frozen=True)
class MealPlanRequest:
    """Everything the generator needs to produce a plan."""
    daily_calories: int
    daily_protein: int
    daily_carbs: int
    daily_fat: int
    diet_type: str
    allergies: tuple
    disliked_foods: tuple
    favorite_cuisines: tuple
    cooking_skill: str
    max_prep_time: int
    budget_level: str
    servings_per_meal: int
    number_of_days: int
    meals_per_day: int

    def to_dict(self):
        data = asdict(self)
        for key in ('allergies', 'disliked_foods', 'favorite_cuisines'):
            data[key] = list(data[key])
        return data

    def to_json(self):
        """Serialized form stored on the meal plan for audit/regeneration."""
        return json.dumps(self.to_dict(), sort_keys=True)


def parse_generation_options(data, max_days=14):
    """
    Validate raw generation options.

    Accepts number_of_days/numberOfDays and include_snacks/includeSnacks.
    """
    data = data or {}
    raw_days = data.get('number_of_days', data.get('numberOfDays'))
    raw_snacks = data.get('include_snacks', data.get('includeSnacks', False))

    if isinstance(raw_days, bool):
        raise InvalidInput('number_of_days must be a whole number')
    try:
        number_of_days = int(raw_days)
    except (TypeError, ValueError):
        raise InvalidInput('number_of_days must be a whole number') from None
    if number_of_days != raw_days and str(number_of_days) != str(raw_days).strip():
        raise InvalidInput('number_of_days must be a whole number')
    if number_of_days < 1:
        raise InvalidInput('number_of_days must be at least 1')
    if number_of_days > max_days:
        raise InvalidInput(f'number_of_days must be at most {max_days}')

    if isinstance(raw_snacks, str):
        include_snacks = raw_snacks.strip().lower() in ('1', 'true', 'yes', 'on')
    else:
        include_snacks = bool(raw_snacks)

    return GenerationOptions(number_of_days=number_of_days, include_snacks=include_snacks)


def _or_default(value, default):
    return value if value else default


def _target_or_fallback(value, default):
    return value if value is not None else default


def build_meal_plan_request(profile, options):
    """Build the generator request from a Profile and GenerationOptions."""
    return MealPlanRequest(
        daily_calories=_target_or_fallback(profile.daily_calories_target, FALLBACK_TARGETS['calories']),
        daily_protein=_target_or_fallback(profile.daily_protein_g, FALLBACK_TARGETS['protein_g']),
        daily_carbs=_target_or_fallback(profile.daily_carbs_g, FALLBACK_TARGETS['carbs_g']),
        daily_fat=_target_or_fallback(profile.daily_fat_g, FALLBACK_TARGETS['fat_g']),
        diet_type=_or_default(profile.diet_type, DEFAULT_DIET_TYPE),
        allergies=tuple(profile.allergies or ()),
        disliked_foods=tuple(profile.disliked_foods or ()),
        favorite_cuisines=tuple(profile.favorite_cuisines or ()),
        cooking_skill=_or_default(profile.cooking_skill, DEFAULT_COOKING_SKILL),
        max_prep_time=_or_default(profile.meal_prep_time_minutes, DEFAULT_MAX_PREP_TIME),
        budget_level=_or_default(profile.budget_level, DEFAULT_BUDGET_LEVEL),
        servings_per_meal=_or_default(profile.servings_per_meal, DEFAULT_SERVINGS_PER_MEAL),
        number_of_days=options.number_of_days,
        meals_per_day=options.meals_per_day,
    )
