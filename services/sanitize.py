"""
Candidate Plan Sanitizer

The generator's output is semi-trusted JSON. Everything it returns passes
through here before any row is written: text is trimmed and length-limited,
numbers are coerced and clamped, and meals that cannot become a usable
recipe are dropped.
"""

import logging
import re

from constants import (
    VALID_MEAL_TYPES,
    MEAL_TYPE_ALIASES,
    VALID_DIFFICULTIES,
    GENERATED_RANGES,
    MAX_LENGTHS,
)
from utils.sanitizer import sanitize_text, sanitize_name, sanitize_string_list, sanitize_unit
from .parsing import safe_float, safe_int, optional_float

logger = logging.getLogger(__name__)

DAY_PATTERN = re.compile(r'^-?[0-9]+$')


def _pick(data, *keys, default=None):
    """First present key among camelCase/snake_case spellings."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _clamped(value, range_key):
    low, high = GENERATED_RANGES[range_key]
    return optional_float(value, min_val=low, max_val=high)


def _minutes(value):
    if value is None or value == '':
        return None
    low, high = GENERATED_RANGES['minutes']
    return safe_int(value, default=None, min_val=low, max_val=high)


def normalize_meal_type(value):
    """Map generator meal type spellings onto a slot; None if unknown."""
    if not isinstance(value, str):
        return None
    meal_type = value.strip().lower()
    meal_type = MEAL_TYPE_ALIASES.get(meal_type, meal_type)
    return meal_type if meal_type in VALID_MEAL_TYPES else None


def sanitize_ingredients(raw_ingredients):
    """List of {name, amount, unit}; entries without a name are dropped."""
    if not isinstance(raw_ingredients, list):
        return []

    ingredients = []
    for raw in raw_ingredients:
        if isinstance(raw, str):
            raw = {'name': raw}
        if not isinstance(raw, dict):
            continue
        name = sanitize_name(raw.get('name'), max_length=MAX_LENGTHS['ingredient_name'])
        if not name:
            continue
        ingredients.append({
            'name': name,
            'amount': optional_float(_pick(raw, 'amount', 'quantity', 'qty'), min_val=0),
            'unit': sanitize_unit(raw.get('unit'), max_length=MAX_LENGTHS['unit']),
        })
    return ingredients


def sanitize_instructions(raw_instructions):
    """List of {step, text}, renumbered from 1."""
    if isinstance(raw_instructions, str):
        raw_instructions = raw_instructions.splitlines()
    if not isinstance(raw_instructions, list):
        return []

    steps = []
    for raw in raw_instructions:
        if isinstance(raw, dict):
            raw = _pick(raw, 'text', 'instruction', 'description')
        text = sanitize_text(raw, max_length=MAX_LENGTHS['instruction'])
        if text:
            steps.append({'step': len(steps) + 1, 'text': text})
    return steps


def sanitize_meal(raw):
    """
    Normalize one generated meal.

    Returns (meal, None) on success or (None, reason) when the meal must be
    skipped.
    """
    if not isinstance(raw, dict):
        return None, 'not an object'

    name = sanitize_name(raw.get('name'), max_length=MAX_LENGTHS['recipe_name'])
    if not name:
        return None, 'missing name'

    meal_type = normalize_meal_type(_pick(raw, 'mealType', 'meal_type'))
    if meal_type is None:
        return None, f"unknown meal type {_pick(raw, 'mealType', 'meal_type')!r}"

    ingredients = sanitize_ingredients(raw.get('ingredients'))
    if not ingredients:
        return None, 'no ingredients'

    instructions = sanitize_instructions(raw.get('instructions'))
    if not instructions:
        return None, 'no instructions'

    difficulty = raw.get('difficulty')
    difficulty = difficulty.strip().lower() if isinstance(difficulty, str) else None
    if difficulty not in VALID_DIFFICULTIES:
        difficulty = None

    low, high = GENERATED_RANGES['servings']
    prep = _minutes(_pick(raw, 'prepTime', 'prep_time_minutes', 'prep_time'))
    cook = _minutes(_pick(raw, 'cookTime', 'cook_time_minutes', 'cook_time'))
    total = None if prep is None and cook is None else (prep or 0) + (cook or 0)

    meal = {
        'name': name,
        'description': sanitize_text(raw.get('description'), max_length=MAX_LENGTHS['description']),
        'meal_type': meal_type,
        'prep_time_minutes': prep,
        'cook_time_minutes': cook,
        'total_time_minutes': total,
        'servings': safe_int(raw.get('servings'), default=1, min_val=low, max_val=high),
        'difficulty': difficulty,
        'calories': _clamped(raw.get('calories'), 'calories'),
        'protein_g': _clamped(_pick(raw, 'protein', 'protein_g'), 'macro_g'),
        'carbs_g': _clamped(_pick(raw, 'carbs', 'carbs_g'), 'macro_g'),
        'fat_g': _clamped(_pick(raw, 'fat', 'fat_g'), 'macro_g'),
        'fiber_g': _clamped(_pick(raw, 'fiber', 'fiber_g'), 'macro_g'),
        'ingredients': ingredients,
        'instructions': instructions,
        'cuisine': sanitize_name(raw.get('cuisine'), max_length=MAX_LENGTHS['cuisine']) or None,
        'tags': sanitize_string_list(raw.get('tags'), max_items=20, max_length=MAX_LENGTHS['tag']),
        'estimated_cost': _clamped(_pick(raw, 'estimatedCost', 'estimated_cost'), 'cost'),
    }
    return meal, None


def _day_index(raw_day, position):
    """Day index from the generator, or the 1-based position when it is not an integer."""
    value = raw_day.get('day') if isinstance(raw_day, dict) else None
    if isinstance(value, bool):
        return position
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and DAY_PATTERN.match(value.strip()):
        return int(value.strip())
    return position


def sanitize_shopping_list(raw_groups):
    """List of {category, items: [{name, amount, unit, estimated_cost}]}."""
    if isinstance(raw_groups, dict):
        raw_groups = [{'category': k, 'items': v} for k, v in raw_groups.items()]
    if not isinstance(raw_groups, list):
        return []

    groups = []
    for raw_group in raw_groups:
        if not isinstance(raw_group, dict):
            continue
        category = sanitize_name(raw_group.get('category'), default='Other',
                                 max_length=MAX_LENGTHS['category'])
        raw_items = raw_group.get('items')
        if not isinstance(raw_items, list):
            logger.warning("Skipping shopping list group %r: items is not a list", category)
            continue
        items = []
        for raw_item in raw_items:
            if not isinstance(raw_item, dict):
                continue
            name = sanitize_name(raw_item.get('name'), max_length=MAX_LENGTHS['ingredient_name'])
            if not name:
                continue
            items.append({
                'name': name,
                'amount': safe_float(_pick(raw_item, 'amount', 'quantity'), default=0.0, min_val=0),
                'unit': sanitize_unit(raw_item.get('unit'), max_length=MAX_LENGTHS['unit']),
                'estimated_cost': _clamped(_pick(raw_item, 'estimatedCost', 'estimated_cost'), 'cost'),
            })
        if items:
            groups.append({'category': category, 'items': items})
    return groups


def sanitize_candidate_plan(raw, total_days):
    """
    Validate and normalize a candidate meal plan.

    Args:
        raw: Parsed generator output (dict)
        total_days: Number of days requested; day indexes outside
            1..total_days are skipped

    Returns:
        dict with name, description, total_estimated_cost, days,
        shopping_list, skipped_meals and skipped_days
    """
    if not isinstance(raw, dict):
        raw = {}

    days = []
    skipped_meals = 0
    skipped_days = 0
    seen = set()
    raw_days = raw.get('days') if isinstance(raw.get('days'), list) else []

    for position, raw_day in enumerate(raw_days, start=1):
        index = _day_index(raw_day, position)
        raw_meals = raw_day.get('meals') if isinstance(raw_day, dict) else None
        raw_meals = raw_meals if isinstance(raw_meals, list) else []

        if index < 1 or index > total_days:
            logger.warning("Skipping generated day %s: outside 1..%s", index, total_days)
            skipped_days += 1
            skipped_meals += len(raw_meals)
            continue
        if index in seen:
            logger.warning("Skipping generated day %s: repeated day index", index)
            skipped_days += 1
            skipped_meals += len(raw_meals)
            continue
        seen.add(index)

        meals = []
        for raw_meal in raw_meals:
            meal, reason = sanitize_meal(raw_meal)
            if meal is None:
                skipped_meals += 1
                logger.warning("Skipping generated meal on day %s: %s", index, reason)
                continue
            meals.append(meal)
        days.append({'day': index, 'meals': meals})

    return {
        'name': sanitize_name(raw.get('name'), default='Meal Plan', max_length=MAX_LENGTHS['plan_name']),
        'description': sanitize_text(raw.get('description'), max_length=MAX_LENGTHS['description']),
        'total_estimated_cost': _clamped(_pick(raw, 'totalEstimatedCost', 'total_estimated_cost'), 'cost'),
        'days': days,
        'shopping_list': sanitize_shopping_list(_pick(raw, 'shoppingList', 'shopping_list')),
        'skipped_meals': skipped_meals,
        'skipped_days': skipped_days,
    }
