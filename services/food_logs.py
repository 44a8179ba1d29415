"""
Food Log Service

Free-form food intake entries, daily totals, and photo-based nutrition
estimates.
"""

import logging
from datetime import date, datetime, time, timedelta

from sqlalchemy import func

from constants import VALID_MEAL_TYPES, VALID_MOODS, VALID_CONFIDENCE_LEVELS, MAX_LENGTHS
from models import db, FoodLog, Recipe
from utils.image_handler import prepare_food_photo, ImageValidationError
from utils.sanitizer import sanitize_text, sanitize_name, sanitize_url, sanitize_string_list
from .auth import require_user
from .errors import InvalidInput, NotFound
from .generation import get_generation_client
from .parsing import optional_float, safe_float, parse_date
from .results import action

logger = logging.getLogger(__name__)

MACRO_FIELDS = (
    ('calories', 'calories'),
    ('protein_g', 'protein'),
    ('carbs_g', 'carbs'),
    ('fat_g', 'fat'),
)


def _macro(data, column, alias):
    raw = data.get(column, data.get(alias))
    if raw is None or raw == '':
        return None
    value = optional_float(raw) if not isinstance(raw, bool) else None
    if value is None or value < 0:
        raise InvalidInput(f"{alias} must be a number of at least 0")
    return value


def _day_bounds(day):
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


@action('Failed to create food log')
def create_food_log(user_id, data, now=None):
    """Validate and store one food log entry."""
    require_user(user_id)
    data = data or {}

    meal_type = str(data.get('meal_type', data.get('mealType')) or '').strip().lower()
    if meal_type not in VALID_MEAL_TYPES:
        raise InvalidInput('A valid meal type is required')

    food_name = sanitize_name(data.get('food_name', data.get('foodName')), max_length=MAX_LENGTHS['food_name'])
    if not food_name:
        raise InvalidInput('Food name is required')

    mood = data.get('mood') or None
    if mood is not None:
        mood = str(mood).strip().lower()
    if mood is not None and mood not in VALID_MOODS:
        raise InvalidInput(f"Invalid mood: {mood!r}")

    photo_url = data.get('photo_url', data.get('photoUrl')) or None
    if photo_url is not None:
        photo_url = sanitize_url(photo_url)
        if not photo_url or len(photo_url) > MAX_LENGTHS['photo_url']:
            raise InvalidInput('Photo URL must be an http(s) URL')

    servings = data.get('servings')
    servings = 1.0 if servings in (None, '') else optional_float(servings)
    if servings is None or servings <= 0:
        raise InvalidInput('Servings must be greater than 0')

    recipe_id = data.get('recipe_id', data.get('recipeId'))
    if recipe_id is not None and db.session.get(Recipe, recipe_id) is None:
        raise InvalidInput('Recipe not found')

    entry = FoodLog(
        user_id=user_id,
        logged_at=now or datetime.now(),
        meal_type=meal_type,
        recipe_id=recipe_id,
        food_name=food_name,
        description=sanitize_text(data.get('description'), max_length=MAX_LENGTHS['description']) or None,
        servings=servings,
        photo_url=photo_url,
        notes=sanitize_text(data.get('notes'), max_length=MAX_LENGTHS['notes']) or None,
        mood=mood,
    )
    for column, alias in MACRO_FIELDS:
        setattr(entry, column, _macro(data, column, alias))

    db.session.add(entry)
    db.session.commit()
    return entry.to_dict()


@action('Failed to fetch food logs')
def get_food_logs(user_id, on_date=None, limit=50):
    """Entries newest first, optionally for one calendar day."""
    require_user(user_id)
    query = FoodLog.query.filter(FoodLog.user_id == user_id)
    if on_date:
        try:
            start, end = _day_bounds(parse_date(on_date))
        except ValueError:
            raise InvalidInput('Date must be YYYY-MM-DD') from None
        query = query.filter(FoodLog.logged_at >= start, FoodLog.logged_at < end)
    logs = query.order_by(FoodLog.logged_at.desc(), FoodLog.id.desc()).limit(limit).all()
    return [log.to_dict() for log in logs]


@action('Failed to delete food log')
def delete_food_log(user_id, log_id):
    require_user(user_id)
    entry = FoodLog.query.filter_by(id=log_id, user_id=user_id).first()
    if entry is None:
        raise NotFound('Food log not found')
    db.session.delete(entry)
    db.session.commit()
    return {'id': log_id}


@action('Failed to fetch stats')
def get_today_stats(user_id, today=None):
    """Calorie and macro totals with the number of entries for the day."""
    require_user(user_id)
    start, end = _day_bounds(today or date.today())
    row = (db.session.query(
                func.coalesce(func.sum(FoodLog.calories), 0),
                func.coalesce(func.sum(FoodLog.protein_g), 0),
                func.coalesce(func.sum(FoodLog.carbs_g), 0),
                func.coalesce(func.sum(FoodLog.fat_g), 0),
                func.count(FoodLog.id))
           .filter(FoodLog.user_id == user_id, FoodLog.logged_at >= start, FoodLog.logged_at < end)
           .one())
    calories, protein, carbs, fat, count = row
    return {
        'calories': float(calories),
        'protein': float(protein),
        'carbs': float(carbs),
        'fat': float(fat),
        'meal_count': count,
    }


def _normalize_estimate(raw):
    confidence = str(raw.get('confidence') or '').strip().lower()
    return {
        'foodName': sanitize_name(raw.get('foodName'), default='Unknown food',
                                  max_length=MAX_LENGTHS['food_name']),
        'description': sanitize_text(raw.get('description'), max_length=MAX_LENGTHS['description']),
        'estimatedCalories': safe_float(raw.get('estimatedCalories'), default=0.0, min_val=0, max_val=5000),
        'estimatedProtein': safe_float(raw.get('estimatedProtein'), default=0.0, min_val=0, max_val=1000),
        'estimatedCarbs': safe_float(raw.get('estimatedCarbs'), default=0.0, min_val=0, max_val=1000),
        'estimatedFat': safe_float(raw.get('estimatedFat'), default=0.0, min_val=0, max_val=1000),
        'confidence': confidence if confidence in VALID_CONFIDENCE_LEVELS else 'low',
        'suggestions': sanitize_string_list(raw.get('suggestions'), max_items=10, max_length=300),
    }


@action('Failed to analyze photo')
def analyze_food_photo(user_id, image_data, generator=None):
    """
    Estimate nutrition from a food photo.

    The image is validated and re-encoded as JPEG before it is sent.
    """
    require_user(user_id)
    try:
        jpeg = prepare_food_photo(image_data)
    except ImageValidationError as e:
        raise InvalidInput(str(e)) from None

    generator = generator or get_generation_client()
    raw = generator.analyze_food_photo(jpeg, 'image/jpeg')
    estimate = _normalize_estimate(raw)
    logger.info("Analyzed food photo for user %s: %s (%s confidence)",
                user_id, estimate['foodName'], estimate['confidence'])
    return estimate
