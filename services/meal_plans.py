"""
Meal Plan Service

Generates a meal plan through the external generator and persists it as
a MealPlan with recipes, plan items and a shopping list. Also serves the
read side and meal completion toggling.

Persistence runs in one transaction. The plan row is the only hard
requirement: every later step runs inside its own SAVEPOINT, so a bad
recipe or shopping item is rolled back and logged on its own while the
rest of the plan is kept.
"""

import logging
from datetime import date, timedelta

from flask import current_app
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError

from constants import MEAL_TYPES
from models import (
    db, Profile, Recipe, MealPlan, MealPlanItem, ShoppingList, ShoppingListItem,
)
from models.base import utcnow
from .auth import require_user
from .cost import cost_per_serving
from .errors import ProfileNotFound, PlanPersistenceFailed, NotFound
from .generation import get_generation_client
from .locks import user_lock
from .plan_request import parse_generation_options, build_meal_plan_request
from .results import action
from .sanitize import sanitize_candidate_plan

logger = logging.getLogger(__name__)


def _soft_step(description, func, *args):
    """
    Run func inside a SAVEPOINT.

    A database error rolls back only this step; it is logged and None is
    returned.
    """
    try:
        with db.session.begin_nested():
            return func(*args)
    except SQLAlchemyError:
        logger.warning("Skipped %s", description, exc_info=True)
        return None


def _deactivate_other_plans(user_id, plan_id):
    return (MealPlan.query
            .filter(MealPlan.user_id == user_id, MealPlan.id != plan_id)
            .update({'is_active': False}, synchronize_session=False))


def _insert_recipe(user_id, meal):
    recipe = Recipe(
        name=meal['name'],
        description=meal['description'],
        prep_time_minutes=meal['prep_time_minutes'],
        cook_time_minutes=meal['cook_time_minutes'],
        total_time_minutes=meal['total_time_minutes'],
        servings=meal['servings'],
        difficulty=meal['difficulty'],
        calories=meal['calories'],
        protein_g=meal['protein_g'],
        carbs_g=meal['carbs_g'],
        fat_g=meal['fat_g'],
        fiber_g=meal['fiber_g'],
        ingredients=meal['ingredients'],
        instructions=meal['instructions'],
        cuisine=meal['cuisine'],
        meal_type=meal['meal_type'],
        tags=meal['tags'],
        estimated_cost=meal['estimated_cost'],
        cost_per_serving=cost_per_serving(meal['estimated_cost'], meal['servings']),
        is_ai_generated=True,
        created_by=user_id,
    )
    db.session.add(recipe)
    db.session.flush()
    return recipe


def _insert_meal(plan, user_id, meal, plan_date):
    """Recipe and its plan item; both or neither."""
    recipe = _insert_recipe(user_id, meal)
    item = MealPlanItem(
        meal_plan_id=plan.id,
        recipe_id=recipe.id,
        plan_date=plan_date,
        meal_type=meal['meal_type'],
        meal_order=MEAL_TYPES.index(meal['meal_type']),
        servings=meal['servings'],
        recipe_name=meal['name'],
        calories=meal['calories'],
    )
    db.session.add(item)
    db.session.flush()
    return item


def _insert_shopping_list(user_id, plan, candidate):
    shopping_list = ShoppingList(
        user_id=user_id,
        meal_plan_id=plan.id,
        name=f"Shopping List - {plan.name}"[:250],
        start_date=plan.start_date,
        end_date=plan.end_date,
        estimated_total_cost=candidate['total_estimated_cost'],
    )
    db.session.add(shopping_list)
    db.session.flush()
    return shopping_list


def _insert_shopping_item(shopping_list, category, item):
    row = ShoppingListItem(
        shopping_list_id=shopping_list.id,
        ingredient_name=item['name'],
        quantity=item['amount'],
        unit=item['unit'],
        category=category,
        estimated_cost=item['estimated_cost'],
    )
    db.session.add(row)
    db.session.flush()
    return row


def _persist_plan(user_id, candidate, request, targets, start_date, meals_requested):
    """
    Write the sanitized candidate. Caller holds the user's lock.

    Returns the new MealPlan.
    """
    # Row lock on the profile serializes concurrent writers across processes
    Profile.query.filter_by(user_id=user_id).with_for_update().first()

    end_date = start_date + timedelta(days=request.number_of_days - 1)
    plan = MealPlan(
        user_id=user_id,
        name=candidate['name'],
        description=candidate['description'],
        start_date=start_date,
        end_date=end_date,
        total_days=request.number_of_days,
        avg_daily_calories=targets['daily_calories_target'],
        avg_daily_protein_g=targets['daily_protein_g'],
        avg_daily_carbs_g=targets['daily_carbs_g'],
        avg_daily_fat_g=targets['daily_fat_g'],
        estimated_total_cost=candidate['total_estimated_cost'],
        is_active=True,
        generation_prompt=request.to_json(),
        meals_requested=meals_requested,
        meals_saved=0,
    )
    db.session.add(plan)
    try:
        db.session.flush()
    except SQLAlchemyError:
        logger.exception("Failed to insert meal plan for user %s", user_id)
        db.session.rollback()
        raise PlanPersistenceFailed() from None

    deactivated = _soft_step(f"deactivating other plans of user {user_id}",
                             _deactivate_other_plans, user_id, plan.id)
    if deactivated:
        logger.debug("Deactivated %s plan(s) for user %s", deactivated, user_id)

    meals_saved = 0
    for day in candidate['days']:
        plan_date = start_date + timedelta(days=day['day'] - 1)
        for meal in day['meals']:
            item = _soft_step(f"meal {meal['name']!r} on {plan_date} of plan {plan.id}",
                              _insert_meal, plan, user_id, meal, plan_date)
            if item is not None:
                meals_saved += 1

    shopping_list = _soft_step(f"shopping list of plan {plan.id}",
                               _insert_shopping_list, user_id, plan, candidate)
    if shopping_list is not None:
        for group in candidate['shopping_list']:
            for entry in group['items']:
                _soft_step(f"shopping item {entry['name']!r} of list {shopping_list.id}",
                           _insert_shopping_item, shopping_list, group['category'], entry)

    plan.meals_saved = meals_saved
    try:
        db.session.commit()
    except SQLAlchemyError:
        logger.exception("Failed to commit meal plan for user %s", user_id)
        db.session.rollback()
        raise PlanPersistenceFailed() from None
    return plan


@action('Failed to generate meal plan')
def generate_and_save_meal_plan(user_id, options_data=None, generator=None, today=None):
    """
    Generate a meal plan for the user and save it as their active plan.

    Args:
        user_id: Verified user id (None -> unauthenticated)
        options_data: {'number_of_days': int, 'include_snacks': bool}
        generator: Object with generate_meal_plan(request); defaults to the
            configured GenerationClient
        today: Plan start date (default date.today())

    Returns:
        ActionResult with meal_plan_id, meals_saved and meals_requested
    """
    require_user(user_id)

    profile = Profile.query.filter_by(user_id=user_id).first()
    if profile is None:
        raise ProfileNotFound('Profile not found. Please complete onboarding first.')

    options = parse_generation_options(options_data, max_days=current_app.config.get('MAX_PLAN_DAYS', 14))
    request = build_meal_plan_request(profile, options)
    targets = {
        'daily_calories_target': profile.daily_calories_target,
        'daily_protein_g': profile.daily_protein_g,
        'daily_carbs_g': profile.daily_carbs_g,
        'daily_fat_g': profile.daily_fat_g,
    }
    # End the read transaction before the long external call
    db.session.rollback()

    generator = generator or get_generation_client()
    raw_plan = generator.generate_meal_plan(request)
    candidate = sanitize_candidate_plan(raw_plan, options.number_of_days)

    meals_requested = options.number_of_days * options.meals_per_day
    start_date = today or date.today()

    with user_lock(user_id):
        plan = _persist_plan(user_id, candidate, request, targets, start_date, meals_requested)

    if plan.meals_saved < meals_requested:
        logger.warning("Meal plan %s for user %s is incomplete: %s of %s meals saved",
                       plan.id, user_id, plan.meals_saved, meals_requested)
    else:
        logger.info("Generated meal plan %s for user %s (%s meals)", plan.id, user_id, plan.meals_saved)

    return {
        'meal_plan_id': plan.id,
        'meals_saved': plan.meals_saved,
        'meals_requested': meals_requested,
    }


@action('Failed to fetch meal plans')
def get_meal_plans(user_id):
    """All of the user's plans, newest first."""
    require_user(user_id)
    plans = (MealPlan.query
             .filter_by(user_id=user_id)
             .order_by(MealPlan.created_at.desc(), MealPlan.id.desc())
             .all())
    return [p.to_dict() for p in plans]


def _ordered_items(plan_id, on_date=None):
    query = MealPlanItem.query.filter_by(meal_plan_id=plan_id)
    if on_date is not None:
        query = query.filter_by(plan_date=on_date)
    return query.order_by(MealPlanItem.plan_date, MealPlanItem.meal_order, MealPlanItem.id).all()


@action('Failed to fetch meal plan')
def get_meal_plan_with_items(user_id, plan_id):
    """Plan with items (recipes embedded) ordered by date then meal slot."""
    require_user(user_id)
    plan = MealPlan.query.filter_by(id=plan_id, user_id=user_id).first()
    if plan is None:
        raise NotFound('Meal plan not found')

    shopping_list = ShoppingList.query.filter_by(meal_plan_id=plan.id, user_id=user_id).first()

    data = plan.to_dict()
    data['items'] = [item.to_dict(include_recipe=True) for item in _ordered_items(plan.id)]
    data['shopping_list_id'] = shopping_list.id if shopping_list else None
    return data


@action('Failed to fetch active meal plan')
def get_active_meal_plan(user_id, today=None):
    """The active plan with today's items, or None."""
    require_user(user_id)
    plan = (MealPlan.query
            .filter_by(user_id=user_id, is_active=True)
            .order_by(MealPlan.created_at.desc(), MealPlan.id.desc())
            .first())
    if plan is None:
        return None

    today = today or date.today()
    data = plan.to_dict()
    data['today_items'] = [item.to_dict(include_recipe=True) for item in _ordered_items(plan.id, today)]
    return data


@action('Failed to update meal')
def toggle_meal_item_complete(user_id, item_id):
    """
    Flip a plan item's completion flag.

    The write only applies if the flag still holds the value that was read,
    so two concurrent toggles cannot both flip from the same state. When
    the write loses the race the current state is returned unchanged.
    """
    require_user(user_id)
    item = (MealPlanItem.query
            .join(MealPlan, MealPlanItem.meal_plan_id == MealPlan.id)
            .filter(MealPlanItem.id == item_id, MealPlan.user_id == user_id)
            .first())
    if item is None:
        raise NotFound('Meal not found')

    was_completed = bool(item.is_completed)
    completed = not was_completed
    result = db.session.execute(
        update(MealPlanItem)
        .where(MealPlanItem.id == item.id, MealPlanItem.is_completed == was_completed)
        .values(is_completed=completed, completed_at=utcnow() if completed else None)
        .execution_options(synchronize_session=False)
    )
    db.session.commit()
    if result.rowcount == 0:
        logger.info("Meal item %s changed concurrently; keeping current state", item.id)

    # Attributes were expired by the commit and reload here
    return item.to_dict()
