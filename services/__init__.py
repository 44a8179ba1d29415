"""
Services Package

Business logic for NutriPlan. Entry points ("actions") take the verified
user id first and return an ActionResult.
"""

from .errors import (
    ServiceError,
    Unauthenticated,
    ProfileNotFound,
    GenerationError,
    PlanPersistenceFailed,
    NotFound,
    InvalidInput,
)
from .results import ActionResult, action

from .nutrition import (
    calculate_age,
    calculate_bmr,
    calculate_tdee,
    calculate_calorie_target,
    calculate_macros,
    compute_nutrition_targets,
)

from .plan_request import (
    GenerationOptions,
    MealPlanRequest,
    parse_generation_options,
    build_meal_plan_request,
)

from .generation import GenerationClient, build_meal_plan_prompt

from .sanitize import sanitize_candidate_plan

from .cost import cost_per_serving

from .auth import register_user, authenticate, current_user_id

from .profile import get_profile, update_profile, get_profile_options

from .onboarding import get_onboarding_draft, save_onboarding_step, complete_onboarding

from .meal_plans import (
    generate_and_save_meal_plan,
    get_meal_plans,
    get_meal_plan_with_items,
    get_active_meal_plan,
    toggle_meal_item_complete,
)

from .shopping import (
    format_shopping_qty,
    get_latest_shopping_list,
    get_shopping_list,
    toggle_shopping_item_purchased,
)

from .recipes import get_recipes, get_recipe

from .food_logs import (
    create_food_log,
    get_food_logs,
    delete_food_log,
    get_today_stats,
    analyze_food_photo,
)

from .progress import log_weight, get_weight_logs, delete_weight_log, get_progress_stats

__all__ = [
    # Errors and results
    'ServiceError',
    'Unauthenticated',
    'ProfileNotFound',
    'GenerationError',
    'PlanPersistenceFailed',
    'NotFound',
    'InvalidInput',
    'ActionResult',
    'action',
    # Nutrition
    'calculate_age',
    'calculate_bmr',
    'calculate_tdee',
    'calculate_calorie_target',
    'calculate_macros',
    'compute_nutrition_targets',
    # Generation
    'GenerationOptions',
    'MealPlanRequest',
    'parse_generation_options',
    'build_meal_plan_request',
    'GenerationClient',
    'build_meal_plan_prompt',
    'sanitize_candidate_plan',
    'cost_per_serving',
    # Accounts
    'register_user',
    'authenticate',
    'current_user_id',
    'get_profile',
    'update_profile',
    'get_profile_options',
    'get_onboarding_draft',
    'save_onboarding_step',
    'complete_onboarding',
    # Meal plans
    'generate_and_save_meal_plan',
    'get_meal_plans',
    'get_meal_plan_with_items',
    'get_active_meal_plan',
    'toggle_meal_item_complete',
    # Shopping and recipes
    'format_shopping_qty',
    'get_latest_shopping_list',
    'get_shopping_list',
    'toggle_shopping_item_purchased',
    'get_recipes',
    'get_recipe',
    # Tracking
    'create_food_log',
    'get_food_logs',
    'delete_food_log',
    'get_today_stats',
    'analyze_food_photo',
    'log_weight',
    'get_weight_logs',
    'delete_weight_log',
    'get_progress_stats',
]
