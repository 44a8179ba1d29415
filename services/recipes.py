"""
Recipe Service

Recipes are written only by meal plan generation. Reads by id are public.
"""

from models import db, Recipe
from .auth import require_user
from .errors import NotFound
from .results import action


@action('Failed to fetch recipes')
def get_recipes(user_id, limit=100):
    """Recipes generated for the user, newest first."""
    require_user(user_id)
    recipes = (Recipe.query
               .filter_by(created_by=user_id)
               .order_by(Recipe.created_at.desc(), Recipe.id.desc())
               .limit(limit)
               .all())
    return [r.to_dict() for r in recipes]


@action('Failed to fetch recipe')
def get_recipe(recipe_id):
    recipe = db.session.get(Recipe, recipe_id)
    if recipe is None:
        raise NotFound('Recipe not found')
    return recipe.to_dict()
