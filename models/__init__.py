"""
Models Package

Exports all database models and the db instance for use throughout the application.
"""

from .base import db

from .user import User, Profile, OnboardingDraft
from .recipe import Recipe
from .mealplan import MealPlan, MealPlanItem
from .shopping import ShoppingList, ShoppingListItem
from .tracking import WeightLog, FoodLog

__all__ = [
    'db',
    'User',
    'Profile',
    'OnboardingDraft',
    'Recipe',
    'MealPlan',
    'MealPlanItem',
    'ShoppingList',
    'ShoppingListItem',
    'WeightLog',
    'FoodLog',
]
