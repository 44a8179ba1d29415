"""
Meal Plan Models

Contains the MealPlan model for generated multi-day plans and the
MealPlanItem join entity binding a recipe to a date and meal slot.
"""

from .base import db, utcnow, isoformat


class MealPlan(db.Model):
    """Generated multi-day plan. At most one active plan per user."""
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id', ondelete='CASCADE'), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, default='')
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)
    total_days = db.Column(db.Integer, nullable=False)

    # Snapshot of the profile targets at generation time
    avg_daily_calories = db.Column(db.Integer, nullable=True)
    avg_daily_protein_g = db.Column(db.Integer, nullable=True)
    avg_daily_carbs_g = db.Column(db.Integer, nullable=True)
    avg_daily_fat_g = db.Column(db.Integer, nullable=True)

    estimated_total_cost = db.Column(db.Float, nullable=True)
    is_active = db.Column(db.Boolean, default=True, index=True)
    generation_prompt = db.Column(db.Text, nullable=True)  # serialized request, for audit

    # Completeness of the persisted plan
    meals_requested = db.Column(db.Integer, default=0)
    meals_saved = db.Column(db.Integer, default=0)

    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    items = db.relationship('MealPlanItem', backref='meal_plan', lazy=True, cascade='all, delete-orphan')

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'name': self.name,
            'description': self.description,
            'start_date': isoformat(self.start_date),
            'end_date': isoformat(self.end_date),
            'total_days': self.total_days,
            'avg_daily_calories': self.avg_daily_calories,
            'avg_daily_protein_g': self.avg_daily_protein_g,
            'avg_daily_carbs_g': self.avg_daily_carbs_g,
            'avg_daily_fat_g': self.avg_daily_fat_g,
            'estimated_total_cost': self.estimated_total_cost,
            'is_active': bool(self.is_active),
            'meals_requested': self.meals_requested,
            'meals_saved': self.meals_saved,
            'is_complete': (self.meals_saved or 0) >= (self.meals_requested or 0),
            'created_at': isoformat(self.created_at),
        }


class MealPlanItem(db.Model):
    """Recipe scheduled on a plan date and meal slot, with completion tracking."""
    id = db.Column(db.Integer, primary_key=True)
    meal_plan_id = db.Column(db.Integer, db.ForeignKey('meal_plan.id', ondelete='CASCADE'), nullable=False, index=True)
    recipe_id = db.Column(db.Integer, db.ForeignKey('recipe.id', ondelete='SET NULL'), nullable=True, index=True)
    plan_date = db.Column(db.Date, nullable=False, index=True)
    meal_type = db.Column(db.String(20), nullable=False)
    meal_order = db.Column(db.Integer, default=0)
    servings = db.Column(db.Integer, default=1)

    # Denormalized for fast reads
    recipe_name = db.Column(db.String(200), nullable=True)
    calories = db.Column(db.Float, nullable=True)

    # completed_at is set if and only if is_completed is true
    is_completed = db.Column(db.Boolean, default=False)
    completed_at = db.Column(db.DateTime(timezone=True), nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)

    recipe = db.relationship('Recipe')

    def to_dict(self, include_recipe=False):
        data = {
            'id': self.id,
            'meal_plan_id': self.meal_plan_id,
            'recipe_id': self.recipe_id,
            'plan_date': isoformat(self.plan_date),
            'meal_type': self.meal_type,
            'meal_order': self.meal_order,
            'servings': self.servings,
            'recipe_name': self.recipe_name,
            'calories': self.calories,
            'is_completed': bool(self.is_completed),
            'completed_at': isoformat(self.completed_at),
        }
        if include_recipe:
            data['recipe'] = self.recipe.to_dict() if self.recipe else None
        return data
