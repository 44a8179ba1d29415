"""
Recipe Model

Contains the Recipe model. Recipes created by the meal plan generator are
immutable; ingredients and instructions are stored as structured JSON.
"""

from .base import db, utcnow, isoformat


class Recipe(db.Model):
    """Dish definition with per-serving nutrition and cost."""
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False, index=True)
    description = db.Column(db.Text, default='')
    image_url = db.Column(db.String(500), nullable=True)

    # Cooking details
    prep_time_minutes = db.Column(db.Integer, nullable=True)
    cook_time_minutes = db.Column(db.Integer, nullable=True)
    total_time_minutes = db.Column(db.Integer, nullable=True)
    servings = db.Column(db.Integer, nullable=False, default=1)
    difficulty = db.Column(db.String(20), nullable=True)

    # Nutrition per serving
    calories = db.Column(db.Float, nullable=True)
    protein_g = db.Column(db.Float, nullable=True)
    carbs_g = db.Column(db.Float, nullable=True)
    fat_g = db.Column(db.Float, nullable=True)
    fiber_g = db.Column(db.Float, nullable=True)

    # [{"name", "amount", "unit"}] and [{"step", "text"}]
    ingredients = db.Column(db.JSON, nullable=False, default=list)
    instructions = db.Column(db.JSON, nullable=False, default=list)

    # Categorization
    cuisine = db.Column(db.String(50), nullable=True)
    meal_type = db.Column(db.String(20), nullable=True, index=True)
    tags = db.Column(db.JSON, default=list)

    # Cost
    estimated_cost = db.Column(db.Float, nullable=True)
    cost_per_serving = db.Column(db.Float, nullable=True)

    # Source
    is_ai_generated = db.Column(db.Boolean, default=False)
    created_by = db.Column(db.Integer, db.ForeignKey('user.id', ondelete='SET NULL'), nullable=True, index=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'image_url': self.image_url,
            'prep_time_minutes': self.prep_time_minutes,
            'cook_time_minutes': self.cook_time_minutes,
            'total_time_minutes': self.total_time_minutes,
            'servings': self.servings,
            'difficulty': self.difficulty,
            'calories': self.calories,
            'protein_g': self.protein_g,
            'carbs_g': self.carbs_g,
            'fat_g': self.fat_g,
            'fiber_g': self.fiber_g,
            'ingredients': self.ingredients or [],
            'instructions': self.instructions or [],
            'cuisine': self.cuisine,
            'meal_type': self.meal_type,
            'tags': self.tags or [],
            'estimated_cost': self.estimated_cost,
            'cost_per_serving': self.cost_per_serving,
            'is_ai_generated': bool(self.is_ai_generated),
            'created_by': self.created_by,
            'created_at': isoformat(self.created_at),
        }
