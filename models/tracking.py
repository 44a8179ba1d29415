"""
Tracking Models

Contains the WeightLog (one entry per user per day) and FoodLog
(free-form intake entries) models.
"""

from .base import db, utcnow, isoformat


class WeightLog(db.Model):
    """Body weight entry. Upsert key is (user_id, logged_at)."""
    __table_args__ = (
        db.UniqueConstraint('user_id', 'logged_at', name='uq_weight_log_user_date'),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id', ondelete='CASCADE'), nullable=False, index=True)
    weight_kg = db.Column(db.Float, nullable=False)
    logged_at = db.Column(db.Date, nullable=False)
    notes = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'weight_kg': self.weight_kg,
            'logged_at': isoformat(self.logged_at),
            'notes': self.notes,
        }


class FoodLog(db.Model):
    """Food intake entry. Several entries per meal slot per day are allowed."""
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id', ondelete='CASCADE'), nullable=False, index=True)
    logged_at = db.Column(db.DateTime, nullable=False, index=True)
    meal_type = db.Column(db.String(20), nullable=False)
    recipe_id = db.Column(db.Integer, db.ForeignKey('recipe.id', ondelete='SET NULL'), nullable=True)
    food_name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    servings = db.Column(db.Float, default=1.0)
    calories = db.Column(db.Float, nullable=True)
    protein_g = db.Column(db.Float, nullable=True)
    carbs_g = db.Column(db.Float, nullable=True)
    fat_g = db.Column(db.Float, nullable=True)
    photo_url = db.Column(db.String(500), nullable=True)
    photo_analysis = db.Column(db.Text, nullable=True)
    notes = db.Column(db.Text, nullable=True)
    mood = db.Column(db.String(10), nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'logged_at': isoformat(self.logged_at),
            'meal_type': self.meal_type,
            'recipe_id': self.recipe_id,
            'food_name': self.food_name,
            'description': self.description,
            'servings': self.servings,
            'calories': self.calories,
            'protein_g': self.protein_g,
            'carbs_g': self.carbs_g,
            'fat_g': self.fat_g,
            'photo_url': self.photo_url,
            'notes': self.notes,
            'mood': self.mood,
        }
