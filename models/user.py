"""
User Models

Contains the User account model, the per-user Profile holding body stats,
preferences and computed nutrition targets, and the server-side
OnboardingDraft that accumulates wizard answers until completion.
"""

from flask_login import UserMixin

from .base import db, utcnow, isoformat


class User(UserMixin, db.Model):
    """Login account. Identity for all row-level scoping."""
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(128), nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)
    profile = db.relationship('Profile', backref='user', uselist=False, cascade='all, delete-orphan')


class Profile(db.Model):
    """
    One profile per user.

    The daily_* target columns are derived by the nutrition calculator and
    are never written from user input directly.
    """
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id', ondelete='CASCADE'), unique=True, nullable=False)
    email = db.Column(db.String(255), nullable=True)
    full_name = db.Column(db.String(200), nullable=True)

    # Body stats
    date_of_birth = db.Column(db.Date, nullable=True)
    gender = db.Column(db.String(20), nullable=True)
    height_cm = db.Column(db.Float, nullable=True)
    current_weight_kg = db.Column(db.Float, nullable=True)
    target_weight_kg = db.Column(db.Float, nullable=True)
    activity_level = db.Column(db.String(30), nullable=True)

    # Goals
    primary_goal = db.Column(db.String(30), nullable=True)
    weekly_goal_kg = db.Column(db.Float, nullable=True)
    target_date = db.Column(db.Date, nullable=True)

    # Dietary constraints
    diet_type = db.Column(db.String(30), nullable=True)
    allergies = db.Column(db.JSON, default=list)
    disliked_foods = db.Column(db.JSON, default=list)
    favorite_cuisines = db.Column(db.JSON, default=list)

    # Cooking constraints
    budget_level = db.Column(db.String(20), nullable=True)
    cooking_skill = db.Column(db.String(20), nullable=True)
    meal_prep_time_minutes = db.Column(db.Integer, nullable=True)
    servings_per_meal = db.Column(db.Integer, default=1)

    # Computed nutrition targets
    daily_calories_target = db.Column(db.Integer, nullable=True)
    daily_protein_g = db.Column(db.Integer, nullable=True)
    daily_carbs_g = db.Column(db.Integer, nullable=True)
    daily_fat_g = db.Column(db.Integer, nullable=True)
    targets_need_review = db.Column(db.Boolean, default=False)

    # Onboarding progress
    onboarding_completed = db.Column(db.Boolean, default=False)
    onboarding_step = db.Column(db.Integer, default=1)

    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'email': self.email,
            'full_name': self.full_name,
            'date_of_birth': isoformat(self.date_of_birth),
            'gender': self.gender,
            'height_cm': self.height_cm,
            'current_weight_kg': self.current_weight_kg,
            'target_weight_kg': self.target_weight_kg,
            'activity_level': self.activity_level,
            'primary_goal': self.primary_goal,
            'weekly_goal_kg': self.weekly_goal_kg,
            'target_date': isoformat(self.target_date),
            'diet_type': self.diet_type,
            'allergies': self.allergies or [],
            'disliked_foods': self.disliked_foods or [],
            'favorite_cuisines': self.favorite_cuisines or [],
            'budget_level': self.budget_level,
            'cooking_skill': self.cooking_skill,
            'meal_prep_time_minutes': self.meal_prep_time_minutes,
            'servings_per_meal': self.servings_per_meal,
            'daily_calories_target': self.daily_calories_target,
            'daily_protein_g': self.daily_protein_g,
            'daily_carbs_g': self.daily_carbs_g,
            'daily_fat_g': self.daily_fat_g,
            'targets_need_review': bool(self.targets_need_review),
            'onboarding_completed': bool(self.onboarding_completed),
            'onboarding_step': self.onboarding_step,
        }


class OnboardingDraft(db.Model):
    """Wizard answers accumulated step by step; merged into Profile on completion."""
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id', ondelete='CASCADE'), unique=True, nullable=False)
    data = db.Column(db.JSON, default=dict)
    last_step = db.Column(db.Integer, default=0)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def to_dict(self):
        return {
            'data': dict(self.data or {}),
            'last_step': self.last_step,
        }
