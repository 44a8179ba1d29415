"""Shared fixtures: an app on in-memory SQLite, a user with a completed profile, and a fake generator."""

import copy
import os
import sys
from datetime import date

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import create_app
from extensions import bcrypt
from models import db, User, Profile


def make_meal(name, meal_type, calories=500, **overrides):
    meal = {
        'name': name,
        'description': f'{name} for testing',
        'mealType': meal_type,
        'prepTime': 10,
        'cookTime': 15,
        'servings': 2,
        'difficulty': 'easy',
        'calories': calories,
        'protein': 30,
        'carbs': 50,
        'fat': 15,
        'fiber': 5,
        'ingredients': [
            {'name': 'Rolled oats', 'amount': 80, 'unit': 'grams'},
            {'name': 'Milk', 'amount': '1/2', 'unit': 'cups'},
        ],
        'instructions': ['Combine everything.', 'Cook until done.'],
        'cuisine': 'American',
        'tags': ['quick'],
        'estimatedCost': 12.00,
    }
    meal.update(overrides)
    return meal


def make_candidate(days=2, include_snacks=False):
    slots = ['breakfast', 'lunch', 'dinner'] + (['snack'] if include_snacks else [])
    return {
        'name': 'Balanced Week',
        'description': 'A balanced plan',
        'days': [
            {
                'day': d,
                'date': f'Day {d}',
                'meals': [make_meal(f'Day {d} {slot}', slot) for slot in slots],
            }
            for d in range(1, days + 1)
        ],
        'shoppingList': [
            {
                'category': 'Produce',
                'items': [
                    {'name': 'Spinach', 'amount': 200, 'unit': 'g', 'estimatedCost': 3.00},
                    {'name': 'Bananas', 'amount': 1.5, 'unit': 'pieces', 'estimatedCost': 1.20},
                ],
            },
            {
                'category': 'Dairy & Eggs',
                'items': [
                    {'name': 'Milk', 'amount': 1.5, 'unit': 'cups', 'estimatedCost': 2.50},
                ],
            },
        ],
        'totalEstimatedCost': 75.00,
    }


class FakeGenerator:
    """Stands in for GenerationClient; records requests and returns a canned plan."""

    def __init__(self, plan=None, error=None, photo_estimate=None):
        self.plan = plan
        self.error = error
        self.photo_estimate = photo_estimate
        self.requests = []

    def generate_meal_plan(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.plan is not None:
            return copy.deepcopy(self.plan)
        return make_candidate(request.number_of_days, include_snacks=request.meals_per_day == 4)

    def analyze_food_photo(self, image_bytes, mime='image/jpeg'):
        self.requests.append((image_bytes, mime))
        if self.error is not None:
            raise self.error
        return dict(self.photo_estimate or {})


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def create_user(email='cook@example.com', password='correct horse', **profile_fields):
    user = User(email=email, password_hash=bcrypt.generate_password_hash(password).decode('utf-8'))
    db.session.add(user)
    db.session.flush()
    profile = Profile(user_id=user.id, email=email, allergies=[], disliked_foods=[],
                      favorite_cuisines=[], **profile_fields)
    db.session.add(profile)
    db.session.commit()
    return user


@pytest.fixture
def user(app):
    """User whose profile has not been through onboarding."""
    return create_user()


@pytest.fixture
def onboarded_user(app):
    """User with a completed profile and computed targets."""
    return create_user(
        email='ready@example.com',
        date_of_birth=date(1994, 3, 1),
        gender='male',
        height_cm=175,
        current_weight_kg=70,
        target_weight_kg=65,
        activity_level='moderately_active',
        primary_goal='lose_weight',
        weekly_goal_kg=-0.5,
        diet_type='standard',
        daily_calories_target=2006,
        daily_protein_g=126,
        daily_carbs_g=250,
        daily_fat_g=56,
        onboarding_completed=True,
        onboarding_step=5,
    )


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def logged_in_client(client, onboarded_user):
    response = client.post('/auth/login', json={'email': 'ready@example.com', 'password': 'correct horse'})
    assert response.status_code == 200
    return client
