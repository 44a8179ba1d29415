"""
Smoke tests for the NutriPlan service.
Run with: python tests/smoke.py
"""

import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

def test_app_imports():
    """Verify the app factory can be imported without errors."""
    from app import create_app
    from models import db
    assert callable(create_app)
    assert db is not None
    print("OK: App imports successfully")

def test_models_import():
    """Verify models can be imported."""
    from models import User, Profile, Recipe, MealPlan, MealPlanItem, ShoppingList, WeightLog, FoodLog
    assert Profile is not None
    assert MealPlan is not None
    print("OK: Models import successfully")

def test_security_utils_import():
    """Verify security utilities can be imported."""
    from utils import prepare_food_photo, sanitize_text, sanitize_url
    assert callable(prepare_food_photo)
    assert callable(sanitize_text)
    assert callable(sanitize_url)
    print("OK: Security utils import successfully")

def test_constants_import():
    """Verify constants can be imported."""
    from constants import ACTIVITY_MULTIPLIERS, MEAL_TYPES, UNIT_ALIASES
    assert 'sedentary' in ACTIVITY_MULTIPLIERS
    assert 'breakfast' in MEAL_TYPES
    assert 'grams' in UNIT_ALIASES
    print("OK: Constants import successfully")

def test_nutrition_constants_unchanged():
    """Verify calculator constants have expected values."""
    from constants import ACTIVITY_MULTIPLIERS, KCAL_PER_KG

    # These values must not change
    assert ACTIVITY_MULTIPLIERS['sedentary'] == 1.2
    assert ACTIVITY_MULTIPLIERS['lightly_active'] == 1.375
    assert ACTIVITY_MULTIPLIERS['moderately_active'] == 1.55
    assert ACTIVITY_MULTIPLIERS['very_active'] == 1.725
    assert ACTIVITY_MULTIPLIERS['extremely_active'] == 1.9
    assert KCAL_PER_KG == 7700
    print("OK: Nutrition constants unchanged")

def test_app_runs():
    """Verify app can create test client."""
    from app import create_app
    app = create_app('testing')
    with app.test_client() as client:
        response = client.get('/health')
        assert response.status_code == 200
        print("OK: App serves health check")

if __name__ == '__main__':
    print("Running smoke tests...\n")

    tests = [
        test_app_imports,
        test_models_import,
        test_security_utils_import,
        test_constants_import,
        test_nutrition_constants_unchanged,
        test_app_runs,
    ]

    failed = 0
    for test in tests:
        try:
            test()
        except Exception as e:
            print(f"FAIL: {test.__name__} - {e}")
            failed += 1

    print(f"\n{'='*40}")
    if failed:
        print(f"FAILED: {failed}/{len(tests)} tests")
        sys.exit(1)
    else:
        print(f"PASSED: {len(tests)}/{len(tests)} tests")
        sys.exit(0)
