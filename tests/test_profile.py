"""Profile reads and updates."""

import pytest

from conftest import create_user
from models import db
from services import get_profile, update_profile, get_profile_options


def test_get_profile(onboarded_user):
    data = get_profile(onboarded_user.id).data
    assert data['email'] == 'ready@example.com'
    assert data['daily_calories_target'] == 2006


def test_get_profile_requires_user(app):
    assert get_profile(None).code == 'unauthenticated'


def test_get_profile_missing(app):
    ghost = create_user(email='ghost@example.com')
    db.session.delete(ghost.profile)
    db.session.commit()
    assert get_profile(ghost.id).code == 'profile_not_found'


def test_preferences_update_keeps_targets(onboarded_user):
    result = update_profile(onboarded_user.id, {
        'diet_type': 'Vegetarian',
        'favorite_cuisines': ['thai', 'Thai', 'italian'],
        'budget_level': 'budget',
    })
    assert result.success, result
    assert result.data['diet_type'] == 'vegetarian'
    assert result.data['favorite_cuisines'] == ['thai', 'italian']
    assert result.data['daily_calories_target'] == 2006


def test_body_change_recomputes_targets(onboarded_user):
    before = get_profile(onboarded_user.id).data
    result = update_profile(onboarded_user.id, {'activity_level': 'very_active'})

    assert result.success
    assert result.data['daily_calories_target'] > before['daily_calories_target']
    assert result.data['daily_protein_g'] == 126


def test_update_before_onboarding_does_not_compute(user):
    result = update_profile(user.id, {'gender': 'female', 'height_cm': 160})
    assert result.success
    assert result.data['daily_calories_target'] is None


@pytest.mark.parametrize('field', ['daily_calories_target', 'onboarding_completed', 'targets_need_review'])
def test_derived_fields_cannot_be_written(onboarded_user, field):
    result = update_profile(onboarded_user.id, {field: 1})
    assert result.code == 'invalid_input'
    assert get_profile(onboarded_user.id).data['daily_calories_target'] == 2006


@pytest.mark.parametrize('data', [
    {'gender': 'robot'},
    {'height_cm': 20},
    {'servings_per_meal': 2.5},
    {'date_of_birth': '2999-01-01'},
    {'target_date': 'next spring'},
    {'current_weight_kg': True},
])
def test_invalid_values(onboarded_user, data):
    assert update_profile(onboarded_user.id, data).code == 'invalid_input'


def test_profile_options():
    options = get_profile_options()
    assert options['genders'] == ['female', 'male', 'other', 'prefer_not_to_say']
    assert 'peanuts' in options['common_allergies']
    assert options['onboarding_steps'][0] == {'step': 1, 'name': 'goals'}
    assert options['ranges']['current_weight_kg'] == [20, 500]
