"""Onboarding wizard: step saves, resume and completion."""

from datetime import date

import pytest

from conftest import create_user
from models import db, Profile, OnboardingDraft
from services import get_onboarding_draft, save_onboarding_step, complete_onboarding

TODAY = date(2024, 6, 1)

GOALS = {'primary_goal': 'lose_weight', 'weekly_goal_kg': -0.5}
BODY = {
    'date_of_birth': '1994-03-01',
    'gender': 'male',
    'height_cm': 175,
    'current_weight_kg': '70',
    'target_weight_kg': 65,
    'activity_level': 'moderately_active',
}


def profile_of(user):
    return Profile.query.filter_by(user_id=user.id).one()


def test_save_step_by_number_and_name(user):
    first = save_onboarding_step(user.id, 1, GOALS)
    assert first.success, first
    assert first.data == {'data': {'primary_goal': 'lose_weight', 'weekly_goal_kg': -0.5}, 'last_step': 1}

    second = save_onboarding_step(user.id, 'body_stats', BODY)
    assert second.data['last_step'] == 2
    assert second.data['data']['date_of_birth'] == '1994-03-01'
    assert second.data['data']['current_weight_kg'] == 70.0
    assert profile_of(user).onboarding_step == 3


def test_step_save_leaves_profile_fields_alone(user):
    save_onboarding_step(user.id, 'goals', GOALS)
    profile = profile_of(user)
    assert profile.primary_goal is None
    assert profile.daily_calories_target is None


def test_step_ignores_fields_of_other_steps(user):
    result = save_onboarding_step(user.id, 'dietary', {'diet_type': 'vegan', 'gender': 'male',
                                                       'allergies': 'peanuts, soy'})
    assert result.data['data'] == {'diet_type': 'vegan', 'allergies': ['peanuts', 'soy']}


@pytest.mark.parametrize('step', [0, 6, 'dessert', None])
def test_unknown_step(user, step):
    assert save_onboarding_step(user.id, step, GOALS).code == 'invalid_input'


def test_invalid_field_value(user):
    result = save_onboarding_step(user.id, 'body_stats', dict(BODY, height_cm=400))
    assert result.code == 'invalid_input'
    assert 'height_cm' in result.error
    assert OnboardingDraft.query.count() == 0


def test_protected_fields_are_rejected(user):
    result = save_onboarding_step(user.id, 'goals', dict(GOALS, daily_calories_target=900))
    assert result.code == 'invalid_input'
    assert 'daily_calories_target' in result.error


def test_resume_returns_saved_answers(user):
    save_onboarding_step(user.id, 'goals', GOALS)

    draft = get_onboarding_draft(user.id).data
    assert draft['data']['primary_goal'] == 'lose_weight'
    assert draft['onboarding_step'] == 2
    assert draft['onboarding_completed'] is False


def test_complete_computes_targets(user):
    save_onboarding_step(user.id, 'goals', GOALS)
    save_onboarding_step(user.id, 'body_stats', BODY)
    save_onboarding_step(user.id, 'dietary', {'diet_type': 'standard', 'allergies': ['peanuts']})

    result = complete_onboarding(user.id, today=TODAY)

    assert result.success, result
    data = result.data
    assert data['daily_calories_target'] == 2006
    assert data['daily_protein_g'] == 126
    assert data['daily_carbs_g'] == 250
    assert data['daily_fat_g'] == 56
    assert data['targets_need_review'] is False
    assert data['onboarding_completed'] is True
    assert data['onboarding_step'] == 5
    assert data['allergies'] == ['peanuts']
    assert data['date_of_birth'] == '1994-03-01'
    assert OnboardingDraft.query.count() == 0


def test_complete_with_inline_data_and_no_draft(user):
    result = complete_onboarding(user.id, dict(GOALS, **BODY), today=TODAY)
    assert result.success
    assert result.data['daily_calories_target'] == 2006


def test_weekly_goal_defaults_to_zero(user):
    result = complete_onboarding(user.id, dict(BODY, primary_goal='maintain_weight'), today=TODAY)
    assert result.data['weekly_goal_kg'] == 0
    assert result.data['daily_calories_target'] == 2556


def test_complete_reports_missing_fields(user):
    save_onboarding_step(user.id, 'goals', GOALS)

    result = complete_onboarding(user.id, today=TODAY)
    assert result.code == 'invalid_input'
    assert result.error.startswith('Missing required fields: ')
    assert 'gender' in result.error
    assert profile_of(user).onboarding_completed is False
    assert OnboardingDraft.query.count() == 1


def test_onboarding_requires_profile(app):
    ghost = create_user(email='ghost@example.com')
    db.session.delete(ghost.profile)
    db.session.commit()

    assert save_onboarding_step(ghost.id, 'goals', GOALS).code == 'profile_not_found'
