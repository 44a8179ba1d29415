"""
Onboarding Service

The onboarding wizard saves its answers step by step into a server-side
OnboardingDraft. Nothing but the step marker touches the Profile until
complete_onboarding merges the draft, computes nutrition targets and
writes everything in one update.
"""

import logging
from datetime import date

from constants import ONBOARDING_STEPS
from models import db, OnboardingDraft
from .auth import require_user
from .errors import InvalidInput
from .profile import (
    clean_profile_fields,
    missing_target_inputs,
    apply_nutrition_targets,
    get_user_profile,
)
from .results import action

logger = logging.getLogger(__name__)

STEP_FIELDS = {
    'goals': ('primary_goal', 'weekly_goal_kg', 'target_date'),
    'body_stats': ('date_of_birth', 'gender', 'height_cm', 'current_weight_kg',
                   'target_weight_kg', 'activity_level'),
    'dietary': ('diet_type', 'allergies', 'disliked_foods'),
    'preferences': ('favorite_cuisines', 'budget_level', 'cooking_skill',
                    'meal_prep_time_minutes', 'servings_per_meal'),
    'complete': (),
}

COMPLETE_STEP = max(ONBOARDING_STEPS)


def _resolve_step(step):
    """Accept a step number or name; return (number, name)."""
    if isinstance(step, str) and not step.strip().isdigit():
        name = step.strip().lower()
        for number, step_name in ONBOARDING_STEPS.items():
            if step_name == name:
                return number, name
        raise InvalidInput(f"Unknown onboarding step: {step!r}")
    try:
        number = int(step)
    except (TypeError, ValueError):
        raise InvalidInput(f"Unknown onboarding step: {step!r}") from None
    if number not in ONBOARDING_STEPS:
        raise InvalidInput(f"Unknown onboarding step: {step!r}")
    return number, ONBOARDING_STEPS[number]


def _to_json(values):
    return {k: v.isoformat() if isinstance(v, date) else v for k, v in values.items()}


def _get_or_create_draft(user_id):
    draft = OnboardingDraft.query.filter_by(user_id=user_id).first()
    if draft is None:
        draft = OnboardingDraft(user_id=user_id, data={}, last_step=0)
        db.session.add(draft)
    return draft


@action('Failed to load onboarding')
def get_onboarding_draft(user_id):
    """Saved answers and progress, for resuming the wizard."""
    require_user(user_id)
    profile = get_user_profile(user_id)
    draft = OnboardingDraft.query.filter_by(user_id=user_id).first()
    data = draft.to_dict() if draft else {'data': {}, 'last_step': 0}
    data['onboarding_step'] = profile.onboarding_step
    data['onboarding_completed'] = bool(profile.onboarding_completed)
    return data


@action('Failed to save onboarding step')
def save_onboarding_step(user_id, step, data=None):
    """Validate one step's fields and merge them into the draft."""
    require_user(user_id)
    profile = get_user_profile(user_id)
    number, name = _resolve_step(step)

    cleaned = clean_profile_fields(data or {}, allowed=STEP_FIELDS[name])

    draft = _get_or_create_draft(user_id)
    merged = dict(draft.data or {})
    merged.update(_to_json(cleaned))
    # Reassign so the JSON column is flagged dirty
    draft.data = merged
    draft.last_step = max(draft.last_step or 0, number)

    if not profile.onboarding_completed:
        profile.onboarding_step = min(number + 1, COMPLETE_STEP)

    db.session.commit()
    logger.debug("Saved onboarding step %s for user %s", name, user_id)
    return draft.to_dict()


@action('Failed to complete onboarding')
def complete_onboarding(user_id, data=None, today=None):
    """
    Apply the draft to the profile and compute nutrition targets.

    Any fields in data are merged first. Fails with invalid_input naming
    the missing fields when the draft is incomplete.
    """
    require_user(user_id)
    profile = get_user_profile(user_id)
    draft = OnboardingDraft.query.filter_by(user_id=user_id).first()

    values = dict(draft.data or {}) if draft else {}
    if data:
        values.update(_to_json(clean_profile_fields(data)))

    missing = missing_target_inputs(values)
    if missing:
        raise InvalidInput(f"Missing required fields: {', '.join(missing)}")

    # Draft values are stored as JSON; validate them back into column types
    for key, value in clean_profile_fields(values).items():
        setattr(profile, key, value)
    if profile.weekly_goal_kg is None:
        profile.weekly_goal_kg = 0

    targets = apply_nutrition_targets(profile, as_of=today)
    profile.onboarding_completed = True
    profile.onboarding_step = COMPLETE_STEP
    if draft is not None:
        db.session.delete(draft)
    db.session.commit()

    logger.info("User %s completed onboarding: %s kcal/day", user_id, targets['daily_calories_target'])
    return profile.to_dict()
