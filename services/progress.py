"""
Progress Service

Weight logging (one entry per user per day) and progress statistics.
"""

import logging
from datetime import date, timedelta

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from constants import PROFILE_RANGES
from models import db, Profile, WeightLog
from utils.sanitizer import sanitize_text
from .auth import require_user
from .errors import InvalidInput, NotFound
from .parsing import optional_float, parse_date
from .results import action

logger = logging.getLogger(__name__)


def _sync_profile_weight(user_id, weight_kg):
    Profile.query.filter_by(user_id=user_id).update(
        {'current_weight_kg': weight_kg}, synchronize_session=False
    )


@action('Failed to log weight')
def log_weight(user_id, weight_kg, notes=None, on_date=None):
    """
    Record the user's weight for a day, replacing any entry for that day.

    The profile's current weight is updated afterwards; if that write fails
    the weight log is kept and the failure is logged.
    """
    require_user(user_id)

    weight = optional_float(weight_kg) if not isinstance(weight_kg, bool) else None
    low, high = PROFILE_RANGES['current_weight_kg']
    if weight is None or weight < low or weight > high:
        raise InvalidInput(f"Weight must be between {low} and {high} kg")
    try:
        logged_at = parse_date(on_date) or date.today()
    except ValueError:
        raise InvalidInput('Date must be YYYY-MM-DD') from None
    notes = sanitize_text(notes, max_length=1000) or None

    entry = WeightLog.query.filter_by(user_id=user_id, logged_at=logged_at).first()
    if entry is None:
        entry = WeightLog(user_id=user_id, logged_at=logged_at)
        db.session.add(entry)
    entry.weight_kg = weight
    entry.notes = notes
    try:
        db.session.commit()
    except IntegrityError:
        # Another request logged this day first; overwrite its entry
        db.session.rollback()
        entry = WeightLog.query.filter_by(user_id=user_id, logged_at=logged_at).one()
        entry.weight_kg = weight
        entry.notes = notes
        db.session.commit()

    try:
        with db.session.begin_nested():
            _sync_profile_weight(user_id, weight)
        db.session.commit()
    except SQLAlchemyError:
        logger.warning("Logged weight %s for user %s but could not update profile weight",
                       entry.id, user_id, exc_info=True)
        db.session.rollback()

    return entry.to_dict()


@action('Failed to fetch weight logs')
def get_weight_logs(user_id, days=30, today=None):
    """Entries from the last `days` days, oldest first."""
    require_user(user_id)
    since = (today or date.today()) - timedelta(days=days)
    logs = (WeightLog.query
            .filter(WeightLog.user_id == user_id, WeightLog.logged_at >= since)
            .order_by(WeightLog.logged_at)
            .all())
    return [log.to_dict() for log in logs]


@action('Failed to delete weight log')
def delete_weight_log(user_id, log_id):
    require_user(user_id)
    entry = WeightLog.query.filter_by(id=log_id, user_id=user_id).first()
    if entry is None:
        raise NotFound('Weight log not found')
    db.session.delete(entry)
    db.session.commit()
    return {'id': log_id}


def _progress_percent(start, current, target):
    """Share of the distance from start to target covered so far, 0-100."""
    if target is None or start == target:
        return 0
    percent = (start - current) / (start - target) * 100
    return round(min(max(percent, 0), 100), 1)


@action('Failed to fetch progress')
def get_progress_stats(user_id, days=90, today=None):
    """Weight progress toward the target weight plus the chart series."""
    require_user(user_id)
    profile = Profile.query.filter_by(user_id=user_id).first()
    since = (today or date.today()) - timedelta(days=days)
    logs = (WeightLog.query
            .filter(WeightLog.user_id == user_id, WeightLog.logged_at >= since)
            .order_by(WeightLog.logged_at)
            .all())

    current = profile.current_weight_kg if profile and profile.current_weight_kg else 0
    target = profile.target_weight_kg if profile else None
    start = logs[0].weight_kg if logs else current

    return {
        'current_weight_kg': current,
        'target_weight_kg': target,
        'starting_weight_kg': start,
        'total_change_kg': round(current - start, 1),
        'remaining_kg': round(abs(current - target), 1) if target is not None else None,
        'progress_percent': _progress_percent(start, current, target),
        'primary_goal': profile.primary_goal if profile else None,
        'chart': [{'date': log.logged_at.isoformat(), 'weight': log.weight_kg} for log in logs],
    }
