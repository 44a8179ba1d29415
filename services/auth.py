"""
Authentication Service

Account registration and password checks on top of Flask-Login and
Flask-Bcrypt. Every other service receives the verified user id from
current_user_id() and rejects None through require_user().
"""

import logging
import re

from flask_login import current_user
from sqlalchemy.exc import IntegrityError

from extensions import bcrypt
from models import db, User, Profile
from .errors import Unauthenticated, InvalidInput
from .results import action

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
MIN_PASSWORD_LENGTH = 8


def current_user_id():
    """Verified id of the logged-in user, or None."""
    if current_user and current_user.is_authenticated:
        return current_user.id
    return None


def require_user(user_id):
    if user_id is None:
        raise Unauthenticated()
    return user_id


def _normalize_email(email):
    email = (email or '').strip().lower()
    if not EMAIL_RE.match(email) or len(email) > 255:
        raise InvalidInput('A valid email address is required')
    return email


@action('Failed to create account')
def register_user(email, password, full_name=None):
    """Create a User and an empty Profile. Returns the user dict."""
    email = _normalize_email(email)
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidInput(f'Password must be at least {MIN_PASSWORD_LENGTH} characters')

    if User.query.filter_by(email=email).first():
        raise InvalidInput('An account with this email already exists')

    user = User(email=email, password_hash=bcrypt.generate_password_hash(password).decode('utf-8'))
    db.session.add(user)
    try:
        db.session.flush()
    except IntegrityError:
        db.session.rollback()
        raise InvalidInput('An account with this email already exists') from None

    full_name = (full_name or '').strip()[:200] or None
    db.session.add(Profile(user_id=user.id, email=email, full_name=full_name,
                           allergies=[], disliked_foods=[], favorite_cuisines=[]))
    db.session.commit()
    logger.info("Registered user %s", user.id)
    return {'id': user.id, 'email': user.email}


def authenticate(email, password):
    """Return the User for valid credentials, otherwise None."""
    email = (email or '').strip().lower()
    if not email or not password:
        return None
    user = User.query.filter_by(email=email).first()
    if user is None or not bcrypt.check_password_hash(user.password_hash, password):
        return None
    return user
