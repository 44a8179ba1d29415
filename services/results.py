"""
Action Results

Every service action returns an ActionResult instead of raising. The
`action` decorator performs the conversion and keeps the session clean
after a failure.
"""

import functools
import logging

from sqlalchemy.exc import SQLAlchemyError

from models import db
from .errors import ServiceError

logger = logging.getLogger(__name__)


class ActionResult:
    """Outcome of a service action: data on success, code and message on failure."""

    def __init__(self, success, data=None, error=None, code=None):
        self.success = success
        self.data = data
        self.error = error
        self.code = code

    @classmethod
    def ok(cls, data=None):
        return cls(True, data=data)

    @classmethod
    def fail(cls, error, code='error'):
        return cls(False, error=error, code=code)

    def to_dict(self):
        if self.success:
            return {'success': True, 'data': self.data}
        return {'success': False, 'error': self.error, 'code': self.code}

    def __repr__(self):
        if self.success:
            return f"<ActionResult ok data={self.data!r}>"
        return f"<ActionResult fail code={self.code} error={self.error!r}>"


def action(default_message):
    """
    Wrap a service function so it always returns an ActionResult.

    ServiceError -> failed result with the error's code and message.
    SQLAlchemyError -> session rolled back, failed result with default_message.
    Return values that are not ActionResults are wrapped with ActionResult.ok.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                result = func(*args, **kwargs)
            except ServiceError as e:
                db.session.rollback()
                return ActionResult.fail(e.message, e.code)
            except SQLAlchemyError:
                logger.exception("%s: database error", func.__name__)
                db.session.rollback()
                return ActionResult.fail(default_message)
            if isinstance(result, ActionResult):
                return result
            return ActionResult.ok(result)
        return wrapper
    return decorator
