"""
Service Errors

Typed failures raised inside the service layer. Action entry points turn
them into failed ActionResults; they never escape to callers.
"""


class ServiceError(Exception):
    """Base class for expected service failures."""
    code = 'error'
    default_message = 'Something went wrong'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(ServiceError):
    """No verified user."""
    code = 'unauthenticated'
    default_message = 'Not authenticated'


class ProfileNotFound(ServiceError):
    """The user has no profile; onboarding must be completed first."""
    code = 'profile_not_found'
    default_message = 'Profile not found'


class GenerationError(ServiceError):
    """The external generation service failed, timed out or returned unusable content."""
    code = 'generation_error'
    default_message = 'Meal plan generation failed'


class PlanPersistenceFailed(ServiceError):
    """The meal plan row could not be written; nothing was saved."""
    code = 'plan_persistence_failed'
    default_message = 'Failed to save meal plan'


class NotFound(ServiceError):
    """Requested row does not exist or is not owned by the user."""
    code = 'not_found'
    default_message = 'Not found'


class InvalidInput(ServiceError):
    """User-supplied data failed validation."""
    code = 'invalid_input'
    default_message = 'Invalid input'
