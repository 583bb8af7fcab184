class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidRangeError(ValidationError):
    """Raised when a slot range starts after it ends."""


class MissingReasonError(ValidationError):
    """Raised when a permission is requested without a reason."""


class MissingTypeError(ValidationError):
    """Raised when an activity is submitted without a type."""


class MissingDescriptionError(ValidationError):
    """Raised when the activity type requires a description and none was given."""


class SlotNotFoundError(ValidationError):
    """Raised when a time slot label is not in the catalog."""


class OnFullDayLeaveError(ValidationError):
    """Raised when a slot other than the leave marker is written during full-day leave."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class ConflictError(DomainError):
    """Raised when a write would duplicate a unique value (e.g. employee name)."""


class ConnectivityError(DomainError):
    """Raised when the backing store cannot be reached or fails."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
