class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class SystemCategoryError(DomainError):
    """Raised when someone tries to create, edit or delete the Attendance category."""


class DeviceMismatchError(DomainError):
    """Raised when a check-in comes from a device other than the registered one."""


class LocationError(DomainError):
    """Raised when a check-in position is unusable or too far from school."""
