class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced entity id does not resolve."""


class TimeCollisionError(DomainError):
    """Raised when a reservation collides in time or breaks branch continuity."""


class AlreadyAssignedError(DomainError):
    """Raised when a client is already assigned to a branch."""


class DuplicateLoginError(DomainError):
    """Raised when a login is already taken by another account."""


class AlreadyExistsError(DomainError):
    """Raised when a rent or return already exists for a reservation."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
