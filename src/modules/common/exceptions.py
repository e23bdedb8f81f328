"""Domain exception classes for business logic errors."""

INTERNAL_ERROR_MESSAGE = "Something went wrong. Check the server log for details."


class DomainError(Exception):
    """Base class for all domain-specific errors."""

    pass


class ValidationError(DomainError):
    """Raised when request data is missing, malformed or inconsistent."""

    pass


class AuthenticationError(DomainError):
    """Raised when a caller cannot be identified from its credentials."""

    pass


class PermissionDeniedError(DomainError):
    """Raised when a user attempts an action they don't have permission for."""

    pass


class ResourceNotFoundError(DomainError):
    """Raised when a requested resource cannot be found."""

    pass


class ResourceExistsError(DomainError):
    """Raised when attempting to create a resource that already exists."""

    pass


class RepositoryError(DomainError):
    """Raised when a persistence operation fails or faults.

    The message is always safe to return to clients; the underlying cause
    is written to the log where the error was raised.
    """

    def __init__(self, message: str = INTERNAL_ERROR_MESSAGE):
        super().__init__(message)


class AuthorNotFoundError(ResourceNotFoundError):
    """Raised when an author cannot be found."""

    pass


class BookNotFoundError(ResourceNotFoundError):
    """Raised when a book cannot be found."""

    pass


class UserNotFoundError(ResourceNotFoundError):
    """Raised when a user cannot be found."""

    pass


class UserExistsError(ResourceExistsError):
    """Raised when attempting to create a user with an existing email or username."""

    pass
