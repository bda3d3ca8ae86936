"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class AlreadyExistsError(DuplicateError):
    """A user with the submitted email is already registered."""


class InvalidCredentialsError(DomainError):
    """Email/password pair does not match a stored user.

    The message is the same whether the email or the password was wrong.
    """

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class StoreError(DomainError):
    """Persistence or connectivity failure in a repository."""


class HashingError(DomainError):
    """Password hashing primitive failed."""


class SigningError(DomainError):
    """Token could not be signed."""


class InvalidTokenError(DomainError):
    """Token signature, expiry or claims are invalid."""


class OperationTimeoutError(DomainError):
    """Operation did not finish within its deadline."""


class OTPRejectedError(DomainError):
    """The one-time code was not approved for this phone number."""
