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


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class AuthenticationError(DomainError):
    """Sign-in was refused."""


class InvalidCredentialsError(AuthenticationError):
    """Unknown email, wrong password, or OAuth-only account.

    The three cases share one message so callers cannot tell which accounts exist.
    """

    def __init__(self):
        super().__init__("Invalid credentials")


class AccountDeactivatedError(AuthenticationError):
    """Credentials were valid but the account is deactivated."""

    def __init__(self):
        super().__init__("Account is deactivated")
