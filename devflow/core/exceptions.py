"""Domain errors raised by the services and mapped to HTTP responses by the routes."""


class DevFlowError(Exception):
    """Base class for errors that carry a client-safe message."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(DevFlowError):
    """Malformed input: empty or too-long fields, weak password, business-rule violations."""


class WeakPassword(ValidationError):
    """Password shorter than the minimum length."""


class ConflictError(DevFlowError):
    """A unique identity field is already taken."""


class EmailTaken(ConflictError):
    def __init__(self, message: str = "Email already registered") -> None:
        super().__init__(message)


class UsernameTaken(ConflictError):
    def __init__(self, message: str = "Username already taken") -> None:
        super().__init__(message)


class AuthFailure(DevFlowError):
    """
    Login failed. Raised with the same message for an unknown email and a wrong
    password so callers cannot enumerate accounts.
    """

    def __init__(self, message: str = "Invalid email or password") -> None:
        super().__init__(message)


class NotFoundError(DevFlowError):
    """Resource is missing, or exists but is not owned by the caller."""


class PasswordHashTimeout(DevFlowError):
    """Password hashing did not finish within the configured bound."""

    def __init__(self, message: str = "Password hashing timed out") -> None:
        super().__init__(message)
