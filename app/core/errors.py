"""Application error hierarchy. Each class maps to one HTTP status in app.main."""


class AppError(Exception):
    """Base for errors that are reported to the client as {success: false, error}."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(AppError):
    """Missing or malformed input."""

    status_code = 400


class NoResetRequestedError(ValidationError):
    """Password reset attempted with no outstanding code on record."""

    def __init__(self, message: str = "No password reset request found") -> None:
        super().__init__(message)


class InvalidCodeError(ValidationError):
    """Reset code does not match, or the account does not exist (same message)."""

    def __init__(self, message: str = "Invalid email or OTP") -> None:
        super().__init__(message)


class CodeExpiredError(ValidationError):
    """Reset code presented at or after its expiry."""

    def __init__(self, message: str = "OTP has expired") -> None:
        super().__init__(message)


class AuthenticationError(AppError):
    """Bad credentials or token. Messages stay generic."""

    status_code = 401


class NotFoundError(AppError):
    status_code = 404


class ServerError(AppError):
    """Store, hash or dispatch failure. The cause is logged, never returned."""

    status_code = 500


class EmailDeliveryError(ServerError):
    """Raised by email dispatchers when a message could not be sent."""
