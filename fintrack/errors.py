"""Application errors mapped to structured JSON responses in fintrack.main."""

from fastapi import status


class AppError(Exception):
    """Base class for errors that are reported to the client as-is."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str | None = None, *, error: str | None = None):
        self.message = message or self.message
        # Diagnostic detail for the client, never secrets
        self.error = error
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {"success": False, "message": self.message}
        if self.error:
            body["error"] = self.error
        return body


class ProfileValidationError(AppError):
    """Profile fields are missing or invalid."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Please fill in all required fields"

    def __init__(self, fields: list[str], message: str | None = None):
        self.fields = fields
        super().__init__(message or f"{self.message}. Missing: {', '.join(fields)}")

    def to_dict(self) -> dict:
        body = super().to_dict()
        body["errors"] = self.fields
        return body


class DuplicateEmail(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "User already exists"


class InvalidCredentials(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid credentials"


class UserNotFound(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "User not found"


class ProfileAlreadyExists(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Details already exist. Use PUT to update."


class ProfileNotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "User details not found"


class MissingToken(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Access token required"


class InvalidToken(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Invalid or expired token"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(error=reason)


class InvalidProviderToken(AppError):
    """The Google ID token was rejected."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid Google token"


class UnverifiedProviderEmail(AppError):
    """Google did not vouch for the email of an account we would link to."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = (
        "This Google account's email is not verified. "
        "Sign in with your password to continue."
    )


class GoogleAccountConflict(AppError):
    """The Google account and the email point at different users."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "This email is already linked to a different Google account"


class AccountNotFound(AppError):
    """The token is valid but its user no longer exists."""

    status_code = status.HTTP_404_NOT_FOUND
    message = "User not found"
