"""
Ann Investment Portal - Custom Exceptions
Hierarchy of exceptions for better error handling
"""
from typing import Optional, Any
from fastapi import HTTPException, status


class PortalException(Exception):
    """Base exception for all portal errors"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, code: Optional[str] = None, details: Optional[Any] = None):
        self.message = message
        self.code = code or "PORTAL_ERROR"
        self.details = details
        super().__init__(self.message)


class ValidationError(PortalException):
    """Missing or malformed request data"""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Missing required fields", details: Optional[Any] = None):
        super().__init__(message, "VALIDATION_ERROR", details)


class EmailAlreadyRegisteredError(PortalException):
    """Unique constraint violation on email"""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, email: Optional[str] = None):
        super().__init__(
            "Email already registered",
            "EMAIL_ALREADY_REGISTERED",
            {"email": email} if email else None
        )


class NotFoundError(PortalException):
    """Requested record does not exist"""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str = "Resource", details: Optional[Any] = None):
        super().__init__(f"{resource} not found", "NOT_FOUND", details)


class AccountNotFoundError(NotFoundError):
    """No user account with the given id"""

    def __init__(self, account_id: Any = None):
        super().__init__("User", {"id": account_id} if account_id is not None else None)


class AuthException(PortalException):
    """Authentication errors"""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message, code or "AUTH_ERROR")


class InvalidCredentialsError(PortalException):
    """Invalid email or password"""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self):
        super().__init__("Invalid credentials", "INVALID_CREDENTIALS")


class TokenExpiredError(AuthException):
    """JWT token has expired"""

    def __init__(self):
        super().__init__("Token has expired", "TOKEN_EXPIRED")


class InvalidTokenError(AuthException):
    """JWT token is invalid"""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message, "INVALID_TOKEN")


class ForbiddenError(PortalException):
    """Authenticated but not allowed"""

    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Admin access required"):
        super().__init__(message, "FORBIDDEN")


class UpstreamFailure(PortalException):
    """Object storage or data store failure not otherwise classified"""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message, code or "UPSTREAM_FAILURE")


class UploadFailedError(UpstreamFailure):
    """Identity document upload failed"""

    def __init__(self, message: str = "Upload failed", cause: Optional[BaseException] = None):
        super().__init__(message, "UPLOAD_FAILED")
        self.cause = cause


# HTTP Exception Helpers
def raise_unauthorized(detail: str = "Could not validate credentials") -> None:
    """Raise 401 Unauthorized"""
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"}
    )


def raise_not_found(resource: str = "Resource") -> None:
    """Raise 404 Not Found"""
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"{resource} not found"
    )
