"""
Error kinds surfaced by the API.

Each kind is an HTTPException so handlers can raise them the usual FastAPI
way; the handler in main.py renders them as
{"status": "error", "error": <kind>, "message": <detail>}.
"""
from fastapi import HTTPException, status
from typing import Optional


class ServiceError(HTTPException):
    kind = "Error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "An internal error occurred"

    def __init__(self, message: Optional[str] = None, headers: Optional[dict] = None):
        super().__init__(
            status_code=self.status_code,
            detail=message or self.default_message,
            headers=headers,
        )


class InvalidCredentials(ServiceError):
    kind = "InvalidCredentials"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class MissingToken(ServiceError):
    kind = "MissingToken"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authorization token is required"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class InvalidOrExpiredToken(ServiceError):
    kind = "InvalidOrExpiredToken"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid or expired token"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class RoleForbidden(ServiceError):
    kind = "RoleForbidden"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"


class ValidationFailed(ServiceError):
    kind = "ValidationError"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class NotFound(ServiceError):
    kind = "NotFound"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class InvalidStatusValue(ServiceError):
    kind = "InvalidStatusValue"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, value: str, valid: list):
        super().__init__(f"Invalid status '{value}'. Valid statuses: {', '.join(valid)}")


class InvalidStatusTransition(ServiceError):
    kind = "InvalidStatusTransition"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, current: str, target: str):
        super().__init__(f"Cannot change order status from '{current}' to '{target}'")


def error_body(kind: str, message: str) -> dict:
    return {"status": "error", "error": kind, "message": message}
