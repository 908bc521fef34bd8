"""Custom exceptions for the service layer."""

from typing import Optional
from uuid import UUID


class ServiceError(Exception):
    """Base exception for service layer errors."""

    def __init__(self, message: str, code: str = "SERVICE_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class NotFoundError(ServiceError):
    """Resource not found error."""

    def __init__(self, resource_type: str, resource_id: UUID):
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(
            message=f"{resource_type} with ID {resource_id} not found",
            code=f"{resource_type.upper()}_NOT_FOUND"
        )


class RecommendationNotFoundError(NotFoundError):
    """Recommendation not found error."""

    def __init__(self, recommendation_id: UUID):
        super().__init__("Recommendation", recommendation_id)


class AuthenticationError(ServiceError):
    """Authentication failed error."""

    def __init__(self, message: str = "Authentication failed", code: str = "AUTHENTICATION_FAILED"):
        super().__init__(message=message, code=code)


class UnauthenticatedError(AuthenticationError):
    """No verified identity accompanied the call."""

    def __init__(self):
        super().__init__(message="Unauthenticated", code="UNAUTHENTICATED")


class UserNotSyncedError(ServiceError):
    """Authenticated caller has no directory record yet."""

    def __init__(self, external_id: str):
        self.external_id = external_id
        super().__init__(
            message="User record not found. Please refresh and try again.",
            code="USER_NOT_SYNCED"
        )


class AuthorizationError(ServiceError):
    """Authorization failed error."""

    def __init__(self, message: str = "Access denied", code: str = "ACCESS_DENIED"):
        super().__init__(message=message, code=code)


class ForbiddenError(AuthorizationError):
    """Role or ownership check failed."""

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message=message, code="FORBIDDEN")


class ValidationFailedError(ServiceError):
    """Input failed a server-side constraint."""

    def __init__(self, message: str, field: Optional[str] = None, code: str = "VALIDATION_FAILED"):
        self.field = field
        super().__init__(message=message, code=code)


class InvalidGenreError(ValidationFailedError):
    """Genre is not a member of the registry."""

    def __init__(self, genre: str):
        self.genre = genre
        super().__init__(
            message=f'Invalid genre: "{genre}".',
            field="genre",
            code="INVALID_GENRE"
        )


class LinkValidationError(ValidationFailedError):
    """Base class for link validation failures."""

    def __init__(self, message: str, code: str):
        super().__init__(message=message, field="link", code=code)


class MalformedURLError(LinkValidationError):
    """Link does not parse as an absolute URL."""

    def __init__(self):
        super().__init__(
            message="Invalid URL. Make sure it starts with https:// or http://",
            code="MALFORMED_URL"
        )


class DisallowedSchemeError(LinkValidationError):
    """Link uses a scheme other than http or https."""

    def __init__(self, scheme: str):
        # Scheme is reported with its trailing colon, e.g. "javascript:"
        self.scheme = scheme
        super().__init__(
            message=f'URLs must use http or https. Received: "{scheme}"',
            code="DISALLOWED_SCHEME"
        )


class InvalidCursorError(ServiceError):
    """Pagination cursor is malformed or belongs to another listing."""

    def __init__(self, message: str = "Invalid pagination cursor"):
        super().__init__(message=message, code="INVALID_CURSOR")
