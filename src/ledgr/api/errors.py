"""Typed failures raised at the REST client boundary."""

from __future__ import annotations

from typing import Any, Mapping, Optional


class ApiError(Exception):
    """Base class for every failure surfaced from the REST API.

    ``message`` is what the user sees: the server's ``message`` field verbatim
    when present, otherwise a generic fallback.
    """

    default_message = "Request failed"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        status_code: Optional[int] = None,
        errors: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.message = message or self.default_message
        self.status_code = status_code
        self.errors: dict[str, list[str]] = _normalize_errors(errors)
        super().__init__(self.message)

    def field_error(self, name: str) -> Optional[str]:
        """Return the first server message for ``name`` if any."""

        messages = self.errors.get(name)
        return messages[0] if messages else None


class TransportError(ApiError):
    """The request never completed (connection refused, DNS, timeout)."""

    default_message = "Unable to reach the server"


class ValidationError(ApiError):
    """The server rejected the payload (400/422), usually with field errors."""

    default_message = "Please check the highlighted fields"


class AuthenticationError(ApiError):
    """Missing or expired bearer token (401)."""

    default_message = "Your session has expired. Please sign in again."


class AuthorizationError(ApiError):
    """The action is not permitted for this user (403)."""

    default_message = "You are not allowed to do that"


class DefaultCategoryError(AuthorizationError):
    """Raised locally, before any request, for system default categories."""

    default_message = "Cannot modify default categories"


class NotFoundError(ApiError):
    default_message = "The requested item no longer exists"


class ConflictError(ApiError):
    default_message = "The item is in use and cannot be changed"


class ServerError(ApiError):
    default_message = "The server could not complete the request"


_STATUS_ERRORS: dict[int, type[ApiError]] = {
    400: ValidationError,
    401: AuthenticationError,
    403: AuthorizationError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
}


def error_for_status(status_code: int, body: Any) -> ApiError:
    """Build the typed error for a non-2xx response body."""

    message = None
    errors = None
    if isinstance(body, Mapping):
        raw_message = body.get("message")
        if isinstance(raw_message, str) and raw_message.strip():
            message = raw_message
        raw_errors = body.get("errors")
        if isinstance(raw_errors, Mapping):
            errors = raw_errors
    error_cls = _STATUS_ERRORS.get(status_code, ServerError)
    return error_cls(message, status_code=status_code, errors=errors)


def _normalize_errors(errors: Optional[Mapping[str, Any]]) -> dict[str, list[str]]:
    if not errors:
        return {}
    normalized: dict[str, list[str]] = {}
    for field, value in errors.items():
        if isinstance(value, str):
            normalized[str(field)] = [value]
        elif isinstance(value, (list, tuple)):
            normalized[str(field)] = [str(item) for item in value]
        else:
            normalized[str(field)] = [str(value)]
    return normalized
