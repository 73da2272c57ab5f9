"""REST API access: session, client, errors and response envelopes."""

from .client import ApiClient
from .envelope import ListEnvelope, Paginated, Plain, normalize_list, unwrap
from .errors import (
    ApiError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DefaultCategoryError,
    NotFoundError,
    ServerError,
    TransportError,
    ValidationError,
)
from .session import AuthSession, TokenStore

__all__ = [
    "ApiClient",
    "ApiError",
    "AuthSession",
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "DefaultCategoryError",
    "ListEnvelope",
    "NotFoundError",
    "Paginated",
    "Plain",
    "ServerError",
    "TokenStore",
    "TransportError",
    "ValidationError",
    "normalize_list",
    "unwrap",
]
