"""Sign in, sign out and registration against the REST API."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..api.client import ApiClient
from ..api.envelope import unwrap
from ..api.errors import ApiError, AuthenticationError, ValidationError
from ..api.session import AuthSession
from ..logging_config import get_logger
from ..models.user import User
from .forms import FormValidationError, LoginForm, RegisterForm

logger = get_logger(__name__)


def _session_from_body(body: Any) -> tuple[str, Optional[User]]:
    data = unwrap(body)
    if not isinstance(data, Mapping):
        raise AuthenticationError("The server did not return a session")
    token = data.get("token") or data.get("access_token")
    if not token:
        raise AuthenticationError("The server did not return a session")
    raw_user = data.get("user")
    user = User.model_validate(raw_user) if isinstance(raw_user, Mapping) else None
    return str(token), user


def _local_errors(exc: FormValidationError) -> ValidationError:
    return ValidationError(exc.message, errors={name: [msg] for name, msg in exc.errors.items()})


def login(client: ApiClient, session: AuthSession, email: str, password: str) -> Optional[User]:
    """Exchange credentials for a bearer token and persist it.

    Raises ``ValidationError`` for locally invalid input and the server's
    ``ApiError`` otherwise; the session is untouched on failure.
    """

    try:
        form = LoginForm.parse({"email": email, "password": password})
    except FormValidationError as exc:
        raise _local_errors(exc) from exc

    body = client.post("/login", form.to_payload())
    token, user = _session_from_body(body)
    session.sign_in(token, user)
    logger.info("User signed in", extra={"user_id": user.id if user else None})
    return user


def register(client: ApiClient, session: AuthSession, fields: Mapping[str, Any]) -> Optional[User]:
    """Create an account; the password confirmation is checked before sending."""

    try:
        form = RegisterForm.parse(fields)
    except FormValidationError as exc:
        raise _local_errors(exc) from exc

    body = client.post("/register", form.to_payload())
    token, user = _session_from_body(body)
    session.sign_in(token, user)
    logger.info("User registered", extra={"user_id": user.id if user else None})
    return user


def logout(client: ApiClient, session: AuthSession) -> None:
    """Revoke the token server-side when possible and always clear it locally."""

    if session.is_authenticated:
        try:
            client.post("/logout")
        except ApiError as exc:
            logger.warning("Server logout failed", extra={"error_message": exc.message})
    session.clear()
    logger.info("User signed out")
