"""Explicit authentication session passed to the API client."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..logging_config import get_logger
from ..models.user import User

logger = get_logger(__name__)


@dataclass
class AuthSession:
    """Process-wide session state.

    Lifecycle: set at login, read by every request, cleared at logout. The
    client reads ``token`` on each call so a login after construction is
    picked up without rebuilding anything.
    """

    token: Optional[str] = None
    user: Optional[User] = None
    store: Optional["TokenStore"] = field(default=None, repr=False)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def sign_in(self, token: str, user: Optional[User] = None) -> None:
        if not token:
            raise ValueError("token must not be empty")
        self.token = token
        self.user = user
        if self.store is not None:
            self.store.save(token, user)

    def update_user(self, user: User) -> None:
        """Replace the cached profile, e.g. after a profile edit."""

        self.user = user
        if self.store is not None and self.token:
            self.store.save(self.token, user)

    def clear(self) -> None:
        self.token = None
        self.user = None
        if self.store is not None:
            self.store.clear()

    @classmethod
    def restore(cls, store: "TokenStore") -> "AuthSession":
        """Rebuild a session from client-side storage (may be signed out)."""

        token, user = store.load()
        return cls(token=token, user=user, store=store)


class TokenStore:
    """JSON file holding the bearer token between app launches."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> tuple[Optional[str], Optional[User]]:
        if not self.path.exists():
            return None, None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable session file", extra={"path": str(self.path), "error": str(exc)})
            return None, None
        if not isinstance(data, dict):
            return None, None
        token = data.get("token") or None
        user = None
        raw_user = data.get("user")
        if isinstance(raw_user, dict):
            try:
                user = User.model_validate(raw_user)
            except ValueError:
                user = None
        return token, user

    def save(self, token: str, user: Optional[User]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"token": token, "user": user.model_dump() if user else None}
        self.path.write_text(json.dumps(payload), encoding="utf-8")
        logger.debug("Session persisted", extra={"path": str(self.path)})

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
