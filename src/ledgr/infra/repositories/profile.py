"""Profile info and password endpoints for the signed-in user."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ...api.client import ApiClient
from ...api.envelope import unwrap
from ...logging_config import get_logger
from ...models.user import User

logger = get_logger(__name__)


class HttpProfileRepository:
    def __init__(self, client: ApiClient):
        self.client = client

    def update_info(self, payload: Mapping[str, Any]) -> Optional[User]:
        """Save name and email; returns the user the server echoes back."""
        body = unwrap(self.client.put("/profile/info", dict(payload)))
        logger.info("Updated profile info")
        if not isinstance(body, Mapping):
            return None
        raw = body.get("user", body)
        return User.model_validate(raw) if isinstance(raw, Mapping) and "id" in raw else None

    def update_password(self, payload: Mapping[str, Any]) -> None:
        self.client.put("/profile/password", dict(payload))
        logger.info("Updated password")
