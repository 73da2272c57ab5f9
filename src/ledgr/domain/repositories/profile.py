"""Profile protocol for the signed-in user."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from ...models.user import User


class ProfileRepository(Protocol):
    def update_info(self, payload: Mapping[str, Any]) -> Optional[User]:
        """Change name and email."""
        ...

    def update_password(self, payload: Mapping[str, Any]) -> None:
        """Change the password; the server checks ``current_password``."""
        ...
