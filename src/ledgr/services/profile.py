"""Profile info and password change for the settings page."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from ..api.session import AuthSession
from ..domain.repositories.profile import ProfileRepository
from ..models.user import User
from .forms import FormBinding, PasswordChangeForm, ProfileForm
from .mutations import MutationCoordinator, MutationResult

Notify = Callable[[str, bool], None]


class ProfileController:
    """Two dialogs over the signed-in user's account.

    Both forms validate locally first, so a mismatched password confirmation
    never reaches the server. Server field errors (a wrong
    ``current_password``, a taken email) stay inline in the open dialog.
    """

    def __init__(
        self,
        repository: ProfileRepository,
        session: AuthSession,
        *,
        notify: Optional[Notify] = None,
    ) -> None:
        self.repository = repository
        self.session = session
        self.notify = notify
        self.mutations = MutationCoordinator(repository, None, noun="Profile")
        self.info_form = FormBinding(ProfileForm, self._save_info, self._save_info)
        self.password_form = FormBinding(PasswordChangeForm, self._save_password, self._save_password)

    def edit_info(self) -> None:
        user = self.session.user
        self.info_form.open_create(name=user.name if user else "", email=user.email if user else "")

    def change_password(self) -> None:
        self.password_form.open_create()

    def submit_info(self) -> Optional[MutationResult]:
        return self._submit(self.info_form)

    def submit_password(self) -> Optional[MutationResult]:
        return self._submit(self.password_form)

    def _submit(self, form: FormBinding) -> Optional[MutationResult]:
        result = form.submit()
        if result is not None and self.notify is not None:
            self.notify(result.message, not result.ok)
        return result

    def _apply_info(self, payload: Mapping[str, Any]) -> Optional[User]:
        user = self.repository.update_info(payload)
        if user is not None:
            self.session.update_user(user)
        return user

    def _save_info(self, payload: Mapping[str, Any], **_kwargs: Any) -> MutationResult:
        return self.mutations.run(
            "Update profile", lambda: self._apply_info(payload), success_message="Profile updated successfully"
        )

    def _save_password(self, payload: Mapping[str, Any], **_kwargs: Any) -> MutationResult:
        return self.mutations.run(
            "Update password",
            lambda: self.repository.update_password(payload),
            success_message="Password updated successfully",
        )
