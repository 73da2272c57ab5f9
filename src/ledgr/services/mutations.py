"""Create/update/delete with a full refetch after every successful write."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar

from ..api.errors import ApiError, DefaultCategoryError
from ..domain.repositories.resource import ResourceRepository
from ..infra.repositories.category import ensure_user_owned
from ..logging_config import get_logger
from .fetcher import ResourceFetcher

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class MutationResult:
    """Outcome handed back to the dialog that triggered the write."""

    ok: bool
    message: str = ""
    field_errors: Mapping[str, str] = field(default_factory=dict)
    value: Any = None

    @classmethod
    def failure(cls, error: ApiError) -> "MutationResult":
        field_errors = {name: messages[0] for name, messages in error.errors.items() if messages}
        return cls(ok=False, message=error.message, field_errors=field_errors)


def guard_owned(entity: Any, action: str = "edit") -> None:
    """Raise :class:`DefaultCategoryError` for system-owned entities."""

    if entity is not None and getattr(entity, "is_default", False):
        ensure_user_owned(entity, action)


ConfirmStep = Callable[[Callable[[], None]], None]


class MutationCoordinator(Generic[T]):
    """Serialize writes for one resource and keep its list authoritative.

    The list is never patched locally. After the server accepts a write the
    coordinator performs ``fetcher.refetch()`` before returning, so a dialog
    that closes on ``ok`` always reveals fresh data. Failed writes leave the
    list untouched.
    """

    def __init__(
        self,
        repository: ResourceRepository[T],
        fetcher: Optional[ResourceFetcher[T]] = None,
        *,
        noun: str = "Item",
    ) -> None:
        self.repository = repository
        self.fetcher = fetcher
        self.noun = noun

    def run(self, label: str, call: Callable[[], Any], *, success_message: str = "") -> MutationResult:
        """Execute ``call`` and refetch on success; errors become results."""

        try:
            value = call()
        except ApiError as exc:
            logger.warning(
                "%s failed", label, extra={"status": exc.status_code, "error_message": exc.message}
            )
            return MutationResult.failure(exc)
        logger.info("%s succeeded", label)
        if self.fetcher is not None:
            self.fetcher.refetch()
        return MutationResult(ok=True, message=success_message or f"{label} succeeded", value=value)

    def create(self, payload: Mapping[str, Any]) -> MutationResult:
        return self.run(
            f"Create {self.noun.lower()}",
            lambda: self.repository.create(payload),
            success_message=f"{self.noun} created",
        )

    def update(self, item_id: int, payload: Mapping[str, Any], *, target: Any = None) -> MutationResult:
        try:
            guard_owned(target, "edit")
        except DefaultCategoryError as exc:
            return MutationResult.failure(exc)
        return self.run(
            f"Update {self.noun.lower()}",
            lambda: self.repository.update(item_id, payload, target=target),
            success_message=f"{self.noun} updated",
        )

    def delete(self, item_id: int, *, target: Any = None) -> MutationResult:
        try:
            guard_owned(target, "delete")
        except DefaultCategoryError as exc:
            return MutationResult.failure(exc)
        return self.run(
            f"Delete {self.noun.lower()}",
            lambda: self.repository.delete(item_id, target=target),
            success_message=f"{self.noun} deleted",
        )

    def request_delete(
        self,
        item_id: int,
        confirm: ConfirmStep,
        *,
        target: Any = None,
        on_done: Optional[Callable[[MutationResult], None]] = None,
    ) -> Optional[MutationResult]:
        """Ask ``confirm`` first; the DELETE is sent only if it calls back.

        Default categories are refused immediately, without a prompt. Returns
        that refusal, or ``None`` while the confirmation is pending.
        """

        try:
            guard_owned(target, "delete")
        except DefaultCategoryError as exc:
            result = MutationResult.failure(exc)
            if on_done is not None:
                on_done(result)
            return result

        def proceed() -> None:
            result = self.delete(item_id, target=target)
            if on_done is not None:
                on_done(result)

        confirm(proceed)
        return None
