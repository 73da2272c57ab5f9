"""One resource list page: route in, list state and dialog state out.

``ListViewController`` wires the pieces in this package together so that a
Flet view only has to render what it is handed:

* the route query decodes into :class:`ListFilters` and drives one fetch;
* the search box feeds a :class:`SearchDebouncer` that navigates on commit;
* the dialog is a :class:`FormBinding` whose submits go through the
  :class:`MutationCoordinator`, which refetches before the dialog closes.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, Optional, TypeVar

from ..api.errors import DefaultCategoryError
from ..domain.repositories.resource import ResourceRepository
from ..logging_config import get_logger
from .aggregates import Totals
from .debounce import DEFAULT_DELAY_SECONDS, DEFAULT_MIN_LENGTH, SearchDebouncer, TimerFactory, daemon_timer
from .fetcher import ListState, ResourceFetcher
from .filters import FILTER_KEYS, FilterNavigator, ListFilters, NavigablePage, decode_filters, split_route
from .forms import FormBinding, FormSchema
from .mutations import ConfirmStep, MutationCoordinator, MutationResult, guard_owned

logger = get_logger(__name__)

T = TypeVar("T")

Notify = Callable[[str, bool], None]


class ListViewController(Generic[T]):
    def __init__(
        self,
        page: NavigablePage,
        *,
        path: str,
        repository: ResourceRepository[T],
        form_cls: Optional[type[FormSchema]] = None,
        noun: str = "Item",
        per_page: int = 15,
        filter_keys: tuple[str, ...] = FILTER_KEYS,
        on_state: Optional[Callable[[ListState[T]], None]] = None,
        on_form: Optional[Callable[[FormBinding], None]] = None,
        notify: Optional[Notify] = None,
        search_delay: float = DEFAULT_DELAY_SECONDS,
        search_min_length: int = DEFAULT_MIN_LENGTH,
        timer_factory: TimerFactory = daemon_timer,
    ) -> None:
        self.page = page
        self.path = path
        self.filter_keys = filter_keys
        self.on_state = on_state
        self.notify = notify
        self.filters: ListFilters = decode_filters("", filter_keys)
        self.loading = False
        self.navigator = FilterNavigator(page, path)
        self.fetcher: ResourceFetcher[T] = ResourceFetcher(
            repository, per_page=per_page, on_result=self._deliver
        )
        self.mutations: MutationCoordinator[T] = MutationCoordinator(repository, self.fetcher, noun=noun)
        self.form: Optional[FormBinding] = None
        if form_cls is not None:
            self.form = FormBinding(
                form_cls, self.mutations.create, self.mutations.update, on_change=on_form
            )
        self.search = SearchDebouncer(
            self.commit_search,
            lambda: self.filters.search,
            delay=search_delay,
            min_length=search_min_length,
            timer_factory=timer_factory,
        )

    @property
    def state(self) -> ListState[T]:
        return self.fetcher.latest

    @property
    def items(self) -> list[T]:
        return self.state.items

    def on_route(self, route: Optional[str] = None) -> ListState[T]:
        """Decode the route's filters and load the matching page."""

        path, query = split_route(route if route is not None else self.page.route)
        if path != self.path:
            query = ""
        self.filters = decode_filters(query, self.filter_keys)
        return self.reload()

    def reload(self) -> ListState[T]:
        self.loading = True
        try:
            state = self.fetcher.fetch(self.filters)
        finally:
            self.loading = False
        if state.error and not state.stale and self.notify is not None:
            self.notify(state.error, True)
        return state

    def _deliver(self, state: ListState[T]) -> None:
        if self.on_state is not None:
            self.on_state(state)

    def commit_search(self, value: str) -> None:
        self.navigator.apply_filter("search", value)

    def apply_filter(self, key: str, value: Any) -> None:
        self.navigator.apply_filter(key, value)

    def go_to_page(self, page_number: int) -> None:
        self.navigator.go_to_page(page_number)

    def clear_filters(self) -> None:
        self.search.cancel()
        self.navigator.clear_filters()

    def submit_form(self) -> Optional[MutationResult]:
        if self.form is None:
            return None
        result = self.form.submit()
        self._report(result)
        return result

    def request_edit(self, entity: Any) -> Optional[MutationResult]:
        """Open the edit dialog unless the entity is system owned."""

        try:
            guard_owned(entity, "edit")
        except DefaultCategoryError as exc:
            result = MutationResult.failure(exc)
            self._report(result)
            return result
        if self.form is not None:
            self.form.open_edit(entity)
        return None

    def request_delete(self, entity: Any, confirm: ConfirmStep) -> None:
        self.mutations.request_delete(
            entity.id, confirm, target=entity, on_done=self._report
        )

    def run_action(self, label: str, call: Callable[[], Any], *, success_message: str = "") -> MutationResult:
        result = self.mutations.run(label, call, success_message=success_message)
        self._report(result)
        return result

    def action_form(
        self,
        form_cls: type[FormSchema],
        label: str,
        call: Callable[[dict[str, Any]], Any],
        *,
        success_message: str = "",
    ) -> FormBinding:
        """Create-only dialog for an action such as a withdrawal or repayment.

        ``call`` receives the validated payload; the list refetches on success.
        """

        def submit(payload: dict[str, Any]) -> MutationResult:
            return self.run_action(label, lambda: call(dict(payload)), success_message=success_message)

        def no_edit(*_args: Any, **_kwargs: Any) -> MutationResult:
            raise TypeError(f"{label} has no edit mode")

        return FormBinding(form_cls, submit, no_edit)

    def _report(self, result: Optional[MutationResult]) -> None:
        if result is None or self.notify is None:
            return
        self.notify(result.message, not result.ok)

    def totals(self, field: str = "amount", authoritative: Any = None) -> Totals:
        return Totals.of(self.items, field, authoritative)

    def dispose(self) -> None:
        """Stop pending search propagation when the view goes away."""

        self.search.cancel()
