"""Helpers shared by the resource list views."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Iterable, Optional, Sequence

import flet as ft

from .. import controllers
from ...api.errors import ApiError
from ...logging_config import get_logger
from ...models.funding import FundingKind
from ...services.filters import FILTER_KEYS
from ...services.forms import FormSchema
from ...services.list_view import ListViewController
from ..components import build_app_bar, build_main_layout
from ..constants import ALL

if TYPE_CHECKING:
    from ..context import AppContext

logger = get_logger(__name__)

Options = list[tuple[str, str]]


def list_controller(
    ctx: AppContext,
    page: ft.Page,
    *,
    path: str,
    repository: Any,
    form_cls: Optional[type[FormSchema]] = None,
    noun: str = "Item",
    filter_keys: tuple[str, ...] = FILTER_KEYS,
) -> ListViewController:
    """Controller configured from the app settings, reporting through snack bars."""

    return ListViewController(
        page,
        path=path,
        repository=repository,
        form_cls=form_cls,
        noun=noun,
        per_page=ctx.config.PER_PAGE,
        filter_keys=filter_keys,
        notify=lambda message, error: controllers.notify(page, message, error),
        search_delay=ctx.config.search_debounce_seconds,
        search_min_length=ctx.config.SEARCH_MIN_LENGTH,
    )


def load_options(page: ft.Page, label: str, loader: Callable[[], Iterable[Any]]) -> list[Any]:
    """Fetch dropdown sources; failures notify and yield an empty list."""

    try:
        return list(loader())
    except ApiError as exc:
        logger.warning("Could not load %s", label, extra={"status": exc.status_code})
        controllers.notify(page, f"Could not load {label}: {exc.message}", True)
        return []


def category_options(ctx: AppContext, page: ft.Page, category_type: Optional[str] = None) -> Options:
    if category_type:
        categories = load_options(page, "categories", lambda: ctx.category_repo.list_by_type(category_type))
    else:
        categories = load_options(page, "categories", ctx.category_repo.list_all)
    return [(str(category.id), category.name) for category in categories]


def funding_options(ctx: AppContext, page: ft.Page, kinds: Sequence[FundingKind]) -> Options:
    sources = load_options(page, "payment sources", ctx.payment_source_repo.list_all)
    return [
        (source.ref.option_key, f"{source.type.label}: {source.display_name or source.name}")
        for source in sources
        if source.type in kinds
    ]


def filter_dropdown(
    controller: ListViewController,
    key: str,
    label: str,
    options: Options,
    *,
    include_all: bool = True,
    width: int = 170,
) -> ft.Dropdown:
    choices = ([ALL] if include_all else []) + list(options)
    return ft.Dropdown(
        label=label,
        options=[ft.dropdown.Option(key=value, text=text) for value, text in choices],
        width=width,
        on_change=lambda e: controller.apply_filter(key, e.control.value),
    )


def date_filter(controller: ListViewController, key: str, label: str) -> ft.TextField:
    def _commit(e):
        controller.apply_filter(key, e.control.value)

    return ft.TextField(label=label, hint_text="YYYY-MM-DD", width=150, on_submit=_commit, on_blur=_commit)


def sync_filter_inputs(controller: ListViewController, inputs: dict[str, ft.Control]) -> None:
    """Show the route's filter values in the filter inputs."""

    for key, control in inputs.items():
        value = controller.filters.get(key)
        if isinstance(control, ft.Dropdown):
            control.value = value or ALL[0]
        else:
            control.value = value


def page_header(title: str, actions: Sequence[ft.Control] = ()) -> ft.Row:
    return ft.Row(
        [ft.Text(title, size=24, weight=ft.FontWeight.BOLD), ft.Row(list(actions), spacing=8)],
        alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
    )


def summary_text(label: str, value: str, *, hint: Optional[str] = None) -> ft.Container:
    controls: list[ft.Control] = [
        ft.Text(label, size=12, color=ft.Colors.ON_SURFACE_VARIANT),
        ft.Text(value, size=18, weight=ft.FontWeight.BOLD),
    ]
    if hint:
        controls.append(ft.Text(hint, size=11, italic=True, color=ft.Colors.ON_SURFACE_VARIANT))
    return ft.Container(
        content=ft.Column(controls, spacing=2),
        padding=12,
        border_radius=8,
        bgcolor=ft.Colors.SURFACE_CONTAINER_HIGHEST,
    )


def wrap_view(
    ctx: AppContext,
    page: ft.Page,
    route: str,
    title: str,
    content: ft.Control,
    data: Any = None,
) -> ft.View:
    """Standard shell: app bar, navigation rail and a scrolling content column."""

    body = ft.Column([content], expand=True, scroll=ft.ScrollMode.AUTO)
    view = ft.View(
        route=route,
        appbar=build_app_bar(ctx, title, page),
        controls=build_main_layout(ctx, page, route, body),
        padding=0,
    )
    view.data = data
    return view
