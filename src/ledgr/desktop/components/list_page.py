"""Shared scaffold for resource list pages (filters, table, pagination)."""

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

import flet as ft

from ...models.pagination import PaginationMeta
from ...services.fetcher import ListState
from ...services.list_view import ListViewController

RowBuilder = Callable[[Any], Sequence[ft.Control]]
SummaryBuilder = Callable[[ListState], Sequence[ft.Control]]


class ListPage:
    """Renders a :class:`ListViewController` and forwards user input to it.

    Set as ``ft.View.data`` so the router can call :meth:`on_route` for
    query-only route changes and :meth:`dispose` when the view is replaced.
    """

    def __init__(
        self,
        page: ft.Page,
        controller: ListViewController,
        *,
        columns: Sequence[str],
        row_builder: RowBuilder,
        noun_plural: str = "items",
        searchable: bool = True,
        filter_controls: Sequence[ft.Control] = (),
        summary_builder: Optional[SummaryBuilder] = None,
        on_filters: Optional[Callable[[], None]] = None,
    ) -> None:
        self.page = page
        self.controller = controller
        self.columns = list(columns)
        self.row_builder = row_builder
        self.noun_plural = noun_plural
        self.summary_builder = summary_builder
        self.on_filters = on_filters

        self.table = ft.DataTable(
            columns=[ft.DataColumn(ft.Text(name)) for name in self.columns],
            rows=[],
            expand=True,
        )
        self.loading = ft.ProgressRing(width=24, height=24, visible=False)
        self.error_text = ft.Text("", color=ft.Colors.ERROR, visible=False)
        self.window_text = ft.Text("", color=ft.Colors.ON_SURFACE_VARIANT)
        self.pagination = ft.Row(spacing=4)
        self.summary = ft.Row(spacing=12, wrap=True)
        self.active_filters = ft.Text("", size=12, color=ft.Colors.ON_SURFACE_VARIANT)
        self.search_field: Optional[ft.TextField] = None
        if searchable:
            self.search_field = ft.TextField(
                label="Search",
                prefix_icon=ft.Icons.SEARCH,
                width=260,
                on_change=lambda e: controller.search.on_input(e.control.value),
                on_submit=lambda _: controller.search.flush(),
            )
        self.filter_controls = list(filter_controls)
        controller.on_state = self.render

    def filter_bar(self) -> ft.Row:
        controls: list[ft.Control] = []
        if self.search_field is not None:
            controls.append(self.search_field)
        controls.extend(self.filter_controls)
        controls.extend(
            [
                ft.TextButton("Clear filters", on_click=lambda _: self.controller.clear_filters()),
                self.active_filters,
                self.loading,
            ]
        )
        return ft.Row(controls, wrap=True, spacing=12, vertical_alignment=ft.CrossAxisAlignment.CENTER)

    def build(self) -> ft.Column:
        return ft.Column(
            [
                self.filter_bar(),
                self.summary,
                self.error_text,
                ft.Card(
                    content=ft.Container(
                        ft.Column([ft.Row([self.table], scroll=ft.ScrollMode.AUTO)], spacing=8),
                        padding=12,
                    ),
                    elevation=2,
                ),
                ft.Row(
                    [self.window_text, self.pagination],
                    alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                ),
            ],
            spacing=12,
        )

    def on_route(self, route: Optional[str] = None) -> ListState:
        self._set_loading(True)
        try:
            state = self.controller.on_route(route)
        finally:
            self._set_loading(False)
        filters = self.controller.filters
        if self.search_field is not None and self.controller.search.pending is None:
            self.search_field.value = filters.search
        count = filters.active_count
        self.active_filters.value = f"{count} filter{'s' if count != 1 else ''} active" if count else ""
        if self.on_filters is not None:
            self.on_filters()
        self._refresh(self.active_filters)
        return state

    def _set_loading(self, value: bool) -> None:
        self.loading.visible = value
        self._refresh(self.loading)

    def _refresh(self, control: ft.Control) -> None:
        if control.page:
            control.update()

    def render(self, state: ListState) -> None:
        rows = [
            ft.DataRow(cells=[ft.DataCell(cell) for cell in self.row_builder(item)])
            for item in state.items
        ]
        if not rows:
            message = state.error or f"No {self.noun_plural} found"
            rows = [
                ft.DataRow(
                    cells=[ft.DataCell(ft.Text(message, color=ft.Colors.ON_SURFACE_VARIANT))]
                    + [ft.DataCell(ft.Text("")) for _ in range(len(self.columns) - 1)]
                )
            ]
        self.table.rows = rows
        self.error_text.value = state.error or ""
        self.error_text.visible = bool(state.error)
        self.window_text.value = state.meta.window_label(self.noun_plural)
        self.pagination.controls = self._pagination_controls(state.meta)
        if self.summary_builder is not None:
            self.summary.controls = list(self.summary_builder(state))
        if self.page is not None and getattr(self.table, "page", None):
            self.page.update()

    def _pagination_controls(self, meta: PaginationMeta) -> list[ft.Control]:
        go = self.controller.go_to_page
        controls: list[ft.Control] = [
            ft.IconButton(
                icon=ft.Icons.CHEVRON_LEFT,
                tooltip="Previous page",
                disabled=not meta.has_previous,
                on_click=lambda _: go(meta.current_page - 1),
            )
        ]
        for number in meta.page_numbers():
            if number == meta.current_page:
                controls.append(ft.FilledButton(str(number)))
            else:
                controls.append(ft.TextButton(str(number), on_click=lambda _, n=number: go(n)))
        controls.append(
            ft.IconButton(
                icon=ft.Icons.CHEVRON_RIGHT,
                tooltip="Next page",
                disabled=not meta.has_next,
                on_click=lambda _: go(meta.current_page + 1),
            )
        )
        return controls

    def dispose(self) -> None:
        self.controller.dispose()


def row_actions(on_edit: Callable[[], None], on_delete: Callable[[], None], *, locked: bool = False) -> ft.Row:
    """Edit/delete buttons; ``locked`` rows are marked with a lock icon."""

    controls: list[ft.Control] = []
    if locked:
        controls.append(
            ft.Icon(ft.Icons.LOCK_OUTLINE, size=18, color=ft.Colors.ON_SURFACE_VARIANT, tooltip="System default")
        )
    return ft.Row(
        [
            *controls,
            ft.IconButton(icon=ft.Icons.EDIT, tooltip="Edit", on_click=lambda _: on_edit()),
            ft.IconButton(
                icon=ft.Icons.DELETE_OUTLINE,
                icon_color=ft.Colors.RED,
                tooltip="Delete",
                on_click=lambda _: on_delete(),
            ),
        ],
        spacing=0,
    )
