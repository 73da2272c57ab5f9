"""Categories view implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import flet as ft

from ...services.aggregates import category_type_counts
from ...services.fetcher import ListState
from ...services.forms import CategoryForm
from ..components import FieldSpec, FormDialog, ListPage, confirm_step, row_actions, status_chip
from ..constants import CATEGORY_TYPE_OPTIONS
from . import common

if TYPE_CHECKING:
    from ..context import AppContext

ROUTE = "/categories"


def build_categories_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the categories view.

    System default categories are listed with a lock; editing or deleting
    one is refused locally with a notification and no request is sent.
    """

    controller = common.list_controller(
        ctx,
        page,
        path=ROUTE,
        repository=ctx.category_repo,
        form_cls=CategoryForm,
        noun="Category",
        filter_keys=("search", "type", "page"),
    )

    FormDialog(
        page,
        controller.form,
        [
            FieldSpec("name", "Name"),
            FieldSpec("type", "Type", "select", CATEGORY_TYPE_OPTIONS),
            FieldSpec("icon", "Icon", hint="e.g. shopping_cart"),
            FieldSpec("color", "Color", hint="#RRGGBB"),
        ],
        title_create="Add category",
        title_edit="Edit category",
        on_submit=controller.submit_form,
    )
    confirm = confirm_step(page, "Delete category", "Delete this category? This cannot be undone.")

    def category_row(category) -> list[ft.Control]:
        swatch = ft.Container(width=16, height=16, border_radius=8, bgcolor=category.color or ft.Colors.GREY_400)
        return [
            ft.Row([swatch, ft.Text(category.name)], spacing=8),
            status_chip(
                category.type.title(),
                ft.Colors.GREEN if category.is_income else ft.Colors.RED,
            ),
            ft.Text("System" if category.is_default else "Custom", color=ft.Colors.ON_SURFACE_VARIANT),
            row_actions(
                lambda c=category: controller.request_edit(c),
                lambda c=category: controller.request_delete(c, confirm),
                locked=category.is_default,
            ),
        ]

    def summary(state: ListState) -> list[ft.Control]:
        counts = category_type_counts(state.items)
        return [
            common.summary_text("Income categories", str(counts["income"]), hint="on this page"),
            common.summary_text("Expense categories", str(counts["expense"]), hint="on this page"),
            common.summary_text("Total", str(state.meta.total)),
        ]

    type_filter = common.filter_dropdown(controller, "type", "Type", CATEGORY_TYPE_OPTIONS)
    list_page = ListPage(
        page,
        controller,
        columns=["Name", "Type", "Owner", "Actions"],
        row_builder=category_row,
        noun_plural="categories",
        filter_controls=[type_filter],
        summary_builder=summary,
        on_filters=lambda: common.sync_filter_inputs(controller, {"type": type_filter}),
    )

    header = common.page_header(
        "Categories",
        [ft.FilledButton("Add category", icon=ft.Icons.ADD, on_click=lambda _: controller.form.open_create())],
    )
    view = common.wrap_view(
        ctx, page, ROUTE, "Categories", ft.Column([header, list_page.build()], spacing=16), data=list_page
    )
    list_page.on_route(page.route)
    return view
