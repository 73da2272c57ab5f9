"""Create/edit dialog rendered from a :class:`FormBinding`."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence

import flet as ft

from ...services.forms import FormBinding, FormMode
from .dialogs import close_dialog, safe_open_dialog

Options = Sequence[tuple[str, str]]


@dataclass(frozen=True)
class FieldSpec:
    """One input in a dialog.

    ``kind`` is one of ``text``, ``number``, ``date``, ``select``, ``switch``,
    ``password`` or ``multiline``.
    """

    name: str
    label: str
    kind: str = "text"
    options: Options = field(default_factory=tuple)
    hint: Optional[str] = None


def _dropdown_options(options: Options) -> list[ft.dropdown.Option]:
    return [ft.dropdown.Option(key=value, text=text) for value, text in options]


class FormDialog:
    """Keeps an ``ft.AlertDialog`` in step with its binding.

    The binding owns the state; this class only mirrors it. Inputs write back
    through ``binding.set_field`` and ``sync`` repaints values, field errors,
    the inline error region and the disabled state of the save button.
    """

    def __init__(
        self,
        page: ft.Page,
        binding: FormBinding,
        fields: Sequence[FieldSpec],
        *,
        title_create: str,
        title_edit: str,
        on_submit: Callable[[], Any],
    ) -> None:
        self.page = page
        self.binding = binding
        self.specs = {spec.name: spec for spec in fields}
        self.title_create = title_create
        self.title_edit = title_edit
        self.inputs: dict[str, ft.Control] = {
            spec.name: self._build_input(spec) for spec in fields
        }
        self.title = ft.Text(title_create)
        self.error_text = ft.Text("", color=ft.Colors.ERROR, visible=False)
        self.submit_button = ft.FilledButton("Save", on_click=lambda _: on_submit())
        self.dialog = ft.AlertDialog(
            modal=True,
            title=self.title,
            content=ft.Container(
                content=ft.Column(
                    [*self.inputs.values(), self.error_text],
                    tight=True,
                    spacing=12,
                    scroll=ft.ScrollMode.AUTO,
                ),
                width=440,
            ),
            actions=[
                ft.TextButton("Cancel", on_click=lambda _: self.binding.close()),
                self.submit_button,
            ],
            on_dismiss=self._on_dismiss,
        )
        binding.on_change = self.sync

    def _build_input(self, spec: FieldSpec) -> ft.Control:
        def _changed(e, name=spec.name):
            self.binding.set_field(name, e.control.value)
            control = self.inputs[name]
            if getattr(control, "error_text", None):
                control.error_text = None
                if control.page:
                    control.update()

        if spec.kind == "select":
            return ft.Dropdown(
                label=spec.label,
                options=_dropdown_options(spec.options),
                on_change=_changed,
                expand=True,
            )
        if spec.kind == "switch":
            return ft.Switch(label=spec.label, on_change=_changed)
        return ft.TextField(
            label=spec.label,
            hint_text=spec.hint or ("YYYY-MM-DD" if spec.kind == "date" else None),
            keyboard_type=ft.KeyboardType.NUMBER if spec.kind == "number" else None,
            multiline=spec.kind == "multiline",
            password=spec.kind == "password",
            can_reveal_password=spec.kind == "password",
            min_lines=2 if spec.kind == "multiline" else None,
            on_change=_changed,
        )

    def set_options(self, name: str, options: Options) -> None:
        control = self.inputs.get(name)
        if isinstance(control, ft.Dropdown):
            control.options = _dropdown_options(options)

    def _on_dismiss(self, _e) -> None:
        if self.binding.is_open:
            self.binding.close()

    def sync(self, _binding: Optional[FormBinding] = None) -> None:
        binding = self.binding
        self.title.value = self.title_edit if binding.mode is FormMode.EDIT else self.title_create
        for name, control in self.inputs.items():
            value = binding.fields.get(name, "")
            if isinstance(control, ft.Switch):
                control.value = bool(value)
            else:
                control.value = "" if value is None else str(value)
                control.error_text = binding.errors.get(name)
        self.error_text.value = binding.error or ""
        self.error_text.visible = bool(binding.error)
        self.submit_button.disabled = binding.submitting
        self.submit_button.text = "Saving..." if binding.submitting else "Save"

        if binding.is_open and not self.dialog.open:
            safe_open_dialog(self.page, self.dialog)
        elif not binding.is_open and self.dialog.open:
            close_dialog(self.page, self.dialog)
        elif self.dialog.page:
            self.dialog.update()
