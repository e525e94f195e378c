"""Textual integration for pathmodel. Opt-in — requires textual.

Two-way binding between Textual widgets and a Model:
- A widget declares its path segment through the model's ref attribute
  (``widget.ref = "name"``); enclosing containers may declare segments too,
  so ``Vertical`` with ref '/user/3' around an Input with ref 'name'
  binds the Input to '/user/3/name'.
- User edits flow widget -> model via ControlBinder.handle_change (wire it
  to the widgets' Changed messages with handle_message).
- Model changes flow model -> widget via ControlBinder.refresh, guarded so
  it never fires while the app is paused or not running, swallows
  NoMatches, and marshals cross-thread calls via call_from_thread.

// [LAW:locality-or-seam] Textual coupling lives here; the core model never imports it.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from enum import Enum
from typing import Any

from textual.css.query import NoMatches
from textual.widgets import (
    Button,
    Checkbox,
    Input,
    RadioButton,
    Select,
    SelectionList,
    Static,
    Switch,
    TextArea,
)

from pathmodel.dispatch import ChangeRecord
from pathmodel.model import Model
from pathmodel.protocols import CustomValueAccessor, CustomValueMutator
from pathmodel.registry import ExternalTarget

logger = logging.getLogger("pathmodel.textual")

# Module-owned pause state, keyed by id(app) so multiple apps work in tests.
_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Suspend widget refreshes during widget replacement."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Is the widget tree in a queryable state?"""
    return app.is_running and id(app) not in _paused_apps


class ControlKind(Enum):
    TOGGLE = "toggle"
    SELECT = "select"
    MULTI_SELECT = "multi-select"
    TEXT = "text"
    TEXT_AREA = "text-area"
    TRIGGER = "trigger"
    DISPLAY = "display"
    GENERIC = "generic"


def control_kind(widget: Any) -> ControlKind:
    if isinstance(widget, (Checkbox, RadioButton, Switch)):
        return ControlKind.TOGGLE
    if isinstance(widget, Select):
        return ControlKind.SELECT
    if isinstance(widget, SelectionList):
        return ControlKind.MULTI_SELECT
    if isinstance(widget, Input):
        return ControlKind.TEXT
    if isinstance(widget, TextArea):
        return ControlKind.TEXT_AREA
    if isinstance(widget, Button):
        return ControlKind.TRIGGER
    if isinstance(widget, Static):
        return ControlKind.DISPLAY
    return ControlKind.GENERIC


def get_value(widget: Any) -> Any:
    """The value a widget currently displays, shaped by its kind."""
    if isinstance(widget, CustomValueAccessor):
        return widget.model_get_value()
    kind = control_kind(widget)
    if kind is ControlKind.TOGGLE:
        return bool(widget.value)
    if kind is ControlKind.SELECT:
        return None if widget.is_blank() else widget.value
    if kind is ControlKind.MULTI_SELECT:
        return list(widget.selected)
    if kind is ControlKind.TEXT_AREA:
        return widget.text
    if kind in (ControlKind.TRIGGER, ControlKind.DISPLAY):
        return None
    return getattr(widget, "value", None)


def set_value(widget: Any, value: Any) -> None:
    """Show a model value on a widget."""
    if isinstance(widget, CustomValueMutator):
        widget.model_set_value(value)
        return
    kind = control_kind(widget)
    if kind is ControlKind.TOGGLE:
        widget.value = bool(value)
    elif kind is ControlKind.SELECT:
        if value is None:
            widget.clear()
        else:
            widget.value = value
    elif kind is ControlKind.MULTI_SELECT:
        widget.deselect_all()
        for item in value or ():
            widget.select(item)
    elif kind is ControlKind.TEXT:
        widget.value = "" if value is None else str(value)
    elif kind is ControlKind.TEXT_AREA:
        widget.load_text("" if value is None else str(value))
    elif kind is ControlKind.DISPLAY:
        widget.update("" if value is None else str(value))
    elif kind is ControlKind.GENERIC:
        widget.value = value


class BoundControl:
    """Update listener that refreshes one widget through its binder."""

    __slots__ = ("binder", "widget")

    def __init__(self, binder: ControlBinder, widget: Any) -> None:
        self.binder = binder
        self.widget = widget

    def on_model_update(self, record: ChangeRecord) -> None:
        self.binder.refresh(self.widget)

    def __repr__(self) -> str:
        return f"BoundControl({self.widget!r})"


class ControlBinder:
    """Keeps widgets and a Model in sync in both directions.

    Usage:
        class FormApp(App):
            def on_mount(self):
                self.binder = ControlBinder(self, model)
                self.binder.bind(*self.query("Input, Checkbox"))

            def on_input_changed(self, message):
                self.binder.handle_message(message)

            on_checkbox_changed = on_input_changed
    """

    def __init__(self, app, model: Model, context: Any = None) -> None:
        self.app = app
        self.model = model
        self.context = context
        self._bound: dict[int, Any] = {}
        self._main = threading.get_ident()

    def _declares_ref(self, widget: Any) -> bool:
        return getattr(widget, self.model.options.ref_attr, None) is not None

    def is_bound(self, widget: Any) -> bool:
        return id(widget) in self._bound

    def bind(self, *widgets: Any) -> list:
        """Bind widgets that declare a ref; show any existing model value.

        Returns the widgets that were bound.
        """
        bound = []
        for widget in widgets:
            if not self._declares_ref(widget):
                continue
            observer = ExternalTarget(widget, BoundControl(self, widget))
            if self.model.bind(widget, observer, self.context) is None:
                continue
            self._bound[id(widget)] = widget
            bound.append(widget)
            self.refresh(widget)
        logger.info("Bound %d of %d control(s)", len(bound), len(widgets))
        return bound

    def unbind(self, *widgets: Any) -> None:
        """Drop bindings at each widget's path (all observers at that path)."""
        for widget in widgets:
            if self._bound.pop(id(widget), None) is not None:
                self.model.unbind(widget, self.context)

    def handle_change(self, widget: Any) -> Any:
        """The user changed widget: write its value into the model.

        The widget is the change source, so it is not refreshed with the
        value it just produced; other controls on the path are.
        """
        return self.model.set(widget, get_value(widget), self.context, source=widget)

    def handle_message(self, message) -> None:
        """Route a Textual Changed-style message from a bound control."""
        widget = getattr(message, "control", None)
        if widget is not None and self.is_bound(widget):
            self.handle_change(widget)

    def refresh(self, widget: Any) -> None:
        """Show the model's value on widget, if it is safe to touch it."""
        if not is_safe(self.app):
            return
        if threading.get_ident() != self._main:
            self.app.call_from_thread(self._apply, widget)
        else:
            self._apply(widget)

    def _apply(self, widget: Any) -> None:
        value = self.model.get(widget, self.context)
        if value is None:
            return
        try:
            set_value(widget, value)
        except NoMatches:
            pass
