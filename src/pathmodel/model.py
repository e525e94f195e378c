"""Model — the path-addressable data store and its bindings.

A Model owns one tree of dicts/lists, one binding registry and one set of
options. Anywhere a reference is accepted it may be a path string
('/user/3/name' or relative 'name'), a segment list (['user', 3, 'name']),
a ModelPath, or a scope-chain node declaring its segment via the ref
attribute. Relative references resolve against `context`, or against
options.global_context when no context is given.

Unresolvable references make every operation a silent no-op returning None.

Usage:
    model = Model()
    seen = []
    model.bind("/user", lambda rec: seen.append(rec.path))

    model.set("/user/3/name", "Ann")   # creates user as a list, fires /user
    model.get("name", context="/user/3")
    # 'Ann'
    model.delete("/user/3/name")       # fires /user again
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from typing import Any, Callable

from pathmodel.containers import MISSING
from pathmodel.dispatch import Deliver, Dispatcher, Event
from pathmodel.options import DEFAULT_OPTIONS, ModelOptions
from pathmodel.path import ModelPath
from pathmodel.registry import BindingRegistry, Observer, as_observer
from pathmodel.resolver import resolve_path
from pathmodel.store import ModelStore, Visitor
from pathmodel.template import substitute


def merge_defaults(current: Any, defaults: Any) -> Any:
    """Layer defaults underneath current. Existing values win.

    Nested mappings merge recursively; defaults are deep-copied so the
    result never shares containers with the caller.
    """
    if current is None:
        return copy.deepcopy(defaults)
    if not (isinstance(current, Mapping) and isinstance(defaults, Mapping)):
        return current
    merged = dict(current)
    for key, default in defaults.items():
        if key not in merged:
            merged[key] = copy.deepcopy(default)
        elif isinstance(merged[key], Mapping) and isinstance(default, Mapping):
            merged[key] = merge_defaults(merged[key], default)
    return merged


class Model:
    """Hierarchical store + binding registry + notification dispatcher."""

    def __init__(
        self,
        data: dict | None = None,
        *,
        options: ModelOptions | None = None,
        deliver: Deliver | None = None,
    ) -> None:
        self.options = options or DEFAULT_OPTIONS
        self.store = ModelStore(data, self.options)
        self.registry = BindingRegistry()
        self.dispatcher = Dispatcher(self.store, self.registry, deliver)

    @property
    def root(self) -> dict:
        return self.store.root

    def path(self, ref: Any, context: Any = None) -> ModelPath | None:
        """Resolve ref to an absolute ModelPath (None if unresolvable)."""
        return resolve_path(ref, context, self.options)

    def walk(self, ref: Any, visitor: Visitor, context: Any = None) -> Any:
        """Call visitor(parent, path, index) along ref; return the end value."""
        path = self.path(ref, context)
        if path is None:
            return None
        value = self.store.walk(path, visitor)
        return None if value is MISSING else value

    # --- Values ---

    def get(self, ref: Any, context: Any = None) -> Any:
        path = self.path(ref, context)
        if path is None:
            return None
        return self.store.get(path)

    def get_all(self, refs: Iterable[Any], context: Any = None) -> list:
        return [self.get(ref, context) for ref in refs]

    def set(self, ref: Any, value: Any, context: Any = None, source: Any = None) -> Any:
        """Store value and notify bindings along its path if it changed.

        source is the external target that made the change; it is not
        sent an update for it.
        """
        path = self.path(ref, context)
        if path is None:
            return None
        result = self.store.put(path, value)
        if result.changed:
            self.dispatcher.trigger(path, "set", source)
        return result.value

    def delete(self, ref: Any, context: Any = None, source: Any = None) -> Any:
        """Remove the value at ref and return it.

        Deleting under a missing container does nothing and notifies no one.
        """
        path = self.path(ref, context)
        if path is None:
            return None
        result = self.store.remove(path)
        if result.applied:
            self.dispatcher.trigger(path, "delete", source)
        return result.value

    def defaults(self, ref: Any, defaults: Any, context: Any = None) -> Any:
        """Fill in values absent at ref from defaults. Idempotent."""
        path = self.path(ref, context)
        if path is None:
            return None
        return self.set(path, merge_defaults(self.store.get(path), defaults))

    # --- Bindings ---

    def bind(self, ref: Any, observer: Any = None, context: Any = None) -> Observer | None:
        """Register observer (or ref itself) for changes at or below ref."""
        path = self.path(ref, context)
        if path is None:
            return None
        bound = as_observer(observer if observer is not None else ref)
        self.registry.bind(str(path), bound)
        return bound

    def unbind(self, ref: Any, context: Any = None) -> None:
        """Remove every observer bound at exactly ref."""
        path = self.path(ref, context)
        if path is not None:
            self.registry.unbind(str(path))

    def bound(self, ref: Any, context: Any = None) -> list[Observer] | None:
        """Observers bound at exactly ref."""
        path = self.path(ref, context)
        if path is None:
            return None
        return self.registry.lookup(str(path))

    def trigger(
        self,
        ref: Any,
        event: Event = "set",
        context: Any = None,
        source: Any = None,
    ) -> None:
        """Notify bindings along ref without changing anything."""
        path = self.path(ref, context)
        if path is not None:
            self.dispatcher.trigger(path, event, source)

    # --- Templates ---

    def substitute(
        self,
        template: str,
        transform: Callable[[Any], Any] | None = None,
        context: Any = None,
    ) -> str:
        """Fill {ref} placeholders in template with model values."""
        return substitute(template, lambda ref: self.get(ref, context), transform)

    def __repr__(self) -> str:
        return f"Model({self.root!r}, bindings={len(self.registry)})"
