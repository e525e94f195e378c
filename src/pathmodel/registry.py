"""Binding registry — canonical path string -> observers, in bind order.

An observer is one of two variants:
- Callback(fn): called with the ChangeRecord.
- ExternalTarget(handle, notify_target): an external object (e.g. a UI
  control) identified by handle; update signals go to notify_target,
  which defaults to the handle itself.

The registry does exact-key lookups only. Prefix matching is the
dispatcher's job.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Union

if TYPE_CHECKING:
    from pathmodel.dispatch import ChangeRecord

logger = logging.getLogger("pathmodel.registry")


@dataclass(frozen=True, eq=False)
class Callback:
    fn: Callable[[ChangeRecord], Any]


@dataclass(frozen=True, eq=False)
class ExternalTarget:
    handle: Any
    notify_target: Any = field(default=None)

    @property
    def target(self) -> Any:
        """Where update signals are delivered."""
        return self.handle if self.notify_target is None else self.notify_target


Observer = Union[Callback, ExternalTarget]


def as_observer(obj: Any) -> Observer:
    """Wrap obj in the matching observer variant."""
    if isinstance(obj, (Callback, ExternalTarget)):
        return obj
    if callable(obj):
        return Callback(obj)
    return ExternalTarget(obj)


class BindingRegistry:
    """Observers per canonical path. Binds accumulate; unbind clears a path."""

    def __init__(self) -> None:
        self._bindings: dict[str, list[Observer]] = {}

    def bind(self, key: str, observer: Observer) -> None:
        self._bindings.setdefault(key, []).append(observer)
        logger.debug("Bound %r at %s", observer, key)

    def unbind(self, key: str) -> None:
        """Drop every observer registered at exactly key."""
        removed = self._bindings.pop(key, None)
        if removed is not None:
            logger.debug("Unbound %d observer(s) at %s", len(removed), key)

    def lookup(self, key: str) -> list[Observer] | None:
        return self._bindings.get(key)

    def keys(self) -> list[str]:
        return list(self._bindings)

    def __contains__(self, key: str) -> bool:
        return key in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)
