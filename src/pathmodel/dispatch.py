"""Notification dispatcher — the prefix walk.

trigger('/a/b/c') looks up bindings at '/a', then '/a/b', then '/a/b/c'
and notifies each observer in registration order. A binding on a parent
path therefore hears about every descendant change.

Records carry the value at each prefix *after* the mutation, so ancestor
observers see the current subtree, not a diff.

Dispatch is synchronous and re-entrant: an observer that writes to the
model re-enters trigger() before the outer call returns. Nothing guards
against an observer that rewrites what it was notified about forever.
Observer exceptions propagate and abort the rest of the walk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Literal

from pathmodel.containers import MISSING, read_child
from pathmodel.path import ModelPath
from pathmodel.protocols import UpdateListener
from pathmodel.registry import BindingRegistry, Callback, ExternalTarget
from pathmodel.store import ModelStore

logger = logging.getLogger("pathmodel.dispatch")

Event = Literal["set", "delete"]


@dataclass(frozen=True)
class ChangeRecord:
    """What an observer receives for one prefix of a mutated path."""

    value: Any
    path: ModelPath
    index: int
    parent: Any
    event: Event = "set"

    @property
    def prefix(self) -> ModelPath:
        """The bound path this record was delivered for."""
        return self.path.prefix(self.index + 1)


Deliver = Callable[[ExternalTarget, ChangeRecord], None]


def deliver_update(observer: ExternalTarget, record: ChangeRecord) -> None:
    """Default 'update' delivery: call on_model_update() if the target has it."""
    target = observer.target
    if isinstance(target, UpdateListener):
        target.on_model_update(record)
    else:
        logger.debug("No update handler on %r for %s", target, record.prefix)


class Dispatcher:
    """Fires bindings registered at every prefix of a mutated path."""

    def __init__(
        self,
        store: ModelStore,
        registry: BindingRegistry,
        deliver: Deliver | None = None,
    ) -> None:
        self._store = store
        self._registry = registry
        self._deliver = deliver or deliver_update

    def trigger(self, path: ModelPath, event: Event = "set", source: Any = None) -> None:
        """Notify observers at each prefix of path, root to leaf.

        External targets whose handle is source are skipped, so a control
        that caused a write is not refreshed with its own value.
        """

        def _notify(parent: Any, path: ModelPath, index: int) -> None:
            observers = self._registry.lookup(str(path.prefix(index + 1)))
            if not observers:
                return
            for observer in list(observers):
                value = read_child(parent, path[index])
                record = ChangeRecord(
                    None if value is MISSING else value, path, index, parent, event
                )
                if isinstance(observer, Callback):
                    observer.fn(record)
                elif observer.handle is not source:
                    self._deliver(observer, record)

        self._store.walk(path, _notify)
