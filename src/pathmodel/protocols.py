"""Capability interfaces the core checks for, instead of probing attributes.

The model never reaches into a host toolkit. Scope-chain nodes, update
listeners and controls with custom value accessors opt in by conforming
to these protocols.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathmodel.dispatch import ChangeRecord


@runtime_checkable
class ScopeNode(Protocol):
    """A node in a tree of nested scopes.

    The resolver reads the configured ref attribute on the node and its
    ancestors (via .parent) to build a path. It never mutates the node.
    """

    parent: Any


@runtime_checkable
class UpdateListener(Protocol):
    """External target that wants 'model changed, please refresh' signals."""

    def on_model_update(self, record: ChangeRecord) -> None: ...


@runtime_checkable
class CustomValueAccessor(Protocol):
    """Control that reports its own displayed value."""

    def model_get_value(self) -> Any: ...


@runtime_checkable
class CustomValueMutator(Protocol):
    """Control that applies a model value to its own display."""

    def model_set_value(self, value: Any) -> None: ...
