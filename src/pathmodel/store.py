"""ModelStore — the tree of dicts and lists behind a Model.

The store knows nothing about bindings. put() and remove() report what
happened (Assignment / Removal) and the Model decides whether to notify.

Containers are only created on write. Reads and deletes never grow the tree.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from pathmodel.containers import (
    MISSING,
    assign_child,
    decide_kind,
    kind_of,
    new_container,
    read_child,
    remove_child,
)
from pathmodel.exceptions import PathTypeError
from pathmodel.options import DEFAULT_OPTIONS, ModelOptions
from pathmodel.path import ModelPath

logger = logging.getLogger("pathmodel.store")

# visitor(parent, path, index): parent holds path[index]
Visitor = Callable[[Any, ModelPath, int], None]


@dataclass(frozen=True)
class Assignment:
    """Outcome of put(): whether the store changed, and the value now stored."""

    changed: bool
    value: Any


@dataclass(frozen=True)
class Removal:
    """Outcome of remove().

    applied is False when an intermediate container was missing (or a leaf
    sits where a container should be) and nothing was touched. When
    applied, value is what was removed (None if the terminal key itself
    was absent).
    """

    applied: bool
    value: Any = None


class ModelStore:
    """Hierarchical dict/list container with path-based access."""

    def __init__(self, root: dict | None = None, options: ModelOptions = DEFAULT_OPTIONS) -> None:
        self._root: dict = root if root is not None else {}
        self._options = options

    @property
    def root(self) -> dict:
        return self._root

    def walk(self, path: ModelPath, visitor: Visitor | None = None) -> Any:
        """Walk path from the root, calling visitor at each position.

        The visitor runs before descending, so it may create the child it is
        about to descend into. The walk stops where the tree ends.
        Returns the value at the full path, or MISSING.
        """
        parent: Any = self._root
        for index, segment in enumerate(path):
            if visitor is not None:
                visitor(parent, path, index)
            parent = read_child(parent, segment)
            if parent is MISSING:
                return MISSING
        return parent

    def get(self, path: ModelPath) -> Any:
        """Value at path, or None if absent."""
        value = self.walk(path)
        return None if value is MISSING else value

    def put(self, path: ModelPath, value: Any) -> Assignment:
        """Store value at path, creating missing containers along the way.

        Unchanged values (identical or equal) are left alone.
        """
        if not len(path):
            raise PathTypeError("The model root cannot be replaced")

        terminal: list[Any] = []

        def _materialize(parent: Any, path: ModelPath, index: int) -> None:
            if index < len(path) - 1:
                child = read_child(parent, path[index])
                # None marks a padded list slot or a cleared value: build through it.
                if child is MISSING or child is None:
                    kind = decide_kind(path[index + 1], self._options.create_arrays)
                    assign_child(parent, path[index], new_container(kind))
            else:
                terminal.append(parent)

        current = self.walk(path, _materialize)
        if not terminal:
            # A leaf sits somewhere along the path.
            raise PathTypeError(f"Cannot write {path}: a leaf value is in the way")

        if current is not MISSING and (current is value or current == value):
            return Assignment(False, current)
        assign_child(terminal[0], path[-1], value)
        return Assignment(True, value)

    def remove(self, path: ModelPath) -> Removal:
        """Remove the value at path. Missing intermediates make this a no-op."""
        if not len(path):
            raise PathTypeError("The model root cannot be removed")

        terminal: list[Any] = []

        def _find_parent(parent: Any, path: ModelPath, index: int) -> None:
            if index == len(path) - 1 and kind_of(parent) is not None:
                terminal.append(parent)

        self.walk(path, _find_parent)
        if not terminal:
            logger.debug("Nothing to delete at %s", path)
            return Removal(False)

        previous = remove_child(terminal[0], path[-1])
        return Removal(True, None if previous is MISSING else previous)
