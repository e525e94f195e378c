"""pathmodel: a path-addressable data model with two-way bindings."""

from importlib.metadata import version as _version

__version__ = _version("pathmodel")

from pathmodel.options import ModelOptions, DEFAULT_OPTIONS
from pathmodel.exceptions import ModelError, PathTypeError
from pathmodel.path import ModelPath, ROOT
from pathmodel.resolver import resolve_path
from pathmodel.containers import Kind, decide_kind
from pathmodel.store import ModelStore, Assignment, Removal
from pathmodel.registry import BindingRegistry, Callback, ExternalTarget, Observer
from pathmodel.dispatch import ChangeRecord, Dispatcher
from pathmodel.template import substitute
from pathmodel.model import Model, merge_defaults
from pathmodel.protocols import (
    ScopeNode,
    UpdateListener,
    CustomValueAccessor,
    CustomValueMutator,
)
# textual NOT auto-imported, opt-in only

__all__ = [
    "Model",
    "ModelOptions",
    "DEFAULT_OPTIONS",
    "ModelPath",
    "ROOT",
    "resolve_path",
    "Kind",
    "decide_kind",
    "ModelStore",
    "Assignment",
    "Removal",
    "BindingRegistry",
    "Callback",
    "ExternalTarget",
    "Observer",
    "ChangeRecord",
    "Dispatcher",
    "substitute",
    "merge_defaults",
    "ScopeNode",
    "UpdateListener",
    "CustomValueAccessor",
    "CustomValueMutator",
    "ModelError",
    "PathTypeError",
]
