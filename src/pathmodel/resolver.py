"""Path resolution — turn any supported reference into an absolute ModelPath.

A reference is one of:
- a string: '/user/3/name' (absolute) or 'name' (relative to a context)
- a segment sequence: ['user', 3, 'name'] (taken as absolute)
- a ModelPath: returned unchanged
- a scope-chain node: any object with a .parent, declaring zero or one
  segment through the configured ref attribute

Failure is a sentinel, not an exception: unresolvable references yield None.
"""

from __future__ import annotations

import logging
from typing import Any

from pathmodel.options import DEFAULT_OPTIONS, ModelOptions
from pathmodel.path import SEPARATOR, ModelPath, split_segments
from pathmodel.protocols import ScopeNode

logger = logging.getLogger("pathmodel.resolver")


def scope_reference(node: Any, ref_attr: str) -> str | None:
    """Collect declared segments from node outward into a path string.

    Walking stops at the first absolute declaration, which anchors the path,
    so nothing above it is collected. Returns None if nothing is declared.
    """
    refs: list[str] = []
    while node is not None:
        declared = getattr(node, ref_attr, None)
        if declared is not None:
            declared = str(declared)
            refs.insert(0, declared)
            if declared.startswith(SEPARATOR):
                break
        node = getattr(node, "parent", None)
    if not refs:
        return None
    return SEPARATOR.join(refs)


def resolve_path(
    ref: Any,
    context: Any = None,
    options: ModelOptions = DEFAULT_OPTIONS,
) -> ModelPath | None:
    """Resolve ref (against context for relative strings) to an absolute path."""
    if ref is None or isinstance(ref, ModelPath):
        return ref

    if isinstance(ref, str):
        path = ModelPath.parse(ref)
    elif isinstance(ref, (list, tuple)):
        return ModelPath(ref)
    elif isinstance(ref, ScopeNode):
        text = scope_reference(ref, options.ref_attr)
        if text is None:
            logger.debug("No %r declared on %r or its ancestors", options.ref_attr, ref)
            return None
        path = ModelPath.parse(text)
    else:
        logger.debug("Unresolvable reference: %r", ref)
        return None

    if path.absolute:
        return path

    if context is None:
        # The global context is always taken as absolute.
        base = ModelPath(split_segments(options.global_context))
    else:
        base = resolve_path(context, None, options)
    if base is None:
        logger.debug("Unresolvable context %r for relative reference %r", context, ref)
        return None
    return path.resolve(base)
