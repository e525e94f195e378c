"""Model exceptions.

Unresolvable references and deletes on missing paths are not errors; they
are absorbed as no-ops. Only writes that cannot be expressed on the tree raise.
"""

from __future__ import annotations


class ModelError(Exception):
    """Base exception for pathmodel errors."""


class PathTypeError(ModelError, TypeError):
    """Raised when a write cannot descend into or assign at a position.

    Writing through a scalar, using a non-index segment on a list, or
    replacing the model root all raise this.
    """
