"""Model options — knobs shared by the resolver and the store."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ModelOptions:
    """Options that affect path resolution and container creation.

    Derive variants with dataclasses.replace():
        ModelOptions(create_arrays=False)
        replace(opts, global_context="/user/3")
    """

    # '/user/3' on a missing /user creates a list when True, a dict otherwise.
    create_arrays: bool = True
    # Relative references resolve against this when no context is given.
    global_context: str = "/"
    # Attribute read from scope-chain nodes to find their path segment.
    ref_attr: str = "ref"


DEFAULT_OPTIONS = ModelOptions()
