"""Template substitution — fill '{path}' placeholders from the model.

    substitute("Page {/pager/page} of {/pager/pages}", model.get)
    # 'Page 2 of 10'

Placeholders are single-level: text produced by a substitution is never
scanned again, so a model value containing braces comes out verbatim.
Every occurrence of the same placeholder gets the same text.
"""

from __future__ import annotations

import re
from typing import Any, Callable

PLACEHOLDER = re.compile(r"\{([^{}]+)\}")


def _render(value: Any) -> str:
    return "" if value is None else str(value)


def placeholders(template: str) -> list[str]:
    """Distinct placeholder references in order of first appearance."""
    return list(dict.fromkeys(PLACEHOLDER.findall(template)))


def substitute(
    template: str,
    lookup: Callable[[str], Any],
    transform: Callable[[Any], Any] | None = None,
) -> str:
    """Replace each {ref} with transform(lookup(ref)).

    lookup and transform run once per distinct placeholder. Pass e.g.
    ``lambda v: quote(str(v))`` as transform to build URLs.
    """
    resolved: dict[str, str] = {}

    def _replace(match: re.Match) -> str:
        ref = match.group(1)
        if ref not in resolved:
            value = lookup(ref)
            resolved[ref] = _render(transform(value) if transform else value)
        return resolved[ref]

    return PLACEHOLDER.sub(_replace, template)
