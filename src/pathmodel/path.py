"""ModelPath — a normalized location in the model tree.

A path is an immutable sequence of non-empty string segments. Absolute paths render
as '/seg1/seg2' (the root renders as '/'); relative paths only exist while
a reference is being resolved and render without the leading separator.

Two paths are equal iff their canonical renderings are equal, which makes
str(path) a safe registry key.
"""

from __future__ import annotations

from typing import Iterable, Iterator, overload

SEPARATOR = "/"


def split_segments(text: str) -> list[str]:
    """Split a path string into segments, dropping empty ones."""
    return [segment for segment in text.split(SEPARATOR) if segment]


class ModelPath:
    """Ordered, immutable segments plus an absolute/relative flag."""

    __slots__ = ("_segments", "_absolute")

    def __init__(self, segments: Iterable[object] = (), *, absolute: bool = True) -> None:
        # Segments are split and filtered the same way parse() does.
        self._segments: tuple[str, ...] = tuple(
            part for s in segments for part in split_segments(str(s))
        )
        self._absolute = absolute

    @classmethod
    def parse(cls, text: str) -> ModelPath:
        """Parse a path string. A leading '/' makes it absolute."""
        return cls(split_segments(text), absolute=text.startswith(SEPARATOR))

    @property
    def absolute(self) -> bool:
        return self._absolute

    @property
    def segments(self) -> tuple[str, ...]:
        return self._segments

    def prefix(self, length: int) -> ModelPath:
        """The first `length` segments, keeping the absolute flag."""
        return ModelPath(self._segments[:length], absolute=self._absolute)

    def resolve(self, context: ModelPath) -> ModelPath:
        """Anchor a relative path under context. Absolute paths return self."""
        if self._absolute:
            return self
        return ModelPath(context._segments + self._segments, absolute=context._absolute)

    def child(self, *segments: object) -> ModelPath:
        return ModelPath(self._segments + tuple(str(s) for s in segments), absolute=self._absolute)

    # --- Sequence protocol ---

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[str]:
        return iter(self._segments)

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[str, ...]: ...

    def __getitem__(self, index):
        return self._segments[index]

    # --- Identity is the canonical string ---

    def __str__(self) -> str:
        body = SEPARATOR.join(self._segments)
        return SEPARATOR + body if self._absolute else body

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ModelPath):
            return str(self) == str(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(str(self))

    def __repr__(self) -> str:
        return f"ModelPath({str(self)!r})"


ROOT = ModelPath()
