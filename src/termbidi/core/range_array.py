"""Immutable list of ranges handed to rendering code."""

from typing import Iterable, Iterator


class RangeArray:
    """An ordered, immutable sequence of half-open integer ranges."""

    __slots__ = ("_ranges",)

    def __init__(self, ranges: Iterable[range] = ()):
        self._ranges = tuple(ranges)

    def __len__(self) -> int:
        return len(self._ranges)

    def __getitem__(self, index: int) -> range:
        if not isinstance(index, int):
            raise TypeError("Index must be an integer")

        # Handle negative indices
        if index < 0:
            index = len(self._ranges) + index

        if not (0 <= index < len(self._ranges)):
            raise IndexError("Index out of bounds")
        return self._ranges[index]

    def __iter__(self) -> Iterator[range]:
        return iter(self._ranges)

    def __eq__(self, other) -> bool:
        if not isinstance(other, RangeArray):
            return NotImplemented
        return self._ranges == other._ranges

    def __hash__(self) -> int:
        return hash(self._ranges)

    def __repr__(self) -> str:
        inner = ", ".join(f"{r.start}..<{r.stop}" for r in self._ranges)
        return f"RangeArray([{inner}])"
