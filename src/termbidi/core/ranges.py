"""Sparse integer index sets stored as sorted runs of ranges."""

from bisect import bisect_right
from typing import Callable, Iterable, Iterator, Optional, Tuple


def range_iterator(values: Iterable[int]) -> Iterator[range]:
    """
    Yield maximal runs of consecutive integers.

    Args:
        values: Strictly increasing integers

    Returns:
        Iterator of half-open ranges, one per contiguous run
    """
    start = end = None
    for value in values:
        if start is None:
            start = end = value
        elif value == end + 1:
            end = value
        else:
            yield range(start, end + 1)
            start = end = value
    if start is not None:
        yield range(start, end + 1)


def _clip(r: range, bounds: range) -> range:
    return range(max(r.start, bounds.start), min(r.stop, bounds.stop))


class IndexSet:
    """
    An immutable set of non-negative integers stored as disjoint ranges.

    Adjacent and overlapping ranges are merged on construction, so the stored
    runs are always maximal. Memory is proportional to the number of runs
    rather than to the largest member.
    """

    __slots__ = ("_ranges", "_starts", "_count")

    def __init__(self, ranges: Iterable[range] = ()):
        merged = []
        for r in sorted((r for r in ranges if len(r)), key=lambda r: r.start):
            if r.step != 1:
                raise ValueError(f"Index ranges must have step 1, got {r!r}")
            if merged and r.start <= merged[-1].stop:
                last = merged[-1]
                merged[-1] = range(last.start, max(last.stop, r.stop))
            else:
                merged.append(r)
        self._ranges: Tuple[range, ...] = tuple(merged)
        self._starts = tuple(r.start for r in merged)
        self._count = sum(len(r) for r in merged)

    @classmethod
    def from_indexes(cls, indexes: Iterable[int]) -> "IndexSet":
        """Build a set from loose integers in any order."""
        return cls(range_iterator(sorted(set(indexes))))

    @property
    def ranges(self) -> Tuple[range, ...]:
        """The maximal runs, in ascending order."""
        return self._ranges

    def range_view(self, bounds: Optional[range] = None) -> Tuple[range, ...]:
        """
        Get the runs that intersect bounds, clipped to it.

        Args:
            bounds: Window to clip to, None for every run

        Returns:
            Tuple of non-empty ranges in ascending order
        """
        if bounds is None:
            return self._ranges
        clipped = (_clip(r, bounds) for r in self._ranges)
        return tuple(r for r in clipped if len(r))

    def restricted(self, bounds: range) -> "IndexSet":
        """Members that fall inside bounds."""
        return IndexSet(self.range_view(bounds))

    def shifted(self, by: int) -> "IndexSet":
        """Every member moved by the same offset."""
        return IndexSet(range(r.start + by, r.stop + by) for r in self._ranges)

    def union(self, other: "IndexSet") -> "IndexSet":
        return IndexSet(self._ranges + other._ranges)

    def intersection(self, other: "IndexSet") -> "IndexSet":
        result = []
        i = j = 0
        while i < len(self._ranges) and j < len(other._ranges):
            a = self._ranges[i]
            b = other._ranges[j]
            overlap = _clip(a, b)
            if len(overlap):
                result.append(overlap)
            if a.stop <= b.stop:
                i += 1
            else:
                j += 1
        return IndexSet(result)

    def map_ranges(self, transform: Callable[[range], range]) -> "IndexSet":
        return map_ranges(self, transform)

    def filter_map_ranges(self, transform: Callable[[range], Optional[range]]) -> "IndexSet":
        return filter_map_ranges(self, transform)

    def __contains__(self, index) -> bool:
        if not isinstance(index, int):
            return False
        pos = bisect_right(self._starts, index) - 1
        return pos >= 0 and index in self._ranges[pos]

    def __iter__(self) -> Iterator[int]:
        for r in self._ranges:
            yield from r

    def __len__(self) -> int:
        return self._count

    def __bool__(self) -> bool:
        return bool(self._ranges)

    def __eq__(self, other) -> bool:
        if not isinstance(other, IndexSet):
            return NotImplemented
        return self._ranges == other._ranges

    def __hash__(self) -> int:
        return hash(tuple((r.start, r.stop) for r in self._ranges))

    def __repr__(self) -> str:
        return f"IndexSet([{describe_ranges(self._ranges)}])"


def describe_ranges(ranges: Iterable[range]) -> str:
    """Format runs compactly, e.g. ``0…3, 5``."""
    parts = []
    for r in ranges:
        if len(r) == 1:
            parts.append(f"{r.start}")
        else:
            parts.append(f"{r.start}…{r.stop - 1}")
    return ", ".join(parts)


def map_ranges(index_set: IndexSet, transform: Callable[[range], range]) -> IndexSet:
    """
    Transform every run of an index set and union the results.

    Args:
        index_set: Set whose maximal runs are transformed
        transform: Function from a run to a new range; empty results are dropped

    Returns:
        New IndexSet holding the union of the transformed ranges
    """
    return IndexSet(transform(r) for r in index_set.ranges)


def filter_map_ranges(index_set: IndexSet, transform: Callable[[range], Optional[range]]) -> IndexSet:
    """Like map_ranges, but transform may return None to drop a run."""
    mapped = (transform(r) for r in index_set.ranges)
    return IndexSet(r for r in mapped if r is not None)
