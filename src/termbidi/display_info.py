"""BidiDisplayInfo: the logical-to-visual mapping for one terminal line."""

import json
import logging
from enum import Enum
from typing import Any, Callable, Iterable, Iterator, List, MutableSequence, Optional, Sequence, Tuple, Union

from .cells import Cell, cells_to_string, number_of_trailing_empty_cells
from .core.range_array import RangeArray
from .core.ranges import IndexSet, describe_ranges, range_iterator
from .lut import DeltaTable, ShapedRun, build_lookup_table

logger = logging.getLogger(__name__)

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1

LUT_KEY = "lut"
RTL_INDEXES_KEY = "rtlIndexes"

Shaper = Callable[[str], Sequence[ShapedRun]]


class MalformedRecord(ValueError):
    """A serialized BidiDisplayInfo could not be decoded."""


class RTLStatus(Enum):
    UNKNOWN = 0
    LTR = 1
    RTL = 2


class BidiDisplayInfo:
    """
    Maps logical cells of a line to the visual columns they are drawn at.

    Instances are immutable. lut[i] is the visual column of logical cell i and
    is a permutation of range(len(lut)). rtl_indexes holds the logical cells
    that are right-to-left; adjacent members are drawn as one RTL run.
    """

    def __init__(self, lut: Sequence[int], rtl_indexes: Union[IndexSet, Iterable[int]]):
        self._lut: Tuple[int, ...] = tuple(lut)
        if not isinstance(rtl_indexes, IndexSet):
            rtl_indexes = IndexSet.from_indexes(rtl_indexes)
        self._rtl_indexes = rtl_indexes
        self._inverted_lut = None

    @classmethod
    def build(
        cls,
        runs: Iterable[ShapedRun],
        deltas: DeltaTable,
        cell_count: int,
    ) -> Optional["BidiDisplayInfo"]:
        """
        Build display info from shaped runs.

        Args:
            runs: Glyph runs from the shaper
            deltas: Mapping from string index to logical cell
            cell_count: Number of cells, not counting trailing empty ones

        Returns:
            BidiDisplayInfo, or None if the line has no right-to-left content
        """
        lut, rtl_indexes = build_lookup_table(runs, deltas, cell_count)
        if not rtl_indexes:
            logger.debug(f"No RTL content in {cell_count} cells")
            return None
        return cls(lut, rtl_indexes)

    @classmethod
    def from_cells(cls, cells: Sequence[Cell], shaper: Shaper) -> Optional["BidiDisplayInfo"]:
        """
        Build display info for a line of terminal cells.

        Args:
            cells: The line's cells (see termbidi.cells)
            shaper: Callable that shapes a string into runs

        Returns:
            BidiDisplayInfo, or None if the line has no right-to-left content
        """
        count = len(cells) - number_of_trailing_empty_cells(cells, space_is_empty=False)
        text, deltas = cells_to_string(cells[:count])
        return cls.build(shaper(text), deltas, count)

    @property
    def lut(self) -> Tuple[int, ...]:
        """Visual column for each logical cell."""
        return self._lut

    @property
    def rtl_indexes(self) -> IndexSet:
        return self._rtl_indexes

    @property
    def number_of_cells(self) -> int:
        """Length of the lut: non-empty cells counting from the first."""
        return len(self._lut)

    def __len__(self) -> int:
        return len(self._lut)

    def inverted_lut(self) -> Tuple[int, ...]:
        """Logical cell for each visual column."""
        if self._inverted_lut is None:
            count = len(self._lut)
            result = [-1] * count
            for logical, visual in enumerate(self._lut):
                assert 0 <= visual < count, f"LUT value {visual} out of range for {count} cells"
                assert result[visual] == -1, f"Visual column {visual} appears twice in LUT"
                result[visual] = logical
            self._inverted_lut = tuple(result)
        return self._inverted_lut

    def sub_info(self, bounds: range) -> Optional["BidiDisplayInfo"]:
        """
        Get display info for a sub-range of logical cells.

        The returned lut is re-ranked so it is a permutation of the sub-range's
        length, and rtl indexes are relative to the sub-range's start.

        Args:
            bounds: Logical cells to keep; clamped to this line

        Returns:
            self if bounds covers the whole line, None if the sub-range has no
            right-to-left content, otherwise a new BidiDisplayInfo
        """
        start = max(bounds.start, 0)
        stop = min(bounds.stop, len(self._lut))
        if start == 0 and stop == len(self._lut):
            return self
        if start >= stop:
            return None

        sub_indexes = self._rtl_indexes.restricted(range(start, stop)).shifted(-start)
        if not sub_indexes:
            return None

        sub_lut = self._lut[start:stop]
        # Compress the parent's visual columns into ranks within the slice
        rank = {visual: i for i, visual in enumerate(sorted(sub_lut))}
        return BidiDisplayInfo([rank[visual] for visual in sub_lut], sub_indexes)

    def logical_ranges(self, visual_range: range, reverse: bool = False) -> Iterator[Tuple[range, int]]:
        """
        Find the logical ranges drawn within a window of visual columns.

        For example:

                      012345678
            Logical   abcDEFghi
            Visual    ghiFEDabc
            window     ^^^^       range(1, 5)

        yields (range(4, 6), 4) for "EF" and then (range(7, 9), 1) for "hi".
        Visual columns past the end of the lut map to themselves.

        Args:
            visual_range: Window of visual columns
            reverse: Yield ranges from the highest logical range down

        Returns:
            Iterator of (logical_range, visual_start) where visual_start is the
            visual column of the range's first logical cell. visual_start is not
            monotonic in either order.
        """
        if visual_range.start < 0:
            raise IndexError(f"Visual column {visual_range.start} out of range")

        count = len(self._lut)
        inverse = self.inverted_lut()
        logical = sorted(inverse[visual] if visual < count else visual for visual in visual_range)
        ranges = list(range_iterator(logical))
        if reverse:
            ranges.reverse()

        for logical_range in ranges:
            first = logical_range.start
            yield logical_range, (self._lut[first] if first < count else first)

    def enumerate_logical_ranges(
        self,
        visual_range: range,
        callback: Callable[[range, int], Any],
        reverse: bool = False,
    ):
        """
        Call callback(logical_range, visual_start) for each range from logical_ranges.

        A truthy return value from callback stops the enumeration.
        """
        for logical_range, visual_start in self.logical_ranges(visual_range, reverse=reverse):
            if callback(logical_range, visual_start):
                return

    def logical_range_array(self, visual_range: range, reverse: bool = False) -> RangeArray:
        """The logical ranges within a visual window as a RangeArray."""
        return RangeArray(r for r, _ in self.logical_ranges(visual_range, reverse=reverse))

    def rtl_range_array(self) -> RangeArray:
        """Runs of right-to-left cells as a RangeArray."""
        return RangeArray(self._rtl_indexes.ranges)

    def to_dict(self) -> dict:
        """Serialize to a plain dict of lists."""
        return {
            LUT_KEY: list(self._lut),
            RTL_INDEXES_KEY: [[r.start, r.stop] for r in self._rtl_indexes.ranges],
        }

    @classmethod
    def from_dict(cls, record: Any) -> "BidiDisplayInfo":
        """
        Deserialize from the output of to_dict.

        Raises:
            MalformedRecord: If a field is missing or invalid
        """
        if not isinstance(record, dict):
            raise MalformedRecord(f"Expected a dict, got {type(record).__name__}")
        if LUT_KEY not in record:
            raise MalformedRecord(f"Missing {LUT_KEY!r}")
        if RTL_INDEXES_KEY not in record:
            raise MalformedRecord(f"Missing {RTL_INDEXES_KEY!r}")

        lut = _decode_lut(record[LUT_KEY])
        ranges = _decode_ranges(record[RTL_INDEXES_KEY], len(lut))
        return cls(lut, IndexSet(ranges))

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str) -> "BidiDisplayInfo":
        try:
            record = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedRecord(f"Invalid JSON: {e}") from e
        return cls.from_dict(record)

    def __eq__(self, other) -> bool:
        if not isinstance(other, BidiDisplayInfo):
            return NotImplemented
        return self._lut == other._lut and self._rtl_indexes == other._rtl_indexes

    def __hash__(self) -> int:
        return hash((self._lut, self._rtl_indexes))

    def __repr__(self) -> str:
        runs = " ".join(_describe_run(run) for run in _lut_runs(self._lut))
        indexes = describe_ranges(self._rtl_indexes.ranges)
        return f"<BidiDisplayInfo lut=[{runs}] rtlIndexes=[{indexes}] length={len(self._lut)}>"


def _is_int32(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and INT32_MIN <= value <= INT32_MAX


def _decode_lut(value) -> Tuple[int, ...]:
    if not isinstance(value, (list, tuple)):
        raise MalformedRecord(f"{LUT_KEY!r} must be a list")
    if not all(_is_int32(v) for v in value):
        raise MalformedRecord(f"{LUT_KEY!r} must hold 32-bit integers")
    if sorted(value) != list(range(len(value))):
        raise MalformedRecord(f"{LUT_KEY!r} is not a permutation")
    return tuple(value)


def _decode_ranges(value, cell_count: int) -> List[range]:
    if not isinstance(value, (list, tuple)):
        raise MalformedRecord(f"{RTL_INDEXES_KEY!r} must be a list")
    ranges = []
    for item in value:
        if not isinstance(item, (list, tuple)) or len(item) != 2 or not all(_is_int32(v) for v in item):
            raise MalformedRecord(f"Bad range in {RTL_INDEXES_KEY!r}: {item!r}")
        start, stop = item
        if start < 0 or stop < start or stop > cell_count:
            raise MalformedRecord(f"Bad range in {RTL_INDEXES_KEY!r}: {item!r}")
        ranges.append(range(start, stop))
    return ranges


def _lut_runs(lut: Sequence[int]) -> Iterator[Tuple[int, int, int]]:
    """Split a lut into runs of (start, end, step) where step is +1, -1 or 0."""
    i = 0
    while i < len(lut):
        start = lut[i]
        step = 0
        j = i + 1
        if j < len(lut) and abs(lut[j] - start) == 1:
            step = lut[j] - start
            while j < len(lut) and lut[j] == lut[j - 1] + step:
                j += 1
        yield start, lut[j - 1], step
        i = j


def _describe_run(run: Tuple[int, int, int]) -> str:
    start, end, step = run
    if step > 0:
        return f">{start}...{end}>"
    if step < 0:
        return f"<{end}...{start}<"
    return f"{start}"


def annotate(bidi_info: Optional[BidiDisplayInfo], statuses: MutableSequence[RTLStatus]) -> bool:
    """
    Mark each cell as RTL or LTR.

    Args:
        bidi_info: Display info for the line; None marks every cell LTR
        statuses: Per-cell statuses, updated in place

    Returns:
        True if any status changed
    """
    changed = False
    for i in range(len(statuses)):
        if bidi_info is not None and i in bidi_info.rtl_indexes:
            status = RTLStatus.RTL
        else:
            status = RTLStatus.LTR
        if statuses[i] != status:
            statuses[i] = status
            changed = True
    return changed
