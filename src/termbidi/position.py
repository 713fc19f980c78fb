"""Cell positions and their resolution into a total drawing order."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple


class Placement(Enum):
    ABSOLUTE = "absolute"
    LEFT_OF_PREDECESSOR = "left"
    RIGHT_OF_PREDECESSOR = "right"


@dataclass(frozen=True)
class CellPosition:
    """Where a logical cell was drawn, before ties are broken.

    Cells absorbed into a ligature have no glyph of their own; they are placed
    relative to the previous cell instead of at an x coordinate.
    """

    source_cell: int
    placement: Placement
    x: float = 0.0

    @classmethod
    def absolute(cls, source_cell: int, x: float) -> "CellPosition":
        return cls(source_cell, Placement.ABSOLUTE, x)

    @classmethod
    def left_of_predecessor(cls, source_cell: int) -> "CellPosition":
        return cls(source_cell, Placement.LEFT_OF_PREDECESSOR)

    @classmethod
    def right_of_predecessor(cls, source_cell: int) -> "CellPosition":
        return cls(source_cell, Placement.RIGHT_OF_PREDECESSOR)


@dataclass(frozen=True)
class ResolvedCellPosition:
    """A cell position ordered by (base, tie_break).

    base is an x coordinate and may be infinite. tie_break orders ligature
    members that share their anchor's base.
    """

    source_cell: int
    base: float
    tie_break: int = 0

    @property
    def sort_key(self) -> Tuple[float, int]:
        return (self.base, self.tie_break)

    def __lt__(self, other: "ResolvedCellPosition") -> bool:
        return self.sort_key < other.sort_key

    @classmethod
    def resolve(cls, previous: Optional["ResolvedCellPosition"], current: CellPosition) -> "ResolvedCellPosition":
        """
        Resolve a cell position against the cell logically before it.

        Args:
            previous: Resolved position of the preceding cell, None for the first cell
            current: Position to resolve

        Returns:
            The resolved position
        """
        if current.placement is Placement.ABSOLUTE:
            return cls(current.source_cell, current.x, 0)

        if previous is None:
            # The first cell was absorbed into a ligature it owns no glyph for.
            # An RTL member goes to the far right, an LTR member to the far left.
            if current.placement is Placement.LEFT_OF_PREDECESSOR:
                return cls(current.source_cell, math.inf, 0)
            return cls(current.source_cell, -math.inf, 0)

        if current.placement is Placement.LEFT_OF_PREDECESSOR:
            return cls(current.source_cell, previous.base, previous.tie_break - 1)
        return cls(current.source_cell, previous.base, previous.tie_break + 1)


def resolve_positions(positions: Iterable[CellPosition]) -> List[ResolvedCellPosition]:
    """Resolve cell positions in logical order, each against its predecessor."""
    resolved: List[ResolvedCellPosition] = []
    for position in positions:
        previous = resolved[-1] if resolved else None
        resolved.append(ResolvedCellPosition.resolve(previous, position))
    return resolved
