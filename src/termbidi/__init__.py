"""termbidi - Logical to visual cell mapping for bidirectional terminal lines."""

import logging
import sys


from .cells import DWC_RIGHT, EMPTY_CELL, cells_from_text, cells_to_string, number_of_trailing_empty_cells
from .core.range_array import RangeArray
from .core.ranges import IndexSet, filter_map_ranges, map_ranges, range_iterator
from .display_info import BidiDisplayInfo, MalformedRecord, RTLStatus, annotate
from .lut import DeltaTable, Direction, Glyph, ShapedRun, build_lookup_table
from .position import CellPosition, Placement, ResolvedCellPosition, resolve_positions

__version__ = "0.1.0"
__all__ = [
    "BidiDisplayInfo",
    "CellPosition",
    "DeltaTable",
    "Direction",
    "DWC_RIGHT",
    "EMPTY_CELL",
    "Glyph",
    "IndexSet",
    "MalformedRecord",
    "Placement",
    "RangeArray",
    "ResolvedCellPosition",
    "RTLStatus",
    "ShapedRun",
    "annotate",
    "build_lookup_table",
    "cells_from_text",
    "cells_to_string",
    "configure_logging",
    "filter_map_ranges",
    "map_ranges",
    "number_of_trailing_empty_cells",
    "range_iterator",
    "resolve_positions",
]


def configure_logging(level=logging.INFO):
    """Send termbidi debug output to stderr at the given level."""
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    for logger_name in ["termbidi.lut", "termbidi.display_info"]:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.handlers.clear()
        logger.addHandler(handler)
