"""Shared fixtures for termbidi tests."""

import unicodedata

import pytest

from termbidi import Direction, Glyph, ShapedRun

CELL_WIDTH = 10.0


def _direction(char):
    if unicodedata.bidirectional(char) in ("R", "AL"):
        return Direction.RTL
    return Direction.LTR


def monospace_shape(text):
    """
    Shape text into runs on a fixed-width grid with a left-to-right base.

    Strong RTL characters form RTL runs; everything else is LTR. Runs are laid
    out left to right and each RTL run is drawn reversed.
    """
    runs = []
    start = 0
    while start < len(text):
        direction = _direction(text[start])
        end = start
        while end < len(text) and _direction(text[end]) is direction:
            end += 1
        indices = range(start, end)
        if direction is Direction.RTL:
            order = list(reversed(indices))
        else:
            order = list(indices)
        glyphs = [Glyph(string_index, (start + column) * CELL_WIDTH) for column, string_index in enumerate(order)]
        runs.append(ShapedRun(direction, glyphs, string_range=indices))
        start = end
    return runs


@pytest.fixture
def shaper():
    """A stand-in for a real text shaper."""
    return monospace_shape
