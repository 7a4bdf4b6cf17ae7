"""Move evaluation heuristics.

Pure functions of (board, position, acting mark); nothing here mutates the
board. Scores are only comparable within one variant.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from ..board import BoardState
from ..config import CaptureWeights
from ..models import Mark

# Horizontal, vertical, principal diagonal, anti-diagonal.
LINE_AXES: tuple[tuple[int, int], ...] = ((0, 1), (1, 0), (1, 1), (1, -1))

WEIGHT_OWN_SQUARED = 10
WEIGHT_OPP_SQUARED = 5

# Positional weight dominates; flip count only orders moves inside one class.
FLIP_TIEBREAK_SCALE = 100


def axis_counts(
    board: BoardState,
    position: int,
    mark: Mark,
    axis: tuple[int, int],
    window: int,
) -> tuple[int, int]:
    """Own and opponent marks within ``window`` cells on both sides along ``axis``."""
    row, col = board.rc(position)
    dr, dc = axis
    opponent = mark.opponent
    own = opp = 0
    for sign in (1, -1):
        for step in range(1, window + 1):
            r = row + sign * dr * step
            c = col + sign * dc * step
            if not board.in_bounds(r, c):
                break
            cell = board.get_rc(r, c)
            if cell is mark:
                own += 1
            elif cell is opponent:
                opp += 1
    return own, opp


def evaluate_line_move(
    board: BoardState,
    position: int,
    mark: Mark,
    *,
    window: int = 5,
    centre_bonus: int = 50,
) -> int:
    """Line-game score: ``own**2 * 10 + opp**2 * 5`` per axis, plus a centre bonus."""
    score = 0
    for axis in LINE_AXES:
        own, opp = axis_counts(board, position, mark, axis, window)
        score += own * own * WEIGHT_OWN_SQUARED + opp * opp * WEIGHT_OPP_SQUARED
    if position == board.center:
        score += centre_bonus
    return score


class CellClass(str, Enum):
    """Strategic class of a capture-game cell."""
    CORNER = "corner"
    X_SQUARE = "x_square"
    C_SQUARE = "c_square"
    EDGE = "edge"
    NEAR_CENTRE = "near_centre"
    INTERIOR = "interior"


@lru_cache(maxsize=None)
def classify_cell(size: int, position: int) -> CellClass:
    row, col = divmod(position, size)
    last = size - 1
    on_row_edge = row in (0, last)
    on_col_edge = col in (0, last)

    if on_row_edge and on_col_edge:
        return CellClass.CORNER
    if row in (1, last - 1) and col in (1, last - 1):
        return CellClass.X_SQUARE
    if (on_row_edge and col in (1, last - 1)) or (on_col_edge and row in (1, last - 1)):
        return CellClass.C_SQUARE
    if on_row_edge or on_col_edge:
        return CellClass.EDGE
    if 2 <= row <= last - 2 and 2 <= col <= last - 2:
        return CellClass.NEAR_CENTRE
    return CellClass.INTERIOR


def cell_weight(size: int, position: int, weights: CaptureWeights) -> int:
    return getattr(weights, classify_cell(size, position).value)


def evaluate_capture_move(
    board: BoardState,
    position: int,
    flips: int,
    weights: CaptureWeights,
) -> float:
    """Capture-game score: positional class weight, then number of discs flipped."""
    return float(cell_weight(board.size, position, weights) * FLIP_TIEBREAK_SCALE + flips)
