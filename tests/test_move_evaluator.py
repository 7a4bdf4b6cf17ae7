"""Tests for the heuristic move evaluators."""

import pytest

from gridarena.board import BoardState
from gridarena.config import CaptureWeights
from gridarena.models import Mark
from gridarena.rules.capture_game import CaptureGameRules
from gridarena.rules.evaluation import (
    CellClass,
    axis_counts,
    cell_weight,
    classify_cell,
    evaluate_capture_move,
    evaluate_line_move,
)
from gridarena.rules.line_game import LineGameRules

from .helpers import board_with


class TestLineEvaluation:

    def test_empty_board_center_gets_only_bonus(self) -> None:
        board = BoardState(9)
        assert evaluate_line_move(board, 40, Mark.SELF) == 50
        assert evaluate_line_move(board, 0, Mark.SELF) == 0

    def test_single_opponent_stone_on_one_axis(self) -> None:
        board = board_with(9, self_cells=[40])
        # 41 shares only the horizontal axis with 40: opp=1 -> 1 * 5.
        assert evaluate_line_move(board, 41, Mark.OTHER) == 5

    def test_own_and_opponent_counts_are_squared(self) -> None:
        board = board_with(9, self_cells=[0, 1], other_cells=[4])
        # Horizontal from 3: own 2 (0, 1), opp 1 (4).
        assert axis_counts(board, 3, Mark.SELF, (0, 1), 5) == (2, 1)
        assert evaluate_line_move(board, 3, Mark.SELF) == 2 * 2 * 10 + 1 * 1 * 5

    def test_window_is_five_cells_each_side(self) -> None:
        board = board_with(9, self_cells=[0])
        assert evaluate_line_move(board, 5, Mark.SELF) == 10
        assert evaluate_line_move(board, 6, Mark.SELF) == 0

    def test_evaluation_does_not_mutate_board(self, line_rules: LineGameRules) -> None:
        board = board_with(9, self_cells=[40, 41], other_cells=[30])
        before = board.to_list()
        for pos in board.empty_cells():
            line_rules.evaluate(board, pos, Mark.OTHER)
        assert board.to_list() == before


class TestCellClasses:

    @pytest.mark.parametrize(
        ("pos", "expected"),
        [
            (0, CellClass.CORNER),
            (63, CellClass.CORNER),
            (9, CellClass.X_SQUARE),
            (54, CellClass.X_SQUARE),
            (1, CellClass.C_SQUARE),
            (8, CellClass.C_SQUARE),
            (2, CellClass.EDGE),
            (24, CellClass.EDGE),
            (27, CellClass.NEAR_CENTRE),
            (18, CellClass.NEAR_CENTRE),
            (10, CellClass.INTERIOR),
        ],
    )
    def test_classify_eight_by_eight(self, pos: int, expected: CellClass) -> None:
        assert classify_cell(8, pos) is expected

    def test_weights_follow_class(self) -> None:
        weights = CaptureWeights()
        assert cell_weight(8, 0, weights) == 100
        assert cell_weight(8, 9, weights) == -50
        assert cell_weight(8, 1, weights) == -20


class TestCaptureEvaluation:

    def test_position_outranks_flip_count(self) -> None:
        board = BoardState(8)
        weights = CaptureWeights()
        corner = evaluate_capture_move(board, 0, 1, weights)
        edge = evaluate_capture_move(board, 2, 20, weights)
        x_square = evaluate_capture_move(board, 9, 20, weights)
        assert corner > edge > x_square

    def test_flip_count_breaks_ties_within_class(self) -> None:
        board = BoardState(8)
        weights = CaptureWeights()
        assert evaluate_capture_move(board, 2, 3, weights) > evaluate_capture_move(board, 3, 1, weights)

    def test_rules_evaluate_uses_actual_flips(self, capture_rules: CaptureGameRules) -> None:
        board = capture_rules.new_board()
        # 19 flips exactly one disc and is a near-centre cell.
        assert capture_rules.evaluate(board, 19, Mark.SELF) == 20 * 100 + 1
        assert capture_rules.evaluate(board, 0, Mark.SELF) == 100 * 100
