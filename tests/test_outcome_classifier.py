"""Tests for rarity tiers and win-pattern labels."""

import pytest

from gridarena.board import BoardState
from gridarena.config import COMPACT_7X7
from gridarena.models import Difficulty, GameStatus, Mark, RarityTier, WinPattern
from gridarena.outcome import OutcomeClassifier
from gridarena.rules.capture_game import CaptureGameRules
from gridarena.rules.line_game import LineGameRules

from .helpers import board_with

SLOW = 10 ** 9


@pytest.fixture
def line_classifier() -> OutcomeClassifier:
    return OutcomeClassifier(LineGameRules())


@pytest.fixture
def capture_classifier() -> OutcomeClassifier:
    return OutcomeClassifier(CaptureGameRules())


def capture_board(self_count: int, other_count: int) -> BoardState:
    """8x8 board filled row-major: SELF discs first, then OTHER."""
    board = BoardState(8)
    for pos in range(self_count):
        board.place(pos, Mark.SELF)
    for pos in range(self_count, self_count + other_count):
        board.place(pos, Mark.OTHER)
    return board


class TestRarityTier:

    def test_order(self) -> None:
        assert RarityTier.BRONZE < RarityTier.SILVER < RarityTier.GOLD < RarityTier.DIAMOND

    def test_promotion_caps_at_diamond(self) -> None:
        assert RarityTier.SILVER.promoted(1) is RarityTier.GOLD
        assert RarityTier.GOLD.promoted(5) is RarityTier.DIAMOND


class TestLineTiers:

    @pytest.mark.parametrize(
        ("player_moves", "expected"),
        [
            (5, RarityTier.GOLD),
            (6, RarityTier.SILVER),
            (7, RarityTier.BRONZE),
            (20, RarityTier.BRONZE),
        ],
    )
    def test_base_tier_from_move_count(self, line_classifier, player_moves, expected) -> None:
        board = board_with(9, self_cells=[0, 1, 2, 3, 4])
        outcome = line_classifier.classify(
            board, GameStatus.SELF_WIN, Difficulty.EASY, player_moves, SLOW, last_move=4
        )
        assert outcome.rarity_tier is expected

    def test_hard_and_fast_bonuses(self, line_classifier) -> None:
        board = board_with(9, self_cells=[0, 1, 2, 3, 4])
        outcome = line_classifier.classify(
            board, GameStatus.SELF_WIN, Difficulty.HARD, 7, 1_000, last_move=4
        )
        # Bronze +1 Hard +1 fast.
        assert outcome.rarity_tier is RarityTier.GOLD

    def test_compact_preset_table(self) -> None:
        classifier = OutcomeClassifier(LineGameRules(COMPACT_7X7))
        board = board_with(7, self_cells=[0, 1, 2, 3])
        tiers = [
            classifier.classify(
                board, GameStatus.SELF_WIN, Difficulty.EASY, moves, SLOW, last_move=3
            ).rarity_tier
            for moves in (5, 7, 9, 10)
        ]
        assert tiers == [RarityTier.DIAMOND, RarityTier.GOLD, RarityTier.SILVER, RarityTier.BRONZE]

    @pytest.mark.parametrize(
        ("thinking_time", "expected"),
        [
            (4_999, RarityTier.SILVER),
            (5_000, RarityTier.BRONZE),
            (20_000, RarityTier.BRONZE),
        ],
    )
    def test_fast_bonus_boundary(self, line_classifier, thinking_time, expected) -> None:
        assert line_classifier.rules.config.fast_win_ms == 5_000
        board = board_with(9, self_cells=[0, 1, 2, 3, 4])
        outcome = line_classifier.classify(
            board, GameStatus.SELF_WIN, Difficulty.EASY, 7, thinking_time, last_move=4
        )
        assert outcome.rarity_tier is expected

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    @pytest.mark.parametrize("player_moves", [3, 5, 6, 9])
    def test_faster_is_never_worse(self, line_classifier, difficulty, player_moves) -> None:
        board = board_with(9, self_cells=[0, 1, 2, 3, 4])
        times = [600_000, 120_000, 60_001, 60_000, 59_999, 30_000, 0]
        tiers = [
            line_classifier.classify(
                board, GameStatus.SELF_WIN, difficulty, player_moves, t, last_move=4
            ).rarity_tier
            for t in times
        ]
        assert tiers == sorted(tiers)


class TestLinePatterns:

    def test_center_control(self, line_classifier) -> None:
        board = board_with(9, self_cells=[36, 37, 38, 39, 40])
        outcome = line_classifier.classify(
            board, GameStatus.SELF_WIN, Difficulty.EASY, 5, SLOW, last_move=36
        )
        assert outcome.win_pattern is WinPattern.CENTER_CONTROL

    def test_corner_trap(self, line_classifier) -> None:
        board = board_with(9, self_cells=[0, 1, 2, 3, 4, 80])
        outcome = line_classifier.classify(
            board, GameStatus.SELF_WIN, Difficulty.EASY, 6, SLOW, last_move=4
        )
        assert outcome.win_pattern is WinPattern.CORNER_TRAP

    def test_fork_beats_center_and_adds_a_tier(self, line_classifier) -> None:
        board = board_with(9, self_cells=[36, 37, 38, 39, 40, 4, 13, 22, 31])
        outcome = line_classifier.classify(
            board, GameStatus.SELF_WIN, Difficulty.EASY, 6, SLOW, last_move=40
        )
        assert outcome.win_pattern is WinPattern.FORK
        assert outcome.rarity_tier is RarityTier.GOLD

    def test_ai_win_has_pattern_but_no_tier(self, line_classifier) -> None:
        board = board_with(9, self_cells=[10], other_cells=[36, 37, 38, 39, 40])
        outcome = line_classifier.classify(
            board, GameStatus.OTHER_WIN, Difficulty.HARD, 4, 0, last_move=36
        )
        assert outcome.rarity_tier is None
        assert outcome.win_pattern is WinPattern.CENTER_CONTROL

    def test_draw_has_neither(self, line_classifier) -> None:
        outcome = line_classifier.classify(
            BoardState(9), GameStatus.DRAW, Difficulty.HARD, 41, 0
        )
        assert outcome.rarity_tier is None
        assert outcome.win_pattern is None

    def test_active_status_is_rejected(self, line_classifier) -> None:
        with pytest.raises(ValueError):
            line_classifier.classify(BoardState(9), GameStatus.ACTIVE, Difficulty.EASY, 0, 0)


class TestCaptureTiers:

    @pytest.mark.parametrize(
        ("self_count", "other_count", "expected"),
        [
            (57, 7, RarityTier.DIAMOND),
            (45, 10, RarityTier.GOLD),
            (30, 10, RarityTier.SILVER),
            (20, 10, RarityTier.BRONZE),
            (12, 10, RarityTier.BRONZE),
        ],
    )
    def test_base_tier_from_margin(self, capture_classifier, self_count, other_count, expected) -> None:
        board = capture_board(self_count, other_count)
        outcome = capture_classifier.classify(
            board, GameStatus.SELF_WIN, Difficulty.EASY, 30, SLOW
        )
        assert outcome.rarity_tier is expected
        assert (outcome.self_pieces, outcome.other_pieces) == (self_count, other_count)

    def test_hard_and_fast_bonuses_cap(self, capture_classifier) -> None:
        board = capture_board(45, 10)
        outcome = capture_classifier.classify(
            board, GameStatus.SELF_WIN, Difficulty.HARD, 30, 1_000
        )
        assert outcome.rarity_tier is RarityTier.DIAMOND

    @pytest.mark.parametrize(
        ("thinking_time", "expected"),
        [
            (29_999, RarityTier.GOLD),
            (30_000, RarityTier.SILVER),
            (120_000, RarityTier.SILVER),
        ],
    )
    def test_fast_bonus_boundary(self, capture_classifier, thinking_time, expected) -> None:
        assert capture_classifier.rules.config.fast_win_ms == 30_000
        board = capture_board(30, 10)
        outcome = capture_classifier.classify(
            board, GameStatus.SELF_WIN, Difficulty.EASY, 30, thinking_time
        )
        assert outcome.rarity_tier is expected

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_faster_is_never_worse(self, capture_classifier, difficulty) -> None:
        board = capture_board(30, 10)
        times = [3_600_000, 30_001, 30_000, 29_999, 0]
        tiers = [
            capture_classifier.classify(
                board, GameStatus.SELF_WIN, difficulty, 30, t
            ).rarity_tier
            for t in times
        ]
        assert tiers == sorted(tiers)


class TestCapturePatterns:

    def test_corner_control(self, capture_classifier) -> None:
        board = capture_board(20, 10)
        board.place(56, Mark.SELF)
        board.place(63, Mark.SELF)
        outcome = capture_classifier.classify(
            board, GameStatus.SELF_WIN, Difficulty.EASY, 30, SLOW
        )
        assert outcome.win_pattern is WinPattern.CORNER_CONTROL

    def test_mobility(self, capture_classifier) -> None:
        board = capture_board(20, 10)
        outcome = capture_classifier.classify(
            board, GameStatus.SELF_WIN, Difficulty.EASY, 30, SLOW
        )
        assert outcome.win_pattern is WinPattern.MOBILITY

    def test_draw_has_neither(self, capture_classifier) -> None:
        outcome = capture_classifier.classify(
            capture_board(10, 10), GameStatus.DRAW, Difficulty.EASY, 30, SLOW
        )
        assert outcome.rarity_tier is None
        assert outcome.win_pattern is None
