"""Tests for configuration objects and environment overrides."""

import pydantic
import pytest

from gridarena.config import (
    CARO_9X9,
    COMPACT_7X7,
    ArenaSettings,
    CaptureGameConfig,
    LineGameConfig,
    get_line_preset,
)
from gridarena.errors import ConfigurationError
from gridarena.models import RarityTier


class TestLineConfig:

    def test_default_is_nine_by_nine_five(self) -> None:
        config = LineGameConfig()
        assert (config.board_size, config.run_length) == (9, 5)
        assert config == CARO_9X9

    def test_run_length_cannot_exceed_board(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            LineGameConfig(board_size=5, run_length=6)

    def test_board_limited_to_81_cells(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            LineGameConfig(board_size=10)

    def test_presets(self) -> None:
        assert get_line_preset("caro9") is CARO_9X9
        assert get_line_preset(" Compact7 ") is COMPACT_7X7
        assert COMPACT_7X7.base_tier_for_moves(5) is RarityTier.DIAMOND

    def test_unknown_preset(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            get_line_preset("gomoku19")
        assert exc_info.value.code == "CONFIGURATION_ERROR"


class TestCaptureConfig:

    def test_odd_board_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            CaptureGameConfig(board_size=7)

    def test_margin_thresholds(self) -> None:
        config = CaptureGameConfig()
        assert config.base_tier_for_margin(50) is RarityTier.DIAMOND
        assert config.base_tier_for_margin(49) is RarityTier.GOLD
        assert config.base_tier_for_margin(0) is RarityTier.BRONZE


class TestSettingsFromEnv:

    def test_defaults(self, monkeypatch) -> None:
        for name in (
            "GRIDARENA_LINE_PRESET",
            "GRIDARENA_RNG_SEED",
            "GRIDARENA_LOG_LEVEL",
            "GRIDARENA_MAX_SESSIONS",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = ArenaSettings.from_env()

        assert settings.line == CARO_9X9
        assert settings.rng_seed is None
        assert settings.log_level == "INFO"
        assert settings.max_sessions == 1024

    def test_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("GRIDARENA_LINE_PRESET", "compact7")
        monkeypatch.setenv("GRIDARENA_RNG_SEED", "42")
        monkeypatch.setenv("GRIDARENA_LOG_LEVEL", "debug")
        monkeypatch.setenv("GRIDARENA_MAX_SESSIONS", "8")

        settings = ArenaSettings.from_env()

        assert settings.line == COMPACT_7X7
        assert settings.rng_seed == 42
        assert settings.log_level == "DEBUG"
        assert settings.max_sessions == 8

    def test_bad_number(self, monkeypatch) -> None:
        monkeypatch.setenv("GRIDARENA_RNG_SEED", "not-a-number")
        with pytest.raises(ConfigurationError):
            ArenaSettings.from_env()
