"""Tests for GameConfig defaults, validation and dict loading."""
from __future__ import annotations

import pytest

from invaders.config import ClassGeometry, ClassSpec, GameConfig
from invaders.types import ConfigError, EntityClass


class TestDefaults:
    def test_formation_layout(self) -> None:
        cfg = GameConfig()
        assert cfg.cols == 11
        assert cfg.total_rows == 5
        assert (cfg.back.rows, cfg.mid.rows, cfg.front.rows) == (1, 2, 2)

    def test_scores_rise_toward_the_player(self) -> None:
        cfg = GameConfig()
        assert cfg.front.score > cfg.mid.score > cfg.back.score

    def test_first_row(self) -> None:
        cfg = GameConfig()
        assert cfg.first_row(EntityClass.BACK) == 0
        assert cfg.first_row(EntityClass.MID) == 1
        assert cfg.first_row(EntityClass.FRONT) == 3

    def test_spec_lookup(self) -> None:
        cfg = GameConfig()
        assert cfg.spec(EntityClass.MID) is cfg.mid

    def test_frozen(self) -> None:
        cfg = GameConfig()
        with pytest.raises(AttributeError):
            cfg.cols = 3  # type: ignore[misc]


class TestValidation:
    def test_zero_cols(self) -> None:
        with pytest.raises(ConfigError, match="cols must be positive"):
            GameConfig(cols=0)

    def test_period_below_floor(self) -> None:
        with pytest.raises(ConfigError, match="below its floor"):
            GameConfig(tick_period=200.0)

    def test_shift_above_cap(self) -> None:
        with pytest.raises(ConfigError, match="shift_factor"):
            GameConfig(shift_factor=0.5)

    def test_zero_capacity(self) -> None:
        with pytest.raises(ConfigError, match="max_projectiles"):
            GameConfig(max_projectiles=0)

    def test_negative_rows(self) -> None:
        with pytest.raises(ConfigError, match="rows must be >= 0"):
            ClassSpec(rows=-1, geometry=ClassGeometry(0.1, 0.1), score=10)

    def test_degenerate_geometry(self) -> None:
        with pytest.raises(ConfigError, match="extents must be positive"):
            ClassGeometry(0.0, 0.1)

    def test_config_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            GameConfig(cols=-1)


class TestFromDict:
    def test_flat_values(self) -> None:
        cfg = GameConfig.from_dict({"cols": 8, "max_projectiles": 3})
        assert cfg.cols == 8
        assert cfg.max_projectiles == 3
        assert cfg.tick_period == 650.0

    def test_partial_class_entry(self) -> None:
        cfg = GameConfig.from_dict({"front": {"rows": 3, "geometry": {"half_width": 0.05}}})
        assert cfg.front.rows == 3
        assert cfg.front.score == 30
        assert cfg.front.geometry.half_width == 0.05
        assert cfg.front.geometry.half_height == 0.025

    def test_unknown_key(self) -> None:
        with pytest.raises(ConfigError, match="Unknown config keys"):
            GameConfig.from_dict({"colz": 8})

    def test_unknown_class_key(self) -> None:
        with pytest.raises(ConfigError, match="Unknown class keys"):
            GameConfig.from_dict({"mid": {"hp": 3}})

    def test_unknown_geometry_key(self) -> None:
        with pytest.raises(ConfigError, match=r"Unknown geometry keys: \['bogus'\]"):
            GameConfig.from_dict({"front": {"geometry": {"bogus": 1.0}}})

    def test_validation_still_applies(self) -> None:
        with pytest.raises(ConfigError):
            GameConfig.from_dict({"tick_period_floor": 1000.0})
