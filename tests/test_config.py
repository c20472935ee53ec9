"""Tests for GameConfig."""

import json

import pytest

from enhanced_snake.config import GameConfig
from enhanced_snake.cosmetics import EyeStyle, HeadMode, Settings


class TestGameConfigDefaults:
    def test_defaults(self):
        config = GameConfig()
        assert config.grid_width == 20
        assert config.grid_height == 20
        assert config.tick_rate_ms == 150
        assert config.hiss_probability == 0.05
        assert config.settings == Settings()
        assert config.seed is None
        assert config.grid.cell_count == 400


class TestGameConfigValidation:
    def test_grid_too_small_for_start(self):
        with pytest.raises(ValueError, match="too small"):
            GameConfig(grid_width=10)

    def test_tick_rate_range(self):
        with pytest.raises(ValueError, match="tick_rate_ms"):
            GameConfig(tick_rate_ms=5)
        with pytest.raises(ValueError, match="tick_rate_ms"):
            GameConfig(tick_rate_ms=5000)

    def test_hiss_probability_range(self):
        with pytest.raises(ValueError, match="hiss_probability"):
            GameConfig(hiss_probability=1.5)


class TestGameConfigSerialization:
    def test_to_dict_is_json(self):
        config = GameConfig(
            settings=Settings(head_mode=HeadMode.DOUBLE_HEAD), seed=3,
        )
        data = json.loads(json.dumps(config.to_dict()))
        assert data["settings"]["head_mode"] == "double_head"
        assert data["seed"] == 3

    def test_save_and_load(self, tmp_path):
        config = GameConfig(
            tick_rate_ms=100,
            settings=Settings(eyes=EyeStyle.ANGRY),
            seed=9,
        )
        path = tmp_path / "nested" / "config.json"
        config.save(path)
        assert GameConfig.load(path) == config

    def test_from_dict_rejects_unknown_cosmetic(self):
        with pytest.raises(ValueError, match="Unknown eye style"):
            GameConfig.from_dict({"settings": {"eyes": "googly"}})

    def test_from_dict_without_settings(self):
        assert GameConfig.from_dict({"seed": 1}) == GameConfig(seed=1)

    def test_from_dict_rejects_unknown_keys(self):
        with pytest.raises(ValueError, match="Unknown config keys: speed"):
            GameConfig.from_dict({"speed": 3})
