"""
Unit tests for session_config module.

Tests configuration defaults, dictionary conversion and JSON persistence.
"""

import json

import pytest

from BC_Libs.SessionLib.session_config import ColoringConfig, load_config, save_config


class TestColoringConfig:
    """Tests for ColoringConfig dataclass."""

    def test_defaults(self):
        config = ColoringConfig()

        assert config.outline_threshold == 80
        assert config.fill_tolerance == 60
        assert config.match_tolerance == 5
        assert config.max_undo_states == 15
        assert config.max_image_size == 1024
        assert config.default_color == "#FF6B6B"
        assert "#FF6B6B" in config.palette

    def test_clamps_channel_settings(self):
        config = ColoringConfig(fill_tolerance=400, outline_threshold=-5)

        assert config.fill_tolerance == 255
        assert config.outline_threshold == 0

    def test_rejects_invalid_values(self):
        with pytest.raises(ValueError):
            ColoringConfig(max_undo_states=0)
        with pytest.raises(ValueError):
            ColoringConfig(device_pixel_ratio=0)
        with pytest.raises(ValueError):
            ColoringConfig(palette=["#FF0000", "not a color"])

    def test_dict_round_trip_ignores_unknown_keys(self):
        data = ColoringConfig(fill_tolerance=40).to_dict()
        data["unknown"] = True

        config = ColoringConfig.from_dict(data)

        assert config.fill_tolerance == 40
        assert not hasattr(config, "unknown")

    def test_build_classifier(self):
        classifier = ColoringConfig(fill_tolerance=30, match_tolerance=2).build_classifier()

        assert classifier.fill_tolerance == 30
        assert classifier.match_tolerance == 2
        assert classifier.outline_threshold == 80


class TestConfigFiles:
    """Tests for load_config and save_config."""

    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "absent.json")
        assert config == ColoringConfig()

    def test_save_then_load(self, tmp_path):
        path = save_config(ColoringConfig(max_undo_states=5), tmp_path / "nested" / "config.json")

        config = load_config(path)

        assert config.max_undo_states == 5

    def test_partial_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"match_tolerance": 8}), encoding="utf-8")

        config = load_config(path)

        assert config.match_tolerance == 8
        assert config.fill_tolerance == 60

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ValueError):
            load_config(path)

    def test_non_object_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")

        with pytest.raises(ValueError):
            load_config(path)
