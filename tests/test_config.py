"""Tests for configuration loading."""

import pytest

from avif_publisher.config import ConvertConfig, load_config
from avif_publisher.core.models import ConfigError


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults(self):
        config = load_config(None)
        assert config == ConvertConfig()
        assert config.crf == 32
        assert config.ffmpeg == "ffmpeg"
        assert config.images_dir == "images"
        assert config.max_width is None

    def test_load_values(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("max_width: 940\ncrf: 28\nffmpeg: /usr/local/bin/ffmpeg\nimages_dir: assets\n")

        config = load_config(path)

        assert config == ConvertConfig(
            max_width=940, crf=28, ffmpeg="/usr/local/bin/ffmpeg", images_dir="assets"
        )

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(path) == ConvertConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Failed to read"):
            load_config(tmp_path / "missing.yaml")

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("max_width: [\n")
        with pytest.raises(ConfigError, match="parse YAML"):
            load_config(path)

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("quality: 90\n")
        with pytest.raises(ConfigError, match="quality"):
            load_config(path)

    @pytest.mark.parametrize("crf", [-1, 64, "high"])
    def test_invalid_crf(self, tmp_path, crf):
        path = tmp_path / "config.yaml"
        path.write_text(f"crf: {crf}\n")
        with pytest.raises(ConfigError, match="crf"):
            load_config(path)

    def test_invalid_max_width(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("max_width: 0\n")
        with pytest.raises(ConfigError, match="max_width"):
            load_config(path)


class TestWithOverrides:
    """Tests for ConvertConfig.with_overrides."""

    def test_override_applied(self):
        assert ConvertConfig(max_width=940).with_overrides(max_width=1200).max_width == 1200

    def test_none_keeps_value(self):
        assert ConvertConfig(max_width=940).with_overrides(max_width=None).max_width == 940
