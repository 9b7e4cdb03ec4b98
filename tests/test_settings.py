"""Tests for YAML settings."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from neofit.config.settings import Settings


class TestSettings:
    def test_missing_file_gives_defaults(self, tmp_path):
        settings = Settings.load(tmp_path / "missing.yaml")
        assert settings.storage.key == "neofit-storage"
        assert settings.defaults.activity_level == "moderate"
        assert settings.defaults.report_days == 30
        assert settings.database.path.name == "neofit.db"

    def test_partial_file(self, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("defaults:\n  report_days: 7\n  activity_level: active\n")

        settings = Settings.load(config)

        assert settings.defaults.report_days == 7
        assert settings.defaults.activity_level == "active"
        assert settings.defaults.output_format == "table"

    def test_save_roundtrip(self, tmp_path):
        config = tmp_path / "nested" / "config.yaml"
        settings = Settings()
        settings.database.path = tmp_path / "data.db"
        settings.storage.key = "test-key"
        settings.defaults.output_format = "json"
        settings.save(config)

        loaded = Settings.load(config)
        assert loaded.database.path == Path(tmp_path / "data.db")
        assert loaded.storage.key == "test-key"
        assert loaded.defaults.output_format == "json"

    def test_empty_file(self, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("")
        assert Settings.load(config).defaults.report_days == 30

    def test_malformed_yaml_raises(self, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("defaults: [unclosed\n")
        with pytest.raises(yaml.YAMLError):
            Settings.load(config)
