"""Tests for configuration loading."""

import json

from regression_test.config import ConfigManager, RegTestConfig


class TestRegTestConfig:
    """Tests for the configuration dataclass."""

    def test_defaults(self):
        """Test default values."""
        config = RegTestConfig()

        assert config.data_dir == "regtest_data"
        assert config.indent == 2
        assert config.fail_fast is True

    def test_missing_file_gives_defaults(self, temp_dir):
        """Test that a missing config file falls back to defaults."""
        assert RegTestConfig.from_file(temp_dir / "missing.json") == RegTestConfig()

    def test_invalid_file_gives_defaults(self, temp_dir):
        """Test that an unreadable config file falls back to defaults."""
        path = temp_dir / "regtest_config.json"
        path.write_text("{not json")

        assert RegTestConfig.from_file(path) == RegTestConfig()

    def test_unknown_keys_ignored(self):
        """Test that unknown keys do not break loading."""
        config = RegTestConfig.from_dict({"fail_fast": False, "colour": "blue"})

        assert config.fail_fast is False

    def test_save_and_load(self, temp_dir):
        """Test a save/load cycle."""
        path = temp_dir / "nested" / "regtest_config.json"
        RegTestConfig(data_dir="golden", indent=4).save_to_file(path)

        loaded = RegTestConfig.from_file(path)

        assert loaded.data_dir == "golden"
        assert loaded.indent == 4
        assert json.loads(path.read_text())["fail_fast"] is True

    def test_get_data_dir(self, temp_dir):
        """Test resolving the data directory against a root."""
        config = RegTestConfig()

        assert config.get_data_dir(temp_dir) == temp_dir / "regtest_data"
        assert str(config.get_data_dir()) == "regtest_data"


class TestConfigManager:
    """Tests for ConfigManager."""

    def test_update_config(self, temp_dir):
        """Test that only known keys are updated."""
        manager = ConfigManager(temp_dir / "regtest_config.json")
        manager.update_config(fail_fast=False, unknown=1)

        assert manager.get_config().fail_fast is False
        assert not hasattr(manager.get_config(), "unknown")

    def test_create_default_config(self, temp_dir):
        """Test writing the default configuration file."""
        path = temp_dir / "regtest_config.json"

        ConfigManager(path).create_default_config()

        assert json.loads(path.read_text()) == RegTestConfig().to_dict()
