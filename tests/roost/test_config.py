"""Tests for Config model validation and computed paths."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from roost.config import DEFAULT_DATA_DIR, Config

DATA_DIR = Path("/fake/data-dir")


class TestConfigPaths:
    """Computed path properties derive from data_dir."""

    def test_vault_path(self):
        """Vault file is data_dir / vault.json."""
        cfg = Config(data_dir=DATA_DIR)
        assert cfg.vault_path == DATA_DIR / "vault.json"

    def test_config_path(self):
        """Config file is data_dir / config.toml."""
        cfg = Config(data_dir=DATA_DIR)
        assert cfg.config_path == DATA_DIR / "config.toml"

    def test_log_path(self):
        """Log file is data_dir / roost.log."""
        cfg = Config(data_dir=DATA_DIR)
        assert cfg.log_path == DATA_DIR / "roost.log"


class TestConfigValidation:
    """Pydantic field constraints."""

    def test_defaults(self):
        """Default values for optional fields."""
        cfg = Config(data_dir=DATA_DIR)
        assert cfg.max_read_errors == 3

    def test_max_read_errors_below_minimum(self):
        """max_read_errors < 1 is rejected."""
        with pytest.raises(ValidationError):
            Config(data_dir=DATA_DIR, max_read_errors=0)


class TestBuild:
    """Config.build() with and without config.toml."""

    def test_default_data_dir(self):
        """No data_dir falls back to the default location."""
        assert Config.build().data_dir == DEFAULT_DATA_DIR

    def test_without_config_file(self, tmp_path: Path):
        """Missing config.toml yields defaults."""
        cfg = Config.build(tmp_path)
        assert cfg.data_dir == tmp_path
        assert cfg.max_read_errors == 3

    def test_reads_config_file(self, tmp_path: Path):
        """Integer values in config.toml override defaults."""
        (tmp_path / "config.toml").write_text("max_read_errors = 7\n")
        assert Config.build(tmp_path).max_read_errors == 7

    def test_ignores_wrong_type(self, tmp_path: Path):
        """Non-integer values in config.toml are ignored."""
        (tmp_path / "config.toml").write_text('max_read_errors = "lots"\n')
        assert Config.build(tmp_path).max_read_errors == 3
