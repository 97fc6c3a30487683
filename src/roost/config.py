"""Centralized application configuration."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field

DEFAULT_DATA_DIR = Path.home() / ".local" / "roost"


class Config(BaseModel):
    """Application-wide configuration."""

    model_config = ConfigDict(frozen=True)

    data_dir: Path = Field(description="Base directory for all application data")
    max_read_errors: int = Field(
        default=3, ge=1, description="Consecutive input read failures tolerated while choosing a credential"
    )

    @computed_field(description="Encrypted vault file")
    @property
    def vault_path(self) -> Path:
        """Encrypted vault file."""
        return self.data_dir / "vault.json"

    @computed_field(description="Optional TOML configuration file")
    @property
    def config_path(self) -> Path:
        """Optional TOML configuration file."""
        return self.data_dir / "config.toml"

    @computed_field(description="Log file")
    @property
    def log_path(self) -> Path:
        """Log file."""
        return self.data_dir / "roost.log"

    @staticmethod
    def build(data_dir: Path | None = None) -> Config:
        """Build a Config from defaults and optional config.toml."""
        resolved_dir = data_dir if data_dir is not None else DEFAULT_DATA_DIR
        config_path = resolved_dir / "config.toml"

        kwargs: dict[str, Any] = {"data_dir": resolved_dir}
        if config_path.is_file():
            with config_path.open("rb") as f:
                toml_data = tomllib.load(f)
            if isinstance(toml_data.get("max_read_errors"), int):
                kwargs["max_read_errors"] = toml_data["max_read_errors"]

        return Config(**kwargs)
