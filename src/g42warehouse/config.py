"""Configuration loading from environment variables and warehouse.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

_DEFAULT_HOME = Path.home() / ".g42warehouse"
_DEFAULT_DATA_DIR = _DEFAULT_HOME / "data"
_CONFIG_FILENAME = "warehouse.toml"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _as_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


@dataclass
class StorageConfig:
    """Where registries are persisted and how strictly records are decoded."""

    data_dir: Path = _DEFAULT_DATA_DIR
    employees_file: str = "employees.txt"
    sections_file: str = "sections.txt"
    strict_locations: bool = False

    @property
    def employees_path(self) -> Path:
        return self.data_dir / self.employees_file

    @property
    def sections_path(self) -> Path:
        return self.data_dir / self.sections_file


@dataclass
class WarehouseConfig:
    """Top-level configuration."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    log_level: str = "INFO"


def load_config(config_path: Path | None = None) -> WarehouseConfig:
    """Load configuration from environment variables and optional warehouse.toml.

    Priority: environment variables > warehouse.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text())
    else:
        # Search current dir and ~/.g42warehouse/
        for candidate in [Path.cwd() / _CONFIG_FILENAME, _DEFAULT_HOME / _CONFIG_FILENAME]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text())
                break

    storage_data = file_data.get("storage", {})

    return WarehouseConfig(
        storage=StorageConfig(
            data_dir=Path(
                os.getenv("G42_DATA_DIR", storage_data.get("data_dir", str(_DEFAULT_DATA_DIR)))
            ).expanduser(),
            employees_file=os.getenv(
                "G42_EMPLOYEES_FILE", storage_data.get("employees_file", "employees.txt")
            ),
            sections_file=os.getenv(
                "G42_SECTIONS_FILE", storage_data.get("sections_file", "sections.txt")
            ),
            strict_locations=_as_bool(
                os.getenv("G42_STRICT_LOCATIONS", storage_data.get("strict_locations", False))
            ),
        ),
        log_level=os.getenv("G42_LOG_LEVEL", file_data.get("log_level", "INFO")),
    )
