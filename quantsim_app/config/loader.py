"""Configuration loader: defaults < simulation.yaml < explicit overrides."""

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Optional

import structlog
import yaml

from .defaults import DefaultConfig, get_default_config

logger = structlog.get_logger(__name__)

CONFIG_FILE = "simulation.yaml"
DEFAULT_CONFIG_DIR = Path(__file__).resolve().parents[2] / "config"


@dataclass(frozen=True)
class ConfigLoader:
    """Reads the simulation config file and layers it over the defaults."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Loader for ``config_dir``, the repository ``config/`` directory if omitted."""
        return cls(
            config_dir=Path(config_dir) if config_dir is not None else DEFAULT_CONFIG_DIR,
            defaults=get_default_config(),
        )

    def load_file_config(self) -> dict[str, Any]:
        """Contents of simulation.yaml, empty if the file is missing or empty."""
        path = self.config_dir / CONFIG_FILE
        if not path.is_file():
            logger.debug("No config file, using defaults", path=str(path))
            return {}

        with path.open() as f:
            return yaml.safe_load(f) or {}

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merged configuration as nested dicts.

        Priority order:
        1. Explicit overrides (highest priority)
        2. Config file values
        3. Built-in defaults (lowest priority)
        """
        config = asdict(self.defaults)
        for layer in (self.load_file_config(), overrides or {}):
            config = _deep_merge(config, layer)
        return config


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged
