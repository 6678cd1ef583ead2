"""
Configuration loader with validation and defaults.

Match rules, storage location and log level live in
`config/default_config.yaml` so a club can change its house rules without
touching code. Unknown keys are ignored to keep old files loading.
"""
import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import ConfigError
from .io_utils import load_yaml
from .types import MatchConfig

logger = logging.getLogger(__name__)

# Default location for the application-wide settings
DEFAULT_CONFIG_PATH = Path("config/default_config.yaml")


class Config:
    """
    Configuration container with house-rule defaults.
    """

    DEFAULTS = {
        "match": {
            "starting_score": 501,
            "mode": "first-to",
            "unit": "legs",
            "target": 1,
            "track_doubles": False,
        },
        "storage": {
            "path": "data/dart_stats.yaml",
        },
        "logging": {
            "level": "INFO",
        },
    }

    def __init__(self, config_path: Optional[Path] = None):
        """
        Load configuration from file or use defaults.

        Args:
            config_path: Path to config YAML (None = use defaults)
        """
        self.data = copy.deepcopy(self.DEFAULTS)

        if config_path and Path(config_path).exists():
            try:
                user_config = load_yaml(config_path)
            except Exception as e:  # malformed files fall back to defaults
                logger.warning(f"Failed to load config: {e}, using defaults")
            else:
                self._merge_config(user_config)
                logger.info(f"Configuration loaded from {config_path}")
        else:
            logger.info("Using default configuration")

    def _merge_config(self, user_config: Dict[str, Any]) -> None:
        """Merge user config with defaults."""
        for section, values in user_config.items():
            if section in self.data and isinstance(values, dict):
                self.data[section].update(values)
            else:
                self.data[section] = values

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """Get config value."""
        return self.data.get(section, {}).get(key, default)

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get entire config section."""
        return self.data.get(section, {})

    @property
    def log_level(self) -> int:
        """Numeric logging level from the `logging.level` entry."""
        name = str(self.get("logging", "level", "INFO")).upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ConfigError(f"Unknown log level: {name}")
        return level

    def match_config(self) -> MatchConfig:
        """Build the MatchConfig described by the `match` section."""
        return build_match_config(self.get_section("match"))


def build_match_config(overrides: Optional[Dict[str, Any]] = None) -> MatchConfig:
    """
    Construct a MatchConfig from a raw `match` settings dictionary.

    Args:
        overrides: Mapping of MatchConfig field names to values

    Returns:
        Validated MatchConfig

    Raises:
        ConfigError: If a value is out of range
    """
    overrides = overrides or {}
    known = set(MatchConfig.__dataclass_fields__)
    kwargs = {}

    for key, value in overrides.items():
        if key in known:
            kwargs[key] = value
        else:
            logger.debug("Ignoring unknown config key: %s", key)

    return MatchConfig(**kwargs)


def load_match_config(config_path: Optional[Path] = None) -> MatchConfig:
    """
    Convenience wrapper to load a YAML file and build a MatchConfig in one call.
    """
    return Config(config_path or DEFAULT_CONFIG_PATH).match_config()
