"""
Core module - shared data types, errors, I/O and configuration.
"""
from .types import (
    LEGS_PER_SET,
    VALID_STARTING_SCORES,
    MatchConfig,
    MatchMode,
    MatchUnit,
    Player,
    PlayerId,
)
from .errors import (
    ConfigError,
    DartScoreError,
    PersistenceFailure,
)
from .io_utils import (
    atomic_write_yaml,
    load_yaml,
    update_yaml,
)
from .config_loader import (
    DEFAULT_CONFIG_PATH,
    Config,
    build_match_config,
    load_match_config,
)

__all__ = [
    # Types
    "LEGS_PER_SET",
    "VALID_STARTING_SCORES",
    "MatchConfig",
    "MatchMode",
    "MatchUnit",
    "Player",
    "PlayerId",
    # Errors
    "ConfigError",
    "DartScoreError",
    "PersistenceFailure",
    # I/O
    "atomic_write_yaml",
    "load_yaml",
    "update_yaml",
    # Config
    "DEFAULT_CONFIG_PATH",
    "Config",
    "build_match_config",
    "load_match_config",
]
