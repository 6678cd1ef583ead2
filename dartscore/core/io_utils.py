"""
YAML storage helpers.

Configuration is read with load_yaml. The statistics file is changed with
update_yaml, a read-modify-write that always goes through
atomic_write_yaml: a crash mid-save leaves the previous file, never a
truncated one.
"""
import os
import yaml
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, Optional, TypeVar, Union
import logging

logger = logging.getLogger(__name__)

T = TypeVar("T")

PathLike = Union[str, Path]


def load_yaml(filepath: PathLike, missing_ok: bool = False) -> Dict[str, Any]:
    """
    Read a YAML mapping.

    Args:
        filepath: YAML file
        missing_ok: Return an empty dict instead of raising for a missing file

    Returns:
        Parsed mapping ({} for an empty file)

    Raises:
        FileNotFoundError: If the file does not exist and missing_ok is False
        yaml.YAMLError: If the file is malformed
    """
    filepath = Path(filepath)
    if not filepath.exists():
        if missing_ok:
            return {}
        raise FileNotFoundError(f"YAML file not found: {filepath}")

    with open(filepath, 'r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Failed to parse {filepath}: {e}")
            raise

    logger.debug(f"Loaded {filepath}")
    return data or {}


def atomic_write_yaml(filepath: PathLike, data: Dict[str, Any]) -> None:
    """
    Replace `filepath` with `data` in one step.

    Keys keep their insertion order so stored matches stay chronological.

    Raises:
        IOError: If the file cannot be written
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    # Same directory as the target, so os.replace never crosses filesystems
    fd, temp_path = tempfile.mkstemp(dir=filepath.parent, prefix=f".{filepath.stem}_", suffix=".tmp")
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            yaml.safe_dump(data, f, default_flow_style=False, allow_unicode=True, sort_keys=False)
        os.replace(temp_path, filepath)
    except (OSError, yaml.YAMLError) as e:
        Path(temp_path).unlink(missing_ok=True)
        logger.error(f"Failed to write {filepath}: {e}")
        raise IOError(f"Atomic write failed: {e}") from e

    logger.debug(f"Atomically wrote {filepath}")


def update_yaml(
        filepath: PathLike,
        update: Callable[[Dict[str, Any]], T],
        defaults: Optional[Dict[str, Any]] = None
) -> T:
    """
    Load `filepath`, let `update` change the mapping in place, write it back.

    Nothing is written when `update` raises, so a rejected change leaves the
    file as it was.

    Args:
        filepath: YAML file (created if missing)
        update: Called with the mutable mapping; its return value is passed on
        defaults: Top-level keys to fill in when absent

    Returns:
        Whatever `update` returned
    """
    data = load_yaml(filepath, missing_ok=True)
    for key, value in (defaults or {}).items():
        if data.get(key) is None:
            data[key] = value

    result = update(data)
    atomic_write_yaml(filepath, data)
    return result
