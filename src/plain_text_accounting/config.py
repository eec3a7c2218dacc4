"""Settings for the command-line tool, loaded from an optional YAML file."""

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

VALID_FORMATS = ('json', 'yaml')
VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ConfigurationError(Exception):
    """Raised when the settings file is invalid."""
    pass


@dataclass(frozen=True)
class Settings:
    """Run settings; command-line options override file values."""
    max_workers: int = 4
    encoding: str = 'utf-8'
    output_format: str = 'json'
    log_level: str = 'INFO'
    progress: bool = True

    def __post_init__(self):
        if self.max_workers < 1:
            raise ConfigurationError("max_workers must be at least 1")
        if self.output_format not in VALID_FORMATS:
            raise ConfigurationError(f"output_format must be one of: {list(VALID_FORMATS)}")
        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ConfigurationError(f"log_level must be one of: {list(VALID_LOG_LEVELS)}")

    def override(self, **options: Any) -> 'Settings':
        """Return a copy with every non-None option applied."""
        return replace(self, **{k: v for k, v in options.items() if v is not None})


def load_settings(path: Optional[Path] = None) -> Settings:
    """
    Load settings from a YAML file.

    Args:
        path: Settings file; a missing file yields the defaults

    Returns:
        Settings instance

    Raises:
        ConfigurationError: If the file is malformed or has unknown keys
    """
    if path is None or not Path(path).exists():
        return Settings()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a mapping of settings")

    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(f"Unknown settings in {path}: {unknown}")

    settings = Settings(**_coerce(data))
    logger.info(f"Loaded settings from {path}")
    return settings


def _coerce(data: Dict[str, Any]) -> Dict[str, Any]:
    values = dict(data)
    if 'log_level' in values:
        values['log_level'] = str(values['log_level']).upper()
    if 'max_workers' in values:
        try:
            values['max_workers'] = int(values['max_workers'])
        except (TypeError, ValueError):
            raise ConfigurationError("max_workers must be an integer") from None
    return values
