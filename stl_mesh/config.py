"""
JSON-based loader configuration.

All keys are optional; missing keys fall back to the defaults in
``constants.py``.
"""

import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .constants import DEFAULT_CHUNK_TRIANGLES, DEFAULT_TEXT_ENCODING
from .exceptions import ConfigurationError
from .utils import parse_bool, require_positive_int

logger = logging.getLogger(__name__)


def _require_encoding(val: Any, param_name: str) -> str:
    if not isinstance(val, str) or not val:
        raise ValueError(f"{param_name} must be a non-empty codec name, got {val!r}")
    return val


@dataclass
class LoaderConfig:
    """Tunables for a decode call."""
    chunk_triangles: int = DEFAULT_CHUNK_TRIANGLES
    encoding: str = DEFAULT_TEXT_ENCODING
    warn_on_trailing_bytes: bool = True
    collect_on_release: bool = False

    def __post_init__(self):
        try:
            require_positive_int(self.chunk_triangles, "chunk_triangles")
        except (TypeError, ValueError) as e:
            raise ConfigurationError(str(e), invalid_parameters=["chunk_triangles"]) from e

    @classmethod
    def from_dict(cls, data: Dict[str, Any], config_file: Optional[Path] = None) -> "LoaderConfig":
        """Build a config from a parsed JSON mapping."""
        known = {"chunk_triangles", "encoding", "warn_on_trailing_bytes", "collect_on_release", "description"}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {', '.join(unknown)}")

        invalid = []
        errors = []
        values = {}

        def check(name, default, validator):
            if name not in data:
                values[name] = default
                return
            try:
                values[name] = validator(data[name], name)
            except ValueError as e:
                invalid.append(name)
                errors.append(str(e))

        check("chunk_triangles", DEFAULT_CHUNK_TRIANGLES, require_positive_int)
        check("encoding", DEFAULT_TEXT_ENCODING, _require_encoding)
        check("warn_on_trailing_bytes", True, parse_bool)
        check("collect_on_release", False, parse_bool)

        if invalid:
            raise ConfigurationError(
                f"Invalid configuration values: {'; '.join(errors)}",
                config_file=config_file,
                invalid_parameters=invalid,
            )

        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(config_file: Union[str, Path, None]) -> LoaderConfig:
    """
    Load and validate a configuration file.

    Args:
        config_file: Path to a JSON configuration file, or None for defaults

    Returns:
        LoaderConfig with file values applied over the defaults

    Raises:
        ConfigurationError: If the file cannot be read, is not a JSON object,
            or holds invalid values
    """
    if config_file is None:
        return LoaderConfig()

    config_file = Path(config_file)
    try:
        with open(config_file, 'r') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigurationError(
            f"Failed to load configuration from {config_file}: {e}",
            config_file=str(config_file),
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration in {config_file} must be a JSON object",
            config_file=str(config_file),
        )

    config = LoaderConfig.from_dict(data, config_file=str(config_file))
    logger.debug(f"Configuration loaded from {config_file}: {config}")
    return config


def write_config_template(output_path: Union[str, Path]) -> Path:
    """Write a configuration template holding the default values."""
    output_path = Path(output_path)
    template = {"description": "stl_mesh loader configuration"}
    template.update(LoaderConfig().to_dict())

    with open(output_path, 'w') as f:
        json.dump(template, f, indent=2)

    logger.info(f"Created config template: {output_path}")
    return output_path
