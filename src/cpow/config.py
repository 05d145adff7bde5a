"""Settings for complex power evaluation.

The active settings are process-wide and read once at the start of each
evaluation. Callers that need a different backend for a block of work use
``use_settings``, which restores the previous settings on exit. Settings can
also be loaded from YAML, validated against the bundled JSON schema.

Example:
    with use_settings(mode="arbitrary", dps=80):
        result = complex_power(2 * sp.I, 3)
"""

from __future__ import annotations

import dataclasses
import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema
import yaml

from cpow.common import PRECISION_MODES, CpowError, PrecisionMode

logger = logging.getLogger(__name__)

# Default schema path relative to this module
_SCHEMA_PATH = Path(__file__).parent / "settings.schema.json"


@dataclass(frozen=True)
class Settings:
    """Numeric backend configuration.

    Attributes:
        mode: Which numeric backend evaluates powers
        dps: Decimal digits of working precision for the arbitrary backend
        zero_tolerance: Relative magnitude below which a component of a
            result is treated as zero when building the symbolic result
    """

    mode: PrecisionMode = "native"
    dps: int = 50
    zero_tolerance: float = 1e-12

    def __post_init__(self) -> None:
        if self.mode not in PRECISION_MODES:
            raise CpowError(f"Unknown precision mode: {self.mode!r}")
        if self.dps < 1:
            raise CpowError(f"dps must be a positive integer, got {self.dps}")
        if self.zero_tolerance <= 0:
            raise CpowError(f"zero_tolerance must be positive, got {self.zero_tolerance}")


_active = Settings()


def get_settings() -> Settings:
    return _active


def set_settings(settings: Settings) -> Settings:
    """Replace the active settings and return the previous ones."""
    global _active
    previous, _active = _active, settings
    logger.debug(f"Active settings changed: {previous} -> {settings}")
    return previous


@contextmanager
def use_settings(**changes: Any) -> Iterator[Settings]:
    """Temporarily override fields of the active settings.

    The previous settings are restored on exit, including when the block raises.

    Yields:
        The settings active inside the block.
    """
    settings = dataclasses.replace(_active, **changes)
    previous = set_settings(settings)
    try:
        yield settings
    finally:
        set_settings(previous)


# =============================================================================
# YAML loading and JSON Schema validation
# =============================================================================


@lru_cache(maxsize=1)
def _load_schema_cached(schema_path: Path) -> dict[str, Any]:
    """Load and cache the JSON schema.

    Raises:
        CpowError: If the schema file cannot be loaded
    """
    if not schema_path.exists():  # pragma: no cover
        raise CpowError(f"JSON schema not found: {schema_path}")

    try:
        with open(schema_path, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:  # pragma: no cover
        raise CpowError(f"Failed to load JSON schema: {e}") from e


def validate_settings_dict(config_dict: Any, schema_path: Path | None = None) -> list[str]:
    """Validate a settings dictionary against the JSON schema.

    Args:
        config_dict: Parsed settings content
        schema_path: Optional custom schema path

    Returns:
        List of validation error messages (empty if valid)
    """
    schema = _load_schema_cached(schema_path or _SCHEMA_PATH)
    validator = jsonschema.Draft7Validator(schema)

    errors = []
    for error in sorted(validator.iter_errors(config_dict), key=lambda e: list(e.absolute_path)):
        location = ".".join(str(p) for p in error.absolute_path) or "<root>"
        errors.append(f"{location}: {error.message}")
    return errors


def _read_yaml(path_or_content: str | Path) -> Any:
    # A Path is always a file; a string is a file only if it exists and is a single line
    is_file_path = isinstance(path_or_content, Path)
    if not is_file_path and "\n" not in str(path_or_content):
        is_file_path = Path(path_or_content).exists()

    try:
        if is_file_path:
            with open(path_or_content, encoding="utf-8") as f:
                return yaml.safe_load(f)
        return yaml.safe_load(str(path_or_content))
    except FileNotFoundError as e:  # pragma: no cover
        raise CpowError(f"Settings file not found: {path_or_content}") from e
    except yaml.YAMLError as e:
        raise CpowError(f"Failed to parse YAML: {e}") from e


def load_settings(path_or_content: str | Path, schema_path: Path | None = None) -> Settings:
    """Load settings from a YAML file or a YAML string.

    Missing keys keep their defaults. An empty document yields default settings.

    Args:
        path_or_content: Path to a YAML file, or YAML content
        schema_path: Optional custom schema path

    Returns:
        The validated Settings

    Raises:
        CpowError: If the YAML cannot be parsed or fails schema validation

    Example:
        >>> load_settings("mode: arbitrary\\ndps: 80\\n").dps
        80
    """
    config_dict = _read_yaml(path_or_content)
    if config_dict is None:
        config_dict = {}

    errors = validate_settings_dict(config_dict, schema_path)
    if errors:
        raise CpowError("Invalid settings:\n" + "\n".join(f"  - {e}" for e in errors))

    return Settings(**config_dict)
