"""Settings file handling.

Settings live in a small YAML file edited either by hand or through the
``config-set`` command. ruamel.yaml is used so hand-written comments and
key order survive programmatic edits.
"""

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, field_validator
from pydantic import ValidationError as PydanticValidationError
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from cluster_capabilities.exceptions import ConfigurationError, ValidationError
from cluster_capabilities.logging_config import get_logger

logger = get_logger(__name__)

CONFIG_ENV_VAR = "CLUSTER_CAPS_CONFIG"
DEFAULT_CONFIG_PATH = "~/.config/cluster-caps/config.yml"

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class SyncSettings(BaseModel):
    """Settings for a capability sync run."""

    kubeconfig: str | None = None
    driver_service_url: str | None = None
    node_pool_detection: Literal["first", "any"] = "first"
    log_level: str = "INFO"
    log_file: str | None = None

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log_level is a standard logging level name."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {LOG_LEVELS}, got '{v}'")
        return level

    @field_validator("driver_service_url")
    @classmethod
    def validate_driver_service_url(cls, v: str | None) -> str | None:
        """Validate driver_service_url is an http(s) URL."""
        if v is None:
            return v
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"driver_service_url '{v}' must start with http:// or https://")
        return v


def default_config_path() -> Path:
    """Settings path from ``$CLUSTER_CAPS_CONFIG``, else the user config dir."""
    return Path(os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH)).expanduser()


class SettingsManager:
    """Reads and writes the settings file."""

    def __init__(self, path: str | Path | None = None):
        """Initialize the settings manager.

        Args:
            path: Settings file path; defaults to ``default_config_path()``
        """
        self.path = Path(path).expanduser() if path else default_config_path()
        self.yaml = YAML()
        self.yaml.preserve_quotes = True
        self.yaml.default_flow_style = False
        self.yaml.indent(mapping=2, sequence=2, offset=0)

    def read(self) -> CommentedMap:
        """Read the raw settings mapping. A missing file reads as empty.

        Raises:
            ConfigurationError: If the file cannot be read or is not a mapping
        """
        if not self.path.exists():
            logger.debug(f"Settings file not found, using defaults: {self.path}")
            return CommentedMap()

        try:
            with open(self.path) as f:
                data = self.yaml.load(f)
        except Exception as e:
            logger.error(f"Failed to read settings file: {e}")
            raise ConfigurationError(
                f"Failed to read settings file: {self.path}",
                f"{e}\n\nThe file may have invalid YAML syntax.",
            ) from e

        if data is None:
            return CommentedMap()
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Settings file must contain a mapping: {self.path}",
                "Expected 'key: value' pairs at the top level.",
            )
        return data

    def load(self) -> SyncSettings:
        """Load and validate settings.

        Raises:
            ConfigurationError: If the file is unreadable or has invalid values
        """
        data = self.read()
        try:
            return SyncSettings(**dict(data))
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid settings in {self.path}", str(e)) from e

    def get(self, key: str) -> Any:
        """Return the effective value of one setting, defaults included."""
        if key not in SyncSettings.model_fields:
            raise ValidationError(
                f"Unknown setting '{key}'",
                f"Known settings: {', '.join(SyncSettings.model_fields)}",
            )
        return getattr(self.load(), key)

    def set(self, key: str, value: Any) -> SyncSettings:
        """Validate and store one setting, keeping the rest of the file intact.

        Raises:
            ValidationError: If the key is unknown or the value is invalid
            ConfigurationError: If the file cannot be read or written
        """
        if key not in SyncSettings.model_fields:
            raise ValidationError(
                f"Unknown setting '{key}'",
                f"Known settings: {', '.join(SyncSettings.model_fields)}",
            )

        data = self.read()
        data[key] = value
        try:
            settings = SyncSettings(**dict(data))
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid value for '{key}': {value}", str(e)) from e

        # Store the normalized form (e.g. upper-cased log level)
        data[key] = getattr(settings, key)
        self.write(data)
        return settings

    def write(self, data: CommentedMap) -> None:
        """Write the settings mapping to disk.

        Raises:
            ConfigurationError: If the file cannot be written
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                self.yaml.dump(data, f)
        except OSError as e:
            logger.error(f"Failed to write settings file: {e}")
            raise ConfigurationError(
                f"Failed to write settings file: {self.path}",
                "Check file system permissions and free disk space",
            ) from e
        logger.info(f"Wrote settings file: {self.path}")
