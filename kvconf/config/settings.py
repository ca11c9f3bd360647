"""Parser settings loader.

Provides validated limits for the key=value parser, with defaults matching
the fixed-capacity buffers of the reference format and optional YAML
overrides.
"""
import codecs
import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigLoadError

logger = logging.getLogger(__name__)

DEFAULT_MAX_LINE_LENGTH = 512
DEFAULT_MAX_VALUE_LENGTH = 256


class ParserSettings(BaseModel):
    """Limits and markers used while parsing a config file.

    A length limit of ``None`` lifts that limit entirely.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    max_line_length: Optional[int] = Field(default=DEFAULT_MAX_LINE_LENGTH, ge=1)
    max_value_length: Optional[int] = Field(default=DEFAULT_MAX_VALUE_LENGTH, ge=0)
    comment_marker: str = Field(default="#", min_length=1, max_length=1)
    encoding: str = "utf-8"

    @field_validator("comment_marker")
    @classmethod
    def validate_comment_marker(cls, v: str) -> str:
        """A comment marker of '=' or whitespace would swallow real lines."""
        if v == "=" or v.isspace():
            raise ValueError(f"comment_marker cannot be {v!r}")
        return v

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Reject encodings Python does not know about."""
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {v}") from e
        return v


class SettingsLoader:
    """Settings loader with validation and default fallbacks."""

    def __init__(self, settings_path: Optional[Path] = None):
        """Initialize settings loader.

        Args:
            settings_path: Path to a YAML settings file. Defaults to kvconf.yaml
        """
        if settings_path is None:
            self.settings_path = Path("kvconf.yaml")
        else:
            self.settings_path = Path(settings_path)

        logger.debug("Settings loader initialized with path: %s", self.settings_path)

    def load_settings(self) -> ParserSettings:
        """Load and validate parser settings from file.

        Returns:
            Validated ParserSettings instance

        Raises:
            ConfigLoadError: If the file is unreadable, not YAML, or invalid
        """
        if not self.settings_path.exists():
            logger.warning("Settings file not found: %s, using defaults", self.settings_path)
            return ParserSettings()

        logger.info("Loading parser settings from: %s", self.settings_path)

        try:
            with open(self.settings_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            error_msg = f"Invalid YAML in settings file: {e}"
            logger.error(error_msg)
            raise ConfigLoadError(error_msg) from e
        except OSError as e:
            error_msg = f"Could not read settings file {self.settings_path}: {e}"
            logger.error(error_msg)
            raise ConfigLoadError(error_msg) from e

        if data is None:
            logger.warning("Settings file is empty, using defaults")
            return ParserSettings()

        if not isinstance(data, dict):
            error_msg = f"Settings file must contain a mapping, got {type(data).__name__}"
            logger.error(error_msg)
            raise ConfigLoadError(error_msg)

        try:
            settings = ParserSettings.model_validate(data)
        except ValidationError as e:
            error_msg = f"Settings validation failed: {e}"
            logger.error(error_msg)
            raise ConfigLoadError(error_msg) from e

        logger.info("Parser settings loaded and validated successfully")
        return settings
