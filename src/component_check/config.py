"""
Configuration for component checks.

Settings are read from ``COMPONENT_*`` environment variables (and an
optional ``.env`` file). The module reference is also accepted under the
legacy ``componentModule`` variable.
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core import ComponentShape
from .errors import ConfigurationError
from .loader import DEFAULT_HOOK_TIMEOUT
from .validator import DEFAULT_PROBE_PREFIX

logger = logging.getLogger(__name__)

MODULE_ENV_VAR = "componentModule"


class ComponentSettings(BaseSettings):
    """Settings for one load-and-validate cycle."""

    model_config = SettingsConfigDict(
        env_prefix="COMPONENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    module: str | None = Field(
        default=None,
        validation_alias=AliasChoices("COMPONENT_MODULE", MODULE_ENV_VAR),
        description="Reference of the component module to load",
    )
    search_paths: list[str] = Field(
        default_factory=lambda: ["."],
        description="Directories searched for component modules",
    )
    props: dict[str, Any] = Field(
        default_factory=dict, description="Configuration handed to the component"
    )
    props_file: Path | None = Field(
        default=None, description="YAML file with component props"
    )
    shape: ComponentShape | None = Field(
        default=None, description="Construction shape; classified when unset"
    )
    hook_timeout: float | None = Field(
        default=DEFAULT_HOOK_TIMEOUT,
        description="Upper bound in seconds for each lifecycle hook",
    )
    probe_prefix: str | None = Field(
        default=DEFAULT_PROBE_PREFIX,
        description="Name prefix of components whose start/end are exercised",
    )

    @field_validator("hook_timeout")
    @classmethod
    def validate_hook_timeout(cls, v):
        if v is not None and v <= 0:
            return None
        return v

    @field_validator("probe_prefix")
    @classmethod
    def validate_probe_prefix(cls, v):
        return v or None

    def require_module(self) -> str:
        """Return the module reference or fail before any loading."""
        if not self.module:
            raise ConfigurationError(f"environment variable: {MODULE_ENV_VAR}")
        return self.module

    def resolved_props(self) -> dict[str, Any]:
        """Props from ``props_file`` overlaid with ``props``."""
        merged: dict[str, Any] = {}
        if self.props_file is not None:
            merged.update(load_props_file(self.props_file))
        merged.update(self.props)
        return merged


def load_props_file(path: Path) -> dict[str, Any]:
    """Load component props from a YAML file."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"props file {path}: {e}", cause=e) from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"props file {path}: expected a mapping")
    logger.debug(f"Loaded {len(data)} props from {path}")
    return data
