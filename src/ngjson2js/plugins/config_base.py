# src/ngjson2js/plugins/config_base.py
"""Base class for typed plugin configurations.

Plugins inherit from PluginConfig to get:
- Strict validation (reject unknown fields)
- Immutability after construction
- A factory method with clear error messages

Example usage:
    class MyTransformConfig(PluginConfig):
        prefix: str | None = None

    cfg = MyTransformConfig.from_dict(options)
"""

from typing import Any, Self

from pydantic import BaseModel, ValidationError


class PluginConfigError(Exception):
    """Raised when plugin configuration is invalid."""

    pass


class PluginConfig(BaseModel):
    """Base class for typed plugin configurations.

    Unknown fields are rejected, and instances are frozen so options are
    validated once and passed around immutably afterwards.
    """

    model_config = {"extra": "forbid", "frozen": True, "populate_by_name": True}

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> Self:
        """Create config from dict with clear error on validation failure.

        Args:
            config: Dictionary of configuration values.

        Returns:
            Validated configuration instance.

        Raises:
            PluginConfigError: If configuration is invalid.
        """
        if not isinstance(config, dict):
            raise PluginConfigError(f"Invalid configuration for {cls.__name__}: config must be a dict, got {type(config).__name__}.")

        try:
            return cls.model_validate(dict(config))
        except ValidationError as e:
            raise PluginConfigError(f"Invalid configuration for {cls.__name__}: {e}") from e
