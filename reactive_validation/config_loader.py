"""Configuration loader for YAML rule definitions."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Union

import voluptuous as vol
import yaml

from .const import (
    CONF_ERROR,
    CONF_GROUPS,
    CONF_IMPLICIT,
    CONF_LEVEL,
    CONF_PROPERTIES,
    CONF_SHOW_IN_SUMMARY,
    CONF_SHOW_ON_PROPERTY,
    CONF_TYPE,
    CONF_VERSION,
    LEVEL_ERROR,
    LEVEL_WARNING,
    SUPPORTED_CONFIG_VERSION,
)
from .domain.exceptions import RuleConfigurationError
from .validation import RuleRegistry

_LOGGER = logging.getLogger(__name__)

RULE_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_TYPE): str,
        vol.Optional(CONF_ERROR): str,
        vol.Optional(CONF_LEVEL): vol.In([LEVEL_ERROR, LEVEL_WARNING]),
        vol.Optional(CONF_IMPLICIT): bool,
        vol.Optional(CONF_SHOW_ON_PROPERTY): bool,
        vol.Optional(CONF_SHOW_IN_SUMMARY): bool,
    },
    extra=vol.ALLOW_EXTRA,
)

RULE_CONFIG_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_VERSION): vol.Coerce(str),
        vol.Optional(CONF_PROPERTIES, default={}): vol.Any(
            None, {str: vol.Any(None, [RULE_SCHEMA])}
        ),
        vol.Optional(CONF_GROUPS, default=[]): vol.Any(None, [RULE_SCHEMA]),
    }
)

PathLike = Union[str, Path]


def validate_rule_config(config: Any) -> dict[str, Any]:
    """Validate a parsed rule definition.

    Args:
        config: Parsed YAML document

    Returns:
        Validated configuration dict

    Raises:
        RuleConfigurationError: If the configuration is empty, invalid, or
            of an unsupported version
    """
    if not config:
        raise RuleConfigurationError("Configuration file is empty")

    try:
        config = RULE_CONFIG_SCHEMA(config)
    except vol.Invalid as err:
        raise RuleConfigurationError(f"Invalid rule configuration: {err}") from err

    version = config[CONF_VERSION]
    if not version.startswith(SUPPORTED_CONFIG_VERSION):
        raise RuleConfigurationError(
            f"Configuration version {version} not supported. "
            f"Only version {SUPPORTED_CONFIG_VERSION}x is supported."
        )

    return config


def load_rule_config(path: PathLike) -> dict[str, Any]:
    """Load and validate a rule definition file.

    Args:
        path: Path of the YAML file

    Returns:
        Validated configuration dict

    Raises:
        FileNotFoundError: If the file does not exist
        RuleConfigurationError: If the file is not valid YAML or fails validation
    """
    config_file = Path(path)
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    try:
        raw = yaml.safe_load(config_file.read_text())
    except yaml.YAMLError as err:
        raise RuleConfigurationError(f"Invalid YAML: {err}") from err

    config = validate_rule_config(raw)

    _LOGGER.info(
        "Loaded rule configuration %s: %d properties, %d groups",
        config_file.name,
        len(config.get(CONF_PROPERTIES) or {}),
        len(config.get(CONF_GROUPS) or []),
    )
    return config


async def async_load_rule_config(path: PathLike) -> dict[str, Any]:
    """Load a rule definition file without blocking the event loop.

    The file is read in the default executor.
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, load_rule_config, path)


def load_rule_registry(path: PathLike) -> RuleRegistry:
    """Load a rule definition file into a RuleRegistry.

    Example:
        >>> class AuctionBid(ValidatableEntity):
        ...     validation_rules = load_rule_registry("auction_bid.yaml")
    """
    return RuleRegistry.from_config(load_rule_config(path))
