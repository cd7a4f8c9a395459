"""Constants for the reactive validation engine.

This file contains only the constants shared across modules.
Rule definitions themselves live in YAML configuration files.
"""

from __future__ import annotations

# Sequencer defaults
DEFAULT_CONTINUE_ON_ERROR = True

# Entities validate explicitly unless implicit validation is switched on
DEFAULT_IMPLICIT_VALIDATION = False

# Configuration file
SUPPORTED_CONFIG_VERSION = "1."
CONF_VERSION = "version"
CONF_PROPERTIES = "properties"
CONF_GROUPS = "groups"

# Rule configuration keys
CONF_TYPE = "type"
CONF_ERROR = "error"
CONF_LEVEL = "level"
CONF_IMPLICIT = "implicit"
CONF_SHOW_ON_PROPERTY = "show_on_property"
CONF_SHOW_IN_SUMMARY = "show_in_summary"
CONF_MIN = "min"
CONF_MAX = "max"
CONF_ALLOWED = "allowed"
CONF_CONDITION = "condition"
CONF_RELATED = "related"
CONF_VARIABLES = "variables"
CONF_AFFECTED = "affected"
CONF_CAUSATIVE = "causative"

# Rule types
RULE_TYPE_RANGE = "range"
RULE_TYPE_ENUM = "enum"
RULE_TYPE_EXPRESSION = "expression"
RULE_TYPE_RELATIONSHIP = "relationship"
RULE_TYPE_CROSS_PROPERTY = "cross_property"
RULE_TYPE_NESTED = "nested"

LEVEL_ERROR = "error"
LEVEL_WARNING = "warning"

DEFAULT_ERROR_MESSAGE = "Validation failed"
NESTED_ERROR_MESSAGE = "{name} has one or more validation errors"
