# Copyright 2026 cs2dart Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generator configuration for cs2dart."""

from cs2dart.config.settings import (
    CONFIG_FILE_NAME,
    ConfigError,
    GeneratorConfig,
    default_config_text,
    load_config,
    parse_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "GeneratorConfig",
    "default_config_text",
    "load_config",
    "parse_config",
]
