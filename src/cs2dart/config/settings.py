# Copyright 2026 cs2dart Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the generator configuration file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".cs2dart.yaml"


class ConfigError(Exception):
    """Raised when a configuration file is invalid or cannot be loaded."""


@dataclass
class GeneratorConfig:
    """Options controlling Dart model generation.

    The defaults reproduce the historical output exactly.

    Attributes:
        class_suffix: Appended to the C# class name to form the Dart class name.
        byte_arrays_as_uint8list: Map ``byte[]`` to ``Uint8List`` instead of ``List<int>``.
        imports: Package URIs emitted as ``import`` directives above the class.
        emit_part_directive: Emit ``part '<output>.g.dart';`` for json_serializable.
    """

    class_suffix: str = "Model"
    byte_arrays_as_uint8list: bool = False
    imports: list[str] = field(default_factory=list)
    emit_part_directive: bool = False


def load_config(path: Path) -> GeneratorConfig:
    """Load and parse a generator configuration file.

    Args:
        path: Path to the `.cs2dart.yaml` file.

    Returns:
        A GeneratorConfig instance populated from the file.

    Raises:
        ConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {exc}") from exc

    return parse_config(text, source_label=str(path))


def parse_config(text: str, source_label: str = "<string>") -> GeneratorConfig:
    """Parse configuration YAML text into a GeneratorConfig.

    An empty document yields the defaults.

    Args:
        text: Raw YAML content.
        source_label: Human-readable label used in error messages (e.g. the file path).

    Raises:
        ConfigError: If the YAML is invalid, has unknown keys, or has wrongly typed values.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return GeneratorConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: config must be a YAML mapping")

    unknown = sorted(str(key) for key in data if key not in _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"{source_label}: unknown key(s): {', '.join(unknown)}")

    config = GeneratorConfig()
    if "class-suffix" in data:
        config.class_suffix = _require_type(data, "class-suffix", str, source_label)
    if "byte-arrays-as-uint8list" in data:
        config.byte_arrays_as_uint8list = _require_type(data, "byte-arrays-as-uint8list", bool, source_label)
    if "emit-part-directive" in data:
        config.emit_part_directive = _require_type(data, "emit-part-directive", bool, source_label)
    if "imports" in data:
        raw_imports = data["imports"]
        if not isinstance(raw_imports, list) or not all(isinstance(uri, str) for uri in raw_imports):
            raise ConfigError(f"{source_label}: 'imports' must be a list of strings")
        config.imports = list(raw_imports)
    return config


def default_config_text() -> str:
    """Return the commented YAML written by ``cs2dart init``."""
    return (
        "# cs2dart configuration\n"
        "# Options for generating Dart models from C# classes.\n"
        "\n"
        "class-suffix: Model\n"
        "byte-arrays-as-uint8list: false\n"
        "emit-part-directive: false\n"
        "imports: []\n"
    )


# ################
# Implementation
# ################

_KNOWN_KEYS = frozenset({"class-suffix", "byte-arrays-as-uint8list", "imports", "emit-part-directive"})


def _require_type(mapping: dict[str, object], key: str, expected: type, source_label: str):
    """Return ``mapping[key]``, raising ConfigError unless it is an instance of *expected*."""
    value = mapping[key]
    if not isinstance(value, expected):
        raise ConfigError(f"{source_label}: '{key}' must be a {expected.__name__}")
    return value
