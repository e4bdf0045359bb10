# Copyright 2026 cs2dart Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the generator configuration loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from cs2dart.config.settings import (
    CONFIG_FILE_NAME,
    ConfigError,
    GeneratorConfig,
    default_config_text,
    load_config,
    parse_config,
)

# ###############
# Defaults
# ###############


class TestDefaults:
    def test_dataclass_defaults(self) -> None:
        config = GeneratorConfig()
        assert config.class_suffix == "Model"
        assert config.byte_arrays_as_uint8list is False
        assert config.imports == []
        assert config.emit_part_directive is False

    def test_imports_are_not_shared(self) -> None:
        first = GeneratorConfig()
        first.imports.append("package:a/a.dart")
        assert GeneratorConfig().imports == []

    @pytest.mark.parametrize("text", ["", "\n", "# only a comment\n"])
    def test_empty_document_gives_defaults(self, text: str) -> None:
        assert parse_config(text) == GeneratorConfig()

    def test_default_config_text_parses_to_defaults(self) -> None:
        assert parse_config(default_config_text()) == GeneratorConfig()


# ###############
# Valid configurations
# ###############


class TestParseConfig:
    def test_all_keys(self) -> None:
        text = (
            "class-suffix: Dto\n"
            "byte-arrays-as-uint8list: true\n"
            "emit-part-directive: true\n"
            "imports:\n"
            "  - package:equatable/equatable.dart\n"
            "  - package:json_annotation/json_annotation.dart\n"
        )
        config = parse_config(text)
        assert config == GeneratorConfig(
            class_suffix="Dto",
            byte_arrays_as_uint8list=True,
            imports=[
                "package:equatable/equatable.dart",
                "package:json_annotation/json_annotation.dart",
            ],
            emit_part_directive=True,
        )

    def test_partial_config_keeps_other_defaults(self) -> None:
        config = parse_config("class-suffix: Entity\n")
        assert config.class_suffix == "Entity"
        assert config.byte_arrays_as_uint8list is False
        assert config.imports == []

    def test_empty_suffix_is_allowed(self) -> None:
        assert parse_config("class-suffix: ''\n").class_suffix == ""


# ###############
# Invalid configurations
# ###############


class TestParseConfigErrors:
    def test_invalid_yaml(self) -> None:
        with pytest.raises(ConfigError, match="Invalid YAML in cfg.yaml"):
            parse_config("class-suffix: [unclosed\n", source_label="cfg.yaml")

    @pytest.mark.parametrize("text", ["- a\n- b\n", "just a string\n", "42\n"])
    def test_document_must_be_mapping(self, text: str) -> None:
        with pytest.raises(ConfigError, match="must be a YAML mapping"):
            parse_config(text)

    def test_unknown_keys_are_listed(self) -> None:
        with pytest.raises(ConfigError, match="unknown key\\(s\\): color, suffix"):
            parse_config("suffix: Dto\ncolor: red\n")

    @pytest.mark.parametrize(
        ("text", "message"),
        [
            ("class-suffix: 3\n", "'class-suffix' must be a str"),
            ("byte-arrays-as-uint8list: maybe\n", "'byte-arrays-as-uint8list' must be a bool"),
            ("emit-part-directive: 1\n", "'emit-part-directive' must be a bool"),
        ],
    )
    def test_wrong_scalar_types(self, text: str, message: str) -> None:
        with pytest.raises(ConfigError, match=message):
            parse_config(text)

    @pytest.mark.parametrize("text", ["imports: package:a/a.dart\n", "imports:\n  - 1\n"])
    def test_imports_must_be_string_list(self, text: str) -> None:
        with pytest.raises(ConfigError, match="'imports' must be a list of strings"):
            parse_config(text)

    def test_error_message_names_source(self) -> None:
        with pytest.raises(ConfigError, match="^settings.yaml: "):
            parse_config("bogus: 1\n", source_label="settings.yaml")


# ###############
# load_config
# ###############


class TestLoadConfig:
    def test_loads_file(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILE_NAME
        path.write_text("class-suffix: View\n", encoding="utf-8")
        assert load_config(path).class_suffix == "View"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Config file not found"):
            load_config(tmp_path / CONFIG_FILE_NAME)

    def test_directory_is_unreadable(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read config file"):
            load_config(tmp_path)

    def test_errors_are_labelled_with_path(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILE_NAME
        path.write_text("unexpected: true\n", encoding="utf-8")
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        assert str(path) in str(exc_info.value)
