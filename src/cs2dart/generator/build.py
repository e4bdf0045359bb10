# Copyright 2026 cs2dart Contributors
# SPDX-License-Identifier: Apache-2.0

"""End-to-end generation: C# source in, Dart model source out.

The pipeline is parse -> annotate -> emit. Parsing and file I/O live here;
the type mapper and the template stay pure. Separate calls share no state,
so batches of files can be generated concurrently.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from cs2dart.config.settings import GeneratorConfig
from cs2dart.generator.template import dart_class_name, emit_model
from cs2dart.generator.type_mapper import map_type
from cs2dart.model.descriptors import ClassDescriptor
from cs2dart.parser.lexer import LexerError
from cs2dart.parser.parser import ParseError, parse_class

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class GeneratorError(Exception):
    """Raised when a file cannot be generated.

    Covers unreadable input, unwritable output, and lexer or parse errors in
    the C# source.
    """


@dataclass(frozen=True)
class GenerationResult:
    """Summary of one generated file."""

    class_name: str
    dart_class_name: str
    property_count: int
    output_path: Path


def annotate(descriptor: ClassDescriptor, config: GeneratorConfig | None = None) -> ClassDescriptor:
    """Return a copy of *descriptor* with every property's Dart type filled in."""
    config = config or GeneratorConfig()
    properties = []
    for prop in descriptor.properties:
        target = map_type(prop.source_type, byte_arrays_as_uint8list=config.byte_arrays_as_uint8list)
        logger.debug("%s.%s: %s", descriptor.name, prop.name, target)
        properties.append(prop.model_copy(update={"target_type": target}))
    return descriptor.model_copy(update={"properties": tuple(properties)})


def generate_model(
    source: str,
    config: GeneratorConfig | None = None,
    *,
    part_file: str | None = None,
) -> str | None:
    """Generate Dart model source text from C# source text.

    Args:
        source: The full text of a .cs file.
        config: Generation options; defaults reproduce the historical output.
        part_file: File name for the ``part`` directive. Only used when
            ``config.emit_part_directive`` is set.

    Returns:
        The Dart source, or None if *source* declares no class.

    Raises:
        LexerError: If the source contains unterminated literals or comments.
        ParseError: If the class declaration is syntactically invalid.
    """
    config = config or GeneratorConfig()
    descriptor = parse_class(source)
    if descriptor is None:
        return None
    return _render(descriptor, config, part_file)


def generate_file(
    input_path: Path,
    output_path: Path,
    config: GeneratorConfig | None = None,
) -> GenerationResult | None:
    """Generate a Dart model file from a C# source file.

    Parent directories of *output_path* are created as needed. When the
    configuration asks for a ``part`` directive, the part file is named after
    the output file (``user_model.dart`` -> ``user_model.g.dart``).

    Returns:
        A GenerationResult, or None if the input declares no class (nothing
        is written in that case).

    Raises:
        GeneratorError: If the input cannot be read or parsed, or the output
            cannot be written.
    """
    config = config or GeneratorConfig()
    try:
        source = input_path.read_text(encoding="utf-8-sig")
    except OSError as exc:
        raise GeneratorError(f"Cannot read input file '{input_path}': {exc}") from exc

    try:
        descriptor = parse_class(source)
    except (LexerError, ParseError) as exc:
        raise GeneratorError(f"{input_path}: {exc}") from exc
    if descriptor is None:
        return None

    dart_source = _render(descriptor, config, output_path.with_suffix("").name + ".g.dart")

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(dart_source, encoding="utf-8")
    except OSError as exc:
        raise GeneratorError(f"Cannot write output file '{output_path}': {exc}") from exc

    logger.debug("Wrote %s", output_path)
    return GenerationResult(
        class_name=descriptor.name,
        dart_class_name=dart_class_name(descriptor.name, config.class_suffix),
        property_count=len(descriptor.properties),
        output_path=output_path,
    )


# ################
# Implementation
# ################


def _render(descriptor: ClassDescriptor, config: GeneratorConfig, part_file: str | None) -> str:
    return emit_model(
        annotate(descriptor, config),
        class_suffix=config.class_suffix,
        imports=config.imports,
        part_file=part_file if config.emit_part_directive else None,
    )
