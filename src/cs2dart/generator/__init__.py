# Copyright 2026 cs2dart Contributors
# SPDX-License-Identifier: Apache-2.0

"""Dart model generation: type mapping, class emission, and the file pipeline."""

from cs2dart.generator.build import GenerationResult, GeneratorError, annotate, generate_file, generate_model
from cs2dart.generator.template import DEFAULT_CLASS_SUFFIX, dart_class_name, dart_field_name, emit_model
from cs2dart.generator.type_mapper import BYTE_ARRAY_TYPE, PRIMITIVE_TYPE_MAP, map_type, map_type_text

__all__ = [
    "map_type",
    "map_type_text",
    "PRIMITIVE_TYPE_MAP",
    "BYTE_ARRAY_TYPE",
    "emit_model",
    "dart_class_name",
    "dart_field_name",
    "DEFAULT_CLASS_SUFFIX",
    "annotate",
    "generate_model",
    "generate_file",
    "GenerationResult",
    "GeneratorError",
]
