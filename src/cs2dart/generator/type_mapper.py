# Copyright 2026 cs2dart Contributors
# SPDX-License-Identifier: Apache-2.0

"""Translation of C# type expressions into Dart type expressions."""

import logging

from cs2dart.model.types import (
    ArrayTypeExpr,
    ListTypeExpr,
    MapTypeExpr,
    NullableTypeExpr,
    PrimitiveType,
    PrimitiveTypeExpr,
    TypeExpression,
)

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

# Dart counterpart of every C# built-in the parser recognizes.
PRIMITIVE_TYPE_MAP: dict[PrimitiveType, str] = {
    PrimitiveType.INT: "int",
    PrimitiveType.LONG: "int",
    PrimitiveType.SHORT: "int",
    PrimitiveType.BYTE: "int",
    PrimitiveType.BOOL: "bool",
    PrimitiveType.DOUBLE: "double",
    PrimitiveType.FLOAT: "double",
    PrimitiveType.DECIMAL: "double",
    PrimitiveType.STRING: "String",
    PrimitiveType.DATETIME: "DateTime",
    PrimitiveType.DATEONLY: "DateTime",
    PrimitiveType.TIMEONLY: "Duration",
}

BYTE_ARRAY_TYPE = "Uint8List"


def map_type(expr: TypeExpression, *, byte_arrays_as_uint8list: bool = False) -> str:
    """Map a C# type expression to its Dart spelling.

    Rules, in precedence order:

    1. ``T?`` maps ``T`` and appends ``?``.
    2. ``T[]`` becomes ``List<T>``.
    3. ``List<T>`` becomes ``List<T>``.
    4. ``Dictionary<K, V>`` becomes ``Map<K, V>``.
    5. Built-ins are looked up in PRIMITIVE_TYPE_MAP; every other name is
       returned unchanged.

    Because rule 2 wins over the lookup, ``byte[]`` becomes ``List<int>``.
    Pass ``byte_arrays_as_uint8list=True`` to map it to ``Uint8List`` instead.

    Never raises.
    """
    if isinstance(expr, NullableTypeExpr):
        return map_type(expr.inner_type, byte_arrays_as_uint8list=byte_arrays_as_uint8list) + "?"
    if byte_arrays_as_uint8list and _is_byte_array(expr):
        return BYTE_ARRAY_TYPE
    if isinstance(expr, (ArrayTypeExpr, ListTypeExpr)):
        element = map_type(expr.element_type, byte_arrays_as_uint8list=byte_arrays_as_uint8list)
        return f"List<{element}>"
    if isinstance(expr, MapTypeExpr):
        key = map_type(expr.key_type, byte_arrays_as_uint8list=byte_arrays_as_uint8list)
        value = map_type(expr.value_type, byte_arrays_as_uint8list=byte_arrays_as_uint8list)
        return f"Map<{key}, {value}>"
    if isinstance(expr, PrimitiveTypeExpr):
        return PRIMITIVE_TYPE_MAP[expr.primitive]
    logger.debug("Passing through unrecognized type %s", expr.name)
    return expr.name


def map_type_text(text: str, *, byte_arrays_as_uint8list: bool = False) -> str:
    """Parse a C# type string and map it to Dart.

    Raises:
        LexerError: If the text contains unterminated literals.
        ParseError: If the text is not a single C# type.
    """
    from cs2dart.parser.parser import parse_type

    return map_type(parse_type(text), byte_arrays_as_uint8list=byte_arrays_as_uint8list)


# ################
# Implementation
# ################


def _is_byte_array(expr: TypeExpression) -> bool:
    return isinstance(expr, ArrayTypeExpr) and expr.element_type == PrimitiveTypeExpr(primitive=PrimitiveType.BYTE)
