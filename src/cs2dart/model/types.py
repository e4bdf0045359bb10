# Copyright 2026 cs2dart Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type expression representations for C# property declarations."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class PrimitiveType(Enum):
    """C# built-in types that have a fixed Dart counterpart."""

    INT = "int"
    LONG = "long"
    SHORT = "short"
    BYTE = "byte"
    BOOL = "bool"
    DOUBLE = "double"
    FLOAT = "float"
    DECIMAL = "decimal"
    STRING = "string"
    DATETIME = "DateTime"
    DATEONLY = "DateOnly"
    TIMEONLY = "TimeOnly"


class PrimitiveTypeExpr(BaseModel):
    """Reference to a C# built-in type."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["primitive"] = "primitive"
    primitive: PrimitiveType


class NullableTypeExpr(BaseModel):
    """A type carrying the trailing `?` marker.

    A wrapper cannot directly wrap another wrapper. It may appear at any
    level, e.g. `List<int?>`, `int?[]` or `int[]?`.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["nullable"] = "nullable"
    inner_type: TypeExpression

    @field_validator("inner_type")
    @classmethod
    def _reject_nested_nullable(cls, value: TypeExpression) -> TypeExpression:
        if isinstance(value, NullableTypeExpr):
            raise ValueError("nullable marker cannot be applied twice")
        return value


class ArrayTypeExpr(BaseModel):
    """Reference to a single-rank array type `T[]`."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["array"] = "array"
    element_type: TypeExpression


class ListTypeExpr(BaseModel):
    """Reference to the generic `List<T>` container."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["list"] = "list"
    element_type: TypeExpression


class MapTypeExpr(BaseModel):
    """Reference to the generic `Dictionary<K, V>` container."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["map"] = "map"
    key_type: TypeExpression
    value_type: TypeExpression


class NamedTypeExpr(BaseModel):
    """Any other type, kept as its verbatim C# text (custom types, enums, other generics)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["named"] = "named"
    name: str


# A property type expression. The `kind` discriminator keeps validation from
# dicts unambiguous.
TypeExpression = Annotated[
    PrimitiveTypeExpr | NullableTypeExpr | ArrayTypeExpr | ListTypeExpr | MapTypeExpr | NamedTypeExpr,
    _Field(discriminator="kind"),
]


def source_text(expr: TypeExpression) -> str:
    """Render a type expression back to normalized C# text.

    Generic arguments are separated by ``", "``; no other whitespace is emitted.
    """
    if isinstance(expr, NullableTypeExpr):
        return source_text(expr.inner_type) + "?"
    if isinstance(expr, ArrayTypeExpr):
        return source_text(expr.element_type) + "[]"
    if isinstance(expr, ListTypeExpr):
        return f"List<{source_text(expr.element_type)}>"
    if isinstance(expr, MapTypeExpr):
        return f"Dictionary<{source_text(expr.key_type)}, {source_text(expr.value_type)}>"
    if isinstance(expr, PrimitiveTypeExpr):
        return expr.primitive.value
    return expr.name


# Resolve forward references for models that use TypeExpression.
NullableTypeExpr.model_rebuild()
ArrayTypeExpr.model_rebuild()
ListTypeExpr.model_rebuild()
MapTypeExpr.model_rebuild()
