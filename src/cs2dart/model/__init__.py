# Copyright 2026 cs2dart Contributors
# SPDX-License-Identifier: Apache-2.0

"""Descriptor model for C# classes and their property type expressions."""

from cs2dart.model.descriptors import ClassDescriptor, PropertyDescriptor
from cs2dart.model.types import (
    ArrayTypeExpr,
    ListTypeExpr,
    MapTypeExpr,
    NamedTypeExpr,
    NullableTypeExpr,
    PrimitiveType,
    PrimitiveTypeExpr,
    TypeExpression,
    source_text,
)

__all__ = [
    # Type expressions
    "PrimitiveType",
    "PrimitiveTypeExpr",
    "NullableTypeExpr",
    "ArrayTypeExpr",
    "ListTypeExpr",
    "MapTypeExpr",
    "NamedTypeExpr",
    "TypeExpression",
    "source_text",
    # Descriptors
    "PropertyDescriptor",
    "ClassDescriptor",
]
