# Copyright 2026 cs2dart Contributors
# SPDX-License-Identifier: Apache-2.0

"""Class and property descriptors consumed by the Dart model generator."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

from cs2dart.model.types import NullableTypeExpr, TypeExpression

# ###############
# Public Interface
# ###############


class PropertyDescriptor(BaseModel):
    """A single C# property as seen by the generator.

    Attributes:
        name: The property identifier exactly as declared; doubles as the JSON key.
        source_type: The declared C# type expression.
        is_required: True when the `required` modifier is present or the type is
            not nullable.
        is_nullable: True when the outermost type expression carries `?`.
        target_type: The mapped Dart type, set once the descriptor is annotated.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    source_type: TypeExpression
    is_required: bool
    is_nullable: bool
    target_type: str | None = None

    @classmethod
    def from_declaration(
        cls,
        name: str,
        source_type: TypeExpression,
        has_required_modifier: bool = False,
    ) -> PropertyDescriptor:
        """Build a descriptor, deriving nullability and requiredness from the declaration."""
        is_nullable = isinstance(source_type, NullableTypeExpr)
        return cls(
            name=name,
            source_type=source_type,
            is_required=has_required_modifier or not is_nullable,
            is_nullable=is_nullable,
        )


class ClassDescriptor(BaseModel):
    """A C# class reduced to its name and ordered property list."""

    model_config = ConfigDict(frozen=True)

    name: str
    properties: tuple[PropertyDescriptor, ...] = _Field(default_factory=tuple)
