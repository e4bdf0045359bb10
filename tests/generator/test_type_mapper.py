# Copyright 2026 cs2dart Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the C# to Dart type mapper."""

import pytest

from cs2dart.generator.type_mapper import BYTE_ARRAY_TYPE, PRIMITIVE_TYPE_MAP, map_type, map_type_text
from cs2dart.model import (
    ArrayTypeExpr,
    ListTypeExpr,
    MapTypeExpr,
    NamedTypeExpr,
    NullableTypeExpr,
    PrimitiveType,
    PrimitiveTypeExpr,
    TypeExpression,
)
from cs2dart.parser import ParseError

INT = PrimitiveTypeExpr(primitive=PrimitiveType.INT)
STRING = PrimitiveTypeExpr(primitive=PrimitiveType.STRING)
BYTE = PrimitiveTypeExpr(primitive=PrimitiveType.BYTE)

# ###############
# Primitive table
# ###############


class TestPrimitives:
    @pytest.mark.parametrize(
        ("primitive", "expected"),
        [
            (PrimitiveType.INT, "int"),
            (PrimitiveType.LONG, "int"),
            (PrimitiveType.SHORT, "int"),
            (PrimitiveType.BYTE, "int"),
            (PrimitiveType.BOOL, "bool"),
            (PrimitiveType.DOUBLE, "double"),
            (PrimitiveType.FLOAT, "double"),
            (PrimitiveType.DECIMAL, "double"),
            (PrimitiveType.STRING, "String"),
            (PrimitiveType.DATETIME, "DateTime"),
            (PrimitiveType.DATEONLY, "DateTime"),
            (PrimitiveType.TIMEONLY, "Duration"),
        ],
    )
    def test_primitive_alias(self, primitive: PrimitiveType, expected: str) -> None:
        assert map_type(PrimitiveTypeExpr(primitive=primitive)) == expected

    def test_table_covers_every_primitive(self) -> None:
        assert set(PRIMITIVE_TYPE_MAP) == set(PrimitiveType)

    @pytest.mark.parametrize("name", ["Guid", "OrderStatus", "System.DateTime", "HashSet<int>", "object"])
    def test_named_types_pass_through(self, name: str) -> None:
        assert map_type(NamedTypeExpr(name=name)) == name


# ###############
# Nullability
# ###############


class TestNullable:
    @pytest.mark.parametrize(
        "inner",
        [
            INT,
            STRING,
            NamedTypeExpr(name="Order"),
            ListTypeExpr(element_type=INT),
            ArrayTypeExpr(element_type=NullableTypeExpr(inner_type=STRING)),
            MapTypeExpr(key_type=STRING, value_type=INT),
        ],
    )
    def test_marker_is_appended_once(self, inner: TypeExpression) -> None:
        mapped = map_type(NullableTypeExpr(inner_type=inner))
        assert mapped == map_type(inner) + "?"
        assert not mapped.endswith("??")

    def test_nullable_element_inside_list(self) -> None:
        assert map_type(ListTypeExpr(element_type=NullableTypeExpr(inner_type=INT))) == "List<int?>"

    def test_nullable_value_inside_map(self) -> None:
        expr = MapTypeExpr(key_type=STRING, value_type=NullableTypeExpr(inner_type=STRING))
        assert map_type(expr) == "Map<String, String?>"


# ###############
# Containers
# ###############


class TestContainers:
    def test_array_and_list_map_to_the_same_shape(self) -> None:
        assert map_type(ArrayTypeExpr(element_type=STRING)) == "List<String>"
        assert map_type(ListTypeExpr(element_type=STRING)) == "List<String>"

    def test_nesting_depth_is_preserved(self) -> None:
        expr = ListTypeExpr(element_type=ListTypeExpr(element_type=INT))
        assert map_type(expr) == "List<List<int>>"

    def test_array_of_arrays(self) -> None:
        expr = ArrayTypeExpr(element_type=ArrayTypeExpr(element_type=PrimitiveTypeExpr(primitive=PrimitiveType.LONG)))
        assert map_type(expr) == "List<List<int>>"

    def test_map_with_nested_map_value(self) -> None:
        expr = MapTypeExpr(key_type=STRING, value_type=MapTypeExpr(key_type=INT, value_type=INT))
        assert map_type(expr) == "Map<String, Map<int, int>>"

    def test_map_with_custom_types(self) -> None:
        expr = MapTypeExpr(key_type=NamedTypeExpr(name="Region"), value_type=ListTypeExpr(element_type=STRING))
        assert map_type(expr) == "Map<Region, List<String>>"

    def test_mapping_is_idempotent(self) -> None:
        expr = NullableTypeExpr(inner_type=MapTypeExpr(key_type=STRING, value_type=ArrayTypeExpr(element_type=INT)))
        assert map_type(expr) == map_type(expr)


# ###############
# Byte arrays
# ###############


class TestByteArrays:
    def test_byte_array_maps_to_list_of_int_by_default(self) -> None:
        assert map_type(ArrayTypeExpr(element_type=BYTE)) == "List<int>"

    def test_byte_array_maps_to_uint8list_when_enabled(self) -> None:
        assert map_type(ArrayTypeExpr(element_type=BYTE), byte_arrays_as_uint8list=True) == BYTE_ARRAY_TYPE

    def test_nullable_byte_array_when_enabled(self) -> None:
        expr = NullableTypeExpr(inner_type=ArrayTypeExpr(element_type=BYTE))
        assert map_type(expr, byte_arrays_as_uint8list=True) == "Uint8List?"

    def test_nested_byte_array_when_enabled(self) -> None:
        expr = ListTypeExpr(element_type=ArrayTypeExpr(element_type=BYTE))
        assert map_type(expr, byte_arrays_as_uint8list=True) == "List<Uint8List>"

    def test_list_of_byte_is_not_a_byte_array(self) -> None:
        assert map_type(ListTypeExpr(element_type=BYTE), byte_arrays_as_uint8list=True) == "List<int>"

    def test_array_of_nullable_byte_is_not_a_byte_array(self) -> None:
        expr = ArrayTypeExpr(element_type=NullableTypeExpr(inner_type=BYTE))
        assert map_type(expr, byte_arrays_as_uint8list=True) == "List<int?>"


# ###############
# Text entry point
# ###############


class TestMapTypeText:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("int", "int"),
            ("string?", "String?"),
            ("List<List<int>>", "List<List<int>>"),
            ("Dictionary<string, Dictionary<int, int>>", "Map<String, Map<int, int>>"),
            ("Dictionary<string, List<DateTime?>>?", "Map<String, List<DateTime?>>?"),
            ("decimal[]", "List<double>"),
            ("byte[]", "List<int>"),
            ("Dictionary<string>", "Dictionary<string>"),
            ("HashSet<string>", "HashSet<string>"),
            ("IEnumerable<int>", "IEnumerable<int>"),
            ("CustomerType?", "CustomerType?"),
        ],
    )
    def test_maps_csharp_text(self, text: str, expected: str) -> None:
        assert map_type_text(text) == expected

    def test_byte_array_option(self) -> None:
        assert map_type_text("byte[]?", byte_arrays_as_uint8list=True) == "Uint8List?"

    def test_invalid_text_raises(self) -> None:
        with pytest.raises(ParseError):
            map_type_text("List<int")
