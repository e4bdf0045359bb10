# Copyright 2026 cs2dart Contributors
# SPDX-License-Identifier: Apache-2.0

"""Dart model class emission.

The class text is assembled from independent sections. Each section is a
tuple of lines produced from the property list in declaration order; the
sections are concatenated at the end. Field declarations, constructor
parameters and the ``props`` list therefore always agree on ordering, which
``json_serializable`` relies on when it generates the companion
``_$<Class>FromJson`` and ``_$<Class>ToJson`` functions.
"""

from collections.abc import Sequence

from cs2dart.generator.type_mapper import map_type
from cs2dart.model.descriptors import ClassDescriptor, PropertyDescriptor

# ###############
# Public Interface
# ###############

DEFAULT_CLASS_SUFFIX = "Model"


def dart_class_name(name: str, class_suffix: str = DEFAULT_CLASS_SUFFIX) -> str:
    """Return the Dart class name for a C# class name."""
    return name + class_suffix


def dart_field_name(name: str) -> str:
    """Lower-case the first character of a property name.

    The rest of the name is untouched, so ``URL`` becomes ``uRL``.
    """
    return name[:1].lower() + name[1:]


def emit_model(
    descriptor: ClassDescriptor,
    *,
    class_suffix: str = DEFAULT_CLASS_SUFFIX,
    imports: Sequence[str] = (),
    part_file: str | None = None,
) -> str:
    """Emit the Dart source text of a data-model class.

    Args:
        descriptor: The class to emit. Properties without a ``target_type``
            are mapped with the default mapping options.
        class_suffix: Appended to the C# class name to form the Dart class name.
        imports: Package URIs emitted as ``import`` directives before the class.
        part_file: When given, a ``part`` directive for this file name follows
            the imports.

    Returns:
        The complete class text, terminated by a newline.
    """
    dart_name = dart_class_name(descriptor.name, class_suffix)
    properties = descriptor.properties
    sections = (
        _preamble(imports, part_file),
        _header(dart_name),
        _fields(properties),
        _constructor(dart_name, properties),
        _from_json(dart_name),
        _to_json(dart_name),
        _update_jsonable(dart_name),
        _props(properties),
        ("}",),
    )
    return "\n".join(line for section in sections for line in section) + "\n"


# ################
# Implementation
# ################


def _target_type(prop: PropertyDescriptor) -> str:
    if prop.target_type is not None:
        return prop.target_type
    return map_type(prop.source_type)


def _preamble(imports: Sequence[str], part_file: str | None) -> tuple[str, ...]:
    lines = tuple(f"import '{uri}';" for uri in imports)
    if part_file is not None:
        lines += (f"part '{part_file}';",)
    if lines:
        lines += ("",)
    return lines


def _header(dart_name: str) -> tuple[str, ...]:
    return (
        "@JsonSerializable()",
        f"class {dart_name} extends Equatable implements Jsonable {{",
    )


def _fields(properties: Sequence[PropertyDescriptor]) -> tuple[str, ...]:
    """One ``@JsonKey`` line keyed by the original property name, then the field."""
    lines: tuple[str, ...] = ()
    for prop in properties:
        lines += (
            f'  @JsonKey(name: "{prop.name}")',
            f"  final {_target_type(prop)} {dart_field_name(prop.name)};",
        )
    return lines


def _constructor(dart_name: str, properties: Sequence[PropertyDescriptor]) -> tuple[str, ...]:
    """Named-parameter constructor; optional parameters get no default value."""
    params = tuple(
        f"    {'required this.' if prop.is_required else 'this.'}{dart_field_name(prop.name)},"
        for prop in properties
    )
    return ("", f"  {dart_name}({{", *params, "  });")


def _from_json(dart_name: str) -> tuple[str, ...]:
    return (
        "",
        f"  factory {dart_name}.fromJson(Map<String, dynamic> json) =>",
        f"      _${dart_name}FromJson(json);",
    )


def _to_json(dart_name: str) -> tuple[str, ...]:
    return ("", f"  Map<String, dynamic> toJson() => _${dart_name}ToJson(this);")


def _update_jsonable(dart_name: str) -> tuple[str, ...]:
    """Copy-with-one-key-replaced via a JSON round trip.

    ``as T`` is a checked cast in Dart: asking for a type other than the
    model's own throws a ``TypeError`` at the call site.
    """
    return (
        "",
        "  @override",
        "  T updateJsonable<T extends Jsonable>(",
        "    String columnName,",
        "    dynamic newCellValue,",
        "  ) {",
        "    Map<String, dynamic> updatedData = Map<String, dynamic>.from(toJson());",
        "    updatedData[columnName] = newCellValue;",
        f"    return {dart_name}.fromJson(updatedData) as T;",
        "  }",
    )


def _props(properties: Sequence[PropertyDescriptor]) -> tuple[str, ...]:
    items = tuple(f"    {dart_field_name(prop.name)}," for prop in properties)
    return ("", "  @override", "  List<Object?> get props => [", *items, "  ];")
