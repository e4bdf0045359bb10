# Copyright 2026 cs2dart Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the cs2dart command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from cs2dart.config.settings import CONFIG_FILE_NAME, ConfigError, GeneratorConfig, default_config_text, load_config
from cs2dart.generator.build import GeneratorError, generate_file

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the cs2dart CLI."""
    parser = argparse.ArgumentParser(
        prog="cs2dart",
        description="cs2dart: generate Dart data-model classes from C# classes",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug diagnostics to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # generate subcommand
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate a Dart model from a C# class",
        description="Read the first class in a C# file and write the equivalent Dart model class.",
    )
    generate_parser.add_argument("input", help="C# source file")
    generate_parser.add_argument("output", help="Dart file to write")
    generate_parser.add_argument(
        "--config",
        default=None,
        help=f"Configuration file (default: {CONFIG_FILE_NAME} next to the input file, if present)",
    )

    # map-type subcommand
    map_type_parser = subparsers.add_parser(
        "map-type",
        help="Print the Dart type for a C# type",
        description="Map a single C# type expression, e.g. 'Dictionary<string, int?>', to Dart.",
    )
    map_type_parser.add_argument("type", help="C# type expression")
    map_type_parser.add_argument(
        "--uint8list",
        action="store_true",
        help="Map byte[] to Uint8List instead of List<int>",
    )

    # init subcommand
    init_parser = subparsers.add_parser(
        "init",
        help="Write a default configuration file",
        description=f"Create a {CONFIG_FILE_NAME} file with the default options.",
    )
    init_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to write the configuration file to (default: current directory)",
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "generate":
        return _cmd_generate(args)
    if args.command == "map-type":
        return _cmd_map_type(args)
    if args.command == "init":
        return _cmd_init(args)
    return 0


def _cmd_generate(args: argparse.Namespace) -> int:
    """Handle the generate subcommand."""
    input_path = Path(args.input)
    output_path = Path(args.output)

    if not input_path.is_file():
        print(f"Error: input file '{input_path}' does not exist.", file=sys.stderr)
        return 1

    if args.config is not None:
        config_path: Path | None = Path(args.config)
    else:
        candidate = input_path.resolve().parent / CONFIG_FILE_NAME
        config_path = candidate if candidate.exists() else None

    config = GeneratorConfig()
    if config_path is not None:
        try:
            config = load_config(config_path)
        except ConfigError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    try:
        result = generate_file(input_path, output_path, config)
    except GeneratorError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if result is None:
        print("No class found in the input file.")
        return 0

    if args.verbose:
        print(
            f"Generated {result.dart_class_name} from class {result.class_name} "
            f"({result.property_count} properties)."
        )
    print(f"Dart model generated at: {output_path}")
    return 0


def _cmd_map_type(args: argparse.Namespace) -> int:
    """Handle the map-type subcommand."""
    from cs2dart.generator.type_mapper import map_type_text
    from cs2dart.parser.lexer import LexerError
    from cs2dart.parser.parser import ParseError

    try:
        print(map_type_text(args.type, byte_arrays_as_uint8list=args.uint8list))
    except (LexerError, ParseError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    """Handle the init subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    config_file = directory / CONFIG_FILE_NAME

    if config_file.exists():
        print(f"Error: configuration already exists at '{config_file}'.", file=sys.stderr)
        return 1

    config_file.write_text(default_config_text(), encoding="utf-8")
    print(f"Wrote default configuration to '{config_file}'.")
    return 0
