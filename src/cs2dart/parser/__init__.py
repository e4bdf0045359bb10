# Copyright 2026 cs2dart Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexer and declaration parser for C# source files."""

from cs2dart.parser.lexer import LexerError, Token, TokenType, tokenize
from cs2dart.parser.parser import ParseError, parse_class, parse_type

__all__ = [
    "tokenize",
    "Token",
    "TokenType",
    "LexerError",
    "parse_class",
    "parse_type",
    "ParseError",
]
