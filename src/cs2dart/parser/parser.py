# Copyright 2026 cs2dart Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for C# class declarations.

Only the first class declaration in a file is read, and only its direct
property members contribute to the resulting descriptor. Everything else
(method bodies, initializers, nested types, attributes) is skipped by
balanced-bracket scanning rather than parsed.
"""

import logging

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
from cs2dart.parser.lexer import Token, TokenType, tokenize

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class ParseError(Exception):
    """Raised when the parser encounters a syntactically invalid construct.

    Attributes:
        line: 1-based line number of the error.
        column: 1-based column number of the error.
    """

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.line = line
        self.column = column


def parse_class(source: str) -> ClassDescriptor | None:
    """Parse C# source text and describe its first class declaration.

    Args:
        source: The full text of a .cs file.

    Returns:
        A ClassDescriptor listing the class's properties in declaration order,
        or None if the source declares no class.

    Raises:
        LexerError: If the source contains unterminated literals or comments.
        ParseError: If the class declaration is syntactically invalid.
    """
    tokens = tokenize(source)
    return _Parser(tokens).parse_class()


def parse_type(text: str) -> TypeExpression:
    """Parse a standalone C# type such as ``Dictionary<string, List<int?>>``.

    Raises:
        LexerError: If the text contains unterminated literals.
        ParseError: If the text is not exactly one type.
    """
    tokens = tokenize(text)
    return _Parser(tokens).parse_standalone_type()


# ################
# Implementation
# ################

_PRIMITIVE_TYPES: dict[str, PrimitiveType] = {p.value: p for p in PrimitiveType}

_MODIFIERS: frozenset[str] = frozenset(
    {
        "public",
        "private",
        "protected",
        "internal",
        "file",
        "static",
        "readonly",
        "const",
        "volatile",
        "virtual",
        "override",
        "abstract",
        "sealed",
        "new",
        "partial",
        "extern",
        "unsafe",
        "async",
        "required",
        "fixed",
        "ref",
        "scoped",
    }
)

_TYPE_DECLARATION_KEYWORDS: tuple[TokenType, ...] = (
    TokenType.CLASS,
    TokenType.STRUCT,
    TokenType.RECORD,
    TokenType.INTERFACE,
    TokenType.ENUM,
    TokenType.DELEGATE,
)

_OPENING: dict[TokenType, TokenType] = {
    TokenType.LPAREN: TokenType.RPAREN,
    TokenType.LBRACKET: TokenType.RBRACKET,
    TokenType.LBRACE: TokenType.RBRACE,
}

_CLOSING: frozenset[TokenType] = frozenset(_OPENING.values())


class _Parser:
    """Recursive-descent parser over a C# token stream."""

    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._pos = 0

    def parse_class(self) -> ClassDescriptor | None:
        """Locate the first class declaration and parse it."""
        start = self._find_class_keyword()
        if start is None:
            logger.debug("No class declaration found")
            return None
        self._pos = start
        return self._parse_class_declaration()

    def parse_standalone_type(self) -> TypeExpression:
        """Parse a single type spanning the whole token stream."""
        expr = self._parse_type()
        if not self._at_end():
            tok = self._current()
            raise ParseError(f"Unexpected token {tok.value!r} after type", tok.line, tok.column)
        return expr

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _current(self) -> Token:
        """Return the current (un-consumed) token."""
        return self._tokens[self._pos]

    def _peek_type(self, offset: int = 0) -> TokenType:
        """Return the token type *offset* tokens ahead, clamped to EOF."""
        index = min(self._pos + offset, len(self._tokens) - 1)
        return self._tokens[index].type

    def _at_end(self) -> bool:
        """Return True if the current token is the EOF token."""
        return self._peek_type() == TokenType.EOF

    def _advance(self) -> Token:
        """Consume and return the current token, stopping at EOF."""
        tok = self._tokens[self._pos]
        if self._pos < len(self._tokens) - 1:
            self._pos += 1
        return tok

    def _expect(self, *types: TokenType) -> Token:
        """Consume the current token if it matches any of the given types.

        Raises ParseError if the current token does not match.
        """
        tok = self._current()
        if tok.type not in types:
            expected = ", ".join(repr(t.value) for t in types)
            got = tok.value if tok.type != TokenType.EOF else "end of file"
            raise ParseError(f"Expected {expected}, got {got!r}", tok.line, tok.column)
        return self._advance()

    def _check(self, *types: TokenType) -> bool:
        """Return True if the current token matches any of the given types (without consuming)."""
        return self._peek_type() in types

    def _expect_name_token(self) -> Token:
        """Consume the current token as a name.

        Accepts identifiers and the contextual `record` keyword. Raises
        ParseError for structural tokens and EOF.
        """
        tok = self._current()
        if tok.type not in (TokenType.IDENTIFIER, TokenType.RECORD):
            raise ParseError(f"Expected identifier, got {tok.value!r}", tok.line, tok.column)
        return self._advance()

    # ------------------------------------------------------------------
    # Skipping helpers
    # ------------------------------------------------------------------

    def _skip_balanced(self) -> None:
        """Consume an opening bracket and everything up to its matching closing bracket."""
        opener = self._current()
        closer = _OPENING[opener.type]
        stack = [closer]
        self._advance()
        while stack:
            tok = self._current()
            if tok.type == TokenType.EOF:
                raise ParseError(f"Unbalanced {opener.value!r}", opener.line, opener.column)
            if tok.type in _OPENING:
                stack.append(_OPENING[tok.type])
            elif tok.type in _CLOSING:
                if tok.type != stack[-1]:
                    raise ParseError(f"Unexpected {tok.value!r}", tok.line, tok.column)
                stack.pop()
            self._advance()

    def _skip_to_semicolon(self) -> None:
        """Consume tokens through the next ';' that is not nested in brackets."""
        while not self._check(TokenType.SEMICOLON):
            tok = self._current()
            if tok.type in _OPENING:
                self._skip_balanced()
            elif tok.type in _CLOSING or tok.type == TokenType.EOF:
                got = tok.value if tok.type != TokenType.EOF else "end of file"
                raise ParseError(f"Expected ';', got {got!r}", tok.line, tok.column)
            else:
                self._advance()
        self._advance()  # consume ;

    def _skip_attributes(self) -> None:
        """Consume any number of `[...]` attribute sections."""
        while self._check(TokenType.LBRACKET):
            self._skip_balanced()

    def _skip_declaration_body(self) -> None:
        """Consume a header up to its `{ ... }` body or terminating ';'.

        Used for nested types, methods, constructors, operators and events.
        A header may contain `=> expr;` for expression-bodied members.
        """
        while True:
            tok = self._current()
            if tok.type == TokenType.LBRACE:
                self._skip_balanced()
                return
            if tok.type == TokenType.SEMICOLON:
                self._advance()
                return
            if tok.type == TokenType.ARROW:
                self._skip_to_semicolon()
                return
            if tok.type in (TokenType.LPAREN, TokenType.LBRACKET):
                self._skip_balanced()
            elif tok.type in _CLOSING or tok.type == TokenType.EOF:
                got = tok.value if tok.type != TokenType.EOF else "end of file"
                raise ParseError(f"Expected '{{' or ';', got {got!r}", tok.line, tok.column)
            else:
                self._advance()

    # ------------------------------------------------------------------
    # Class declarations
    # ------------------------------------------------------------------

    def _find_class_keyword(self) -> int | None:
        """Return the index of the first `class` keyword that starts a declaration.

        Skips the `class` generic constraint (`where T : class`) and the
        `record class` form, which declares a record rather than a class.
        """
        for index, tok in enumerate(self._tokens):
            if tok.type != TokenType.CLASS:
                continue
            if index > 0 and self._tokens[index - 1].type in (TokenType.RECORD, TokenType.COLON, TokenType.COMMA):
                continue
            if self._tokens[index + 1].type == TokenType.IDENTIFIER:
                return index
        return None

    def _parse_class_declaration(self) -> ClassDescriptor:
        """Parse: class <Name> [<T>] [(params)] [: bases] [where ...] { member* }"""
        self._expect(TokenType.CLASS)
        name_tok = self._expect_name_token()
        logger.debug("Found class %s at line %d", name_tok.value, name_tok.line)

        while not self._check(TokenType.LBRACE, TokenType.SEMICOLON):
            tok = self._current()
            if tok.type in (TokenType.LPAREN, TokenType.LBRACKET):
                self._skip_balanced()
            elif tok.type in _CLOSING or tok.type == TokenType.EOF:
                got = tok.value if tok.type != TokenType.EOF else "end of file"
                raise ParseError(f"Expected '{{' after class header, got {got!r}", tok.line, tok.column)
            else:
                self._advance()

        properties: list[PropertyDescriptor] = []
        if self._check(TokenType.SEMICOLON):
            self._advance()
            return ClassDescriptor(name=name_tok.value)

        self._expect(TokenType.LBRACE)
        while not self._check(TokenType.RBRACE, TokenType.EOF):
            prop = self._parse_member()
            if prop is not None:
                properties.append(prop)
        self._expect(TokenType.RBRACE)
        logger.debug("Class %s has %d properties", name_tok.value, len(properties))
        return ClassDescriptor(name=name_tok.value, properties=tuple(properties))

    # ------------------------------------------------------------------
    # Member declarations
    # ------------------------------------------------------------------

    def _parse_member(self) -> PropertyDescriptor | None:
        """Parse one class member, returning a descriptor only for properties."""
        self._skip_attributes()
        if self._check(TokenType.SEMICOLON):
            self._advance()
            return None

        has_required_modifier = False
        while self._check(TokenType.IDENTIFIER) and self._current().value in _MODIFIERS:
            if self._advance().value == "required":
                has_required_modifier = True

        if self._check(*_TYPE_DECLARATION_KEYWORDS):
            self._skip_declaration_body()
            return None
        if self._check(TokenType.EVENT, TokenType.SYMBOL):
            # Events and destructors (`~Name()`).
            self._skip_declaration_body()
            return None
        if self._check(TokenType.IDENTIFIER) and self._current().value in ("implicit", "explicit"):
            self._skip_declaration_body()
            return None

        member_type = self._parse_type()

        if self._check(TokenType.LPAREN, TokenType.OPERATOR, TokenType.THIS):
            # Constructor, operator overload or indexer.
            self._skip_declaration_body()
            return None

        name_tok = self._expect_name_token()
        while self._check(TokenType.DOT) or (self._check(TokenType.LANGLE) and self._skip_interface_type_arguments()):
            # Explicit interface implementation: `int IShape.Sides { get; }`,
            # `int IHolder<int>.Value { get; }`.
            self._advance()
            name_tok = self._expect_name_token()

        if self._check(TokenType.LBRACE):
            self._skip_balanced()
            if self._check(TokenType.EQUALS):
                self._skip_to_semicolon()
        elif self._check(TokenType.ARROW):
            self._skip_to_semicolon()
        elif self._check(TokenType.LPAREN, TokenType.LANGLE):
            self._skip_declaration_body()
            return None
        else:
            self._skip_to_semicolon()
            return None

        return PropertyDescriptor.from_declaration(name_tok.value, member_type, has_required_modifier)

    def _skip_interface_type_arguments(self) -> bool:
        """Consume `<...>` if it belongs to an interface name followed by `.`.

        Otherwise (a generic method's type parameters) the position is left
        unchanged and False is returned.
        """
        start = self._pos
        try:
            self._parse_type_arguments()
        except ParseError:
            self._pos = start
            return False
        if self._check(TokenType.DOT):
            return True
        self._pos = start
        return False

    # ------------------------------------------------------------------
    # Type expressions
    # ------------------------------------------------------------------

    def _parse_type(self) -> TypeExpression:
        """Parse a type: a (qualified, possibly generic) name or tuple plus suffixes.

        Suffixes are applied left to right, so `int?[]` is an array of
        nullable ints while `int[]?` is a nullable array.
        """
        if self._check(TokenType.LPAREN):
            expr: TypeExpression = self._parse_tuple_type()
        else:
            expr = self._parse_named_type()

        while True:
            tok = self._current()
            if tok.type == TokenType.QUESTION:
                if isinstance(expr, NullableTypeExpr):
                    raise ParseError("Duplicate nullable marker '?'", tok.line, tok.column)
                self._advance()
                expr = NullableTypeExpr(inner_type=expr)
            elif tok.type == TokenType.LBRACKET and self._peek_type(1) in (TokenType.RBRACKET, TokenType.COMMA):
                self._advance()  # consume [
                rank = 1
                while self._check(TokenType.COMMA):
                    self._advance()
                    rank += 1
                self._expect(TokenType.RBRACKET)
                if rank == 1:
                    expr = ArrayTypeExpr(element_type=expr)
                else:
                    expr = NamedTypeExpr(name=source_text(expr) + "[" + "," * (rank - 1) + "]")
            elif tok.type == TokenType.SYMBOL and tok.value == "*":
                self._advance()
                expr = NamedTypeExpr(name=source_text(expr) + "*")
            else:
                return expr

    def _parse_named_type(self) -> TypeExpression:
        """Parse: [alias::] Ident (. Ident)* [< type-args >]"""
        first = self._expect_name_token()
        name = first.value
        qualified = False
        if self._check(TokenType.DOUBLE_COLON):
            self._advance()
            name += "::" + self._expect_name_token().value
            qualified = True
        while self._check(TokenType.DOT):
            self._advance()
            name += "." + self._expect_name_token().value
            qualified = True

        if not self._check(TokenType.LANGLE):
            if not qualified and name in _PRIMITIVE_TYPES:
                return PrimitiveTypeExpr(primitive=_PRIMITIVE_TYPES[name])
            return NamedTypeExpr(name=name)

        args = self._parse_type_arguments()
        complete = all(arg is not None for arg in args)
        if not qualified and name == "List" and len(args) == 1 and complete:
            return ListTypeExpr(element_type=args[0])
        if not qualified and name == "Dictionary":
            if len(args) == 2 and complete:
                return MapTypeExpr(key_type=args[0], value_type=args[1])
            verbatim = _generic_text(name, args)
            logger.warning(
                "Line %d: %s does not have exactly two type arguments; passing it through unmapped",
                first.line,
                verbatim,
            )
            return NamedTypeExpr(name=verbatim)
        return NamedTypeExpr(name=_generic_text(name, args))

    def _parse_type_arguments(self) -> list[TypeExpression | None]:
        """Parse: < [type] (, [type])* >

        Missing arguments (`Dictionary<string,>`) are returned as None so the
        caller can degrade the type instead of failing.
        """
        self._expect(TokenType.LANGLE)
        args: list[TypeExpression | None] = []
        while True:
            if self._check(TokenType.COMMA, TokenType.RANGLE):
                args.append(None)
            else:
                args.append(self._parse_type())
            if self._check(TokenType.COMMA):
                self._advance()
                continue
            self._expect(TokenType.RANGLE)
            return args

    def _parse_tuple_type(self) -> NamedTypeExpr:
        """Parse: ( type [name] (, type [name])* )"""
        self._expect(TokenType.LPAREN)
        elements: list[str] = []
        while True:
            element = source_text(self._parse_type())
            if self._check(TokenType.IDENTIFIER):
                element += " " + self._advance().value
            elements.append(element)
            if self._check(TokenType.COMMA):
                self._advance()
                continue
            self._expect(TokenType.RPAREN)
            return NamedTypeExpr(name="(" + ", ".join(elements) + ")")


def _generic_text(name: str, args: list[TypeExpression | None]) -> str:
    """Render a generic type with possibly missing arguments as C# text."""
    rendered = ["" if arg is None else source_text(arg) for arg in args]
    return f"{name}<{', '.join(rendered)}>"
