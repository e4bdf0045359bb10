# Copyright 2026 cs2dart Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for C# source files.

Converts raw source text into a sequence of tokens for the declaration parser.
Only the structure needed to locate classes and their properties is
preserved: literals are kept as raw text and operators collapse into a single
token type.
"""

import enum
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the C# lexer."""

    # Declaration keywords
    CLASS = "class"
    STRUCT = "struct"
    RECORD = "record"
    INTERFACE = "interface"
    ENUM = "enum"
    DELEGATE = "delegate"
    EVENT = "event"
    OPERATOR = "operator"
    THIS = "this"

    # Symbols
    LBRACE = "{"
    RBRACE = "}"
    LANGLE = "<"
    RANGLE = ">"
    LBRACKET = "["
    RBRACKET = "]"
    LPAREN = "("
    RPAREN = ")"
    COMMA = ","
    DOT = "."
    SEMICOLON = ";"
    COLON = ":"
    QUESTION = "?"
    EQUALS = "="
    ARROW = "=>"
    DOUBLE_COLON = "::"
    SYMBOL = "SYMBOL"

    # Literals
    STRING = "STRING"
    CHAR = "CHAR"
    NUMBER = "NUMBER"

    # Identifiers (including contextual keywords and modifiers)
    IDENTIFIER = "IDENTIFIER"

    # End of file
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """A lexical token with its source location.

    Attributes:
        type: The kind of token.
        value: The raw text of the token.
        line: 1-based line number where the token starts.
        column: 1-based column number where the token starts.
    """

    type: TokenType
    value: str
    line: int
    column: int


class LexerError(Exception):
    """Raised when the scanner encounters an unterminated literal or comment.

    Attributes:
        line: 1-based line number of the error.
        column: 1-based column number of the error.
    """

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.line = line
        self.column = column


def tokenize(source: str) -> list[Token]:
    """Tokenize C# source text into a sequence of tokens.

    Comments, whitespace and preprocessor directives are consumed and not
    included in the output. Conditional sections (`#if` / `#elif` / `#else`)
    are evaluated with no symbols defined apart from those declared by
    `#define` in the source itself; text in inactive sections is skipped.

    Args:
        source: The full text of a .cs file.

    Returns:
        A list of Token objects ending with a single EOF token.

    Raises:
        LexerError: On unterminated string, character or raw string literals,
            unterminated block comments, unbalanced conditional directives or
            malformed `#if` expressions.
    """
    return _Lexer(source).tokenize()


# ################
# Implementation
# ################

_KEYWORDS: dict[str, TokenType] = {
    "class": TokenType.CLASS,
    "struct": TokenType.STRUCT,
    "record": TokenType.RECORD,
    "interface": TokenType.INTERFACE,
    "enum": TokenType.ENUM,
    "delegate": TokenType.DELEGATE,
    "event": TokenType.EVENT,
    "operator": TokenType.OPERATOR,
    "this": TokenType.THIS,
}

_SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "<": TokenType.LANGLE,
    ">": TokenType.RANGLE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    ";": TokenType.SEMICOLON,
    "?": TokenType.QUESTION,
}

_OPERATOR_CHARS = frozenset("+-*/%!&|^~")


@dataclass
class _ConditionalSection:
    """State of one open `#if` ... `#endif` block."""

    line: int
    column: int
    parent_active: bool
    active: bool
    taken: bool


class _Lexer:
    """Internal scanner state machine."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._line = 1
        self._column = 1
        self._at_line_start = True
        self._tokens: list[Token] = []
        self._sections: list[_ConditionalSection] = []
        self._defined: set[str] = set()

    def tokenize(self) -> list[Token]:
        """Run the scanner and return all tokens including the terminal EOF."""
        while self._pos < len(self._source):
            self._skip_whitespace_and_comments()
            if self._pos >= len(self._source):
                break
            self._scan_token()
        if self._sections:
            section = self._sections[-1]
            raise LexerError("Unterminated #if directive", section.line, section.column)
        self._tokens.append(Token(TokenType.EOF, "", self._line, self._column))
        return self._tokens

    # ------------------------------------------------------------------
    # Low-level character access helpers
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position, or '' at end of input."""
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _peek(self, offset: int = 1) -> str:
        """Return the character *offset* positions ahead, or '' past the end of input."""
        if self._pos + offset < len(self._source):
            return self._source[self._pos + offset]
        return ""

    def _advance(self) -> str:
        """Consume the current character, update position tracking, and return it."""
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._column = 1
            self._at_line_start = True
        else:
            self._column += 1
            if ch not in " \t\r\ufeff":
                self._at_line_start = False
        return ch

    # ------------------------------------------------------------------
    # Whitespace, comment and directive skipping
    # ------------------------------------------------------------------

    def _skip_whitespace_and_comments(self) -> None:
        """Skip whitespace, comments and preprocessor lines at the current position."""
        while self._pos < len(self._source):
            ch = self._current()
            if ch in " \t\r\n\ufeff":
                self._advance()
            elif ch == "/" and self._peek() == "/":
                self._skip_to_end_of_line()
            elif ch == "/" and self._peek() == "*":
                self._skip_block_comment()
            elif ch == "#" and self._at_line_start:
                self._scan_directive()
                if not self._is_active():
                    self._skip_inactive_text()
            else:
                break

    def _skip_to_end_of_line(self) -> None:
        """Consume through end-of-line (exclusive of the newline itself)."""
        while self._pos < len(self._source) and self._current() != "\n":
            self._advance()

    # ------------------------------------------------------------------
    # Preprocessor directives
    # ------------------------------------------------------------------

    def _is_active(self) -> bool:
        return not self._sections or self._sections[-1].active

    def _skip_inactive_text(self) -> None:
        """Consume lines of an inactive section up to the next directive line."""
        while self._pos < len(self._source):
            if self._current() == "#" and self._at_line_start:
                return
            self._advance()

    def _scan_directive(self) -> None:
        """Consume one directive line and update the conditional section state.

        Directives other than `#if`, `#elif`, `#else`, `#endif`, `#define`
        and `#undef` (`#region`, `#nullable`, `#pragma`, ...) are skipped.
        """
        line = self._line
        col = self._column
        self._advance()  # #
        start = self._pos
        self._skip_to_end_of_line()
        text = self._source[start : self._pos].split("//", 1)[0].strip()
        name_end = 0
        while name_end < len(text) and text[name_end].isalpha():
            name_end += 1
        directive = text[:name_end]
        argument = text[name_end:].strip()

        if directive == "if":
            parent_active = self._is_active()
            condition = parent_active and self._evaluate_condition(argument, line, col)
            self._sections.append(_ConditionalSection(line, col, parent_active, condition, condition))
        elif directive in ("elif", "else", "endif"):
            if not self._sections:
                raise LexerError(f"#{directive} without matching #if", line, col)
            section = self._sections[-1]
            if directive == "endif":
                self._sections.pop()
            elif directive == "elif":
                condition = self._evaluate_condition(argument, line, col)
                section.active = section.parent_active and not section.taken and condition
                section.taken = section.taken or section.active
            else:
                section.active = section.parent_active and not section.taken
                section.taken = True
        elif directive in ("define", "undef") and self._is_active():
            if directive == "define":
                self._defined.add(argument)
            else:
                self._defined.discard(argument)

    def _evaluate_condition(self, expression: str, line: int, col: int) -> bool:
        """Evaluate an `#if` / `#elif` expression against the defined symbols.

        Supports `true`, `false`, symbols, `!`, `&&`, `||`, `==`, `!=` and
        parentheses. Undefined symbols are false.
        """
        parts: list[str] = []
        index = 0
        while index < len(expression):
            ch = expression[index]
            if ch in " \t":
                index += 1
            elif expression[index : index + 2] in ("&&", "||", "==", "!="):
                parts.append(expression[index : index + 2])
                index += 2
            elif ch in "!()":
                parts.append(ch)
                index += 1
            elif ch.isalnum() or ch == "_":
                end = index
                while end < len(expression) and (expression[end].isalnum() or expression[end] == "_"):
                    end += 1
                parts.append(expression[index:end])
                index = end
            else:
                raise LexerError(f"Invalid character {ch!r} in preprocessor expression", line, col)

        position = 0

        def peek() -> str:
            return parts[position] if position < len(parts) else ""

        def take() -> str:
            nonlocal position
            if position >= len(parts):
                raise LexerError("Incomplete preprocessor expression", line, col)
            position += 1
            return parts[position - 1]

        def primary() -> bool:
            part = take()
            if part == "!":
                return not primary()
            if part == "(":
                value = disjunction()
                if take() != ")":
                    raise LexerError("Expected ')' in preprocessor expression", line, col)
                return value
            if part in ("&&", "||", "==", "!=", ")"):
                raise LexerError(f"Unexpected {part!r} in preprocessor expression", line, col)
            if part == "true":
                return True
            if part == "false":
                return False
            return part in self._defined

        def equality() -> bool:
            value = primary()
            while peek() in ("==", "!="):
                operator = take()
                right = primary()
                value = value == right if operator == "==" else value != right
            return value

        def conjunction() -> bool:
            value = equality()
            while peek() == "&&":
                take()
                value = equality() and value
            return value

        def disjunction() -> bool:
            value = conjunction()
            while peek() == "||":
                take()
                value = conjunction() or value
            return value

        result = disjunction()
        if position != len(parts):
            raise LexerError(f"Unexpected {peek()!r} in preprocessor expression", line, col)
        return result

    def _skip_block_comment(self) -> None:
        """Consume from '/*' through the matching '*/'."""
        start_line = self._line
        start_col = self._column
        self._advance()  # /
        self._advance()  # *
        while self._pos < len(self._source):
            if self._current() == "*" and self._peek() == "/":
                self._advance()  # *
                self._advance()  # /
                return
            self._advance()
        raise LexerError("Unterminated block comment", start_line, start_col)

    # ------------------------------------------------------------------
    # Token scanning dispatcher
    # ------------------------------------------------------------------

    def _scan_token(self) -> None:
        """Dispatch to the appropriate handler based on the current character."""
        ch = self._current()
        line = self._line
        col = self._column
        start = self._pos

        if ch in _SINGLE_CHAR_TOKENS:
            self._advance()
            self._tokens.append(Token(_SINGLE_CHAR_TOKENS[ch], ch, line, col))
        elif ch == "=":
            self._advance()
            if self._current() == ">":
                self._advance()
                self._tokens.append(Token(TokenType.ARROW, "=>", line, col))
            else:
                self._tokens.append(Token(TokenType.EQUALS, "=", line, col))
        elif ch == ":":
            self._advance()
            if self._current() == ":":
                self._advance()
                self._tokens.append(Token(TokenType.DOUBLE_COLON, "::", line, col))
            else:
                self._tokens.append(Token(TokenType.COLON, ":", line, col))
        elif self._starts_string():
            self._consume_string()
            self._tokens.append(Token(TokenType.STRING, self._source[start : self._pos], line, col))
        elif ch == "'":
            self._consume_char_literal()
            self._tokens.append(Token(TokenType.CHAR, self._source[start : self._pos], line, col))
        elif ch == "@" and (self._peek().isalpha() or self._peek() == "_"):
            self._advance()  # @
            self._scan_identifier_or_keyword(line, col, start, verbatim=True)
        elif ch.isdigit():
            self._scan_number(line, col)
        elif ch.isalpha() or ch == "_":
            self._scan_identifier_or_keyword(line, col, start, verbatim=False)
        elif ch in _OPERATOR_CHARS:
            self._advance()
            self._tokens.append(Token(TokenType.SYMBOL, ch, line, col))
        else:
            # Anything else ('$', '@', '#', '\\', non-ASCII punctuation) only
            # occurs inside skipped expressions.
            self._advance()
            self._tokens.append(Token(TokenType.SYMBOL, ch, line, col))

    # ------------------------------------------------------------------
    # String and character literals
    # ------------------------------------------------------------------

    def _string_prefix_length(self) -> int:
        """Return the length of a `$`/`@` prefix run if it introduces a string literal, else -1."""
        offset = 0
        while self._peek(offset) in ("$", "@"):
            offset += 1
        return offset if self._peek(offset) == '"' else -1

    def _starts_string(self) -> bool:
        """Return True if a string literal (of any flavour) begins at the current position."""
        return self._string_prefix_length() >= 0

    def _consume_string(self) -> None:
        """Consume one string literal of any flavour, including nested interpolations."""
        line = self._line
        col = self._column
        prefix_len = self._string_prefix_length()
        prefix = self._source[self._pos : self._pos + prefix_len]
        for _ in range(prefix_len):
            self._advance()

        interpolated = "$" in prefix
        quotes = 0
        while self._peek(quotes) == '"':
            quotes += 1

        if quotes >= 3:
            self._consume_raw_string(quotes, prefix.count("$"), line, col)
        elif "@" in prefix:
            self._consume_verbatim_string(interpolated, line, col)
        else:
            self._consume_regular_string(interpolated, line, col)

    def _consume_regular_string(self, interpolated: bool, line: int, col: int) -> None:
        """Consume a `"..."` or `$"..."` literal with backslash escapes."""
        self._advance()  # opening "
        while self._pos < len(self._source):
            ch = self._current()
            if ch == '"':
                self._advance()
                return
            if ch == "\n":
                break
            if ch == "\\":
                self._advance()
                if self._pos >= len(self._source):
                    break
                self._advance()
            elif interpolated and ch == "{":
                self._consume_interpolation_brace(line, col)
            else:
                self._advance()
        raise LexerError("Unterminated string literal", line, col)

    def _consume_verbatim_string(self, interpolated: bool, line: int, col: int) -> None:
        """Consume a `@"..."` literal where `""` escapes a quote and newlines are allowed."""
        self._advance()  # opening "
        while self._pos < len(self._source):
            ch = self._current()
            if ch == '"':
                self._advance()
                if self._current() == '"':
                    self._advance()
                    continue
                return
            if interpolated and ch == "{":
                self._consume_interpolation_brace(line, col)
            else:
                self._advance()
        raise LexerError("Unterminated verbatim string literal", line, col)

    def _consume_raw_string(self, quotes: int, dollars: int, line: int, col: int) -> None:
        """Consume a raw `\"\"\"...\"\"\"` literal delimited by *quotes* quote characters."""
        for _ in range(quotes):
            self._advance()
        while self._pos < len(self._source):
            run = 0
            while self._peek(run) == '"':
                run += 1
            if run >= quotes:
                for _ in range(run):
                    self._advance()
                return
            if run:
                for _ in range(run):
                    self._advance()
                continue
            if dollars and self._current() == "{":
                braces = 0
                while self._peek(braces) == "{":
                    braces += 1
                if braces >= dollars:
                    for _ in range(braces - dollars):
                        self._advance()
                    self._consume_interpolation_hole(line, col, opening=dollars)
                    continue
            self._advance()
        raise LexerError("Unterminated raw string literal", line, col)

    def _consume_interpolation_brace(self, line: int, col: int) -> None:
        """Consume `{{` as an escaped brace or `{expr}` as an interpolation hole."""
        if self._peek() == "{":
            self._advance()
            self._advance()
            return
        self._consume_interpolation_hole(line, col, opening=1)

    def _consume_interpolation_hole(self, line: int, col: int, opening: int) -> None:
        """Consume an interpolation expression up to its matching closing brace."""
        for _ in range(opening):
            self._advance()
        depth = 1
        while self._pos < len(self._source):
            ch = self._current()
            if self._starts_string():
                self._consume_string()
            elif ch == "'":
                self._consume_char_literal()
            elif ch == "{":
                depth += 1
                self._advance()
            elif ch == "}":
                self._advance()
                depth -= 1
                if depth == 0:
                    for _ in range(opening - 1):
                        if self._current() == "}":
                            self._advance()
                    return
            else:
                self._advance()
        raise LexerError("Unterminated interpolated string literal", line, col)

    def _consume_char_literal(self) -> None:
        """Consume a `'x'` character literal with backslash escapes."""
        line = self._line
        col = self._column
        self._advance()  # opening '
        while self._pos < len(self._source):
            ch = self._current()
            if ch == "'":
                self._advance()
                return
            if ch == "\n":
                break
            if ch == "\\":
                self._advance()
                if self._pos >= len(self._source):
                    break
            self._advance()
        raise LexerError("Unterminated character literal", line, col)

    # ------------------------------------------------------------------
    # Numbers and identifiers
    # ------------------------------------------------------------------

    def _scan_number(self, line: int, col: int) -> None:
        """Scan a numeric literal including hex digits, digit separators and type suffixes."""
        start = self._pos
        while self._pos < len(self._source):
            ch = self._current()
            if ch.isalnum() or ch == "_":
                self._advance()
            elif ch == "." and self._peek().isdigit():
                self._advance()
            elif ch in "+-" and self._source[self._pos - 1] in "eE" and not self._is_hex(start):
                self._advance()
            else:
                break
        self._tokens.append(Token(TokenType.NUMBER, self._source[start : self._pos], line, col))

    def _is_hex(self, start: int) -> bool:
        return self._source[start : start + 2].lower() == "0x"

    def _scan_identifier_or_keyword(self, line: int, col: int, start: int, verbatim: bool) -> None:
        """Scan an identifier and map it to a keyword token type if applicable.

        Verbatim identifiers (`@class`) keep their `@` and are never keywords.
        """
        while self._pos < len(self._source) and (self._current().isalnum() or self._current() == "_"):
            self._advance()
        value = self._source[start : self._pos]
        token_type = TokenType.IDENTIFIER if verbatim else _KEYWORDS.get(value, TokenType.IDENTIFIER)
        self._tokens.append(Token(token_type, value, line, col))
