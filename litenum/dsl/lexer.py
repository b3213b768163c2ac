"""Hand-written lexer for the litenum DSL.

Tokenizes .lenum source files into a stream of Token objects.
No external dependencies, pure Python character scanning.
"""

from __future__ import annotations

from litenum.core.types import DslSyntaxError
from litenum.dsl.tokens import KEYWORDS, Token, TokenKind


_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0", "\\": "\\", '"': '"'}


class LexerError(DslSyntaxError):
    """Raised when the lexer encounters an invalid character sequence."""


class Lexer:
    """Tokenize litenum DSL source text.

    Usage:
        lexer = Lexer(source_text)
        tokens = lexer.tokenize()
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._line = 1
        self._col = 1
        self._tokens: list[Token] = []

    # ------------------------------------------------------------------
    # Public
    # ------------------------------------------------------------------

    def tokenize(self) -> list[Token]:
        """Scan the entire source and return all tokens including EOF."""
        while not self._at_end():
            self._skip_whitespace()
            if self._at_end():
                break
            self._scan_token()

        self._tokens.append(Token(TokenKind.EOF, "", self._line, self._col))
        return self._tokens

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def _scan_token(self) -> None:
        ch = self._peek()

        if ch == "#":
            self._scan_comment()
            return

        if ch == "\n":
            self._tokens.append(Token(TokenKind.NEWLINE, "\\n", self._line, self._col))
            self._advance()
            return

        if ch == '"':
            self._scan_string()
            return

        if ch == "{":
            self._scan_block()
            return

        if ch.isalpha() or ch == "_":
            self._scan_identifier()
            return

        if ch == "=":
            self._tokens.append(Token(TokenKind.EQUALS, ch, self._line, self._col))
            self._advance()
            return

        raise LexerError(f"Unexpected character: {ch!r}", self._line, self._col)

    def _scan_comment(self) -> None:
        """Consume a comment; `#:` comments become DOC_COMMENT tokens."""
        start_line = self._line
        start_col = self._col
        self._advance()  # skip #
        is_doc = self._peek() == ":"
        if is_doc:
            self._advance()

        text = ""
        while not self._at_end() and self._peek() != "\n":
            text += self._peek()
            self._advance()

        if is_doc:
            text = text.rstrip("\r")
            if text.startswith(" "):
                text = text[1:]
            self._tokens.append(Token(TokenKind.DOC_COMMENT, text, start_line, start_col))

    def _scan_string(self) -> None:
        """Scan a double-quoted, single-line string literal."""
        start_line = self._line
        start_col = self._col
        self._advance()  # skip opening quote

        text = ""
        while not self._at_end():
            ch = self._peek()
            if ch == '"':
                self._advance()  # skip closing quote
                self._tokens.append(Token(TokenKind.STRING, text, start_line, start_col))
                return
            if ch == "\\":
                esc_line, esc_col = self._line, self._col
                self._advance()
                if self._at_end():
                    break
                escaped = self._peek()
                if escaped not in _ESCAPES:
                    raise LexerError(f"Unknown escape sequence: \\{escaped}", esc_line, esc_col)
                text += _ESCAPES[escaped]
                self._advance()
            else:
                if ch == "\n":
                    raise LexerError(
                        "Unterminated string (newline before closing quote)", start_line, start_col
                    )
                text += ch
                self._advance()

        raise LexerError("Unterminated string (hit EOF)", start_line, start_col)

    def _scan_block(self) -> None:
        """Scan a `{ ... }` block as raw text, balancing nested braces.

        Braces inside quoted strings within the block are not counted.
        """
        start_line = self._line
        start_col = self._col
        self._advance()  # skip {

        text = ""
        depth = 1
        while not self._at_end():
            ch = self._peek()
            if ch in ("'", '"'):
                text += self._scan_block_quoted(ch, start_line, start_col)
                continue
            if ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    self._advance()
                    self._tokens.append(
                        Token(TokenKind.BLOCK, text.strip(), start_line, start_col)
                    )
                    return
            text += ch
            self._advance()

        raise LexerError("Unterminated '{' block (hit EOF)", start_line, start_col)

    def _scan_block_quoted(self, quote: str, block_line: int, block_col: int) -> str:
        """Copy a quoted string inside a block verbatim, escapes included."""
        text = self._advance()
        while not self._at_end():
            ch = self._advance()
            text += ch
            if ch == "\\" and not self._at_end():
                text += self._advance()
            elif ch == quote:
                return text
        raise LexerError("Unterminated '{' block (hit EOF)", block_line, block_col)

    def _scan_identifier(self) -> None:
        """Scan an identifier or keyword."""
        start_col = self._col
        text = ""

        while not self._at_end() and (self._peek().isalnum() or self._peek() == "_"):
            text += self._peek()
            self._advance()

        kind = KEYWORDS.get(text, TokenKind.IDENTIFIER)
        self._tokens.append(Token(kind, text, self._line, start_col))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _at_end(self) -> bool:
        return self._pos >= len(self._source)

    def _peek(self) -> str:
        if self._at_end():
            return "\0"
        return self._source[self._pos]

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _skip_whitespace(self) -> None:
        """Skip spaces, tabs, and carriage returns (but not newlines)."""
        while not self._at_end() and self._peek() in (" ", "\t", "\r"):
            self._advance()
