"""Hand-written recursive descent parser for the litenum DSL.

Consumes a list of Token objects from the lexer and produces a
DeclarationTree. No external parsing libraries used.

Grammar:

    file        := ImportDecl* [DOC_COMMENT+] Name [DataField] '=' VariantDecl+
    ImportDecl  := 'import' STRING
    DataField   := BLOCK                     # { name: Type }
    VariantDecl := [DOC_COMMENT+] Name STRING STRING* [BLOCK]
"""

from __future__ import annotations

from litenum.core.types import DslSyntaxError
from litenum.dsl.ast_nodes import DataFieldDecl, DeclarationTree, ImportDecl, VariantDecl
from litenum.dsl.tokens import Token, TokenKind


class ParseError(DslSyntaxError):
    """Raised when the parser encounters an unexpected token."""

    def __init__(self, message: str, token: Token) -> None:
        self.token = token
        super().__init__(message, token.line, token.column)


class Parser:
    """Parse a litenum token stream into a DeclarationTree.

    Usage:
        parser = Parser(tokens)
        tree = parser.parse()
    """

    def __init__(self, tokens: list[Token]) -> None:
        # Newlines are syntactically insignificant in our grammar
        self._tokens = [t for t in tokens if t.kind != TokenKind.NEWLINE]
        self._pos = 0

    # ------------------------------------------------------------------
    # Public
    # ------------------------------------------------------------------

    def parse(self) -> DeclarationTree:
        """Parse the full token stream into a DeclarationTree."""
        imports: list[ImportDecl] = []
        while self._check(TokenKind.IMPORT):
            imports.append(self._parse_import())

        doc = self._parse_doc()
        name_token = self._consume(TokenKind.IDENTIFIER, "Expected enum type name")

        data_field = None
        if self._check(TokenKind.BLOCK):
            data_field = self._parse_data_field(self._advance())

        self._consume(TokenKind.EQUALS, f"Expected '=' after enum '{name_token.value}'")

        variants: list[VariantDecl] = []
        while not self._at_end():
            variants.append(self._parse_variant())

        if not variants:
            raise ParseError(
                f"Enum '{name_token.value}' declares no variants", self._current()
            )

        return DeclarationTree(
            name=name_token.value,
            doc=doc,
            data_field=data_field,
            variants=variants,
            imports=imports,
            line=name_token.line,
        )

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _parse_import(self) -> ImportDecl:
        token = self._consume(TokenKind.IMPORT, "Expected 'import'")
        statement = self._consume(TokenKind.STRING, "Expected import statement string").value
        return ImportDecl(statement=statement, line=token.line)

    def _parse_data_field(self, block: Token) -> DataFieldDecl:
        """Parse the text of a `{ name: Type }` block."""
        name, sep, type_ref = block.value.partition(":")
        name = name.strip()
        type_ref = type_ref.strip()
        if not sep or not name.isidentifier() or not type_ref:
            raise ParseError(
                f"Malformed data field declaration {{{block.value}}}, expected '{{ name: Type }}'",
                block,
            )
        return DataFieldDecl(name=name, type_ref=type_ref, line=block.line)

    def _parse_variant(self) -> VariantDecl:
        doc = self._parse_doc()
        token = self._consume(TokenKind.IDENTIFIER, "Expected variant name")

        if not self._check(TokenKind.STRING):
            raise ParseError(
                f"Variant '{token.value}' needs a primary string literal "
                f"(got {self._current().kind.name})",
                self._current(),
            )
        primary = self._advance().value

        alternates: list[str] = []
        while self._check(TokenKind.STRING):
            alternates.append(self._advance().value)

        data_expr = None
        if self._check(TokenKind.BLOCK):
            block = self._advance()
            if not block.value:
                raise ParseError(f"Empty data block on variant '{token.value}'", block)
            data_expr = block.value

        return VariantDecl(
            name=token.value,
            primary=primary,
            alternates=alternates,
            doc=doc,
            data_expr=data_expr,
            line=token.line,
        )

    def _parse_doc(self) -> str | None:
        """Collect consecutive doc-comment lines; they must precede a name."""
        if not self._check(TokenKind.DOC_COMMENT):
            return None

        first = self._current()
        lines: list[str] = []
        while self._check(TokenKind.DOC_COMMENT):
            lines.append(self._advance().value)

        if not self._check(TokenKind.IDENTIFIER):
            raise ParseError("Doc comment is not followed by a name", first)
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Token stream helpers
    # ------------------------------------------------------------------

    def _current(self) -> Token:
        if self._pos >= len(self._tokens):
            return Token(TokenKind.EOF, "", 0, 0)
        return self._tokens[self._pos]

    def _at_end(self) -> bool:
        return self._current().kind == TokenKind.EOF

    def _check(self, kind: TokenKind) -> bool:
        return self._current().kind == kind

    def _advance(self) -> Token:
        token = self._current()
        if not self._at_end():
            self._pos += 1
        return token

    def _consume(self, kind: TokenKind, message: str) -> Token:
        if self._check(kind):
            return self._advance()
        raise ParseError(
            f"{message} (got {self._current().kind.name}: {self._current().value!r})",
            self._current(),
        )
