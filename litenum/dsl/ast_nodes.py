"""AST node definitions for the litenum DSL.

These dataclasses form the declaration tree produced by the parser.
The tree structure mirrors the .lenum file layout:

    DeclarationTree
      -> import directives
      -> type doc, type name, optional data field
      -> variant declarations (doc, name, literals, optional data expression)
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ImportDecl:
    """An `import "from x import y"` directive copied into the generated module."""

    statement: str
    line: int = 0


@dataclass
class DataFieldDecl:
    """The `{ name: Type }` block between the type name and `=`."""

    name: str
    type_ref: str
    line: int = 0


@dataclass
class VariantDecl:
    """A `Name "primary" "alternate"... { expr }` declaration."""

    name: str
    primary: str
    alternates: list[str] = field(default_factory=list)
    doc: str | None = None
    data_expr: str | None = None
    line: int = 0


# ---------------------------------------------------------------------------
# Root node
# ---------------------------------------------------------------------------


@dataclass
class DeclarationTree:
    """Root of the AST, one per .lenum file."""

    name: str
    doc: str | None = None
    data_field: DataFieldDecl | None = None
    variants: list[VariantDecl] = field(default_factory=list)
    imports: list[ImportDecl] = field(default_factory=list)
    line: int = 0
