"""Tests for the litenum DSL parser."""

from __future__ import annotations

import pytest

from litenum.core.types import DslSyntaxError
from litenum.dsl.ast_nodes import DeclarationTree
from litenum.dsl.lexer import Lexer
from litenum.dsl.parser import ParseError, Parser


def parse(source: str) -> DeclarationTree:
    return Parser(Lexer(source).tokenize()).parse()


OPERATORS = '''
import "from enum_support import Left, Right"

#: Binary operators.
#: Ordered by declaration.
Operator { precedence: Left | Right } =
    #: Equality.
    Eq "=="
    Add "+" { Left(6) }
    Sub "-" "minus" "sub" { Left(6) }
    Pow "**" { Right(8) }
'''


class TestDeclaration:
    """The type-level part of a declaration."""

    def test_type_name_and_line(self) -> None:
        tree = parse(OPERATORS)
        assert tree.name == "Operator"
        assert tree.line == 6

    def test_type_doc_lines_joined(self) -> None:
        tree = parse(OPERATORS)
        assert tree.doc == "Binary operators.\nOrdered by declaration."

    def test_data_field(self) -> None:
        tree = parse(OPERATORS)
        assert tree.data_field is not None
        assert tree.data_field.name == "precedence"
        assert tree.data_field.type_ref == "Left | Right"

    def test_imports(self) -> None:
        tree = parse(OPERATORS)
        assert [imp.statement for imp in tree.imports] == ["from enum_support import Left, Right"]
        assert tree.imports[0].line == 2

    def test_minimal_declaration(self) -> None:
        tree = parse('Color = Red "red"')
        assert tree.name == "Color"
        assert tree.doc is None
        assert tree.data_field is None
        assert tree.imports == []
        assert len(tree.variants) == 1

    def test_whitespace_is_insignificant(self) -> None:
        one_line = parse('Color = Red "red" Green "green" "verde" Blue "blue"')
        spread = parse('Color\n=\n\n  Red\n "red"\n Green "green"\n\t"verde"\nBlue "blue"\n')
        assert [v.name for v in one_line.variants] == [v.name for v in spread.variants]
        assert one_line.variants[1].alternates == spread.variants[1].alternates == ["verde"]

    def test_comments_ignored(self) -> None:
        tree = parse('# colors\nColor = # the members\n Red "red" # first\n')
        assert [v.name for v in tree.variants] == ["Red"]
        assert tree.doc is None


class TestVariants:
    """Variant declarations: literals, docs and data."""

    def test_order_preserved(self) -> None:
        tree = parse(OPERATORS)
        assert [v.name for v in tree.variants] == ["Eq", "Add", "Sub", "Pow"]

    def test_primary_and_alternates(self) -> None:
        sub = parse(OPERATORS).variants[2]
        assert sub.primary == "-"
        assert sub.alternates == ["minus", "sub"]

    def test_variant_doc(self) -> None:
        variants = parse(OPERATORS).variants
        assert variants[0].doc == "Equality."
        assert variants[1].doc is None

    def test_data_expressions(self) -> None:
        variants = parse(OPERATORS).variants
        assert variants[0].data_expr is None
        assert variants[1].data_expr == "Left(6)"
        assert variants[3].data_expr == "Right(8)"

    def test_variant_lines(self) -> None:
        variants = parse(OPERATORS).variants
        assert [v.line for v in variants] == [8, 9, 10, 11]

    def test_first_doc_belongs_to_type_not_variant(self) -> None:
        tree = parse('#: Type doc.\nColor =\n#: Red doc.\nRed "red"')
        assert tree.doc == "Type doc."
        assert tree.variants[0].doc == "Red doc."

    def test_data_block_without_field_still_parses(self) -> None:
        # Rejected later by the model builder, not by the parser
        tree = parse('Color = Red "red" { 1 }')
        assert tree.variants[0].data_expr == "1"


class TestSyntaxErrors:
    """Malformed declarations raise ParseError with a location."""

    def test_zero_variants(self) -> None:
        with pytest.raises(ParseError, match="no variants"):
            parse("Color =")

    def test_zero_variants_with_trailing_comment(self) -> None:
        with pytest.raises(ParseError, match="no variants"):
            parse("Color =\n# nothing yet\n")

    def test_variant_without_literal(self) -> None:
        with pytest.raises(ParseError, match="'Red' needs a primary string literal") as exc_info:
            parse('Color =\n  Red\n  Green "green"')
        assert exc_info.value.line == 3

    def test_variant_without_literal_at_eof(self) -> None:
        with pytest.raises(ParseError, match="'Blue'"):
            parse('Color = Red "red" Blue')

    def test_missing_equals(self) -> None:
        with pytest.raises(ParseError, match="Expected '='"):
            parse('Color Red "red"')

    def test_missing_type_name(self) -> None:
        with pytest.raises(ParseError, match="Expected enum type name"):
            parse('= Red "red"')

    def test_literal_before_variant_name(self) -> None:
        with pytest.raises(ParseError, match="Expected variant name"):
            parse('Color = "red" Red')

    def test_malformed_data_field(self) -> None:
        with pytest.raises(ParseError, match="Malformed data field"):
            parse('Color { precedence } = Red "red"')

    def test_data_field_missing_type(self) -> None:
        with pytest.raises(ParseError, match="Malformed data field"):
            parse('Color { precedence: } = Red "red"')

    def test_empty_data_block(self) -> None:
        with pytest.raises(ParseError, match="Empty data block"):
            parse('Color { n: int } = Red "red" { }')

    def test_two_data_blocks(self) -> None:
        with pytest.raises(ParseError, match="Expected variant name"):
            parse('Color { n: int } = Red "red" { 1 } { 2 }')

    def test_dangling_doc_comment_at_eof(self) -> None:
        with pytest.raises(ParseError, match="Doc comment is not followed by a name") as exc_info:
            parse('Color = Red "red"\n#: orphan')
        assert exc_info.value.line == 2

    def test_doc_comment_before_literal(self) -> None:
        with pytest.raises(ParseError, match="needs a primary string literal"):
            parse('Color = Red\n#: misplaced\n"red"')

    def test_import_after_type(self) -> None:
        with pytest.raises(ParseError):
            parse('Color = Red "red"\nimport "import os"')

    def test_import_requires_string(self) -> None:
        with pytest.raises(ParseError, match="Expected import statement string"):
            parse('import os\nColor = Red "red"')

    def test_parse_error_is_syntax_error(self) -> None:
        with pytest.raises(DslSyntaxError):
            parse("Color =")
