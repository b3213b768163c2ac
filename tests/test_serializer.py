"""Tests for the JSON view of a validated model."""

from __future__ import annotations

import json

from litenum.compiler.compiler import model_from_source
from litenum.compiler.serializer import serialize_to_json

OPERATORS = """
import "from enum_support import Left"
#: Operators.
Op { precedence: Left } =
    #: Not equal.
    Neq "≠" "!="
    Add "+" { Left(6) }
"""


class TestSerializer:
    def test_document_shape(self) -> None:
        data = json.loads(serialize_to_json(model_from_source(OPERATORS)))
        assert data["name"] == "Op"
        assert data["doc"] == "Operators."
        assert data["data_field"] == {"name": "precedence", "type_ref": "Left"}
        assert data["imports"] == ["from enum_support import Left"]
        assert data["variants"][0] == {
            "index": 0,
            "name": "Neq",
            "primary": "≠",
            "alternates": ["!="],
            "doc": "Not equal.",
            "data_expr": None,
        }

    def test_literal_index_is_not_emitted(self) -> None:
        data = json.loads(serialize_to_json(model_from_source(OPERATORS)))
        assert "literal_index" not in data

    def test_non_ascii_stays_readable(self) -> None:
        text = serialize_to_json(model_from_source(OPERATORS))
        assert '"≠"' in text
        assert json.loads(text)["variants"][1]["data_expr"] == "Left(6)"

    def test_indent(self) -> None:
        model = model_from_source('Color = Red "red"')
        assert serialize_to_json(model, indent=4).startswith('{\n    "name": "Color"')

    def test_model_without_field(self) -> None:
        data = json.loads(serialize_to_json(model_from_source('Color = Red "red"')))
        assert data["data_field"] is None
        assert data["variants"] == [
            {
                "index": 0,
                "name": "Red",
                "primary": "red",
                "alternates": [],
                "doc": None,
                "data_expr": None,
            }
        ]
