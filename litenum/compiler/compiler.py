"""litenum compiler: emits a Python enum module from a validated model.

Takes a ValidatedModel (from the model builder) and produces the source text
of a self-contained module: the enum class, its literal tables, and the
ordered VARIANTS constant. Output depends only on the model and the config,
so the same input always yields byte-identical text.
"""

from __future__ import annotations

import logging
from pathlib import Path

from litenum.core.config import LitEnumConfig, get_config
from litenum.core.types import ValidatedModel
from litenum.dsl.lexer import Lexer
from litenum.dsl.parser import Parser
from litenum.dsl.validator import build_model

logger = logging.getLogger(__name__)


class EnumCompiler:
    """Compile ValidatedModel objects into Python module source.

    Usage:
        compiler = EnumCompiler()
        source = compiler.compile(model)
    """

    def __init__(self, config: LitEnumConfig | None = None) -> None:
        self._config = config or get_config()
        self._indent = self._config.indent

    def compile(self, model: ValidatedModel) -> str:
        """Render the module for one model."""
        lines: list[str] = []
        self._emit_preamble(model, lines)
        self._emit_class(model, lines)
        self._emit_tables(model, lines)
        self._emit_variants(model, lines)
        if self._config.emit_all:
            lines.append("")
            lines.append(f'__all__ = ["{model.name}", "VARIANTS"]')

        logger.debug("Emitted %d lines for %s", len(lines), model.name)
        return "\n".join(lines) + "\n"

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _emit_preamble(self, model: ValidatedModel, lines: list[str]) -> None:
        if self._config.emit_header:
            lines.extend(f"# {line}" for line in self._config.header_text.splitlines())
        lines.extend(_docstring(model.doc or f"The {model.name} enumeration.", ""))
        lines.append("")
        lines.append("from __future__ import annotations")
        lines.append("")
        lines.append("import enum")
        lines.append("import functools")
        lines.append("import typing")
        if model.imports:
            lines.append("")
            lines.extend(model.imports)

    def _emit_class(self, model: ValidatedModel, lines: list[str]) -> None:
        ind = self._indent
        name = model.name

        lines.append("")
        lines.append("")
        # total_ordering fills in <=, > and >= from __lt__
        lines.append("@functools.total_ordering")
        lines.append(f"class {name}(enum.Enum):")
        if model.doc:
            lines.extend(_docstring(model.doc, ind))
            lines.append("")

        for variant in model.variants:
            lines.append(f"{ind}{variant.name} = {variant.index}")
            if variant.doc:
                lines.extend(_docstring(variant.doc, ind))

        self._emit_method(
            lines,
            "def __lt__(self, other: object) -> bool:",
            None,
            [
                "if self.__class__ is other.__class__:",
                f"{ind}return self.value < other.value  # type: ignore[attr-defined]",
                "return NotImplemented",
            ],
        )
        self._emit_method(
            lines,
            "def __str__(self) -> str:",
            None,
            ["return _CANONICAL[self.value]"],
        )
        self._emit_method(
            lines,
            f"def lookup(cls, text: str) -> {name} | None:",
            "Return the variant with `text` as a primary or alternate literal, or None.",
            ["return _LOOKUP.get(text)"],
            decorator="@classmethod",
        )
        self._emit_method(
            lines,
            "def is_match(cls, text: str) -> bool:",
            "Return True if `text` is a literal of any variant.",
            ["return text in _LOOKUP"],
            decorator="@classmethod",
        )
        self._emit_method(
            lines,
            "def canonical(self) -> str:",
            "Return the primary literal of this variant.",
            ["return _CANONICAL[self.value]"],
        )
        self._emit_method(
            lines,
            "def index(self) -> int:",
            "Return the zero-based declaration position of this variant.",
            ["return self.value"],
        )

        if model.data_field is not None:
            field = model.data_field
            self._emit_method(
                lines,
                f"def {field.name}(self) -> {field.type_ref} | None:",
                f"Return the {field.name} of this variant, or None if it declares none.",
                ["return _DATA[self.value]"],
            )

    def _emit_tables(self, model: ValidatedModel, lines: list[str]) -> None:
        ind = self._indent
        name = model.name

        lines.append("")
        lines.append("")
        lines.append(f"_LOOKUP: dict[str, {name}] = {{")
        # literal_index is in declaration order, primary before alternates
        for literal, index in model.literal_index.items():
            lines.append(f"{ind}{literal!r}: {name}.{model.variants[index].name},")
        lines.append("}")

        lines.append("")
        lines.append("_CANONICAL: tuple[str, ...] = (")
        lines.extend(f"{ind}{variant.primary!r}," for variant in model.variants)
        lines.append(")")

        if model.data_field is not None:
            lines.append("")
            lines.append(f"_DATA: tuple[{model.data_field.type_ref} | None, ...] = (")
            for variant in model.variants:
                value = "None" if variant.data_expr is None else f"({variant.data_expr})"
                lines.append(f"{ind}{value},")
            lines.append(")")

    def _emit_variants(self, model: ValidatedModel, lines: list[str]) -> None:
        lines.append("")
        lines.append("# Every variant in declaration order; VARIANTS[i].index() == i.")
        lines.append("# Indexing is not bounds-checked here: an out-of-range index raises the")
        lines.append("# tuple's IndexError and negative indices wrap. Callers own range checks.")
        lines.append(f"VARIANTS: typing.Final[tuple[{model.name}, ...]] = (")
        lines.extend(f"{self._indent}{model.name}.{v.name}," for v in model.variants)
        lines.append(")")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _emit_method(
        self,
        lines: list[str],
        signature: str,
        doc: str | None,
        body: list[str],
        decorator: str | None = None,
    ) -> None:
        ind = self._indent
        lines.append("")
        if decorator:
            lines.append(f"{ind}{decorator}")
        lines.append(f"{ind}{signature}")
        if doc:
            lines.extend(_docstring(doc, ind * 2))
        lines.extend(f"{ind * 2}{line}" for line in body)


def _docstring(text: str, indent: str) -> list[str]:
    """Render `text` as a triple-quoted docstring at the given indent."""
    body = text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    if body.endswith('"'):
        body = body[:-1] + '\\"'

    doc_lines = body.split("\n")
    if len(doc_lines) == 1:
        return [f'{indent}"""{body}"""']

    out = [f'{indent}"""{doc_lines[0]}']
    out.extend(f"{indent}{line}" if line.strip() else "" for line in doc_lines[1:])
    out.append(f'{indent}"""')
    return out


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


def model_from_source(source: str) -> ValidatedModel:
    """Lex, parse, and validate DSL text into a ValidatedModel."""
    tokens = Lexer(source).tokenize()
    tree = Parser(tokens).parse()
    logger.debug("Parsed enum %s with %d variants", tree.name, len(tree.variants))
    return build_model(tree)


def compile_source(source: str, config: LitEnumConfig | None = None) -> str:
    """Run the full pipeline on DSL text and return the generated module."""
    return EnumCompiler(config).compile(model_from_source(source))


def compile_file(path: str | Path, config: LitEnumConfig | None = None) -> str:
    """Read a .lenum file and return the generated module."""
    config = config or get_config()
    source = Path(path).read_text(encoding=config.encoding)
    return compile_source(source, config)
