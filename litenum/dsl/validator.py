"""Model builder and validator for the litenum DSL.

Walks a DeclarationTree into a ValidatedModel. Checks run in a fixed order
and the first violation raises, so diagnostics are reproducible:

1. Duplicate variant names
2. A literal string claimed by two variants
3. Data expressions without a declared data field
4. Names that cannot be used as Python identifiers in the generated module
5. Data field type, data expressions, or imports that would not compile
   where the generator places them
6. More variants than fit a single-byte discriminant

Data expressions are only checked at compile level. Whether they match the
declared data type surfaces when the generated module is imported or
type-checked.
"""

from __future__ import annotations

import __future__
import ast
import io
import keyword
import logging
import tokenize

from litenum.core.types import (
    MAX_VARIANTS,
    DataField,
    Invariant,
    ModelVariant,
    ValidatedModel,
    ValidationError,
)
from litenum.dsl.ast_nodes import DeclarationTree

logger = logging.getLogger(__name__)


# Builtins the generated class uses in its body, methods or annotations
GENERATED_BUILTINS = frozenset({"NotImplemented", "classmethod", "object", "str", "int", "bool"})

# Attributes of the generated enum class that a member or accessor must not shadow
RESERVED_MEMBER_NAMES = frozenset(
    {"name", "value", "mro", "lookup", "is_match", "canonical", "index"} | GENERATED_BUILTINS
)

# Module-level names of the generated module
RESERVED_TYPE_NAMES = frozenset(
    {"VARIANTS", "enum", "functools", "typing", "annotations", "dict", "tuple"}
    | GENERATED_BUILTINS
)

# Generated modules start with `from __future__ import annotations`
_FUTURE_FLAGS = __future__.annotations.compiler_flag

_OPEN_BRACKETS = frozenset("([{")
_CLOSE_BRACKETS = frozenset(")]}")
_END_TOKENS = frozenset({tokenize.NEWLINE, tokenize.NL, tokenize.ENDMARKER})


def build_model(tree: DeclarationTree) -> ValidatedModel:
    """Validate a parsed DeclarationTree and build the generation model.

    Raises:
        ValidationError: on the first violated invariant.
    """
    _check_unique_names(tree)
    literal_index = _build_literal_index(tree)
    _check_data_field(tree)
    _check_identifiers(tree)
    _check_python_syntax(tree)
    _check_variant_limit(tree)

    data_field = None
    if tree.data_field is not None:
        data_field = DataField(name=tree.data_field.name, type_ref=tree.data_field.type_ref)

    variants = [
        ModelVariant(
            index=i,
            name=decl.name,
            primary=decl.primary,
            alternates=tuple(decl.alternates),
            doc=decl.doc,
            data_expr=decl.data_expr,
        )
        for i, decl in enumerate(tree.variants)
    ]

    logger.debug(
        "Built model %s: %d variants, %d literals", tree.name, len(variants), len(literal_index)
    )
    return ValidatedModel(
        name=tree.name,
        variants=variants,
        literal_index=literal_index,
        doc=tree.doc,
        data_field=data_field,
        imports=[imp.statement for imp in tree.imports],
    )


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------


def _check_unique_names(tree: DeclarationTree) -> None:
    seen: dict[str, int] = {}
    for variant in tree.variants:
        if variant.name in seen:
            raise ValidationError(
                Invariant.UNIQUE_VARIANT_NAMES,
                f"Duplicate variant name '{variant.name}' (first declared on line {seen[variant.name]})",
                variants=(variant.name,),
                line=variant.line,
            )
        seen[variant.name] = variant.line


def _build_literal_index(tree: DeclarationTree) -> dict[str, int]:
    """Map every literal to its owning variant; a second owner is an error."""
    literal_index: dict[str, int] = {}
    for i, variant in enumerate(tree.variants):
        for literal in (variant.primary, *variant.alternates):
            owner = literal_index.setdefault(literal, i)
            if owner != i:
                first = tree.variants[owner]
                raise ValidationError(
                    Invariant.UNIQUE_LITERALS,
                    f"Literal {literal!r} is claimed by both '{first.name}' and '{variant.name}'",
                    variants=(first.name, variant.name),
                    line=variant.line,
                )
    return literal_index


def _check_data_field(tree: DeclarationTree) -> None:
    if tree.data_field is not None:
        return
    for variant in tree.variants:
        if variant.data_expr is not None:
            raise ValidationError(
                Invariant.DATA_FIELD_DECLARED,
                f"Variant '{variant.name}' supplies data but enum '{tree.name}' "
                "declares no data field",
                variants=(variant.name,),
                line=variant.line,
            )


def _check_identifiers(tree: DeclarationTree) -> None:
    problem = _identifier_problem(tree.name)
    if problem is None and tree.name in RESERVED_TYPE_NAMES:
        problem = "is used by the generated module"
    if problem:
        raise ValidationError(
            Invariant.VALID_IDENTIFIERS,
            f"Enum name '{tree.name}' {problem}",
            line=tree.line,
        )

    reserved = set(RESERVED_MEMBER_NAMES)
    if tree.data_field is not None:
        field_name = tree.data_field.name
        problem = _identifier_problem(field_name)
        if problem is None and field_name in RESERVED_MEMBER_NAMES:
            problem = "is used by the generated enum class"
        if problem:
            raise ValidationError(
                Invariant.VALID_IDENTIFIERS,
                f"Data field name '{field_name}' {problem}",
                line=tree.data_field.line,
            )
        reserved.add(field_name)

    for variant in tree.variants:
        problem = _identifier_problem(variant.name)
        if problem is None and variant.name in reserved:
            problem = "is used by the generated enum class"
        if problem:
            raise ValidationError(
                Invariant.VALID_IDENTIFIERS,
                f"Variant name '{variant.name}' {problem}",
                variants=(variant.name,),
                line=variant.line,
            )


def _identifier_problem(name: str) -> str | None:
    if not name.isidentifier():
        return "is not a valid Python identifier"
    if keyword.iskeyword(name):
        return "is a Python keyword"
    if name.startswith("_"):
        return "must not start with an underscore"
    return None


def _check_python_syntax(tree: DeclarationTree) -> None:
    if tree.data_field is not None:
        problem = _type_problem(tree.data_field.type_ref)
        if problem:
            raise ValidationError(
                Invariant.VALID_PYTHON,
                f"Data field type {tree.data_field.type_ref!r} {problem}",
                line=tree.data_field.line,
            )

    for variant in tree.variants:
        if variant.data_expr is None:
            continue
        problem = _expression_problem(variant.data_expr)
        if problem:
            raise ValidationError(
                Invariant.VALID_PYTHON,
                f"Data of variant '{variant.name}' {problem}: {variant.data_expr!r}",
                variants=(variant.name,),
                line=variant.line,
            )

    for imp in tree.imports:
        problem = _import_problem(imp.statement)
        if problem:
            raise ValidationError(
                Invariant.VALID_PYTHON,
                f"Import directive {problem}: {imp.statement!r}",
                line=imp.line,
            )


def _expression_problem(text: str) -> str | None:
    """Check data text exactly as it is emitted: one `(text),` tuple element."""
    if _escapes_parentheses(text):
        return "closes a bracket it did not open"
    return _compile_problem(f"_DATA = (\n    ({text}),\n)\n")


def _type_problem(text: str) -> str | None:
    """Check a type reference in both annotation positions the generator uses."""
    if _escapes_parentheses(text):
        return "closes a bracket it did not open"
    return _compile_problem(
        f"def _accessor() -> {text} | None: ...\n_DATA: tuple[{text} | None, ...] = ()\n"
    )


def _import_problem(text: str) -> str | None:
    try:
        module = ast.parse(text, mode="exec")
    except (SyntaxError, ValueError):
        return "is not a Python import statement"
    if len(module.body) != 1 or not isinstance(module.body[0], (ast.Import, ast.ImportFrom)):
        return "is not a single Python import statement"
    node = module.body[0]
    if isinstance(node, ast.ImportFrom) and node.module == "__future__":
        return "cannot be a __future__ import"
    return None


def _escapes_parentheses(text: str) -> bool:
    """True if `text` closes the parentheses the generator wraps it in."""
    depth = 0
    closed = False
    try:
        for token in tokenize.generate_tokens(io.StringIO(f"({text})").readline):
            if closed and token.type not in _END_TOKENS:
                return True
            if token.type != tokenize.OP:
                continue
            if token.string in _OPEN_BRACKETS:
                depth += 1
            elif token.string in _CLOSE_BRACKETS:
                depth -= 1
                closed = depth == 0
    except (tokenize.TokenError, SyntaxError, ValueError):
        # Left to the compile check, which reports the actual problem
        return False
    return False


def _compile_problem(source: str) -> str | None:
    try:
        compile(source, "<litenum>", "exec", flags=_FUTURE_FLAGS, dont_inherit=True)
    except SyntaxError as exc:
        return f"is not valid Python ({exc.msg})"
    except ValueError as exc:
        return f"is not valid Python ({exc})"
    return None


def _check_variant_limit(tree: DeclarationTree) -> None:
    if len(tree.variants) > MAX_VARIANTS:
        raise ValidationError(
            Invariant.VARIANT_LIMIT,
            f"Enum '{tree.name}' declares {len(tree.variants)} variants; "
            f"at most {MAX_VARIANTS} fit a single-byte discriminant",
            line=tree.line,
        )
