"""Core data types for litenum.

Shared dataclasses and errors used by the DSL front end and the code
generator. The validated model exposes to_dict() for JSON output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# Discriminants are 0..MAX_VARIANTS-1 so every tag fits in one byte.
MAX_VARIANTS = 256


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class Invariant(str, Enum):
    """Model invariants checked by the model builder, in check order."""

    UNIQUE_VARIANT_NAMES = "unique-variant-names"
    UNIQUE_LITERALS = "unique-literals"
    DATA_FIELD_DECLARED = "data-field-declared"
    VALID_IDENTIFIERS = "valid-identifiers"
    VALID_PYTHON = "valid-python"
    VARIANT_LIMIT = "variant-limit"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class GenerationError(Exception):
    """Base class for every error that aborts a generation pass."""


class DslSyntaxError(GenerationError):
    """Malformed DSL input, with the location of the offending construct."""

    def __init__(self, message: str, line: int, column: int) -> None:
        self.message = message
        self.line = line
        self.column = column
        super().__init__(f"Syntax error at L{line}:{column}: {message}")


class ValidationError(GenerationError):
    """A well-formed declaration that violates a model invariant."""

    def __init__(
        self,
        invariant: Invariant,
        message: str,
        variants: tuple[str, ...] = (),
        line: int = 0,
    ) -> None:
        self.invariant = invariant
        self.message = message
        self.variants = variants
        self.line = line
        loc = f"L{line}" if line else "unknown location"
        super().__init__(f"[{invariant.value}] {loc}: {message}")


# ---------------------------------------------------------------------------
# Validated model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DataField:
    """The single associated-data field declared on an enum type."""

    name: str
    type_ref: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "type_ref": self.type_ref}


@dataclass(frozen=True)
class ModelVariant:
    """One variant of a validated model, with its declaration position."""

    index: int
    name: str
    primary: str
    alternates: tuple[str, ...] = ()
    doc: str | None = None
    data_expr: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "name": self.name,
            "primary": self.primary,
            "alternates": list(self.alternates),
            "doc": self.doc,
            "data_expr": self.data_expr,
        }


@dataclass
class ValidatedModel:
    """Checked, generation-ready description of one enum type.

    `variants` is in declaration order and `variants[i].index == i`.
    `literal_index` maps every literal (primary or alternate) to the index
    of the one variant that owns it.
    """

    name: str
    variants: list[ModelVariant] = field(default_factory=list)
    literal_index: dict[str, int] = field(default_factory=dict)
    doc: str | None = None
    data_field: DataField | None = None
    imports: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "doc": self.doc,
            "data_field": self.data_field.to_dict() if self.data_field else None,
            "imports": self.imports,
            "variants": [v.to_dict() for v in self.variants],
        }
