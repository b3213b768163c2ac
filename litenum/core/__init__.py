"""litenum core: shared types, errors, and configuration.

Import the most commonly used types from here for convenience:

    from litenum.core import ValidatedModel, ValidationError
"""

from litenum.core.config import LitEnumConfig, get_config, set_config
from litenum.core.types import (
    MAX_VARIANTS,
    DataField,
    DslSyntaxError,
    GenerationError,
    Invariant,
    ModelVariant,
    ValidatedModel,
    ValidationError,
)

__all__ = [
    "MAX_VARIANTS",
    "DataField",
    "DslSyntaxError",
    "GenerationError",
    "Invariant",
    "LitEnumConfig",
    "ModelVariant",
    "ValidatedModel",
    "ValidationError",
    "get_config",
    "set_config",
]
