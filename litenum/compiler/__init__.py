"""litenum compiler: turns .lenum declarations into Python enum modules.

Usage:
    from litenum.compiler import compile_source, model_from_source, serialize_to_json

    module_text = compile_source(source)
    model_json = serialize_to_json(model_from_source(source))
"""

from litenum.compiler.compiler import (
    EnumCompiler,
    compile_file,
    compile_source,
    model_from_source,
)
from litenum.compiler.serializer import serialize_to_json

__all__ = [
    "EnumCompiler",
    "compile_file",
    "compile_source",
    "model_from_source",
    "serialize_to_json",
]
