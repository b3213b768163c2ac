"""JSON view of a validated litenum model, printed by `litenum check --json`.

`literal_index` is left out: it is derived from the variants' primaries and alternates.
"""

from __future__ import annotations

import json

from litenum.core.types import ValidatedModel


def serialize_to_json(model: ValidatedModel, indent: int = 2) -> str:
    """Serialize a ValidatedModel to a JSON string, keeping non-ASCII literals readable."""
    return json.dumps(model.to_dict(), indent=indent, ensure_ascii=False)
