from __future__ import annotations

import json
from typing import Any

from ..exceptions import CorruptSaveData
from ..schemas import describe_errors, schema_errors
from .models import SaveRecord


def encode_save(record: SaveRecord) -> str:
    """Encode a SaveRecord to a pretty-printed JSON string."""
    return json.dumps(record.to_dict(), ensure_ascii=False, indent=2)


def decode_save(text: str) -> SaveRecord:
    """Decode JSON text into a SaveRecord, validating it against the save schema."""
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as e:
        raise CorruptSaveData(f"Invalid JSON: {e}") from e

    errors = schema_errors(data, "save")
    if errors:
        raise CorruptSaveData(f"Save document does not match schema: {describe_errors(errors)}")
    return SaveRecord.from_dict(data)
