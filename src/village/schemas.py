import json
import logging
from functools import lru_cache
from importlib import resources
from typing import Any, Dict, List

from jsonschema import Draft202012Validator, ValidationError

logger = logging.getLogger(__name__)

_SCHEMA_PACKAGE = "village.data"


@lru_cache(maxsize=None)
def load_schema(name: str) -> Dict[str, Any]:
    """
    Load a bundled JSON schema by name (file name without ".schema.json").

    Cached since the schemas are static package data.
    """
    entry = resources.files(_SCHEMA_PACKAGE).joinpath("schemas").joinpath(f"{name}.schema.json")
    if not entry.is_file():
        raise FileNotFoundError(f"Schema not found: {name}")
    with entry.open("r", encoding="utf-8") as f:
        logger.debug("Loading %s schema", name)
        return json.load(f)


def schema_errors(data: Any, name: str) -> List[ValidationError]:
    validator = Draft202012Validator(load_schema(name))
    return sorted(validator.iter_errors(data), key=lambda e: list(e.path))


def describe_errors(errors: List[ValidationError]) -> str:
    parts = []
    for e in errors:
        path = "/".join(str(p) for p in e.path) or "<root>"
        parts.append(f"at {path}: {e.message}")
    return "; ".join(parts)


__all__ = [
    "load_schema",
    "schema_errors",
    "describe_errors",
]
