"""Schema loading utilities for the bundled JSON schemas."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Dict

import jsonschema

_SCHEMA_ROOT = Path(__file__).resolve().parent / "schemas"

_schema_cache: Dict[str, Dict[str, Any]] = {}
_compiled_cache: Dict[str, Any] = {}


def load_schema(name: str) -> Dict[str, Any]:
    """Load ``<name>.schema.json`` from the bundled schema directory."""

    if "/" in name or "\\" in name or name.startswith("."):
        raise ValueError(f"Schema name must be a bare identifier, got {name!r}")

    if name in _schema_cache:
        return copy.deepcopy(_schema_cache[name])

    resolved = _SCHEMA_ROOT / f"{name}.schema.json"
    schema = json.loads(resolved.read_text("utf-8"))
    _schema_cache[name] = schema
    return copy.deepcopy(schema)


def compile_schema(name: str) -> Any:
    """Return a cached, checked ``jsonschema`` validator for schema ``name``."""

    if name in _compiled_cache:
        return _compiled_cache[name]

    schema_dict = load_schema(name)
    validator_cls = jsonschema.validators.validator_for(schema_dict, default=jsonschema.Draft202012Validator)
    validator_cls.check_schema(schema_dict)
    validator = validator_cls(schema_dict)
    _compiled_cache[name] = validator
    return validator


__all__ = ["compile_schema", "load_schema"]
