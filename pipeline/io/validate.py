from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from jsonschema.validators import Draft202012Validator as Validator


def load_schema(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        schema = yaml.safe_load(f)
    Validator.check_schema(schema)
    return schema


def validate_obj(schema: dict[str, Any], obj: Any) -> None:
    """Raise jsonschema.ValidationError on the first (best) violation."""
    Validator(schema).validate(obj)


def schema_errors(schema: dict[str, Any], obj: Any) -> list[str]:
    """All violations as "<path>: <message>" strings, in document order."""
    errs = sorted(Validator(schema).iter_errors(obj), key=lambda e: [str(p) for p in e.absolute_path])
    out: list[str] = []
    for e in errs:
        loc = "/".join(str(p) for p in e.absolute_path) or "<root>"
        out.append(f"{loc}: {e.message}")
    return out
