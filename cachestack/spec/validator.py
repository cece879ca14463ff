"""Validate cache.yaml against the JSON Schema for the declared apiVersion."""

import json
from pathlib import Path

import jsonschema

SCHEMA_FILES = {
    "cachestack.io/v1": "cachestack-spec-v1.json",
}


def _schema_dir() -> Path:
    """Directory containing schema files (cachestack/schema/)."""
    return Path(__file__).resolve().parent.parent / "schema"


def load_schema(api_version: str) -> dict:
    """Load the JSON Schema for the given apiVersion, e.g. 'cachestack.io/v1'."""
    name = SCHEMA_FILES.get(api_version)
    if name is None:
        raise ValueError(f"Unsupported apiVersion: {api_version}")
    path = _schema_dir() / name
    if not path.exists():
        raise FileNotFoundError(f"Schema not found: {path}")
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def validate_cache_spec(data: dict) -> None:
    """Validate a parsed cache.yaml (dict) against its apiVersion schema.

    Only the shape is checked here. Engine, version, password strength and
    subnet type are checked by the validation predicates so that each keeps
    its own error kind.

    Raises:
        jsonschema.ValidationError: If validation fails. Message lists up to
            ten errors with their paths.
    """
    api_version = data.get("apiVersion")
    if not api_version:
        raise jsonschema.ValidationError("Missing required field: apiVersion")
    schema = load_schema(api_version)
    validator = jsonschema.Draft202012Validator(schema)
    errors = list(validator.iter_errors(data))
    if errors:
        lines = ["cache.yaml validation failed:"]
        for i, err in enumerate(errors[:10], 1):
            path = ".".join(str(p) for p in err.absolute_path) if err.absolute_path else "(root)"
            lines.append(f"  {i}. {path}: {err.message}")
        if len(errors) > 10:
            lines.append(f"  ... and {len(errors) - 10} more errors")
        raise jsonschema.ValidationError("\n".join(lines))
