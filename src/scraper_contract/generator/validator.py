"""Validates a rendered OpenAPI document for reference and schema correctness."""

from typing import Any, Iterator

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError

from scraper_contract.schema.registry import REF_PREFIX


def _iter_refs(value: Any, pointer: str = "#") -> Iterator[tuple[str, str]]:
    """Yield (location, target) for every $ref found below value."""
    if isinstance(value, dict):
        for key, child in value.items():
            if key == "$ref" and isinstance(child, str):
                yield pointer, child
            else:
                yield from _iter_refs(child, f"{pointer}/{key}")
    elif isinstance(value, list):
        for i, child in enumerate(value):
            yield from _iter_refs(child, f"{pointer}/{i}")


def validate_references(document: dict) -> dict[str, str]:
    """Check that every $ref points at an existing components.schemas entry.

    Returns dict of {location: error_message} for unresolved references.
    """
    schemas = document.get("components", {}).get("schemas", {})
    errors = {}
    for location, target in _iter_refs(document):
        if not target.startswith(REF_PREFIX):
            errors[location] = f"unsupported reference '{target}'"
            continue
        name = target[len(REF_PREFIX):]
        if name not in schemas:
            errors[location] = f"unresolved reference '{target}'"
    return errors


def validate_components(document: dict) -> dict[str, str]:
    """Check each component schema against the JSON Schema meta-schema.

    Returns dict of {schema_name: error_message} for malformed schemas.
    """
    errors = {}
    for name, schema in document.get("components", {}).get("schemas", {}).items():
        try:
            Draft7Validator.check_schema(schema)
        except SchemaError as e:
            errors[name] = f"SchemaError: {e.message}"
    return errors


def validate_document(document: dict) -> dict[str, str]:
    """Run all validations on a rendered document.

    Returns dict of {location: error_message} for all problems found.
    Component schemas are only checked once every reference resolves.
    """
    errors = {}
    errors.update(validate_references(document))

    if not errors:
        errors.update(validate_components(document))

    return errors


def _as_json_schema(schema: Any) -> Any:
    """Copy of an OpenAPI 3.0 schema with ``nullable: true`` expressed as a null type."""
    if isinstance(schema, list):
        return [_as_json_schema(item) for item in schema]
    if not isinstance(schema, dict):
        return schema
    out = {}
    for key, child in schema.items():
        if key == "nullable":
            continue
        if key == "properties" and isinstance(child, dict):
            out[key] = {name: _as_json_schema(prop) for name, prop in child.items()}
        elif key in ("enum", "default", "example"):
            out[key] = child
        else:
            out[key] = _as_json_schema(child)
    if schema.get("nullable") is True and "type" in out:
        out["type"] = [out["type"], "null"]
        if "enum" in out:
            out["enum"] = [*out["enum"], None]
    return out


def validate_instance(document: dict, schema_name: str, instance: Any) -> list[str]:
    """Validate instance against a component schema of the rendered document.

    References are resolved against the document itself, so recursive
    schemas are expanded only as deep as the instance goes. Fields marked
    ``nullable`` accept null.
    """
    schemas = document.get("components", {}).get("schemas", {})
    root = {
        "components": {"schemas": {name: _as_json_schema(schema) for name, schema in schemas.items()}},
        "allOf": [{"$ref": f"{REF_PREFIX}{schema_name}"}],
    }
    validator = Draft7Validator(root)
    return [
        f"{'/'.join(str(p) for p in error.absolute_path) or '<root>'}: {error.message}"
        for error in validator.iter_errors(instance)
    ]
