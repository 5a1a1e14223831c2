"""Reader for a previously published OpenAPI document.

Used to detect drift between the committed document and what the current
catalog and schemas would generate.
"""

from pathlib import Path

import yaml

SECTIONS = ("openapi", "info", "servers", "tags")
HTTP_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH")


def load_document(file_path: Path) -> dict:
    """Load an OpenAPI document from a JSON or YAML file."""
    text = file_path.read_text(encoding="utf-8")
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"{file_path}: cannot parse document: {e}") from e
    if not isinstance(doc, dict) or "openapi" not in doc:
        raise ValueError(f"{file_path} is not an OpenAPI document")
    return doc


def _operations(doc: dict) -> dict[str, dict]:
    result = {}
    for path, methods in doc.get("paths", {}).items():
        for method, operation in methods.items():
            if method.upper() not in HTTP_METHODS:
                continue
            result[f"{method.upper()} {path}"] = operation
    return result


def _query_parameters(operation: dict) -> dict[str, dict]:
    return {p["name"]: p for p in operation.get("parameters", []) if p.get("in", "query") == "query"}


def query_parameter_names(doc: dict) -> list[str]:
    """Names of all query parameters across every operation, in document order."""
    names: list[str] = []
    for operation in _operations(doc).values():
        for name in _query_parameters(operation):
            if name not in names:
                names.append(name)
    return names


def diff_documents(expected: dict, actual: dict) -> list[str]:
    """Describe how actual differs from expected, one line per difference."""
    lines = []
    for section in SECTIONS:
        if expected.get(section) != actual.get(section):
            lines.append(f"{section}: changed")

    expected_ops = _operations(expected)
    actual_ops = _operations(actual)
    for key in sorted(expected_ops.keys() - actual_ops.keys()):
        lines.append(f"operation {key}: missing")
    for key in sorted(actual_ops.keys() - expected_ops.keys()):
        lines.append(f"operation {key}: unexpected")

    for key in sorted(expected_ops.keys() & actual_ops.keys()):
        want, got = expected_ops[key], actual_ops[key]
        want_params, got_params = _query_parameters(want), _query_parameters(got)
        for name in want_params:
            if name not in got_params:
                lines.append(f"{key} parameter {name}: missing")
            elif want_params[name] != got_params[name]:
                lines.append(f"{key} parameter {name}: changed")
        for name in got_params:
            if name not in want_params:
                lines.append(f"{key} parameter {name}: unexpected")
        if list(want_params) != list(got_params) and set(want_params) == set(got_params):
            lines.append(f"{key} parameters: reordered")
        if want.get("responses") != got.get("responses"):
            lines.append(f"{key} responses: changed")
        rest = {k for k in want.keys() | got.keys() if k not in ("parameters", "responses")}
        for field in sorted(rest):
            if want.get(field) != got.get(field):
                lines.append(f"{key} {field}: changed")

    want_schemas = expected.get("components", {}).get("schemas", {})
    got_schemas = actual.get("components", {}).get("schemas", {})
    for name in want_schemas:
        if name not in got_schemas:
            lines.append(f"schema {name}: missing")
        elif want_schemas[name] != got_schemas[name]:
            lines.append(f"schema {name}: changed")
    for name in got_schemas:
        if name not in want_schemas:
            lines.append(f"schema {name}: unexpected")
    return lines
