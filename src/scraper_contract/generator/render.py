"""Serialize a Document into the OpenAPI 3.0 object model."""

import json

import yaml

from scraper_contract.generator.document import Document, Operation, QueryParameter, Response
from scraper_contract.schema.nodes import ArrayNode, PrimitiveNode, RefNode, SchemaNode, UnionNode
from scraper_contract.schema.registry import SchemaRegistry

OPENAPI_VERSION = "3.0.3"


def render_schema(node: SchemaNode) -> dict:
    """Convert a SchemaNode into a JSON Schema / OpenAPI schema object."""
    if isinstance(node, RefNode):
        return {"$ref": SchemaRegistry.pointer(node.ref)}

    if isinstance(node, PrimitiveNode):
        out: dict = {"type": node.type}
        _put(out, "format", node.format)
        _put(out, "description", node.description)
        _put(out, "enum", list(node.enum) if node.enum is not None else None)
        if node.nullable:
            out["nullable"] = True
        _put(out, "minimum", node.minimum)
        _put(out, "maximum", node.maximum)
        _put(out, "default", node.default)
        _put(out, "example", node.example)
        return out

    if isinstance(node, ArrayNode):
        out = {"type": "array", "items": render_schema(node.items)}
        _put(out, "description", node.description)
        return out

    if isinstance(node, UnionNode):
        out = {"oneOf": [render_schema(alt) for alt in node.one_of]}
        _put(out, "description", node.description)
        return out

    out = {"type": "object"}
    _put(out, "description", node.description)
    if node.properties:
        out["properties"] = {name: render_schema(child) for name, child in node.properties.items()}
    if node.required:
        out["required"] = list(node.required)
    if isinstance(node.additional_properties, bool):
        out["additionalProperties"] = node.additional_properties
    elif node.additional_properties is not None:
        out["additionalProperties"] = render_schema(node.additional_properties)
    _put(out, "minProperties", node.min_properties)
    _put(out, "maxProperties", node.max_properties)
    _put(out, "example", node.example)
    return out


def _put(out: dict, key: str, value) -> None:
    if value is not None:
        out[key] = value


def _render_parameter(param: QueryParameter) -> dict:
    out = {
        "name": param.name,
        "in": "query",
        "description": param.description,
        "required": param.required,
        "schema": render_schema(param.value_schema),
    }
    _put(out, "example", param.example)
    return out


def _render_response(response: Response) -> dict:
    out: dict = {"description": response.description}
    if response.content:
        out["content"] = {
            media_type: {"schema": render_schema(node)} for media_type, node in response.content.items()
        }
    return out


def _render_operation(op: Operation) -> dict:
    return {
        "summary": op.summary,
        "description": op.description,
        "operationId": op.operation_id,
        "tags": list(op.tags),
        "parameters": [_render_parameter(p) for p in op.parameters],
        "responses": {status: _render_response(r) for status, r in op.responses.items()},
    }


def render_document(doc: Document) -> dict:
    """Build the OpenAPI dict for doc. Output key order is stable."""
    paths: dict[str, dict] = {}
    for op in doc.operations:
        paths.setdefault(op.path, {})[op.method] = _render_operation(op)

    return {
        "openapi": OPENAPI_VERSION,
        "info": doc.info.model_dump(exclude_none=True),
        "servers": [s.model_dump(exclude_none=True) for s in doc.servers],
        "tags": [t.model_dump(exclude_none=True) for t in doc.tags],
        "paths": paths,
        "components": {
            "schemas": {name: render_schema(node) for name, node in doc.registry.items()},
        },
    }


def dump_document(doc: Document, fmt: str = "json") -> str:
    """Serialize doc as JSON (2-space indent) or YAML."""
    data = render_document(doc)
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
