"""Schema document assembler.

Turns the parameter catalog and the component schemas into a Document:
one scrape operation whose query parameters come from the catalog and
whose responses point into the schema registry by name.
"""

import logging
from typing import Any, Iterable, Mapping

from pydantic import BaseModel, ConfigDict

from scraper_contract.catalog.aliases import AliasIndex
from scraper_contract.catalog.base import ZERO_VALUES, ParamKind, ParameterSpec
from scraper_contract.config import DocumentSettings, Info, Server, Tag
from scraper_contract.errors import SchemaIntegrityError
from scraper_contract.schema.nodes import PrimitiveNode, SchemaNode, binary, obj, one_of, ref, string
from scraper_contract.schema.registry import SchemaRegistry

logger = logging.getLogger(__name__)

SCRAPE_PATH = "/"
SCRAPE_DESCRIPTION = """Fetches and processes a web page with optional JavaScript rendering, screenshots, and data extraction.

## Basic Usage
```
GET /?url=https://example.com
```

## With JavaScript Rendering
```
GET /?url=https://example.com&render_js=true&wait=2000
```

## With Data Extraction
```
GET /?url=https://example.com&extract_rules={"title":{"selector":"h1","type":"item","output":"@text"}}
```

## With Screenshot
```
GET /?url=https://example.com&screenshot=true&json_response=true
```"""

SCRAPE_TAG = "Scraping"
ERROR_SCHEMA = "ErrorResponse"
VERBOSE_SCHEMA = "VerboseResult"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class QueryParameter(_Frozen):
    """A query-string parameter of the scrape operation."""

    name: str
    description: str
    required: bool
    value_schema: PrimitiveNode
    example: str | int | bool | None = None


class Response(_Frozen):
    description: str
    content: dict[str, SchemaNode] | None = None


class Operation(_Frozen):
    path: str
    method: str
    operation_id: str
    summary: str
    description: str
    tags: tuple[str, ...]
    parameters: tuple[QueryParameter, ...]
    responses: dict[str, Response]


class Document(_Frozen):
    info: Info
    servers: tuple[Server, ...]
    tags: tuple[Tag, ...]
    operations: tuple[Operation, ...]
    registry: SchemaRegistry


def omits_default(kind: ParamKind, value: Any) -> bool:
    """True when value is the natural zero of kind and is left out of the document.

    A boolean flag that defaults to false documents nothing beyond the
    implicit behaviour, so the keyword is dropped.
    """
    zero = ZERO_VALUES[kind]
    return value is None or (type(value) is type(zero) and value == zero)


def build_parameter(spec: ParameterSpec) -> QueryParameter:
    """Build the query parameter description for one catalog entry."""
    schema = PrimitiveNode(
        type=spec.kind.value,
        enum=spec.enum,
        minimum=spec.minimum,
        maximum=spec.maximum,
        default=None if omits_default(spec.kind, spec.default) else spec.default,
    )
    return QueryParameter(
        name=spec.name,
        description=spec.description,
        required=spec.required,
        value_schema=schema,
        example=spec.example,
    )


def build_responses() -> dict[str, Response]:
    """Response table of the scrape operation, keyed by status code."""

    def error(description: str) -> Response:
        return Response(description=description, content={"application/json": ref(ERROR_SCHEMA)})

    return {
        "200": Response(
            description="Successful response. Content type depends on request parameters.",
            content={
                "text/html": string("Raw HTML content of the page"),
                "application/json": one_of(
                    ref(VERBOSE_SCHEMA),
                    obj(
                        description="Extracted data (when using extract_rules without json_response)",
                        additional_properties=True,
                    ),
                ),
                "image/png": binary("Screenshot image (when screenshot requested without json_response)"),
                "application/octet-stream": binary("Binary file content (when binary_target=true)"),
            },
        ),
        "400": error("Bad request - missing or invalid parameters"),
        "408": error("Request timeout - page took too long to load"),
        "500": error("Internal server error"),
        "502": error("Target website error (when transparent_status_code=true)"),
    }


def assemble(
    catalog: Iterable[ParameterSpec],
    schemas: Mapping[str, SchemaNode],
    settings: DocumentSettings | None = None,
) -> Document:
    """Assemble the API description document.

    Raises DuplicateNameError, SchemaIntegrityError or ConfigurationError;
    nothing is returned unless the whole document is consistent.
    """
    settings = settings or DocumentSettings()
    specs = tuple(catalog)

    # Uniqueness is checked before any parameter is emitted.
    AliasIndex.from_catalog(specs)
    parameters = tuple(build_parameter(spec) for spec in specs)

    registry = schemas if isinstance(schemas, SchemaRegistry) else SchemaRegistry(schemas)
    responses = build_responses()
    for status, response in responses.items():
        for media_type, node in (response.content or {}).items():
            missing = registry.dangling(node)
            if missing:
                raise SchemaIntegrityError(
                    f"response {status} ({media_type}) references undefined schema(s): {', '.join(missing)}"
                )

    operation = Operation(
        path=SCRAPE_PATH,
        method="get",
        operation_id="scrape",
        summary="Scrape a web page",
        description=SCRAPE_DESCRIPTION,
        tags=(SCRAPE_TAG,),
        parameters=parameters,
        responses=responses,
    )
    logger.debug("Assembled %d parameters and %d schemas", len(parameters), len(registry))

    return Document(
        info=settings.info,
        servers=settings.servers,
        tags=settings.tags,
        operations=(operation,),
        registry=registry,
    )
