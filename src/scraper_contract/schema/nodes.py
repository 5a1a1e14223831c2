"""Schema node types describing response and body shapes.

A SchemaNode is one of five closed variants. Recursion is only expressed
through RefNode, which names an entry in the SchemaRegistry instead of
embedding the target, so every node tree is finite.
"""

from typing import Any, Iterator, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from scraper_contract.errors import SchemaIntegrityError


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class PrimitiveNode(_Node):
    """A scalar value, optionally nullable or restricted to an enum."""

    node: Literal["primitive"] = "primitive"
    type: Literal["string", "number", "integer", "boolean"]
    description: str | None = None
    format: str | None = None
    nullable: bool = False
    enum: tuple[str, ...] | None = None
    minimum: int | float | None = None
    maximum: int | float | None = None
    default: Any = None
    example: Any = None

    @model_validator(mode="after")
    def _check_shape(self) -> "PrimitiveNode":
        if self.enum is not None and not self.enum:
            raise SchemaIntegrityError("enum must not be empty")
        if self.enum is not None and self.type != "string":
            raise SchemaIntegrityError(f"enum is only allowed on string schemas, not {self.type}")
        if self.minimum is not None and self.maximum is not None and self.minimum > self.maximum:
            raise SchemaIntegrityError(f"minimum {self.minimum} is greater than maximum {self.maximum}")
        return self


class ArrayNode(_Node):
    node: Literal["array"] = "array"
    items: "SchemaNode"
    description: str | None = None


class ObjectNode(_Node):
    """An object with ordered properties.

    additional_properties: None leaves the keyword out, False forbids extra
    fields, True allows any, and a node types every extra field.
    """

    node: Literal["object"] = "object"
    properties: dict[str, "SchemaNode"] = Field(default_factory=dict)
    required: tuple[str, ...] = ()
    additional_properties: Union[bool, "SchemaNode", None] = None
    min_properties: int | None = None
    max_properties: int | None = None
    description: str | None = None
    example: Any = None

    @model_validator(mode="after")
    def _check_shape(self) -> "ObjectNode":
        missing = [name for name in self.required if name not in self.properties]
        if missing:
            raise SchemaIntegrityError(f"required fields {missing} are not defined in properties")
        if len(set(self.required)) != len(self.required):
            raise SchemaIntegrityError(f"required fields repeat: {list(self.required)}")
        if (
            self.min_properties is not None
            and self.max_properties is not None
            and self.min_properties > self.max_properties
        ):
            raise SchemaIntegrityError("min_properties is greater than max_properties")
        return self


class UnionNode(_Node):
    """Exactly one of the alternatives must match. Order is kept for documentation."""

    node: Literal["union"] = "union"
    one_of: tuple["SchemaNode", ...]
    description: str | None = None

    @model_validator(mode="after")
    def _check_shape(self) -> "UnionNode":
        if not self.one_of:
            raise SchemaIntegrityError("union must have at least one alternative")
        return self


class RefNode(_Node):
    """Points at a SchemaRegistry entry by name."""

    node: Literal["ref"] = "ref"
    ref: str


SchemaNode = Union[PrimitiveNode, ArrayNode, ObjectNode, UnionNode, RefNode]

ArrayNode.model_rebuild()
ObjectNode.model_rebuild()
UnionNode.model_rebuild()


def children(node: SchemaNode) -> Iterator[SchemaNode]:
    """Yield the direct sub-nodes of node."""
    if isinstance(node, ArrayNode):
        yield node.items
    elif isinstance(node, ObjectNode):
        yield from node.properties.values()
        if isinstance(node.additional_properties, _Node):
            yield node.additional_properties
    elif isinstance(node, UnionNode):
        yield from node.one_of


def walk(node: SchemaNode) -> Iterator[SchemaNode]:
    """Depth-first traversal of node and everything below it, without following refs."""
    yield node
    for child in children(node):
        yield from walk(child)


def references(node: SchemaNode) -> Iterator[str]:
    for sub in walk(node):
        if isinstance(sub, RefNode):
            yield sub.ref


# -- builders ---------------------------------------------------------------


def string(description: str | None = None, **kwargs) -> PrimitiveNode:
    return PrimitiveNode(type="string", description=description, **kwargs)


def number(description: str | None = None, **kwargs) -> PrimitiveNode:
    return PrimitiveNode(type="number", description=description, **kwargs)


def integer(description: str | None = None, **kwargs) -> PrimitiveNode:
    return PrimitiveNode(type="integer", description=description, **kwargs)


def boolean(description: str | None = None, **kwargs) -> PrimitiveNode:
    return PrimitiveNode(type="boolean", description=description, **kwargs)


def binary(description: str | None = None) -> PrimitiveNode:
    return PrimitiveNode(type="string", format="binary", description=description)


def array(items: SchemaNode, description: str | None = None) -> ArrayNode:
    return ArrayNode(items=items, description=description)


def obj(
    properties: dict[str, SchemaNode] | None = None,
    required: tuple[str, ...] | list[str] = (),
    description: str | None = None,
    **kwargs,
) -> ObjectNode:
    return ObjectNode(properties=properties or {}, required=tuple(required), description=description, **kwargs)


def one_of(*alternatives: SchemaNode, description: str | None = None) -> UnionNode:
    return UnionNode(one_of=alternatives, description=description)


def ref(name: str) -> RefNode:
    return RefNode(ref=name)
