"""Named store of shared and recursive schema definitions."""

import logging
from types import MappingProxyType
from typing import Iterator, Mapping

from scraper_contract.errors import SchemaIntegrityError
from scraper_contract.schema.nodes import RefNode, SchemaNode, references

logger = logging.getLogger(__name__)

REF_PREFIX = "#/components/schemas/"


class SchemaRegistry(Mapping[str, SchemaNode]):
    """Immutable name -> SchemaNode mapping whose references all resolve.

    A definition may refer to itself or to any other entry; those links stay
    RefNodes and are dereferenced on demand with resolve().
    """

    def __init__(self, definitions: Mapping[str, SchemaNode]):
        self._definitions = MappingProxyType(dict(definitions))
        self.check_references()
        self.check_ref_cycles()
        logger.debug("Schema registry holds %d definitions", len(self._definitions))

    def __getitem__(self, name: str) -> SchemaNode:
        return self._definitions[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SchemaRegistry):
            return dict(self._definitions) == dict(other._definitions)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self._definitions))

    def resolve(self, node: SchemaNode) -> SchemaNode:
        """Follow RefNodes until a structural node is reached."""
        seen: list[str] = []
        while isinstance(node, RefNode):
            if node.ref in seen:
                raise SchemaIntegrityError(f"reference cycle without a concrete schema: {' -> '.join(seen)}")
            seen.append(node.ref)
            node = self.get_definition(node.ref)
        return node

    def get_definition(self, name: str) -> SchemaNode:
        try:
            return self._definitions[name]
        except KeyError:
            raise SchemaIntegrityError(f"unknown schema '{name}'") from None

    def dangling(self, node: SchemaNode) -> list[str]:
        """Names referenced below node that have no registry entry."""
        return [name for name in references(node) if name not in self._definitions]

    def check_references(self) -> None:
        for name, node in self._definitions.items():
            missing = self.dangling(node)
            if missing:
                raise SchemaIntegrityError(
                    f"schema '{name}' references undefined schema(s): {', '.join(sorted(set(missing)))}"
                )

    def check_ref_cycles(self) -> None:
        """Reject entries that are only references looping back on themselves."""
        for name in self._definitions:
            self.resolve(RefNode(ref=name))

    @staticmethod
    def pointer(name: str) -> str:
        return f"{REF_PREFIX}{name}"
