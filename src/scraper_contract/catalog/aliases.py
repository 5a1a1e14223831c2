"""Alias resolution index.

Maps every accepted query key (canonical name or third-party alias) to the
canonical parameter it stands for. The HTTP layer uses it to tell scraper
parameters apart from keys it should pass through.
"""

import logging
from functools import lru_cache
from typing import Iterable

from scraper_contract.catalog.base import ParameterSpec
from scraper_contract.catalog.parameters import get_all
from scraper_contract.errors import DuplicateNameError

logger = logging.getLogger(__name__)

CANONICAL = "canonical name"
ALIAS = "alias"


class AliasIndex:
    """Read-only name -> canonical name lookup built from a catalog."""

    def __init__(self, entries: dict[str, str], aliases: dict[str, tuple[str, ...]]):
        self._entries = entries
        self._aliases = aliases

    @classmethod
    def from_catalog(cls, specs: Iterable[ParameterSpec]) -> "AliasIndex":
        """Index every canonical name and alias, failing on the first collision."""
        entries: dict[str, str] = {}
        roles: dict[str, str] = {}
        aliases: dict[str, tuple[str, ...]] = {}

        for spec in specs:
            _insert(entries, roles, spec.name, spec.name, CANONICAL)
            for alias in spec.aliases:
                _insert(entries, roles, alias, spec.name, ALIAS)
            aliases[spec.name] = spec.aliases

        logger.debug("Indexed %d names for %d parameters", len(entries), len(aliases))
        return cls(entries, aliases)

    def canonical_name_for(self, name: str) -> str | None:
        """Return the canonical parameter for name, or None if it is not recognized."""
        return self._entries.get(name)

    def all_recognized_names(self) -> frozenset[str]:
        return frozenset(self._entries)

    def aliases_of(self, canonical: str) -> tuple[str, ...]:
        return self._aliases.get(canonical, ())

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def _insert(entries: dict[str, str], roles: dict[str, str], name: str, owner: str, role: str) -> None:
    if name in entries:
        raise DuplicateNameError(
            name,
            existing=entries[name],
            existing_role=roles[name],
            incoming=owner,
            incoming_role=role,
        )
    entries[name] = owner
    roles[name] = role


@lru_cache(maxsize=1)
def default_index() -> AliasIndex:
    """Index over the scraper catalog, built on first use."""
    return AliasIndex.from_catalog(get_all())


def canonical_name_for(name: str) -> str | None:
    return default_index().canonical_name_for(name)


def all_recognized_names() -> frozenset[str]:
    return default_index().all_recognized_names()
