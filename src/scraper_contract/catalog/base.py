"""Data models for the canonical query-parameter catalog.

Every parameter the scrape endpoint understands is described by one
ParameterSpec. Records are frozen and validated on construction, so an
inconsistent catalog fails at import time instead of producing a document.
"""

from enum import Enum
from typing import Iterator

from pydantic import BaseModel, ConfigDict, model_validator

from scraper_contract.errors import ConfigurationError


class ParamKind(str, Enum):
    """Closed set of value kinds a query parameter may carry."""

    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"


# Natural zero value per kind; a default equal to it is left out of documents.
ZERO_VALUES = {
    ParamKind.STRING: "",
    ParamKind.INTEGER: 0,
    ParamKind.BOOLEAN: False,
}


def matches_kind(value: str | int | bool, kind: ParamKind) -> bool:
    """Return True if value is a literal of the given kind.

    bool is a subclass of int in Python, so the checks are exact on type.
    """
    if kind is ParamKind.BOOLEAN:
        return type(value) is bool
    if kind is ParamKind.INTEGER:
        return type(value) is int
    return type(value) is str


class ParameterSpec(BaseModel):
    """A single canonical query parameter and its accepted aliases."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: ParamKind
    description: str
    required: bool = False
    default: str | int | bool | None = None
    example: str | int | bool | None = None
    enum: tuple[str, ...] | None = None
    minimum: int | None = None
    maximum: int | None = None
    aliases: tuple[str, ...] = ()

    @model_validator(mode="after")
    def _check_invariants(self) -> "ParameterSpec":
        if not self.name:
            raise ConfigurationError("parameter name must not be empty")
        if not self.description.strip():
            raise ConfigurationError(f"{self.name}: description must not be empty")

        if self.enum is not None:
            if self.kind is not ParamKind.STRING:
                raise ConfigurationError(f"{self.name}: enum is only allowed on string parameters")
            if not self.enum:
                raise ConfigurationError(f"{self.name}: enum must not be empty")

        has_range = self.minimum is not None or self.maximum is not None
        if has_range and self.kind is not ParamKind.INTEGER:
            raise ConfigurationError(f"{self.name}: minimum/maximum are only allowed on integer parameters")
        if self.minimum is not None and self.maximum is not None and self.minimum > self.maximum:
            raise ConfigurationError(
                f"{self.name}: minimum {self.minimum} is greater than maximum {self.maximum}"
            )

        for label, value in (("default", self.default), ("example", self.example)):
            if value is None:
                continue
            if not matches_kind(value, self.kind):
                raise ConfigurationError(
                    f"{self.name}: {label} {value!r} is not a {self.kind.value}"
                )

        if self.default is not None:
            if self.enum is not None and self.default not in self.enum:
                raise ConfigurationError(
                    f"{self.name}: default {self.default!r} is not one of {list(self.enum)}"
                )
            if self.kind is ParamKind.INTEGER and not self.in_range(self.default):
                raise ConfigurationError(
                    f"{self.name}: default {self.default} is outside [{self.minimum}, {self.maximum}]"
                )
        return self

    def in_range(self, value: int) -> bool:
        if self.minimum is not None and value < self.minimum:
            return False
        if self.maximum is not None and value > self.maximum:
            return False
        return True

    @property
    def names(self) -> tuple[str, ...]:
        """Canonical name followed by every alias."""
        return (self.name, *self.aliases)


class ParameterCatalog:
    """Frozen, ordered table of ParameterSpec records.

    The order given at construction is the order parameters appear in the
    generated document.
    """

    def __init__(self, specs: list[ParameterSpec] | tuple[ParameterSpec, ...]):
        self._specs = tuple(specs)

    def get_all(self) -> tuple[ParameterSpec, ...]:
        return self._specs

    def get(self, name: str) -> ParameterSpec | None:
        for spec in self._specs:
            if spec.name == name:
                return spec
        return None

    def __iter__(self) -> Iterator[ParameterSpec]:
        return iter(self._specs)

    def __len__(self) -> int:
        return len(self._specs)
