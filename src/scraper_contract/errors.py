"""Build-time errors raised while compiling the scraper contract.

None of these are transient: each one points at an authoring defect in
the static catalog or schema definitions, and no document is produced
when one is raised.
"""


class ContractError(Exception):
    """Base class for every contract build failure."""


class ConfigurationError(ContractError):
    """A ParameterSpec violates its own invariants."""


class DuplicateNameError(ContractError):
    """A canonical name or alias is claimed by two catalog entries."""

    def __init__(self, name: str, existing: str, existing_role: str, incoming: str, incoming_role: str):
        self.name = name
        self.existing = existing
        self.existing_role = existing_role
        self.incoming = incoming
        self.incoming_role = incoming_role
        super().__init__(
            f"'{name}' is declared as {incoming_role} of '{incoming}' "
            f"but is already the {existing_role} of '{existing}'"
        )


class SchemaIntegrityError(ContractError):
    """A schema reference does not resolve or a node is malformed."""
