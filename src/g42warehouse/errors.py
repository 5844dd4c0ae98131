"""Exception types shared across the warehouse package."""

from __future__ import annotations


class WarehouseError(Exception):
    """Base class for all warehouse errors."""


class ValidationError(WarehouseError, ValueError):
    """A field value violates a domain invariant.

    Raised synchronously from constructors and setters. The entity being built
    never reaches its registry.
    """

    def __init__(self, field: str, constraint: str) -> None:
        self.field = field
        self.constraint = constraint
        super().__init__(f"{field}: {constraint}")


class PersistenceError(WarehouseError):
    """Saving or loading a registry failed as a whole.

    When raised from a load, the target registry has already been cleared.
    """
