"""Domain exceptions shared by every bounded context.

Routers translate these into HTTP status codes; anything that is not a
``DomainError`` is treated as an infrastructure failure and reported
generically.
"""

from __future__ import annotations


class DomainError(Exception):
    """Base class for expected, user-facing failures."""


class EntityNotFoundError(DomainError):
    """A single-entity lookup matched nothing."""

    def __init__(self, entity: str, identifier: object) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} not found: {identifier}")


class ValidationError(DomainError):
    """Input failed a business rule."""

    def __init__(self, message: str, fields: tuple[str, ...] = ()) -> None:
        self.fields = tuple(fields)
        super().__init__(message)


class ConflictError(DomainError):
    """The write would violate a uniqueness invariant."""


class PermissionDeniedError(DomainError):
    """The caller may not act on this entity."""

    def __init__(self, entity: str, identifier: object) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"Not authorized to modify {entity} {identifier}")
