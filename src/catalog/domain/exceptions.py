"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Persistence failures live here too so the domain never imports infrastructure.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidSearchParamsError(ValidationError):
    """Pagination or filter input for a search is out of range."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFoundError(EntityNotFoundError):
    """No product is stored under the given identifier.

    ``context`` tells the caller which path raised it: ``"lookup"`` for a
    read through a use case, ``"delete"`` for a repository removal.
    """

    def __init__(self, product_id: str, context: str = "lookup") -> None:
        super().__init__(f"Product with ID {product_id} not found")
        self.product_id = product_id
        self.context = context


class MappingError(DomainException):
    """A stored record could not be turned into a Product."""


class RepositoryError(DomainException):
    """The persistence layer failed; the original error is chained."""


class DataIntegrityError(RepositoryError):
    """The backing store could not be loaded at all."""
