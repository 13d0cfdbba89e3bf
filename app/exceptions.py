"""
Domain errors raised by the catalog services.

The API layer translates them into HTTP responses:
NotFoundError -> 404, InvalidArgumentError -> 400.
"""


class CatalogError(Exception):
    """Base class for all catalog errors."""


class NotFoundError(CatalogError):
    """
    Raised when an entity does not exist, or when a selection that must
    match at least one product comes back empty.

    A product pointing at a missing category is reported the same way.
    """


class InvalidArgumentError(CatalogError):
    """Raised when an argument breaks a business rule (e.g. a percentage outside 0-100)."""
