"""Domain-level exceptions.

Every failure the catalog reports is a subclass of CatalogError so the
HTTP and CLI layers can catch them uniformly and map them to responses.
"""


class CatalogError(Exception):
    """Base class for all catalog errors."""


class ValidationError(CatalogError):
    """A value or record does not have the expected shape."""


class EntityNotFoundError(CatalogError):
    """A requested entity does not exist."""


class StorageError(CatalogError):
    """The backing document could not be read or written."""


class StorageReadError(StorageError):
    """The backing document is missing, unreadable or malformed."""


class StorageWriteError(StorageError):
    """The backing document could not be persisted."""
