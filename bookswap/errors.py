"""Error taxonomy raised by the catalog core."""


class CatalogError(Exception):
    """Base class for every error raised by the catalog."""


class ValidationError(CatalogError):
    """Caller-supplied data violates a field constraint."""


class DuplicateError(ValidationError):
    """A unique field (e.g. ``username``) is already taken."""


class NotFoundError(CatalogError):
    """A referenced Book or User does not exist."""


class UnavailableError(CatalogError):
    """The store is unreachable or did not answer in time.

    Safe for the caller to retry with backoff; the catalog never retries
    on its own.
    """


class StoreError(CatalogError):
    """Unexpected store failure. The original exception is chained."""
