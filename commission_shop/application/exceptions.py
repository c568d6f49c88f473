class RecordStoreError(RuntimeError):
    """Raised when the record store fails (network errors, rejected queries, service unavailable)."""
    pass


class BlobStoreError(RuntimeError):
    """Raised when the object storage fails to store, serve or delete a blob."""
    pass


class RecordNotFoundError(LookupError):
    """Raised when an admin operation targets a row that does not exist."""
    pass


class UnknownServiceError(LookupError):
    """Raised when a composition is requested for a service id that is not in the catalog."""
    pass


class EmptyCartError(ValueError):
    """Raised when a hand-off is requested for a cart with no commissions."""
    pass
