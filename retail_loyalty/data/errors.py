class DataAccessError(Exception):
    """Base error for the persistence layer."""


class RecordNotFoundError(DataAccessError):
    """Raised when a lookup by key finds nothing to update."""


class DuplicateRecordError(DataAccessError):
    """Raised when inserting a record whose key already exists."""
