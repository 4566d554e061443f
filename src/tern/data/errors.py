"""Data layer error hierarchy.

``QueryError`` subclasses name the client-input categories recognised in
driver errors; the HTTP layer maps those to client errors and leaves
plain ``QueryError`` as a server error.
"""

from tern.errors import TernError


class DataError(TernError):
    """Base for all tern.data errors."""


class DriverNotInstalledError(DataError):
    """Raised when the required database driver is not installed."""


class ConnectionError(DataError):  # noqa: A001
    """Raised when a database connection cannot be established."""


class SchemaError(DataError):
    """Raised when a column specification list is invalid.

    Compilation fails fast: no statement text is produced.
    """


class QueryError(DataError):
    """Raised when a SQL statement fails."""


class MissingFieldError(QueryError):
    """A required column received no value."""


class UnknownFieldError(QueryError):
    """The data referenced a column the table doesn't have."""


class MalformedDataError(QueryError):
    """The data can't form a valid statement (non-scalar values, nothing to set)."""
