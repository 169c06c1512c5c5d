"""
Exception hierarchy for the OrientDB connector.

Every error raised by the connector inherits from ConnectorError so the
calling graph layer can catch them uniformly.
"""


class ConnectorError(Exception):
    """Base exception for all connector errors."""

    def __init__(self, message: str, component: str = "connector"):
        self.component = component
        super().__init__(f"[{component}] {message}")


class ConfigurationError(ConnectorError):
    """Required connection options are missing or invalid."""

    def __init__(self, message: str):
        super().__init__(message, component="config")


class NotConnectedError(ConnectorError):
    """An operation was attempted without a live connection."""

    def __init__(self, message: str = "not connected; call connect() first"):
        super().__init__(message, component="lifecycle")


class InvalidArgumentError(ConnectorError):
    """A required payload is missing or holds an unsupported value."""

    def __init__(self, message: str):
        super().__init__(message, component="entities")


class BackendError(ConnectorError):
    """Errors reported by, or while talking to, the OrientDB server."""

    retryable: bool = False

    def __init__(self, message: str):
        super().__init__(message, component="backend")


class BackendConnectionError(BackendError):
    """The server could not be reached or refused the session."""
    pass


class DatabaseOpenError(BackendConnectionError):
    """The target database could not be opened."""

    def __init__(self, message: str, database: str, status_code: int | None = None):
        self.database = database
        self.status_code = status_code
        super().__init__(message)


class BackendCommandError(BackendError):
    """A SQL command failed on the server."""

    def __init__(
        self,
        backend_message: str,
        statement: str | None = None,
        status_code: int | None = None,
    ):
        self.backend_message = backend_message
        self.statement = statement
        self.status_code = status_code
        super().__init__(backend_message)


class DuplicateRecordError(BackendCommandError):
    """A unique index rejected the write. Safe to retry as an update."""

    retryable = True
