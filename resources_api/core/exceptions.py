from typing import Optional

from sqlalchemy.exc import DBAPIError


class DataAccessError(Exception):
    """Base class for storage failures surfaced to API clients."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StorageError(DataAccessError):
    """The database rejected a statement or could not be reached."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.detail = message
        self.code = code
        suffix = f" (code {code})" if code else ""
        super().__init__(f"SQL server error - {message}{suffix}")

    @classmethod
    def from_dbapi(cls, exc: DBAPIError) -> "StorageError":
        orig = exc.orig if exc.orig is not None else exc
        # asyncpg/psycopg expose the SQLSTATE, sqlite3 an error name
        code = (
            getattr(orig, "sqlstate", None)
            or getattr(orig, "pgcode", None)
            or getattr(orig, "sqlite_errorname", None)
        )
        return cls(str(orig).strip(), code)


class ConcurrencyError(DataAccessError):
    """A commit hit a row that another writer changed or removed."""

    def __init__(self, message: str):
        self.detail = message
        super().__init__(f"Error while updating the database - {message}")
