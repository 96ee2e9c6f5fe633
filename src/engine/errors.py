"""Error taxonomy for the table engine.

Every failure is raised to the immediate caller; the engine never retries.
The presentation layer tells "file would not open" (ConnError) apart from
"nothing was saved" (ReplaceError).
"""

from __future__ import annotations

from typing import Optional


class EngineError(Exception):
    """Base class for all engine failures."""

    kind = "engine_error"

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message


# --- Connection -------------------------------------------------------------


class ConnError(EngineError):
    kind = "conn_error"


class CannotOpenError(ConnError):
    """The path does not resolve to an openable SQLite database."""

    kind = "cannot_open"


class InvalidStructureError(ConnError):
    """The post-open liveness probe failed."""

    kind = "invalid_structure"


class NoConnectionError(ConnError):
    """An operation needs an open database but none is loaded."""

    kind = "no_connection"


# --- Load -------------------------------------------------------------------


class LoadError(EngineError):
    kind = "load_error"


class QueryFailedError(LoadError):
    kind = "query_failed"


# --- Replace ----------------------------------------------------------------


class ReplaceError(EngineError):
    kind = "replace_error"


class TransactionStartFailedError(ReplaceError):
    kind = "transaction_start_failed"


class WriteFailedError(ReplaceError):
    kind = "write_failed"


class CommitFailedError(ReplaceError):
    kind = "commit_failed"


class NoSuchTableError(LoadError, ReplaceError):
    """The table has no columns in the catalog (it does not exist)."""

    kind = "no_such_table"


__all__ = [
    "EngineError",
    "ConnError",
    "CannotOpenError",
    "InvalidStructureError",
    "NoConnectionError",
    "LoadError",
    "QueryFailedError",
    "ReplaceError",
    "TransactionStartFailedError",
    "WriteFailedError",
    "CommitFailedError",
    "NoSuchTableError",
]
