"""Abstract DatabaseService interface used by the record store."""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Iterator

from finimport.types import Params, ParamsList


class DatabaseService(ABC):
    """Database-agnostic interface for all DB operations.

    Backends differ only in driver, parameter placeholder and the DDL used for
    store-assigned integer keys; both are exposed as class attributes so SQL
    can be built once by callers.
    """

    placeholder: str = "?"
    autoincrement_pk: str = "INTEGER PRIMARY KEY"

    @abstractmethod
    def connect(self) -> None:
        """Initialize the connection pool."""

    @abstractmethod
    def close(self) -> None:
        """Close all connections and release resources."""

    @abstractmethod
    def execute(self, sql: str, params: Params | None = None) -> list[dict[str, Any]]:
        """Execute a single SQL statement and return rows as dicts."""

    @abstractmethod
    def execute_many(self, sql: str, params_list: ParamsList) -> None:
        """Execute a SQL statement for each parameter set."""

    @abstractmethod
    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Context manager: acquires a connection, commits on success, rolls back on error."""

    @abstractmethod
    def execute_ddl(self, sql: str) -> None:
        """Execute DDL statements (CREATE TABLE, CREATE INDEX, etc.)."""

    def placeholders(self, count: int) -> str:
        """Comma-joined placeholders for ``count`` bound values."""
        return ", ".join(self.placeholder for _ in range(count))

    def batch_insert(self, table: str, columns: list[str], rows: list[tuple]) -> None:
        """Insert multiple rows into a table."""
        if not rows:
            return
        cols = ", ".join(columns)
        sql = f"INSERT INTO {table} ({cols}) VALUES ({self.placeholders(len(columns))})"
        self.execute_many(sql, rows)

