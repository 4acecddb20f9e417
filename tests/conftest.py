"""Shared test fixtures."""

import pytest

from finimport import create_service
from finimport.ingestion import Importer
from finimport.schema import ensure_schema
from finimport.store import SqlRecordStore


@pytest.fixture
def db_service(tmp_path):
    """Provide a fresh SQLite DatabaseService for each test."""
    db_path = tmp_path / "test.db"
    service = create_service(f"sqlite:///{db_path}")
    service.connect()
    yield service
    service.close()


@pytest.fixture
def store(db_service):
    """A SqlRecordStore over a database with the people/financial_records schema."""
    ensure_schema(db_service)
    return SqlRecordStore(db_service)


@pytest.fixture
def importer(store):
    return Importer(store)


@pytest.fixture
def fetch_rows(db_service):
    """Return a function reading every row of a table, ordered by id."""

    def _fetch(table: str) -> list[dict]:
        with db_service.transaction():
            return db_service.execute(f"SELECT * FROM {table} ORDER BY id")

    return _fetch
