"""Record store: the persistence collaborator consumed by the import pipeline."""

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterator

from finimport.errors import StoreError
from finimport.models import CLOSED_STATUS, FinancialRecord, Person
from finimport.schema import (
    FINANCIAL_RECORD_COLUMNS,
    FINANCIAL_RECORDS_TABLE,
    PEOPLE_COLUMNS,
    PEOPLE_TABLE,
)
from finimport.service import DatabaseService
from finimport.types import Row

logger = logging.getLogger(__name__)


class RecordStore(ABC):
    """Query-by-natural-key and bulk-insert operations over people and records.

    Implementations raise StoreError for any backend failure.
    """

    @abstractmethod
    def exists_person_by_natural_key(
        self, first_name: str, surname: str, date_of_birth: date
    ) -> bool:
        """True if a stored person has exactly this natural key."""

    @abstractmethod
    def find_person_by_natural_key(
        self, first_name: str, surname: str, date_of_birth: date
    ) -> Person | None:
        """Return the stored person with exactly this natural key, if any."""

    @abstractmethod
    def insert_people(self, people: list[Person]) -> None:
        """Insert all people in one write."""

    @abstractmethod
    def insert_financial_records(self, records: list[FinancialRecord]) -> None:
        """Insert all financial records in one write."""

    @abstractmethod
    def find_open_financial_records(
        self, first_name: str, surname: str, as_of: date
    ) -> list[tuple[Person, FinancialRecord]]:
        """Open records of the named person(s) dated on or before ``as_of``, newest first."""


@contextmanager
def _store_errors(action: str) -> Iterator[None]:
    try:
        yield
    except StoreError:
        raise
    except Exception as e:
        raise StoreError(f"Failed to {action}: {e}") from e


def _to_db(value: Any) -> Any:
    """Bind dates and decimals as text so every backend accepts them."""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    return value


def _as_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _as_datetime(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def _as_decimal(value: Any) -> Decimal | None:
    if value is None or isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _person_from_row(row: Row) -> Person:
    return Person(
        id=row["id"],
        first_name=row["first_name"],
        surname=row["surname"],
        date_of_birth=_as_date(row["date_of_birth"]),
        address=row["address"],
        postcode=row["postcode"],
    )


def _record_from_row(row: Row) -> FinancialRecord:
    return FinancialRecord(
        id=row["id"],
        person_id=row["person_id"],
        account_type=row["account_type"],
        initial_amount=_as_decimal(row["initial_amount"]),
        total_payment_amount=_as_decimal(row["total_payment_amount"]),
        repayment_amount=_as_decimal(row["repayment_amount"]),
        remaining_amount=_as_decimal(row["remaining_amount"]),
        transaction_date=_as_date(row["transaction_date"]),
        created_date=_as_datetime(row["created_date"]),
        minimum_payment_amount=_as_decimal(row["minimum_payment_amount"]),
        interest_rate=_as_decimal(row["interest_rate"]),
        initial_term=row["initial_term"],
        remaining_term=row["remaining_term"],
        status=row["status"],
    )


class SqlRecordStore(RecordStore):
    """RecordStore backed by a DatabaseService (SQLite or PostgreSQL).

    Each call runs in its own transaction; the bulk inserts are atomic.
    """

    def __init__(self, service: DatabaseService):
        self._service = service

    def _first_person_by_key(
        self, first_name: str, surname: str, date_of_birth: date
    ) -> list[Row]:
        ph = self._service.placeholder
        cols = ", ".join(["id", *PEOPLE_COLUMNS])
        sql = (
            f"SELECT {cols} FROM {PEOPLE_TABLE} "
            f"WHERE first_name = {ph} AND surname = {ph} AND date_of_birth = {ph} "
            "ORDER BY id LIMIT 1"
        )
        with _store_errors("query people"):
            with self._service.transaction():
                return self._service.execute(sql, (first_name, surname, _to_db(date_of_birth)))

    def exists_person_by_natural_key(
        self, first_name: str, surname: str, date_of_birth: date
    ) -> bool:
        return bool(self._first_person_by_key(first_name, surname, date_of_birth))

    def find_person_by_natural_key(
        self, first_name: str, surname: str, date_of_birth: date
    ) -> Person | None:
        rows = self._first_person_by_key(first_name, surname, date_of_birth)
        return _person_from_row(rows[0]) if rows else None

    def insert_people(self, people: list[Person]) -> None:
        rows = [
            tuple(_to_db(getattr(person, col)) for col in PEOPLE_COLUMNS) for person in people
        ]
        with _store_errors("insert people"):
            with self._service.transaction():
                self._service.batch_insert(PEOPLE_TABLE, PEOPLE_COLUMNS, rows)
        logger.info("Inserted %d people", len(rows))

    def insert_financial_records(self, records: list[FinancialRecord]) -> None:
        rows = [
            tuple(_to_db(getattr(record, col)) for col in FINANCIAL_RECORD_COLUMNS)
            for record in records
        ]
        with _store_errors("insert financial records"):
            with self._service.transaction():
                self._service.batch_insert(
                    FINANCIAL_RECORDS_TABLE, FINANCIAL_RECORD_COLUMNS, rows
                )
        logger.info("Inserted %d financial records", len(rows))

    def find_open_financial_records(
        self, first_name: str, surname: str, as_of: date
    ) -> list[tuple[Person, FinancialRecord]]:
        ph = self._service.placeholder
        record_cols = ", ".join(f"fr.{c}" for c in ["id", *FINANCIAL_RECORD_COLUMNS])
        sql = (
            f"SELECT {record_cols}, p.first_name, p.surname, p.date_of_birth, "
            f"p.address, p.postcode "
            f"FROM {FINANCIAL_RECORDS_TABLE} fr "
            f"JOIN {PEOPLE_TABLE} p ON p.id = fr.person_id "
            f"WHERE p.first_name = {ph} AND p.surname = {ph} "
            f"AND fr.transaction_date <= {ph} "
            f"AND fr.remaining_amount > 0 AND fr.status <> {ph} "
            f"ORDER BY fr.transaction_date DESC, fr.id DESC"
        )
        params = (first_name, surname, _to_db(as_of), CLOSED_STATUS)
        with _store_errors("search financial records"):
            with self._service.transaction():
                rows = self._service.execute(sql, params)
        results = []
        for row in rows:
            record = _record_from_row(row)
            person = _person_from_row({**row, "id": record.person_id})
            results.append((person, record))
        return results
