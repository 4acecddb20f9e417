"""Turn validated rows into candidate entities and decide insert, skip or reject."""

import enum
import logging
from dataclasses import dataclass, field

from finimport.ingestion.normalize import (
    parse_date,
    parse_decimal,
    parse_optional_decimal,
    parse_optional_int,
    try_parse_date,
)
from finimport.ingestion.validation import (
    ACCOUNT_TYPE,
    ADDRESS,
    DOB,
    FIRST_NAME,
    INITIAL_AMOUNT,
    INITIAL_TERM,
    INTEREST_RATE,
    MINIMUM_PAYMENT_AMOUNT,
    POSTCODE,
    REMAINING_AMOUNT,
    REMAINING_TERM,
    REPAYMENT_AMOUNT,
    STATUS,
    SURNAME,
    TOTAL_PAYMENT_AMOUNT,
    TRANSACTION_DATE,
)
from finimport.models import DEFAULT_STATUS, FinancialRecord, NaturalKey, Person
from finimport.store import RecordStore
from finimport.types import RawRow

logger = logging.getLogger(__name__)


class RowDisposition(enum.Enum):
    INSERT = "insert"
    SKIP = "skip"
    REJECT = "reject"


@dataclass
class PlannedRow:
    """What to do with one row. ``entity`` is set for INSERT and SKIP."""

    disposition: RowDisposition
    entity: Person | FinancialRecord | None = None
    errors: list[str] = field(default_factory=list)


def _trimmed(value: str | None) -> str | None:
    if value is None or value.strip() == "":
        return None
    return value.strip()


class PersonImportPlanner:
    """Plans person rows for one batch.

    A row whose natural key is already stored is skipped. Keys staged earlier
    in the same batch are not in the store yet, so by default a repeated row
    is staged again; ``dedupe_within_batch`` skips it instead.
    """

    def __init__(self, store: RecordStore, dedupe_within_batch: bool = False):
        self._store = store
        self._dedupe_within_batch = dedupe_within_batch
        self._staged: set[NaturalKey] = set()

    def plan(self, row: RawRow, row_number: int) -> PlannedRow:
        person = Person(
            first_name=row[FIRST_NAME].strip(),
            surname=row[SURNAME].strip(),
            date_of_birth=parse_date(row[DOB]),
            address=_trimmed(row.get(ADDRESS)),
            postcode=_trimmed(row.get(POSTCODE)),
        )
        key = person.natural_key

        if self._store.exists_person_by_natural_key(*key):
            logger.debug("Row %d: person %s already stored, skipping", row_number, key)
            return PlannedRow(RowDisposition.SKIP, person)

        if key in self._staged:
            if self._dedupe_within_batch:
                logger.info("Row %d: person %s already staged in this batch", row_number, key)
                return PlannedRow(RowDisposition.SKIP, person)
            logger.warning(
                "Row %d: person %s repeats an earlier row in this batch and will be "
                "inserted twice",
                row_number,
                key,
            )
        self._staged.add(key)
        return PlannedRow(RowDisposition.INSERT, person)


class FinancialRecordImportPlanner:
    """Plans financial-record rows by resolving the owning person in the store."""

    def __init__(self, store: RecordStore):
        self._store = store

    def plan(self, row: RawRow, row_number: int) -> PlannedRow:
        first_name = row[FIRST_NAME].strip()
        surname = row[SURNAME].strip()
        date_of_birth = try_parse_date(row.get(DOB))

        person = None
        if date_of_birth is not None:
            person = self._store.find_person_by_natural_key(first_name, surname, date_of_birth)
        if person is None:
            return PlannedRow(
                RowDisposition.REJECT,
                errors=[f"Row {row_number}: No matching person found for {first_name} {surname}"],
            )

        record = FinancialRecord(
            person_id=person.id,
            account_type=row[ACCOUNT_TYPE].strip(),
            initial_amount=parse_decimal(row[INITIAL_AMOUNT]),
            transaction_date=parse_date(row[TRANSACTION_DATE]),
            total_payment_amount=parse_optional_decimal(row.get(TOTAL_PAYMENT_AMOUNT)),
            repayment_amount=parse_optional_decimal(row.get(REPAYMENT_AMOUNT)),
            remaining_amount=parse_optional_decimal(row.get(REMAINING_AMOUNT)),
            minimum_payment_amount=parse_optional_decimal(row.get(MINIMUM_PAYMENT_AMOUNT)),
            interest_rate=parse_optional_decimal(row.get(INTEREST_RATE)),
            initial_term=parse_optional_int(row.get(INITIAL_TERM)),
            remaining_term=parse_optional_int(row.get(REMAINING_TERM)),
            status=_trimmed(row.get(STATUS)) or DEFAULT_STATUS,
        )
        return PlannedRow(RowDisposition.INSERT, record)
