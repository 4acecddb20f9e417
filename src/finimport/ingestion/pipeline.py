"""Batch import of people and financial-record CSV files.

Each data row is validated and planned on its own; a bad row is reported and
skipped without stopping the batch. Accepted entities are written to the
store in a single call once the whole file has been classified. Undecodable
input or a failed bulk write aborts the batch and discards the row tallies.
"""

import logging
from typing import Any, Callable, Iterable

from finimport.config import ImportSettings
from finimport.errors import MalformedInputError
from finimport.ingestion.aggregator import IngestionOutcome, IngestionResultAggregator
from finimport.ingestion.decoder import decode_rows, read_header, require_columns
from finimport.ingestion.planners import (
    FinancialRecordImportPlanner,
    PersonImportPlanner,
    PlannedRow,
)
from finimport.ingestion.validation import (
    FINANCIAL_RECORD_REQUIRED_COLUMNS,
    PERSON_REQUIRED_COLUMNS,
    ValidationResult,
    validate_financial_record_row,
    validate_person_row,
)
from finimport.store import RecordStore
from finimport.types import RawRow

logger = logging.getLogger(__name__)

# Row 1 is the header; the first data row is row 2.
FIRST_DATA_ROW = 2


class Importer:
    """Runs people and financial-record batches against one record store."""

    def __init__(self, store: RecordStore, settings: ImportSettings | None = None):
        self._store = store
        self._settings = settings or ImportSettings()

    def process_people_batch(self, raw: str | bytes) -> IngestionOutcome:
        planner = PersonImportPlanner(
            self._store, dedupe_within_batch=self._settings.dedupe_within_batch
        )
        return self._process(
            "people",
            raw,
            PERSON_REQUIRED_COLUMNS,
            validate_person_row,
            planner.plan,
            self._store.insert_people,
        )

    def process_financial_records_batch(self, raw: str | bytes) -> IngestionOutcome:
        planner = FinancialRecordImportPlanner(self._store)
        return self._process(
            "financial records",
            raw,
            FINANCIAL_RECORD_REQUIRED_COLUMNS,
            validate_financial_record_row,
            planner.plan,
            self._store.insert_financial_records,
        )

    def _process(
        self,
        kind: str,
        raw: str | bytes,
        required_columns: Iterable[str],
        validate: Callable[[RawRow, int], ValidationResult],
        plan: Callable[[RawRow, int], PlannedRow],
        bulk_insert: Callable[[list[Any]], None],
    ) -> IngestionOutcome:
        delimiter = self._settings.delimiter
        aggregator = IngestionResultAggregator()
        try:
            require_columns(read_header(raw, delimiter), required_columns)
            for row_number, row in enumerate(decode_rows(raw, delimiter), start=FIRST_DATA_ROW):
                validation = validate(row, row_number)
                if not validation.is_valid:
                    aggregator.record_failure(*validation.errors)
                    continue
                try:
                    planned = plan(row, row_number)
                except Exception as e:
                    logger.exception("Error processing %s row %d", kind, row_number)
                    aggregator.record_failure(f"Row {row_number}: Unexpected error - {e}")
                    continue
                aggregator.record(planned)
        except MalformedInputError as e:
            logger.error("Error processing %s file: %s", kind, e)
            return IngestionOutcome.file_failure(e)

        outcome = aggregator.commit(bulk_insert)
        logger.info(
            "Imported %s: %d successful, %d failed, %d staged for insert",
            kind,
            outcome.successful_rows,
            outcome.failed_rows,
            len(aggregator.staged),
        )
        return outcome


def process_people_batch(
    store: RecordStore, raw: str | bytes, settings: ImportSettings | None = None
) -> IngestionOutcome:
    return Importer(store, settings).process_people_batch(raw)


def process_financial_records_batch(
    store: RecordStore, raw: str | bytes, settings: ImportSettings | None = None
) -> IngestionOutcome:
    return Importer(store, settings).process_financial_records_batch(raw)
