"""CSV ingestion: decode, validate, match and batch-write people and financial records."""

from finimport.ingestion.aggregator import IngestionOutcome, IngestionResultAggregator
from finimport.ingestion.normalize import parse_date, try_parse_date
from finimport.ingestion.pipeline import (
    Importer,
    process_financial_records_batch,
    process_people_batch,
)

__all__ = [
    "Importer",
    "IngestionOutcome",
    "IngestionResultAggregator",
    "parse_date",
    "process_financial_records_batch",
    "process_people_batch",
    "try_parse_date",
]
