"""CLI entry point for people / financial-record CSV imports.

Usage:
    python -m scripts.import_csv --db-url sqlite:///data.db --kind people --file people.csv
    python -m scripts.import_csv --kind financial-records --file records.csv [--dedupe-within-batch]

--db-url defaults to $FINIMPORT_DB_URL.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from finimport import create_service
from finimport.config import ImportSettings
from finimport.ingestion import Importer
from finimport.schema import ensure_schema
from finimport.store import SqlRecordStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    settings = ImportSettings.from_env()
    parser = argparse.ArgumentParser(description="Import people or financial records from CSV")
    parser.add_argument(
        "--db-url", default=settings.db_url, help="Database URL (sqlite:/// or postgresql://)"
    )
    parser.add_argument(
        "--kind", required=True, choices=["people", "financial-records"], help="File contents"
    )
    parser.add_argument("--file", required=True, help="Path to CSV file")
    parser.add_argument("--delimiter", default=settings.delimiter, help="Field delimiter")
    parser.add_argument(
        "--dedupe-within-batch",
        action="store_true",
        default=settings.dedupe_within_batch,
        help="Skip people repeated within the same file",
    )
    args = parser.parse_args(argv)

    settings.db_url = args.db_url
    settings.delimiter = args.delimiter
    settings.dedupe_within_batch = args.dedupe_within_batch

    service = create_service(settings.db_url, settings.pool_size)
    service.connect()
    try:
        ensure_schema(service)
        importer = Importer(SqlRecordStore(service), settings)
        raw = Path(args.file).read_bytes()
        if args.kind == "people":
            outcome = importer.process_people_batch(raw)
        else:
            outcome = importer.process_financial_records_batch(raw)
    finally:
        service.close()

    logger.info(
        "Done. %d successful, %d failed.", outcome.successful_rows, outcome.failed_rows
    )
    print(json.dumps(outcome.to_dict(), indent=2))
    return 1 if outcome.file_failed else 0


if __name__ == "__main__":
    sys.exit(main())
