"""CLI entry point for searching open financial records.

Usage:
    python -m scripts.search_records --db-url sqlite:///data.db --name "John Smith" [--as-of 2021-12-31]
"""

import argparse
import json
import logging
import sys
from datetime import date

from finimport import create_service
from finimport.config import ImportSettings
from finimport.errors import InvalidSearchError
from finimport.schema import ensure_schema
from finimport.search import search_financial_records
from finimport.store import SqlRecordStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    settings = ImportSettings.from_env()
    parser = argparse.ArgumentParser(description="Search open financial records by name")
    parser.add_argument("--db-url", default=settings.db_url, help="Database URL")
    parser.add_argument("--name", required=True, help='First name and surname, e.g. "John Smith"')
    parser.add_argument(
        "--as-of", type=date.fromisoformat, default=None, help="Date in YYYY-MM-DD format"
    )
    args = parser.parse_args(argv)

    service = create_service(args.db_url, settings.pool_size)
    service.connect()
    try:
        ensure_schema(service)
        results = search_financial_records(SqlRecordStore(service), args.name, args.as_of)
    except InvalidSearchError as e:
        logger.error("%s", e)
        return 1
    finally:
        service.close()

    print(json.dumps(results, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
