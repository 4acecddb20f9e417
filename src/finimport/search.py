"""Search open financial records by a person's full name."""

import logging
from datetime import date
from typing import Any

from finimport.errors import InvalidSearchError
from finimport.store import RecordStore

logger = logging.getLogger(__name__)


def split_full_name(name: str) -> tuple[str, str]:
    """Split "First Surname" into its two parts.

    Raises:
        InvalidSearchError: If the name is blank or not exactly two words.
    """
    if name is None or not name.strip():
        raise InvalidSearchError("Name parameter is required")
    parts = name.split()
    if len(parts) != 2:
        raise InvalidSearchError(
            "Please provide both first name and surname (e.g., 'John Smith')"
        )
    return parts[0], parts[1]


def search_financial_records(
    store: RecordStore, name: str, as_of: date | None = None
) -> list[dict[str, Any]]:
    """Open records for ``name`` dated on or before ``as_of`` (default today), newest first."""
    first_name, surname = split_full_name(name)
    as_of = as_of or date.today()
    matches = store.find_open_financial_records(first_name, surname, as_of)
    logger.info("Found %d open records for %s %s", len(matches), first_name, surname)
    return [
        {
            "id": record.id,
            "person": person.full_name,
            "account_type": record.account_type,
            "initial_amount": record.initial_amount,
            "remaining_amount": record.remaining_amount,
            "transaction_date": record.transaction_date,
            "status": record.status,
            "interest_rate": record.interest_rate,
            "is_open": record.is_open,
        }
        for person, record in matches
    ]
