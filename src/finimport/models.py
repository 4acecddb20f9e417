"""Domain entities produced by the import pipeline."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import NamedTuple

CLOSED_STATUS = "Closed"
DEFAULT_STATUS = "OK"


class NaturalKey(NamedTuple):
    """Identity of a person when no surrogate id is supplied."""

    first_name: str
    surname: str
    date_of_birth: date


@dataclass
class Person:
    """A person; ``id`` is assigned by the store on insert."""

    first_name: str
    surname: str
    date_of_birth: date
    address: str | None = None
    postcode: str | None = None
    id: int | None = None

    @property
    def natural_key(self) -> NaturalKey:
        return NaturalKey(self.first_name, self.surname, self.date_of_birth)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.surname}"


@dataclass
class FinancialRecord:
    """A financial account record owned by one person."""

    person_id: int
    account_type: str
    initial_amount: Decimal
    transaction_date: date
    total_payment_amount: Decimal | None = None
    repayment_amount: Decimal | None = None
    remaining_amount: Decimal | None = None
    minimum_payment_amount: Decimal | None = None
    interest_rate: Decimal | None = None
    initial_term: int | None = None
    remaining_term: int | None = None
    status: str = DEFAULT_STATUS
    created_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: int | None = None

    @property
    def is_open(self) -> bool:
        """Open while not closed and money is still owed."""
        return (
            self.status != CLOSED_STATUS
            and self.remaining_amount is not None
            and self.remaining_amount > 0
        )
