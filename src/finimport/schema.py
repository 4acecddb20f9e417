"""Table schema for people and financial records."""

from finimport.service import DatabaseService

PEOPLE_TABLE = "people"
PEOPLE_COLUMNS = ["first_name", "surname", "date_of_birth", "address", "postcode"]

FINANCIAL_RECORDS_TABLE = "financial_records"
FINANCIAL_RECORD_COLUMNS = [
    "person_id",
    "account_type",
    "initial_amount",
    "total_payment_amount",
    "repayment_amount",
    "remaining_amount",
    "transaction_date",
    "created_date",
    "minimum_payment_amount",
    "interest_rate",
    "initial_term",
    "remaining_term",
    "status",
]

# {pk} is filled with the backend's auto-increment primary key clause.
SCHEMA_DDL = """
CREATE TABLE IF NOT EXISTS people (
    id              {pk},
    first_name      VARCHAR(100) NOT NULL,
    surname         VARCHAR(100) NOT NULL,
    date_of_birth   DATE         NOT NULL,
    address         VARCHAR(500),
    postcode        VARCHAR(20)
);
CREATE INDEX IF NOT EXISTS idx_people_natural_key
    ON people(first_name, surname, date_of_birth);
CREATE TABLE IF NOT EXISTS financial_records (
    id                      {pk},
    person_id               INTEGER       NOT NULL REFERENCES people(id) ON DELETE CASCADE,
    account_type            VARCHAR(50)   NOT NULL,
    initial_amount          DECIMAL(18,2) NOT NULL,
    total_payment_amount    DECIMAL(18,2),
    repayment_amount        DECIMAL(18,2),
    remaining_amount        DECIMAL(18,2),
    transaction_date        DATE          NOT NULL,
    created_date            TIMESTAMP,
    minimum_payment_amount  DECIMAL(18,2),
    interest_rate           DECIMAL(9,4),
    initial_term            INTEGER,
    remaining_term          INTEGER,
    status                  VARCHAR(50)   NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_financial_records_person
    ON financial_records(person_id);
"""


def ensure_schema(service: DatabaseService) -> None:
    """Create the people and financial_records tables if they don't exist."""
    service.execute_ddl(SCHEMA_DDL.format(pk=service.autoincrement_pk))
