"""Per-row validation for people and financial-record CSV rows."""

from dataclasses import dataclass, field

from finimport.ingestion.normalize import parse_optional_decimal, try_parse_date
from finimport.types import RawRow

# CSV column names, as they appear in the upstream exports.
FIRST_NAME = "FirstName"
SURNAME = "Surname"
DOB = "Dob"
ADDRESS = "Address"
POSTCODE = "Postcode"
ACCOUNT_TYPE = "AccountType"
INITIAL_AMOUNT = "InitialAmount"
TOTAL_PAYMENT_AMOUNT = "TotalPaymentAmount"
REPAYMENT_AMOUNT = "RepaymentAmount"
REMAINING_AMOUNT = "RemainingAmount"
TRANSACTION_DATE = "TransactionDate"
MINIMUM_PAYMENT_AMOUNT = "MinimumPaymentAmount"
INTEREST_RATE = "InterestRate"
INITIAL_TERM = "InitialTerm"
REMAINING_TERM = "RemainingTerm"
STATUS = "Status"

PERSON_REQUIRED_COLUMNS = (FIRST_NAME, SURNAME, DOB)
FINANCIAL_RECORD_REQUIRED_COLUMNS = (
    FIRST_NAME,
    SURNAME,
    DOB,
    ACCOUNT_TYPE,
    INITIAL_AMOUNT,
    TRANSACTION_DATE,
)


@dataclass
class ValidationResult:
    """Verdict for one row; errors are already prefixed with the row number."""

    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _blank(row: RawRow, column: str) -> bool:
    value = row.get(column)
    return value is None or value.strip() == ""


def validate_person_row(row: RawRow, row_number: int) -> ValidationResult:
    result = ValidationResult()
    if _blank(row, FIRST_NAME):
        result.errors.append(f"Row {row_number}: FirstName is required")
    if _blank(row, SURNAME):
        result.errors.append(f"Row {row_number}: Surname is required")
    if _blank(row, DOB):
        result.errors.append(f"Row {row_number}: Date of birth is required")
    elif try_parse_date(row[DOB]) is None:
        result.errors.append(f"Row {row_number}: Invalid date format for Dob")
    return result


def validate_financial_record_row(row: RawRow, row_number: int) -> ValidationResult:
    """Check required fields of a financial-record row.

    Dob is not checked here; an unusable Dob fails the person match instead.
    """
    result = ValidationResult()
    if _blank(row, FIRST_NAME):
        result.errors.append(f"Row {row_number}: FirstName is required")
    if _blank(row, SURNAME):
        result.errors.append(f"Row {row_number}: Surname is required")
    if _blank(row, ACCOUNT_TYPE):
        result.errors.append(f"Row {row_number}: AccountType is required")
    if parse_optional_decimal(row.get(INITIAL_AMOUNT)) is None:
        result.errors.append(f"Row {row_number}: Valid InitialAmount is required")
    if try_parse_date(row.get(TRANSACTION_DATE)) is None:
        result.errors.append(f"Row {row_number}: Valid TransactionDate is required")
    return result
