"""Exception hierarchy for finimport.

Row-level problems are reported as values in the import outcome. These
exceptions cover the conditions that stop a whole batch, plus the strict
parsing helpers that callers opt into.
"""


class FinImportError(Exception):
    """Base exception for all finimport errors."""


class MalformedInputError(FinImportError):
    """Raised when an input file cannot be decoded into header-keyed rows."""


class DateFormatError(FinImportError, ValueError):
    """Raised when a date matches none of the accepted formats."""


class NumberFormatError(FinImportError, ValueError):
    """Raised when a required number is blank or unparsable."""


class StoreError(FinImportError):
    """Raised when the record store fails to read or write."""


class InvalidSearchError(FinImportError, ValueError):
    """Raised when a search name is not exactly a first name and a surname."""
