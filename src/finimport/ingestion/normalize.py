"""Date and number normalization for raw CSV cells.

Dates are matched against a fixed, ordered list of formats written in the
``dd/MM/yyyy`` notation used by the upstream exports: ``dd``/``MM`` are exactly
two digits, ``d``/``M`` one or two, ``yyyy`` exactly four. The first format
that matches the whole value and yields a real calendar date wins, so
day-first readings take priority over month-first ones.
"""

import re
from datetime import date
from decimal import Decimal, InvalidOperation

from finimport.errors import DateFormatError, NumberFormatError

DATE_FORMATS = (
    "dd/MM/yyyy",
    "d/M/yyyy",
    "d/MM/yyyy",
    "MM/dd/yyyy",
    "M/d/yyyy",
    "yyyy-MM-dd",
)

_TOKENS = {
    "yyyy": r"(?P<year>\d{4})",
    "dd": r"(?P<day>\d{2})",
    "MM": r"(?P<month>\d{2})",
    "d": r"(?P<day>\d{1,2})",
    "M": r"(?P<month>\d{1,2})",
}
_TOKEN_RE = re.compile("|".join(sorted(_TOKENS, key=len, reverse=True)))

_DECIMAL_RE = re.compile(r"[+-]?(?:\d{1,3}(?:,\d{3})+|\d+)?(?:\.\d*)?", re.ASCII)
_INT_RE = re.compile(r"[+-]?\d+", re.ASCII)


def _compile_format(fmt: str) -> re.Pattern[str]:
    pattern = ""
    pos = 0
    for token in _TOKEN_RE.finditer(fmt):
        pattern += re.escape(fmt[pos : token.start()]) + _TOKENS[token.group()]
        pos = token.end()
    pattern += re.escape(fmt[pos:])
    return re.compile(pattern, re.ASCII)


_DATE_PATTERNS = [(fmt, _compile_format(fmt)) for fmt in DATE_FORMATS]


def _is_blank(text: str | None) -> bool:
    return text is None or text.strip() == ""


def try_parse_date(text: str | None) -> date | None:
    """Parse ``text`` with the first matching format, or return None."""
    if _is_blank(text):
        return None
    value = text.strip()
    for _fmt, pattern in _DATE_PATTERNS:
        match = pattern.fullmatch(value)
        if match is None:
            continue
        try:
            return date(int(match["year"]), int(match["month"]), int(match["day"]))
        except ValueError:
            continue
    return None


def parse_date(text: str | None) -> date:
    """Parse ``text`` or raise DateFormatError."""
    result = try_parse_date(text)
    if result is None:
        raise DateFormatError(f"Invalid date format: {text}")
    return result


def parse_optional_decimal(text: str | None) -> Decimal | None:
    """Blank or unparsable -> None. Never defaults to zero."""
    if _is_blank(text):
        return None
    value = text.strip()
    if not _DECIMAL_RE.fullmatch(value) or not any(ch.isdigit() for ch in value):
        return None
    try:
        return Decimal(value.replace(",", ""))
    except InvalidOperation:
        return None


def parse_decimal(text: str | None) -> Decimal:
    """Parse a required decimal or raise NumberFormatError."""
    result = parse_optional_decimal(text)
    if result is None:
        raise NumberFormatError(f"Invalid decimal value: {text!r}")
    return result


def parse_optional_int(text: str | None) -> int | None:
    """Blank or unparsable -> None."""
    if _is_blank(text):
        return None
    value = text.strip()
    return int(value) if _INT_RE.fullmatch(value) else None
