"""Tests for date and number normalization."""

from datetime import date
from decimal import Decimal

import pytest

from finimport.errors import DateFormatError, NumberFormatError
from finimport.ingestion.normalize import (
    DATE_FORMATS,
    parse_date,
    parse_decimal,
    parse_optional_decimal,
    parse_optional_int,
    try_parse_date,
)


class TestDateParsing:
    def test_format_priority_order(self):
        assert DATE_FORMATS == (
            "dd/MM/yyyy",
            "d/M/yyyy",
            "d/MM/yyyy",
            "MM/dd/yyyy",
            "M/d/yyyy",
            "yyyy-MM-dd",
        )

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("23/09/1980", date(1980, 9, 23)),
            ("09/23/1980", date(1980, 9, 23)),
            ("01/02/1980", date(1980, 2, 1)),
            ("1/2/1980", date(1980, 2, 1)),
            ("5/11/2021", date(2021, 11, 5)),
            ("12/07/2021", date(2021, 7, 12)),
            ("2/29/2020", date(2020, 2, 29)),
            ("1980-09-23", date(1980, 9, 23)),
            (" 23/09/1980 ", date(1980, 9, 23)),
        ],
    )
    def test_accepted_dates(self, text, expected):
        assert try_parse_date(text) == expected

    @pytest.mark.parametrize(
        "text",
        [
            None,
            "",
            "   ",
            "bad_date",
            "23/09/80",
            "32/01/1980",
            "13/13/1980",
            "29/02/2021",
            "1980-9-23",
            "123/09/1980",
            "23/09/1980 12:00",
            "٢٣/٠٩/١٩٨٠",
            "23-09-1980",
            "Sep 23 1980",
        ],
    )
    def test_rejected_dates(self, text):
        assert try_parse_date(text) is None

    def test_parse_date_must_parse(self):
        assert parse_date("23/09/1980") == date(1980, 9, 23)

    def test_parse_date_raises(self):
        with pytest.raises(DateFormatError, match="Invalid date format: 31/31/1980"):
            parse_date("31/31/1980")

    def test_date_format_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_date("")


class TestNumberParsing:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("190000", Decimal("190000")),
            ("960.50", Decimal("960.50")),
            ("3.1", Decimal("3.1")),
            ("-12.5", Decimal("-12.5")),
            ("+7", Decimal("7")),
            (".5", Decimal("0.5")),
            ("1,250,000.75", Decimal("1250000.75")),
            ("  42 ", Decimal("42")),
        ],
    )
    def test_optional_decimal_parses(self, text, expected):
        assert parse_optional_decimal(text) == expected

    @pytest.mark.parametrize(
        "text",
        [None, "", "   ", "abc", "1e5", "NaN", "Infinity", "12,34", "1.2.3", "-", ".", "١٢٣"],
    )
    def test_optional_decimal_blank_or_invalid_is_none(self, text):
        assert parse_optional_decimal(text) is None

    def test_blank_never_becomes_zero(self):
        assert parse_optional_decimal("") is None
        assert parse_optional_int("") is None

    def test_required_decimal(self):
        assert parse_decimal("190000") == Decimal("190000")

    @pytest.mark.parametrize("text", [None, "", "ten"])
    def test_required_decimal_raises(self, text):
        with pytest.raises(NumberFormatError):
            parse_decimal(text)

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("240", 240),
            (" 12 ", 12),
            ("-3", -3),
            ("", None),
            ("2.5", None),
            ("x", None),
            ("٢٤٠", None),
        ],
    )
    def test_optional_int(self, text, expected):
        assert parse_optional_int(text) == expected
