"""Tests for open financial-record search."""

from datetime import date
from decimal import Decimal

import pytest

from finimport.errors import InvalidSearchError
from finimport.models import FinancialRecord, Person
from finimport.search import search_financial_records, split_full_name


@pytest.fixture
def seeded(store):
    store.insert_people(
        [
            Person("John", "Smith", date(1980, 9, 23)),
            Person("Jane", "Doe", date(1985, 2, 1)),
        ]
    )
    john = store.find_person_by_natural_key("John", "Smith", date(1980, 9, 23))
    jane = store.find_person_by_natural_key("Jane", "Doe", date(1985, 2, 1))
    store.insert_financial_records(
        [
            FinancialRecord(
                person_id=john.id,
                account_type="Mortgage",
                initial_amount=Decimal("190000"),
                remaining_amount=Decimal("150000"),
                interest_rate=Decimal("3.1"),
                transaction_date=date(2021, 7, 12),
                status="InitialPurchase",
            ),
            FinancialRecord(
                person_id=john.id,
                account_type="CreditCard",
                initial_amount=Decimal("500"),
                remaining_amount=Decimal("0"),
                transaction_date=date(2022, 1, 5),
            ),
            FinancialRecord(
                person_id=jane.id,
                account_type="Loan",
                initial_amount=Decimal("5000"),
                remaining_amount=Decimal("4000"),
                transaction_date=date(2021, 3, 1),
            ),
        ]
    )
    return store


class TestSplitFullName:
    def test_two_words(self):
        assert split_full_name("  John   Smith ") == ("John", "Smith")

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_blank(self, name):
        with pytest.raises(InvalidSearchError, match="Name parameter is required"):
            split_full_name(name)

    @pytest.mark.parametrize("name", ["John", "John Paul Smith"])
    def test_wrong_word_count(self, name):
        with pytest.raises(InvalidSearchError, match="both first name and surname"):
            split_full_name(name)


class TestSearchFinancialRecords:
    def test_returns_open_records_for_person(self, seeded):
        results = search_financial_records(seeded, "John Smith", as_of=date(2023, 1, 1))

        assert results == [
            {
                "id": 1,
                "person": "John Smith",
                "account_type": "Mortgage",
                "initial_amount": Decimal("190000"),
                "remaining_amount": Decimal("150000"),
                "transaction_date": date(2021, 7, 12),
                "status": "InitialPurchase",
                "interest_rate": Decimal("3.1"),
                "is_open": True,
            }
        ]

    def test_future_records_excluded(self, seeded):
        assert search_financial_records(seeded, "John Smith", as_of=date(2021, 1, 1)) == []

    def test_defaults_to_today(self, seeded):
        assert len(search_financial_records(seeded, "Jane Doe")) == 1

    def test_unknown_person(self, seeded):
        assert search_financial_records(seeded, "Nobody Here") == []
