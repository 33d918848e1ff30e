from datetime import date

from statement_import.parsers.models import StatementPeriod, TransactionKind
from statement_import.parsers.super import AustralianSuperParser, UniSuperParser

AUSTRALIAN_SUPER_TEXT = """AustralianSuper
Member Number: 1234567890
Account Type: Accumulation
Statement period 1 July 2023 to 30 June 2024
Employer contributions $8,500.00
Investment returns $3,200.50
Administration fees $150.00
Insurance premiums $420.00
Transactions
01/07/2023 Opening balance 10,000.00
15/07/2023 Employer contribution 708.33
30/06/2024 Investment returns 3,200.50
30/06/2024 Closing balance 21,838.83
"""

UNISUPER_TEXT = """UniSuper
Member number: 987654321
Accumulation 1
For the year ended 30 June 2024
Employer contributions $5,000.00
Salary sacrifice $2,000.00
Tax on contributions $1,050.00
Credited earnings $900.00
"""


class TestAustralianSuper:
    def test_detection(self) -> None:
        parser = AustralianSuperParser()
        assert parser.can_parse("AustralianSuper member statement")
        assert parser.can_parse("Australian Super")
        assert not parser.can_parse("Member Statement")

    def test_summary_and_table_rows(self) -> None:
        result = AustralianSuperParser().parse(AUSTRALIAN_SUPER_TEXT)
        assert result.success
        assert [tx.amount for tx in result.transactions] == [70833, 850000, 320050, -15000, -42000]

    def test_table_row_dated_summary_at_period_end(self) -> None:
        result = AustralianSuperParser().parse(AUSTRALIAN_SUPER_TEXT)
        assert result.transactions[0].date == date(2023, 7, 15)
        assert all(tx.date == date(2024, 6, 30) for tx in result.transactions[1:])

    def test_summary_kinds_and_labels(self) -> None:
        result = AustralianSuperParser().parse(AUSTRALIAN_SUPER_TEXT)
        summary = result.transactions[1:]
        assert [tx.description for tx in summary] == [
            "Employer Super Guarantee",
            "Investment Earnings",
            "Administration Fee",
            "Insurance Premium",
        ]
        assert [tx.kind for tx in summary] == [
            TransactionKind.INCOME,
            TransactionKind.INCOME,
            TransactionKind.EXPENSE,
            TransactionKind.EXPENSE,
        ]

    def test_account_details(self) -> None:
        result = AustralianSuperParser().parse(AUSTRALIAN_SUPER_TEXT)
        assert result.account_name == "Accumulation"
        assert result.account_number == "7890"
        assert result.statement_period == StatementPeriod(date(2023, 7, 1), date(2024, 6, 30))

    def test_voluntary_employer_contribution(self) -> None:
        text = "AustralianSuper\nas at 30 June 2024\nVoluntary employer contributions $1,000.00\n"
        result = AustralianSuperParser().parse(text)
        assert len(result.transactions) == 1
        assert result.transactions[0].description == "Employer Voluntary Contribution"
        assert result.transactions[0].amount == 100000

    def test_as_at_date_covers_financial_year(self) -> None:
        text = "AustralianSuper\nBalance as at 30 June 2024\nEmployer contributions $100.00\n"
        result = AustralianSuperParser().parse(text)
        assert result.statement_period == StatementPeriod(date(2023, 7, 1), date(2024, 6, 30))

    def test_missing_date_warns(self) -> None:
        result = AustralianSuperParser().parse("AustralianSuper\nEmployer contributions $100.00\n")
        assert result.success
        assert result.transactions[0].date == date.today()
        assert "Statement date not found; summary amounts dated today" in result.warnings

    def test_balances_only_is_failure(self) -> None:
        text = (
            "AustralianSuper\nStatement period 1 July 2023 to 30 June 2024\n"
            "Opening balance $10,000.00\nClosing balance $12,000.00\n"
        )
        result = AustralianSuperParser().parse(text)
        assert not result.success
        assert result.errors[0].startswith("No transactions found")


class TestUniSuper:
    def test_detection(self) -> None:
        assert UniSuperParser().can_parse("Welcome to UniSuper")
        assert not UniSuperParser().can_parse("Your super statement")

    def test_summary_movements(self) -> None:
        result = UniSuperParser().parse(UNISUPER_TEXT)
        assert [tx.amount for tx in result.transactions] == [500000, 200000, 90000, -105000]
        assert result.transactions[1].kind == TransactionKind.INCOME
        assert result.transactions[3].kind == TransactionKind.EXPENSE

    def test_year_ended_period(self) -> None:
        result = UniSuperParser().parse(UNISUPER_TEXT)
        assert result.statement_period == StatementPeriod(date(2023, 7, 1), date(2024, 6, 30))
        assert result.account_name == "Accumulation 1"
        assert result.account_number == "4321"
