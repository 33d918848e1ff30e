import pytest

from statement_import.config.settings import Settings
from statement_import.parsers.bank import CbaParser, IngParser
from statement_import.parsers.exceptions import UnknownInstitutionError
from statement_import.parsers.registry import ParserRegistry, build_default_registry


@pytest.fixture
def registry() -> ParserRegistry:
    return build_default_registry()


class TestDefaultRegistry:
    def test_order_is_most_specific_first(self, registry: ParserRegistry) -> None:
        codes = [parser.institution_code for parser in registry.all()]
        assert codes == [
            "swyftx",
            "raiz",
            "up",
            "unisuper",
            "australian-super",
            "bendigo",
            "macquarie",
            "ing",
            "westpac",
            "nab",
            "anz",
            "cba",
        ]

    def test_settings_flow_into_parsers(self) -> None:
        registry = build_default_registry(Settings(description_max_length=10))
        result = registry.get("cba").parse(
            "Commonwealth Bank\n02/01/2024 EFTPOS A VERY LONG MERCHANT NAME 5.00\n"
        )
        assert result.transactions[0].description == "EFTPOS ..."


class TestDetection:
    def test_detects_cba(self, registry: ParserRegistry, cba_statement_text: str) -> None:
        result = registry.detect_and_parse(cba_statement_text)
        assert result.success
        assert result.institution_code == "cba"
        assert len(result.transactions) == 4

    def test_unsupported_text_is_failure_not_exception(self, registry: ParserRegistry) -> None:
        result = registry.detect_and_parse("Hello world, this is a shopping list")
        assert not result.success
        assert result.transactions == ()
        assert result.errors[0].startswith("Unable to detect bank format")
        assert "Commonwealth Bank" in result.errors[0]

    def test_empty_text(self, registry: ParserRegistry) -> None:
        assert not registry.detect_and_parse("").success

    def test_institutions_named_in_rows_do_not_claim_statement(
        self, registry: ParserRegistry
    ) -> None:
        text = (
            "Commonwealth Bank of Australia\n"
            "Statement Period: 01/01/2024 to 31/01/2024\n"
            "Opening Balance 1,000.00 CR\n"
            "02 Jan EFTPOS WOOLWORTHS 1234 45.50 954.50\n"
            "03 Jan DIRECT DEBIT RAIZ INVEST AU 50.00 904.50\n"
            "04 Jan TRANSFER TO SWYFTX PTY LTD 100.00 804.50\n"
            "05 Jan WESTPAC HOME LOAN 200.00 604.50\n"
            "06 Jan SALARY ACME PTY LTD 2,500.00 3,104.50\n"
        )
        result = registry.detect_and_parse(text)
        assert result.institution_code == "cba"
        assert [tx.amount for tx in result.transactions] == [-4550, -5000, -10000, -20000, 250000]
        assert registry.detect_and_parse(text, preferred_institution="raiz").institution_code == "cba"

    def test_banking_does_not_claim_ing(self, registry: ParserRegistry) -> None:
        parser = registry.find_parser("Commonwealth Bank online banking")
        assert parser is not None
        assert parser.institution_code == "cba"

    def test_preferred_institution_used_when_it_recognises_text(
        self, registry: ParserRegistry
    ) -> None:
        text = "Commonwealth Bank transfer via ING\n02/01/2024 EFTPOS 5.00\n"
        assert registry.detect_and_parse(text).institution_code == "ing"
        assert registry.detect_and_parse(text, preferred_institution="cba").institution_code == "cba"

    def test_preferred_institution_ignored_when_not_applicable(
        self, registry: ParserRegistry, cba_statement_text: str
    ) -> None:
        result = registry.detect_and_parse(cba_statement_text, preferred_institution="swyftx")
        assert result.institution_code == "cba"

    def test_unknown_preferred_institution_falls_back(
        self, registry: ParserRegistry, cba_statement_text: str
    ) -> None:
        result = registry.detect_and_parse(cba_statement_text, preferred_institution="nope")
        assert result.institution_code == "cba"


class TestRegistration:
    def test_get_unknown_raises(self, registry: ParserRegistry) -> None:
        with pytest.raises(UnknownInstitutionError, match="nope"):
            registry.get("nope")

    def test_duplicate_code_ignored(self) -> None:
        registry = ParserRegistry()
        first = CbaParser()
        registry.register(first)
        registry.register(CbaParser())
        assert registry.all() == [first]

    def test_first_registered_wins(self) -> None:
        registry = ParserRegistry()
        registry.register(IngParser())
        registry.register(CbaParser())
        assert registry.find_parser("ING and Commonwealth Bank").institution_code == "ing"

    def test_all_returns_copy(self) -> None:
        registry = ParserRegistry()
        registry.all().append(CbaParser())
        assert registry.all() == []
