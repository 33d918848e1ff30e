import re

from statement_import.parsers.base import BaseStatementParser, word_pattern
from statement_import.parsers.models import TransactionKind
from statement_import.parsers.utils import ExtractedAmount, keyword_rule, to_cents

# Checked in order; the first rule that matches decides.
RAIZ_RULES = (
    keyword_rule(True, TransactionKind.TRANSFER,
                 r"deposit", r"round[\s-]?up", r"recurring", r"transfer\s+in", r"top[\s-]?up"),
    keyword_rule(True, TransactionKind.INCOME,
                 r"dividend", r"distribution", r"\breturn", r"interest", r"rebate"),
    keyword_rule(False, TransactionKind.TRANSFER, r"withdraw", r"transfer\s+out", r"redemption"),
    keyword_rule(False, TransactionKind.EXPENSE, r"\bfee", r"charge", r"management", r"\badmin"),
)


class RaizParser(BaseStatementParser):
    """Raiz Invest micro-investing statements.

    Direction comes from the activity wording: money paid in is a transfer
    in, earnings are income, withdrawals are transfers out and fees are
    expenses. Unrecognised activity is treated as a deposit.
    """

    name = "Raiz Invest"
    institution_code = "raiz"

    identifiers = (
        word_pattern("Raiz"),
        word_pattern("raizinvest.com.au"),
        word_pattern("Raiz Rewards"),
        word_pattern("Micro-investing"),
    )
    skip_patterns = (
        re.compile(r"^Portfolio\s+Summary", re.IGNORECASE),
        re.compile(r"^Investment\s+Breakdown", re.IGNORECASE),
        re.compile(r"^Asset\s+Allocation", re.IGNORECASE),
        re.compile(r"^ETF\s+Holdings", re.IGNORECASE),
    )
    account_name_patterns = (
        re.compile(r"^Account\s+Name[:\s]+([A-Za-z][A-Za-z ]*?)\s*$", re.IGNORECASE | re.MULTILINE),
        re.compile(r"^Portfolio[:\s]+([A-Za-z][A-Za-z ]*?)\s*$", re.IGNORECASE | re.MULTILINE),
        re.compile(
            r"\b(Raiz\s+(?:Conservative|Moderately Conservative|Moderate|"
            r"Moderately Aggressive|Aggressive|Emerald|Sapphire))\b",
            re.IGNORECASE,
        ),
    )
    account_number_patterns = (
        re.compile(r"Member\s+(?:Number|No\.?)[:\s]+[\d -]*(\d{4})\b", re.IGNORECASE),
        re.compile(r"Account\s+(?:Number|No\.?)[:\s]+[\d -]*(\d{4})\b", re.IGNORECASE),
        re.compile(r"Customer\s+ID[:\s]+\d*(\d{4})\b", re.IGNORECASE),
    )

    def resolve_amount(
        self,
        description: str,
        amount: ExtractedAmount,
        balance: int | None,
        previous_balance: int | None,
    ) -> tuple[int, TransactionKind, bool]:
        cents = to_cents(amount.value)
        for rule in RAIZ_RULES:
            if rule.matches(description):
                return (cents if rule.is_credit else -cents), rule.kind, True
        return cents, TransactionKind.TRANSFER, True
