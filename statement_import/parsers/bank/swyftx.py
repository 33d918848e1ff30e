import re

from statement_import.parsers.base import BaseStatementParser, word_pattern
from statement_import.parsers.models import AccountInfo, ParsedTransaction, TransactionKind
from statement_import.parsers.utils import (
    ExtractedAmount,
    extract_amounts,
    keyword_rule,
    last_four,
    to_cents,
)

AUD_AMOUNT_RE = re.compile(r"\$?\s*([\d,]+\.\d{2})\s*AUD\b", re.IGNORECASE)
ASSET_RE = re.compile(
    r"\b(BTC|ETH|XRP|LTC|BCH|ADA|DOT|LINK|SOL|DOGE|SHIB|MATIC|AVAX|UNI|ATOM|USDT|USDC)\b"
)
EMAIL_RE = r"([A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,})"

CRYPTO_TAX_WARNING = (
    "Note: Crypto transactions may have capital gains tax implications. "
    "Please consult a tax professional."
)

SWYFTX_RULES = (
    keyword_rule(True, TransactionKind.TRANSFER,
                 r"deposit", r"bank\s+transfer", r"payid", r"osko"),
    keyword_rule(True, TransactionKind.INCOME, r"\bsell\b", r"\bsold\b"),
    keyword_rule(True, TransactionKind.INCOME, r"staking", r"stake\s+reward", r"\bearn\b"),
    keyword_rule(False, TransactionKind.TRANSFER, r"withdraw", r"bank\s+payout"),
    keyword_rule(False, TransactionKind.EXPENSE, r"\bbuy\b", r"purchase"),
    keyword_rule(False, TransactionKind.EXPENSE, r"\bfee", r"spread"),
)


def mask_email(email: str) -> str:
    """Keep the first three characters of the mailbox and the whole domain."""
    user, _, domain = email.partition("@")
    return f"{user[:3]}***@{domain}"


class SwyftxParser(BaseStatementParser):
    """Swyftx crypto exchange activity statements.

    Only the AUD value of each trade is imported. Every successful parse
    carries a capital gains tax reminder in its warnings.
    """

    name = "Swyftx"
    institution_code = "swyftx"

    identifiers = (word_pattern("Swyftx"), word_pattern("swyftx.com.au"), word_pattern("swyftx.com"))
    skip_patterns = (
        re.compile(r"^Portfolio\s+Summary", re.IGNORECASE),
        re.compile(r"^Asset\s+Holdings", re.IGNORECASE),
        re.compile(r"^Tax\s+Report", re.IGNORECASE),
        re.compile(r"^Staking\s+Rewards\s+Summary", re.IGNORECASE),
    )
    account_name_patterns = (
        re.compile(rf"Account[:\s]+{EMAIL_RE}", re.IGNORECASE),
        re.compile(rf"User[:\s]+{EMAIL_RE}", re.IGNORECASE),
        re.compile(rf"Email[:\s]+{EMAIL_RE}", re.IGNORECASE),
    )
    account_number_patterns = (
        re.compile(r"User\s*ID[:\s]+(\d{4,})", re.IGNORECASE),
        re.compile(r"Account\s*ID[:\s]+(\d{4,})", re.IGNORECASE),
        re.compile(r"Member[:\s]+(\d{4,})", re.IGNORECASE),
    )

    def extract_account_info(self, text: str) -> AccountInfo:
        info = super().extract_account_info(text)
        name = mask_email(info.name) if info.name else None
        return AccountInfo(name=name, number=last_four(info.number))

    def split_amounts(
        self,
        body: str,
        amounts: list[ExtractedAmount],
    ) -> tuple[ExtractedAmount, int | None]:
        match = AUD_AMOUNT_RE.search(body)
        if match:
            aud = extract_amounts(match.group(1))
            if aud:
                return aud[0], None
        return amounts[0], None

    def resolve_amount(
        self,
        description: str,
        amount: ExtractedAmount,
        balance: int | None,
        previous_balance: int | None,
    ) -> tuple[int, TransactionKind, bool]:
        cents = to_cents(amount.value)
        for rule in SWYFTX_RULES:
            if rule.matches(description):
                return (cents if rule.is_credit else -cents), rule.kind, True
        return -cents, TransactionKind.EXPENSE, True

    def clean_description(self, text: str) -> str:
        description = super().clean_description(AUD_AMOUNT_RE.sub("", text))
        asset = ASSET_RE.search(text)
        if asset and description and asset.group(1) not in description:
            description = super().clean_description(f"{asset.group(1)} - {description}")
        return description

    def result_warnings(self, transactions: list[ParsedTransaction]) -> list[str]:
        return [CRYPTO_TAX_WARNING] if transactions else []
