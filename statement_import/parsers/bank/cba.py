import re

from statement_import.parsers.base import ACCOUNT_NAME_RE, BaseStatementParser, word_pattern


class CbaParser(BaseStatementParser):
    """Commonwealth Bank statements (NetBank, Smart Access, Goal Saver...).

    Rows are ``DD Mon`` or ``DD/MM/YYYY`` followed by the description, the
    transaction amount and the running balance.
    """

    name = "Commonwealth Bank"
    institution_code = "cba"

    identifiers = tuple(
        word_pattern(phrase)
        for phrase in (
            "Commonwealth Bank",
            "CommBank",
            "commbank.com.au",
            "NetBank",
            "CBA",
            "Smart Access",
            "Goal Saver",
            "Everyday Account",
            "Complete Access",
            "Streamline",
        )
    )
    skip_patterns = (
        re.compile(r"^Transaction\s+Details", re.IGNORECASE),
        re.compile(r"^Your\s+Transactions", re.IGNORECASE),
        re.compile(r"^Account\s+Summary", re.IGNORECASE),
        re.compile(r"^Rewards\s+Points", re.IGNORECASE),
    )
    account_name_patterns = (
        ACCOUNT_NAME_RE,
        re.compile(
            r"\b(Smart Access|Goal Saver|NetBank Saver|Everyday Account|Complete Access|Streamline)\b",
            re.IGNORECASE,
        ),
    )
