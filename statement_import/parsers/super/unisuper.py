import re

from statement_import.parsers.base import word_pattern
from statement_import.parsers.super.base import (
    EARNINGS,
    EMPLOYER_SG,
    FEES,
    GOVERNMENT,
    INSURANCE,
    PERSONAL_CONCESSIONAL,
    PERSONAL_NON_CONCESSIONAL,
    SALARY_SACRIFICE,
    SPOUSE,
    SuperannuationParser,
    summary_rule,
)


class UniSuperParser(SuperannuationParser):
    """UniSuper member statements (Accumulation and Defined Benefit divisions)."""

    name = "UniSuper"
    institution_code = "unisuper"

    identifiers = (
        word_pattern("UniSuper"),
        word_pattern("unisuper.com.au"),
        word_pattern("Universal Super Holdings"),
    )
    account_type_patterns = (
        re.compile(r"Account\s+Type[:\s]+(Accumulation\s*\d?|Defined\s+Benefit\s+Division)", re.IGNORECASE),
        re.compile(r"\b(Accumulation\s+[12]|Defined\s+Benefit\s+Division)\b", re.IGNORECASE),
    )
    summary_rules = (
        summary_rule(r"Employer\s+(?:SG|Super(?:annuation)?|Contributions?)", EMPLOYER_SG),
        summary_rule(r"Super\s+Guarantee", EMPLOYER_SG),
        summary_rule(r"SG\s+Contributions?", EMPLOYER_SG),
        summary_rule(r"Salary\s+Sacrifice", SALARY_SACRIFICE),
        summary_rule(r"Pre[- ]?Tax\s+Contributions?", SALARY_SACRIFICE),
        summary_rule(r"Personal\s+(?:Deductible\s+)?Contributions?", PERSONAL_CONCESSIONAL),
        summary_rule(r"Member\s+Contributions?", PERSONAL_NON_CONCESSIONAL),
        summary_rule(r"After[- ]?Tax\s+Contributions?", PERSONAL_NON_CONCESSIONAL),
        summary_rule(r"Government\s+Co[- ]?Contributions?", GOVERNMENT),
        summary_rule(r"Spouse\s+Contributions?", SPOUSE),
        summary_rule(r"Investment\s+(?:Earnings?|Returns?)", EARNINGS),
        summary_rule(r"Credited\s+Earnings?", EARNINGS),
        summary_rule(r"(?:Admin(?:istration)?|Management)\s+Fees?", FEES),
        summary_rule(r"Tax\s+(?:on\s+)?Contributions?", FEES),
        summary_rule(r"Insurance\s+Premiums?", INSURANCE),
    )
