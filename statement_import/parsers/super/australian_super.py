import re

from statement_import.parsers.base import word_pattern
from statement_import.parsers.super.base import (
    EARNINGS,
    EMPLOYER_ADDITIONAL,
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


class AustralianSuperParser(SuperannuationParser):
    name = "Australian Super"
    institution_code = "australian-super"

    identifiers = (
        re.compile(r"\bAustralian\s*Super\b", re.IGNORECASE),
        word_pattern("australiansuper.com"),
    )
    account_type_patterns = (
        re.compile(r"Account\s+Type[:\s]+(Accumulation|Choice Income|Retirement|Division\s+\d+)", re.IGNORECASE),
        re.compile(r"\b(Accumulation\s+Account|Super\s+Account|Pension\s+Account)\b", re.IGNORECASE),
    )
    summary_rules = (
        summary_rule(r"(?<!voluntary )Employer\s+(?:SG|Super(?:annuation)?|Contributions?)", EMPLOYER_SG),
        summary_rule(r"Super\s+Guarantee", EMPLOYER_SG),
        summary_rule(r"SG\s+Contributions?", EMPLOYER_SG),
        summary_rule(r"Compulsory\s+(?:employer\s+)?contributions?", EMPLOYER_SG),
        summary_rule(r"Voluntary\s+employer\s+contributions?", EMPLOYER_ADDITIONAL),
        summary_rule(r"Salary\s+Sacrifice", SALARY_SACRIFICE),
        summary_rule(r"Before[- ]?tax\s+contributions?", SALARY_SACRIFICE),
        summary_rule(r"(?<!non-)(?<!non )Concessional\s+contributions?", PERSONAL_CONCESSIONAL),
        summary_rule(r"Personal\s+deductible\s+contributions?", PERSONAL_CONCESSIONAL),
        summary_rule(r"After[- ]?tax\s+contributions?", PERSONAL_NON_CONCESSIONAL),
        summary_rule(r"Non[- ]?concessional\s+contributions?", PERSONAL_NON_CONCESSIONAL),
        summary_rule(r"Personal\s+contributions?", PERSONAL_NON_CONCESSIONAL),
        summary_rule(r"Government\s+co[- ]?contributions?", GOVERNMENT),
        summary_rule(r"Low\s+income\s+super", GOVERNMENT),
        summary_rule(r"Spouse\s+contributions?", SPOUSE),
        summary_rule(r"Investment\s+(?:earnings?|returns?)", EARNINGS),
        summary_rule(r"Investment\s+growth", EARNINGS),
        summary_rule(r"Net\s+investment\s+returns?", EARNINGS),
        summary_rule(r"(?:Admin(?:istration)?|Management)\s+Fees?", FEES),
        summary_rule(r"Member\s+Fees?", FEES),
        summary_rule(r"Indirect\s+costs?", FEES),
        summary_rule(r"Contributions?\s+tax", FEES),
        summary_rule(r"Insurance\s+(?:Premiums?|costs?)", INSURANCE),
        summary_rule(r"Life\s+insurance", INSURANCE),
        summary_rule(r"TPD\s+insurance", INSURANCE),
        summary_rule(r"Income\s+protection", INSURANCE),
    )
