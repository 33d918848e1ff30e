from collections.abc import Iterable, Sequence

from statement_import.dedup.engine import filter_duplicates
from statement_import.dedup.models import DedupResult
from statement_import.importer.models import ImportReview, summarize, validate_selection
from statement_import.logging.logger import Log
from statement_import.matching.account_name import suggest
from statement_import.matching.models import Account, Member
from statement_import.parsers.models import ParseResult
from statement_import.parsers.utils import last_four


def match_account(parse_result: ParseResult, accounts: Sequence[Account]) -> Account | None:
    """Find the roster account a statement belongs to.

    The last four digits of the account number win; otherwise the account
    name is compared case-insensitively.
    """
    if parse_result.account_number:
        for account in accounts:
            if last_four(account.account_number) == parse_result.account_number:
                return account

    if parse_result.account_name:
        wanted = parse_result.account_name.strip().casefold()
        for account in accounts:
            if account.name.strip().casefold() == wanted:
                return account
    return None


class ImportAggregator:
    """Combines parsing, duplicate filtering and owner matching into one review.

    Pure read-side computation: inputs are never modified and nothing is
    persisted.
    """

    def build_review(
        self,
        parse_result: ParseResult,
        account_id: str,
        existing_keys: Iterable[str],
        members: Sequence[Member],
        accounts: Sequence[Account] = (),
        selected: Iterable[int] | None = None,
    ) -> ImportReview:
        """Build the review for one parsed statement.

        Args:
            parse_result: Output of the parser registry.
            account_id: Ledger account the statement is imported into.
            existing_keys: Duplicate keys already present in the ledger.
            members: Household roster used for owner suggestion.
            accounts: Existing accounts, matched against the statement.
            selected: Indices into the unique transactions; all of them
                when omitted.

        Raises:
            InvalidSelectionError: if *selected* refers to unknown rows.
        """
        if parse_result.success:
            dedup = filter_duplicates(parse_result.transactions, existing_keys, account_id)
        else:
            dedup = DedupResult()

        chosen = (
            frozenset(range(len(dedup.unique)))
            if selected is None
            else validate_selection(selected, len(dedup.unique))
        )
        total_count = len(dedup.unique) + len(dedup.duplicates)
        review = ImportReview(
            parse_result=parse_result,
            account_id=account_id,
            dedup=dedup,
            owner=suggest(parse_result.account_name, members),
            matched_account=match_account(parse_result, accounts),
            selected=chosen,
            summary=summarize(dedup.unique, chosen, total_count),
        )

        Log.info(
            "Import review built",
            account=account_id,
            unique=len(dedup.unique),
            duplicates=len(dedup.duplicates),
            selected=len(chosen),
        )
        return review
