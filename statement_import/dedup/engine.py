from collections.abc import Iterable, Sequence
from functools import reduce
from typing import NamedTuple

from statement_import.dedup.keys import key_for
from statement_import.dedup.models import DedupResult
from statement_import.logging.logger import Log
from statement_import.parsers.models import ParsedTransaction


class _FoldState(NamedTuple):
    seen: frozenset[str]
    unique: tuple[ParsedTransaction, ...]
    duplicates: tuple[ParsedTransaction, ...]


def filter_duplicates(
    incoming: Sequence[ParsedTransaction],
    existing_keys: Iterable[str],
    account_id: str,
) -> DedupResult:
    """Partition *incoming* into unique transactions and duplicates.

    A transaction is a duplicate if its key is in *existing_keys* or belongs
    to an earlier transaction in the same batch, so the first occurrence
    always wins. *existing_keys* is never modified.
    """

    def step(state: _FoldState, transaction: ParsedTransaction) -> _FoldState:
        key = key_for(transaction, account_id)
        if key in state.seen:
            return state._replace(duplicates=state.duplicates + (transaction,))
        return _FoldState(
            seen=state.seen | {key},
            unique=state.unique + (transaction,),
            duplicates=state.duplicates,
        )

    initial = _FoldState(seen=frozenset(existing_keys), unique=(), duplicates=())
    final = reduce(step, incoming, initial)

    Log.debug(
        "Duplicate filtering complete",
        account=account_id,
        unique=len(final.unique),
        duplicates=len(final.duplicates),
    )
    return DedupResult(unique=final.unique, duplicates=final.duplicates)
