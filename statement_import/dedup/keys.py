"""Duplicate key generation.

A key identifies one ledger event: the account it belongs to, the day,
the signed amount in cents and the first 50 characters of the normalised
description. Keys are SHA-256 hex digests so they can be stored and
compared without keeping the source fields.
"""

import hashlib
import re
from collections.abc import Iterable
from datetime import date

from statement_import.dedup.models import LedgerTransaction
from statement_import.parsers.models import ParsedTransaction

DESCRIPTION_KEY_LENGTH = 50
KEY_SEPARATOR = "|"

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_description(description: str | None) -> str:
    """Collapse whitespace, trim, case-fold and cut to the key length."""
    if not description:
        return ""
    collapsed = _WHITESPACE_RE.sub(" ", description).strip().casefold()
    return collapsed[:DESCRIPTION_KEY_LENGTH]


def generate_key(account_id: str, on: date, amount: int, description: str | None) -> str:
    """Return the duplicate key for one transaction.

    Pure: the same inputs always give the same 64-character hex digest.
    Descriptions equal in their first 50 normalised characters produce the
    same key.
    """
    payload = KEY_SEPARATOR.join(
        (str(account_id), on.isoformat(), str(amount), normalize_description(description))
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def key_for(transaction: ParsedTransaction, account_id: str) -> str:
    return generate_key(account_id, transaction.date, transaction.amount, transaction.description)


def build_key_set(
    existing: Iterable[ParsedTransaction | LedgerTransaction],
    account_id: str,
) -> frozenset[str]:
    """Keys for transactions already in the ledger.

    Ledger records carry their own ``account_id``; parsed transactions are
    keyed under *account_id*.
    """
    keys = set()
    for transaction in existing:
        owner = transaction.account_id if isinstance(transaction, LedgerTransaction) else account_id
        keys.add(generate_key(owner, transaction.date, transaction.amount, transaction.description))
    return frozenset(keys)
