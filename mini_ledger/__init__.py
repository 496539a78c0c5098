"""Minimal in-memory ledger: accounts, transaction records and id allocation."""

from mini_ledger.ids import IdGenerator
from mini_ledger.models import (
    Account,
    AccountKind,
    CurrentAccount,
    StandardAccount,
    Transaction,
    TransactionType,
)
from mini_ledger.store import LedgerStore

__all__ = [
    "Account",
    "AccountKind",
    "CurrentAccount",
    "IdGenerator",
    "LedgerStore",
    "StandardAccount",
    "Transaction",
    "TransactionType",
]
