"""Ledger domain models."""

from mini_ledger.models.account import Account, StandardAccount, enforce_no_overdraft
from mini_ledger.models.current_account import CurrentAccount
from mini_ledger.models.enums import AccountKind, TransactionType
from mini_ledger.models.transaction import Transaction

__all__ = [
    "Account",
    "AccountKind",
    "CurrentAccount",
    "StandardAccount",
    "Transaction",
    "TransactionType",
    "enforce_no_overdraft",
]
