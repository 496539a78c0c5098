"""Ledger store with per-account transaction indexes."""

import logging
from dataclasses import dataclass, field

from mini_ledger.exceptions import DuplicateEntityError, EntityNotFoundError
from mini_ledger.models import Account, Transaction, TransactionType
from mini_ledger.models.base import Number

logger = logging.getLogger(__name__)


@dataclass
class LedgerStore:
    """In-memory store for accounts and an append-only list of records.

    Records are never updated or removed. ``deposit`` and ``withdraw`` run
    the account operation and append the record it returns as a single
    step: when the operation raises, nothing is appended.
    """

    accounts: dict[str, Account] = field(default_factory=dict)
    transactions: list[Transaction] = field(default_factory=list)

    # Relationship indexes
    _account_transactions: dict[str, list[int]] = field(default_factory=dict)

    def add_account(self, account: Account) -> None:
        """Add an account to the store."""
        if account.id in self.accounts:
            raise DuplicateEntityError(f"Account {account.id} already registered")

        self.accounts[account.id] = account
        self._account_transactions[account.id] = []
        logger.debug("Registered account %s (%s)", account.id, type(account).__name__)

    def get_account(self, account_id: str) -> Account:
        """Get an account by id."""
        try:
            return self.accounts[account_id]
        except KeyError:
            raise EntityNotFoundError(f"Account {account_id} not found") from None

    def record(self, transaction: Transaction) -> None:
        """Append a transaction record for a registered account."""
        if transaction.account_id not in self.accounts:
            raise EntityNotFoundError(f"Account {transaction.account_id} not found")

        idx = len(self.transactions)
        self.transactions.append(transaction)
        self._account_transactions[transaction.account_id].append(idx)

    def deposit(self, account_id: str, amount: Number) -> Transaction:
        """Deposit into a registered account and record the result."""
        transaction = self.get_account(account_id).deposit(amount)
        self.record(transaction)
        return transaction

    def withdraw(self, account_id: str, amount: Number) -> Transaction:
        """Withdraw from a registered account and record the result."""
        transaction = self.get_account(account_id).withdraw(amount)
        self.record(transaction)
        return transaction

    # Query methods
    def get_account_transactions(self, account_id: str) -> list[Transaction]:
        """Get all transactions for an account, oldest first."""
        indices = self._account_transactions.get(account_id, [])
        return [self.transactions[i] for i in indices]

    def net_flow(self, account_id: str) -> Number:
        """Sum of recorded deposits minus recorded withdrawals for an account."""
        total: Number = 0
        for transaction in self.get_account_transactions(account_id):
            if transaction.transaction_type == TransactionType.DEPOSIT:
                total += transaction.amount
            elif transaction.transaction_type == TransactionType.WITHDRAWAL:
                total -= transaction.amount
        return total

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "accounts": len(self.accounts),
            "open_accounts": sum(1 for a in self.accounts.values() if not a.is_closed),
            "transactions": len(self.transactions),
        }
