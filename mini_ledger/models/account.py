"""Account entities for the ledger domain.

``Account`` holds the validation and mutation rules shared by every
account kind. It cannot be constructed directly; concrete kinds choose
their withdrawal floor by implementing :meth:`Account._check_floor`.

- StandardAccount: balance may never go below zero.
- CurrentAccount: balance may go down to ``-overdraft_limit``
  (see :mod:`mini_ledger.models.current_account`).
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Any

from mini_ledger.exceptions import (
    AbstractInstantiationError,
    AccountClosedError,
    CurrencyMismatchError,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidTimestampError,
    MissingFieldError,
    MissingIdGeneratorError,
)
from mini_ledger.ids import IdGenerator
from mini_ledger.models.base import Number, is_finite, is_number, utc_now
from mini_ledger.models.enums import AccountKind, TransactionType
from mini_ledger.models.transaction import Transaction
from mini_ledger.serialization import serialize_value

logger = logging.getLogger(__name__)


def enforce_no_overdraft(account_id: str, new_balance: Number) -> None:
    """Default withdrawal policy: the balance floor is zero."""
    if new_balance < 0:
        raise InsufficientFundsError(
            f"Account {account_id} has insufficient funds "
            f"(resulting balance would be {new_balance})"
        )


def _mixes_decimal_and_float(a: Number, b: Number) -> bool:
    return (isinstance(a, Decimal) and isinstance(b, float)) or (
        isinstance(a, float) and isinstance(b, Decimal)
    )


class Account(ABC):
    """Abstract base for all account kinds.

    Parameters
    ----------
    owner : str
        Account holder name.
    currency : str
        Currency code, e.g. ``"EUR"``. Fixed for the account's lifetime.
    id_generator : IdGenerator
        Shared generator used for the account id (when ``account_id`` is
        not given) and for every transaction id.
    initial_balance : int | float | Decimal
        Opening balance (default 0). Must satisfy the account floor.
    account_id : str | None
        Explicit account id. Allocated from ``id_generator`` when omitted.
    created_at : datetime | None
        Creation time. Defaults to now (UTC).
    id_prefix, transaction_prefix : str | None
        Override the class-level ``ID_PREFIX`` and ``TRANSACTION_ID_PREFIX``.
    """

    ID_PREFIX = "ACC"
    TRANSACTION_ID_PREFIX = "TX"

    def __new__(cls, *args: Any, **kwargs: Any) -> "Account":
        if cls is Account:
            raise AbstractInstantiationError(
                "Account is abstract; construct StandardAccount or CurrentAccount"
            )
        return super().__new__(cls)

    def __init__(
        self,
        owner: str,
        currency: str,
        id_generator: IdGenerator | None,
        initial_balance: Number = 0,
        account_id: str | None = None,
        created_at: datetime | None = None,
        *,
        id_prefix: str | None = None,
        transaction_prefix: str | None = None,
    ) -> None:
        if id_generator is None:
            raise MissingIdGeneratorError("An IdGenerator is required to create an account")
        if not currency:
            raise MissingFieldError("Account currency is required")
        if not is_number(initial_balance) or not is_finite(initial_balance):
            raise InvalidAmountError(
                f"Initial balance must be a finite number, got {initial_balance!r}"
            )
        if created_at is not None and not isinstance(created_at, datetime):
            raise InvalidTimestampError(
                f"Account created_at must be a datetime, got {created_at!r}"
            )

        self._id_generator = id_generator
        self._transaction_prefix = transaction_prefix or self.TRANSACTION_ID_PREFIX
        self._id = account_id or "<unassigned>"
        self.owner = owner
        self._currency = currency
        self._created_at = created_at or utc_now()
        self._is_closed = False

        # floor first so a rejected opening balance does not consume an id
        self._check_floor(initial_balance)
        if not account_id:
            self._id = id_generator.next(id_prefix or self.ID_PREFIX)
        self._balance: Number = initial_balance

    # Read-only attributes

    @property
    def id(self) -> str:
        return self._id

    @property
    def currency(self) -> str:
        return self._currency

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def is_closed(self) -> bool:
        return self._is_closed

    @property
    def balance(self) -> Number:
        return self._balance

    # Public API

    def deposit(self, amount: Number) -> Transaction:
        """Add ``amount`` to the balance and return the deposit record."""
        self._assert_open()
        self._assert_amount(amount)

        self._set_balance(self._balance + amount)
        transaction = self._create_transaction(TransactionType.DEPOSIT, amount)
        logger.debug(
            "Deposited %s %s into %s", amount, self._currency, self._id,
            extra=self._log_context(transaction),
        )
        return transaction

    def withdraw(self, amount: Number) -> Transaction:
        """Remove ``amount`` from the balance and return the withdrawal record.

        The resulting balance must respect the account floor; otherwise the
        kind-specific funds error is raised and the balance is unchanged.
        """
        self._assert_open()
        self._assert_amount(amount)

        new_balance = self._balance - amount
        self._check_floor(new_balance)

        self._set_balance(new_balance)
        transaction = self._create_transaction(
            TransactionType.WITHDRAWAL, amount, self._withdrawal_meta()
        )
        logger.debug(
            "Withdrew %s %s from %s", amount, self._currency, self._id,
            extra=self._log_context(transaction),
        )
        return transaction

    def close(self) -> None:
        """Close the account. Closing is permanent."""
        self._assert_open()
        self._is_closed = True
        logger.debug("Closed account %s", self._id)

    def get_balance(self) -> Number:
        return self._balance

    def get_snapshot(self) -> dict[str, Any]:
        """Return a JSON-safe description of the account's public state."""
        return {
            "id": self._id,
            "owner": self.owner,
            "currency": self._currency,
            "balance": serialize_value(self._balance),
            "createdAt": self._created_at.isoformat(),
            "isClosed": self._is_closed,
        }

    # Kind-specific policy

    @abstractmethod
    def _check_floor(self, new_balance: Number) -> None:
        """Raise a FundsError if ``new_balance`` is below this kind's floor."""

    def _withdrawal_meta(self) -> dict[str, Any]:
        """Extra metadata stamped on withdrawal records."""
        return {}

    # Shared helpers for subclasses

    def _assert_amount(self, amount: Any) -> None:
        if not is_number(amount) or not is_finite(amount) or amount <= 0:
            raise InvalidAmountError(f"Amount must be a positive number, got {amount!r}")
        if _mixes_decimal_and_float(self._balance, amount):
            raise InvalidAmountError(
                f"Amount type {type(amount).__name__} cannot be combined with "
                f"a {type(self._balance).__name__} balance"
            )

    def _assert_open(self) -> None:
        if self._is_closed:
            raise AccountClosedError(f"Account {self._id} is closed")

    def _assert_currency(self, currency: str) -> None:
        if currency != self._currency:
            raise CurrencyMismatchError(
                f"Currency {currency} does not match account currency {self._currency}"
            )

    def _set_balance(self, new_balance: Number) -> None:
        if not is_finite(new_balance):
            raise InvalidAmountError(f"Balance must stay finite, got {new_balance!r}")
        self._balance = new_balance

    def _create_transaction(
        self,
        transaction_type: TransactionType,
        amount: Number,
        meta: dict[str, Any] | None = None,
    ) -> Transaction:
        return Transaction(
            transaction_id=self._id_generator.next(self._transaction_prefix),
            transaction_type=transaction_type,
            account_id=self._id,
            amount=amount,
            currency=self._currency,
            meta=meta or {},
        )

    def _log_context(self, transaction: Transaction) -> dict[str, Any]:
        return {
            "account_id": self._id,
            "transaction_id": transaction.transaction_id,
            "amount": transaction.amount,
            "currency": self._currency,
        }

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(id={self._id!r}, owner={self.owner!r}, "
            f"balance={self._balance!r} {self._currency})"
        )


class StandardAccount(Account):
    """Account without overdraft: the balance never goes below zero."""

    KIND = AccountKind.STANDARD

    def _check_floor(self, new_balance: Number) -> None:
        enforce_no_overdraft(self._id, new_balance)
