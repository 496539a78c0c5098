"""Transaction record for the ledger domain."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from mini_ledger.exceptions import (
    InvalidAmountError,
    InvalidMetadataError,
    InvalidTimestampError,
    InvalidTransactionTypeError,
    MissingFieldError,
)
from mini_ledger.models.base import Number, is_nan, is_number, utc_now
from mini_ledger.models.enums import TransactionType
from mini_ledger.serialization import freeze, serialize_value, thaw


@dataclass(frozen=True)
class Transaction:
    """Immutable record of one completed balance-affecting event.

    The record only checks that ``amount`` is a number and not NaN.
    Positivity is a business rule enforced by the account that emits it.

    ``meta`` is copied and frozen at construction: later changes to the
    mapping passed in are not visible, and the stored mapping (including
    nested dicts and lists) cannot be modified. Values that cannot be frozen
    raise :class:`InvalidMetadataError`.

    ``created_at`` defaults to the construction time when omitted or None.
    """

    transaction_id: str
    transaction_type: TransactionType
    account_id: str
    amount: Number
    currency: str
    created_at: datetime | None = None
    meta: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.transaction_id:
            raise MissingFieldError("Transaction id is required")
        if not self.transaction_type:
            raise MissingFieldError("Transaction type is required")
        if not self.account_id:
            raise MissingFieldError("Transaction account id is required")
        if not is_number(self.amount) or is_nan(self.amount):
            raise InvalidAmountError(f"Transaction amount must be a number, got {self.amount!r}")
        if not self.currency:
            raise MissingFieldError("Transaction currency is required")
        if self.created_at is not None and not isinstance(self.created_at, datetime):
            raise InvalidTimestampError(
                f"Transaction created_at must be a datetime, got {self.created_at!r}"
            )

        try:
            transaction_type = TransactionType(self.transaction_type)
        except ValueError:
            raise InvalidTransactionTypeError(
                f"Unknown transaction type: {self.transaction_type!r}"
            ) from None
        if self.meta is not None and not isinstance(self.meta, Mapping):
            raise InvalidMetadataError(f"Transaction meta must be a mapping, got {self.meta!r}")

        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "transaction_type", transaction_type)
        object.__setattr__(self, "created_at", self.created_at or utc_now())
        object.__setattr__(self, "meta", freeze(self.meta or {}))

    def __hash__(self) -> int:
        return hash((self.transaction_id, self.account_id))

    def to_portable(self) -> dict[str, Any]:
        """Return a fresh JSON-safe dict describing this record."""
        return {
            "id": self.transaction_id,
            "type": self.transaction_type.value,
            "accountId": self.account_id,
            "amount": serialize_value(self.amount),
            "currency": self.currency,
            "createdAt": self.created_at.isoformat(),
            "meta": serialize_value(thaw(self.meta)),
        }
