"""Overdraft-capable current account."""

from __future__ import annotations

from typing import Any

from mini_ledger.exceptions import InvalidOverdraftLimitError, OverdraftExceededError
from mini_ledger.ids import IdGenerator
from mini_ledger.models.account import Account
from mini_ledger.models.base import Number, is_finite, is_nan, is_number
from mini_ledger.models.enums import AccountKind
from mini_ledger.serialization import serialize_value


class CurrentAccount(Account):
    """Account that may go overdrawn down to ``-overdraft_limit``.

    Deposits behave as in :class:`Account`. Withdrawal records carry the
    overdraft limit in effect under ``meta["overdraftLimit"]``. Remaining
    keyword arguments are passed to :class:`Account`.
    """

    KIND = AccountKind.CURRENT

    def __init__(
        self,
        owner: str,
        currency: str,
        id_generator: IdGenerator | None,
        overdraft_limit: Number,
        **kwargs: Any,
    ) -> None:
        if (
            not is_number(overdraft_limit)
            or is_nan(overdraft_limit)
            or not is_finite(overdraft_limit)
            or overdraft_limit < 0
        ):
            raise InvalidOverdraftLimitError(
                f"Overdraft limit must be a finite non-negative number, got {overdraft_limit!r}"
            )
        self._overdraft_limit = overdraft_limit

        super().__init__(owner, currency, id_generator, **kwargs)

    @property
    def overdraft_limit(self) -> Number:
        return self._overdraft_limit

    def _check_floor(self, new_balance: Number) -> None:
        if new_balance < -self._overdraft_limit:
            raise OverdraftExceededError(
                f"Account {self.id} would exceed its overdraft limit of "
                f"{self._overdraft_limit} (resulting balance would be {new_balance})"
            )

    def _withdrawal_meta(self) -> dict[str, Any]:
        return {"overdraftLimit": self._overdraft_limit}

    def get_snapshot(self) -> dict[str, Any]:
        snapshot = super().get_snapshot()
        snapshot["kind"] = self.KIND.value
        snapshot["overdraftLimit"] = serialize_value(self._overdraft_limit)
        return snapshot
