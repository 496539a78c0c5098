"""Tests for Account, StandardAccount and CurrentAccount."""

import random
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from mini_ledger.exceptions import (
    AbstractInstantiationError,
    AccountClosedError,
    CurrencyMismatchError,
    FundsError,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidOverdraftLimitError,
    InvalidTimestampError,
    MissingFieldError,
    MissingIdGeneratorError,
    OverdraftExceededError,
)
from mini_ledger.ids import IdGenerator
from mini_ledger.models import (
    Account,
    CurrentAccount,
    StandardAccount,
    TransactionType,
    enforce_no_overdraft,
)

INVALID_AMOUNTS = [0, -1, -0.5, "10", None, True, float("nan"), float("inf"), Decimal("-3")]


class TestAccountConstruction:
    """Tests for account construction rules."""

    def test_base_account_is_not_constructible(self, id_generator: IdGenerator) -> None:
        """Test constructing the abstract base raises."""
        with pytest.raises(AbstractInstantiationError):
            Account("Alice", "EUR", id_generator)

    def test_subclass_without_floor_is_abstract(self, id_generator: IdGenerator) -> None:
        """Test a subclass must implement its floor check."""
        class Incomplete(Account):
            pass

        with pytest.raises(TypeError):
            Incomplete("Alice", "EUR", id_generator)

    def test_missing_id_generator(self) -> None:
        """Test an account requires an id generator."""
        with pytest.raises(MissingIdGeneratorError):
            StandardAccount("Alice", "EUR", None)

    def test_missing_currency(self, id_generator: IdGenerator) -> None:
        """Test an account requires a currency."""
        with pytest.raises(MissingFieldError):
            StandardAccount("Alice", "", id_generator)

    def test_defaults(self, id_generator: IdGenerator) -> None:
        """Test default account values."""
        account = StandardAccount("Alice", "EUR", id_generator)

        assert account.id == "ACC-1"
        assert account.owner == "Alice"
        assert account.currency == "EUR"
        assert account.get_balance() == 0
        assert account.is_closed is False
        assert account.created_at.tzinfo is not None

    def test_explicit_id_does_not_consume_generator(self, id_generator: IdGenerator) -> None:
        """Test an explicit account id skips allocation."""
        account = StandardAccount("Alice", "EUR", id_generator, account_id="savings-1")

        assert account.id == "savings-1"
        assert id_generator.current_value() == 0

    def test_custom_prefixes(self, id_generator: IdGenerator) -> None:
        """Test overriding the account and transaction id prefixes."""
        account = StandardAccount(
            "Alice", "EUR", id_generator, id_prefix="SAV", transaction_prefix="T"
        )
        tx = account.deposit(1)

        assert account.id == "SAV-1"
        assert tx.transaction_id == "T-2"

    def test_read_only_attributes(self, standard_account: StandardAccount) -> None:
        """Test identity and state attributes cannot be assigned."""
        for name in ("id", "currency", "created_at", "balance", "is_closed"):
            with pytest.raises(AttributeError):
                setattr(standard_account, name, None)

    def test_invalid_created_at(self, id_generator: IdGenerator) -> None:
        """Test a non-datetime creation time is rejected."""
        with pytest.raises(InvalidTimestampError):
            StandardAccount("Alice", "EUR", id_generator, created_at="2024-01-01")  # type: ignore[arg-type]
        assert id_generator.current_value() == 0

    @pytest.mark.parametrize("initial", ["100", None, float("nan"), float("inf")])
    def test_invalid_initial_balance(self, id_generator: IdGenerator, initial: object) -> None:
        """Test non-finite or non-numeric opening balances are rejected."""
        with pytest.raises(InvalidAmountError):
            StandardAccount("Alice", "EUR", id_generator, initial_balance=initial)  # type: ignore[arg-type]

    def test_negative_initial_balance_standard(self, id_generator: IdGenerator) -> None:
        """Test a standard account cannot open below zero."""
        with pytest.raises(InsufficientFundsError):
            StandardAccount("Alice", "EUR", id_generator, initial_balance=-1)

    def test_initial_balance_within_overdraft(self, id_generator: IdGenerator) -> None:
        """Test a current account may open overdrawn up to its limit."""
        account = CurrentAccount("Bob", "EUR", id_generator, overdraft_limit=50, initial_balance=-50)
        assert account.get_balance() == -50

        with pytest.raises(OverdraftExceededError):
            CurrentAccount("Bob", "EUR", id_generator, overdraft_limit=50, initial_balance=-51)

    def test_rejected_opening_balance_does_not_allocate_id(self, id_generator: IdGenerator) -> None:
        """Test a failed construction leaves the generator untouched."""
        with pytest.raises(InsufficientFundsError):
            StandardAccount("Alice", "EUR", id_generator, initial_balance=-1)
        with pytest.raises(OverdraftExceededError):
            CurrentAccount("Bob", "EUR", id_generator, overdraft_limit=50, initial_balance=-51)

        assert id_generator.current_value() == 0
        assert StandardAccount("Alice", "EUR", id_generator).id == "ACC-1"

    @pytest.mark.parametrize(
        "limit",
        [-1, float("nan"), "100", None, Decimal("NaN"), float("inf"), Decimal("Infinity")],
    )
    def test_invalid_overdraft_limit(self, id_generator: IdGenerator, limit: object) -> None:
        """Test negative, non-finite and non-numeric limits are rejected."""
        with pytest.raises(InvalidOverdraftLimitError):
            CurrentAccount("Bob", "EUR", id_generator, overdraft_limit=limit)  # type: ignore[arg-type]
        assert id_generator.current_value() == 0

    def test_zero_overdraft_limit(self, id_generator: IdGenerator) -> None:
        """Test a zero limit behaves like a standard floor."""
        account = CurrentAccount("Bob", "EUR", id_generator, overdraft_limit=0)
        with pytest.raises(OverdraftExceededError):
            account.withdraw(1)


class TestDeposit:
    """Tests for deposit."""

    def test_deposit(self, standard_account: StandardAccount) -> None:
        """Test a deposit raises the balance and returns its record."""
        tx = standard_account.deposit(250)

        assert standard_account.get_balance() == 750
        assert tx.transaction_type == TransactionType.DEPOSIT
        assert tx.account_id == standard_account.id
        assert tx.amount == 250
        assert tx.currency == "EUR"
        assert tx.meta == {}

    def test_transaction_ids_come_from_shared_generator(self, id_generator: IdGenerator) -> None:
        """Test accounts and transactions draw from one counter."""
        first = StandardAccount("Alice", "EUR", id_generator)
        second = CurrentAccount("Bob", "EUR", id_generator, overdraft_limit=10)

        assert first.deposit(1).transaction_id == "TX-3"
        assert second.deposit(1).transaction_id == "TX-4"
        assert id_generator.current_value() == 4

    @pytest.mark.parametrize("amount", INVALID_AMOUNTS)
    def test_invalid_amount(self, standard_account: StandardAccount, amount: object) -> None:
        """Test invalid deposit amounts leave the balance unchanged."""
        with pytest.raises(InvalidAmountError):
            standard_account.deposit(amount)  # type: ignore[arg-type]
        assert standard_account.get_balance() == 500

    def test_decimal_amounts(self, id_generator: IdGenerator) -> None:
        """Test Decimal balances stay exact and reject float amounts."""
        account = StandardAccount("Alice", "EUR", id_generator, initial_balance=Decimal("10.10"))
        account.deposit(Decimal("0.20"))

        assert account.get_balance() == Decimal("10.30")
        with pytest.raises(InvalidAmountError):
            account.deposit(0.5)
        assert account.get_balance() == Decimal("10.30")

    def test_overflow_keeps_balance(self, id_generator: IdGenerator) -> None:
        """Test a deposit overflowing to infinity is rejected."""
        account = StandardAccount("Alice", "EUR", id_generator, initial_balance=1.7e308)
        before = id_generator.current_value()

        with pytest.raises(InvalidAmountError):
            account.deposit(1.7e308)
        assert account.get_balance() == 1.7e308
        assert id_generator.current_value() == before


class TestStandardWithdraw:
    """Tests for the no-overdraft withdrawal policy."""

    def test_withdraw_more_than_balance(self, standard_account: StandardAccount) -> None:
        """Test overdrawing a standard account raises."""
        with pytest.raises(InsufficientFundsError):
            standard_account.withdraw(600)
        assert standard_account.get_balance() == 500

    def test_withdraw_entire_balance(self, standard_account: StandardAccount) -> None:
        """Test withdrawing down to exactly zero."""
        tx = standard_account.withdraw(500)

        assert standard_account.get_balance() == 0
        assert tx.transaction_type == TransactionType.WITHDRAWAL
        assert tx.amount == 500
        assert tx.currency == "EUR"
        assert tx.meta == {}

    @pytest.mark.parametrize("amount", INVALID_AMOUNTS)
    def test_invalid_amount(self, standard_account: StandardAccount, amount: object) -> None:
        """Test invalid withdrawal amounts leave the balance unchanged."""
        with pytest.raises(InvalidAmountError):
            standard_account.withdraw(amount)  # type: ignore[arg-type]
        assert standard_account.get_balance() == 500

    def test_failed_withdraw_does_not_allocate_id(
        self, standard_account: StandardAccount, id_generator: IdGenerator
    ) -> None:
        """Test a rejected withdrawal consumes no transaction id."""
        before = id_generator.current_value()
        with pytest.raises(InsufficientFundsError):
            standard_account.withdraw(501)
        assert id_generator.current_value() == before

    def test_enforce_no_overdraft(self) -> None:
        """Test the default policy function."""
        enforce_no_overdraft("ACC-1", 0)
        with pytest.raises(InsufficientFundsError, match="ACC-1"):
            enforce_no_overdraft("ACC-1", -0.01)


class TestCurrentAccountWithdraw:
    """Tests for overdraft withdrawals."""

    def test_withdraw_to_exact_limit(self, current_account: CurrentAccount) -> None:
        """Test withdrawing down to exactly the overdraft limit."""
        tx = current_account.withdraw(100)

        assert current_account.get_balance() == -100
        assert tx.transaction_type == TransactionType.WITHDRAWAL
        assert tx.meta == {"overdraftLimit": 100}

    def test_withdraw_past_limit(self, current_account: CurrentAccount) -> None:
        """Test going past the overdraft limit raises."""
        current_account.withdraw(100)

        with pytest.raises(OverdraftExceededError):
            current_account.withdraw(1)
        assert current_account.get_balance() == -100

    def test_overdraft_error_is_not_insufficient_funds(self, current_account: CurrentAccount) -> None:
        """Test the overdraft error is distinct from insufficient funds."""
        with pytest.raises(FundsError) as exc_info:
            current_account.withdraw(101)
        assert not isinstance(exc_info.value, InsufficientFundsError)

    def test_deposit_recovers_from_overdraft(self, current_account: CurrentAccount) -> None:
        """Test deposits on an overdrawn account carry no meta."""
        current_account.withdraw(80)
        tx = current_account.deposit(30)

        assert current_account.get_balance() == -50
        assert tx.meta == {}


class TestClosedAccount:
    """Tests for the Open -> Closed transition."""

    def test_close(self, standard_account: StandardAccount) -> None:
        """Test closing an open account."""
        standard_account.close()
        assert standard_account.is_closed is True

    def test_close_twice(self, standard_account: StandardAccount) -> None:
        """Test closing an already closed account raises."""
        standard_account.close()
        with pytest.raises(AccountClosedError):
            standard_account.close()

    @pytest.mark.parametrize("amount", [10, 0, -5, "x"])
    def test_operations_rejected(
        self, standard_account: StandardAccount, current_account: CurrentAccount, amount: object
    ) -> None:
        """Test closed accounts reject deposits and withdrawals first."""
        for account in (standard_account, current_account):
            balance = account.get_balance()
            account.close()

            with pytest.raises(AccountClosedError):
                account.deposit(amount)  # type: ignore[arg-type]
            with pytest.raises(AccountClosedError):
                account.withdraw(amount)  # type: ignore[arg-type]
            assert account.get_balance() == balance


class TestSnapshots:
    """Tests for get_snapshot."""

    def test_standard_snapshot(self, id_generator: IdGenerator) -> None:
        """Test the standard account snapshot shape."""
        created = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
        account = StandardAccount(
            "Alice", "EUR", id_generator, initial_balance=Decimal("12.50"), created_at=created
        )

        assert account.get_snapshot() == {
            "id": "ACC-1",
            "owner": "Alice",
            "currency": "EUR",
            "balance": 12.5,
            "createdAt": "2024-03-01T09:00:00+00:00",
            "isClosed": False,
        }

    def test_current_snapshot(self, current_account: CurrentAccount) -> None:
        """Test the current account snapshot adds kind and limit."""
        current_account.withdraw(40)
        snapshot = current_account.get_snapshot()

        assert snapshot["kind"] == "current"
        assert snapshot["overdraftLimit"] == 100
        assert snapshot["balance"] == -40
        assert "kind" not in StandardAccount("A", "EUR", IdGenerator()).get_snapshot()

    def test_snapshot_is_detached(self, standard_account: StandardAccount) -> None:
        """Test changing a snapshot leaves the account unchanged."""
        snapshot = standard_account.get_snapshot()
        snapshot["balance"] = 0
        assert standard_account.get_balance() == 500


class TestCurrencyCheck:
    """Tests for the reserved currency validation helper."""

    def test_matching_currency(self, standard_account: StandardAccount) -> None:
        """Test a matching currency passes."""
        standard_account._assert_currency("EUR")

    def test_mismatched_currency(self, standard_account: StandardAccount) -> None:
        """Test a different currency raises."""
        with pytest.raises(CurrencyMismatchError):
            standard_account._assert_currency("USD")


class TestBalanceProperty:
    """Balance equals initial + deposits - successful withdrawals."""

    @pytest.mark.parametrize("kind", ["standard", "current"])
    def test_random_sequence(self, seed: int, id_generator: IdGenerator, kind: str) -> None:
        """Test the balance after a seeded random operation sequence."""
        rng = random.Random(seed)
        if kind == "standard":
            account: Account = StandardAccount("A", "EUR", id_generator, initial_balance=100)
        else:
            account = CurrentAccount("A", "EUR", id_generator, overdraft_limit=250, initial_balance=100)

        expected = 100
        for _ in range(300):
            amount = rng.randint(-20, 200)
            operation = rng.choice(["deposit", "withdraw"])
            try:
                getattr(account, operation)(amount)
            except (InvalidAmountError, FundsError):
                continue
            expected += amount if operation == "deposit" else -amount

        assert account.get_balance() == expected
