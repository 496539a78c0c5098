"""Pytest configuration and fixtures."""

import pytest

from mini_ledger.ids import IdGenerator
from mini_ledger.models import CurrentAccount, StandardAccount


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def id_generator() -> IdGenerator:
    """Generator whose first id is 1."""
    return IdGenerator(start_at=0)


@pytest.fixture
def standard_account(id_generator: IdGenerator) -> StandardAccount:
    """Standard EUR account opened with 500."""
    return StandardAccount("Alice Example", "EUR", id_generator, initial_balance=500)


@pytest.fixture
def current_account(id_generator: IdGenerator) -> CurrentAccount:
    """Current EUR account with zero balance and a 100 overdraft limit."""
    return CurrentAccount("Bob Example", "EUR", id_generator, overdraft_limit=100)
