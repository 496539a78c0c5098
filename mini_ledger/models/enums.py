"""Enumeration types for ledger entities."""

from enum import Enum


class TransactionType(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    TRANSFER = "transfer"
    INTEREST = "interest"


class AccountKind(str, Enum):
    STANDARD = "standard"
    CURRENT = "current"
