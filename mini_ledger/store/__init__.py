"""In-memory ledger store keeping accounts and their transaction records."""

from mini_ledger.store.ledger import LedgerStore

__all__ = ["LedgerStore"]
