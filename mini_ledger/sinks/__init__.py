"""Output sinks for printing ledger records."""

from mini_ledger.sinks.console import ConsoleSink

__all__ = ["ConsoleSink"]
