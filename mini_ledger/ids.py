"""Monotonic identifier generation.

Ids are sequential and therefore guessable. They are meant for in-memory
use and must not be exposed where enumeration matters.

Usage::

    gen = IdGenerator(start_at=0)
    gen.next("ACC")   # "ACC-1"
    gen.next()        # "2"
"""

from __future__ import annotations

import threading

from mini_ledger.exceptions import InvalidStartValueError


class IdGenerator:
    """Counter-backed allocator of string identifiers.

    Parameters
    ----------
    start_at : int
        Initial counter value (default 1). The first call to :meth:`next`
        returns ``start_at + 1``.
    """

    __slots__ = ("_counter", "_lock")

    def __init__(self, start_at: int = 1) -> None:
        if isinstance(start_at, bool) or not isinstance(start_at, int) or start_at < 0:
            raise InvalidStartValueError(
                f"start_at must be a non-negative integer, got {start_at!r}"
            )
        self._counter = start_at
        self._lock = threading.Lock()

    def next(self, prefix: str | None = None) -> str:
        """Advance the counter by one and return the new id.

        Returns ``"<prefix>-<n>"`` when a non-empty prefix is given,
        otherwise the bare counter value.
        """
        with self._lock:
            self._counter += 1
            value = self._counter

        if prefix:
            return f"{prefix}-{value}"
        return str(value)

    def current_value(self) -> int:
        """Return the current counter value without advancing it."""
        return self._counter

    def __repr__(self) -> str:
        return f"IdGenerator(current={self._counter})"
