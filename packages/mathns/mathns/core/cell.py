"""mathns: Once-Cells
---------------------------------------------------------
Single-assignment memoization cells backing lazy namespace entries. A cell
wraps a zero-argument resolver bound to one (scope, key) pair; the first
``get()`` runs the resolver and caches the outcome, every later ``get()`` is a
plain lookup.

Behavior
--------
- The resolver runs at most once. A resolver that raises leaves the cell in a
  failed state and the same exception is re-raised on every later read.
- Reading a cell while its own resolver is running raises
  ``CyclicResolutionError`` listing the chain of cells being resolved.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any

from .errors import CyclicResolutionError

__all__ = ["CellState", "OnceCell", "resolve"]

Resolver = Callable[[], Any]

# Labels of the cells currently resolving, innermost last.
_resolving: list[str] = []


class CellState(Enum):
    PENDING = "pending"
    RESOLVING = "resolving"
    RESOLVED = "resolved"
    FAILED = "failed"


class OnceCell:
    """Deferred value computed by ``resolver`` on first access.

    Parameters
    ----------
    label : str
        Dotted name of the entry, used in cycle reports.
    resolver : Callable[[], Any]
        Zero-argument function producing the value.

    Examples
    --------
    >>> calls = []
    >>> cell = OnceCell("pi", lambda: calls.append(1) or 3.14159)
    >>> cell.get(), cell.get(), len(calls)
    (3.14159, 3.14159, 1)
    """

    __slots__ = ("label", "resolver", "state", "_value", "_error")

    def __init__(self, label: str, resolver: Resolver) -> None:
        self.label = label
        self.resolver = resolver
        self.state = CellState.PENDING
        self._value: Any = None
        self._error: BaseException | None = None

    @property
    def resolved(self) -> bool:
        return self.state is CellState.RESOLVED

    def get(self) -> Any:
        if self.state is CellState.RESOLVED:
            return self._value
        if self._error is not None:
            raise self._error
        if self.state is CellState.RESOLVING:
            start = _resolving.index(self.label) if self.label in _resolving else 0
            raise CyclicResolutionError(_resolving[start:] + [self.label])

        self.state = CellState.RESOLVING
        _resolving.append(self.label)
        try:
            value = self.resolver()
        except BaseException as e:
            self.state = CellState.FAILED
            self._error = e
            raise
        finally:
            _resolving.pop()
        self._value = value
        self.state = CellState.RESOLVED
        return value

    def __repr__(self) -> str:
        if self.state is CellState.RESOLVED:
            return f"OnceCell({self.label!r}, value={self._value!r})"
        return f"OnceCell({self.label!r}, {self.state.value})"


def resolve(slot: Any) -> Any:
    """Return the value held by ``slot``, forcing it if it is a cell."""
    if isinstance(slot, OnceCell):
        return slot.get()
    return slot
