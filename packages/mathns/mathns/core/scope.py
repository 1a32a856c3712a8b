"""mathns: Scope Tree
---------------------------------------------------------
Ordered, nestable namespace scopes. A scope maps string keys to slots; a slot
holds a plain value, a nested ``Scope``, or an ``OnceCell`` that produces the
value on first read.

Public API
----------
``Scope`` : Mapping of names to values with explicit path resolution
``MISSING`` : Sentinel returned by ``Scope.raw`` for absent keys

Notes
-----
- Nested scopes are addressed with dotted paths (``"expression.transform"``)
  through ``resolve_path``, which returns the scope handle.
- Reading through ``[]``, ``get`` or attribute access forces lazy cells;
  ``raw`` and ``is_resolved`` never do.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from .cell import OnceCell, resolve
from .errors import UnsupportedTypeError

__all__ = ["Scope", "MISSING", "split_path"]


class _Missing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def split_path(path: str | Sequence[str] | None) -> list[str]:
    """Split a dotted path into segments; empty segments are dropped."""
    if path is None:
        return []
    if isinstance(path, str):
        return [seg for seg in path.split(".") if seg]
    return [seg for seg in path if seg]


class Scope(Mapping[str, Any]):
    """A named node in the namespace tree.

    Parameters
    ----------
    name : str, default ""
        Segment name of this scope; the root scope is unnamed.
    parent : Scope or None
        Enclosing scope.

    Examples
    --------
    >>> root = Scope()
    >>> root.resolve_path("expression.transform").set("map", len)
    >>> root.lookup("expression.transform.map") is len
    True
    """

    __slots__ = ("_name", "_parent", "_slots")

    def __init__(self, name: str = "", parent: Scope | None = None) -> None:
        self._name = name
        self._parent = parent
        self._slots: dict[str, Any] = {}

    # --------------------------- identity ---------------------------
    @property
    def name(self) -> str:
        return self._name

    @property
    def path(self) -> str:
        """Dotted path of this scope from the root ("" for the root)."""
        segments: list[str] = []
        node: Scope | None = self
        while node is not None and node._parent is not None:
            segments.append(node._name)
            node = node._parent
        return ".".join(reversed(segments))

    def qualify(self, key: str) -> str:
        """Dotted name of ``key`` inside this scope."""
        return f"{self.path}.{key}" if self.path else key

    # --------------------------- paths ---------------------------
    def resolve_path(self, path: str | Sequence[str] | None, *, create: bool = True) -> Scope:
        """Return the scope addressed by ``path`` relative to this scope.

        Missing scopes along the way are created when ``create`` is True.

        Raises
        ------
        KeyError
            A segment is absent and ``create`` is False.
        UnsupportedTypeError
            - [105] A segment is bound to something that is not a scope.
        """
        node = self
        for segment in split_path(path):
            if segment not in node._slots:
                if not create:
                    raise KeyError(node.qualify(segment))
                node._slots[segment] = Scope(segment, node)
            child = resolve(node._slots[segment])
            if not isinstance(child, Scope):
                raise UnsupportedTypeError(
                    f"[105] Cannot traverse '{node.qualify(segment)}': not a namespace"
                )
            node = child
        return node

    def lookup(self, dotted: str, default: Any = MISSING) -> Any:
        """Read a value by dotted name, forcing lazy cells on the way."""
        *scopes, key = split_path(dotted) or [""]
        try:
            node = self.resolve_path(scopes, create=False)
        except (KeyError, UnsupportedTypeError):
            if default is MISSING:
                raise KeyError(dotted) from None
            return default
        if key not in node._slots:
            if default is MISSING:
                raise KeyError(dotted)
            return default
        return resolve(node._slots[key])

    # --------------------------- slots ---------------------------
    def raw(self, key: str) -> Any:
        """Return the slot stored under ``key`` without forcing it."""
        return self._slots.get(key, MISSING)

    def set(self, key: str, value: Any) -> None:
        self._slots[key] = value

    def bind_lazy(self, key: str, cell: OnceCell) -> None:
        self._slots[key] = cell

    def delete(self, key: str) -> None:
        self._slots.pop(key, None)

    def is_resolved(self, key: str) -> bool:
        """False while ``key`` is bound to a cell that has not run yet."""
        slot = self._slots.get(key, MISSING)
        if isinstance(slot, OnceCell):
            return slot.resolved
        return slot is not MISSING

    # --------------------------- mapping protocol ---------------------------
    def __getitem__(self, key: str) -> Any:
        if key not in self._slots:
            raise KeyError(key)
        return resolve(self._slots[key])

    def __contains__(self, key: object) -> bool:
        return key in self._slots

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._slots))

    def __len__(self) -> int:
        return len(self._slots)

    def __getattr__(self, key: str) -> Any:
        if key.startswith("_"):
            raise AttributeError(key)
        try:
            return self[key]
        except KeyError:
            raise AttributeError(
                f"'{self.path or 'namespace'}' has no entry '{key}'"
            ) from None

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self._slots))

    def __repr__(self) -> str:
        return f"Scope({self.path or '<root>'!r}, keys={list(self._slots)})"

    def __eq__(self, other: object) -> bool:
        return self is other

    __hash__ = object.__hash__
