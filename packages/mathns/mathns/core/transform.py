"""mathns: Transforms and the Expression-Safe View
---------------------------------------------------------
A transform is an alternate implementation of a function that is used only by
the sandboxed expression evaluator. Transforms live in the
``expression.transform`` scope; the expression-safe view projects the
namespace for the evaluator, hiding restricted top-level segments and
substituting transforms for raw values.

Public API
----------
``UNSAFE_SEGMENTS`` : Top-level names never reachable from expressions
``TransformRegistry`` : Name to transform mapping backed by a scope
``ExpressionView`` : Read-only projection computed on every lookup
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import Any

from .cell import OnceCell, resolve
from .factory import TRANSFORM_PATH
from .scope import MISSING, Scope

__all__ = ["UNSAFE_SEGMENTS", "TransformRegistry", "ExpressionView"]

# Namespaces and functions not available in the parser for safety reasons.
# "chain" covers the chain method; there is a unit named chain too.
UNSAFE_SEGMENTS: frozenset[str] = frozenset(
    {"expression", "type", "docs", "error", "json", "chain"}
)


def get_transform(value: Any) -> Callable[..., Any] | None:
    """Return the callable ``transform`` attribute of ``value``, if any."""
    transform = getattr(value, "transform", None)
    return transform if callable(transform) else None


class TransformRegistry:
    """Transforms registered by name, stored in the ``expression.transform`` scope."""

    def __init__(self, root: Scope) -> None:
        self._scope = root.resolve_path(TRANSFORM_PATH)

    @property
    def scope(self) -> Scope:
        return self._scope

    def __contains__(self, name: object) -> bool:
        return name in self._scope

    def get(self, name: str) -> Any:
        return self._scope[name]

    def set(self, name: str, transform: Callable[..., Any]) -> None:
        self._scope.set(name, transform)

    def remove(self, name: str) -> None:
        self._scope.delete(name)

    def sync(self, name: str, value: Any) -> None:
        """Record or clear the transform carried by a freshly imported value."""
        transform = get_transform(value)
        if transform is not None:
            self.set(name, transform)
        else:
            self.remove(name)

    def names(self) -> list[str]:
        return list(self._scope)


class ExpressionView(Mapping[str, Any]):
    """Namespace as seen by the expression evaluator.

    Lookups are computed from the namespace, the transform registry and
    ``UNSAFE_SEGMENTS`` each time; the view holds no entries of its own.
    Only top-level entries are projected. Nested scopes, and with them
    factories registered under a ``path``, are never handed out.
    """

    def __init__(self, root: Scope, transforms: TransformRegistry) -> None:
        self._root = root
        self._transforms = transforms

    def _visible(self, name: str) -> bool:
        slot = self._root.raw(name)
        if slot is MISSING or isinstance(slot, Scope):
            return False
        if isinstance(slot, OnceCell) and slot.resolved:
            return not isinstance(slot.get(), Scope)
        return True

    def __getitem__(self, name: str) -> Any:
        if not isinstance(name, str) or name in UNSAFE_SEGMENTS:
            raise KeyError(name)
        if name in self._transforms:
            return self._transforms.get(name)
        slot = self._root.raw(name)
        if slot is MISSING or isinstance(slot, Scope):
            raise KeyError(name)
        value = resolve(slot)
        if isinstance(value, Scope):
            raise KeyError(name)
        return value

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str) or name in UNSAFE_SEGMENTS:
            return False
        return name in self._transforms or self._visible(name)

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for name in list(self._root) + self._transforms.names():
            if name not in seen and name in self:
                seen.add(name)
                yield name

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        return f"ExpressionView(keys={list(self)})"
