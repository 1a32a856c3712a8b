"""mathns: Typed Functions
---------------------------------------------------------
Minimal multi-signature callables. A typed function maps signature strings
such as ``"number, number"`` to implementations and dispatches each call to
the first signature whose parameter type tests accept the arguments.

Public API
----------
``TypedFunction`` : Callable holding a signature map
``typed`` : Build a typed function from a name and a signature map
``merge`` : Union of two typed functions, the second winning on overlap
``tag_signature`` : Lift a plain function with a ``signature`` string
``is_typed_callable`` : Duck-typed check for a signature map

Notes
-----
- Only exact type tests are performed; there are no implicit conversions and
  no rest parameters.
- Signature keys are normalized (``"number,number"`` and ``"number, number"``
  are the same signature).
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from .errors import SignatureMismatchError
from .values import (
    is_array,
    is_bignumber,
    is_complex,
    is_fraction,
    is_matrix,
    is_number,
    is_unit,
)

__all__ = [
    "TYPE_TESTS",
    "TypedFunction",
    "typed",
    "merge",
    "tag_signature",
    "is_typed_callable",
    "has_signature",
]

TypeTest = Callable[[Any], bool]

TYPE_TESTS: dict[str, TypeTest] = {
    "number": is_number,
    "boolean": lambda x: isinstance(x, bool),
    "string": lambda x: isinstance(x, str),
    "null": lambda x: x is None,
    "Complex": is_complex,
    "BigNumber": is_bignumber,
    "Fraction": is_fraction,
    "Array": is_array,
    "Matrix": is_matrix,
    "Unit": is_unit,
    "Function": callable,
    "Object": lambda x: isinstance(x, Mapping),
    "any": lambda x: True,
}


def _normalize(signature: str) -> str:
    params = [p.strip() for p in signature.split(",")] if signature.strip() else []
    return ", ".join(" | ".join(t.strip() for t in p.split("|")) for p in params)


def _compile(signature: str) -> list[list[TypeTest]]:
    compiled: list[list[TypeTest]] = []
    if not signature:
        return compiled
    for param in signature.split(","):
        tests = []
        for type_name in param.split("|"):
            type_name = type_name.strip()
            if type_name not in TYPE_TESTS:
                raise SignatureMismatchError(
                    f"[201] Unknown type '{type_name}' in signature '{signature}'"
                )
            tests.append(TYPE_TESTS[type_name])
        compiled.append(tests)
    return compiled


class TypedFunction:
    """A callable dispatching on argument types.

    Attributes
    ----------
    name : str
        Function name, used in error messages and when importing.
    signatures : dict[str, Callable]
        Normalized signature string to implementation, in insertion order.
    """

    def __init__(self, name: str, signatures: Mapping[str, Callable[..., Any]]) -> None:
        if not signatures:
            raise SignatureMismatchError(f"[202] No signatures provided for '{name}'")
        self.name = name
        self.__name__ = name
        self.signatures: dict[str, Callable[..., Any]] = {}
        self._dispatch: list[tuple[str, list[list[TypeTest]], Callable[..., Any]]] = []
        for signature, fn in signatures.items():
            key = _normalize(signature)
            self.signatures[key] = fn
        for key, fn in self.signatures.items():
            self._dispatch.append((key, _compile(key), fn))

    def __call__(self, *args: Any) -> Any:
        for _, params, fn in self._dispatch:
            if len(params) != len(args):
                continue
            if all(any(test(arg) for test in tests) for tests, arg in zip(params, args)):
                return fn(*args)
        actual = ", ".join(type(a).__name__ for a in args)
        expected = "; ".join(f"({s})" for s in self.signatures)
        raise SignatureMismatchError(
            f"[200] Unexpected arguments in function {self.name or 'unnamed'}"
            f"({actual}); expected one of: {expected}"
        )

    def __repr__(self) -> str:
        return f"TypedFunction({self.name!r}, signatures={list(self.signatures)})"


def typed(name: str, signatures: Mapping[str, Callable[..., Any]]) -> TypedFunction:
    return TypedFunction(name, signatures)


def is_typed_callable(x: Any) -> bool:
    """True iff ``x`` is callable and carries a signature map."""
    return callable(x) and isinstance(getattr(x, "signatures", None), Mapping)


def has_signature(fn: Any) -> bool:
    """True iff ``fn`` is a plain callable declaring one signature string."""
    return callable(fn) and isinstance(getattr(fn, "signature", None), str)


def tag_signature(name: str, fn: Callable[..., Any]) -> TypedFunction:
    """Lift a function with a ``signature`` attribute into a typed function."""
    return TypedFunction(name, {fn.signature: fn})  # type: ignore[attr-defined]


def merge(a: Any, b: Any) -> TypedFunction:
    """Merge two typed callables.

    The result holds the union of both signature maps; on overlapping
    signatures the implementation from ``b`` wins. The result is itself a
    typed callable and can be merged again.

    Raises
    ------
    SignatureMismatchError
        - [203] Either argument is not a typed callable.
    """
    if not (is_typed_callable(a) and is_typed_callable(b)):
        raise SignatureMismatchError("[203] merge() expects two typed functions")
    signatures: dict[str, Callable[..., Any]] = {}
    for key, fn in a.signatures.items():
        signatures[_normalize(key)] = fn
    for key, fn in b.signatures.items():
        signatures[_normalize(key)] = fn
    name = getattr(a, "name", "") or getattr(b, "name", "")
    return TypedFunction(name, signatures)
