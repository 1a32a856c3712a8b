"""mathns: Domain Value Predicates
---------------------------------------------------------
Type guards deciding which values may be stored in a namespace directly, plus
the primitive-value extraction used by wrapped imports.

Public API
----------
``is_unit``, ``is_complex``, ``is_bignumber``, ``is_fraction``, ``is_matrix``,
``is_array`` : Domain value predicates
``is_supported_type`` : Admissibility test for direct registration
``primitive_value`` : Convert a domain value into a plain Python value

Notes
-----
- Matrices are numpy arrays; arbitrary-precision numbers are ``decimal.Decimal``;
  units are any object exposing ``magnitude`` and ``units`` (e.g. pint
  quantities).
"""

from __future__ import annotations

from decimal import Decimal
from fractions import Fraction
from typing import Any, Protocol, runtime_checkable

import numpy as np

__all__ = [
    "UnitLike",
    "is_unit",
    "is_complex",
    "is_bignumber",
    "is_fraction",
    "is_matrix",
    "is_array",
    "is_number",
    "is_supported_type",
    "primitive_value",
]


@runtime_checkable
class UnitLike(Protocol):
    """Structural type for physical quantities with units."""

    magnitude: Any
    units: Any


def is_unit(x: Any) -> bool:
    return isinstance(x, UnitLike)


def is_complex(x: Any) -> bool:
    return isinstance(x, (complex, np.complexfloating))


def is_bignumber(x: Any) -> bool:
    return isinstance(x, Decimal)


def is_fraction(x: Any) -> bool:
    return isinstance(x, Fraction)


def is_matrix(x: Any) -> bool:
    return isinstance(x, np.ndarray)


def is_array(x: Any) -> bool:
    return isinstance(x, (list, tuple))


def is_number(x: Any) -> bool:
    """True for real machine numbers, excluding booleans."""
    if isinstance(x, bool):
        return False
    return isinstance(x, (int, float, np.integer, np.floating))


def is_supported_type(x: Any) -> bool:
    """Check whether ``x`` can be registered in a namespace as-is.

    Admissible are callables, numbers, strings, booleans, ``None`` and the
    recognized domain values (unit, complex, big number, fraction, matrix,
    array).
    """
    return (
        callable(x)
        or x is None
        or isinstance(x, (bool, str))
        or is_number(x)
        or is_unit(x)
        or is_complex(x)
        or is_bignumber(x)
        or is_fraction(x)
        or is_matrix(x)
        or is_array(x)
    )


def primitive_value(x: Any) -> Any:
    """Extract the primitive value of ``x``.

    Matrices become nested lists and objects exposing a ``value_of()`` method
    are replaced by its result. Falsy values and everything else pass through.
    """
    if is_matrix(x):
        return x.tolist()
    if not x:
        return x
    value_of = getattr(x, "value_of", None)
    if callable(value_of):
        return value_of()
    return x
