"""Tests for typed functions."""

from fractions import Fraction

import numpy as np
import pytest

from mathns import SignatureMismatchError, TypedFunction, is_typed_callable, merge, tag_signature, typed


def test_dispatch_by_type_and_arity():
    fn = typed(
        "describe",
        {
            "number": lambda x: "number",
            "string": lambda x: "string",
            "Matrix": lambda x: "matrix",
            "number, number": lambda a, b: "pair",
        },
    )
    assert fn(1) == "number"
    assert fn("x") == "string"
    assert fn(np.eye(2)) == "matrix"
    assert fn(1, 2.5) == "pair"
    with pytest.raises(SignatureMismatchError, match=r"\[200\]"):
        fn(True)


def test_union_types_and_normalized_keys():
    fn = typed("neg", {"number|Fraction": lambda x: -x})
    assert list(fn.signatures) == ["number | Fraction"]
    assert fn(Fraction(1, 2)) == Fraction(-1, 2)


def test_unknown_type_is_rejected():
    with pytest.raises(SignatureMismatchError, match=r"\[201\]"):
        typed("bad", {"Quaternion": lambda q: q})


def test_merge_is_union_with_second_winning():
    a = typed("f", {"number": lambda x: "a-number", "string": lambda x: "a-string"})
    b = typed("f", {"string": lambda x: "b-string", "boolean": lambda x: "b-boolean"})

    merged = merge(a, b)

    assert isinstance(merged, TypedFunction)
    assert set(merged.signatures) == {"number", "string", "boolean"}
    assert merged(1) == "a-number"
    assert merged("s") == "b-string"
    assert merged(True) == "b-boolean"
    assert is_typed_callable(merge(merged, typed("f", {"null": lambda x: None})))


def test_tag_signature_lifts_plain_function():
    def square(x):
        return x * x

    square.signature = "number"
    fn = tag_signature("square", square)
    assert fn.name == "square"
    assert fn(3) == 9
    assert not is_typed_callable(square)
