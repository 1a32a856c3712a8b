"""Tests for importing plain values, mappings, sequences and modules."""

from decimal import Decimal
from fractions import Fraction

import numpy as np
import pytest

from mathns import (
    ArityError,
    DuplicateNameError,
    ImportOptions,
    TypedFunction,
    UnsupportedTypeError,
    typed,
)


def test_import_mapping_of_values(math):
    math.import_({"myvalue": 42, "hello": lambda name: f"hello, {name}!"})

    assert math.myvalue * 2 == 84
    assert math.hello("user") == "hello, user!"


def test_duplicate_is_rejected_and_first_kept(math):
    math.import_({"add2": lambda a, b: a + b})

    with pytest.raises(DuplicateNameError, match=r'\[102\] Cannot import "add2"'):
        math.import_({"add2": lambda a, b, c: a + b + c})

    assert math.add2(2, 3) == 5


def test_override_replaces_entry(math):
    math.import_({"add2": lambda a, b: a + b})
    add3 = lambda a, b, c: a + b + c  # noqa: E731

    math.import_({"add2": add3}, {"override": True})

    assert math.add2 is add3
    assert math.add2(2, 3, 4) == 9


def test_silent_skips_violations_and_keeps_siblings(math):
    math.import_({"a": 1})

    math.import_({"a": 2, "b": 3, "c": {"deep": object()}}, ImportOptions(silent=True))

    assert math.a == 1
    assert math.b == 3
    assert "deep" not in math


def test_import_sequence_of_units(math):
    math.import_([{"two": 2}, {"three": 3}])

    assert math.two == 2
    assert math.three == 3


def test_nested_mappings_are_flattened(math):
    math.import_({"group": {"four": 4, "five": 5}})

    assert math.four == 4
    assert math.five == 5
    assert "group" not in math


def test_domain_values_are_admitted(math):
    values = {
        "c": 1 + 2j,
        "big": Decimal("1.5"),
        "half": Fraction(1, 2),
        "m": np.eye(2),
        "arr": [1, 2, 3],
        "flag": True,
        "nothing": None,
        "label": "text",
    }
    math.import_(values)

    for name, value in values.items():
        assert math[name] is value


def test_unsupported_unit_raises(math):
    with pytest.raises(UnsupportedTypeError, match=r"\[101\]"):
        math.import_(42)
    with pytest.raises(UnsupportedTypeError):
        math.import_({"bad": object()})

    math.import_(42, {"silent": True})


@pytest.mark.parametrize("args", [(), ({"a": 1}, {}, "extra")])
def test_arity_is_checked(math, args):
    with pytest.raises(ArityError, match=r"\[100\]") as excinfo:
        math.import_(*args)
    assert excinfo.value.count == len(args)
    assert isinstance(excinfo.value, TypeError)


def test_arity_error_is_not_silenced(math):
    with pytest.raises(ArityError):
        math.import_({"a": 1}, {"silent": True}, None)


def test_typed_functions_are_merged(math):
    math.import_({"f": typed("f", {"number": lambda x: "number"})})
    math.import_({"f": typed("f", {"string": lambda x: "string"})})

    assert isinstance(math.f, TypedFunction)
    assert set(math.f.signatures) == {"number", "string"}
    assert math.f(1) == "number"
    assert math.f("x") == "string"


def test_typed_override_replaces_and_renames(math):
    math.import_({"f": typed("f", {"number": lambda x: "old"})})
    math.import_({"f": typed("other", {"string": lambda x: "new"})}, {"override": True})

    assert math.f.name == "f"
    assert list(math.f.signatures) == ["string"]


def test_signature_attribute_is_lifted(math):
    def square(x):
        return x * x

    square.signature = "number"
    math.import_({"square": square})

    assert isinstance(math.square, TypedFunction)
    assert math.square.name == "square"
    assert math.square(4) == 16


def test_wrap_converts_matrices_to_lists(math, sample_extension):
    math.import_({"norm": sample_extension.norm}, {"wrap": True})

    assert math.norm(np.array([3.0, 4.0])) == 5.0
    assert math.norm.__name__ == "norm"


def test_wrap_uses_value_of(math):
    class Boxed:
        def __init__(self, v):
            self.v = v

        def value_of(self):
            return self.v

    math.import_({"inc": lambda x: x + 1}, {"wrap": True})
    assert math.inc(Boxed(1)) == 2
    assert math.inc(0) == 1


def test_import_module_uses_public_names(math, sample_extension):
    math.import_(sample_extension)

    assert math.answer == 42
    assert math.hello("you") == "hello, you!"
    assert math.cube(3) == 27
    assert "_helper" not in math
    assert "operator" not in math


def test_import_emits_notification(math, import_events):
    math.import_({"two": 2})

    assert len(import_events) == 1
    name, resolver, path = import_events[0]
    assert name == "two"
    assert resolver() == 2
    assert path is None


def test_rejected_import_emits_nothing(math, import_events):
    math.import_({"two": 2})
    math.import_({"two": 3}, {"silent": True})

    assert [e[0] for e in import_events] == ["two"]


def test_config_defaults_apply_without_options():
    from mathns import MathConfig, create

    math = create(MathConfig(import_defaults=ImportOptions(override=True)))
    math.import_({"a": 1})
    math.import_({"a": 2})
    assert math.a == 2

    with pytest.raises(DuplicateNameError):
        math.import_({"a": 3}, {"override": False})
