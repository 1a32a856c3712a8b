"""Tests for the scope tree."""

import pytest

from mathns import MISSING, OnceCell, Scope, UnsupportedTypeError


def test_resolve_path_creates_nested_scopes():
    root = Scope()
    transform = root.resolve_path("expression.transform")

    assert isinstance(root["expression"], Scope)
    assert root["expression"]["transform"] is transform
    assert transform.path == "expression.transform"
    assert transform.qualify("map") == "expression.transform.map"
    assert root.resolve_path(None) is root


def test_resolve_path_without_create():
    root = Scope()
    with pytest.raises(KeyError):
        root.resolve_path("missing.scope", create=False)


def test_resolve_path_through_value_fails():
    root = Scope()
    root.set("pi", 3.14)
    with pytest.raises(UnsupportedTypeError, match=r"\[105\]"):
        root.resolve_path("pi.digits")


def test_lazy_slots_are_forced_on_read_only():
    root = Scope()
    calls = []
    root.bind_lazy("pi", OnceCell("pi", lambda: calls.append(1) or 3.14))

    assert "pi" in root
    assert not root.is_resolved("pi")
    assert isinstance(root.raw("pi"), OnceCell)
    assert calls == []

    assert root.pi == 3.14
    assert root["pi"] == 3.14
    assert root.is_resolved("pi")
    assert calls == [1]


def test_lookup_and_missing_entries():
    root = Scope()
    root.resolve_path("units").set("meter", "m")

    assert root.lookup("units.meter") == "m"
    assert root.lookup("units.inch", None) is None
    assert root.raw("nothing") is MISSING
    with pytest.raises(KeyError):
        root.lookup("units.inch")
    with pytest.raises(AttributeError):
        root.nothing


def test_iteration_preserves_order():
    root = Scope()
    for key in ["b", "a", "c"]:
        root.set(key, key.upper())
    assert list(root) == ["b", "a", "c"]
    assert dict(root.items()) == {"b": "B", "a": "A", "c": "C"}
    root.delete("a")
    assert len(root) == 2
