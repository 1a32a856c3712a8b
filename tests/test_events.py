"""Tests for the listener lists."""

from mathns import Emitter


def test_emit_calls_listeners_in_order():
    emitter = Emitter()
    seen = []
    emitter.on("import", lambda name: seen.append(("first", name)))
    emitter.on("import", lambda name: seen.append(("second", name)))

    emitter.emit("import", "pi")

    assert seen == [("first", "pi"), ("second", "pi")]


def test_once_and_off():
    emitter = Emitter()
    seen = []

    def listener(name):
        seen.append(name)

    emitter.once("import", listener)
    emitter.emit("import", "a")
    emitter.emit("import", "b")
    assert seen == ["a"]

    emitter.on("import", listener)
    emitter.off("import", listener)
    emitter.emit("import", "c")
    assert seen == ["a"]
    assert emitter.listeners("import") == []


def test_emit_without_listeners_is_noop():
    Emitter().emit("import", "nobody")
