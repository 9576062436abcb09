"""Tests for source classification and construction."""

import pytest

import seqchain as sc


class TestConstruction:
    """Each source kind enumerates its elements in order."""

    def test_sequences(self, expect_sequence) -> None:
        """Lists and tuples yield their items."""
        expect_sequence(sc.Iterable([0, 1, 2]), 0, 1, 2)
        expect_sequence(sc.Iterable((True,)), True)
        expect_sequence(sc.Iterable([]))

    def test_text(self, expect_sequence) -> None:
        """Text yields one character at a time."""
        expect_sequence(sc.Iterable("abc"), "a", "b", "c")
        expect_sequence(sc.Iterable("0"), "0")
        expect_sequence(sc.Iterable(""))

    def test_mappings(self, expect_sequence) -> None:
        """Mappings yield key/value pairs."""
        expect_sequence(sc.Iterable({"x": 1, "y": 2}), ("x", 1), ("y", 2))
        expect_sequence(sc.Iterable({"z": 0}), ("z", 0))
        expect_sequence(sc.Iterable({}))

    def test_singletons(self, expect_sequence) -> None:
        """Any other value is yielded once."""
        expect_sequence(sc.Iterable(1), 1)
        expect_sequence(sc.Iterable(0), 0)
        expect_sequence(sc.Iterable(False), False)  # noqa: FBT003

    def test_nested(self, expect_sequence) -> None:
        """An Iterable wrapping another delegates to it."""
        inner = sc.Iterable("ab")
        expect_sequence(sc.Iterable(inner), "a", "b")
        expect_sequence(sc.Iterable(sc.Iterable(inner)), "a", "b")

    def test_streams(self, expect_sequence) -> None:
        """Other Python iterables are iterated, and one-shot iterators replayed."""
        expect_sequence(sc.Iterable(frozenset({7})), 7)
        seq = sc.Iterable(x * 2 for x in range(3))
        expect_sequence(seq, 0, 2, 4)
        expect_sequence(seq, 0, 2, 4)

    def test_interleaved_replay(self) -> None:
        """Two pull-functions over a one-shot iterator advance independently."""
        seq = sc.Iterable(iter("abc"))
        first, second = seq.pull(), seq.pull()
        assert first().unwrap() == "a"
        assert first().unwrap() == "b"
        assert second().unwrap() == "a"
        assert first().unwrap() == "c"
        assert second().unwrap() == "b"

    def test_missing_source(self) -> None:
        """No source, or None, is a construction error."""
        with pytest.raises(sc.ConstructionError):
            sc.Iterable()
        with pytest.raises(sc.ConstructionError):
            sc.Iterable(None)
        with pytest.raises(sc.ConstructionError):
            sc.iterable(None)
        with pytest.raises(sc.ConstructionError):
            sc.iterable()

    def test_construction_error_is_type_error(self) -> None:
        """The taxonomy stays catchable with builtin exception types."""
        with pytest.raises(TypeError):
            sc.Iterable(None)


def test_classify() -> None:
    """Sources are classified into the closed set of kinds."""
    from seqchain._source import classify

    assert classify([1]) is sc.SourceKind.INDEXED
    assert classify(b"ab") is sc.SourceKind.INDEXED
    assert classify(range(3)) is sc.SourceKind.INDEXED
    assert classify({"a": 1}) is sc.SourceKind.KEYED
    assert classify(sc.Iterable("a")) is sc.SourceKind.NESTED
    assert classify({1, 2}) is sc.SourceKind.STREAM
    assert classify(iter([1])) is sc.SourceKind.STREAM
    assert classify(3.5) is sc.SourceKind.SINGLETON
    assert classify(object) is sc.SourceKind.SINGLETON


class _Rope:
    def pull(self) -> str:
        return "tug"


def test_foreign_pull_is_a_value(expect_sequence) -> None:
    """Objects that merely have a pull method are singletons, not nested sequences."""
    from seqchain._source import classify

    rope = _Rope()
    assert classify(rope) is sc.SourceKind.SINGLETON
    expect_sequence(sc.Iterable(rope), rope)
    expect_sequence(sc.iterable([rope]).flatten(), rope)


def test_source_is_not_mutated() -> None:
    """Iterating never changes the wrapped value."""
    data = [3, 1, 2]
    seq = sc.Iterable(data)
    assert seq.sorted().to_list() == [1, 2, 3]
    assert seq.reverse().to_list() == [2, 1, 3]
    assert data == [3, 1, 2]
