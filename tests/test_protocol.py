"""Tests for the iteration protocol: restartability, exhaustion and the Option type."""

import pytest

import seqchain as sc


def _every_combinator(seq: sc.Iterable[int]) -> list[sc.Iterable[object]]:
    return [
        seq.map(lambda x: x + 1),
        seq.filter(lambda x: x % 2 == 0),
        seq.take(2),
        seq.drop(1),
        seq.take_while(lambda x: x < 2),
        seq.drop_while(lambda x: x < 2),
        seq.zip(seq),
        seq.product("ab"),
        seq.chain(seq),
        seq.nub(),
        seq.group_by(),
        seq.scanl(lambda a, b: a + b),
        seq.reverse(),
        seq.sorted(),
        seq.permutations(2),
        seq.combinations(2),
        seq.slices(2),
        seq.indices_where(lambda x: x > 0),
        seq.cycle(2),
        seq.flatten(),
    ]


def test_restartable() -> None:
    """Two iterations over the same Iterable give the same elements."""
    for derived in _every_combinator(sc.Iterable([0, 1, 2, 3])):
        assert derived.to_list() == derived.to_list()


def test_independent_pulls() -> None:
    """Pull-functions from the same Iterable share no state."""
    seq = sc.Iterable.range(3).map(lambda x: x * 10)
    first, second = seq.pull(), seq.pull()
    assert first().unwrap() == 0
    assert first().unwrap() == 10
    assert second().unwrap() == 0


@pytest.mark.parametrize("source", [[], [0, 1, 2, 3]])
def test_exhaustion_is_idempotent(source: list[int]) -> None:
    """Once exhausted, a pull-function stays exhausted."""
    for derived in _every_combinator(sc.Iterable(source)):
        nxt = derived.pull()
        while nxt().is_some():
            pass
        assert all(nxt() is sc.EXHAUSTED for _ in range(5))


def test_callbacks_not_called_after_exhaustion() -> None:
    """An exhausted pull-function doesn't call back into the caller's functions."""
    calls: list[int] = []

    def track(x: int) -> int:
        calls.append(x)
        return x

    nxt = sc.Iterable([1]).map(track).zip("").pull()
    assert nxt() is sc.EXHAUSTED
    assert nxt() is sc.EXHAUSTED
    assert calls == [1]


def test_none_is_an_element() -> None:
    """None elements are data, never confused with exhaustion."""
    seq = sc.Iterable([None, None])
    assert seq.count() == 2
    assert seq.pull()() == sc.Some(None)
    assert seq.map(lambda x: x).to_list() == [None, None]


def test_python_iteration() -> None:
    """An Iterable plugs into regular Python iteration."""
    seq = sc.iterable("abc")
    assert list(seq) == ["a", "b", "c"]
    assert [c for c in seq] == ["a", "b", "c"]  # noqa: C416
    assert "".join(seq) == "abc"


def test_repr_is_lazy() -> None:
    """repr() previews an unbounded sequence without consuming it all."""
    assert repr(sc.Iterable.repeat(1)) == "Iterable(1, 1, 1, 1, 1, 1, 1, 1, 1, 1, ...)"
    assert repr(sc.Iterable([])) == "Iterable()"


def test_for_each() -> None:
    """for_each returns the result of the last call."""
    seen: list[tuple[int, str]] = []
    result = sc.iterable("ab").for_each(lambda x, i: seen.append((i, x)) or x)
    assert result == "b"
    assert seen == [(0, "a"), (1, "b")]
    assert sc.iterable([]).for_each(print) is None


class TestOption:
    """The tagged result of a pull."""

    def test_exhausted_is_singleton(self) -> None:
        """Exhaustion is one shared value."""
        assert sc.Iterable([]).pull()() is sc.EXHAUSTED
        assert sc.EXHAUSTED.is_exhausted()
        assert not sc.EXHAUSTED.is_some()

    def test_unwrap(self) -> None:
        """Unwrapping exhaustion is an empty sequence error."""
        assert sc.Some(3).unwrap() == 3
        assert sc.EXHAUSTED.unwrap_or(4) == 4
        assert sc.EXHAUSTED.unwrap_or_else(lambda: 5) == 5
        with pytest.raises(sc.EmptySequenceError):
            sc.EXHAUSTED.unwrap()
        with pytest.raises(sc.EmptySequenceError, match="boom"):
            sc.EXHAUSTED.expect("boom")

    def test_pattern_matching(self) -> None:
        """Options can be matched structurally."""
        match sc.Iterable([42]).pull()():
            case sc.Some(value):
                assert value == 42
            case _:
                pytest.fail("expected an element")

    def test_map(self) -> None:
        """map only touches elements."""
        assert sc.Some(2).map(lambda x: x * 3) == sc.Some(6)
        assert sc.EXHAUSTED.map(lambda x: x * 3) is sc.EXHAUSTED


class TestConfig:
    """Display configuration."""

    def test_set_config(self) -> None:
        """repr honours repr_items."""
        previous = sc.get_config()
        try:
            sc.set_config(repr_items=2)
            assert repr(sc.Iterable.range(5)) == "Iterable(0, 1, ...)"
            sc.set_config(repr_items=0)
            assert repr(sc.Iterable.range(5)) == "Iterable(...)"
        finally:
            sc.set_config(repr_items=previous.repr_items)

    def test_invalid_config(self) -> None:
        """Unknown fields and negative sizes are rejected."""
        with pytest.raises(sc.ArgumentError):
            sc.set_config(colour="red")
        with pytest.raises(sc.ArgumentError):
            sc.set_config(repr_items=-1)


def test_slots() -> None:
    """Iterables and options don't carry a __dict__."""
    for obj in (sc.Iterable([1]), sc.Iterable([1]).map(str), sc.Some(1), sc.EXHAUSTED):
        assert not hasattr(obj, "__dict__")
