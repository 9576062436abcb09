"""Tests for counting, search, mapping, projection and filtering."""

import operator
from types import SimpleNamespace

import pytest

import seqchain as sc


def _is_even(x: int) -> bool:
    return x % 2 == 0


def test_is_empty() -> None:
    """is_empty looks at one element at most."""
    assert sc.iterable([]).is_empty()
    assert not sc.iterable([1, 2, 3]).is_empty()
    assert not sc.iterable([True]).is_empty()
    assert not sc.Iterable.repeat(0).is_empty()


def test_count() -> None:
    """count consumes everything."""
    assert sc.Iterable.range(1, 7).count() == 6
    assert sc.Iterable.range(1, 1).count() == 0
    assert sc.iterable("abcdef").count() == 6
    assert sc.iterable("").count() == 0
    assert sc.iterable({"a": 1}).count() == 1


class TestSearch:
    """index_of, indices_of, index_where, indices_where."""

    def test_index_of(self) -> None:
        """First match from a start offset, or -1."""
        assert sc.iterable([]).index_of(0) == -1
        assert sc.iterable([0, 1, 2]).index_of(2) == 2
        assert sc.iterable([0, 1, 2]).index_of(3) == -1
        assert sc.iterable([0, 1, 2]).index_of(0, 1) == -1
        assert sc.iterable([0, 1, 2]).index_of(1, 1) == 1
        assert sc.iterable([0, 1, 2, 1]).index_of(1, 2) == 3

    def test_start_is_clamped(self) -> None:
        """A negative start counts from 0, a start past the end finds nothing."""
        assert sc.iterable([0, 1, 2]).index_of(0, -5) == 0
        assert sc.iterable([0, 1, 2]).index_of(2, 10) == -1

    def test_indices_of(self, expect_sequence) -> None:
        """All matches, lazily."""
        expect_sequence(sc.iterable("").indices_of("a"))
        expect_sequence(sc.iterable("aaa").indices_of("a"), 0, 1, 2)
        expect_sequence(sc.iterable("aaa").indices_of("a", 1), 1, 2)
        expect_sequence(sc.iterable("aaa").indices_of("a", 3))
        expect_sequence(sc.iterable("ababa").indices_of("b"), 1, 3)
        expect_sequence(sc.iterable("ababa").indices_of("b", 3), 3)

    def test_index_where(self) -> None:
        """Predicate based search."""
        assert sc.iterable([]).index_where(lambda _: True) == -1
        assert sc.iterable([0, 1, 2]).index_where(lambda _: True, 2) == 2
        assert sc.iterable([0, 1, 2]).index_where(lambda _: False) == -1
        assert sc.iterable([0, 1, 2]).index_where(_is_even, 1) == 2
        assert sc.iterable([0, 1, 2]).index_where(_is_even, 3) == -1

    def test_indices_where(self, expect_sequence) -> None:
        """Predicate based search of every match."""
        expect_sequence(sc.iterable([0, 1, 2]).indices_where(lambda _: True), 0, 1, 2)
        expect_sequence(sc.iterable([0, 1, 2]).indices_where(_is_even), 0, 2)
        expect_sequence(sc.iterable([0, 1, 2]).indices_where(_is_even, 1), 2)

    def test_indexed_predicate(self) -> None:
        """Two-argument predicates receive the position."""
        assert sc.iterable("xxyx").index_where(lambda c, i: c == "x" and i > 1) == 3

    def test_lazy_on_unbounded(self) -> None:
        """Search stops at the first match."""
        assert sc.Iterable.iterate(lambda x: x + 1, 0).index_of(5) == 5


class TestMap:
    """map and map_apply."""

    def test_map(self, expect_sequence) -> None:
        """Each element goes through the function."""
        expect_sequence(sc.iterable("").map(str.upper))
        expect_sequence(sc.iterable("a1b").map(str.upper), "A", "1", "B")

    def test_map_with_predicate(self, expect_sequence) -> None:
        """The predicate selects source elements before mapping."""
        expect_sequence(sc.iterable("a1b").map(str.upper, str.isalpha), "A", "B")
        expect_sequence(sc.iterable([1, 2, 3, 4]).map(lambda x: x * 10, _is_even), 20, 40)

    def test_map_with_index(self, expect_sequence) -> None:
        """Two-argument functions receive the source position."""
        expect_sequence(sc.iterable("xyz").map(lambda c, n: c + str(n)), "x0", "y1", "z2")
        expect_sequence(
            sc.iterable("a1b").map(lambda c, n: c + str(n), str.isalpha), "a0", "b2"
        )

    def test_map_apply(self, expect_sequence) -> None:
        """Tuple elements are unpacked."""
        pairs = sc.iterable([[1, 2], [4, 4], [6, 5]])
        expect_sequence(pairs.map_apply(operator.mul), 2, 16, 30)
        expect_sequence(pairs.map_apply(operator.mul, lambda x, _: x < 5), 2, 16)
        expect_sequence(pairs.map_apply(operator.mul, lambda x, *_: x < 5), 2, 16)

    def test_map_is_lazy(self) -> None:
        """Nothing is computed before pulling."""
        calls: list[int] = []
        seq = sc.Iterable.range(5).map(calls.append)
        assert calls == []
        seq.take(2).to_list()
        assert calls == [0, 1]


class TestSelect:
    """Projection templates."""

    def test_index(self, expect_sequence) -> None:
        """Integer templates index the element."""
        rows = sc.iterable([[0, 1, 2], [3, 4, 5], [6, 7, 8]])
        expect_sequence(sc.iterable("").select(0))
        expect_sequence(rows.select(2), 2, 5, 8)
        expect_sequence(rows.select([0, 2]), (0, 2), (3, 5), (6, 8))

    def test_nested_templates(self, expect_sequence) -> None:
        """Dict templates resolve each value recursively."""
        rows = sc.iterable([[0, 1, 2], [3, 4, 5]])
        expect_sequence(
            rows.select({"a": 1, "b": [0, 2]}),
            {"a": 1, "b": (0, 2)},
            {"a": 4, "b": (3, 5)},
        )
        expect_sequence(
            rows.select({"a": 1, "b": lambda r: r[0] + r[2]}),
            {"a": 1, "b": 2},
            {"a": 4, "b": 8},
        )

    def test_names(self, expect_sequence) -> None:
        """String templates are keys for mappings and attributes otherwise."""
        points = sc.iterable([{"x": 0, "y": 0}, {"x": 1, "y": 0}, {"x": 0, "y": 1}])
        expect_sequence(points.select("x"), 0, 1, 0)
        expect_sequence(points.select(["y", "x"]), (0, 0), (0, 1), (1, 0))
        objects = sc.iterable([SimpleNamespace(name="a"), SimpleNamespace(name="b")])
        expect_sequence(objects.select("name"), "a", "b")

    def test_callable(self, expect_sequence) -> None:
        """Callable templates are applied."""
        points = sc.iterable([{"x": 0, "y": 0}, {"x": 1, "y": 0}, {"x": 0, "y": 1}])
        expect_sequence(points.select(lambda p: p["x"] * 10 + p["y"]), 0, 10, 1)

    @pytest.mark.parametrize("template", [None, True, 1.5, {"a": None}, [0, 2.0]])
    def test_malformed(self, template: object) -> None:
        """Malformed templates fail when select is called."""
        with pytest.raises(sc.ArgumentError):
            sc.iterable([[1]]).select(template)


class TestFilter:
    """filter and filter_apply."""

    def test_default_is_truthiness(self, expect_sequence) -> None:
        """Without a predicate, falsy elements are dropped."""
        expect_sequence(sc.iterable([0, 1, "", "a", None, []]).filter(), 1, "a")
        expect_sequence(sc.iterable([False]).filter())

    def test_filter(self, expect_sequence) -> None:
        """The predicate selects, the function transforms."""
        expect_sequence(sc.iterable("").filter(str.isalpha))
        expect_sequence(sc.iterable("a1b").filter(str.isalpha), "a", "b")
        expect_sequence(sc.iterable("a1b").filter(str.isalpha, str.upper), "A", "B")
        expect_sequence(
            sc.iterable("a1b").filter(str.isalpha, lambda c, n: c + str(n)), "a0", "b2"
        )

    def test_filter_apply(self, expect_sequence) -> None:
        """Tuple elements are unpacked for both callables."""
        pairs = sc.iterable([[1, 2], [4, 4], [7, 8], [6, 5]])
        expect_sequence(pairs.filter_apply(operator.lt).map_apply(operator.mul), 2, 56)
        expect_sequence(pairs.filter_apply(operator.lt, operator.mul), 2, 56)
