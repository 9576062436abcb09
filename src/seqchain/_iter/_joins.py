from __future__ import annotations

import itertools
import operator
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any

import cytoolz as cz
import more_itertools as mit

from .._results import EXHAUSTED, Option, Some
from .._source import pull_iter
from .._types import Group, PullSource
from ._common import BaseIterable

if TYPE_CHECKING:
    from .._types import Pull
    from ._main import Iterable

type Equality[T] = Callable[[T, T], bool]

_ATOMS = (str, bytes, bytearray)


def _unique_by[T](data: Iterator[T], eq: Equality[T]) -> Iterator[T]:
    seen: list[T] = []
    for item in data:
        if not any(eq(kept, item) for kept in seen):
            seen.append(item)
            yield item


def _cartesian(seqs: tuple[BaseIterable[Any], ...]) -> Iterator[tuple[Any, ...]]:
    if not seqs:
        yield ()
        return
    first, *rest = seqs
    for item in first:
        for others in _cartesian(tuple(rest)):
            yield (item, *others)


class BaseJoins[T](BaseIterable[T]):
    __slots__ = ()

    def zip(self, *others: object) -> Iterable[tuple[Any, ...]]:
        """Lazily tuple up the elements of `self` and **others**, stopping with the shortest.

        **others** can be any source value (sequences, text, mappings, other `Iterable`s...).

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable("abc").zip("xyz").to_list()
        [('a', 'x'), ('b', 'y'), ('c', 'z')]
        >>> sc.iterable("abc").zip("x").to_list()
        [('a', 'x')]

        ```
        """
        seqs = (self, *(self._coerce(other) for other in others))

        def recipe() -> Pull[tuple[Any, ...]]:
            pulls = tuple(seq.pull() for seq in seqs)

            def _next() -> Option[tuple[Any, ...]]:
                values: list[Any] = []
                for nxt in pulls:
                    match nxt():
                        case Some(value):
                            values.append(value)
                        case _:
                            return EXHAUSTED
                return Some(tuple(values))

            return _next

        return self._from_recipe(recipe)

    def zip_with[R](
        self, func: Callable[..., R] | None, *others: object
    ) -> Iterable[R] | Iterable[tuple[Any, ...]]:
        """Like `zip`, then call **func** with each tuple unpacked. `func=None` behaves as `zip`.

        Example:
        ```python
        >>> import operator
        >>> import seqchain as sc
        >>> sc.iterable("abc").zip_with(operator.add, "xyz").to_list()
        ['ax', 'by', 'cz']
        >>> sc.iterable("ab").zip_with(None, "xyz").to_list()
        [('a', 'x'), ('b', 'y')]

        ```
        """
        zipped = self.zip(*others)
        if func is None:
            return zipped
        return zipped.map_apply(func)

    def product(self, *others: object) -> Iterable[tuple[Any, ...]]:
        """Lazy cartesian product of `self` with **others**.

        The rightmost operand varies fastest, and is iterated again for each element on its left.
        The product is empty if any operand is, even when the left operand is unbounded.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable("01").product("ab").to_list()
        [('0', 'a'), ('0', 'b'), ('1', 'a'), ('1', 'b')]
        >>> sc.iterable("01").product("").to_list()
        []

        ```
        """
        seqs = (self, *(self._coerce(other) for other in others))

        def recipe() -> Pull[tuple[Any, ...]]:
            if any(seq.is_empty() for seq in seqs[1:]):
                return pull_iter(iter(()))
            return pull_iter(_cartesian(seqs))

        return self._from_recipe(recipe)

    def chain(self, *others: object) -> Iterable[Any]:
        """Lazily concatenate `self` and **others**, in argument order.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable("ab").chain("xy", "pq").join("")
        'abxypq'

        ```
        """
        seqs = (self, *(self._coerce(other) for other in others))

        def recipe() -> Pull[Any]:
            pending = iter(seqs)
            current = next(pending).pull()

            def _next() -> Option[Any]:
                nonlocal current
                while (item := current()).is_exhausted():
                    following = next(pending, None)
                    if following is None:
                        return EXHAUSTED
                    current = following.pull()
                return item

            return _next

        return self._from_recipe(recipe)

    def flatten(self) -> Iterable[Any]:
        """Expand exactly one level of nesting.

        Elements that are `Iterable`s, or Python iterables other than text and bytes, are replaced by their elements;
        mappings give their `(key, value)` pairs. Other elements pass through unchanged.

        One-shot iterators found among the elements are cached the first time they are expanded, so that every
        iteration of the flattened sequence sees their items.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable([[1, 2], [], 3, [[4]]]).flatten().to_list()
        [1, 2, 3, [4]]
        >>> sc.iterable(["ab", ["cd"]]).flatten().to_list()
        ['ab', 'cd']

        ```
        """

        replays: dict[int, tuple[Any, BaseIterable[Any]]] = {}

        def _expand(item: Any) -> Any:  # noqa: ANN401
            if isinstance(item, PullSource):
                return item
            if not cz.itertoolz.isiterable(item) or isinstance(item, _ATOMS):
                return (item,)
            if iter(item) is not item:
                return self._coerce(item)
            # keyed by identity, the entry keeps the iterator alive so its id can't be reused
            if id(item) not in replays:
                replays[id(item)] = (item, self._coerce(item))
            return replays[id(item)][1]

        return self._lazy_iter(
            lambda data: itertools.chain.from_iterable(map(_expand, data))
        )

    def nub(self, eq: Equality[T] | None = None) -> Iterable[T]:
        """Drop duplicates, keeping the first occurrence of each element, in order.

        Args:
            eq (Equality[T] | None): Equality between two elements. Defaults to `==`.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable("abbaabba").nub().to_list()
        ['a', 'b']
        >>> sc.iterable([0, 1, "0", "1"]).nub(lambda x, y: int(x) == int(y)).to_list()
        [0, 1]

        ```
        """
        if eq is None:
            return self._lazy_iter(mit.unique_everseen)
        return self._lazy_iter(_unique_by, eq)

    def union_by(self, eq: Equality[Any], other: object) -> Iterable[Any]:
        """Distinct elements of `self`, then those of **other** not already present, under **eq**.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable([0, 1]).union_by(lambda x, y: int(x) == int(y), ["0", "1", "2"]).to_list()
        [0, 1, '2']

        ```
        """
        return self.chain(other).nub(eq)

    def union(self, other: object) -> Iterable[Any]:
        """`union_by` with `==`.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable("ab").union("bc").join("")
        'abc'

        ```
        """
        return self.union_by(operator.eq, other)

    def intersection_by(self, eq: Equality[Any], other: object) -> Iterable[T]:
        """Distinct elements of `self` that have an equal in **other**, under **eq**, in the order of `self`.

        **other** is buffered once per pull-function.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable([0, 1, 2]).intersection_by(lambda x, y: x == int(y), ["1", "2"]).to_list()
        [1, 2]

        ```
        """
        right = self._coerce(other)

        def _common(data: Iterator[T]) -> Iterator[T]:
            buffered = tuple(right)
            kept = (item for item in data if any(eq(item, x) for x in buffered))
            return _unique_by(kept, eq)

        return self._lazy_iter(_common)

    def intersection(self, other: object) -> Iterable[T]:
        """`intersection_by` with `==`.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable("abca").intersection("ax").to_list()
        ['a']

        ```
        """
        return self.intersection_by(operator.eq, other)

    def difference_by(self, eq: Equality[Any], other: object) -> Iterable[T]:
        """Distinct elements of `self` that have no equal in **other**, under **eq**, in the order of `self`.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable([0, 1, 2]).difference_by(lambda x, y: x == int(y), ["1"]).to_list()
        [0, 2]

        ```
        """
        right = self._coerce(other)

        def _missing(data: Iterator[T]) -> Iterator[T]:
            buffered = tuple(right)
            kept = (item for item in data if not any(eq(item, x) for x in buffered))
            return _unique_by(kept, eq)

        return self._lazy_iter(_missing)

    def difference(self, other: object) -> Iterable[T]:
        """`difference_by` with `==`.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable("ab").difference("a").to_list()
        ['b']

        ```
        """
        return self.difference_by(operator.eq, other)

    def group_by[K](self, key: Callable[[T], K] | None = None) -> Iterable[Group[K, T]]:
        """Lazily group runs of *adjacent* elements sharing the same key.

        The same key appearing again later starts a new group. See `group_all` for global grouping.

        Args:
            key (Callable[[T], K] | None): Key function. Defaults to the element itself.

        Returns:
            Iterable[Group[K, T]]: `(key, values)` named tuples.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable("aba").group_by().to_list()
        [Group(key='a', values=['a']), Group(key='b', values=['b']), Group(key='a', values=['a'])]
        >>> sc.iterable("aAbB").group_by(str.upper).to_list()
        [Group(key='A', values=['a', 'A']), Group(key='B', values=['b', 'B'])]

        ```
        """

        def _runs(data: Iterator[T]) -> Iterator[Group[K, T]]:
            for group_key, values in itertools.groupby(data, key):
                yield Group(group_key, list(values))

        return self._lazy_iter(_runs)
