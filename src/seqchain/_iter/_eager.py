from __future__ import annotations

import functools
import logging
import operator
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any

import cytoolz as cz
import more_itertools as mit

from .._core import MISSING, ArgumentError, Missing
from ._common import BaseIterable

if TYPE_CHECKING:
    from .._types import SupportsRichComparison
    from ._main import Iterable

logger = logging.getLogger(__name__)


def _buffer[T](data: Iterator[T], operation: str) -> list[T]:
    buffer = list(data)
    logger.debug("%s buffered %d elements", operation, len(buffer))
    return buffer


def _extremes[T](
    data: Iterator[T],
    evaluate: Callable[[T], Any],
    better: Callable[[Any, Any], bool],
) -> list[T]:
    best: list[T] = []
    best_score: Any = MISSING
    for item in data:
        score = evaluate(item)
        if isinstance(best_score, Missing) or better(score, best_score):
            best, best_score = [item], score
        elif score == best_score:
            best.append(item)
    return best


def _permutations[T](data: Iterator[T], k: int | None) -> Iterator[tuple[T, ...]]:
    pool = _buffer(data, "permutations")
    size = len(pool) if k is None else k
    if size <= 0 or size > len(pool):
        return
    used = [False] * len(pool)
    chosen: list[T] = []

    def descend() -> Iterator[tuple[T, ...]]:
        if len(chosen) == size:
            yield tuple(chosen)
            return
        for idx, item in enumerate(pool):
            if used[idx]:
                continue
            used[idx] = True
            chosen.append(item)
            yield from descend()
            chosen.pop()
            used[idx] = False

    yield from descend()


def _combinations[T](data: Iterator[T], k: int | None) -> Iterator[tuple[T, ...]]:
    pool = _buffer(data, "combinations")
    size = len(pool) if k is None else k
    if size <= 0 or size > len(pool):
        return
    chosen: list[T] = []

    def descend(start: int) -> Iterator[tuple[T, ...]]:
        missing = size - len(chosen)
        if missing == 0:
            yield tuple(chosen)
            return
        for idx in range(start, len(pool) - missing + 1):
            chosen.append(pool[idx])
            yield from descend(idx + 1)
            chosen.pop()

    yield from descend(0)


class BaseEager[T](BaseIterable[T]):
    __slots__ = ()

    def reverse(self) -> Iterable[T]:
        """The elements in reverse order.

        Each pull-function buffers the whole sequence on its first call (O(n) memory), then replays it backward.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable("abcdef").reverse().join("")
        'fedcba'

        ```
        """
        return self._lazy_iter(lambda data: reversed(_buffer(data, "reverse")))

    def sorted(
        self,
        cmp: Callable[[T, T], int] | None = None,
        *,
        key: Callable[[T], SupportsRichComparison[Any]] | None = None,
    ) -> Iterable[T]:
        """The elements sorted, stably, by natural order, a **cmp** comparator, or a **key** function.

        Each pull-function buffers the whole sequence on its first call (O(n) memory).

        Args:
            cmp (Callable[[T, T], int] | None): Old-style comparator, negative/zero/positive.
            key (Callable[[T], SupportsRichComparison[Any]] | None): Sort key, exclusive with **cmp**.

        Raises:
            ArgumentError: If both **cmp** and **key** are given.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable([2, 0, 1]).sorted().to_list()
        [0, 1, 2]
        >>> sc.iterable([2, 0, 1]).sorted(lambda a, b: b - a).to_list()
        [2, 1, 0]

        ```
        """
        if cmp is not None and key is not None:
            msg = "sorted() takes either cmp or key, not both"
            raise ArgumentError(msg)
        sort_key = functools.cmp_to_key(cmp) if cmp is not None else key
        return self._lazy_iter(
            lambda data: iter(sorted(_buffer(data, "sorted"), key=sort_key))
        )

    def greater(self, evaluate: Callable[[T], Any] | None = None) -> list[T]:
        """Every element whose evaluation equals the greatest one, in original order.

        Args:
            evaluate (Callable[[T], Any] | None): Evaluation function. Defaults to the element itself.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable([0, 1, 2, 3, 4, 5, 6]).greater(lambda x: x % 3)
        [2, 5]

        ```
        """
        return _extremes(iter(self), evaluate or cz.functoolz.identity, operator.gt)

    def lesser(self, evaluate: Callable[[T], Any] | None = None) -> list[T]:
        """Every element whose evaluation equals the smallest one, in original order.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable([0, 1, 2, 3, 4, 5, 6]).lesser(lambda x: x % 3)
        [0, 3, 6]

        ```
        """
        return _extremes(iter(self), evaluate or cz.functoolz.identity, operator.lt)

    def sample(self, n: int) -> Iterable[T]:
        """Deterministically pick **n** evenly spaced elements, keeping their order.

        If the sequence has **n** elements or fewer, it is returned as is.
        Otherwise the picked positions interpolate linearly from the first to the last element.

        The sequence is consumed immediately.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Iterable.range(10).sample(4).to_list()
        [0, 3, 6, 9]
        >>> sc.iterable("abc").sample(5).join("")
        'abc'

        ```
        """
        buffer = _buffer(iter(self), "sample")
        size = len(buffer)
        if size <= n:
            return self  # type: ignore[return-value]
        if n <= 0:
            return self.__class__(())
        if n == 1:
            return self.__class__(buffer[:1])
        stride = (size - 1) / (n - 1)
        return self.__class__(tuple(buffer[round(i * stride)] for i in range(n)))

    def group_all[K](
        self,
        key: Callable[[T], K] | None = None,
        accumulator: Callable[[Any, T], Any] | None = None,
    ) -> dict[K, Any]:
        """Group every element of the sequence by key, wherever it appears.

        By default each group collects its elements in a `list`.

        A custom **accumulator** receives the group's current value (`None` the first time) and the element,
        and returns the new value.

        Args:
            key (Callable[[T], K] | None): Key function. Defaults to the element itself.
            accumulator (Callable[[Any, T], Any] | None): Folds each group.

        Returns:
            dict[K, Any]: Groups by key, in order of first appearance.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable("aba").group_all()
        {'a': ['a', 'a'], 'b': ['b']}
        >>> sc.iterable("abABb").group_all(str.upper, lambda n, _: (n or 0) + 1)
        {'A': 2, 'B': 3}

        ```
        """
        get_key = key or cz.functoolz.identity
        if accumulator is None:
            return cz.itertoolz.groupby(get_key, self)
        return cz.itertoolz.reduceby(get_key, accumulator, self, lambda: None)

    def permutations(self, k: int | None = None) -> Iterable[tuple[T, ...]]:
        """All ordered arrangements of **k** distinct positions of the sequence (all of them by default).

        `k <= 0`, or a **k** greater than the length, gives an empty sequence.
        Arrangements are generated one at a time, by backtracking over the buffered source.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable("abc").permutations(2).map("".join).to_list()
        ['ab', 'ac', 'ba', 'bc', 'ca', 'cb']
        >>> sc.iterable("abc").permutations(4).to_list()
        []

        ```
        """
        return self._lazy_iter(_permutations, k)

    def combinations(self, k: int | None = None) -> Iterable[tuple[T, ...]]:
        """All subsequences of length **k** (the full length by default), in lexicographic order of positions.

        `k <= 0`, or a **k** greater than the length, gives an empty sequence.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable("abcd").combinations(3).map("".join).to_list()
        ['abc', 'abd', 'acd', 'bcd']

        ```
        """
        return self._lazy_iter(_combinations, k)

    def slices(self, n: int) -> Iterable[list[T]]:
        """Cut the sequence in consecutive lists of **n** elements, the last one possibly shorter.

        Raises:
            ArgumentError: If **n** is lower than 1.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable("abcdefgh").slices(3).map("".join).to_list()
        ['abc', 'def', 'gh']

        ```
        """
        if n < 1:
            msg = f"slices() needs a size >= 1, got {n}"
            raise ArgumentError(msg)
        return self._lazy_iter(mit.chunked, n)
