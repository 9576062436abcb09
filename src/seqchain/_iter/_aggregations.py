from __future__ import annotations

import functools
import logging
import math
import operator
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any

import cytoolz as cz

from .._core import MISSING, ArgumentError, EmptySequenceError, Missing
from ._common import BaseIterable

if TYPE_CHECKING:
    from ._main import Iterable

logger = logging.getLogger(__name__)


def _scan_right[T, A](
    data: Iterator[T], func: Callable[[T, A], A], seed: A | Missing
) -> Iterator[A]:
    buffer = list(data)
    logger.debug("scanr buffered %d elements", len(buffer))
    if isinstance(seed, Missing):
        if not buffer:
            return
        seed = buffer.pop()
    acc = seed
    yield acc
    for item in reversed(buffer):
        acc = func(item, acc)
        yield acc


class BaseAgg[T](BaseIterable[T]):
    __slots__ = ()

    def _reduce_or[D](self, func: Callable[[T, T], T], default: D) -> T | D:
        data = iter(self)
        first = next(data, MISSING)
        if isinstance(first, Missing):
            return default
        return functools.reduce(func, data, first)

    def foldl[A](self, func: Callable[[A, T], A], seed: A | Missing = MISSING) -> A:
        """Left fold: `func(...func(func(seed, x0), x1)..., xn)`.

        Without **seed**, the first element is the seed.

        Raises:
            EmptySequenceError: If the sequence is empty and no seed was given.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Iterable.range(7).foldl(max)
        6
        >>> sc.Iterable.range(7).foldl(max, 8)
        8
        >>> sc.Iterable.range().foldl(max, 8)
        8

        ```
        """
        data = iter(self)
        if isinstance(seed, Missing):
            first = next(data, MISSING)
            if isinstance(first, Missing):
                raise EmptySequenceError("foldl of an empty sequence with no seed")
            seed = first
        return functools.reduce(func, data, seed)

    def scanl[A](
        self, func: Callable[[A, T], A], seed: A | Missing = MISSING
    ) -> Iterable[A]:
        """Lazily yield every intermediate result of `foldl`.

        With a **seed**, the seed comes first. Without one, the first element comes first, and an empty sequence scans to nothing.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable([1, 2, 0, 3]).scanl(max).to_list()
        [1, 2, 2, 3]
        >>> sc.iterable([]).scanl(max, 0).to_list()
        [0]

        ```
        """
        if isinstance(seed, Missing):
            return self._lazy_iter(lambda data: cz.itertoolz.accumulate(func, data))
        return self._lazy_iter(
            lambda data: cz.itertoolz.accumulate(func, data, initial=seed)
        )

    def foldr[A](self, func: Callable[[T, A], A], seed: A | Missing = MISSING) -> A:
        """Right fold: `func(x0, func(x1, ...func(xn, seed)))`.

        Without **seed**, the last element is the seed. The whole sequence is buffered first.

        Raises:
            EmptySequenceError: If the sequence is empty and no seed was given.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable([2, 2, 3]).foldr(pow)
        256
        >>> sc.iterable([]).foldr(pow, 2)
        2

        ```
        """
        acc: A | Missing = MISSING
        for acc in _scan_right(iter(self), func, seed):  # noqa: B007
            pass
        if isinstance(acc, Missing):
            raise EmptySequenceError("foldr of an empty sequence with no seed")
        return acc

    def scanr[A](
        self, func: Callable[[T, A], A], seed: A | Missing = MISSING
    ) -> Iterable[A]:
        """Yield every intermediate result of `foldr`, starting from the seed (or the last element).

        Each pull-function buffers the whole sequence on its first call.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable([2, 2, 3]).scanr(pow).to_list()
        [3, 8, 256]
        >>> sc.iterable([2, 2]).scanr(pow, 3).to_list()
        [3, 8, 256]

        ```
        """
        return self._lazy_iter(_scan_right, func, seed)

    def sum[D](self, default: D = 0) -> T | D:
        """Add up the elements, or return **default** if there is none.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Iterable.range(1, 4).sum()
        6
        >>> sc.Iterable.range().sum(7)
        7

        ```
        """
        return self._reduce_or(operator.add, default)

    def min[D](self, default: D = math.inf) -> T | D:
        """Smallest element, or **default** (`inf`) if there is none.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Iterable.range(1, 4).min()
        1
        >>> sc.Iterable.range(2, 2).min()
        inf

        ```
        """
        return min(self, default=default)

    def max[D](self, default: D = -math.inf) -> T | D:
        """Greatest element, or **default** (`-inf`) if there is none.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Iterable.range(1, 4).max()
        3
        >>> sc.Iterable.range(2, 2).max(1)
        1

        ```
        """
        return max(self, default=default)

    def all(self, predicate: Callable[[T], bool] | None = None) -> bool:
        """True if every element satisfies **predicate** (truthiness by default). Stops at the first failure.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Iterable.range(1, 4).all(lambda x: x > 2)
        False
        >>> sc.Iterable.range(0, 0).all()
        True

        ```
        """
        return all(self if predicate is None else map(predicate, self))

    def any(self, predicate: Callable[[T], bool] | None = None) -> bool:
        """True if some element satisfies **predicate** (truthiness by default). Stops at the first success.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Iterable.range(1, 4).any(lambda x: x > 2)
        True
        >>> sc.Iterable.range(0, 0).any()
        False

        ```
        """
        return any(self if predicate is None else map(predicate, self))

    def join(self, separator: str = ",") -> str:
        """Concatenate the string form of the elements, with **separator** in between.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Iterable.range(1, 4).join()
        '1,2,3'
        >>> sc.iterable("abc").join(".")
        'a.b.c'

        ```
        """
        return separator.join(map(str, self))

    def to_list(self) -> list[T]:
        """Materialize the sequence into a new `list`."""
        return list(self)

    def to_dict(self) -> dict[Any, Any]:
        """Materialize a sequence of `(key, value)` pairs into a `dict`.

        Later duplicates of a key overwrite the value, the key keeping its first position.

        Raises:
            ArgumentError: If an element isn't a pair.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable([("a", 1), ("b", 2), ("a", 3)]).to_dict()
        {'a': 3, 'b': 2}

        ```
        """
        pairs = list(self)
        try:
            return dict(pairs)
        except (TypeError, ValueError) as err:
            msg = "to_dict() needs elements that are (key, value) pairs"
            raise ArgumentError(msg) from err
