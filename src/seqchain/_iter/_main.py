from __future__ import annotations

import itertools
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

import cytoolz as cz

from .._core import MISSING
from .._results import EXHAUSTED, Option, Some
from .._source import pull_iter
from ._aggregations import BaseAgg
from ._eager import BaseEager
from ._joins import BaseJoins
from ._maps import BaseMap
from ._slices import BaseSlices

if TYPE_CHECKING:
    from .._types import Pull


def _cycle[T](seq: Iterable[T], times: int | None) -> Iterator[T]:
    laps = itertools.repeat(seq) if times is None else itertools.repeat(seq, times)
    for lap in laps:
        produced = False
        for item in lap:
            produced = True
            yield item
        if not produced:
            return


class Iterable[T](BaseMap[T], BaseSlices[T], BaseJoins[T], BaseAgg[T], BaseEager[T]):
    """A lazy, restartable sequence, with a rich set of chainable combinators.

    An `Iterable` is a descriptor of *how* to produce elements, not a cursor:
    every iteration (a `for` loop, a call to `pull()`, a terminal method) starts from the beginning,
    independently from any other, and the source is never modified.

    Combinators return new `Iterable`s without evaluating anything; terminal methods
    (`to_list`, `foldl`, `head`, ...) pull through the whole chain down to the source.

    The source is classified once, at construction:

    - a `Sequence` (list, tuple, text, range...) yields its items in order, text one character at a time,
    - a `Mapping` yields its `(key, value)` pairs,
    - another `Iterable` is delegated to,
    - any other Python iterable is replayed (one-shot iterators are cached as they are consumed),
    - any other value is yielded exactly once.

    Args:
        source (object): The value to wrap. Required, and can't be `None`.

    Raises:
        ConstructionError: If no source, or `None`, is given.

    Example:
    ```python
    >>> import seqchain as sc
    >>> sc.Iterable([0, 1, 2])
    Iterable(0, 1, 2)
    >>> sc.Iterable({"x": 1, "y": 2}).to_list()
    [('x', 1), ('y', 2)]
    >>> sc.Iterable(1).to_list()
    [1]
    >>> seq = sc.Iterable("abc").map(str.upper)
    >>> seq.join(""), seq.join("")
    ('ABC', 'ABC')

    ```
    """

    __slots__ = ()

    def __init__(self, source: object = MISSING) -> None:
        super().__init__(source)

    @staticmethod
    def empty() -> Iterable[T]:
        """An empty sequence."""
        return Iterable(())

    @staticmethod
    def range(
        start: float | None = None, end: float | None = None, step: float = 1
    ) -> Iterable[float]:
        """Arithmetic progression from **start** (included) to **end** (excluded).

        With one argument, counts from 0 to it. Without argument, or with a **step** that never
        reaches **end** (including 0), the sequence is empty. Works with floats too.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Iterable.range(3).to_list()
        [0, 1, 2]
        >>> sc.Iterable.range(1, 10, 3).to_list()
        [1, 4, 7]
        >>> sc.Iterable.range(3, 0, -1).to_list()
        [3, 2, 1]
        >>> sc.Iterable.range(1, 0).to_list()
        []

        ```
        """
        if start is None:
            return Iterable.empty()
        if end is None:
            start, end = 0, start
        if step == 0 or (step > 0 and start >= end) or (step < 0 and start <= end):
            return Iterable.empty()

        def recipe() -> Pull[float]:
            current = start

            def _next() -> Option[float]:
                nonlocal current
                if (current >= end) if step > 0 else (current <= end):
                    return EXHAUSTED
                value, current = current, current + step
                return Some(value)

            return _next

        return Iterable._from_recipe(recipe)

    @staticmethod
    def repeat[U](value: U, n: int | None = None) -> Iterable[U]:
        """**value**, **n** times, or without end if **n** is omitted.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Iterable.repeat(1, 3).to_list()
        [1, 1, 1]
        >>> sc.Iterable.repeat("x").take(2).join("")
        'xx'

        ```
        """

        def recipe() -> Pull[U]:
            if n is None:
                return pull_iter(itertools.repeat(value))
            return pull_iter(itertools.repeat(value, max(n, 0)))

        return Iterable._from_recipe(recipe)

    @staticmethod
    def iterate[U](func: Callable[[U], U], seed: U, n: int | None = None) -> Iterable[U]:
        """**seed**, `func(seed)`, `func(func(seed))`... **n** values, or without end if **n** is omitted.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Iterable.iterate(lambda x: x * 2, 1, 6).to_list()
        [1, 2, 4, 8, 16, 32]

        ```
        """

        def recipe() -> Pull[U]:
            values = cz.itertoolz.iterate(func, seed)
            if n is None:
                return pull_iter(values)
            return pull_iter(itertools.islice(values, max(n, 0)))

        return Iterable._from_recipe(recipe)

    def cycle(self, times: int | None = None) -> Iterable[T]:
        """The sequence concatenated with itself **times** times, or without end if **times** is omitted.

        Each lap iterates the sequence afresh. Cycling an empty sequence gives an empty sequence.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable("ab").cycle(3).join("")
        'ababab'
        >>> sc.iterable("ab").cycle().take(5).join("")
        'ababa'
        >>> sc.iterable("").cycle().to_list()
        []

        ```
        """
        return self._from_recipe(lambda: pull_iter(_cycle(self, times)))


def iterable[T](source: object = MISSING) -> Iterable[T]:
    """Build an `Iterable` over **source**. Shorthand for `Iterable(source)`.

    Raises:
        ConstructionError: If **source** is missing or `None`.
    """
    return Iterable(source)
