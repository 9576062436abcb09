from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from .._core import MISSING, EmptySequenceError, Missing
from .._results import EXHAUSTED, Option, Some
from ._common import BaseIterable

if TYPE_CHECKING:
    from .._types import Pull
    from ._main import Iterable


class BaseSlices[T](BaseIterable[T]):
    __slots__ = ()

    def take_while(self, predicate: Callable[[T], bool]) -> Iterable[T]:
        """Yield elements while **predicate** holds, and stop at the first one failing it.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable([0, 2, 3, 4]).take_while(lambda x: x % 2 == 0).to_list()
        [0, 2]

        ```
        """

        def factory(nxt: Pull[T]) -> Pull[T]:
            def _next() -> Option[T]:
                match nxt():
                    case Some(value) as item if predicate(value):
                        return item
                    case _:
                        return EXHAUSTED

            return _next

        return self._lazy(factory)

    def take(self, n: int) -> Iterable[T]:
        """Yield the first **n** elements, or all of them if there are fewer.

        `n <= 0` gives an empty sequence.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable([0, 1, 2]).take(2).to_list()
        [0, 1]
        >>> sc.iterable([0, 1, 2]).take(5).to_list()
        [0, 1, 2]
        >>> sc.iterable([0, 1, 2]).take(-1).to_list()
        []

        ```
        """

        def factory(nxt: Pull[T]) -> Pull[T]:
            remaining = n

            def _next() -> Option[T]:
                nonlocal remaining
                if remaining <= 0:
                    return EXHAUSTED
                remaining -= 1
                return nxt()

            return _next

        return self._lazy(factory)

    def drop_while(self, predicate: Callable[[T], bool]) -> Iterable[T]:
        """Skip elements while **predicate** holds, then yield everything after.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable([0, 2, 3, 4]).drop_while(lambda x: x % 2 == 0).to_list()
        [3, 4]

        ```
        """

        def factory(nxt: Pull[T]) -> Pull[T]:
            dropping = True

            def _next() -> Option[T]:
                nonlocal dropping
                item = nxt()
                while dropping and item.is_some() and predicate(item.unwrap()):
                    item = nxt()
                dropping = False
                return item

            return _next

        return self._lazy(factory)

    def drop(self, n: int) -> Iterable[T]:
        """Skip the first **n** elements. `n <= 0` leaves the sequence unchanged.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable([0, 1, 2, 3]).drop(3).to_list()
        [3]
        >>> sc.iterable([0, 1, 2, 3]).drop(5).to_list()
        []

        ```
        """

        def factory(nxt: Pull[T]) -> Pull[T]:
            pending = n

            def _next() -> Option[T]:
                nonlocal pending
                while pending > 0:
                    pending -= 1
                    if nxt().is_exhausted():
                        return EXHAUSTED
                return nxt()

            return _next

        return self._lazy(factory)

    def head[D](self, default: D | Missing = MISSING) -> T | D:
        """Return the first element, or **default** if the sequence is empty.

        Raises:
            EmptySequenceError: If the sequence is empty and no default was given.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable("abc").head()
        'a'
        >>> sc.iterable([]).head(17)
        17

        ```
        """
        match self.pull()():
            case Some(value):
                return value
            case _ if isinstance(default, Missing):
                raise EmptySequenceError("head of an empty sequence")
            case _:
                return default

    def last[D](self, default: D | Missing = MISSING) -> T | D:
        """Return the last element, or **default** if the sequence is empty. Consumes the whole sequence.

        Raises:
            EmptySequenceError: If the sequence is empty and no default was given.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable([1, 2, 3]).last()
        3
        >>> sc.iterable([False]).filter().last(17)
        17

        ```
        """
        result: T | Missing = MISSING
        for item in self:
            result = item
        if not isinstance(result, Missing):
            return result
        if isinstance(default, Missing):
            raise EmptySequenceError("last of an empty sequence")
        return default

    def tail(self) -> Iterable[T]:
        """All the elements but the first.

        Building the tail never fails; pulling from the tail of an empty sequence raises `EmptySequenceError`.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable([1, 2]).tail().head()
        2
        >>> empty_tail = sc.iterable([]).tail()
        >>> empty_tail.is_empty()
        Traceback (most recent call last):
            ...
        seqchain._core._errors.EmptySequenceError: tail of an empty sequence

        ```
        """

        def factory(nxt: Pull[T]) -> Pull[T]:
            started = False

            def _next() -> Option[T]:
                nonlocal started
                if not started:
                    started = True
                    if nxt().is_exhausted():
                        raise EmptySequenceError("tail of an empty sequence")
                return nxt()

            return _next

        return self._lazy(factory)

    def init(self) -> Iterable[T]:
        """All the elements but the last.

        Building it never fails; pulling from the init of an empty sequence raises `EmptySequenceError`.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable([1, 2, 3]).init().to_list()
        [1, 2]
        >>> sc.iterable([1]).init().is_empty()
        True

        ```
        """

        def factory(nxt: Pull[T]) -> Pull[T]:
            ahead: Option[T] | None = None

            def _next() -> Option[T]:
                nonlocal ahead
                if ahead is None:
                    ahead = nxt()
                    if ahead.is_exhausted():
                        raise EmptySequenceError("init of an empty sequence")
                current, ahead = ahead, nxt()
                return current if ahead.is_some() else EXHAUSTED

            return _next

        return self._lazy(factory)
