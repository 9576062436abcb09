from __future__ import annotations

import operator
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any, Concatenate, Self

from .._core import MISSING, Pipeable, get_config, with_index
from .._results import EXHAUSTED, Option, Some
from .._source import pull_factory, pull_iter
from .._types import PullSource

if TYPE_CHECKING:
    from .._types import Pull, PullFactory


def fuse[T](pull: Pull[T]) -> Pull[T]:
    """Latch the exhaustion of **pull**: once it returned `EXHAUSTED`, it is never called again."""
    done = False

    def _next() -> Option[T]:
        nonlocal done
        if done:
            return EXHAUSTED
        item = pull()
        if item.is_exhausted():
            done = True
        return item

    return _next


class BaseIterable[T](Pipeable, PullSource[T]):
    """Shared state and plumbing of `Iterable`: the recipe, the protocol, and the lazy constructors."""

    _recipe: PullFactory[T]

    __slots__ = ("_recipe",)

    def __init__(self, source: object = MISSING) -> None:
        recipe = pull_factory(source)

        def fused() -> Pull[T]:
            return fuse(recipe())

        self._recipe = fused

    @classmethod
    def _from_recipe[U](cls, recipe: PullFactory[U]) -> Any:  # noqa: ANN401
        instance = cls.__new__(cls)

        def fused() -> Pull[U]:
            return fuse(recipe())

        instance._recipe = fused
        return instance

    def _coerce(self, value: object) -> Self:
        return value if isinstance(value, self.__class__) else self.__class__(value)

    def _lazy[**P, U](
        self,
        factory: Callable[Concatenate[Pull[T], P], Pull[U]],
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> Any:  # noqa: ANN401
        """Derive a sequence whose pull-functions are built by **factory** over a fresh pull-function of `self`."""

        def recipe() -> Pull[U]:
            return factory(self.pull(), *args, **kwargs)

        return self._from_recipe(recipe)

    def _lazy_iter[**P, U](
        self,
        factory: Callable[Concatenate[Iterator[T], P], Iterator[U]],
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> Any:  # noqa: ANN401
        """Same as `_lazy`, for factories written over Python iterators (itertools, cytoolz, more-itertools)."""

        def recipe() -> Pull[U]:
            return pull_iter(factory(iter(self), *args, **kwargs))

        return self._from_recipe(recipe)

    def pull(self) -> Pull[T]:
        """Return a fresh pull-function over the sequence.

        Each call returns the next element wrapped in `Some`, then `EXHAUSTED` on every call after the last element.

        Two pull-functions obtained from the same `Iterable` never share state.

        Example:
        ```python
        >>> import seqchain as sc
        >>> nxt = sc.iterable("ab").pull()
        >>> nxt(), nxt(), nxt(), nxt()
        (Some(value='a'), Some(value='b'), EXHAUSTED, EXHAUSTED)

        ```
        """
        return self._recipe()

    def __iter__(self) -> Iterator[T]:
        nxt = self.pull()
        while True:
            match nxt():
                case Some(value):
                    yield value
                case _:
                    return

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({get_config().iter_repr(self)})"

    def for_each[R](self, func: Callable[..., R]) -> R | None:
        """Call **func** on every element, and return what its last call returned.

        **func** receives `(element, index)` if it takes two positional arguments, the element alone otherwise.

        Args:
            func (Callable[..., R]): Function called for its side effects.

        Returns:
            R | None: The result of the last call, or `None` if the sequence is empty.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable("ab").for_each(lambda x, i: print(i, x))
        0 a
        1 b

        ```
        """
        call = with_index(func)
        result: R | None = None
        for idx, item in enumerate(self):
            result = call(item, idx)
        return result

    def is_empty(self) -> bool:
        """Return True if the sequence has no element. Pulls at most one element.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable([]).is_empty()
        True
        >>> sc.iterable([None]).is_empty()
        False

        ```
        """
        return self.pull()().is_exhausted()

    def count(self) -> int:
        """Return the number of elements, consuming the whole sequence.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Iterable.range(1, 7).count()
        6

        ```
        """
        return sum(1 for _ in self)

    def indices_where(
        self, predicate: Callable[..., bool], start: int = 0
    ) -> BaseIterable[int]:
        """Lazily yield the positions of the elements satisfying **predicate**, from **start** on.

        A negative **start** counts as 0.

        Args:
            predicate (Callable[..., bool]): Called with `(element, index)` or the element alone.
            start (int): First position to consider.

        Returns:
            Iterable[int]: The matching positions.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable([0, 1, 2, 3]).indices_where(lambda x: x % 2 == 0).to_list()
        [0, 2]
        >>> sc.iterable([0, 1, 2, 3]).indices_where(lambda x: x % 2 == 0, 1).to_list()
        [2]

        ```
        """
        test = with_index(predicate)
        begin = max(0, start)

        def factory(nxt: Pull[T]) -> Pull[int]:
            idx = -1

            def _next() -> Option[int]:
                nonlocal idx
                while (item := nxt()).is_some():
                    idx += 1
                    if idx >= begin and test(item.unwrap(), idx):
                        return Some(idx)
                return EXHAUSTED

            return _next

        return self._lazy(factory)

    def index_where(self, predicate: Callable[..., bool], start: int = 0) -> int:
        """Return the first position from **start** on whose element satisfies **predicate**, or -1.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable([0, 1, 2]).index_where(lambda x: x % 2 == 0, 1)
        2
        >>> sc.iterable([0, 1, 2]).index_where(lambda x: x > 5)
        -1

        ```
        """
        return self.indices_where(predicate, start).pull()().unwrap_or(-1)

    def indices_of(self, value: object, start: int = 0) -> BaseIterable[int]:
        """Lazily yield the positions of the elements equal to **value**, from **start** on.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable("ababa").indices_of("a", 2).to_list()
        [2, 4]

        ```
        """
        return self.indices_where(lambda item: operator.eq(item, value), start)

    def index_of(self, value: object, start: int = 0) -> int:
        """Return the first position from **start** on holding **value**, or -1.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable([0, 1, 2, 1]).index_of(1, 2)
        3
        >>> sc.iterable([0, 1, 2]).index_of(0, 1)
        -1

        ```
        """
        return self.indices_of(value, start).pull()().unwrap_or(-1)
