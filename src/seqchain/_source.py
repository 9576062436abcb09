"""Source adapter: classify a value once, and build fresh pull-functions over it."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from typing import Any

from ._core import MISSING, ConstructionError
from ._results import EXHAUSTED, Option, Some
from ._types import Pull, PullFactory, PullSource

logger = logging.getLogger(__name__)


class SourceKind(enum.Enum):
    """The closed set of source shapes an `Iterable` can wrap."""

    INDEXED = enum.auto()
    """Any `Sequence`, text included: items `0..len-1`."""
    KEYED = enum.auto()
    """Any `Mapping`: `(key, value)` pairs in mapping order."""
    NESTED = enum.auto()
    """Another `Iterable`: delegates to its own pull-functions."""
    STREAM = enum.auto()
    """Any other Python iterable, replayed from a cache when it is a one-shot iterator."""
    SINGLETON = enum.auto()
    """Every other value, produced exactly once."""


def classify(value: object) -> SourceKind:
    """Resolve the `SourceKind` of **value**.

    Raises:
        ConstructionError: If **value** is absent or `None`.

    Example:
    ```python
    >>> from seqchain._source import classify
    >>> classify("abc")
    <SourceKind.INDEXED: 1>
    >>> classify({"x": 1})
    <SourceKind.KEYED: 2>
    >>> classify({1, 2})
    <SourceKind.STREAM: 4>
    >>> classify(42)
    <SourceKind.SINGLETON: 5>

    ```
    """
    match value:
        case _ if value is None or value is MISSING:
            msg = "an Iterable needs a source value, got none"
            raise ConstructionError(msg)
        case PullSource():
            return SourceKind.NESTED
        case Mapping():
            return SourceKind.KEYED
        case Sequence():
            return SourceKind.INDEXED
        case Iterable():
            return SourceKind.STREAM
        case _:
            return SourceKind.SINGLETON


def pull_iter[T](iterator: Iterator[T]) -> Pull[T]:
    """Adapt a Python iterator to a pull-function. `StopIteration` never escapes it."""

    def _next() -> Option[T]:
        for item in iterator:
            return Some(item)
        return EXHAUSTED

    return _next


def _indexed[T](source: Sequence[T]) -> PullFactory[T]:
    def factory() -> Pull[T]:
        idx = 0

        def _next() -> Option[T]:
            nonlocal idx
            if idx >= len(source):
                return EXHAUSTED
            item = source[idx]
            idx += 1
            return Some(item)

        return _next

    return factory


def _keyed[K, V](source: Mapping[K, V]) -> PullFactory[tuple[K, V]]:
    def factory() -> Pull[tuple[K, V]]:
        return pull_iter(iter(source.items()))

    return factory


def _nested[T](source: PullSource[T]) -> PullFactory[T]:
    return source.pull


def _singleton[T](source: T) -> PullFactory[T]:
    def factory() -> Pull[T]:
        done = False

        def _next() -> Option[T]:
            nonlocal done
            if done:
                return EXHAUSTED
            done = True
            return Some(source)

        return _next

    return factory


class _Replay[T]:
    """Append-only cache over a one-shot iterator, so that each pull-function can replay it from the start."""

    __slots__ = ("_cache", "_source")

    def __init__(self, source: Iterator[T]) -> None:
        self._source = source
        self._cache: list[T] = []

    def get(self, idx: int) -> Option[T]:
        while idx >= len(self._cache):
            for item in self._source:
                self._cache.append(item)
                break
            else:
                return EXHAUSTED
        return Some(self._cache[idx])


def _stream[T](source: Iterable[T]) -> PullFactory[T]:
    if iter(source) is not source:

        def reusable() -> Pull[T]:
            return pull_iter(iter(source))

        return reusable

    replay = _Replay(iter(source))

    def factory() -> Pull[T]:
        idx = -1

        def _next() -> Option[T]:
            nonlocal idx
            idx += 1
            return replay.get(idx)

        return _next

    return factory


_FACTORIES: dict[SourceKind, Callable[[Any], PullFactory[Any]]] = {
    SourceKind.INDEXED: _indexed,
    SourceKind.KEYED: _keyed,
    SourceKind.NESTED: _nested,
    SourceKind.STREAM: _stream,
    SourceKind.SINGLETON: _singleton,
}


def pull_factory(value: object) -> PullFactory[Any]:
    """Classify **value** and return the recipe producing pull-functions over it.

    Raises:
        ConstructionError: If **value** is absent or `None`.
    """
    kind = classify(value)
    logger.debug("classified %s source as %s", type(value).__name__, kind.name)
    return _FACTORIES[kind](value)
