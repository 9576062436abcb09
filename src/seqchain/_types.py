from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, NamedTuple, Protocol

if TYPE_CHECKING:
    from ._results import Option

type Pull[T] = Callable[[], Option[T]]
"""A pull-function: each call returns the next element as `Some`, or `EXHAUSTED` forever after the end."""
type PullFactory[T] = Callable[[], Pull[T]]
"""The recipe held by an `Iterable`: each call builds a fresh, independent pull-function."""


class PullSource[T]:
    """Base of the seqchain sequences, the only objects whose `pull()` is trusted to return pull-functions.

    Foreign objects that merely have a `pull` attribute are plain values.
    """

    __slots__ = ()

    def pull(self) -> Pull[T]:
        raise NotImplementedError


class Group[K, V](NamedTuple):
    """A run of adjacent elements sharing a key.

    See `Iterable.group_by()` for details.
    """

    key: K
    """The common key for the group."""
    values: list[V]
    """The elements of the run, in source order."""


# typeshed protocols


class SupportsDunderLT[T](Protocol):
    def __lt__(self, other: T, /) -> bool: ...


class SupportsDunderGT[T](Protocol):
    def __gt__(self, other: T, /) -> bool: ...


type SupportsRichComparison[T] = SupportsDunderLT[T] | SupportsDunderGT[T]
