from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Never, TypeIs

from .._core import EmptySequenceError


class Option[T](ABC):
    """The outcome of one call to a pull-function: `Some(element)`, or `EXHAUSTED`.

    End of sequence is a value, not an exception; every combinator checks it structurally.
    """

    __slots__ = ()

    @abstractmethod
    def is_some(self) -> TypeIs[Some[T]]:  # type: ignore[misc]
        """
        Returns `True` if the option holds an element.

        Example:
            ```python
            >>> from seqchain import Some, EXHAUSTED
            >>> Some(2).is_some()
            True
            >>> EXHAUSTED.is_some()
            False

            ```
        """
        ...

    @abstractmethod
    def is_exhausted(self) -> TypeIs[Exhausted]:  # type: ignore[misc]
        """
        Returns `True` if the option is the exhaustion signal.

        Example:
            ```python
            >>> from seqchain import Some, EXHAUSTED
            >>> Some(None).is_exhausted()
            False
            >>> EXHAUSTED.is_exhausted()
            True

            ```
        """
        ...

    @abstractmethod
    def unwrap(self) -> T:
        """
        Returns the contained element.

        Raises:
            EmptySequenceError: If the option is `EXHAUSTED`.

        Example:
            ```python
            >>> from seqchain import Some, EXHAUSTED
            >>> Some("car").unwrap()
            'car'
            >>> EXHAUSTED.unwrap()
            Traceback (most recent call last):
                ...
            seqchain._core._errors.EmptySequenceError: called `unwrap` on `EXHAUSTED`

            ```
        """
        ...

    def expect(self, msg: str) -> T:
        """
        Returns the contained element, or raises `EmptySequenceError` with **msg**.

        Example:
            ```python
            >>> from seqchain import EXHAUSTED
            >>> EXHAUSTED.expect("no first element")
            Traceback (most recent call last):
                ...
            seqchain._core._errors.EmptySequenceError: no first element

            ```
        """
        if self.is_some():
            return self.unwrap()
        raise EmptySequenceError(msg)

    def unwrap_or(self, default: T) -> T:
        """
        Returns the contained element or a provided default.

        Example:
            ```python
            >>> from seqchain import Some, EXHAUSTED
            >>> Some("car").unwrap_or("bike")
            'car'
            >>> EXHAUSTED.unwrap_or("bike")
            'bike'

            ```
        """
        return self.unwrap() if self.is_some() else default

    def unwrap_or_else(self, f: Callable[[], T]) -> T:
        """Returns the contained element or computes one from **f**."""
        return self.unwrap() if self.is_some() else f()

    def map[U](self, f: Callable[[T], U]) -> Option[U]:
        """
        Applies **f** to a contained element, leaving `EXHAUSTED` untouched.

        Example:
            ```python
            >>> from seqchain import Some, EXHAUSTED
            >>> Some("Hello, World!").map(len)
            Some(value=13)
            >>> EXHAUSTED.map(len)
            EXHAUSTED

            ```
        """
        if self.is_some():
            return Some(f(self.unwrap()))
        return EXHAUSTED


@dataclass(slots=True, frozen=True)
class Some[T](Option[T]):
    value: T

    def is_some(self) -> TypeIs[Some[T]]:  # type: ignore[misc]
        return True

    def is_exhausted(self) -> TypeIs[Exhausted]:  # type: ignore[misc]
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(slots=True, frozen=True, repr=False)
class Exhausted(Option[Any]):
    """The end-of-sequence signal. Use the `EXHAUSTED` singleton rather than instantiating it."""

    def __repr__(self) -> str:
        return "EXHAUSTED"

    def is_some(self) -> TypeIs[Some[Any]]:  # type: ignore[misc]
        return False

    def is_exhausted(self) -> TypeIs[Exhausted]:  # type: ignore[misc]
        return True

    def unwrap(self) -> Never:
        raise EmptySequenceError("called `unwrap` on `EXHAUSTED`")


EXHAUSTED: Option[Any] = Exhausted()
