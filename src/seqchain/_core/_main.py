from __future__ import annotations

import enum
import inspect
from collections.abc import Callable
from typing import Any, Concatenate, Self


class Missing(enum.Enum):
    """Sentinel for arguments that were not given, where `None` is a legitimate value."""

    VALUE = enum.auto()

    def __repr__(self) -> str:
        return "<missing>"


MISSING = Missing.VALUE


_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def accepts_index(func: Callable[..., Any]) -> bool:
    """Tell whether **func** wants the element's index as a second positional argument.

    That is the case when it declares `*args`, or at least two positional parameters without defaults.

    Callables whose signature can't be inspected (some builtins) are assumed to take the element alone.

    Example:
    ```python
    >>> from seqchain._core import accepts_index
    >>> accepts_index(lambda x: x)
    False
    >>> accepts_index(lambda x, i: x)
    True
    >>> accepts_index(lambda x, i=0: x)
    False
    >>> accepts_index(str.upper)
    False

    ```
    """
    try:
        params = inspect.signature(func).parameters.values()
    except (TypeError, ValueError):
        return False
    required = 0
    for param in params:
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return True
        if param.kind in _POSITIONAL and param.default is inspect.Parameter.empty:
            required += 1
    return required >= 2  # noqa: PLR2004


def with_index[T, R](func: Callable[..., R]) -> Callable[[T, int], R]:
    """Normalize **func** to the `(element, index)` calling convention."""
    if accepts_index(func):
        return func

    def _drop_index(item: T, _idx: int) -> R:
        return func(item)

    return _drop_index


def unpacked[R](func: Callable[..., R]) -> Callable[[Any], R]:
    """Adapt a multi-argument **func** to receive one tuple-shaped element."""

    def _unpack(args: Any) -> R:  # noqa: ANN401
        return func(*args)

    return _unpack


class Pipeable:
    __slots__ = ()

    def into[**P, R](
        self,
        func: Callable[Concatenate[Self, P], R],
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> R:
        """Convert `Self` to `R`.

        This allows to write `x.into(f)` instead of `f(x)`, hence keeping a functional chaining style.

        Args:
            func (Callable[Concatenate[Self, P], R]): Function for conversion.
            *args (P.args): Positional arguments to pass to the function.
            **kwargs (P.kwargs): Keyword arguments to pass to the function.

        Returns:
            R: The converted value.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.Iterable.range(4).into(list)
        [0, 1, 2, 3]

        ```
        """
        return func(self, *args, **kwargs)

    def inspect[**P](
        self,
        func: Callable[Concatenate[Self, P], object],
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> Self:
        """Pass the instance to a function to perform side effects without altering the data.

        Args:
            func (Callable[Concatenate[Self, P], object]): Function to apply to the instance for side effects.
            *args (P.args): Positional arguments to pass to the function.
            **kwargs (P.kwargs): Keyword arguments to pass to the function.

        Returns:
            Self: The instance itself for chaining.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable([1, 2, 3]).inspect(print).last()
        Iterable(1, 2, 3)
        3

        ```
        """
        func(self, *args, **kwargs)
        return self
