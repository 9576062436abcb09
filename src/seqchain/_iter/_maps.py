from __future__ import annotations

import operator
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

import cytoolz as cz

from .._core import ArgumentError, unpacked, with_index
from .._results import EXHAUSTED, Option, Some
from ._common import BaseIterable

if TYPE_CHECKING:
    from .._types import Pull
    from ._main import Iterable


def _keep_all(_item: object, _idx: int) -> bool:
    return True


def _attribute_or_key(name: str) -> Callable[[Any], Any]:
    def _get(item: Any) -> Any:  # noqa: ANN401
        if isinstance(item, Mapping):
            return item[name]
        return getattr(item, name)

    return _get


def compile_selector(template: object) -> Callable[[Any], Any]:
    """Turn a projection template into a function of one element.

    - `int`: item at that index
    - `str`: mapping key, or attribute name for non mappings
    - `list`/`tuple`: tuple of the projections
    - `dict`: dict with the same keys, whose values are projections
    - callable: called with the element

    Raises:
        ArgumentError: On any other template.
    """
    match template:
        case bool() | None:
            msg = f"invalid projection template: {template!r}"
            raise ArgumentError(msg)
        case int():
            return operator.itemgetter(template)
        case str():
            return _attribute_or_key(template)
        case list() | tuple():
            getters = tuple(compile_selector(sub) for sub in template)
            return lambda item: tuple(get(item) for get in getters)
        case Mapping():
            fields = {key: compile_selector(sub) for key, sub in template.items()}
            return lambda item: {key: get(item) for key, get in fields.items()}
        case _ if callable(template):
            return template
        case _:
            msg = f"invalid projection template: {template!r}"
            raise ArgumentError(msg)


class BaseMap[T](BaseIterable[T]):
    __slots__ = ()

    def map[R](
        self,
        func: Callable[..., R],
        predicate: Callable[..., bool] | None = None,
    ) -> Iterable[R]:
        """Apply **func** to each element, optionally keeping only the elements satisfying **predicate** first.

        Both callables receive `(element, index)` when they take two positional arguments, the element alone otherwise.

        The index is the element's position in the source.

        Args:
            func (Callable[..., R]): Function to apply to each kept element.
            predicate (Callable[..., bool] | None): Filter applied before **func**.

        Returns:
            Iterable[R]: The transformed elements.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable("a1b").map(str.upper).to_list()
        ['A', '1', 'B']
        >>> sc.iterable("a1b").map(str.upper, str.isalpha).to_list()
        ['A', 'B']
        >>> sc.iterable("xyz").map(lambda c, i: f"{c}{i}").to_list()
        ['x0', 'y1', 'z2']

        ```
        """
        transform = with_index(func)
        keep = _keep_all if predicate is None else with_index(predicate)

        def factory(nxt: Pull[T]) -> Pull[R]:
            idx = -1

            def _next() -> Option[R]:
                nonlocal idx
                while (item := nxt()).is_some():
                    idx += 1
                    value = item.unwrap()
                    if keep(value, idx):
                        return Some(transform(value, idx))
                return EXHAUSTED

            return _next

        return self._lazy(factory)

    def map_apply[R](
        self,
        func: Callable[..., R],
        predicate: Callable[..., bool] | None = None,
    ) -> Iterable[R]:
        """Like `map`, but each tuple-shaped element is unpacked into positional arguments of **func** and **predicate**.

        The predicate receives every component as well, so a test on the first component alone is written
        `lambda x, *_: ...`; a one-parameter predicate fails on pairs.

        Example:
        ```python
        >>> import seqchain as sc
        >>> pairs = sc.iterable([(1, 2), (4, 4), (6, 5)])
        >>> pairs.map_apply(lambda x, y: x * y).to_list()
        [2, 16, 30]
        >>> pairs.map_apply(lambda x, y: x * y, lambda x, y: x <= y).to_list()
        [2, 16]
        >>> pairs.map_apply(lambda x, y: x * y, lambda x, *_: x < 5).to_list()
        [2, 16]

        ```
        """
        keep = None if predicate is None else unpacked(predicate)
        return self.map(unpacked(func), keep)

    def select(self, template: object) -> Iterable[Any]:
        """Project each element through **template**.

        The template can be an index, a key or attribute name, a list of templates (giving tuples),
        a dict of templates (giving dicts), or a callable; templates nest.

        Args:
            template (object): The projection.

        Returns:
            Iterable[Any]: The projected elements.

        Raises:
            ArgumentError: If the template is malformed. This is checked immediately.

        Example:
        ```python
        >>> import seqchain as sc
        >>> rows = sc.iterable([[0, 1, 2], [3, 4, 5]])
        >>> rows.select(1).to_list()
        [1, 4]
        >>> rows.select([0, 2]).to_list()
        [(0, 2), (3, 5)]
        >>> rows.select({"a": 1, "b": lambda r: r[0] + r[2]}).to_list()
        [{'a': 1, 'b': 2}, {'a': 4, 'b': 8}]
        >>> sc.iterable([{"x": 0, "y": 1}]).select(["y", "x"]).to_list()
        [(1, 0)]

        ```
        """
        get = compile_selector(template)
        return self._lazy_iter(lambda data: map(get, data))

    def filter[R](
        self,
        predicate: Callable[..., bool] | None = None,
        func: Callable[..., R] | None = None,
    ) -> Iterable[R]:
        """Keep the elements satisfying **predicate** (truthy elements by default), then optionally transform them with **func**.

        Both callables receive `(element, index)` when they take two positional arguments, the element alone otherwise.

        Args:
            predicate (Callable[..., bool] | None): Selection criterion. Defaults to truthiness.
            func (Callable[..., R] | None): Transform applied to kept elements.

        Returns:
            Iterable[R]: The kept elements.

        Example:
        ```python
        >>> import seqchain as sc
        >>> sc.iterable([0, 1, "", "a", None]).filter().to_list()
        [1, 'a']
        >>> sc.iterable("a1b").filter(str.isalpha, lambda c, i: f"{c}{i}").to_list()
        ['a0', 'b2']

        ```
        """
        keep = bool if predicate is None else predicate
        transform: Callable[..., Any] = cz.functoolz.identity if func is None else func
        return self.map(transform, keep)

    def filter_apply[R](
        self,
        predicate: Callable[..., bool],
        func: Callable[..., R] | None = None,
    ) -> Iterable[R]:
        """Like `filter`, but each tuple-shaped element is unpacked into positional arguments of **predicate** and **func**.

        Example:
        ```python
        >>> import seqchain as sc
        >>> pairs = sc.iterable([(1, 2), (4, 4), (7, 8), (6, 5)])
        >>> pairs.filter_apply(lambda x, y: x < y).to_list()
        [(1, 2), (7, 8)]
        >>> pairs.filter_apply(lambda x, y: x < y, lambda x, y: x * y).to_list()
        [2, 56]

        ```
        """
        transform = None if func is None else unpacked(func)
        return self.filter(unpacked(predicate), transform)
