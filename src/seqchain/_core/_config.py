from __future__ import annotations

import dataclasses
import os
from collections.abc import Iterable
from dataclasses import dataclass
from itertools import islice
from typing import Any

from ._errors import ArgumentError

_ENV_REPR_ITEMS = "SEQCHAIN_REPR_ITEMS"


@dataclass(slots=True, frozen=True)
class Config:
    """Display settings shared by all seqchain wrappers.

    Args:
        repr_items (int): How many leading elements `repr()` shows before eliding the rest.
    """

    repr_items: int = 10

    def iter_repr(self, data: Iterable[Any]) -> str:
        """Render the first `repr_items` elements of **data**, followed by `...` if more remain.

        Only `repr_items + 1` elements are ever pulled, so this is safe on unbounded sequences.

        Args:
            data (Iterable[Any]): The data to render.

        Returns:
            str: The comma separated preview.

        Example:
        ```python
        >>> from seqchain._core import Config
        >>> Config(repr_items=3).iter_repr(range(10))
        '0, 1, 2, ...'
        >>> Config(repr_items=3).iter_repr("ab")
        "'a', 'b'"

        ```
        """
        preview = list(islice(data, self.repr_items + 1))
        shown = ", ".join(repr(item) for item in preview[: self.repr_items])
        if len(preview) > self.repr_items:
            return f"{shown}, ..." if shown else "..."
        return shown


def _from_env() -> Config:
    raw = os.getenv(_ENV_REPR_ITEMS)
    if raw is None or not raw.strip().isdigit():
        return Config()
    return Config(repr_items=int(raw))


_config: Config = _from_env()


def get_config() -> Config:
    """Return the active `Config`."""
    return _config


def set_config(**changes: Any) -> Config:
    """Replace fields of the active `Config`, and return the new one.

    Args:
        **changes (Any): Field names and their new values.

    Returns:
        Config: The configuration now in use.

    Raises:
        ArgumentError: If a field doesn't exist, or `repr_items` is negative.

    Example:
    ```python
    >>> import seqchain as sc
    >>> previous = sc.get_config()
    >>> sc.set_config(repr_items=2).repr_items
    2
    >>> sc.Iterable.range(5)
    Iterable(0, 1, ...)
    >>> _ = sc.set_config(repr_items=previous.repr_items)

    ```
    """
    global _config  # noqa: PLW0603
    try:
        updated = dataclasses.replace(_config, **changes)
    except TypeError as err:
        msg = f"unknown configuration field(s): {', '.join(sorted(changes))}"
        raise ArgumentError(msg) from err
    if updated.repr_items < 0:
        msg = f"repr_items must be >= 0, got {updated.repr_items}"
        raise ArgumentError(msg)
    _config = updated
    return _config
