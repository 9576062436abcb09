from ._main import Iterable, iterable

__all__ = ["Iterable", "iterable"]
