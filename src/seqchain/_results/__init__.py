from ._option import EXHAUSTED, Exhausted, Option, Some

__all__ = ["EXHAUSTED", "Exhausted", "Option", "Some"]
