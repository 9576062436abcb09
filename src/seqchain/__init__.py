from ._core import (
    ArgumentError,
    Config,
    ConstructionError,
    EmptySequenceError,
    SeqChainError,
    get_config,
    set_config,
)
from ._iter import Iterable, iterable
from ._results import EXHAUSTED, Exhausted, Option, Some
from ._source import SourceKind
from ._types import Group, Pull

__all__ = [
    "EXHAUSTED",
    "ArgumentError",
    "Config",
    "ConstructionError",
    "EmptySequenceError",
    "Exhausted",
    "Group",
    "Iterable",
    "Option",
    "Pull",
    "SeqChainError",
    "Some",
    "SourceKind",
    "get_config",
    "iterable",
    "set_config",
]
