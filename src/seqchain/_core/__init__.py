from ._config import Config, get_config, set_config
from ._errors import ArgumentError, ConstructionError, EmptySequenceError, SeqChainError
from ._main import MISSING, Missing, Pipeable, accepts_index, unpacked, with_index

__all__ = [
    "MISSING",
    "ArgumentError",
    "Config",
    "ConstructionError",
    "EmptySequenceError",
    "Missing",
    "Pipeable",
    "SeqChainError",
    "accepts_index",
    "get_config",
    "set_config",
    "unpacked",
    "with_index",
]
