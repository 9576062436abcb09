class SeqChainError(Exception):
    """Base class for every error raised by seqchain itself."""


class ConstructionError(SeqChainError, TypeError):
    """Raised when an `Iterable` is built without a source, or from `None`."""


class EmptySequenceError(SeqChainError, LookupError):
    """Raised when an element is required from a sequence that has none, and no default was given."""


class ArgumentError(SeqChainError, ValueError):
    """Raised on malformed templates or combinator arguments."""
