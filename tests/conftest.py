"""Shared helpers for seqchain tests."""

from collections.abc import Callable

import pytest

import seqchain as sc

type ExpectSequence = Callable[..., None]


def _expect_sequence(seq: sc.Iterable[object], *expected: object) -> None:
    nxt = seq.pull()
    for value in expected:
        assert nxt() == sc.Some(value)
    for _ in range(3):
        assert nxt() is sc.EXHAUSTED


@pytest.fixture
def expect_sequence() -> ExpectSequence:
    """Check that a fresh pull-function yields exactly the given values, then stays exhausted."""
    return _expect_sequence
