from __future__ import annotations

from collections import Counter
from itertools import islice

import pytest

from karpas.pieces import PieceKind
from karpas.randomizer import SevenBag, _spaced


@pytest.mark.parametrize("seed", [0, 1, 42, 2024])
def test_aligned_bags_are_permutations(seed: int) -> None:
    bag = SevenBag(seed)
    draws = [bag.draw() for _ in range(70)]
    for start in range(0, 70, 7):
        assert sorted(draws[start:start + 7]) == sorted(PieceKind)
    assert bag.bags_drawn == 10


@pytest.mark.parametrize("seed", range(20))
def test_no_kind_more_than_twice_in_twelve(seed: int) -> None:
    draws = list(islice(SevenBag(seed), 140))
    for start in range(len(draws) - 11):
        counts = Counter(draws[start:start + 12])
        assert max(counts.values()) <= 2


def test_same_seed_same_sequence() -> None:
    a = SevenBag(9)
    b = SevenBag(9)
    assert [a.draw() for _ in range(21)] == [b.draw() for _ in range(21)]


def test_peek_does_not_consume() -> None:
    bag = SevenBag(5)
    upcoming = bag.peek(10)
    assert len(upcoming) == 10
    assert [bag.draw() for _ in range(10)] == upcoming


def test_reseed_restarts_sequence() -> None:
    bag = SevenBag(3)
    expected = [bag.draw() for _ in range(5)]
    bag.reseed(3)
    assert [bag.draw() for _ in range(5)] == expected


def test_spacing_rejects_a_kind_dealt_too_soon_after_two_bags() -> None:
    earlier = list(PieceKind)
    assert _spaced(earlier, earlier)
    # L was last two bags ago; dealing it fourth would let a twelve draw
    # window see it three times.
    soon = [PieceKind.I, PieceKind.O, PieceKind.T, PieceKind.L, PieceKind.S, PieceKind.Z, PieceKind.J]
    assert not _spaced(earlier, soon)
    late = [PieceKind.I, PieceKind.O, PieceKind.T, PieceKind.S, PieceKind.L, PieceKind.Z, PieceKind.J]
    assert _spaced(earlier, late)
