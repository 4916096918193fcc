"""Deterministic processing order for roster players.

Players are ranked by score and then permuted with a small string-seeded
linear congruential generator. The fold and generator constants are fixed so
that a seed always produces the same order, on any platform and across
rewrites that keep the same arithmetic.
"""

from __future__ import annotations

import math
from typing import Callable, Iterator, List, Sequence, TypeVar
from uuid import uuid4

from squadsplit.models import PlayerRecord


T = TypeVar("T")

_MASK_32 = 0xFFFFFFFF
_FOLD_MULTIPLIER = 31
_LCG_MULTIPLIER = 1664525
_LCG_INCREMENT = 1013904223
_LCG_MODULUS = 2**32


def _code_units(seed: str) -> Iterator[int]:
    # Character codes are UTF-16 code units, so astral characters fold as two.
    data = seed.encode("utf-16-le", "surrogatepass")
    for offset in range(0, len(data), 2):
        yield int.from_bytes(data[offset:offset + 2], "little")


def seed_accumulator(seed: str) -> int:
    """Fold ``seed`` into an unsigned 32-bit starting state."""

    acc = 0
    for unit in _code_units(seed):
        acc = (acc * _FOLD_MULTIPLIER + unit) & _MASK_32
    return acc


def lcg_stream(state: int) -> Callable[[], float]:
    """Return a generator of draws in ``[0, 1)`` starting from ``state``."""

    def draw() -> float:
        nonlocal state
        state = (_LCG_MULTIPLIER * state + _LCG_INCREMENT) % _LCG_MODULUS
        return state / _LCG_MODULUS

    return draw


def seeded_shuffle(items: Sequence[T], seed: str) -> List[T]:
    """Return a Fisher-Yates shuffled copy of ``items``.

    An empty seed returns the items in their original order.
    """

    shuffled = list(items)
    if not seed:
        return shuffled
    draw = lcg_stream(seed_accumulator(seed))
    for i in range(len(shuffled) - 1, 0, -1):
        j = math.floor(draw() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def new_seed() -> str:
    """Return a short random seed for a fresh reshuffle."""

    return uuid4().hex[:7]


def sort_by_score(players: Sequence[PlayerRecord]) -> List[PlayerRecord]:
    """Stable sort by descending score, ties broken by ascending name."""

    return sorted(players, key=lambda player: (-player.score, player.name))


def sequence_players(players: Sequence[PlayerRecord], seed: str) -> List[PlayerRecord]:
    return seeded_shuffle(sort_by_score(players), seed)


__all__ = [
    "lcg_stream",
    "new_seed",
    "seed_accumulator",
    "seeded_shuffle",
    "sequence_players",
    "sort_by_score",
]
