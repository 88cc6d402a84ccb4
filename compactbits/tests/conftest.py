from __future__ import annotations

import random

import pytest

from compactbits import BitSet

CAPACITIES = 0, 1, 7, 8, 9, 11, 16, 17, 32, 33, 64, 65, 73, 100, 128, 129


def random_bits(size: int, seed: int = 0) -> BitSet:
    rng = random.Random(size * 1000 + seed)
    return BitSet[size](rng.getrandbits(size) if size else 0)


@pytest.fixture(params=CAPACITIES)  # type: ignore[misc]
def size(request: pytest.FixtureRequest) -> int:
    return request.param


@pytest.fixture  # type: ignore[misc]
def x(size: int) -> BitSet:
    return random_bits(size, seed=1)


@pytest.fixture  # type: ignore[misc]
def y(size: int) -> BitSet:
    return random_bits(size, seed=2)
