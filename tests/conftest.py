import asyncio
from typing import Optional

import pytest

from chunksort.sort.oracle.base import RankingOracle
from chunksort.sort.errors import OracleUnavailableError


class AlphabeticalOracle(RankingOracle):
    """
    Deterministic stand-in for the LLM: "descending" means reverse alphabetical.
    Records every batch it was asked to rank.
    """

    def __init__(self, capacity: Optional[int] = None, delay: float = 0.0):
        self.capacity = capacity
        self.delay = delay
        self.calls: list[list[str]] = []

    async def rank(self, items, criterion, sort_order="descending"):
        self.calls.append(list(items))
        if self.delay:
            await asyncio.sleep(self.delay)
        return sorted(items, reverse=(sort_order == "descending"))


class DroppingOracle(AlphabeticalOracle):
    """Returns one item fewer than it was given."""

    async def rank(self, items, criterion, sort_order="descending"):
        ranked = await super().rank(items, criterion, sort_order)
        return ranked[:-1]


class FailingOracle(AlphabeticalOracle):
    """Goes down on the fail_on-th call (1-based)."""

    def __init__(self, fail_on: int):
        super().__init__()
        self.fail_on = fail_on

    async def rank(self, items, criterion, sort_order="descending"):
        if len(self.calls) + 1 == self.fail_on:
            self.calls.append(list(items))
            raise OracleUnavailableError("connection refused")
        return await super().rank(items, criterion, sort_order)


UNSORTED_STRINGS = [
    'zebra', 'apple', 'quail', 'mango', 'giraffe', 'banana', 'dog', 'lion', 'tiger',
    'elephant', 'kiwi', 'raspberry', 'grape', 'apricot', 'kangaroo', 'owl', 'peacock',
    'xenon', 'uranium', 'platinum', 'walrus', 'fox', 'capybara', 'iguana', 'jaguar',
    'koi', 'lobster', 'moose', 'nugget', 'octopus', 'python', 'quokka', 'raccoon',
    'starfish', 'tortoise', 'umbrella', 'vulture', 'wombat', 'xerus', 'yak', 'zeppelin',
    'ant', 'beaver', 'cat', 'dolphin', 'echidna', 'frog', 'hamster', 'impala', 'jellyfish',
]


@pytest.fixture
def oracle() -> AlphabeticalOracle:
    return AlphabeticalOracle()


@pytest.fixture
def animals() -> list[str]:
    return list(UNSORTED_STRINGS)


class RaisingOracle(AlphabeticalOracle):
    """Raises a plain (non-oracle) exception on the fail_on-th call (1-based)."""

    def __init__(self, fail_on: int, error: Exception):
        super().__init__()
        self.fail_on = fail_on
        self.error = error

    async def rank(self, items, criterion, sort_order="descending"):
        if len(self.calls) + 1 == self.fail_on:
            self.calls.append(list(items))
            raise self.error
        return await super().rank(items, criterion, sort_order)
