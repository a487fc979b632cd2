"""Shared fixtures for all tests."""
import pytest

from holdem.managers.stats_store import InMemoryStore, StatsStore
from tests.helpers import StackedDeck, stacked


@pytest.fixture
def store() -> StatsStore:
    return StatsStore(InMemoryStore())


@pytest.fixture
def heads_up_deck() -> StackedDeck:
    # You: As Ad, Alice: 7c 2h, board Ks 9d 4c 3h Jh
    return stacked("As 7c Ad 2h Ks 9d 4c 3h Jh")
