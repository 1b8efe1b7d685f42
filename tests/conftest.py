import pytest
from helpers import SCENARIO_WORDS, FakeClock

from autocomplete.core import Autocomplete, PrefixIndex
from autocomplete.utils.cache import TTLCache


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def index() -> PrefixIndex:
    return PrefixIndex(SCENARIO_WORDS)


@pytest.fixture
def service(clock: FakeClock) -> Autocomplete:
    return Autocomplete(cache=TTLCache(60.0, timer=clock))
