import pytest
from helpers import FakeClock

from autocomplete.core import RateLimiter


def test_burst_then_refill(clock: FakeClock) -> None:
    limiter = RateLimiter(1.0, 3, timer=clock)

    assert [limiter.hit("1.2.3.4") for _ in range(3)] == [0.0, 0.0, 0.0]
    assert limiter.hit("1.2.3.4") == pytest.approx(1.0)

    clock.advance(0.5)
    assert limiter.hit("1.2.3.4") == pytest.approx(0.5)

    clock.advance(0.5)
    assert limiter.hit("1.2.3.4") == 0.0
    assert limiter.hit("1.2.3.4") > 0


def test_refill_is_capped_at_burst(clock: FakeClock) -> None:
    limiter = RateLimiter(2.0, 2, timer=clock)
    limiter.hit("client")
    clock.advance(3600.0)

    assert [limiter.hit("client") for _ in range(3)] == [0.0, 0.0, pytest.approx(0.5)]


def test_clients_are_limited_separately(clock: FakeClock) -> None:
    limiter = RateLimiter(1.0, 1, timer=clock)

    assert limiter.hit("a") == 0.0
    assert limiter.hit("a") > 0
    assert limiter.hit("b") == 0.0


@pytest.mark.parametrize(("rate", "burst"), [(0.0, 1), (-1.0, 1), (1.0, 0)])
def test_invalid_limits(rate: float, burst: int) -> None:
    with pytest.raises(ValueError, match="rate must be greater than 0"):
        RateLimiter(rate, burst)
