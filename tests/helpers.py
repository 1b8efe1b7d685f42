SCENARIO_WORDS = ["magic", "magnet", "maggie", "maggot", "ma", "megan", "mama", "mam"]

SECRET = "test-secret-key-that-is-long-enough-for-hs256"


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
