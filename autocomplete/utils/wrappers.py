import asyncio
import logging
import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from functools import wraps
from typing import Final

from autocomplete.typedefs import CoroFunction

log = logging.getLogger(__name__)

SLOW_CALL: Final = 0.5


@contextmanager
def time_it(name: str, *, slow: float = SLOW_CALL) -> Generator[None]:
    """Log how long the block took, at debug level or as a warning once it reaches ``slow`` seconds."""
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        log.log(logging.WARNING if elapsed >= slow else logging.DEBUG, "%s took %.4f seconds", name, elapsed)


def executor_function[**P, T](func: Callable[P, T]) -> CoroFunction[P, T]:
    """Run ``func`` in the default thread pool, timing each call."""
    name = func.__qualname__

    @wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        with time_it(name):
            return await asyncio.to_thread(func, *args, **kwargs)

    return wrapper
