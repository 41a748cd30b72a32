import asyncio
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

T = TypeVar("T")
R = TypeVar("R")


class BoundedWorkerPool:
    """Runs one coroutine per item with at most `size` in flight.

    Items past the ceiling wait for a permit. Results come back in
    submission order even though work completes in any order.
    """

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError("Worker pool size must be at least 1")
        self._size = size
        self._semaphore = asyncio.Semaphore(size)
        self._in_flight = 0
        self._peak_in_flight = 0

    @property
    def size(self) -> int:
        return self._size

    @property
    def peak_in_flight(self) -> int:
        return self._peak_in_flight

    async def map(self, func: Callable[[T], Awaitable[R]], items: Iterable[T]) -> list[R]:
        """Run `func` over `items`; the first error cancels every unfinished item."""
        tasks = [asyncio.create_task(self._run(func, item)) for item in items]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _run(self, func: Callable[[T], Awaitable[R]], item: T) -> R:
        async with self._semaphore:
            self._in_flight += 1
            self._peak_in_flight = max(self._peak_in_flight, self._in_flight)
            try:
                return await func(item)
            finally:
                self._in_flight -= 1
