import asyncio
from typing import Any, Coroutine, TypeVar

_T = TypeVar("_T")


def run(coro: Coroutine[Any, Any, _T]) -> _T:
    return asyncio.run(coro)


class RecordingChecker:
    """Availability checker that answers from a fixed script.

    Every lookup is recorded. Once the script runs out, ``default`` is returned.
    """

    calls: list[tuple[str, str, str]]

    def __init__(self, answers: list[bool] | None = None, *, default: bool = False):
        self._answers = list(answers or [])
        self._default = default
        self.calls = []

    async def exists(self, collection_name: str, column_name: str, value: str) -> bool:
        self.calls.append((collection_name, column_name, value))
        if self._answers:
            return self._answers.pop(0)
        return self._default


class FirstDistinctTakenChecker:
    """Reports the first ``taken`` distinct values it sees as already in use."""

    seen: list[str]

    def __init__(self, taken: int) -> None:
        self._taken = taken
        self.seen = []

    async def exists(self, collection_name: str, column_name: str, value: str) -> bool:
        if value in self.seen:
            return True
        if len(self.seen) < self._taken:
            self.seen.append(value)
            return True
        return False


class BrokenChecker:
    calls: int

    def __init__(self) -> None:
        self.calls = 0

    async def exists(self, collection_name: str, column_name: str, value: str) -> bool:
        self.calls += 1
        raise ConnectionError("database unreachable")
