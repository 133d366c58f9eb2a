import asyncio
import logging
from typing import Any, Iterator, Protocol, runtime_checkable

_LOGGER = logging.getLogger(__name__)


@runtime_checkable
class AvailabilityChecker(Protocol):
    async def exists(self, collection_name: str, column_name: str, value: str) -> bool:
        """Return whether a record with ``column_name == value`` exists.

        Any exception raised here is treated by the validator as an
        infrastructure failure.
        """
        ...


@runtime_checkable
class RecordLookup(Protocol):
    async def get(self, collection_name: str, column_name: str, value: str) -> Any:
        ...


class CodeAlreadyClaimedError(Exception):
    collection_name: str
    column_name: str
    value: str

    def __init__(self, collection_name: str, column_name: str, value: str) -> None:
        super().__init__(f"{collection_name}.{column_name} already holds {value!r}")
        self.collection_name = collection_name
        self.column_name = column_name
        self.value = value


class InMemoryCodeRegistry:
    """Process-local store of issued codes.

    ``claim`` enforces uniqueness per collection column so callers can treat a
    conflicting write as a signal to allocate again.
    """

    _records: dict[tuple[str, str], dict[str, Any]]
    _lock: asyncio.Lock

    def __init__(self) -> None:
        self._records = {}
        self._lock = asyncio.Lock()

    def _column(self, collection_name: str, column_name: str) -> dict[str, Any]:
        return self._records.setdefault((collection_name, column_name), {})

    async def exists(self, collection_name: str, column_name: str, value: str) -> bool:
        return value in self._column(collection_name, column_name)

    async def get(self, collection_name: str, column_name: str, value: str) -> Any:
        return self._column(collection_name, column_name).get(value)

    async def claim(
        self,
        collection_name: str,
        column_name: str,
        value: str,
        record: Any = None,
    ) -> None:
        async with self._lock:
            column = self._column(collection_name, column_name)
            if value in column:
                raise CodeAlreadyClaimedError(collection_name, column_name, value)
            column[value] = record if record is not None else {column_name: value}
        _LOGGER.debug("claimed %s in %s.%s", value, collection_name, column_name)

    async def release(self, collection_name: str, column_name: str, value: str) -> bool:
        async with self._lock:
            column = self._column(collection_name, column_name)
            if value not in column:
                return False
            del column[value]
        return True

    def iter_codes(self, collection_name: str, column_name: str) -> Iterator[str]:
        return iter(list(self._column(collection_name, column_name)))

    def count(self, collection_name: str, column_name: str) -> int:
        return len(self._column(collection_name, column_name))
