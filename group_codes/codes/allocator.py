import logging
import random
from functools import lru_cache

from ..models import AllocationResult, CodeErrorKind, EntityKind
from .formatter import generate
from .kind_config import KindConfigTable
from .registry import InMemoryCodeRegistry
from .validator import CodeValidator

_LOGGER = logging.getLogger(__name__)

ATTEMPTS_EXHAUSTED = "attempts exhausted"


class CodeAllocator:
    """Produces codes that are well-formed and not yet in use.

    Each call runs a short, strictly sequential generate-then-validate loop. The
    allocator never writes anything: persisting the returned code (and treating
    a uniqueness violation on write as a reason to allocate again) is up to the
    caller.
    """

    _validator: CodeValidator
    _table: KindConfigTable
    _rng: random.Random | None

    def __init__(
        self,
        validator: CodeValidator,
        table: KindConfigTable | None = None,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self._validator = validator
        self._table = table or validator.table
        self._rng = rng

    @property
    def validator(self) -> CodeValidator:
        return self._validator

    @property
    def table(self) -> KindConfigTable:
        return self._table

    async def allocate(
        self, kind: EntityKind, *, max_attempts: int | None = None
    ) -> AllocationResult:
        config = self._table.get(kind)
        if config is None:
            _LOGGER.error("can't allocate a code for unconfigured kind %s", kind)
            return AllocationResult.failure(
                f"no code configuration for {kind}",
                error_kind=CodeErrorKind.CONFIG_DEFECT,
                attempts_used=0,
            )

        if max_attempts is None:
            max_attempts = config.max_attempts
        max_attempts = max(max_attempts, 1)

        for attempt in range(1, max_attempts + 1):
            candidate = generate(kind, self._table, rng=self._rng)
            result = await self._validator.validate(candidate, kind)

            if not result.is_valid:
                # a generated code that fails the format check is a config bug, retrying won't help
                _LOGGER.error(
                    "generated %s code %s is malformed: %s",
                    kind.value,
                    candidate,
                    result.error,
                )
                return AllocationResult.failure(
                    result.error,
                    error_kind=result.error_kind or CodeErrorKind.MALFORMED_INPUT,
                    attempts_used=attempt,
                )

            if result.is_available:
                _LOGGER.debug(
                    "allocated %s code %s after %d attempt(s)",
                    kind.value,
                    candidate,
                    attempt,
                )
                return AllocationResult.success(candidate, attempts_used=attempt)

            _LOGGER.debug(
                "attempt %d: %s code %s unavailable (%s)",
                attempt,
                kind.value,
                candidate,
                result.error_kind,
            )

        _LOGGER.warning(
            "gave up allocating a %s code after %d attempts", kind.value, max_attempts
        )
        return AllocationResult.failure(
            ATTEMPTS_EXHAUSTED,
            error_kind=CodeErrorKind.ATTEMPTS_EXHAUSTED,
            attempts_used=max_attempts,
        )

    async def regenerate(
        self, old_code: str, kind: EntityKind, *, max_attempts: int | None = None
    ) -> AllocationResult:
        result = await self.allocate(kind, max_attempts=max_attempts)
        if result.succeeded:
            _LOGGER.info(
                "regenerated %s code %s -> %s (attempts: %d)",
                kind.value,
                old_code,
                result.code,
                result.attempts_used,
            )
        else:
            _LOGGER.warning(
                "failed to regenerate %s code %s: %s", kind.value, old_code, result.error
            )
        return result


@lru_cache()
def get_code_registry() -> InMemoryCodeRegistry:
    return InMemoryCodeRegistry()


@lru_cache()
def get_code_allocator() -> CodeAllocator:
    return CodeAllocator(CodeValidator(get_code_registry()))
