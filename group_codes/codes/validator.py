import logging
import re

from ..models import EntityKind, KindConfig, ValidationResult
from .charset import ALPHABET, body_pattern
from .kind_config import KindConfigTable, get_kind_config_table
from .registry import AvailabilityChecker, RecordLookup

_LOGGER = logging.getLogger(__name__)


class CodeValidator:
    """Checks the shape of a code and whether it is still free.

    Shape checks (length, prefix, alphabet) never touch the checker. Only a
    well-formed code is looked up, and a failed lookup is reported as
    unavailable.
    """

    _checker: AvailabilityChecker
    _table: KindConfigTable
    _patterns: dict[EntityKind, re.Pattern[str]]

    def __init__(
        self, checker: AvailabilityChecker, table: KindConfigTable | None = None
    ) -> None:
        self._checker = checker
        self._table = table or get_kind_config_table()
        self._patterns = {
            kind: body_pattern(config.body_length) for kind, config in self._table.items()
        }

    @property
    def table(self) -> KindConfigTable:
        return self._table

    def check_format(self, code: str, kind: EntityKind) -> ValidationResult | None:
        """Return a failed result if ``code`` is malformed, ``None`` otherwise."""
        config = self._table.get(kind)
        if config is None:
            return ValidationResult.unconfigured(kind)

        if not code or len(code) != config.total_length:
            return ValidationResult.malformed(
                f"code must be {config.total_length} characters long"
            )
        if code[0].upper() != config.prefix_char:
            return ValidationResult.malformed(
                f"{kind.value} codes must start with {config.prefix_char!r}"
            )
        if self._patterns[kind].fullmatch(code, 1) is None:
            return ValidationResult.malformed(
                f"code may only contain characters from {ALPHABET!r} after the prefix"
            )
        return None

    async def _lookup_conflict(self, config: KindConfig, code: str):
        if isinstance(self._checker, RecordLookup):
            record = await self._checker.get(
                config.collection_name, config.uniqueness_column, code
            )
            if record is not None:
                return record
        return {config.uniqueness_column: code}

    async def validate(self, code: str, kind: EntityKind) -> ValidationResult:
        if (malformed := self.check_format(code, kind)) is not None:
            return malformed

        config = self._table.config_for(kind)
        # the store only ever holds the upper-case prefix
        code = config.prefix_char + code[1:]
        _LOGGER.debug("checking availability of %s code %s", kind.value, code)
        try:
            exists = await self._checker.exists(
                config.collection_name, config.uniqueness_column, code
            )
            if not exists:
                return ValidationResult.available()
            conflicting_record = await self._lookup_conflict(config, code)
        # a failed lookup counts as taken
        # pylint: disable-next=broad-except
        except Exception as exc:
            _LOGGER.warning(
                "availability check for %s code %s failed: %r", kind.value, code, exc
            )
            return ValidationResult.check_failed(
                f"availability check failed: {exc}"
            )

        return ValidationResult.taken(conflicting_record)
