import logging
from functools import lru_cache
from types import MappingProxyType
from typing import Iterator, Mapping

from ..models import EntityKind, KindConfig

_LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 100

DEFAULT_KIND_CONFIGS: Mapping[EntityKind, KindConfig] = MappingProxyType(
    {
        EntityKind.SCHOOL: KindConfig(
            total_length=6,
            prefix_char="S",
            max_attempts=DEFAULT_MAX_ATTEMPTS,
            collection_name="school_codes",
            uniqueness_column="code",
        ),
        EntityKind.CLASS: KindConfig(
            total_length=6,
            prefix_char="C",
            max_attempts=DEFAULT_MAX_ATTEMPTS,
            collection_name="classes",
            uniqueness_column="school_code",
        ),
    }
)


class KindConfigError(ValueError):
    ...


class KindConfigTable:
    """Immutable lookup from entity kind to its code parameters.

    All configuration defects are detected here, once, when the table is built:
    missing kinds (unless ``require_all`` is disabled) and kinds whose codes
    would share the same prefix and length, which would make kind detection
    ambiguous.
    """

    _configs: Mapping[EntityKind, KindConfig]

    def __init__(
        self,
        configs: Mapping[EntityKind, KindConfig] = DEFAULT_KIND_CONFIGS,
        *,
        require_all: bool = True,
    ) -> None:
        if require_all:
            missing = [kind.value for kind in EntityKind if kind not in configs]
            if missing:
                raise KindConfigError(f"no code configuration for {missing}")

        kind_by_shape: dict[tuple[str, int], EntityKind] = {}
        for kind, config in configs.items():
            shape = (config.prefix_char, config.total_length)
            if (other := kind_by_shape.get(shape)) is not None:
                raise KindConfigError(
                    f"{kind.value} and {other.value} codes share prefix "
                    f"{shape[0]!r} and length {shape[1]}"
                )
            kind_by_shape[shape] = kind

        self._configs = MappingProxyType(dict(configs))

    def __contains__(self, kind: object) -> bool:
        return kind in self._configs

    def __iter__(self) -> Iterator[EntityKind]:
        return iter(self._configs)

    def items(self) -> Iterator[tuple[EntityKind, KindConfig]]:
        return iter(self._configs.items())

    def get(self, kind: EntityKind) -> KindConfig | None:
        return self._configs.get(kind)

    def config_for(self, kind: EntityKind) -> KindConfig:
        try:
            return self._configs[kind]
        except KeyError:
            _LOGGER.error("requested code configuration for unconfigured kind %s", kind)
            raise KindConfigError(f"no code configuration for {kind}") from None


@lru_cache()
def get_kind_config_table() -> KindConfigTable:
    return KindConfigTable()
