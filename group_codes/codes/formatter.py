import random

from ..models import CodeInfo, EntityKind, KindConfig
from .charset import ALPHABET
from .kind_config import KindConfigTable, get_kind_config_table

_DEFAULT_RNG = random.SystemRandom()


def generate(
    kind: EntityKind,
    table: KindConfigTable | None = None,
    *,
    rng: random.Random | None = None,
) -> str:
    """Build a fresh candidate code for ``kind``.

    The prefix is followed by characters drawn independently and uniformly from
    the alphabet. Nothing is checked here, the candidate still has to be
    validated before it can be handed out.
    """
    config = (table or get_kind_config_table()).config_for(kind)
    rng = rng or _DEFAULT_RNG
    body = "".join(rng.choice(ALPHABET) for _ in range(config.body_length))
    return config.prefix_char + body


def normalize(raw: str) -> str:
    return raw.strip().upper()


def detect_kind(code: str, table: KindConfigTable | None = None) -> EntityKind | None:
    if not code:
        return None

    first_char = code[0].upper()
    for kind, config in (table or get_kind_config_table()).items():
        if first_char == config.prefix_char and len(code) == config.total_length:
            return kind
    return None


def format_hint(config: KindConfig) -> str:
    return f"{config.prefix_char}{'X' * config.body_length} ({config.total_length} chars)"


def describe(kind: EntityKind, table: KindConfigTable | None = None) -> CodeInfo:
    config = (table or get_kind_config_table()).config_for(kind)
    return CodeInfo(
        kind=kind, config=config, charset=ALPHABET, format=format_hint(config)
    )
