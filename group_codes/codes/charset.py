import re

# upper-case alphanumerics without the easily confused 0/O and 1/I
# (lower-case l never survives normalization, so upper-case L stays in)
ALPHABET: str = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
AMBIGUOUS_CHARS: frozenset[str] = frozenset("0O1Il")


def alphabet_size() -> int:
    return len(ALPHABET)


def body_pattern(length: int) -> re.Pattern[str]:
    return re.compile(f"[{ALPHABET}]{{{length}}}")


def code_space_size(body_length: int) -> int:
    """Number of distinct codes that share one prefix and length."""
    return alphabet_size() ** body_length

