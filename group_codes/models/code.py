import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EntityKind(str, enum.Enum):
    SCHOOL = "school"
    CLASS = "class"


class CodeErrorKind(str, enum.Enum):
    MALFORMED_INPUT = "malformed_input"
    COLLISION = "collision"
    INFRASTRUCTURE = "infrastructure"
    ATTEMPTS_EXHAUSTED = "attempts_exhausted"
    CONFIG_DEFECT = "config_defect"


class KindConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_length: int = Field(ge=2)
    prefix_char: str = Field(min_length=1, max_length=1)
    max_attempts: int = Field(ge=1)
    collection_name: str = Field(min_length=1)
    uniqueness_column: str = Field(min_length=1)

    @field_validator("prefix_char")
    @classmethod
    def _prefix_must_be_upper(cls, value: str) -> str:
        if value != value.upper():
            raise ValueError("prefix must be an upper-case character")
        return value

    @property
    def body_length(self) -> int:
        return self.total_length - 1


class ValidationResult(BaseModel):
    is_valid: bool
    is_available: bool
    conflicting_record: Any | None = None
    error: str | None = None
    error_kind: CodeErrorKind | None = None

    @classmethod
    def malformed(cls, error: str):
        return cls(
            is_valid=False,
            is_available=False,
            error=error,
            error_kind=CodeErrorKind.MALFORMED_INPUT,
        )

    @classmethod
    def unconfigured(cls, kind: EntityKind):
        return cls(
            is_valid=False,
            is_available=False,
            error=f"no code configuration for {kind.value}",
            error_kind=CodeErrorKind.CONFIG_DEFECT,
        )

    @classmethod
    def available(cls):
        return cls(is_valid=True, is_available=True)

    @classmethod
    def taken(cls, conflicting_record: Any):
        return cls(
            is_valid=True,
            is_available=False,
            conflicting_record=conflicting_record,
            error="code is already in use",
            error_kind=CodeErrorKind.COLLISION,
        )

    @classmethod
    def check_failed(cls, error: str):
        # a failed lookup counts as "taken"
        return cls(
            is_valid=True,
            is_available=False,
            error=error,
            error_kind=CodeErrorKind.INFRASTRUCTURE,
        )


class AllocationResult(BaseModel):
    succeeded: bool
    code: str | None = None
    attempts_used: int = 0
    error: str | None = None
    error_kind: CodeErrorKind | None = None

    @classmethod
    def success(cls, code: str, *, attempts_used: int):
        return cls(succeeded=True, code=code, attempts_used=attempts_used)

    @classmethod
    def failure(
        cls, error: str | None, *, error_kind: CodeErrorKind, attempts_used: int
    ):
        return cls(
            succeeded=False,
            error=error,
            error_kind=error_kind,
            attempts_used=attempts_used,
        )


class CodeInfo(BaseModel):
    kind: EntityKind
    config: KindConfig
    charset: str
    format: str = Field(examples=["SXXXXX (6 chars)"])


__all__ = [
    EntityKind.__name__,
    CodeErrorKind.__name__,
    KindConfig.__name__,
    ValidationResult.__name__,
    AllocationResult.__name__,
    CodeInfo.__name__,
]
