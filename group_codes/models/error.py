from typing import Any

from pydantic import BaseModel, Field

from .code import AllocationResult, CodeErrorKind, EntityKind


class ErrorPayload(BaseModel):
    type: str
    message: str | None
    extra: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def empty_code(cls):
        return cls(type="input:empty", message="a code is required")

    @classmethod
    def unknown_code_format(cls, *, code: str, hints: list[str]):
        return cls(
            type="input:format",
            message="the code doesn't match any known format",
            extra={"code": code, "formats": hints},
        )

    @classmethod
    def allocation_failed(cls, kind: EntityKind, result: AllocationResult):
        error_kind = result.error_kind or CodeErrorKind.ATTEMPTS_EXHAUSTED
        return cls(
            type=f"allocation:{error_kind.value}",
            message=result.error,
            extra={"kind": kind.value, "attempts_used": result.attempts_used},
        )


__all__ = [
    ErrorPayload.__name__,
]
