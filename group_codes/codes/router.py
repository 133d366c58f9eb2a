import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from ..models import AllocationResult, CodeErrorKind, EntityKind, ErrorPayload
from .allocator import CodeAllocator, get_code_allocator
from .formatter import detect_kind, format_hint, normalize

__all__ = ["router"]

_LOGGER = logging.getLogger(__name__)

router = APIRouter(prefix="/codes", tags=["codes"])


def _format_hints(allocator: CodeAllocator) -> list[str]:
    return [format_hint(config) for _, config in allocator.table.items()]


def _allocation_failed(kind: EntityKind, result: AllocationResult) -> HTTPException:
    match result.error_kind:
        case CodeErrorKind.ATTEMPTS_EXHAUSTED:
            status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        case _:
            status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(
        status_code, detail=ErrorPayload.allocation_failed(kind, result).model_dump()
    )


def _normalize_or_400(raw: str) -> str:
    code = normalize(raw)
    if not code:
        raise HTTPException(
            status.HTTP_400_BAD_REQUEST, detail=ErrorPayload.empty_code().model_dump()
        )
    return code


class ValidateCodeRequest(BaseModel):
    code: str


class ValidateCodeResponse(BaseModel):
    success: bool
    is_valid: bool
    is_available: bool
    kind: EntityKind | None
    original_code: str
    normalized_code: str
    conflicting_record: Any | None = None
    error: str | None = None


@router.post("/validate", response_model=ValidateCodeResponse)
async def validate_code(
    body: ValidateCodeRequest,
    *,
    allocator: CodeAllocator = Depends(get_code_allocator),
):
    normalized = _normalize_or_400(body.code)
    kind = detect_kind(normalized, allocator.table)
    if kind is None:
        return ValidateCodeResponse(
            success=False,
            is_valid=False,
            is_available=False,
            kind=None,
            original_code=body.code,
            normalized_code=normalized,
            error="unknown code format, expected one of: "
            + ", ".join(_format_hints(allocator)),
        )

    result = await allocator.validator.validate(normalized, kind)
    return ValidateCodeResponse(
        success=result.is_valid and result.is_available,
        is_valid=result.is_valid,
        is_available=result.is_available,
        kind=kind,
        original_code=body.code,
        normalized_code=normalized,
        conflicting_record=result.conflicting_record,
        error=result.error,
    )


class RegenerateCodeRequest(BaseModel):
    old_code: str


class RegenerateCodeResponse(BaseModel):
    old_code: str
    new_code: str
    kind: EntityKind
    attempts_used: int


@router.post(
    "/regenerate",
    response_model=RegenerateCodeResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {},
        status.HTTP_503_SERVICE_UNAVAILABLE: {},
    },
)
async def regenerate_code(
    body: RegenerateCodeRequest,
    *,
    allocator: CodeAllocator = Depends(get_code_allocator),
):
    old_code = _normalize_or_400(body.old_code)
    kind = detect_kind(old_code, allocator.table)
    if kind is None:
        raise HTTPException(
            status.HTTP_400_BAD_REQUEST,
            detail=ErrorPayload.unknown_code_format(
                code=old_code, hints=_format_hints(allocator)
            ).model_dump(),
        )

    result = await allocator.regenerate(old_code, kind)
    if not result.succeeded or result.code is None:
        raise _allocation_failed(kind, result)
    return RegenerateCodeResponse(
        old_code=old_code,
        new_code=result.code,
        kind=kind,
        attempts_used=result.attempts_used,
    )


class AllocateCodeResponse(BaseModel):
    code: str
    kind: EntityKind
    attempts_used: int


@router.post(
    "/{kind}",
    response_model=AllocateCodeResponse,
    responses={
        status.HTTP_500_INTERNAL_SERVER_ERROR: {},
        status.HTTP_503_SERVICE_UNAVAILABLE: {},
    },
)
async def allocate_code(
    kind: EntityKind, *, allocator: CodeAllocator = Depends(get_code_allocator)
):
    result = await allocator.allocate(kind)
    if not result.succeeded or result.code is None:
        raise _allocation_failed(kind, result)

    _LOGGER.debug("allocated %s code %s", kind.value, result.code)
    return AllocateCodeResponse(
        code=result.code, kind=kind, attempts_used=result.attempts_used
    )
