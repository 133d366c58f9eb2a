from fastapi import APIRouter, Depends

from ..codes import CodeAllocator, describe, get_code_allocator
from ..models import CodeInfo

router = APIRouter(prefix="/codes", tags=["dev-tools"])


@router.get("/info", response_model=list[CodeInfo])
async def list_code_info(*, allocator: CodeAllocator = Depends(get_code_allocator)):
    return [describe(kind, allocator.table) for kind in allocator.table]
