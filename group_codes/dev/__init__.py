from fastapi import APIRouter

from . import codes

router = APIRouter(prefix="/dev-tools", tags=["dev-tools"])

router.include_router(codes.router)
