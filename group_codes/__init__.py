import importlib.metadata

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import codes, dev

PROJECT_NAME = "group_codes"

try:
    VERSION = importlib.metadata.version(PROJECT_NAME)
except importlib.metadata.PackageNotFoundError:
    VERSION = "unknown"  # type: ignore

app = FastAPI(
    title="Group Code Service",
    version=VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(codes.router)
app.include_router(dev.router)
