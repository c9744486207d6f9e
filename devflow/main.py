"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from devflow import __version__
from devflow.api.deps import get_password_hasher
from devflow.api.v1 import router as v1_router
from devflow.core.config import settings
from devflow.core.security import ThreadedPasswordHasher
from devflow.services.auth import dummy_hash

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Startup: compute the login dummy hash so the first unknown-email login
    costs the same as a wrong password. Shutdown: stop the hashing pool.
    """
    hasher = app.dependency_overrides.get(get_password_hasher, get_password_hasher)()
    dummy_hash(hasher)
    logger.info("Password hasher ready")
    yield
    if isinstance(hasher, ThreadedPasswordHasher):
        hasher.shutdown()
        logger.info("Password hashing pool stopped")
    get_password_hasher.cache_clear()


app = FastAPI(
    title="DevFlow API",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "DevFlow API"}
