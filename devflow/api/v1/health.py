"""Liveness plus database reachability and the token settings this instance runs with."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from devflow import __version__
from devflow.core.config import Settings, get_settings
from devflow.core.database import check_db_connected, get_db
from devflow.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
    return HealthResponse(
        version=__version__,
        environment=settings.APP_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
        token_issuer=settings.JWT_ISSUER,
        token_ttl_minutes=settings.JWT_EXPIRE_MINUTES,
    )
