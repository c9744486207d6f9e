"""Health check response."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    service: str = "DevFlow API"
    version: str
    environment: str = Field(description="APP_ENV, e.g. dev or prod")
    database: Literal["connected", "disconnected"]
    token_issuer: str = Field(description="iss claim this instance issues and accepts")
    token_ttl_minutes: int
