"""Health check routes."""

from datetime import datetime, timezone

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request
from pydantic import BaseModel

from levelup.config import Settings

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    status: str
    service: str
    environment: str
    store: str
    timestamp: datetime
    version: str


@router.get("/", response_model=HealthResponse)
@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request, settings: FromDishka[Settings]) -> HealthResponse:
    """Liveness probe. Served on ``/`` too, where the game client pings."""
    return HealthResponse(
        status="healthy",
        service=request.app.state.service,
        environment=settings.environment,
        store=settings.persistence.backend,
        timestamp=datetime.now(timezone.utc),
        version="0.1.0",
    )
