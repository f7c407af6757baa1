"""Health check endpoint with catalog store connectivity."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bgcatalog.core.config import get_settings
from bgcatalog.core.database import check_db_connected, get_db
from bgcatalog.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    """
    Report service status and whether the store is reachable.
    A store that does not answer marks the service as degraded.
    """
    settings = get_settings()
    connected = check_db_connected(db)
    return HealthResponse(
        status="ok" if connected else "degraded",
        environment=settings.APP_ENV,
        database="connected" if connected else "disconnected",
        token_expiry_minutes=settings.JWT_EXPIRE_MINUTES,
    )
