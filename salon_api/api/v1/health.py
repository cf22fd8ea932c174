"""Health check and API index endpoints."""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from salon_api.api.deps import OptionalAuth
from salon_api.core.database import check_db_connected, get_db
from salon_api.schemas.common import ApiResponse
from salon_api.schemas.health import ApiIndex, HealthStatus

router = APIRouter()
index_router = APIRouter()


@index_router.get("", response_model=ApiResponse[ApiIndex])
def api_index(request: Request, caller: OptionalAuth) -> ApiResponse[ApiIndex]:
    """Versioned API banner. Public; reports the caller's role when a valid token is sent."""
    index = ApiIndex(
        version=request.app.version,
        authenticated=caller is not None,
        role=caller.role if caller is not None else None,
    )
    return ApiResponse[ApiIndex](message="Salon Booking API", data=index)


@router.get("", response_model=ApiResponse[HealthStatus])
def get_health(request: Request, db: Annotated[Session, Depends(get_db)]) -> ApiResponse[HealthStatus]:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"
    health = HealthStatus(
        environment=request.app.state.settings.APP_ENV,
        database=db_status,
        timestamp=datetime.now(UTC),
    )
    return ApiResponse[HealthStatus](message="Server is healthy", data=health)
