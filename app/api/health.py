"""Health check endpoint with database connectivity and user counts."""

import logging
import time
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_user_store
from app.core.database import check_db_connected
from app.models import USER_TYPE_NGO, USER_TYPE_VOLUNTEER
from app.schemas.health import HealthResponse, HealthStatus, UserCounts
from app.services.credential_store import UserStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    store: Annotated[UserStore, Depends(get_user_store)],
) -> HealthResponse:
    """
    Return service health, database connectivity and account totals.
    Used by load balancers and monitoring; counts are zero when the DB is down.
    """
    connected = check_db_connected(db)
    counts = UserCounts()
    if connected:
        try:
            by_type = store.count_by_type()
            counts = UserCounts(
                total=sum(by_type.values()),
                volunteers=by_type[USER_TYPE_VOLUNTEER],
                ngos=by_type[USER_TYPE_NGO],
            )
        except SQLAlchemyError as e:
            logger.warning("Health check could not count users: %s", type(e).__name__)

    return HealthResponse(
        status=HealthStatus(
            database="connected" if connected else "disconnected",
            timestamp=datetime.now(UTC),
            uptime=round(time.monotonic() - request.app.state.started_at, 3),
        ),
        users=counts,
    )
