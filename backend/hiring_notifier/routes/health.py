"""
Hiring Notifier Backend — Health Check and Service Info Routes
===============================================================

What:  GET /health for probes and GET / describing the API.
How:   /health checks that the data directory exists and is writable and
       reports whether mail goes out for real or is only logged. It never
       sends mail and never touches the collections.

Status levels:
    healthy:   data directory usable
    degraded:  data directory missing or not writable (still HTTP 200)
"""

import logging
import os

from fastapi import APIRouter, Depends

from hiring_notifier import __version__
from hiring_notifier.dependencies import get_dispatcher, get_record_store
from hiring_notifier.models.common import now_timestamp, TIMESTAMP_FORMAT
from hiring_notifier.schemas.common import HealthResponse, ServiceInfoResponse
from hiring_notifier.services.notification_service import NotificationDispatcher
from hiring_notifier.storage import RecordStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Returns the status of the backend, its data directory and its mail mode.",
)
async def health_check(
    store: RecordStore = Depends(get_record_store),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> HealthResponse:
    storage_status = "available"
    overall = "healthy"

    # ── Check Data Directory ──────────────────────────────────────────────
    if not (store.data_dir.is_dir() and os.access(store.data_dir, os.W_OK)):
        storage_status = "unavailable"
        overall = "degraded"
        logger.warning("Health check: data directory unusable: %s", store.data_dir)

    return HealthResponse(
        status=overall,
        timestamp=now_timestamp().strftime(TIMESTAMP_FORMAT),
        version=__version__,
        storage=storage_status,
        mail="configured" if dispatcher.configured else "simulated",
    )


@router.get("/", response_model=ServiceInfoResponse, summary="Service information")
async def service_info() -> ServiceInfoResponse:
    return ServiceInfoResponse(
        message="Executive Hiring Notification System API",
        version=__version__,
        endpoints={
            "health": "/health",
            "applications": "/api/applications",
            "teams": "/api/teams",
            "docs": "/docs",
        },
    )
