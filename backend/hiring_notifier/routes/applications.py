"""
Hiring Notifier Backend — Application Route Handlers
=====================================================

What:  POST/GET /api/applications, GET /api/applications/{id},
       PATCH /api/applications/{id}/status, GET /api/applications/stats/summary.
How:   Extract request data, delegate to SubmissionService or
       ApplicationRepository, return the response model. Errors are raised
       as application exceptions and formatted by the global handlers.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from hiring_notifier.dependencies import get_application_repository, get_submission_service
from hiring_notifier.exceptions import NotFoundError, ValidationError
from hiring_notifier.models.application import ApplicationStatus
from hiring_notifier.schemas.application import (
    ApplicationCreate,
    ApplicationListResponse,
    ApplicationResponse,
    StatsResponse,
    StatusUpdate,
    SubmissionResponse,
)
from hiring_notifier.schemas.common import ErrorResponse
from hiring_notifier.services.application_repository import ApplicationRepository
from hiring_notifier.services.submission_service import SubmissionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/applications", tags=["Applications"])


@router.post(
    "",
    status_code=201,
    response_model=SubmissionResponse,
    responses={
        201: {"description": "Application stored; notification outcome included"},
        400: {"description": "Invalid fields or unknown team", "model": ErrorResponse},
        500: {"description": "Storage or dispatch failure", "model": ErrorResponse},
    },
    summary="Submit a job application",
)
async def submit_application(
    payload: ApplicationCreate,
    service: SubmissionService = Depends(get_submission_service),
) -> SubmissionResponse:
    """
    Store a new application and notify the team's executives and leads.

    The response is sent only after the notification attempt finished, so
    `notification.sent` reflects what actually happened.
    """
    logger.info(
        "Received application: applicant=%s, team=%s",
        payload.applicant_name or "unknown",
        payload.team or "unknown",
    )
    return await service.submit(payload)


@router.get(
    "",
    response_model=ApplicationListResponse,
    summary="List applications",
)
async def list_applications(
    team: Optional[str] = Query(default=None, description="Team name (case-insensitive)"),
    status: Optional[str] = Query(default=None, description="Exact status value"),
    repository: ApplicationRepository = Depends(get_application_repository),
) -> ApplicationListResponse:
    applications = await repository.get_all(team=team, status=status)
    return ApplicationListResponse(count=len(applications), applications=applications)


@router.get(
    "/stats/summary",
    response_model=StatsResponse,
    summary="Application statistics",
)
async def application_stats(
    repository: ApplicationRepository = Depends(get_application_repository),
) -> StatsResponse:
    """Totals by status and team plus the number received in the last 7 days."""
    return StatsResponse(stats=await repository.get_stats())


@router.get(
    "/{application_id}",
    response_model=ApplicationResponse,
    responses={404: {"description": "Application not found", "model": ErrorResponse}},
    summary="Get one application",
)
async def get_application(
    application_id: str,
    repository: ApplicationRepository = Depends(get_application_repository),
) -> ApplicationResponse:
    application = await repository.get_by_id(application_id)
    if application is None:
        raise NotFoundError(resource="Application", resource_id=application_id)
    return ApplicationResponse(application=application)


@router.patch(
    "/{application_id}/status",
    response_model=ApplicationResponse,
    responses={
        400: {"description": "Missing or invalid status", "model": ErrorResponse},
        404: {"description": "Application not found", "model": ErrorResponse},
    },
    summary="Change an application's status",
)
async def update_application_status(
    application_id: str,
    body: StatusUpdate,
    repository: ApplicationRepository = Depends(get_application_repository),
) -> ApplicationResponse:
    """
    Move an application to one of: pending, reviewing, interview, accepted, rejected.

    The value is checked here, before the repository loads anything.
    """
    if not body.status:
        raise ValidationError(message="Status is required. Please provide a status value", field="status")

    valid = ApplicationStatus.values()
    if body.status not in valid:
        raise ValidationError(
            message=f"Status must be one of: {', '.join(valid)}",
            field="status",
            context={"allowed": valid},
        )

    updated = await repository.update_status(application_id, ApplicationStatus(body.status))
    return ApplicationResponse(
        message="Application status updated successfully",
        application=updated,
    )
