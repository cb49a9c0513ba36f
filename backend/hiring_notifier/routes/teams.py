"""
Hiring Notifier Backend — Team Route Handlers
==============================================

What:  CRUD over /api/teams plus the mail helpers
       POST /api/teams/{id}/test-email and GET /api/teams/email/status.
How:   Thin handlers over TeamDirectory and NotificationDispatcher.
       `/email/status` is declared before `/{team_id}` so it is not
       captured as a team id.
"""

from fastapi import APIRouter, Depends

from hiring_notifier.dependencies import (
    get_dispatcher,
    get_submission_service,
    get_team_directory,
)
from hiring_notifier.exceptions import NotFoundError
from hiring_notifier.schemas.common import ErrorResponse
from hiring_notifier.schemas.team import (
    EmailStatusResponse,
    EmailTestResponse,
    MessageResponse,
    TeamListResponse,
    TeamPayload,
    TeamResponse,
)
from hiring_notifier.services.notification_service import NotificationDispatcher
from hiring_notifier.services.submission_service import SubmissionService
from hiring_notifier.services.team_directory import TeamDirectory

router = APIRouter(prefix="/api/teams", tags=["Teams"])

_NOT_FOUND = {404: {"description": "Team not found", "model": ErrorResponse}}
_INVALID = {400: {"description": "Invalid team definition", "model": ErrorResponse}}


@router.get("", response_model=TeamListResponse, summary="List teams")
async def list_teams(
    teams: TeamDirectory = Depends(get_team_directory),
) -> TeamListResponse:
    all_teams = await teams.get_all()
    return TeamListResponse(count=len(all_teams), teams=all_teams)


@router.get(
    "/email/status",
    response_model=EmailStatusResponse,
    summary="Check the mail transport",
    description="Reports whether a mail transport is configured and reachable.",
)
async def email_status(
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> EmailStatusResponse:
    return EmailStatusResponse(email_service=await dispatcher.test_connection())


@router.get(
    "/{team_id}",
    response_model=TeamResponse,
    responses=_NOT_FOUND,
    summary="Get one team",
)
async def get_team(
    team_id: str,
    teams: TeamDirectory = Depends(get_team_directory),
) -> TeamResponse:
    team = await teams.get_by_id(team_id)
    if team is None:
        raise NotFoundError(resource="Team", resource_id=team_id)
    return TeamResponse(team=team)


@router.post(
    "",
    status_code=201,
    response_model=TeamResponse,
    responses=_INVALID,
    summary="Create a team",
)
async def create_team(
    payload: TeamPayload,
    teams: TeamDirectory = Depends(get_team_directory),
) -> TeamResponse:
    """
    Add a team. Names are unique (case-insensitive) and at least one
    executive or project lead address is required.
    """
    team = await teams.create(payload)
    return TeamResponse(message="Team created successfully", team=team)


@router.put(
    "/{team_id}",
    response_model=TeamResponse,
    responses={**_INVALID, **_NOT_FOUND},
    summary="Replace a team's definition",
)
async def update_team(
    team_id: str,
    payload: TeamPayload,
    teams: TeamDirectory = Depends(get_team_directory),
) -> TeamResponse:
    team = await teams.update(team_id, payload)
    return TeamResponse(message="Team updated successfully", team=team)


@router.delete(
    "/{team_id}",
    response_model=MessageResponse,
    responses=_NOT_FOUND,
    summary="Delete a team",
)
async def delete_team(
    team_id: str,
    teams: TeamDirectory = Depends(get_team_directory),
) -> MessageResponse:
    await teams.delete(team_id)
    return MessageResponse(message="Team deleted successfully")


@router.post(
    "/{team_id}/test-email",
    response_model=EmailTestResponse,
    responses=_NOT_FOUND,
    summary="Send a test notification to a team",
)
async def send_test_email(
    team_id: str,
    service: SubmissionService = Depends(get_submission_service),
) -> EmailTestResponse:
    """
    Sends a synthetic application notification to the team's recipients.
    Nothing is persisted; the delivery outcome is returned as `emailResult`.
    """
    result = await service.send_test_email(team_id)
    return EmailTestResponse(recipients=result.recipients, email_result=result)
