"""
Hiring Notifier Backend — FastAPI Dependencies
===============================================

What:  Providers that hand route handlers the services built by create_app().
How:   Services live on `app.state`; each provider reads one of them from the
       current request. Tests build their own app (and services) per test.

Example usage in a route:
    @router.get("/teams")
    async def list_teams(teams: TeamDirectory = Depends(get_team_directory)):
        return await teams.get_all()
"""

from fastapi import Request

from hiring_notifier.services.application_repository import ApplicationRepository
from hiring_notifier.services.notification_service import NotificationDispatcher
from hiring_notifier.services.submission_service import SubmissionService
from hiring_notifier.services.team_directory import TeamDirectory
from hiring_notifier.storage import RecordStore


def get_record_store(request: Request) -> RecordStore:
    return request.app.state.record_store


def get_team_directory(request: Request) -> TeamDirectory:
    return request.app.state.team_directory


def get_application_repository(request: Request) -> ApplicationRepository:
    return request.app.state.application_repository


def get_dispatcher(request: Request) -> NotificationDispatcher:
    return request.app.state.dispatcher


def get_submission_service(request: Request) -> SubmissionService:
    return request.app.state.submission_service
