"""
Hiring Notifier Backend — Submission Service (Business Logic Orchestrator)
==========================================================================

What:  Coordinates validate → resolve team → persist → notify for a new
       application, and the team test-email flow.
How:   Composes TeamDirectory, ApplicationRepository and NotificationDispatcher.
Who:   Called by POST /api/applications and POST /api/teams/{id}/test-email.

Orchestration Flow (POST /api/applications):
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────────┐
    │ Validate │───▶│ Resolve     │───▶│ Persist      │───▶│ Dispatch +   │
    │ fields   │    │ team (name) │    │ (Repository) │    │ await result │
    └──────────┘    └─────────────┘    └──────────────┘    └──────────────┘

    On failure at any step:
    - Validation / unknown team → ValidationError (400), nothing written
    - Persist fails             → StorageError (500)
    - Delivery fails            → 201 with notification.sent = false
    - Dispatch itself breaks    → DispatchError (500); the application stays saved
"""

import logging
from typing import List

from hiring_notifier.exceptions import DispatchError, NotFoundError, ValidationError
from hiring_notifier.models.application import Application
from hiring_notifier.models.common import is_valid_email
from hiring_notifier.models.team import Team
from hiring_notifier.schemas.application import ApplicationCreate, SubmissionResponse
from hiring_notifier.schemas.notification import NotificationResult, NotificationSummary
from hiring_notifier.services.application_repository import ApplicationRepository
from hiring_notifier.services.notification_service import NotificationDispatcher
from hiring_notifier.services.team_directory import TeamDirectory

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = {
    "applicant_name": "applicantName",
    "applicant_email": "applicantEmail",
    "position": "position",
    "team": "team",
}


class SubmissionService:
    def __init__(
        self,
        teams: TeamDirectory,
        applications: ApplicationRepository,
        dispatcher: NotificationDispatcher,
    ):
        self.teams = teams
        self.applications = applications
        self.dispatcher = dispatcher

    @staticmethod
    def validate_submission(payload: ApplicationCreate) -> Application:
        """
        Check required fields and email format, then build the entity.

        Raises:
            ValidationError: listing every missing field, or the bad email
        """
        missing = [
            alias
            for attr, alias in REQUIRED_FIELDS.items()
            if not (getattr(payload, attr) or "").strip()
        ]
        if missing:
            raise ValidationError(
                message=f"Missing required fields: {', '.join(missing)}",
                field=missing[0],
                context={"missing": missing},
            )

        email = payload.applicant_email.strip()
        if not is_valid_email(email):
            raise ValidationError(message="Invalid email format", field="applicantEmail")

        return Application(
            applicant_name=payload.applicant_name.strip(),
            applicant_email=email,
            position=payload.position.strip(),
            team=payload.team.strip(),
            resume_url=payload.resume_url or None,
            cover_letter=payload.cover_letter or None,
        )

    async def _resolve_team(self, name: str) -> Team:
        team = await self.teams.get_by_name(name)
        if team is None:
            available = [t.name for t in await self.teams.get_all()]
            raise ValidationError(
                message=f'Team "{name}" not found. Please use one of the existing teams.',
                field="team",
                context={"availableTeams": available},
            )
        return team

    async def _notify(self, application: Application, recipients: List[str]) -> NotificationResult:
        task = self.dispatcher.dispatch(application, recipients)
        try:
            return await task
        except Exception as e:
            logger.error(
                "Notification dispatch crashed for application %s: %s",
                application.id,
                str(e),
                exc_info=True,
            )
            raise DispatchError(
                message="The application was saved but the notification could not be dispatched.",
                context={"application_id": application.id, "error_type": type(e).__name__},
            )

    async def submit(self, payload: ApplicationCreate) -> SubmissionResponse:
        """
        Complete workflow for one incoming application.

        Returns:
            SubmissionResponse with the stored application and the
            notification outcome folded in.

        Raises:
            ValidationError: invalid fields or unknown team (nothing persisted)
            StorageError: the applications collection could not be written
            DispatchError: the notification step failed unexpectedly
        """
        application = self.validate_submission(payload)
        team = await self._resolve_team(application.team)

        saved = await self.applications.create(application)
        recipients = self.teams.get_all_notification_emails(team)
        result = await self._notify(saved, recipients)

        logger.info(
            "Application notification %s for %s (%s) to team %s; recipients: %s",
            result.outcome.value,
            saved.applicant_name,
            saved.position,
            team.name,
            ", ".join(recipients),
        )
        return SubmissionResponse(
            application=saved,
            notification=NotificationSummary.from_result(result),
        )

    async def send_test_email(self, team_id: str) -> NotificationResult:
        """
        Send the synthetic test notification for one team.

        Raises:
            NotFoundError: no team with `team_id`
        """
        team = await self.teams.get_by_id(team_id)
        if team is None:
            raise NotFoundError(resource="Team", resource_id=team_id)
        result = await self.dispatcher.send_test_notification(team)
        logger.info("Test email %s for team %s", result.outcome.value, team.name)
        return result
