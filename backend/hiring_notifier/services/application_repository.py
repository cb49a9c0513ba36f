"""
Hiring Notifier Backend — Application Repository
=================================================

What:  Create, list, fetch and status-update operations over applications.
How:   Built on RecordStore; mutations run inside `store.modify()` so each
       read-modify-write cycle is serialized per collection.
Who:   Called by SubmissionService (create) and the application routes
       (list, fetch, status transition, stats).

The repository trusts its callers for two rules:
    - the application's team exists   (checked by SubmissionService)
    - a new status is one of the five (checked by the status route)
"""

import logging
from collections import Counter
from datetime import timedelta
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

from hiring_notifier.exceptions import NotFoundError, StorageError
from hiring_notifier.models.application import Application, ApplicationStatus
from hiring_notifier.models.common import now_timestamp
from hiring_notifier.schemas.application import ApplicationStats
from hiring_notifier.storage import APPLICATIONS, RecordStore

logger = logging.getLogger(__name__)

# Window used for the "recent" figure of the stats summary
RECENT_DAYS = 7


def _to_application(record: dict) -> Application:
    try:
        return Application.model_validate(record)
    except PydanticValidationError as e:
        raise StorageError(
            message="Stored application record is malformed",
            cause=str(e),
            context={"collection": APPLICATIONS, "record_id": record.get("id")},
        )


class ApplicationRepository:
    def __init__(self, store: RecordStore):
        self.store = store

    async def create(self, application: Application) -> Application:
        """Append the application to the collection and return it unchanged."""
        async with self.store.modify(APPLICATIONS) as records:
            records.append(application.to_record())
        logger.info(
            "Application %s stored for %s (%s)",
            application.id,
            application.team,
            application.position,
        )
        return application

    async def get_all(
        self,
        team: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[Application]:
        """
        Applications in insertion order, optionally filtered.

        Args:
            team:   exact team name, compared case-insensitively
            status: exact status value
        """
        applications = [_to_application(r) for r in await self.store.load_collection(APPLICATIONS)]
        if team:
            applications = [a for a in applications if a.team.lower() == team.lower()]
        if status:
            applications = [a for a in applications if a.status.value == status]
        return applications

    async def get_by_id(self, application_id: str) -> Optional[Application]:
        for application in await self.get_all():
            if application.id == application_id:
                return application
        return None

    async def update_status(self, application_id: str, status: ApplicationStatus) -> Application:
        """
        Set the status of one application and persist the collection.

        Raises:
            NotFoundError: no application with that id
        """
        async with self.store.modify(APPLICATIONS) as records:
            index = next((i for i, r in enumerate(records) if r.get("id") == application_id), None)
            if index is None:
                raise NotFoundError(resource="Application", resource_id=application_id)
            updated = _to_application(records[index]).model_copy(update={"status": ApplicationStatus(status)})
            records[index] = updated.to_record()

        logger.info("Application %s status set to %s", application_id, updated.status.value)
        return updated

    async def get_recent(self, days: int) -> List[Application]:
        """Applications whose appliedAt is strictly after now - days."""
        cutoff = now_timestamp() - timedelta(days=days)
        return [a for a in await self.get_all() if a.applied_at > cutoff]

    async def get_stats(self) -> ApplicationStats:
        applications = await self.get_all()
        recent = await self.get_recent(RECENT_DAYS)
        return ApplicationStats(
            total=len(applications),
            by_status=dict(Counter(a.status.value for a in applications)),
            by_team=dict(Counter(a.team for a in applications)),
            recent=len(recent),
        )
