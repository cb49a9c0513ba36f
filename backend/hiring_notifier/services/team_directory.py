"""
Hiring Notifier Backend — Team Directory
=========================================

What:  Lookup and management of hiring teams.
How:   Every call re-reads `teams.json` through the RecordStore; there is no
       cache, so an edit made by another request is visible immediately.
Who:   Used by team routes (CRUD) and by SubmissionService (resolve a team by
       name, collect recipients).

Validation rules (create and update):
    1. name is required and non-blank
    2. at least one of executives / projectLeads is non-empty
    3. every address in both lists is a valid email
    4. no other team has the same name (case-insensitive)
"""

import logging
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

from hiring_notifier.exceptions import NotFoundError, StorageError, ValidationError
from hiring_notifier.models.common import is_valid_email
from hiring_notifier.models.team import Team
from hiring_notifier.schemas.team import TeamPayload
from hiring_notifier.storage import TEAMS, RecordStore

logger = logging.getLogger(__name__)


def _to_team(record: dict) -> Team:
    try:
        return Team.model_validate(record)
    except PydanticValidationError as e:
        raise StorageError(
            message="Stored team record is malformed",
            cause=str(e),
            context={"collection": TEAMS, "record_id": record.get("id")},
        )


class TeamDirectory:
    """Read access to teams plus validated create/update/delete."""

    def __init__(self, store: RecordStore):
        self.store = store

    # ── Lookups ───────────────────────────────────────────────────────────

    async def get_all(self) -> List[Team]:
        records = await self.store.load_collection(TEAMS)
        return [_to_team(record) for record in records]

    async def get_by_id(self, team_id: str) -> Optional[Team]:
        for team in await self.get_all():
            if team.id == team_id:
                return team
        return None

    async def get_by_name(self, name: str) -> Optional[Team]:
        """Case-insensitive exact match on the team name."""
        wanted = name.lower()
        for team in await self.get_all():
            if team.name.lower() == wanted:
                return team
        return None

    @staticmethod
    def get_all_notification_emails(team: Team) -> List[str]:
        """executives followed by project leads; order and duplicates kept."""
        return team.all_notification_emails()

    # ── Validation ────────────────────────────────────────────────────────

    @staticmethod
    def validate_payload(payload: TeamPayload) -> None:
        """
        Apply the team business rules to an incoming payload.

        Raises:
            ValidationError: with `field` set to the offending attribute
        """
        if not payload.name or not payload.name.strip():
            raise ValidationError(message="Team name is required", field="name")

        if not payload.executives and not payload.project_leads:
            raise ValidationError(
                message="At least one executive or project lead email is required",
                field="executives",
            )

        for email in [*payload.executives, *payload.project_leads]:
            if not is_valid_email(email):
                raise ValidationError(
                    message=f"Invalid email format: {email}",
                    field="executives" if email in payload.executives else "projectLeads",
                    context={"email": email},
                )

    # ── Mutations ─────────────────────────────────────────────────────────

    async def create(self, payload: TeamPayload) -> Team:
        """
        Validate and persist a new team.

        An explicit `id` in the payload is kept (seed-style slugs); otherwise
        one is generated.

        Raises:
            ValidationError: invalid payload, duplicate name or duplicate id
            StorageError: teams collection could not be read or written
        """
        self.validate_payload(payload)
        fields = {
            "name": payload.name.strip(),
            "description": payload.description,
            "executives": list(payload.executives),
            "project_leads": list(payload.project_leads),
        }
        if payload.id:
            fields["id"] = payload.id
        team = Team(**fields)

        async with self.store.modify(TEAMS) as records:
            for existing in records:
                if str(existing.get("name", "")).lower() == team.name.lower():
                    raise ValidationError(
                        message=f'A team with the name "{team.name}" already exists',
                        field="name",
                    )
                if existing.get("id") == team.id:
                    raise ValidationError(
                        message=f'A team with the ID "{team.id}" already exists',
                        field="id",
                    )
            records.append(team.to_record())

        logger.info("New team created: %s (%s)", team.name, team.id)
        return team

    async def update(self, team_id: str, payload: TeamPayload) -> Team:
        """
        Replace a team's editable fields, keeping its id and createdAt.

        Raises:
            NotFoundError: no team with `team_id`
            ValidationError: invalid payload or name taken by another team
        """
        self.validate_payload(payload)
        name = payload.name.strip()

        async with self.store.modify(TEAMS) as records:
            index = next((i for i, r in enumerate(records) if r.get("id") == team_id), None)
            if index is None:
                raise NotFoundError(resource="Team", resource_id=team_id)

            for record in records:
                if record.get("id") != team_id and str(record.get("name", "")).lower() == name.lower():
                    raise ValidationError(
                        message=f'Another team with the name "{name}" already exists',
                        field="name",
                    )

            current = _to_team(records[index])
            updated = current.model_copy(
                update={
                    "name": name,
                    "description": payload.description,
                    "executives": list(payload.executives),
                    "project_leads": list(payload.project_leads),
                }
            )
            records[index] = updated.to_record()

        logger.info("Team updated: %s (%s)", updated.name, updated.id)
        return updated

    async def delete(self, team_id: str) -> Team:
        """Hard-delete a team. Raises NotFoundError for an unknown id."""
        async with self.store.modify(TEAMS) as records:
            index = next((i for i, r in enumerate(records) if r.get("id") == team_id), None)
            if index is None:
                raise NotFoundError(resource="Team", resource_id=team_id)
            removed = _to_team(records.pop(index))

        logger.info("Team deleted: %s (%s)", removed.name, removed.id)
        return removed
