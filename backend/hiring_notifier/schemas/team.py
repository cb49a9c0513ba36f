"""
Hiring Notifier Backend — Team Request/Response Schemas
========================================================

What:  API contract of /api/teams.
"""

from typing import List, Optional

from pydantic import Field

from hiring_notifier.models.common import CamelModel
from hiring_notifier.models.team import Team
from hiring_notifier.schemas.notification import ConnectionStatus, NotificationResult


class TeamPayload(CamelModel):
    """
    Body of POST /api/teams and PUT /api/teams/{id}.

    `id` is honoured on create only; `createdAt` is always server-managed.
    """

    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    executives: List[str] = Field(default_factory=list)
    project_leads: List[str] = Field(default_factory=list)


class TeamResponse(CamelModel):
    success: bool = True
    message: Optional[str] = None
    team: Team


class TeamListResponse(CamelModel):
    success: bool = True
    count: int
    teams: List[Team]


class MessageResponse(CamelModel):
    success: bool = True
    message: str


class EmailTestResponse(CamelModel):
    success: bool = True
    message: str = "Test email sent successfully"
    recipients: List[str]
    email_result: NotificationResult


class EmailStatusResponse(CamelModel):
    success: bool = True
    email_service: ConnectionStatus
