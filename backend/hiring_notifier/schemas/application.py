"""
Hiring Notifier Backend — Application Request/Response Schemas
===============================================================

What:  Pydantic models defining the API contract of /api/applications.
How:   FastAPI parses request bodies into these models and serializes
       responses from them (camelCase aliases on the wire).

Request fields are Optional on purpose: presence and format checks are
business rules applied by SubmissionService, so a missing `position`
produces the same 400 `validation_error` body as a malformed email.
"""

from typing import Dict, List, Optional

from pydantic import Field

from hiring_notifier.models.application import Application
from hiring_notifier.models.common import CamelModel
from hiring_notifier.schemas.notification import NotificationSummary


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ApplicationCreate(CamelModel):
    """Body of POST /api/applications (id, appliedAt and status are server-set)."""

    applicant_name: Optional[str] = None
    applicant_email: Optional[str] = None
    position: Optional[str] = None
    team: Optional[str] = None
    resume_url: Optional[str] = None
    cover_letter: Optional[str] = None


class StatusUpdate(CamelModel):
    """Body of PATCH /api/applications/{id}/status."""

    status: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ApplicationResponse(CamelModel):
    success: bool = True
    message: Optional[str] = None
    application: Application


class ApplicationListResponse(CamelModel):
    success: bool = True
    count: int = Field(description="Number of applications after filtering")
    applications: List[Application]


class SubmissionResponse(CamelModel):
    """
    What:  Response of a successful submission (HTTP 201).
    Who:   Returned by POST /api/applications.

    `notification` reports the outcome of the email dispatch; a failed
    delivery still yields 201 with `notification.sent = false`.
    """

    success: bool = True
    message: str = "Application submitted successfully"
    application: Application
    notification: NotificationSummary


class ApplicationStats(CamelModel):
    total: int
    by_status: Dict[str, int] = Field(default_factory=dict)
    by_team: Dict[str, int] = Field(default_factory=dict)
    recent: int = Field(description="Applications received in the last 7 days")


class StatsResponse(CamelModel):
    success: bool = True
    stats: ApplicationStats
