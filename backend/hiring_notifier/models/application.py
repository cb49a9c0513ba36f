"""
Hiring Notifier Backend — Application Entity
=============================================

What:  A job application as stored in `applications.json`.
Who:   Created by SubmissionService, persisted by ApplicationRepository,
       rendered into notifications by NotificationDispatcher.

Lifecycle:
    1. Created on submission (status = 'pending', appliedAt = now)
    2. Status moves between the five allowed values via PATCH .../status
    3. Never deleted
"""

from enum import Enum
from typing import Optional

from pydantic import Field

from hiring_notifier.models.common import CamelModel, Timestamp, generate_id, now_timestamp


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    REVIEWING = "reviewing"
    INTERVIEW = "interview"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @classmethod
    def values(cls) -> list:
        return [status.value for status in cls]


class Application(CamelModel):
    """
    Stored application record.

    `id`, `applied_at` are assigned at construction and never changed
    afterwards; `status` changes only through ApplicationRepository.update_status.
    """

    id: str = Field(default_factory=generate_id)
    applicant_name: str
    applicant_email: str
    position: str
    team: str
    resume_url: Optional[str] = None
    cover_letter: Optional[str] = None
    applied_at: Timestamp = Field(default_factory=now_timestamp)
    status: ApplicationStatus = ApplicationStatus.PENDING
