"""
Hiring Notifier Backend — Notification Result Schemas
======================================================

What:  Value objects describing the outcome of one notification dispatch.

Outcomes:
    sent       → delivered to the transport, message_id assigned by it
    simulated  → no transport configured, content logged, mock-<millis> id
    failed     → transport error; message holds the error text, no id
"""

from enum import Enum
from typing import List, Optional

from hiring_notifier.models.common import CamelModel


class DispatchOutcome(str, Enum):
    SENT = "sent"
    SIMULATED = "simulated"
    FAILED = "failed"


class NotificationResult(CamelModel):
    success: bool
    outcome: DispatchOutcome
    message: str
    message_id: Optional[str] = None
    recipients: List[str] = []


class NotificationSummary(CamelModel):
    """The `notification` block of a submission response."""

    sent: bool
    recipients: List[str]
    details: str
    message_id: Optional[str] = None

    @classmethod
    def from_result(cls, result: NotificationResult) -> "NotificationSummary":
        return cls(
            sent=result.success,
            recipients=list(result.recipients),
            details=result.message,
            message_id=result.message_id,
        )


class ConnectionStatus(CamelModel):
    success: bool
    message: str
