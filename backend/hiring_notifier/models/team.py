"""
Hiring Notifier Backend — Team Entity
======================================

What:  A hiring team and the people notified about its applications.
Who:   Managed by TeamDirectory; read by SubmissionService to resolve the
       `team` field of a submission and to collect notification recipients.

Recipients:
    executives + project_leads, in that order, duplicates kept.
"""

from typing import List, Optional

from pydantic import Field

from hiring_notifier.models.common import CamelModel, Timestamp, generate_id, now_timestamp


class Team(CamelModel):
    id: str = Field(default_factory=generate_id)
    name: str
    description: Optional[str] = None
    executives: List[str] = Field(default_factory=list)
    project_leads: List[str] = Field(default_factory=list)
    created_at: Timestamp = Field(default_factory=now_timestamp)

    def all_notification_emails(self) -> List[str]:
        return [*self.executives, *self.project_leads]


# Written to teams.json the first time the store starts with no teams file
DEFAULT_TEAMS = [
    {
        "id": "engineering",
        "name": "Engineering",
        "description": "Software development and technical roles",
        "executives": ["cto@company.com"],
        "projectLeads": ["eng-lead@company.com"],
    },
    {
        "id": "product",
        "name": "Product",
        "description": "Product management and design roles",
        "executives": ["cpo@company.com"],
        "projectLeads": ["product-lead@company.com"],
    },
    {
        "id": "marketing",
        "name": "Marketing",
        "description": "Marketing and growth roles",
        "executives": ["cmo@company.com"],
        "projectLeads": ["marketing-lead@company.com"],
    },
]


def default_teams() -> List[Team]:
    return [Team.model_validate(data) for data in DEFAULT_TEAMS]
