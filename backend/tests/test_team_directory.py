"""
Hiring Notifier Backend — Team Directory Tests
===============================================

What we test:
    ✅ Seeded teams and case-insensitive name lookup
    ✅ Recipient list order (executives first, duplicates kept)
    ✅ Create/update validation: name, recipients, email format, uniqueness
    ✅ Update keeps id, createdAt and list position
    ✅ Delete and NotFoundError for unknown ids
"""

import pytest

from hiring_notifier.exceptions import NotFoundError, ValidationError
from hiring_notifier.models.team import Team
from hiring_notifier.schemas.team import TeamPayload


def payload(**overrides) -> TeamPayload:
    data = {"name": "Design", "executives": ["cd@x.com"], "projectLeads": []}
    data.update(overrides)
    return TeamPayload.model_validate(data)


class TestLookups:
    @pytest.mark.asyncio
    async def test_seed_teams_available(self, team_directory):
        teams = await team_directory.get_all()
        assert [t.name for t in teams] == ["Engineering", "Product", "Marketing"]

    @pytest.mark.asyncio
    async def test_get_by_name_ignores_case(self, team_directory):
        team = await team_directory.get_by_name("eNgInEeRiNg")
        assert team is not None
        assert team.id == "engineering"

    @pytest.mark.asyncio
    async def test_unknown_lookups_return_none(self, team_directory):
        assert await team_directory.get_by_id("nope") is None
        assert await team_directory.get_by_name("Design") is None

    def test_notification_emails_keep_order_and_duplicates(self):
        team = Team(
            name="Ops",
            executives=["a@x.com", "b@x.com"],
            project_leads=["a@x.com", "c@x.com"],
        )
        assert team.all_notification_emails() == ["a@x.com", "b@x.com", "a@x.com", "c@x.com"]


class TestCreate:
    @pytest.mark.asyncio
    async def test_create_persists_team(self, team_directory):
        team = await team_directory.create(payload(description="Brand and UX"))

        assert team.id
        assert team.created_at is not None
        stored = await team_directory.get_by_id(team.id)
        assert stored == team

    @pytest.mark.asyncio
    async def test_explicit_id_is_kept(self, team_directory):
        team = await team_directory.create(payload(id="design"))
        assert team.id == "design"

    @pytest.mark.asyncio
    async def test_duplicate_id_rejected(self, team_directory):
        with pytest.raises(ValidationError) as exc_info:
            await team_directory.create(payload(id="engineering"))
        assert exc_info.value.field == "id"

    @pytest.mark.asyncio
    async def test_duplicate_name_rejected_case_insensitively(self, team_directory):
        with pytest.raises(ValidationError) as exc_info:
            await team_directory.create(payload(name="PRODUCT"))
        assert exc_info.value.message == 'A team with the name "PRODUCT" already exists'

    @pytest.mark.asyncio
    async def test_name_required(self, team_directory):
        with pytest.raises(ValidationError) as exc_info:
            await team_directory.create(payload(name="   "))
        assert exc_info.value.field == "name"

    @pytest.mark.asyncio
    async def test_at_least_one_recipient_required(self, team_directory):
        with pytest.raises(ValidationError) as exc_info:
            await team_directory.create(payload(executives=[], projectLeads=[]))
        assert exc_info.value.message == "At least one executive or project lead email is required"

    @pytest.mark.asyncio
    async def test_invalid_email_reported(self, team_directory):
        with pytest.raises(ValidationError) as exc_info:
            await team_directory.create(payload(projectLeads=["not-an-email"]))
        assert exc_info.value.message == "Invalid email format: not-an-email"
        assert exc_info.value.field == "projectLeads"

    @pytest.mark.asyncio
    async def test_trailing_newline_in_email_rejected(self, team_directory):
        with pytest.raises(ValidationError) as exc_info:
            await team_directory.create(payload(executives=["cd@x.com\n"]))
        assert exc_info.value.field == "executives"
        assert await team_directory.get_by_name("Design") is None

    @pytest.mark.asyncio
    async def test_failed_create_writes_nothing(self, team_directory):
        with pytest.raises(ValidationError):
            await team_directory.create(payload(name="Engineering"))
        assert len(await team_directory.get_all()) == 3


class TestUpdateAndDelete:
    @pytest.mark.asyncio
    async def test_update_keeps_identity_and_position(self, team_directory):
        before = await team_directory.get_by_id("product")

        updated = await team_directory.update(
            "product",
            payload(name="Product & Design", executives=["cpo@company.com"], projectLeads=["pd@x.com"]),
        )

        assert updated.id == "product"
        assert updated.created_at == before.created_at
        assert updated.project_leads == ["pd@x.com"]
        names = [t.name for t in await team_directory.get_all()]
        assert names == ["Engineering", "Product & Design", "Marketing"]

    @pytest.mark.asyncio
    async def test_update_may_keep_own_name(self, team_directory):
        updated = await team_directory.update("marketing", payload(name="marketing"))
        assert updated.name == "marketing"

    @pytest.mark.asyncio
    async def test_update_rejects_name_of_other_team(self, team_directory):
        with pytest.raises(ValidationError) as exc_info:
            await team_directory.update("marketing", payload(name="Engineering"))
        assert exc_info.value.message == 'Another team with the name "Engineering" already exists'

    @pytest.mark.asyncio
    async def test_update_unknown_team(self, team_directory):
        with pytest.raises(NotFoundError):
            await team_directory.update("nope", payload())

    @pytest.mark.asyncio
    async def test_delete_removes_team(self, team_directory):
        removed = await team_directory.delete("marketing")

        assert removed.name == "Marketing"
        assert await team_directory.get_by_id("marketing") is None
        assert len(await team_directory.get_all()) == 2

    @pytest.mark.asyncio
    async def test_delete_unknown_team(self, team_directory):
        with pytest.raises(NotFoundError) as exc_info:
            await team_directory.delete("nope")
        assert exc_info.value.message == "Team with ID 'nope' was not found"
