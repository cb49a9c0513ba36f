"""
Hiring Notifier Backend — Notification Dispatcher Tests
========================================================

What we test:
    ✅ Simulated sends (no transport): success with a mock-<millis> id
    ✅ Real sends: one multipart message to every recipient
    ✅ Delivery failures and timeouts become failed results, never exceptions
    ✅ Empty recipient list with a transport: failed, transport not called
    ✅ Text/HTML rendering of optional sections and escaping
    ✅ Connection status reporting
"""

import asyncio
from email.message import EmailMessage

import pytest

from hiring_notifier.models.application import Application
from hiring_notifier.models.team import Team
from hiring_notifier.schemas.notification import DispatchOutcome
from hiring_notifier.services.mail_base import MailTransport
from hiring_notifier.services.notification_service import NotificationDispatcher


class SlowTransport(MailTransport):
    async def send(self, message: EmailMessage) -> str:
        await asyncio.sleep(5)
        return "<late@test.local>"

    async def verify(self) -> None:
        return None


@pytest.fixture
def application():
    return Application(
        applicant_name="Jane Doe",
        applicant_email="jane@example.com",
        position="Backend Engineer",
        team="Engineering",
    )


RECIPIENTS = ["cto@company.com", "eng-lead@company.com"]


class TestSimulatedSend:
    @pytest.mark.asyncio
    async def test_simulated_send_succeeds(self, simulated_dispatcher, application):
        result = await simulated_dispatcher.send_application_notification(application, RECIPIENTS)

        assert result.success is True
        assert result.outcome is DispatchOutcome.SIMULATED
        assert result.message_id.startswith("mock-")
        assert result.message_id[len("mock-"):].isdigit()
        assert result.recipients == RECIPIENTS

    @pytest.mark.asyncio
    async def test_simulated_send_with_no_recipients_still_succeeds(self, simulated_dispatcher, application):
        result = await simulated_dispatcher.send_application_notification(application, [])
        assert result.success is True
        assert result.recipients == []

    @pytest.mark.asyncio
    async def test_multiline_fields_still_succeed(self, simulated_dispatcher, application):
        application = application.model_copy(
            update={"applicant_name": "Jane\nDoe", "position": "Backend\rEngineer"}
        )

        result = await simulated_dispatcher.send_application_notification(application, RECIPIENTS)

        assert result.success is True
        assert result.outcome is DispatchOutcome.SIMULATED
        assert simulated_dispatcher.build_subject(application) == (
            "New Application: Backend Engineer - Jane Doe"
        )

    def test_not_configured(self, simulated_dispatcher):
        assert simulated_dispatcher.configured is False


class TestTransportSend:
    @pytest.mark.asyncio
    async def test_one_message_to_all_recipients(self, dispatcher, recording_transport, application):
        result = await dispatcher.send_application_notification(application, RECIPIENTS)

        assert result.success is True
        assert result.outcome is DispatchOutcome.SENT
        assert result.message_id == "<1@test.local>"
        assert len(recording_transport.sent) == 1

        message = recording_transport.sent[0]
        assert message["To"] == "cto@company.com, eng-lead@company.com"
        assert message["Subject"] == "New Application: Backend Engineer - Jane Doe"
        assert "hiring@company.com" in message["From"]
        assert message.get_body(preferencelist=("html",)) is not None
        assert message.get_body(preferencelist=("plain",)) is not None

    @pytest.mark.asyncio
    async def test_dispatch_returns_awaitable_task(self, dispatcher, application):
        task = dispatcher.dispatch(application, RECIPIENTS)
        assert isinstance(task, asyncio.Task)
        result = await task
        assert result.success is True

    @pytest.mark.asyncio
    async def test_empty_recipients_not_sent(self, dispatcher, recording_transport, application):
        result = await dispatcher.send_application_notification(application, [])

        assert result.success is False
        assert result.outcome is DispatchOutcome.FAILED
        assert result.message == "No notification recipients configured for this team"
        assert recording_transport.sent == []

    @pytest.mark.asyncio
    async def test_delivery_failure_is_a_result(self, failing_transport, application):
        dispatcher = NotificationDispatcher(transport=failing_transport, app_name="Test")

        result = await dispatcher.send_application_notification(application, RECIPIENTS)

        assert result.success is False
        assert result.outcome is DispatchOutcome.FAILED
        assert result.message == "550 Mailbox unavailable"
        assert result.message_id is None
        assert failing_transport.attempts == 1

    @pytest.mark.asyncio
    async def test_timeout_is_a_failed_result(self, application):
        dispatcher = NotificationDispatcher(transport=SlowTransport(), app_name="Test", timeout=0.05)

        result = await dispatcher.send_application_notification(application, RECIPIENTS)

        assert result.success is False
        assert "timed out" in result.message

    @pytest.mark.asyncio
    async def test_multiline_name_keeps_subject_on_one_line(
        self, dispatcher, recording_transport, application
    ):
        application = application.model_copy(update={"applicant_name": "Jane\r\nDoe"})

        result = await dispatcher.send_application_notification(application, RECIPIENTS)

        assert result.success is True
        assert recording_transport.sent[0]["Subject"] == "New Application: Backend Engineer - Jane Doe"

    @pytest.mark.asyncio
    async def test_uncomposable_message_is_a_failed_result(self, recording_transport, application):
        dispatcher = NotificationDispatcher(
            transport=recording_transport,
            app_name="Test",
            sender_address="hiring@x.com\nBcc: leak@x.com",
        )

        result = await dispatcher.send_application_notification(application, RECIPIENTS)

        assert result.success is False
        assert result.outcome is DispatchOutcome.FAILED
        assert result.message.startswith("Could not compose notification")
        assert recording_transport.sent == []

    @pytest.mark.asyncio
    async def test_test_notification_uses_synthetic_applicant(self, dispatcher, recording_transport):
        team = Team(name="Design", executives=["cd@x.com"], project_leads=["lead@x.com"])

        result = await dispatcher.send_test_notification(team)

        assert result.recipients == ["cd@x.com", "lead@x.com"]
        assert recording_transport.sent[0]["Subject"] == "New Application: Test Position - Test Applicant"


class TestRendering:
    def test_optional_sections_omitted(self, dispatcher, application):
        text = dispatcher.render_text(application)

        assert "Name: Jane Doe" in text
        assert "Team: Engineering" in text
        assert "Cover Letter:" not in text
        assert "Resume:" not in text
        assert text.endswith("This is an automated notification from the Executive Hiring Notification System")

    def test_optional_sections_present(self, dispatcher, application):
        application = application.model_copy(
            update={"cover_letter": "Hello team", "resume_url": "https://example.com/cv.pdf"}
        )

        text = dispatcher.render_text(application)
        html = dispatcher.render_html(application)

        assert "Cover Letter:\nHello team" in text
        assert "Resume: https://example.com/cv.pdf" in text
        assert "View Resume" in html
        assert 'href="https://example.com/cv.pdf"' in html

    def test_html_escapes_applicant_input(self, dispatcher, application):
        application = application.model_copy(update={"cover_letter": "<script>alert(1)</script>"})

        html = dispatcher.render_html(application)

        assert "<script>" not in html
        assert "&lt;script&gt;" in html


class TestConnection:
    @pytest.mark.asyncio
    async def test_without_transport(self, simulated_dispatcher):
        status = await simulated_dispatcher.test_connection()
        assert status.success is False
        assert status.message == "Email transport not configured"

    @pytest.mark.asyncio
    async def test_reachable_transport(self, dispatcher, recording_transport):
        status = await dispatcher.test_connection()
        assert status.success is True
        assert recording_transport.verify_calls == 1

    @pytest.mark.asyncio
    async def test_unreachable_transport(self, failing_transport):
        dispatcher = NotificationDispatcher(transport=failing_transport, app_name="Test")
        status = await dispatcher.test_connection()
        assert status.success is False
        assert status.message == "Connection refused"
