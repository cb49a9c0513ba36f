"""
Hiring Notifier Backend — Notification Dispatcher
==================================================

What:  Composes the "new application" email and delivers or simulates it.
How:   Builds a subject plus plain-text and HTML bodies, wraps them in a
       multipart/alternative EmailMessage, and hands it to the configured
       MailTransport. Without a transport the message is only logged.
Who:   Called by SubmissionService for each submission and for team
       test emails; `test_connection()` backs GET /api/teams/email/status.
When:  After the application is persisted, before the HTTP response.

Dispatch State Machine (one call):
    Pending ──▶ Simulated   no transport configured (success, mock-<millis> id)
            ├─▶ Sent        transport accepted the message (success, Message-ID)
            └─▶ Failed      message could not be composed, transport raised
                            DispatchError, or the send timed out
                            (success=false, error text, no id)

    A failed delivery is a normal return value. It is never retried and
    never raised to the caller.

Concurrency:
    dispatch() schedules the work as an asyncio.Task and returns it; the
    submission handler awaits the task before responding.
"""

import asyncio
import logging
import time
from email.message import EmailMessage
from email.utils import formataddr
from html import escape
from typing import List, Optional, Sequence

from hiring_notifier.exceptions import DispatchError
from hiring_notifier.models.application import Application
from hiring_notifier.models.team import Team
from hiring_notifier.schemas.notification import (
    ConnectionStatus,
    DispatchOutcome,
    NotificationResult,
)
from hiring_notifier.services.mail_base import MailTransport

logger = logging.getLogger(__name__)

APPLIED_AT_DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"


def build_test_application(team: Team) -> Application:
    """Synthetic application used by POST /api/teams/{id}/test-email. Not persisted."""
    return Application(
        applicant_name="Test Applicant",
        applicant_email="test@example.com",
        position="Test Position",
        team=team.name,
        cover_letter=(
            "This is a test email notification to verify the email system is working correctly."
        ),
        resume_url="https://example.com/test-resume.pdf",
    )


class NotificationDispatcher:
    """
    Renders and sends application notifications.

    Args:
        transport: Outbound transport, or None for simulated sends
        app_name: Name of the deployed application, shown in the footer
        sender_address: Address used in the From header
        sender_name: Display name used in the From header
        timeout: Optional bound in seconds on one delivery; None waits forever
    """

    def __init__(
        self,
        transport: Optional[MailTransport],
        app_name: str,
        sender_address: str = "",
        sender_name: str = "",
        timeout: Optional[float] = None,
    ):
        self.transport = transport
        self.app_name = app_name
        self.sender_address = sender_address
        self.sender_name = sender_name
        self.timeout = timeout

        if transport is None:
            logger.warning(
                "Email configuration not found. Email notifications will be logged only."
            )

    @property
    def configured(self) -> bool:
        return self.transport is not None

    # ══════════════════════════════════════════════════════════════════════
    # Composition
    # ══════════════════════════════════════════════════════════════════════

    @staticmethod
    def build_subject(application: Application) -> str:
        # Header values must stay on one line
        subject = f"New Application: {application.position} - {application.applicant_name}"
        return " ".join(subject.split())

    def footer(self) -> str:
        return f"This is an automated notification from the {self.app_name}"

    def render_text(self, application: Application) -> str:
        lines = [
            "New Job Application Received",
            "",
            "Applicant Information:",
            f"Name: {application.applicant_name}",
            f"Email: {application.applicant_email}",
            f"Position: {application.position}",
            f"Team: {application.team}",
            f"Applied At: {application.applied_at.strftime(APPLIED_AT_DISPLAY_FORMAT)}",
            "",
        ]
        if application.cover_letter:
            lines += ["Cover Letter:", application.cover_letter, ""]
        if application.resume_url:
            lines += [f"Resume: {application.resume_url}", ""]
        lines += ["---", self.footer()]
        return "\n".join(lines)

    def render_html(self, application: Application) -> str:
        name = escape(application.applicant_name)
        email = escape(application.applicant_email)
        parts = [
            '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">',
            '  <h2 style="color: #333; border-bottom: 2px solid #007bff; padding-bottom: 10px;">'
            "New Job Application Received</h2>",
            '  <div style="background-color: #f8f9fa; padding: 20px; border-radius: 5px; margin: 20px 0;">',
            '    <h3 style="color: #007bff; margin-top: 0;">Applicant Information</h3>',
            f"    <p><strong>Name:</strong> {name}</p>",
            f'    <p><strong>Email:</strong> <a href="mailto:{email}">{email}</a></p>',
            f"    <p><strong>Position:</strong> {escape(application.position)}</p>",
            f"    <p><strong>Team:</strong> {escape(application.team)}</p>",
            "    <p><strong>Applied At:</strong> "
            f"{application.applied_at.strftime(APPLIED_AT_DISPLAY_FORMAT)}</p>",
            "  </div>",
        ]
        if application.cover_letter:
            parts += [
                '  <div style="background-color: #fff; padding: 20px; border-left: 4px solid #007bff; margin: 20px 0;">',
                '    <h3 style="color: #333; margin-top: 0;">Cover Letter</h3>',
                f'    <p style="white-space: pre-wrap;">{escape(application.cover_letter)}</p>',
                "  </div>",
            ]
        if application.resume_url:
            parts += [
                '  <div style="margin: 20px 0;">',
                '    <h3 style="color: #333;">Resume</h3>',
                f'    <p><a href="{escape(application.resume_url)}" '
                'style="color: #007bff; text-decoration: none;">View Resume</a></p>',
                "  </div>",
            ]
        parts += [
            '  <div style="background-color: #e9ecef; padding: 15px; border-radius: 5px; margin-top: 30px; text-align: center;">',
            f'    <p style="margin: 0; color: #6c757d; font-size: 12px;">{escape(self.footer())}</p>',
            "  </div>",
            "</div>",
        ]
        return "\n".join(parts)

    def compose(self, application: Application, recipients: Sequence[str]) -> EmailMessage:
        """Build the multipart/alternative message addressed to every recipient."""
        message = EmailMessage()
        message["Subject"] = self.build_subject(application)
        if self.sender_address:
            message["From"] = formataddr((self.sender_name, self.sender_address))
        if recipients:
            message["To"] = ", ".join(recipients)
        message.set_content(self.render_text(application))
        message.add_alternative(self.render_html(application), subtype="html")
        return message

    # ══════════════════════════════════════════════════════════════════════
    # Delivery
    # ══════════════════════════════════════════════════════════════════════

    def dispatch(
        self, application: Application, recipients: Sequence[str]
    ) -> "asyncio.Task[NotificationResult]":
        """Schedule a notification and return the task; the caller awaits it."""
        return asyncio.create_task(
            self.send_application_notification(application, recipients),
            name=f"notify-{application.id}",
        )

    async def send_application_notification(
        self, application: Application, recipients: Sequence[str]
    ) -> NotificationResult:
        recipients = list(recipients)
        try:
            message = self.compose(application, recipients)
        except (ValueError, TypeError) as e:
            # email.headerregistry rejects CR/LF and malformed addresses
            logger.error("Could not compose notification for application %s: %s", application.id, e)
            return NotificationResult(
                success=False,
                outcome=DispatchOutcome.FAILED,
                message=f"Could not compose notification: {e}",
                recipients=recipients,
            )

        if self.transport is None:
            return self._simulate(message, recipients)

        if not recipients:
            logger.warning(
                "No recipients for application %s (%s); nothing sent",
                application.id,
                application.team,
            )
            return NotificationResult(
                success=False,
                outcome=DispatchOutcome.FAILED,
                message="No notification recipients configured for this team",
                recipients=recipients,
            )

        try:
            send = self.transport.send(message)
            if self.timeout is not None:
                message_id = await asyncio.wait_for(send, timeout=self.timeout)
            else:
                message_id = await send
        except asyncio.TimeoutError:
            logger.error(
                "Email delivery timed out after %.1fs for %s",
                self.timeout,
                ", ".join(recipients),
            )
            return NotificationResult(
                success=False,
                outcome=DispatchOutcome.FAILED,
                message=f"Email delivery timed out after {self.timeout:g} seconds",
                recipients=recipients,
            )
        except DispatchError as e:
            logger.error("Failed to send email: %s | Context: %s", e.message, e.context)
            return NotificationResult(
                success=False,
                outcome=DispatchOutcome.FAILED,
                message=e.message,
                recipients=recipients,
            )

        logger.info("Email sent successfully to: %s (%s)", ", ".join(recipients), message_id)
        return NotificationResult(
            success=True,
            outcome=DispatchOutcome.SENT,
            message="Email sent successfully",
            message_id=message_id,
            recipients=recipients,
        )

    def _simulate(self, message: EmailMessage, recipients: List[str]) -> NotificationResult:
        text_part = message.get_body(preferencelist=("plain",))
        logger.info("EMAIL NOTIFICATION (not sent - no mail transport configured):")
        logger.info("To: %s", ", ".join(recipients))
        logger.info("Subject: %s", message["Subject"])
        logger.info("Content:\n%s", text_part.get_content() if text_part else "")
        return NotificationResult(
            success=True,
            outcome=DispatchOutcome.SIMULATED,
            message="Email logged (mail transport not configured)",
            message_id=f"mock-{int(time.time() * 1000)}",
            recipients=recipients,
        )

    async def send_test_notification(self, team: Team) -> NotificationResult:
        """Dispatch a synthetic application to the team's recipients and wait."""
        application = build_test_application(team)
        return await self.dispatch(application, team.all_notification_emails())

    async def test_connection(self) -> ConnectionStatus:
        if self.transport is None:
            return ConnectionStatus(success=False, message="Email transport not configured")
        try:
            await self.transport.verify()
        except DispatchError as e:
            return ConnectionStatus(success=False, message=e.message)
        return ConnectionStatus(success=True, message="Email service connection successful")
