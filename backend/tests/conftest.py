"""
Hiring Notifier Backend — Test Configuration (conftest.py)
===========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── data_dir: temporary directory holding the JSON collections
    ├── test_settings: Settings pointing at data_dir, mail unset
    ├── record_store / team_directory / application_repository
    ├── recording_transport: in-memory MailTransport that keeps sent messages
    ├── failing_transport: MailTransport whose every send is rejected
    ├── dispatcher: NotificationDispatcher over recording_transport
    ├── simulated_dispatcher: NotificationDispatcher without a transport
    ├── submission_service: SubmissionService wired to the above
    └── test_client / simulated_client: HTTPX AsyncClient over create_app()
"""

import os
from email.message import EmailMessage

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Set before any app import: the module-level app must never pick up real
# SMTP credentials from the developer's environment
os.environ["MAIL_HOST"] = ""
os.environ["MAIL_USERNAME"] = ""
os.environ["MAIL_PASSWORD"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

from hiring_notifier.config import Settings  # noqa: E402
from hiring_notifier.exceptions import DispatchError  # noqa: E402
from hiring_notifier.main import create_app  # noqa: E402
from hiring_notifier.services.application_repository import ApplicationRepository  # noqa: E402
from hiring_notifier.services.mail_base import MailTransport  # noqa: E402
from hiring_notifier.services.notification_service import NotificationDispatcher  # noqa: E402
from hiring_notifier.services.submission_service import SubmissionService  # noqa: E402
from hiring_notifier.services.team_directory import TeamDirectory  # noqa: E402
from hiring_notifier.storage import RecordStore  # noqa: E402


class RecordingTransport(MailTransport):
    """Accepts every message and keeps it for inspection."""

    def __init__(self):
        self.sent = []
        self.verify_calls = 0

    async def send(self, message: EmailMessage) -> str:
        self.sent.append(message)
        return f"<{len(self.sent)}@test.local>"

    async def verify(self) -> None:
        self.verify_calls += 1


class FailingTransport(MailTransport):
    """Rejects every message the way an SMTP server refusing recipients would."""

    def __init__(self, error: str = "550 Mailbox unavailable"):
        self.error = error
        self.attempts = 0

    async def send(self, message: EmailMessage) -> str:
        self.attempts += 1
        raise DispatchError(message=self.error)

    async def verify(self) -> None:
        raise DispatchError(message="Connection refused")


# ══════════════════════════════════════════════════════════════════════════
# Storage Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def data_dir(tmp_path):
    """Fresh, not yet created, data directory for each test."""
    return tmp_path / "data"


@pytest.fixture
def test_settings(data_dir):
    return Settings(data_dir=str(data_dir), mail_host="", mail_username="", mail_password="")


@pytest.fixture
def record_store(data_dir):
    return RecordStore(str(data_dir))


@pytest.fixture
def team_directory(record_store):
    return TeamDirectory(record_store)


@pytest.fixture
def application_repository(record_store):
    return ApplicationRepository(record_store)


# ══════════════════════════════════════════════════════════════════════════
# Notification Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def recording_transport():
    return RecordingTransport()


@pytest.fixture
def failing_transport():
    return FailingTransport()


@pytest.fixture
def dispatcher(recording_transport):
    return NotificationDispatcher(
        transport=recording_transport,
        app_name="Executive Hiring Notification System",
        sender_address="hiring@company.com",
        sender_name="Hiring Team",
    )


@pytest.fixture
def simulated_dispatcher():
    return NotificationDispatcher(transport=None, app_name="Executive Hiring Notification System")


@pytest.fixture
def submission_service(team_directory, application_repository, dispatcher):
    return SubmissionService(
        teams=team_directory,
        applications=application_repository,
        dispatcher=dispatcher,
    )


@pytest.fixture
def sample_submission():
    """A valid submission body (wire format) for the seeded Engineering team."""
    return {
        "applicantName": "Jane Doe",
        "applicantEmail": "jane@example.com",
        "position": "Backend Engineer",
        "team": "Engineering",
        "coverLetter": "I enjoy building reliable services.",
        "resumeUrl": "https://example.com/jane.pdf",
    }


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(test_settings, dispatcher):
    """
    HTTPX AsyncClient talking to an app whose mail goes to recording_transport.

    ASGITransport does not run the lifespan, so the store is initialized here.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    app = create_app(test_settings, dispatcher=dispatcher)
    await app.state.record_store.initialize()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def simulated_client(test_settings):
    """HTTPX AsyncClient for an app with no mail configuration at all."""
    app = create_app(test_settings)
    await app.state.record_store.initialize()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
