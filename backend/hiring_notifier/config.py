"""
Hiring Notifier Backend — Application Configuration
====================================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a module-level `settings` object.
Who:   Passed to `create_app()`, which hands the relevant values to each service.
When:  Loaded once at module import time; checked again during startup.

Mail settings decide how notifications go out:
    MAIL_HOST + MAIL_USERNAME + MAIL_PASSWORD all set → real SMTP delivery
    any of them missing                              → simulated (logged) sends
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults that work for local development: without any
    mail configuration the service runs and simply logs every notification.
    """

    # ── Persistence ───────────────────────────────────────────────────────
    # What: Directory holding applications.json and teams.json
    # Relative paths resolve against the process working directory
    data_dir: str = Field(default="./data", description="Directory for JSON collections")

    # ── Mail Transport ────────────────────────────────────────────────────
    mail_host: str = Field(default="", description="SMTP server host")
    mail_port: int = Field(default=587, ge=1, le=65535)
    mail_username: str = Field(default="")
    mail_password: str = Field(default="")

    # What: Sender address; falls back to mail_username when empty
    mail_from: str = Field(default="")

    # What: Display name shown next to the sender address
    mail_from_name: str = Field(default="Hiring Team")

    # What: Upgrade the SMTP connection with STARTTLS before logging in
    mail_use_tls: bool = Field(default=True)

    # What: Optional upper bound (seconds) on one notification dispatch
    # Unset means a dispatch waits as long as the transport takes
    mail_timeout_seconds: Optional[float] = Field(default=None, gt=0)

    # What: Name of the deployed application, used in the email footer
    app_name: str = Field(default="Executive Hiring Notification System")

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs, or "*" for any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # MAIL_HOST and mail_host both work
    }

    @property
    def mail_configured(self) -> bool:
        """True when host and credentials are all present."""
        return bool(self.mail_host and self.mail_username and self.mail_password)

    @property
    def sender_address(self) -> str:
        return self.mail_from or self.mail_username

    def validate_mail_settings(self) -> None:
        """
        What:  Detects a half-finished mail configuration.
        When:  Called during app startup (lifespan).
        How:   Raises ValueError listing what is missing when some, but not
               all, of host/username/password are set. An entirely empty
               configuration is valid and means simulated sends.
        """
        provided = {
            "MAIL_HOST": self.mail_host,
            "MAIL_USERNAME": self.mail_username,
            "MAIL_PASSWORD": self.mail_password,
        }
        missing = [name for name, value in provided.items() if not value]
        if missing and len(missing) < len(provided):
            raise ValueError(
                "Configuration validation failed:\n"
                + "\n".join(f"  - {name} is not set" for name in missing)
                + "\nNotifications will be logged instead of sent."
            )


# Module-level instance used when create_app() is called without overrides
settings = Settings()
