"""
Hiring Notifier Backend — SMTP Mail Transport
==============================================

What:  MailTransport implementation over SMTP (smtplib).
How:   Opens a connection per message, upgrades it with STARTTLS when
       enabled, logs in, and hands the message to `send_message()` for all
       recipients at once. The blocking smtplib calls run in a worker thread
       (`asyncio.to_thread`) so the event loop keeps serving requests.
Who:   Created by `create_app()` when host and credentials are configured.

Message-ID:
    Assigned here (make_msgid with the SMTP host as domain) before the
    message is handed to the server; that id is what the dispatcher reports.
"""

import asyncio
import logging
import smtplib
from email.message import EmailMessage
from email.utils import make_msgid
from typing import Optional

from hiring_notifier.exceptions import DispatchError
from hiring_notifier.services.mail_base import MailTransport

logger = logging.getLogger(__name__)


class SmtpTransport(MailTransport):
    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str = "",
        password: str = "",
        use_tls: bool = True,
        timeout: Optional[float] = None,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout
        logger.info(
            "SmtpTransport initialized with host=%s, port=%d, starttls=%s",
            host,
            port,
            use_tls,
        )

    def _connect(self) -> smtplib.SMTP:
        # smtplib's own default applies when no timeout is configured
        if self.timeout is not None:
            smtp = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        else:
            smtp = smtplib.SMTP(self.host, self.port)
        try:
            if self.use_tls:
                smtp.starttls()
            if self.username:
                smtp.login(self.username, self.password)
        except BaseException:
            smtp.close()
            raise
        return smtp

    def _send_sync(self, message: EmailMessage) -> str:
        if message["Message-ID"] is None:
            message["Message-ID"] = make_msgid(domain=self.host)
        with self._connect() as smtp:
            smtp.send_message(message)
        return message["Message-ID"]

    def _verify_sync(self) -> None:
        with self._connect() as smtp:
            smtp.noop()

    async def send(self, message: EmailMessage) -> str:
        try:
            return await asyncio.to_thread(self._send_sync, message)
        except (smtplib.SMTPException, OSError) as e:
            # SMTPRecipientsRefused, SMTPAuthenticationError, connection refused, ...
            raise DispatchError(
                message=str(e) or type(e).__name__,
                context={"host": self.host, "error_type": type(e).__name__},
            )

    async def verify(self) -> None:
        try:
            await asyncio.to_thread(self._verify_sync)
        except (smtplib.SMTPException, OSError) as e:
            raise DispatchError(
                message=str(e) or type(e).__name__,
                context={"host": self.host, "error_type": type(e).__name__},
            )
