"""
Hiring Notifier Backend — Abstract Mail Transport Interface
============================================================

What:  Contract every outbound mail transport implements.
How:   Concrete transports inherit from MailTransport and implement send()
       and verify(). The NotificationDispatcher only ever sees this interface.
Who:   Implemented by SmtpTransport; replaced by fakes in tests.

Implementations:
    - SmtpTransport: SMTP with optional STARTTLS and login
    - (tests) in-memory transports recording sent messages
"""

from abc import ABC, abstractmethod
from email.message import EmailMessage


class MailTransport(ABC):
    """
    Contract:
        - send() delivers one message to every address in its To header
          in a single operation (no per-recipient fan-out)
        - Delivery failures are raised as DispatchError carrying the
          transport's own error text
        - No retries; one call is one attempt
    """

    @abstractmethod
    async def send(self, message: EmailMessage) -> str:
        """
        Deliver a composed message.

        Returns:
            str: The Message-ID assigned to the delivered message.

        Raises:
            DispatchError: When the transport could not deliver the message.
        """
        ...

    @abstractmethod
    async def verify(self) -> None:
        """
        Check connectivity and credentials without sending anything.

        Raises:
            DispatchError: When the transport is unreachable or rejects login.
        """
        ...
