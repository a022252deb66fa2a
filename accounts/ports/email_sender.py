"""
Email sender port (interface).
"""
from abc import ABC, abstractmethod
from typing import Optional


class EmailSender(ABC):
    """Outbound email used to deliver one-time login codes."""

    @abstractmethod
    async def send(
        self,
        address: str,
        subject: str,
        body: str,
        html_body: Optional[str] = None,
    ) -> bool:
        """
        Send a single email.

        Returns:
            True if the message was handed to the mail transport,
            False if delivery failed
        """
        pass
