"""
Django mail adapter for the EmailSender port.
"""
import logging
import smtplib
from typing import Optional

from asgiref.sync import sync_to_async
from django.conf import settings
from django.core.mail import send_mail

from accounts.ports.email_sender import EmailSender

logger = logging.getLogger(__name__)


class DjangoEmailSender(EmailSender):
    """
    Sends mail through the configured Django email backend.

    The SMTP connection timeout comes from settings.EMAIL_TIMEOUT, so a
    stalled mail server fails the request instead of hanging it.
    """

    @sync_to_async
    def send(
        self,
        address: str,
        subject: str,
        body: str,
        html_body: Optional[str] = None,
    ) -> bool:
        try:
            sent = send_mail(
                subject=subject,
                message=body,
                from_email=settings.DEFAULT_FROM_EMAIL,
                recipient_list=[address],
                html_message=html_body,
                fail_silently=False,
            )
        except (smtplib.SMTPException, OSError) as exc:
            logger.error(
                "Email delivery failed: %s",
                exc,
                extra={"error_type": type(exc).__name__},
                exc_info=True,
            )
            return False

        if not sent:
            logger.error("Email backend reported no message delivered")
            return False
        return True
