"""
Verification email content.
"""
from dataclasses import dataclass

from django.template.loader import render_to_string

VERIFICATION_EMAIL_SUBJECT = "Your Login Verification Code"


@dataclass(frozen=True)
class VerificationEmail:
    subject: str
    body: str
    html_body: str


def build_verification_email(code: str, expires_in_seconds: int) -> VerificationEmail:
    """Render the plain-text and HTML bodies for a one-time code."""
    context = {
        "code": code,
        "expires_in_minutes": max(1, expires_in_seconds // 60),
    }
    return VerificationEmail(
        subject=VERIFICATION_EMAIL_SUBJECT,
        body=render_to_string("accounts/email/verification_code.txt", context),
        html_body=render_to_string("accounts/email/verification_code.html", context),
    )
