"""Outbound notification channels."""

from .resend_client import ResendEmailSender, EmailMessage

__all__ = ["ResendEmailSender", "EmailMessage"]
