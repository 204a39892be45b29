"""Resend email sender."""

import logging
from typing import Optional, List
import requests
from pydantic import BaseModel, Field

from errors import CollaboratorError

logger = logging.getLogger(__name__)


class EmailMessage(BaseModel):
    """Outbound HTML email."""
    sender: str
    to: List[str]
    cc: List[str] = Field(default_factory=list)
    subject: str
    html: str


class ResendEmailSender:
    """Delivers notification emails through the Resend API."""

    API_URL = "https://api.resend.com/emails"

    def __init__(self, api_key: Optional[str], timeout: int = 10):
        """
        Initialize email sender.

        Args:
            api_key: Resend API key
            timeout: Request timeout in seconds (default: 10)
        """
        self.api_key = api_key
        self.timeout = timeout

    def _get_headers(self) -> dict:
        """Build request headers."""
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    def send(self, message: EmailMessage) -> dict:
        """
        Send one email.

        Args:
            message: Email to deliver

        Returns:
            Resend response body (contains the email ``id``)

        Raises:
            CollaboratorError: Missing key, transport failure or non-2xx status
        """
        if not self.api_key:
            raise CollaboratorError("Resend", "no API key configured, check RESEND_API_KEY")
        if not message.to:
            raise CollaboratorError("Resend", "email has no recipients")

        payload = {
            "from": message.sender,
            "to": message.to,
            "subject": message.subject,
            "html": message.html,
        }
        if message.cc:
            payload["cc"] = message.cc

        logger.info(f"Sending email '{message.subject}' to {', '.join(message.to)}")

        try:
            response = requests.post(
                self.API_URL,
                json=payload,
                headers=self._get_headers(),
                timeout=self.timeout
            )
        except requests.exceptions.Timeout as e:
            raise CollaboratorError("Resend", f"request timeout after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise CollaboratorError("Resend", str(e)) from e

        if not 200 <= response.status_code < 300:
            raise CollaboratorError("Resend", response.text, status_code=response.status_code)

        try:
            return response.json()
        except ValueError:
            logger.warning("Resend returned a non-JSON body")
            return {}
