# utils/email.py
import logging

import requests

from config import settings

logger = logging.getLogger(__name__)

BREVO_URL = "https://api.brevo.com/v3/smtp/email"


class EmailError(Exception):
     """Notification mail could not be sent."""


def send_notification_email(to_email: str, subject: str, message: str) -> str:
     """
     Send a plain notification through Brevo.

     Returns:
          Provider message id (empty string if none was returned)

     Raises:
          EmailError: mail is not configured or the provider refused the message
     """
     if not settings.BREVO_API_KEY:
          logger.warning("Email disabled: BREVO_API_KEY is not set")
          raise EmailError("Email credentials not configured")

     try:
          response = requests.post(
               BREVO_URL,
               headers={
                    "api-key": settings.BREVO_API_KEY,
                    "Content-Type": "application/json",
               },
               json={
                    "sender": {"name": "Boarding House", "email": settings.MAIL_SENDER},
                    "to": [{"email": to_email}],
                    "subject": subject,
                    "textContent": message,
               },
               timeout=10,
          )
     except requests.RequestException as e:
          raise EmailError(f"Brevo request failed: {e}") from e

     if response.status_code not in (200, 201, 202):
          raise EmailError(f"Brevo error: {response.text}")

     message_id = response.json().get("messageId", "") if response.content else ""
     logger.info("Email sent to %s: %s", to_email, message_id)
     return message_id
