"""Confirmation email rendering and delivery through the Resend API."""
import logging
from datetime import date
from html import escape as html_escape
from textwrap import dedent
from typing import Any, Dict, Optional

import requests

from src.models.registration import Registration
from src.utils.config import DEFAULT_EMAIL_FROM, Settings
from src.utils.exceptions import NotificationError

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"
EVENT_TITLE = "63rd National Rizal Youth Leadership Institute"
INQUIRY_EMAIL = "nryli2025@example.com"


def confirmation_subject(registration: Registration) -> str:
    return f"Registration Confirmation - {registration.registration_id}"


def render_confirmation_email(registration: Registration) -> str:
    """
    Render the HTML confirmation email for a stored registration.

    All delegate-provided values are HTML-escaped.
    """
    safe = {
        key: html_escape(str(value if value is not None else ""))
        for key, value in {
            "first_name": registration.first_name,
            "surname": registration.surname,
            "registration_id": registration.registration_id,
            "delegate_type": registration.delegate_type,
            "institution": registration.institution,
            "region_cluster": registration.region_cluster,
            "delegate_contact": registration.delegate_contact,
            "delegate_email": registration.delegate_email,
            "tshirt_size": registration.tshirt_size,
            "payment_option": registration.payment_option,
        }.items()
    }

    return dedent(f"""
        <!DOCTYPE html>
        <html>
        <head>
        <meta charset="utf-8">
        <title>NRYLI Registration Confirmation</title>
        <style>
        body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
        .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
        .header {{ background: linear-gradient(135deg, #1e3c72 0%, #2a5298 100%); color: white; padding: 30px; text-align: center; }}
        .content {{ padding: 30px; background: #f9f9f9; }}
        .info-section {{ background: white; padding: 20px; margin: 20px 0; border-radius: 8px; border-left: 4px solid #2a5298; }}
        .footer {{ text-align: center; padding: 20px; color: #666; font-size: 14px; }}
        .registration-id {{ background: #e8f4f8; padding: 15px; border-radius: 5px; font-size: 18px; font-weight: bold; text-align: center; margin: 20px 0; }}
        </style>
        </head>
        <body>
        <div class="container">
        <div class="header">
        <h1>{EVENT_TITLE}</h1>
        <p>Registration Confirmation</p>
        </div>
        <div class="content">
        <h2>Dear {safe['first_name']} {safe['surname']},</h2>
        <p>Thank you for registering for the {EVENT_TITLE}. Your registration has been successfully submitted and is currently being processed.</p>
        <div class="registration-id">
        Registration ID: {safe['registration_id']}
        </div>
        <div class="info-section">
        <h3>Registration Details</h3>
        <p><strong>Delegate Type:</strong> {safe['delegate_type']}</p>
        <p><strong>Institution:</strong> {safe['institution']}</p>
        <p><strong>Region Cluster:</strong> {safe['region_cluster']}</p>
        <p><strong>Contact Number:</strong> {safe['delegate_contact']}</p>
        <p><strong>Email:</strong> {safe['delegate_email']}</p>
        <p><strong>T-shirt Size:</strong> {safe['tshirt_size']}</p>
        <p><strong>Payment Method:</strong> {safe['payment_option']}</p>
        </div>
        <div class="info-section">
        <h3>Next Steps</h3>
        <ul>
        <li>Your registration is currently being reviewed</li>
        <li>You will receive an email confirmation within 24-48 hours</li>
        <li>Please keep your Registration ID for future reference</li>
        <li>For any inquiries, contact us at {INQUIRY_EMAIL}</li>
        </ul>
        </div>
        <p>We look forward to your participation in the 63rd NRYLI!</p>
        </div>
        <div class="footer">
        <p>This is an automated message. Please do not reply to this email.</p>
        <p>&copy; {date.today().year} National Rizal Youth Leadership Institute</p>
        </div>
        </div>
        </body>
        </html>
    """).strip()


class ConfirmationNotifier:
    """
    Sends one confirmation email per call; at-most-once, no retry.

    Instances are callable so they can be attached directly as the
    submission service's post-registration hook.
    """

    def __init__(
        self,
        api_key: str,
        sender: str = DEFAULT_EMAIL_FROM,
        timeout: float = 10.0,
        api_url: str = RESEND_API_URL,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.sender = sender
        self.timeout = timeout
        self.api_url = api_url
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings) -> "ConfirmationNotifier":
        return cls(
            api_key=settings.resend_api_key,
            sender=settings.email_from,
            timeout=settings.request_timeout,
        )

    def _post(self, message: Dict[str, Any]) -> Dict[str, Any]:
        """Post one message to the provider, raising NotificationError on failure."""
        try:
            response = self.session.post(
                self.api_url,
                json=message,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            raise NotificationError(f"Email provider timed out after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise NotificationError(f"Network error: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = {"message": response.text}

        if response.status_code >= 400:
            detail = body.get("message") if isinstance(body, dict) else body
            raise NotificationError(f"Email provider returned HTTP {response.status_code}: {detail}")

        return body

    def send(self, registration: Registration) -> Dict[str, Any]:
        """
        Send the confirmation email to the delegate.

        Returns:
            {"success": True, "data": <provider response>} on success
            {"success": False, "error": <message>} on any failure
        """
        if not self.api_key:
            logger.warning("Confirmation email skipped: no email API key configured")
            return {"success": False, "error": "Email provider is not configured"}

        try:
            message = {
                "from": self.sender,
                "to": [registration.delegate_email],
                "subject": confirmation_subject(registration),
                "html": render_confirmation_email(registration),
            }
            data = self._post(message)
        except NotificationError as e:
            logger.error(f"Email sending error for {registration.registration_id}: {e}")
            return {"success": False, "error": str(e)}
        except Exception as e:
            logger.exception(f"Email service error for {registration.registration_id}")
            return {"success": False, "error": str(e)}

        logger.info(f"Confirmation email sent for {registration.registration_id}")
        return {"success": True, "data": data}

    __call__ = send


def send_confirmation_email(
    registration: Registration,
    notifier: Optional[ConfirmationNotifier] = None,
    settings: Optional[Settings] = None,
) -> Dict[str, Any]:
    """
    Send a confirmation email for a stored registration.

    Uses the given notifier, or builds one from settings.
    """
    if notifier is None:
        if settings is None:
            return {"success": False, "error": "Email provider is not configured"}
        notifier = ConfirmationNotifier.from_settings(settings)
    return notifier.send(registration)


def build_confirmation_hook(settings: Settings) -> Optional[ConfirmationNotifier]:
    """Return a notifier to attach after registration when emails are enabled, else None."""
    if settings.email_enabled:
        return ConfirmationNotifier.from_settings(settings)
    return None
