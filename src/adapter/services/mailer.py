"""Mailer Implementations

Provides concrete implementations for delivering invoices by email.
"""

import html
import logging
from typing import Optional
import httpx
from src.app.services.errors import DeliveryError
from src.app.services.mailer import Mailer, DeliveryReceipt

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


def build_invoice_email_html(
    subject: str,
    message: str,
    artifact_url: str,
    sender_name: Optional[str] = None,
) -> str:
    """Render the plain-text message into the invoice email body"""
    paragraphs = "".join(
        f"<p>{html.escape(line)}</p>" for line in message.splitlines() if line.strip()
    )
    heading = html.escape(subject)
    footer = html.escape(f"Sent by {sender_name}") if sender_name else ""
    return (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        f"<h2>{heading}</h2>"
        f"{paragraphs}"
        '<div style="margin-top: 30px;">'
        f'<a href="{html.escape(artifact_url, quote=True)}" '
        'style="background-color: #3b82f6; color: white; padding: 10px 20px; '
        'text-decoration: none; border-radius: 5px;">View Invoice</a>'
        "</div>"
        f'<div style="margin-top: 30px; font-size: 12px; color: #666;"><p>{footer}</p></div>'
        "</div>"
    )


class LoggingMailer(Mailer):
    """
    Mailer that only logs deliveries

    Used in development when no email provider is configured.
    """

    async def send(
        self,
        recipient_email: str,
        artifact_url: str,
        subject: str,
        message: str,
        sender_name: Optional[str] = None,
        attachment_name: Optional[str] = None,
    ) -> DeliveryReceipt:
        logger.warning(
            f"[EMAIL NOT SENT - no provider] To: {recipient_email}, "
            f"Subject: {subject}, Artifact: {artifact_url}"
        )
        return DeliveryReceipt(success=True, message_id=None)


class ResendMailer(Mailer):
    """
    Mailer backed by the Resend HTTP API

    The artifact is linked in the body and attached by URL.
    """

    def __init__(
        self,
        api_key: str,
        from_address: str,
        api_url: str = RESEND_API_URL,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Resend mailer

        Args:
            api_key: Resend API key
            from_address: Sender address (e.g., invoices@example.com)
            api_url: Emails endpoint
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests)
        """
        self.from_address = from_address
        self.api_url = api_url
        self.client = httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
        )

    async def send(
        self,
        recipient_email: str,
        artifact_url: str,
        subject: str,
        message: str,
        sender_name: Optional[str] = None,
        attachment_name: Optional[str] = None,
    ) -> DeliveryReceipt:
        sender = f"{sender_name} <{self.from_address}>" if sender_name else self.from_address
        payload = {
            "from": sender,
            "to": [recipient_email],
            "subject": subject,
            "html": build_invoice_email_html(subject, message, artifact_url, sender_name),
            "attachments": [
                {
                    "filename": attachment_name or "Invoice.pdf",
                    "path": artifact_url,
                }
            ],
        }

        try:
            response = await self.client.post(self.api_url, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Resend rejected email to {recipient_email}: "
                f"{e.response.status_code} {e.response.text}"
            )
            raise DeliveryError(
                f"Email provider returned status {e.response.status_code}",
                reason=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Failed to reach Resend for email to {recipient_email}: {e}")
            raise DeliveryError("Email provider unreachable", reason=str(e)) from e

        try:
            message_id = response.json().get("id")
        except ValueError:
            message_id = None

        logger.info(f"Invoice email sent to {recipient_email} (id={message_id})")
        return DeliveryReceipt(success=True, message_id=message_id)

    async def aclose(self) -> None:
        await self.client.aclose()


def create_mailer(
    api_key: Optional[str] = None,
    from_address: str = "invoices@example.com",
    api_url: str = RESEND_API_URL,
    timeout: float = 10.0,
) -> Mailer:
    """
    Factory function to create the configured mailer

    Args:
        api_key: Resend API key. Without one, deliveries are only logged.

    Returns:
        Configured Mailer
    """
    if api_key:
        return ResendMailer(api_key, from_address, api_url=api_url, timeout=timeout)
    return LoggingMailer()
