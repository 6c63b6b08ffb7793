"""Mailer Service Interface

Defines the contract for delivering invoice artifacts by email.
"""

from abc import ABC, abstractmethod
from typing import Optional
from pydantic import BaseModel


class DeliveryReceipt(BaseModel):
    success: bool
    message_id: Optional[str] = None


class Mailer(ABC):
    """
    Abstract mail sender

    Implementations normalize the provider response into DeliveryReceipt
    and raise DeliveryError on failure.
    """

    @abstractmethod
    async def send(
        self,
        recipient_email: str,
        artifact_url: str,
        subject: str,
        message: str,
        sender_name: Optional[str] = None,
        attachment_name: Optional[str] = None,
    ) -> DeliveryReceipt:
        """
        Send an email linking (and attaching) the artifact

        Raises:
            DeliveryError: If the provider rejected or could not be reached
        """
        pass

    async def aclose(self) -> None:
        """Release provider resources"""
        return None
