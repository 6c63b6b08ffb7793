"""Collaborator errors

Raised by renderer and mailer adapters; use cases turn them into
RENDER_FAILED / DELIVERY_FAILED results.
"""


class CollaboratorError(Exception):
    """Base error for external collaborators"""

    def __init__(self, message: str, reason: str = None):
        super().__init__(message)
        self.message = message
        self.reason = reason


class RenderError(CollaboratorError):
    """Artifact generation failed"""


class DeliveryError(CollaboratorError):
    """Email delivery failed"""
