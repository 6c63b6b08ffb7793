from .unit_of_work import SqlAlchemyUnitOfWork
from .artifact_storage import LocalArtifactStorage
from .pdf_renderer import ReportLabInvoiceRenderer
from .mailer import (
    LoggingMailer,
    ResendMailer,
    create_mailer,
)

__all__ = [
    "SqlAlchemyUnitOfWork",
    "LocalArtifactStorage",
    "ReportLabInvoiceRenderer",
    "LoggingMailer",
    "ResendMailer",
    "create_mailer",
]
