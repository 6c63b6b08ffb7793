from fastapi import Request
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.artifact_storage import LocalArtifactStorage
from src.adapter.services.mailer import create_mailer
from src.adapter.services.pdf_renderer import ReportLabInvoiceRenderer
from src.app.services.invoice_renderer import InvoiceRenderer
from src.app.services.mailer import Mailer

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def build_collaborators(config) -> dict:
    """Construct the renderer and mailer once per application"""
    storage = LocalArtifactStorage(config.ARTIFACT_DIR, config.ARTIFACT_BASE_URL)
    return {
        "artifact_storage": storage,
        "renderer": ReportLabInvoiceRenderer(
            storage, default_business_name=config.DEFAULT_BUSINESS_NAME
        ),
        "mailer": create_mailer(
            api_key=config.RESEND_API_KEY,
            from_address=config.MAIL_FROM_ADDRESS,
            api_url=config.RESEND_API_URL,
            timeout=config.MAIL_TIMEOUT_SECONDS,
        ),
    }


def get_config(request: Request):
    return request.app.state.config


def get_renderer(request: Request) -> InvoiceRenderer:
    return request.app.state.renderer


def get_mailer(request: Request) -> Mailer:
    return request.app.state.mailer
