import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401  registers tables on SQLModel.metadata
from src.adapter.services.artifact_storage import LocalArtifactStorage
from src.adapter.services.pdf_renderer import ReportLabInvoiceRenderer
from tests.integration.fakes import RecordingMailer
from src.depends import get_mailer, get_renderer, get_session


@pytest_asyncio.fixture(scope="function")
async def engine():
    """Create in-memory SQLite engine with a fresh schema per test"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    """Create a new database session for each test"""
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with Session() as session:
        yield session


@pytest.fixture
def artifact_storage(tmp_path):
    return LocalArtifactStorage(str(tmp_path / "artifacts"), "http://test/artifacts")


@pytest.fixture
def renderer(artifact_storage):
    return ReportLabInvoiceRenderer(artifact_storage)


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def app(db_session, renderer, mailer):
    """Create the app with database session and collaborator overrides"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    # Override the session dependency to use test session
    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_renderer] = lambda: renderer
    app.dependency_overrides[get_mailer] = lambda: mailer

    return app


@pytest_asyncio.fixture
async def client(app):
    """Create test client for the app"""
    # Use ASGITransport for httpx AsyncClient
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
