import logging
from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlmodel import SQLModel

from src.api.error import ClientError, client_error_handler
from src.api.routes import invoices, invoice_settings
from src.depends import build_collaborators, engine

logger = logging.getLogger(__name__)


def create_app(config) -> FastAPI:
    logging.basicConfig(
        level=getattr(logging, str(config.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if config.ENABLE_SENTRY and config.DSN_SENTRY:
        sentry_sdk.init(dsn=config.DSN_SENTRY, environment=config.SENTRY_ENVIRONMENT)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Invoice service started")
        yield
        await app.state.mailer.aclose()
        await engine.dispose()

    app = FastAPI(title="Marketplace Invoice Service", version="1.0.0", lifespan=lifespan)

    app.state.config = config
    for name, collaborator in build_collaborators(config).items():
        setattr(app.state, name, collaborator)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS or ["*"],
        allow_credentials=config.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ClientError, client_error_handler)

    app.include_router(invoices.router, prefix=config.API_PREFIX)
    app.include_router(invoice_settings.router, prefix=config.API_PREFIX)
    app.mount(
        "/artifacts",
        StaticFiles(directory=config.ARTIFACT_DIR, check_dir=False),
        name="artifacts",
    )

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    return app
