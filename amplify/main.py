"""Amplify: FastAPI Application Entry Point.

Social post scheduling, engagement analytics and templated email campaigns.
"""

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from amplify.api.email_routes import router as email_router
from amplify.api.social_routes import router as social_router
from amplify.config import Settings
from amplify.connectors.resend.client import ResendClient
from amplify.core.logging import configure_logging, get_logger
from amplify.database import build_engine, check_connection, init_db
from amplify.services.campaigns import CampaignSender
from amplify.services.email import EmailService
from amplify.services.social import SocialService
from amplify.store.gateway import RecordStore

logger = get_logger("main")

VERSION = "1.0.0"


@dataclass
class Services:
    social: SocialService
    email: EmailService


def build_services(store: RecordStore, mailer, settings: Settings) -> Services:
    """Wire the services around an existing store and mail client."""
    sender = CampaignSender(
        store,
        mailer,
        sender=settings.email_from,
        concurrency=settings.send_concurrency,
    )
    return Services(social=SocialService(store), email=EmailService(store, sender))


def create_app(
    settings: Optional[Settings] = None, services: Optional[Services] = None
) -> FastAPI:
    """Build the app. Pass ``services`` to skip store and provider setup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown lifecycle."""
        if services is not None:
            app.state.social = services.social
            app.state.email = services.email
            yield
            return

        config = (settings or Settings()).require()
        configure_logging(config.log_level)
        logger.info("🚀 Amplify starting up...")

        engine = build_engine(config)
        if await check_connection(engine):
            await init_db(engine)
        else:
            logger.error("❌ Record store NOT connected: endpoints will fail")

        mailer = ResendClient(
            api_key=config.resend_api_key,
            base_url=config.resend_base_url,
            timeout=config.http_timeout,
        )
        wired = build_services(RecordStore(engine), mailer, config)
        app.state.social = wired.social
        app.state.email = wired.email
        yield
        await mailer.close()
        await engine.dispose()
        logger.info("Amplify shut down")

    app = FastAPI(
        title="Amplify",
        description="Schedule social posts, track engagement and send templated email campaigns.",
        version=VERSION,
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(social_router)
    app.include_router(email_router)

    @app.get("/health", tags=["System"])
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "amplify", "version": VERSION}

    return app


app = create_app()
