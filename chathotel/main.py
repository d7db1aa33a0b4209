from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chathotel import __version__
from chathotel.config import Settings
from chathotel.dependencies import ServiceContainer, build_container, get_container
from chathotel.logging_config import get_logger, setup_logging
from chathotel.routers import admin, webhook
from chathotel.services.health_service import get_uptime_seconds

logger = get_logger("main")

VERSION = __version__


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.container.settings
    logger.info(
        "ChatHotel starting",
        extra={
            "context": {
                "hotel": settings.hotel_name,
                "whatsapp_configured": settings.whatsapp_configured,
                "llm_configured": settings.llm_configured,
            }
        },
    )
    if not settings.whatsapp_configured:
        logger.warning("WhatsApp credentials missing: replies will not be delivered")
    if not settings.llm_configured:
        logger.info("OPENAI_API_KEY not set: using rule-based replies only")
    yield
    logger.info("ChatHotel shutting down")


def create_app(settings: Optional[Settings] = None, container: Optional[ServiceContainer] = None) -> FastAPI:
    if container is None:
        settings = settings or Settings()
        container = build_container(settings)
    settings = container.settings

    setup_logging(settings.log_level, service=settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        description="WhatsApp concierge for hotel guests",
        version=VERSION,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(webhook.router)
    app.include_router(admin.router)

    @app.get("/")
    async def root(container: ServiceContainer = Depends(get_container)):
        return {
            "service": container.settings.app_name,
            "status": "running",
            "version": VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "whatsapp": "configured" if container.settings.whatsapp_configured else "not configured",
        }

    @app.get("/health")
    async def health(container: ServiceContainer = Depends(get_container)):
        return {"status": "ok", "uptime_seconds": get_uptime_seconds(container.started_at)}

    return app


app = create_app()
