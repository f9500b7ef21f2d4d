import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.application import DashboardService, configure_dashboard_service
from backend.core.settings import Settings, load_settings
from backend.infrastructure import (
    ChatRelayClient,
    FeedClient,
    FileKeyValueStore,
    HistoryStore,
    InMemoryKeyValueStore,
    KeyValueStore,
    configure_relay_client,
)
from backend.routes import chat, dashboard
from backend.workers.poller import FeedPoller

logger = logging.getLogger(__name__)


def build_dashboard_service(settings: Settings, *, feed_client: FeedClient | None = None) -> DashboardService:
    storage: KeyValueStore
    if settings.storage_dir is not None:
        storage = FileKeyValueStore(settings.storage_dir)
    else:
        storage = InMemoryKeyValueStore()
    history = HistoryStore(storage, key=settings.storage_key)
    feed = feed_client or FeedClient(settings.feed_url, timeout=settings.feed_timeout)
    return DashboardService(history, feed, people=settings.people)


def create_app(
    settings: Settings | None = None,
    *,
    feed_client: FeedClient | None = None,
    relay_client: ChatRelayClient | None = None,
) -> FastAPI:
    settings = settings or load_settings()
    service = build_dashboard_service(settings, feed_client=feed_client)
    configure_dashboard_service(service)

    if relay_client is None and settings.chat_relay_url:
        relay_client = ChatRelayClient(settings.chat_relay_url, timeout=settings.chat_relay_timeout)
    if relay_client is not None:
        configure_relay_client(relay_client)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        service.start(reset_on_start=settings.reset_on_start)
        poller: FeedPoller | None = None
        if settings.poll_enabled:
            poller = FeedPoller(service, interval=settings.poll_interval)
            poller.start()
            logger.info("polling %s every %.0fs", settings.feed_url, settings.poll_interval)
        app.state.poller = poller
        try:
            yield
        finally:
            if poller is not None:
                await poller.stop()

    app = FastAPI(title="SIAL Team Dashboard API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(dashboard.router, prefix="/api")
    app.include_router(chat.router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        """Provide a lightweight landing page for container checks."""
        return JSONResponse(
            {
                "message": "SIAL Team Dashboard API",
                "docs": "/docs",
                "health": "/api/dashboard/status",
            }
        )

    return app


app = create_app()
