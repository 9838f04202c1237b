# Uvicorn application factory <https://www.uvicorn.org/#application-factories>
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from translation_relay.core.registry import SessionRegistry
from translation_relay.logging import logger
from translation_relay.managers.room_manager import RoomManager
from translation_relay.middlewares.correlation_id import CorrelationIDMiddleware
from translation_relay.providers.factory import create_providers
from translation_relay.routing import collect_subrouters
from translation_relay.services.audio_pipeline import AudioTranslationPipeline
from translation_relay.settings import Settings, app_settings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan.

    On shutdown every WebSocket is closed and torn down before the provider
    HTTP client is released.
    """
    logger.info("Application startup complete")
    yield

    logger.info("Application shutdown initiated")
    await app.state.room_manager.shutdown()
    await app.state.providers.aclose()
    logger.info("Application shutdown complete")


def application(settings: Settings = app_settings) -> FastAPI:
    """
    Initializes and configures the FastAPI application.

    The session registry, the room manager built on it and the providers
    are created here and owned by the application (`app.state`), so their
    lifetime is the lifetime of the server.

    Middlewares:
    - `CORSMiddleware`: browser clients served from another origin.
    - `CorrelationIDMiddleware`: request correlation IDs.
    """
    app = FastAPI(
        title="Live Translation Relay",
        description="Relays translation events between participants of a room",
        version="1.0.0",
        lifespan=lifespan,
    )

    registry = SessionRegistry(history_limit=settings.HISTORY_LIMIT)
    app.state.room_manager = RoomManager(
        registry,
        duplicate_policy=settings.DUPLICATE_PARTICIPANT_POLICY,
        echo_translations_to_author=settings.ECHO_TRANSLATIONS_TO_AUTHOR,
        default_user_name=settings.DEFAULT_USER_NAME,
    )
    app.state.providers = create_providers(settings)
    app.state.audio_pipeline = AudioTranslationPipeline(
        app.state.providers.transcriber,
        app.state.providers.translator,
        default_target_language=settings.DEFAULT_TARGET_LANGUAGE,
    )

    app.include_router(collect_subrouters())

    # Middlewares (execute in REVERSE order of registration)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(CorrelationIDMiddleware)

    return app


app = application()  # Need for fastapi cli
