"""
FastAPI app factory.

Responsibilities:
- Create and configure the FastAPI app
- Set up CORS for the configured frontend
- Build shared collaborators once per process (OpenAI client, artifact
  store, cleanup scheduler)
- Flush pending artifact deletions on shutdown
- Register routes
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from openai import AsyncOpenAI

from adapters.asr.openai_whisper import OpenAITranscriptionAdapter
from adapters.tts.openai_speech import OpenAISpeechAdapter
from config import AppConfig
from observability.logger import log_event, now_ms
from orchestrator.cleanup import ArtifactCleanupScheduler
from server.routes import register_routes
from session.gateway import SessionServices
from storage.artifacts import LocalArtifactStore


def create_app(
    config: AppConfig | None = None,
    *,
    services: SessionServices | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    `services` lets tests inject fake collaborators; otherwise OpenAI-backed
    adapters are built from config.
    """
    config = config or AppConfig.load_from_env()

    store = LocalArtifactStore(
        directory=config.artifact_dir,
        public_base_url=config.backend_url,
    )
    store.ensure_directory()

    if services is None:
        services = build_services(config, store)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        log_event({
            "ts_ms": now_ms(),
            "event_type": "SERVER_STARTED",
            "env": config.env,
            "artifact_dir": str(store.directory),
        })
        yield
        await services.cleanup.shutdown(delete_pending=True)
        log_event({"ts_ms": now_ms(), "event_type": "SERVER_STOPPED"})

    app = FastAPI(title="Voice Relay API", lifespan=lifespan)

    app.state.config = config
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    register_routes(app, artifact_dir=store.directory)

    return app


def build_services(config: AppConfig, store: LocalArtifactStore) -> SessionServices:
    """Build OpenAI-backed collaborators. One client per process."""
    if not config.openai_api_key:
        raise RuntimeError("OPENAI_API_KEY environment variable not set")

    client = AsyncOpenAI(api_key=config.openai_api_key)

    return SessionServices(
        transcriber=OpenAITranscriptionAdapter(client=client),
        synthesizer=OpenAISpeechAdapter(client=client),
        store=store,
        cleanup=ArtifactCleanupScheduler(store=store, delay_s=config.artifact_ttl_s),
    )
