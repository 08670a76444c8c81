"""FastAPI application exposing the text-to-speech proxy route."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import FastAPI
from fastapi.responses import Response, StreamingResponse
from pydantic import BaseModel
from starlette.background import BackgroundTask

from .adapters.elevenlabs import ElevenLabsClient
from .config import Settings, settings as default_settings

logger = logging.getLogger("cea_chat.server")

AUDIO_MEDIA_TYPE = "audio/mpeg"


class TtsRequest(BaseModel):
    text: str


def create_app(
    settings: Settings | None = None,
    vendor: ElevenLabsClient | None = None,
) -> FastAPI:
    cfg = settings or default_settings
    owns_vendor = vendor is None
    vendor = vendor or ElevenLabsClient.from_settings(cfg)

    if not vendor.configured:
        logger.warning("tts_vendor_key_missing")

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        yield
        if owns_vendor:
            await vendor.aclose()

    app = FastAPI(title=f"{cfg.app_name} TTS proxy", version="0.1.0", lifespan=lifespan)

    @app.get("/health")
    def health() -> dict[str, Any]:
        return {"ok": True, "tts_configured": vendor.configured}

    @app.post("/api/tts")
    async def tts(req: TtsRequest) -> Response:
        upstream = await vendor.open_stream(req.text)

        # Vendor failures keep their status so callers can fall back.
        if upstream.is_error:
            body = await upstream.aread()
            await upstream.aclose()
            logger.warning(
                "tts_vendor_failed",
                extra={"status": upstream.status_code, "body": body[:200]},
            )
            return Response(
                content=body,
                status_code=upstream.status_code,
                media_type=upstream.headers.get("content-type"),
            )

        logger.info("tts_proxied", extra={"chars": len(req.text)})
        return StreamingResponse(
            upstream.aiter_bytes(),
            status_code=200,
            media_type=AUDIO_MEDIA_TYPE,
            background=BackgroundTask(upstream.aclose),
        )

    return app
