"""
Route registration for the voice relay.

Responsibilities:
- GET /health
- WS /ws: wire one SessionGateway to each WebSocket connection
- /temp: static serving of generated audio artifacts
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.staticfiles import StaticFiles

from constants import ARTIFACT_URL_PREFIX
from observability.logger import log_event, now_ms
from session.gateway import GatewayResult, SessionGateway


def register_routes(app: FastAPI, *, artifact_dir: Path) -> None:
    """Register all routes on the FastAPI app."""

    @app.get("/health")
    async def health() -> dict[str, str]: # pyright: ignore[reportUnusedFunction]
        return {"status": "ok"}

    @app.websocket("/ws")
    async def websocket_endpoint(ws: WebSocket) -> None: # pyright: ignore[reportUnusedFunction]
        await ws.accept()

        async def send_json(msg: dict[str, Any]) -> None:
            await ws.send_text(json.dumps(msg))

        gateway = SessionGateway(
            config=app.state.config,
            services=app.state.services,
            sender=send_json,
        )

        try:
            result = await gateway.on_ws_connect()
            await _flush_gateway_result(ws, result)

            while True:
                msg = await ws.receive()

                if msg["type"] == "websocket.disconnect":
                    raise WebSocketDisconnect(code=msg.get("code", 1000))

                if msg.get("text") is not None:
                    result = await gateway.on_json_message(msg["text"])
                    await _flush_gateway_result(ws, result)

                elif msg.get("bytes") is not None:
                    result = await gateway.on_binary_message(msg["bytes"])
                    await _flush_gateway_result(ws, result)

        except WebSocketDisconnect:
            await gateway.on_ws_disconnect(reason="client_disconnect")

        except Exception as exc:  # pylint: disable=broad-exception-caught
            log_event({
                "ts_ms": now_ms(),
                "event_type": "WS_FATAL_ERROR",
                "session_id": gateway.session.session_id if gateway.session else None,
                "exception": type(exc).__name__,
                "message": str(exc),
            })
            await gateway.on_ws_disconnect(reason="server_error")

    app.mount(
        ARTIFACT_URL_PREFIX,
        StaticFiles(directory=str(artifact_dir)),
        name="artifacts",
    )


async def _flush_gateway_result(
    ws: WebSocket,
    result: GatewayResult,
) -> None:
    for msg in result.outbound_json:
        await ws.send_text(json.dumps(msg))
