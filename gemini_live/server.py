"""FastAPI relay server for the live streaming API."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, WebSocket
from fastapi.responses import ORJSONResponse, PlainTextResponse

from gemini_live.state import RelayDeps
from gemini_live.runtime.logging import configure_logging
from gemini_live.relay.manager import handle_relay_connection
from gemini_live.runtime.dependencies import build_relay_deps
from gemini_live.config.websocket import WS_EXPECTED_UPGRADE_MESSAGE

logger = logging.getLogger(__name__)

configure_logging()

_HTTP_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def create_app(deps: RelayDeps | None = None) -> FastAPI:
    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        app.state.relay_deps = deps if deps is not None else build_relay_deps()
        logger.info("runtime: relay ready (upstream %s)", app.state.relay_deps.settings.upstream_url)
        try:
            yield
        finally:
            await app.state.relay_deps.shutdown()

    app = FastAPI(default_response_class=ORJSONResponse, lifespan=_lifespan)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    @app.websocket("/{path:path}")
    async def relay_endpoint(websocket: WebSocket, path: str) -> None:
        relay_deps = getattr(app.state, "relay_deps", None)
        if relay_deps is None:
            raise RuntimeError("Relay dependencies are not initialized")
        await handle_relay_connection(websocket, relay_deps)

    @app.api_route("/{path:path}", methods=_HTTP_METHODS, response_class=PlainTextResponse)
    async def expect_upgrade(path: str) -> PlainTextResponse:
        return PlainTextResponse(WS_EXPECTED_UPGRADE_MESSAGE, status_code=400)

    return app


app = create_app()


__all__ = ["app", "create_app"]
