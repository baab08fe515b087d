"""FastAPI application factory."""

import asyncio
import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import HTMLResponse

from lingo_live.adapters.browser_speech_capture import BrowserSpeechCapture
from lingo_live.api.widget_models import (
    NoticeMessage,
    StateMessage,
    parse_inbound,
    to_event,
)
from lingo_live.api.widget_page import WIDGET_HTML
from lingo_live.app_logging import configure_logging
from lingo_live.containers import AppContainer
from lingo_live.domain.languages import supported_languages
from lingo_live.domain.session import Notice, Session
from lingo_live.services.orchestrator import Orchestrator


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/languages")
    async def languages() -> dict[str, dict[str, str]]:
        """Return supported language codes and their display names."""
        return {"languages": supported_languages()}

    @app.get("/", response_class=HTMLResponse)
    async def widget() -> HTMLResponse:
        """Serve the translator widget page."""
        return HTMLResponse(WIDGET_HTML)

    @app.websocket("/ws")
    async def widget_socket(websocket: WebSocket) -> None:
        """Drive one widget session over a WebSocket."""
        await websocket.accept()
        state_container: AppContainer = websocket.app.state.container

        async def send(payload: dict[str, object]) -> None:
            await websocket.send_json(payload)

        async def render(session: Session) -> None:
            await send(
                StateMessage.from_session(session).model_dump(
                    mode="json", by_alias=True
                )
            )

        async def notify(notice: Notice) -> None:
            await send(
                NoticeMessage.from_notice(notice).model_dump(
                    mode="json", by_alias=True
                )
            )

        orchestrator = Orchestrator(
            capture=BrowserSpeechCapture(send),
            translation_service=state_container.translation_service,
            render=render,
            notify=notify,
            history_service=state_container.history_service,
            identity_service=state_container.identity_service,
            environment=state_container.settings.environment,
        )
        await orchestrator.open()
        driver = asyncio.create_task(orchestrator.run())
        try:
            while True:
                raw = await websocket.receive_text()
                try:
                    message = parse_inbound(json.loads(raw))
                except ValueError:
                    logger.warning("Ignoring malformed widget message")
                    continue
                orchestrator.submit(to_event(message))
        except WebSocketDisconnect:
            logger.info(
                "Widget disconnected",
                extra={"user_id": orchestrator.session.user_id},
            )
        finally:
            await orchestrator.close()
            try:
                await driver
            except Exception:
                logger.exception("Widget session ended with an error")

    return app
