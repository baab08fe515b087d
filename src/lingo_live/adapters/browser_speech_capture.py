"""Speech capture relayed to the browser's SpeechRecognition API."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from lingo_live.services.speech import SpeechCapture, recognizer_config

SendMessage = Callable[[dict[str, object]], Awaitable[None]]


@dataclass
class BrowserSpeechCapture(SpeechCapture):
    """Capture adapter that drives the recognizer running in the widget page.

    Recognition results come back as widget messages handled by the
    orchestrator.
    """

    send: SendMessage

    async def start(self, language_code: str) -> None:
        """Ask the page to start its recognizer."""
        await self.send(
            {"type": "capture.start", "config": recognizer_config(language_code)}
        )

    async def stop(self) -> None:
        """Ask the page to stop its recognizer."""
        await self.send({"type": "capture.stop"})
