"""Speech capture interface and capability detection."""

from typing import Protocol

from lingo_live.domain.errors import CapabilityUnavailableError
from lingo_live.domain.speech import CaptureCapability


class SpeechCapture(Protocol):
    """Interface for a continuous speech recognizer."""

    async def start(self, language_code: str) -> None:
        """Begin continuous capture with interim results."""

    async def stop(self) -> None:
        """End the active capture."""


def check_capability(speech_supported: bool | None) -> CaptureCapability:
    """Return the capture capability reported by the host environment."""
    if speech_supported is False:
        return CaptureCapability.UNAVAILABLE
    return CaptureCapability.AVAILABLE


def recognizer_config(language_code: str) -> dict[str, object]:
    """Return the recognizer configuration sent to the browser."""
    return {"lang": language_code, "continuous": True, "interimResults": True}


def require_capability(speech_supported: bool | None) -> None:
    """Raise when the host environment cannot capture speech."""
    if check_capability(speech_supported) is CaptureCapability.UNAVAILABLE:
        raise CapabilityUnavailableError(
            "Speech recognition is not available in your browser."
        )
