"""Tests for speech capture helpers."""

import asyncio

import pytest

from lingo_live.adapters.browser_speech_capture import BrowserSpeechCapture
from lingo_live.domain.errors import CapabilityUnavailableError
from lingo_live.domain.speech import (
    CaptureCapability,
    TranscriptPiece,
    assemble_transcript,
)
from lingo_live.services.speech import check_capability, require_capability


def test_assemble_transcript_splits_final_and_interim() -> None:
    transcript = assemble_transcript(
        [
            TranscriptPiece("old ", is_final=True),
            TranscriptPiece("Hello ", is_final=True),
            TranscriptPiece("wor", is_final=False),
        ],
        result_index=1,
    )

    assert transcript.final == "Hello "
    assert transcript.interim == "wor"
    assert transcript.display_text == "Hello wor"
    assert transcript.finalized == "Hello"


def test_assemble_transcript_past_end_is_empty() -> None:
    transcript = assemble_transcript([TranscriptPiece("a", is_final=True)], 5)

    assert transcript.display_text == ""
    assert transcript.finalized == ""


def test_check_capability() -> None:
    assert check_capability(False) is CaptureCapability.UNAVAILABLE
    assert check_capability(True) is CaptureCapability.AVAILABLE


def test_browser_capture_sends_recognizer_commands() -> None:
    sent: list[dict[str, object]] = []

    async def send(payload: dict[str, object]) -> None:
        sent.append(payload)

    capture = BrowserSpeechCapture(send)
    asyncio.run(capture.start("ja-JP"))
    asyncio.run(capture.stop())

    assert sent == [
        {
            "type": "capture.start",
            "config": {"lang": "ja-JP", "continuous": True, "interimResults": True},
        },
        {"type": "capture.stop"},
    ]


def test_require_capability_raises_when_unsupported() -> None:
    with pytest.raises(CapabilityUnavailableError):
        require_capability(False)

    require_capability(True)
    require_capability(None)
