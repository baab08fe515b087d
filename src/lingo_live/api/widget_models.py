"""Pydantic models for widget WebSocket messages."""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from lingo_live.domain.history import TranslationRecord
from lingo_live.domain.languages import language_name
from lingo_live.domain.session import Notice, Session
from lingo_live.domain.speech import TranscriptPiece
from lingo_live.services.orchestrator import (
    CaptureEnded,
    CaptureError,
    CaptureResult,
    CaptureStarted,
    EnvironmentReported,
    Event,
    SelectLanguages,
    ToggleCapture,
)


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class HelloMessage(_WireModel):
    """First message sent by the page after connecting."""

    type: Literal["hello"]
    speech_supported: bool = Field(alias="speechSupported")


class ToggleMessage(_WireModel):
    """Start/stop button press."""

    type: Literal["toggle"]


class LanguagesMessage(_WireModel):
    """Language selection change."""

    type: Literal["languages"]
    source: str
    target: str


class CaptureStartedMessage(_WireModel):
    """Recognizer onstart."""

    type: Literal["capture.started"]


class RecognitionResult(_WireModel):
    """First alternative of a SpeechRecognitionResult."""

    transcript: str
    is_final: bool = Field(alias="isFinal")


class CaptureResultMessage(_WireModel):
    """Recognizer onresult."""

    type: Literal["capture.result"]
    result_index: int = Field(default=0, ge=0, alias="resultIndex")
    results: list[RecognitionResult]


class CaptureErrorMessage(_WireModel):
    """Recognizer onerror."""

    type: Literal["capture.error"]
    error: str


class CaptureEndedMessage(_WireModel):
    """Recognizer onend."""

    type: Literal["capture.ended"]


InboundMessage = Annotated[
    HelloMessage
    | ToggleMessage
    | LanguagesMessage
    | CaptureStartedMessage
    | CaptureResultMessage
    | CaptureErrorMessage
    | CaptureEndedMessage,
    Field(discriminator="type"),
]

_INBOUND_ADAPTER: TypeAdapter[InboundMessage] = TypeAdapter(InboundMessage)


def parse_inbound(payload: object) -> InboundMessage:
    """Validate a raw message from the page."""
    return _INBOUND_ADAPTER.validate_python(payload)


def to_event(message: InboundMessage) -> Event:  # noqa: PLR0911
    """Convert a validated page message into an orchestrator event."""
    if isinstance(message, HelloMessage):
        return EnvironmentReported(speech_supported=message.speech_supported)
    if isinstance(message, ToggleMessage):
        return ToggleCapture()
    if isinstance(message, LanguagesMessage):
        return SelectLanguages(
            source_language=message.source, target_language=message.target
        )
    if isinstance(message, CaptureStartedMessage):
        return CaptureStarted()
    if isinstance(message, CaptureResultMessage):
        return CaptureResult(
            results=tuple(
                TranscriptPiece(transcript=item.transcript, is_final=item.is_final)
                for item in message.results
            ),
            result_index=message.result_index,
        )
    if isinstance(message, CaptureErrorMessage):
        return CaptureError(error=message.error)
    return CaptureEnded()


class HistoryItem(_WireModel):
    """History entry as rendered by the page."""

    id: str
    original_text: str = Field(alias="originalText")
    translated_text: str = Field(alias="translatedText")
    source_language: str = Field(alias="sourceLanguage")
    target_language: str = Field(alias="targetLanguage")
    direction: str
    created_at: datetime = Field(alias="createdAt")

    @classmethod
    def from_record(cls, record: TranslationRecord) -> "HistoryItem":
        """Build a history item from a stored record."""
        return cls(
            id=record.id,
            original_text=record.original_text,
            translated_text=record.translated_text,
            source_language=record.source_language,
            target_language=record.target_language,
            direction=(
                f"{language_name(record.source_language)} → "
                f"{language_name(record.target_language)}"
            ),
            created_at=record.created_at,
        )


class StateMessage(_WireModel):
    """Full widget state pushed after every handled event."""

    type: Literal["state"] = "state"
    user_id: str | None = Field(alias="userId")
    is_capturing: bool = Field(alias="isCapturing")
    original_text: str = Field(alias="originalText")
    translated_text: str = Field(alias="translatedText")
    status: str
    source_language: str = Field(alias="sourceLanguage")
    target_language: str = Field(alias="targetLanguage")
    history_enabled: bool = Field(alias="historyEnabled")
    history: list[HistoryItem]

    @classmethod
    def from_session(cls, session: Session) -> "StateMessage":
        """Snapshot a session for the page."""
        return cls(
            user_id=session.user_id,
            is_capturing=session.is_capturing,
            original_text=session.current_source_text,
            translated_text=session.current_translated_text,
            status=session.status_message,
            source_language=session.source_language,
            target_language=session.target_language,
            history_enabled=session.history_enabled,
            history=[HistoryItem.from_record(record) for record in session.history],
        )


class NoticeMessage(_WireModel):
    """Transient toast shown by the page."""

    type: Literal["notice"] = "notice"
    title: str
    description: str
    variant: str

    @classmethod
    def from_notice(cls, notice: Notice) -> "NoticeMessage":
        """Wrap a notice for the page."""
        return cls(
            title=notice.title, description=notice.description, variant=notice.variant
        )
