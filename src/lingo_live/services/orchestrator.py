"""Event-driven state machine behind one translator widget.

Every input (clicks, recognizer callbacks, translation completions, history
snapshots) becomes an event on a single queue. Events are handled one at a
time, to completion, so session state is never mutated concurrently.
Translation calls run as background tasks and report back through the same
queue; capture keeps accepting speech while they are in flight.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from lingo_live.domain.errors import (
    AuthenticationError,
    CapabilityUnavailableError,
    PersistenceError,
    TranslationError,
)
from lingo_live.domain.history import TranslationRecord
from lingo_live.domain.languages import is_supported, language_name
from lingo_live.domain.session import (
    COMPLETE_STATUS,
    FAILED_STATUS,
    IDLE_STATUS,
    LISTENING_STATUS,
    TRANSLATING_STATUS,
    TRANSLATION_PLACEHOLDER,
    Notice,
    Session,
)
from lingo_live.domain.speech import (
    TranscriptPiece,
    assemble_transcript,
)
from lingo_live.services.history import HistoryService, HistorySubscription
from lingo_live.services.identity import IdentityService
from lingo_live.services.speech import SpeechCapture, require_capability
from lingo_live.services.translation import TranslationService

logger = logging.getLogger(__name__)

UNSUPPORTED_STATUS = "Speech recognition not supported in this browser."
AUTH_FAILED_STATUS = "Authentication failed."
HISTORY_DISABLED_STATUS = "History store not configured. History is disabled."
HISTORY_FETCH_FAILED_STATUS = "Error fetching history."

RenderCallback = Callable[[Session], Awaitable[None]]
NoticeCallback = Callable[[Notice], Awaitable[None]]


@dataclass(frozen=True)
class EnvironmentReported:
    """The page reported what its browser supports."""

    speech_supported: bool


@dataclass(frozen=True)
class ToggleCapture:
    """The start/stop button was pressed."""


@dataclass(frozen=True)
class SelectLanguages:
    """The user picked source and target languages."""

    source_language: str
    target_language: str


@dataclass(frozen=True)
class CaptureStarted:
    """The recognizer started listening."""


@dataclass(frozen=True)
class CaptureResult:
    """A batch of recognition results."""

    results: tuple[TranscriptPiece, ...]
    result_index: int = 0


@dataclass(frozen=True)
class CaptureError:
    """The recognizer failed mid-capture."""

    error: str


@dataclass(frozen=True)
class CaptureEnded:
    """The recognizer stopped, manually or on its own."""


@dataclass(frozen=True)
class IdentityChanged:
    """The owner identity changed; None means nobody is signed in."""

    user_id: str | None


@dataclass(frozen=True)
class HistorySnapshot:
    """A fresh ordered history for an owner."""

    owner_user_id: str
    records: tuple[TranslationRecord, ...]


@dataclass(frozen=True)
class HistoryFailed:
    """The live history view for an owner failed."""

    owner_user_id: str
    error: Exception


@dataclass(frozen=True)
class TranslationSucceeded:
    """A translation call returned text."""

    sequence: int
    original_text: str
    translated_text: str
    source_language: str
    target_language: str


@dataclass(frozen=True)
class TranslationFailed:
    """A translation call failed."""

    sequence: int
    error: TranslationError


Event = (
    EnvironmentReported
    | ToggleCapture
    | SelectLanguages
    | CaptureStarted
    | CaptureResult
    | CaptureError
    | CaptureEnded
    | IdentityChanged
    | HistorySnapshot
    | HistoryFailed
    | TranslationSucceeded
    | TranslationFailed
)

_STOP = object()


@dataclass
class Orchestrator:
    """Owns one widget session and drives it from queued events."""

    capture: SpeechCapture
    translation_service: TranslationService
    render: RenderCallback
    notify: NoticeCallback
    history_service: HistoryService | None = None
    identity_service: IdentityService | None = None
    environment: str = "production"
    session: Session = field(default_factory=Session)
    _queue: asyncio.Queue = field(default_factory=asyncio.Queue, init=False)
    _tasks: set[asyncio.Task] = field(default_factory=set, init=False)
    _subscription: HistorySubscription | None = field(default=None, init=False)
    _capture_active: bool = field(default=False, init=False)
    _capability_reported: bool = field(default=False, init=False)
    _next_sequence: int = field(default=0, init=False)
    _displayed_sequence: int = field(default=0, init=False)

    async def open(self) -> None:
        """Establish identity and history, then render the initial state."""
        if self.history_service is None:
            logger.warning("History store not configured. History is disabled.")
            self.session.history_enabled = False
            self.session.status_message = HISTORY_DISABLED_STATUS
        else:
            await self._on_identity_changed(IdentityChanged(self.session.user_id))
        await self.render(self.session)

    def submit(self, event: Event) -> None:
        """Queue an event for the driver loop."""
        self._queue.put_nowait(event)

    async def run(self) -> None:
        """Process queued events one at a time until closed."""
        while True:
            event = await self._queue.get()
            if event is _STOP:
                return
            try:
                await self.dispatch(event)
            except Exception:
                logger.exception(
                    "Failed to handle widget event",
                    extra={"event": type(event).__name__},
                )

    async def close(self) -> None:
        """Release the capture handle, the history view and pending calls."""
        if self._capture_active:
            self._capture_active = False
            self.session.is_capturing = False
            try:
                await self.capture.stop()
            except Exception:
                logger.exception("Failed to stop speech capture on close")
        await self._release_subscription()
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()
        self._queue.put_nowait(_STOP)

    async def dispatch(self, event: Event) -> None:  # noqa: PLR0912
        """Apply one event to the session and render the result."""
        if isinstance(event, EnvironmentReported):
            self.session.speech_supported = event.speech_supported
        elif isinstance(event, ToggleCapture):
            await self._on_toggle()
        elif isinstance(event, SelectLanguages):
            self._on_select_languages(event)
        elif isinstance(event, CaptureStarted):
            self._on_capture_started()
        elif isinstance(event, CaptureResult):
            self._on_capture_result(event)
        elif isinstance(event, CaptureError):
            await self._on_capture_error(event)
        elif isinstance(event, CaptureEnded):
            self._on_capture_ended()
        elif isinstance(event, IdentityChanged):
            await self._on_identity_changed(event)
        elif isinstance(event, HistorySnapshot):
            self._on_history_snapshot(event)
        elif isinstance(event, HistoryFailed):
            self._on_history_failed(event)
        elif isinstance(event, TranslationSucceeded):
            await self._on_translation_succeeded(event)
        elif isinstance(event, TranslationFailed):
            await self._on_translation_failed(event)
        else:
            logger.warning("Ignoring unknown event %r", event)
            return
        await self.render(self.session)

    async def _on_toggle(self) -> None:
        try:
            require_capability(self.session.speech_supported)
        except CapabilityUnavailableError as exc:
            self.session.status_message = UNSUPPORTED_STATUS
            if not self._capability_reported:
                self._capability_reported = True
                await self.notify(
                    Notice(title="Browser Not Supported", description=str(exc))
                )
            return
        if self._capture_active:
            await self.capture.stop()
            return
        self._capture_active = True
        await self.capture.start(self.session.source_language)

    def _on_select_languages(self, event: SelectLanguages) -> None:
        if self._capture_active:
            logger.info("Ignoring language change while capturing")
            return
        if not is_supported(event.source_language) or not is_supported(
            event.target_language
        ):
            logger.warning(
                "Ignoring unsupported language selection",
                extra={
                    "source_language": event.source_language,
                    "target_language": event.target_language,
                },
            )
            return
        self.session.source_language = event.source_language
        self.session.target_language = event.target_language

    def _on_capture_started(self) -> None:
        self._capture_active = True
        self.session.is_capturing = True
        self.session.status_message = LISTENING_STATUS
        self.session.current_source_text = ""
        self.session.current_translated_text = ""

    def _on_capture_result(self, event: CaptureResult) -> None:
        transcript = assemble_transcript(list(event.results), event.result_index)
        self.session.current_source_text = transcript.display_text
        if transcript.finalized:
            self._schedule_translation(transcript.finalized)

    async def _on_capture_error(self, event: CaptureError) -> None:
        logger.error("Speech recognition error", extra={"error": event.error})
        # The recognizer still reports its end; a restart waits for it.
        self.session.is_capturing = False
        self.session.status_message = f"Error: {event.error}"
        await self.notify(
            Notice(
                title="Speech Recognition Error",
                description=f"There was an error: {event.error}",
            )
        )

    def _on_capture_ended(self) -> None:
        was_capturing = self.session.is_capturing
        self._capture_active = False
        self.session.is_capturing = False
        if was_capturing:
            self.session.status_message = IDLE_STATUS

    def _schedule_translation(self, text: str) -> None:
        self._next_sequence += 1
        self.session.status_message = TRANSLATING_STATUS
        self.session.current_translated_text = TRANSLATION_PLACEHOLDER
        task = asyncio.create_task(
            self._translate(
                self._next_sequence,
                text,
                self.session.source_language,
                self.session.target_language,
            )
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _translate(
        self, sequence: int, text: str, source_language: str, target_language: str
    ) -> None:
        try:
            translated = await self.translation_service.translate(
                text, language_name(source_language), language_name(target_language)
            )
        except TranslationError as exc:
            self.submit(TranslationFailed(sequence=sequence, error=exc))
            return
        self.submit(
            TranslationSucceeded(
                sequence=sequence,
                original_text=text,
                translated_text=translated,
                source_language=source_language,
                target_language=target_language,
            )
        )

    async def _on_translation_succeeded(self, event: TranslationSucceeded) -> None:
        if event.sequence >= self._displayed_sequence:
            self._displayed_sequence = event.sequence
            self.session.current_translated_text = event.translated_text
            self.session.status_message = COMPLETE_STATUS
            await self.render(self.session)
        else:
            logger.info(
                "Discarding superseded translation display",
                extra={"sequence": event.sequence},
            )
        await self._save_to_history(event)

    async def _on_translation_failed(self, event: TranslationFailed) -> None:
        logger.error("Translation error", exc_info=event.error)
        if event.sequence >= self._displayed_sequence:
            self._displayed_sequence = event.sequence
            self.session.current_translated_text = ""
            self.session.status_message = FAILED_STATUS
        await self.notify(
            Notice(
                title="Translation Error",
                description=str(event.error) or FAILED_STATUS,
            )
        )

    async def _save_to_history(self, event: TranslationSucceeded) -> None:
        if self.history_service is None or self.session.user_id is None:
            logger.warning("History store or user not available. Skipping save.")
            return
        try:
            await self.history_service.append(
                owner_user_id=self.session.user_id,
                original_text=event.original_text,
                translated_text=event.translated_text,
                source_language=event.source_language,
                target_language=event.target_language,
            )
        except PersistenceError as exc:
            logger.exception(
                "Error saving translation history",
                extra={"user_id": self.session.user_id},
            )
            await self.notify(
                Notice(
                    title="History Error",
                    description=self._describe(
                        exc, "Could not save translation to history."
                    ),
                )
            )

    async def _on_identity_changed(self, event: IdentityChanged) -> None:
        await self._release_subscription()
        self.session.history = ()
        user_id = event.user_id
        if user_id is None and self.identity_service is not None:
            try:
                user_id = await asyncio.to_thread(
                    self.identity_service.ensure_identity, None
                )
            except AuthenticationError as exc:
                logger.exception("Anonymous sign-in error")
                self.session.user_id = None
                self.session.status_message = AUTH_FAILED_STATUS
                await self.notify(
                    Notice(
                        title="Authentication Error",
                        description=self._describe(
                            exc,
                            "Could not sign in anonymously. "
                            "History will not be saved.",
                        ),
                    )
                )
                return
        self.session.user_id = user_id
        if user_id is None or self.history_service is None:
            return
        self._subscription = await self.history_service.subscribe(
            user_id,
            on_snapshot=lambda records: self.submit(
                HistorySnapshot(owner_user_id=user_id, records=tuple(records))
            ),
            on_error=lambda exc: self.submit(
                HistoryFailed(owner_user_id=user_id, error=exc)
            ),
        )

    def _on_history_snapshot(self, event: HistorySnapshot) -> None:
        if not self._is_current_owner(event.owner_user_id):
            return
        self.session.history = event.records

    def _on_history_failed(self, event: HistoryFailed) -> None:
        if not self._is_current_owner(event.owner_user_id):
            return
        logger.error("History listener error", exc_info=event.error)
        self.session.status_message = HISTORY_FETCH_FAILED_STATUS

    def _is_current_owner(self, owner_user_id: str) -> bool:
        return (
            self._subscription is not None
            and self._subscription.active
            and self._subscription.owner_user_id == owner_user_id
        )

    async def _release_subscription(self) -> None:
        subscription, self._subscription = self._subscription, None
        if subscription is not None:
            await subscription.unsubscribe()

    def _describe(self, exc: Exception, fallback: str) -> str:
        """Return a user-facing message with local debug info."""
        if self.environment == "local":
            detail = f"{type(exc).__name__}: {exc}".strip()
            if detail:
                return f"{fallback} (debug: {detail})"
        return fallback
