"""Domain models for a widget session."""

from dataclasses import dataclass, field

from lingo_live.domain.history import TranslationRecord
from lingo_live.domain.languages import (
    DEFAULT_SOURCE_LANGUAGE,
    DEFAULT_TARGET_LANGUAGE,
)

READY_STATUS = "Ready to translate."
IDLE_STATUS = 'Click "Start" to begin.'
LISTENING_STATUS = "Listening..."
TRANSLATING_STATUS = "Translating..."
COMPLETE_STATUS = "Translation complete."
FAILED_STATUS = "Translation failed. Please try again."
TRANSLATION_PLACEHOLDER = "..."


@dataclass(frozen=True)
class Notice:
    """Transient user-facing notice."""

    title: str
    description: str
    variant: str = "destructive"


@dataclass
class Session:
    """Mutable state of one widget, owned by a single orchestrator."""

    user_id: str | None = None
    is_capturing: bool = False
    current_source_text: str = ""
    current_translated_text: str = ""
    status_message: str = READY_STATUS
    history: tuple[TranslationRecord, ...] = field(default_factory=tuple)
    source_language: str = DEFAULT_SOURCE_LANGUAGE
    target_language: str = DEFAULT_TARGET_LANGUAGE
    history_enabled: bool = True
    speech_supported: bool | None = None
