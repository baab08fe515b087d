"""Domain models for translation history."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class NewTranslationRecord:
    """A history record before the store assigns its id and timestamp."""

    app_id: str
    owner_user_id: str
    original_text: str
    translated_text: str
    source_language: str
    target_language: str


@dataclass(frozen=True)
class TranslationRecord:
    """Represents a persisted translation."""

    id: str
    owner_user_id: str
    original_text: str
    translated_text: str
    source_language: str
    target_language: str
    created_at: datetime
