"""Supabase-backed translation history repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from lingo_live.domain.history import NewTranslationRecord, TranslationRecord
from lingo_live.services.history import HistoryRepository

_COLUMNS = (
    "id, owner_user_id, original_text, translated_text, "
    "source_language, target_language, created_at"
)


@dataclass
class SupabaseHistoryRepository(HistoryRepository):
    """Supabase implementation for translation history.

    Rows are scoped by app id and owner; created_at is filled by the column
    default on insert.
    """

    client: Client
    table_name: str = "translations"

    def append(self, record: NewTranslationRecord) -> None:
        """Insert a history row."""
        response = (
            self.client.table(self.table_name)
            .insert(
                {
                    "app_id": record.app_id,
                    "owner_user_id": record.owner_user_id,
                    "original_text": record.original_text,
                    "translated_text": record.translated_text,
                    "source_language": record.source_language,
                    "target_language": record.target_language,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save translation in Supabase")

    def list_for_owner(
        self, app_id: str, owner_user_id: str
    ) -> list[TranslationRecord]:
        """Return the owner's records ordered newest first."""
        response = (
            self.client.table(self.table_name)
            .select(_COLUMNS)
            .eq("app_id", app_id)
            .eq("owner_user_id", owner_user_id)
            .order("created_at", desc=True)
            .order("id", desc=True)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> TranslationRecord:
    created_raw = row.get("created_at")
    created_at = (
        datetime.fromisoformat(created_raw)
        if isinstance(created_raw, str) and created_raw
        else datetime.now(tz=UTC)
    )
    return TranslationRecord(
        id=str(row["id"]),
        owner_user_id=str(row.get("owner_user_id", "")),
        original_text=str(row.get("original_text", "")),
        translated_text=str(row.get("translated_text", "")),
        source_language=str(row.get("source_language", "")),
        target_language=str(row.get("target_language", "")),
        created_at=created_at,
    )
