"""Text translation service using LLMs."""

from dataclasses import dataclass
from typing import Protocol

from lingo_live.domain.errors import TranslationError
from lingo_live.domain.translation import TranslationResult

TRANSLATION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "translated_text": {"type": "string"},
    },
    "required": ["translated_text"],
    "additionalProperties": False,
}


class TranslationClient(Protocol):
    """Interface for LLM text translation."""

    async def translate(  # noqa: PLR0913
        self,
        *,
        model: str,
        store: bool,
        text: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return structured translation data."""


@dataclass
class TranslationService:
    """Service that prepares translation prompts and validates results."""

    client: TranslationClient
    model: str
    store: bool = False

    async def translate(
        self, text: str, source_language_name: str, target_language_name: str
    ) -> str:
        """Translate text between two named languages.

        Failures are raised once as TranslationError; nothing is retried.
        """
        try:
            raw = await self.client.translate(
                model=self.model,
                store=self.store,
                text=text,
                schema=TRANSLATION_SCHEMA,
                prompt=_build_prompt(source_language_name, target_language_name),
            )
            result = TranslationResult.model_validate(raw)
        except TranslationError:
            raise
        except Exception as exc:
            raise TranslationError(str(exc) or type(exc).__name__) from exc
        if not result.translated_text.strip():
            raise TranslationError("No translation returned from AI.")
        return result.translated_text


def _build_prompt(source_language_name: str, target_language_name: str) -> str:
    """Build the instruction sent alongside the text to translate."""
    return (
        f"Translate the following text from {source_language_name} "
        f"to {target_language_name}. "
        "Return only the translation, preserving meaning, tone and punctuation."
    )
