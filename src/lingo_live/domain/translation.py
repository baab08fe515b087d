"""Models for LLM translation results."""

from pydantic import BaseModel


class TranslationResult(BaseModel):
    """Structured output for a translation request."""

    translated_text: str
